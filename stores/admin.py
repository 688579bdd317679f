from django.contrib import admin

from .models import Store


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
	list_display = ('name', 'formatted_cnpj', 'address', 'phone_number', 'status', 'updated_at')
	search_fields = ('name', 'cnpj', 'address', 'contact_email')
	list_filter = ('status',)
	ordering = ('name',)

	@admin.display(description='CNPJ', ordering='cnpj')
	def formatted_cnpj(self, obj):
		return obj.formatted_cnpj
