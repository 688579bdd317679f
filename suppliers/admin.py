from django.contrib import admin

from .models import Supplier


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
	list_display = ('supplier_name', 'supplier_category', 'contact_email', 'phone_number', 'status', 'updated_at')
	search_fields = ('supplier_name', 'supplier_category', 'contact_email')
	list_filter = ('status',)
	ordering = ('supplier_name',)
