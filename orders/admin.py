from django.contrib import admin

from .models import Order


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
	list_display = ('name', 'start_date', 'end_date', 'discount', 'amount', 'status')
	search_fields = ('name', 'store_id', 'item')
	list_filter = ('status',)
	date_hierarchy = 'start_date'
