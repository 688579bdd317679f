from django.contrib import admin

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
	list_display = ('name', 'price', 'stock_quantity', 'supplier_id', 'status', 'updated_at')
	search_fields = ('name', 'description', 'supplier_id')
	list_filter = ('status',)
	ordering = ('name',)
