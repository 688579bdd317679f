from django.contrib import admin

from .models import Campaign


@admin.register(Campaign)
class CampaignAdmin(admin.ModelAdmin):
	list_display = ('name', 'start_date', 'end_date', 'discount', 'amount', 'status')
	search_fields = ('name', 'store_id', 'item')
	list_filter = ('status',)
	date_hierarchy = 'start_date'
