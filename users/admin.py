from django.contrib import admin

from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
	list_display = ('name', 'email', 'username', 'level', 'status', 'updated_at')
	search_fields = ('name', 'email', 'username')
	list_filter = ('level', 'status')
	ordering = ('name',)
