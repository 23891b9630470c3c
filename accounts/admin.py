from django.contrib import admin
from .models import StorefrontUser


@admin.register(StorefrontUser)
class StorefrontUserAdmin(admin.ModelAdmin):
    list_display = ['email', 'name', 'seller_id', 'created_at']
    list_filter = ['seller_id', 'created_at']
    search_fields = ['email', 'name', 'seller_id']
    readonly_fields = ['id', 'password_hash', 'created_at']
