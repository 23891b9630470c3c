from django.contrib import admin
from .models import Shop


class SellerScopedAdmin(admin.ModelAdmin):
    """Common list settings for models owned by a seller."""
    list_filter = ['seller_id']
    search_fields = ['seller_id']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Shop)
class ShopAdmin(SellerScopedAdmin):
    list_display = ['name', 'slug', 'seller_id', 'status', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['name', 'slug', 'seller_id']
