from django.contrib import admin
from shops.admin import SellerScopedAdmin
from .models import Product, Discount, Offer


@admin.register(Product)
class ProductAdmin(SellerScopedAdmin):
    list_display = ['title', 'seller_id', 'category', 'price', 'mrp', 'quantity', 'status', 'created_at']
    list_filter = ['status', 'category', 'seller_id']
    search_fields = ['title', 'description', 'seller_id']


@admin.register(Discount)
class DiscountAdmin(SellerScopedAdmin):
    list_display = ['__str__', 'seller_id', 'method', 'type', 'amount', 'status', 'starts_at', 'ends_at']
    list_filter = ['method', 'type', 'status', 'seller_id']
    search_fields = ['code', 'seller_id']
    readonly_fields = ['created_at']


@admin.register(Offer)
class OfferAdmin(SellerScopedAdmin):
    list_display = ['title', 'seller_id', 'status', 'starts_at', 'ends_at', 'created_at']
    list_filter = ['status', 'seller_id']
    search_fields = ['title', 'seller_id']
    readonly_fields = ['created_at']
