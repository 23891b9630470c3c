from django.contrib import admin
from shops.admin import SellerScopedAdmin
from .models import Customer, CustomerAddress, Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ['line_total']


class CustomerAddressInline(admin.TabularInline):
    model = CustomerAddress
    extra = 0
    readonly_fields = ['created_at']


@admin.register(Order)
class OrderAdmin(SellerScopedAdmin):
    list_display = ['id', 'seller_id', 'customer_name', 'total', 'payment_method',
                    'payment_status', 'created_at']
    list_filter = ['seller_id', 'payment_status', 'payment_method', 'created_at']
    search_fields = ['id', 'customer_name', 'customer_email', 'transaction_id']
    inlines = [OrderItemInline]


@admin.register(Customer)
class CustomerAdmin(SellerScopedAdmin):
    list_display = ['first_name', 'last_name', 'email', 'phone', 'seller_id', 'status']
    list_filter = ['seller_id', 'status']
    search_fields = ['first_name', 'last_name', 'email', 'phone']
    inlines = [CustomerAddressInline]
