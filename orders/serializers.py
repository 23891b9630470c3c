from decimal import Decimal, ROUND_HALF_UP

from rest_framework import serializers
from .models import Order


TWO_PLACES = Decimal('0.01')

CLIENT_ADDRESS_KEYS = {'postal_code': 'postalCode', 'is_default': 'isDefault'}


class MoneyField(serializers.DecimalField):
    """Accepts any finite, non-negative number and rounds it to 2 places."""

    def __init__(self, **kwargs):
        kwargs.setdefault('max_digits', 12)
        kwargs.setdefault('decimal_places', 2)
        kwargs.setdefault('min_value', Decimal('0.00'))
        super().__init__(**kwargs)

    def validate_precision(self, value):
        return super().validate_precision(value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


class OrderItemSerializer(serializers.Serializer):
    productId = serializers.CharField(source='product_id', required=False, allow_blank=True, default='')
    name = serializers.CharField(required=False, allow_blank=True, default='', max_length=255)
    price = MoneyField(max_digits=10)
    quantity = serializers.IntegerField(min_value=1, default=1, allow_null=True)
    image = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='', max_length=500)

    def validate_quantity(self, value):
        return value or 1

    def validate_image(self, value):
        return value or ''


class AddressSerializer(serializers.Serializer):
    """Shipping address in the client's shape, validated at checkout."""
    name = serializers.CharField(max_length=255)
    line1 = serializers.CharField(max_length=255)
    line2 = serializers.CharField(max_length=255, required=False, allow_blank=True)
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(max_length=100)
    postalCode = serializers.CharField(source='postal_code', max_length=20)
    country = serializers.CharField(max_length=100, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20)
    email = serializers.EmailField(required=False, allow_blank=True)
    label = serializers.CharField(max_length=50, required=False, allow_blank=True)
    isDefault = serializers.BooleanField(source='is_default', required=False)


class TotalsSerializer(serializers.Serializer):
    subtotal = MoneyField(required=False)
    gst = MoneyField(required=False)
    delivery = MoneyField(required=False)
    total = MoneyField(required=False)


class PaymentSerializer(serializers.Serializer):
    method = serializers.CharField(source='payment_method', max_length=50, default='unknown')
    status = serializers.ChoiceField(
        source='payment_status',
        choices=Order.PaymentStatus.choices,
        default=Order.PaymentStatus.PENDING
    )
    transactionId = serializers.CharField(
        source='transaction_id', max_length=255, allow_blank=True, default=''
    )


class OrderCreateSerializer(serializers.Serializer):
    """Checkout body. Everything is validated before anything is written."""
    items = OrderItemSerializer(many=True, allow_empty=False)
    totals = TotalsSerializer(required=False)
    payment = PaymentSerializer(required=False)
    shippingAddress = AddressSerializer()
    customerEmail = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    customerName = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)


class OrderPaymentUpdateSerializer(serializers.Serializer):
    """
    Body of PATCH /orders/<id>. Accepts ``{"payment": {...}}`` or the flat
    ``paymentStatus`` / ``transactionId`` / ``paymentMethod`` keys.
    """
    payment = PaymentSerializer(required=False)
    paymentStatus = serializers.ChoiceField(
        source='payment_status', choices=Order.PaymentStatus.choices, required=False
    )
    transactionId = serializers.CharField(
        source='transaction_id', max_length=255, allow_blank=True, required=False
    )
    paymentMethod = serializers.CharField(source='payment_method', max_length=50, required=False)

    def validate(self, data):
        changes = dict(data.pop('payment', {}))
        changes.update(data)
        if not changes:
            raise serializers.ValidationError('No payment fields to update')
        return changes


class OrderSerializer(serializers.ModelSerializer):
    """Order document. ``id`` and ``orderId`` carry the same identifier."""
    orderId = serializers.CharField(source='id', read_only=True)
    userId = serializers.CharField(source='seller_id', read_only=True)
    sellerId = serializers.CharField(source='seller_id', read_only=True)
    customerId = serializers.CharField(source='customer_id', read_only=True)
    customerName = serializers.CharField(source='customer_name', read_only=True)
    customerEmail = serializers.CharField(source='customer_email', read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    shippingAddress = serializers.SerializerMethodField()
    totals = TotalsSerializer(source='*', read_only=True)
    payment = PaymentSerializer(source='*', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'orderId', 'userId', 'sellerId', 'customerId', 'customerName',
            'customerEmail', 'items', 'shippingAddress', 'totals', 'payment',
            'createdAt', 'updatedAt'
        ]

    def get_shippingAddress(self, order):
        """Stored snapshot with the client's key names; keys never sent stay absent."""
        address = order.shipping_address or {}
        return {CLIENT_ADDRESS_KEYS.get(key, key): value for key, value in address.items()}
