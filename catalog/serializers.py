from rest_framework import serializers
from .discounts import best_discount
from .models import Product, Offer


class ProductSerializer(serializers.ModelSerializer):
    """
    Product as the storefront sees it. When a running automatic discount
    applies, ``discountedPrice`` and ``discount`` are added; pass the
    seller's discounts in the serializer context under ``discounts``.
    """
    sellerId = serializers.CharField(source='seller_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'sellerId', 'title', 'description', 'price', 'mrp', 'quantity',
            'status', 'category', 'images', 'createdAt', 'updatedAt'
        ]
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)

        result = best_discount(instance, self.context.get('discounts', []))
        if result is not None:
            discount = result.discount
            data['discountedPrice'] = result.discounted_price
            data['discount'] = {
                'id': str(discount.id),
                'type': discount.type,
                'amount': discount.amount,
                'method': discount.method,
            }

        return data


class OfferSerializer(serializers.ModelSerializer):
    sellerId = serializers.CharField(source='seller_id', read_only=True)
    bannerUrl = serializers.URLField(source='banner_url', read_only=True)
    startsAt = serializers.DateTimeField(source='starts_at', read_only=True)
    endsAt = serializers.DateTimeField(source='ends_at', read_only=True)
    productIds = serializers.JSONField(source='product_ids', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Offer
        fields = [
            'id', 'sellerId', 'title', 'bannerUrl', 'status', 'startsAt', 'endsAt',
            'productIds', 'createdAt'
        ]
        read_only_fields = fields
