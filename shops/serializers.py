from rest_framework import serializers
from .models import Shop


class ShopSerializer(serializers.ModelSerializer):
    sellerId = serializers.CharField(source='seller_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Shop
        fields = [
            'id', 'sellerId', 'slug', 'name', 'description', 'logo', 'cover',
            'status', 'createdAt', 'updatedAt'
        ]
        read_only_fields = fields


class ShopUpsertSerializer(serializers.Serializer):
    """Body of POST /shops. Fields left out keep their stored values on update."""
    slug = serializers.SlugField(max_length=100)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    logo = serializers.URLField(max_length=500, required=False, allow_blank=True)
    cover = serializers.URLField(max_length=500, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=Shop.Status.choices, required=False)

    def validate_slug(self, value):
        return value.strip().lower()

    def save(self, seller_id):
        data = dict(self.validated_data)
        slug = data.pop('slug')
        shop, created = Shop.objects.update_or_create(
            seller_id=seller_id,
            slug=slug,
            defaults=data,
        )
        if created and not shop.name:
            shop.name = slug
            shop.save(update_fields=['name'])
        self.instance = shop
        return shop
