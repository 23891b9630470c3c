from django.db import models


class Shop(models.Model):
    """
    A seller's storefront. The slug is what shoppers see in the URL and is
    only unique per seller: two sellers may both run a shop called "fresh".
    """

    class Status(models.TextChoices):
        ACTIVE = 'Active', 'Active'
        INACTIVE = 'Inactive', 'Inactive'

    seller_id = models.CharField(
        max_length=64,
        db_index=True,
        help_text='Seller/tenant that owns this shop'
    )
    slug = models.SlugField(max_length=100, help_text='URL identifier, stored lower-cased')
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    logo = models.URLField(max_length=500, blank=True, default='')
    cover = models.URLField(max_length=500, blank=True, default='')
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'shops'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['seller_id', 'slug'], name='unique_shop_slug_per_seller'),
        ]
        indexes = [
            models.Index(fields=['slug'], name='shops_slug_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.slug})"

    def save(self, *args, **kwargs):
        self.slug = (self.slug or '').strip().lower()
        super().save(*args, **kwargs)
