import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Product(models.Model):
    """
    Storefront product. Products are maintained by the seller's admin
    system; the storefront only reads them.
    """

    class Status(models.TextChoices):
        ACTIVE = 'Active', 'Active'
        DRAFT = 'Draft', 'Draft'
        ARCHIVED = 'Archived', 'Archived'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    seller_id = models.CharField(
        max_length=64,
        db_index=True,
        help_text='Seller/tenant this product belongs to'
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    mrp = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text='Maximum retail price, shown struck through'
    )
    quantity = models.IntegerField(
        default=0,
        validators=[MinValueValidator(0)],
        help_text='Units in stock'
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    category = models.CharField(max_length=100, blank=True, default='')
    images = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['seller_id', '-created_at'], name='products_seller_created_idx'),
            models.Index(fields=['category'], name='products_category_idx'),
        ]

    def __str__(self):
        return self.title


class Discount(models.Model):
    """
    Seller discount. ``auto`` discounts are applied to catalog prices without
    a code; an empty ``product_ids`` list means the whole catalog.
    """

    class Method(models.TextChoices):
        CODE = 'code', 'Code'
        AUTO = 'auto', 'Automatic'

    class Type(models.TextChoices):
        PERCENTAGE = 'percentage', 'Percentage'
        FIXED = 'fixed', 'Fixed amount'

    class Status(models.TextChoices):
        ACTIVE = 'Active', 'Active'
        INACTIVE = 'Inactive', 'Inactive'
        EXPIRED = 'Expired', 'Expired'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    seller_id = models.CharField(
        max_length=64,
        db_index=True,
        help_text='Seller/tenant this discount belongs to'
    )
    method = models.CharField(max_length=10, choices=Method.choices, default=Method.AUTO)
    code = models.CharField(max_length=50, blank=True, default='')
    type = models.CharField(max_length=20, choices=Type.choices, default=Type.PERCENTAGE)
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text='Percent off for percentage discounts, currency off for fixed ones'
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    starts_at = models.DateTimeField(blank=True, null=True)
    ends_at = models.DateTimeField(blank=True, null=True)
    product_ids = models.JSONField(
        default=list,
        blank=True,
        help_text='Restrict to these product ids; empty applies to all products'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'discounts'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['seller_id', 'method', 'status'], name='discounts_lookup_idx'),
        ]

    def __str__(self):
        label = self.code or self.get_method_display()
        return f"{label} - {self.amount} ({self.type})"


class Offer(models.Model):
    """Promotional banner shown on the storefront while it is running"""

    class Status(models.TextChoices):
        ACTIVE = 'Active', 'Active'
        INACTIVE = 'Inactive', 'Inactive'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    seller_id = models.CharField(
        max_length=64,
        db_index=True,
        help_text='Seller/tenant this offer belongs to'
    )
    title = models.CharField(max_length=255)
    banner_url = models.URLField(max_length=500, blank=True, default='')
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    starts_at = models.DateTimeField(blank=True, null=True)
    ends_at = models.DateTimeField(blank=True, null=True)
    product_ids = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'offers'
        ordering = ['-created_at']

    def __str__(self):
        return self.title
