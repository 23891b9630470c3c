import uuid

from django.contrib.auth.hashers import check_password, make_password
from django.db import models
from django.db.models.functions import Lower


class StorefrontUser(models.Model):
    """
    A shopper's account in one seller's storefront.

    Accounts are partitioned by seller: the same email may register with
    several shops, but only once per seller (compared case-insensitively).
    These are not Django auth users; Django's own User table is left to
    the admin site.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    seller_id = models.CharField(
        max_length=64,
        db_index=True,
        help_text='Seller/tenant whose storefront this account belongs to'
    )
    name = models.CharField(max_length=255, blank=True, default='')
    email = models.EmailField(max_length=254)
    password_hash = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'storefront_users'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                'seller_id', Lower('email'),
                name='unique_storefront_email_per_seller'
            )
        ]

    def __str__(self):
        return f"{self.email} ({self.seller_id})"

    # Duck-typing for DRF: request.user is a StorefrontUser once a bearer
    # token has been accepted.
    is_authenticated = True
    is_anonymous = False

    def set_password(self, raw_password):
        self.password_hash = make_password(raw_password)

    def check_password(self, raw_password):
        return check_password(raw_password, self.password_hash)
