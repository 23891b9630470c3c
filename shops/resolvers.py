"""
Seller (tenant) resolution for multi-tenant data isolation.

Every view that touches tenant data resolves the seller here first, either
from a shop slug or from the caller-supplied ``X-User-Id`` header. The header
is trusted as-is: it is a tenant hint, not a verified identity.
"""
from django.conf import settings
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from main.exceptions import BadRequest
from .models import Shop


SELLER_REQUIRED_MESSAGE = "shop or seller id required"
SELLER_HEADER_REQUIRED_MESSAGE = "seller id header required"


class ShopNotFound(NotFound):
    default_detail = 'Shop not found'
    default_code = 'shop_not_found'


def get_seller_header(request):
    """Return the seller id from the identity header, or None."""
    value = request.META.get(settings.SELLER_ID_HEADER, '')
    return value.strip() or None


def get_shop_slug(request):
    """Shop slug from the query string, falling back to the request body."""
    slug = request.query_params.get('shop')
    if not slug and hasattr(request.data, 'get'):
        slug = request.data.get('shop')
    if not isinstance(slug, str):
        return None
    return slug.strip().lower() or None


def find_shop(slug, seller_id=None):
    """
    Look up a shop by slug. Slugs are only unique per seller, so when the
    caller also names a seller that seller's shop wins; otherwise the oldest
    shop with the slug is used.
    """
    shops = Shop.objects.filter(slug=slug.strip().lower())
    if seller_id:
        own = shops.filter(seller_id=seller_id).first()
        if own is not None:
            return own
    return shops.order_by('created_at', 'id').first()


def resolve_seller_id(request, *, allow_shop=True):
    """
    Resolve the effective seller id for the current request.

    Logic:
    1. If a shop slug is given, use the owning seller of that shop
       (raises ShopNotFound when the slug is unknown)
    2. Else use the identity header
    3. Else fail with BadRequest
    """
    header_seller_id = get_seller_header(request)

    if allow_shop:
        slug = get_shop_slug(request)
        if slug:
            shop = find_shop(slug, header_seller_id)
            if shop is None:
                raise ShopNotFound()
            return shop.seller_id

    if header_seller_id:
        return header_seller_id

    raise BadRequest(SELLER_REQUIRED_MESSAGE if allow_shop else SELLER_HEADER_REQUIRED_MESSAGE)


def is_admin_identity(seller_id):
    admin_id = settings.STOREFRONT_ADMIN_ID
    return bool(admin_id) and seller_id == admin_id


class SellerScopedMixin:
    """
    Mixin for filtering querysets by seller.

    Usage:
        class ProductListView(SellerScopedMixin, generics.ListAPIView):
            queryset = Product.objects.all()
            ...

    The mixin will:
    1. Filter the queryset to rows belonging to the resolved seller
    2. Answer list requests for an unknown shop slug with an empty list
       (detail requests still 404)
    """

    seller_field = 'seller_id'
    allow_shop = True

    def get_seller_id(self):
        if not hasattr(self, '_seller_id'):
            self._seller_id = resolve_seller_id(self.request, allow_shop=self.allow_shop)
        return self._seller_id

    def get_queryset(self):
        queryset = super().get_queryset()
        return queryset.filter(**{self.seller_field: self.get_seller_id()})

    def list(self, request, *args, **kwargs):
        try:
            self.get_seller_id()
        except ShopNotFound:
            return Response([])
        return super().list(request, *args, **kwargs)
