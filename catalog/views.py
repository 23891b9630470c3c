import uuid

from django.db.models import Q
from django.utils import timezone
from rest_framework import generics
from rest_framework.permissions import AllowAny

from main.exceptions import BadRequest
from shops.resolvers import SellerScopedMixin
from .discounts import active_auto_discounts
from .models import Product, Offer
from .serializers import ProductSerializer, OfferSerializer


class DiscountContextMixin:
    """Hand the seller's running automatic discounts to the serializer."""

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['discounts'] = active_auto_discounts(self.get_seller_id())
        return context


class ProductListView(SellerScopedMixin, DiscountContextMixin, generics.ListAPIView):
    """List a shop's products, newest first, with automatic discounts applied"""
    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    permission_classes = [AllowAny]
    pagination_class = None

    def get_queryset(self):
        queryset = super().get_queryset().order_by('-created_at')

        # Filter by category
        category = self.request.query_params.get('category', None)
        if category:
            queryset = queryset.filter(category__iexact=category)

        # Filter by search query
        search = self.request.query_params.get('search', None)
        if search:
            queryset = queryset.filter(
                Q(title__icontains=search) |
                Q(description__icontains=search)
            )

        return queryset


class ProductDetailView(SellerScopedMixin, DiscountContextMixin, generics.RetrieveAPIView):
    """Retrieve one product; products of other sellers are not found"""
    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    permission_classes = [AllowAny]

    def get_object(self):
        self.get_seller_id()
        try:
            uuid.UUID(str(self.kwargs[self.lookup_field]))
        except ValueError:
            raise BadRequest('Bad id')
        return super().get_object()


class OfferListView(SellerScopedMixin, generics.ListAPIView):
    """List a shop's running offers, newest first"""
    queryset = Offer.objects.all()
    serializer_class = OfferSerializer
    permission_classes = [AllowAny]
    pagination_class = None

    def get_queryset(self):
        now = timezone.now()
        return (
            super().get_queryset()
            .filter(status=Offer.Status.ACTIVE)
            .filter(Q(starts_at__isnull=True) | Q(starts_at__lte=now))
            .filter(Q(ends_at__isnull=True) | Q(ends_at__gte=now))
            .order_by('-created_at')
        )
