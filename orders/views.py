import logging
import uuid

from django.db import DatabaseError
from rest_framework import generics, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from main.exceptions import BadRequest
from shops.resolvers import SellerScopedMixin, is_admin_identity
from .models import Order
from .serializers import OrderSerializer, OrderCreateSerializer, OrderPaymentUpdateSerializer
from .services import create_order, update_order_payment

logger = logging.getLogger(__name__)


def parse_positive_int(value, name):
    if value in (None, ''):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise BadRequest(f'{name} must be a positive integer')
    if number < 1:
        raise BadRequest(f'{name} must be a positive integer')
    return number


class OrderScopedMixin(SellerScopedMixin):
    """
    Orders are scoped by the identity header only. The storefront admin
    identity sees every seller's orders.
    """
    allow_shop = False

    def get_queryset(self):
        seller_id = self.get_seller_id()
        queryset = Order.objects.prefetch_related('items').order_by('-created_at')
        if is_admin_identity(seller_id):
            return queryset
        return queryset.filter(seller_id=seller_id)


class OrderListCreateView(OrderScopedMixin, generics.ListCreateAPIView):
    """List the caller's orders, newest first, or place a new order"""
    permission_classes = [AllowAny]
    pagination_class = None

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return OrderCreateSerializer
        return OrderSerializer

    def get_queryset(self):
        queryset = super().get_queryset()

        # Filter by payment status
        payment_status = self.request.query_params.get('status', None)
        if payment_status:
            queryset = queryset.filter(payment_status__iexact=payment_status)

        # Page/limit slicing
        limit = parse_positive_int(self.request.query_params.get('limit'), 'limit')
        page = parse_positive_int(self.request.query_params.get('page'), 'page')
        if limit:
            offset = ((page or 1) - 1) * limit
            queryset = queryset[offset:offset + limit]

        return queryset

    def create(self, request, *args, **kwargs):
        seller_id = self.get_seller_id()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            order = create_order(
                seller_id,
                items=data['items'],
                shipping_address=data['shippingAddress'],
                totals=data.get('totals'),
                payment=data.get('payment'),
                customer_email=data.get('customerEmail'),
                customer_name=data.get('customerName'),
            )
        except DatabaseError:
            logger.exception(f"Failed to create order for seller {seller_id}")
            return Response({'error': 'Server error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        order = Order.objects.prefetch_related('items').get(pk=order.pk)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderDetailView(OrderScopedMixin, generics.RetrieveAPIView):
    """Retrieve one order, or update its payment fields with PATCH"""
    serializer_class = OrderSerializer
    permission_classes = [AllowAny]

    def get_object(self):
        self.get_seller_id()
        try:
            uuid.UUID(str(self.kwargs[self.lookup_field]))
        except ValueError:
            raise BadRequest('Bad id')
        return super().get_object()

    def patch(self, request, *args, **kwargs):
        order = self.get_object()
        serializer = OrderPaymentUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        update_order_payment(order, serializer.validated_data)
        return Response(OrderSerializer(order).data)
