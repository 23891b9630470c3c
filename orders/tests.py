"""
Tests for Orders Module.
Tests for: customer upsert, order creation, order listing/detail and payment updates.
"""
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import DatabaseError
from rest_framework import status

from conftest import SELLER_ID, SELLER2_ID
from orders.models import Customer, CustomerAddress, Order, OrderItem
from orders.services import address_key, resolve_totals, split_name, upsert_customer


ADDRESS = {
    'name': 'Asha Rao',
    'line1': '12 MG Road',
    'city': 'Bengaluru',
    'state': 'KA',
    'postal_code': '560001',
    'phone': '9876543210',
}


# ============== Service Tests ==============

class TestHelpers:
    """Test pure checkout helpers"""

    def test_split_name(self):
        assert split_name('Asha Devi Rao') == ('Asha', 'Devi Rao')
        assert split_name('Asha') == ('Asha', '')
        assert split_name('   ') == ('', '')
        assert split_name(None) == ('', '')

    def test_address_key_normalises(self):
        assert address_key({'line1': ' 12 MG Road ', 'postal_code': '560001', 'city': 'BENGALURU'}) == \
            address_key({'line1': '12 mg road', 'postal_code': '560001', 'city': 'Bengaluru'})

    def test_resolve_totals_fills_missing(self):
        items = [
            {'price': Decimal('10.00'), 'quantity': 2},
            {'price': Decimal('5.50'), 'quantity': 1},
        ]
        totals = resolve_totals(items, {'gst': Decimal('1.00')})

        assert totals['subtotal'] == Decimal('25.50')
        assert totals['delivery'] == Decimal('0.00')
        assert totals['total'] == Decimal('26.50')

    def test_resolve_totals_keeps_given(self):
        totals = resolve_totals([], {'subtotal': Decimal('9'), 'total': Decimal('7')})

        assert totals['total'] == Decimal('7')


@pytest.mark.django_db
class TestUpsertCustomer:
    """Test matching and creating customers"""

    def test_creates_customer_with_default_address(self):
        customer, created = upsert_customer(SELLER_ID, address=ADDRESS, email='Asha@Test.com', full_name='Asha Rao')

        assert created
        assert customer.first_name == 'Asha'
        assert customer.last_name == 'Rao'
        assert customer.email == 'asha@test.com'
        assert customer.phone == '9876543210'
        assert customer.status == Customer.Status.ACTIVE
        assert customer.addresses.get().is_default

    def test_matches_by_email_case_insensitive(self):
        first, _ = upsert_customer(SELLER_ID, address=ADDRESS, email='asha@test.com')
        second, created = upsert_customer(
            SELLER_ID, address={**ADDRESS, 'phone': '1111111111'}, email='ASHA@test.com'
        )

        assert not created
        assert second.pk == first.pk
        assert Customer.objects.count() == 1

    def test_matches_by_phone(self):
        first, _ = upsert_customer(SELLER_ID, address=ADDRESS)
        second, created = upsert_customer(SELLER_ID, address=ADDRESS, email='late@test.com')

        assert not created
        assert second.pk == first.pk
        second.refresh_from_db()
        assert second.email == 'late@test.com'

    def test_existing_profile_fields_not_overwritten(self):
        upsert_customer(SELLER_ID, address=ADDRESS, email='asha@test.com', full_name='Asha Rao')
        customer, _ = upsert_customer(SELLER_ID, address=ADDRESS, email='asha@test.com', full_name='Someone Else')

        assert customer.first_name == 'Asha'
        assert customer.last_name == 'Rao'

    def test_same_address_not_duplicated(self):
        customer, _ = upsert_customer(SELLER_ID, address=ADDRESS, email='asha@test.com')
        upsert_customer(SELLER_ID, address={**ADDRESS, 'city': 'bengaluru '}, email='asha@test.com')

        assert customer.addresses.count() == 1

    def test_new_address_appended_not_default(self):
        customer, _ = upsert_customer(SELLER_ID, address=ADDRESS, email='asha@test.com')
        upsert_customer(SELLER_ID, address={**ADDRESS, 'line1': '99 Brigade Road'}, email='asha@test.com')

        addresses = list(customer.addresses.all())
        assert len(addresses) == 2
        assert addresses[0].is_default
        assert not addresses[1].is_default

    def test_first_address_for_bare_customer_is_default(self):
        customer = Customer.objects.create(seller_id=SELLER_ID, email='bare@test.com')
        upsert_customer(SELLER_ID, address=ADDRESS, email='bare@test.com')

        assert customer.addresses.get().is_default

    def test_customers_isolated_per_seller(self):
        upsert_customer(SELLER_ID, address=ADDRESS, email='asha@test.com')
        _, created = upsert_customer(SELLER2_ID, address=ADDRESS, email='asha@test.com')

        assert created
        assert Customer.objects.count() == 2


# ============== API Tests ==============

@pytest.mark.django_db
class TestOrderCreateAPI:
    """Test placing orders"""

    def test_create_order(self, seller_client, order_payload):
        response = seller_client.post('/api/orders', order_payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['id'] == response.data['orderId']
        assert response.data['userId'] == SELLER_ID
        assert response.data['totals']['total'] == Decimal('236.00')
        assert response.data['payment'] == {
            'method': 'razorpay', 'status': 'Pending', 'transactionId': ''
        }
        assert response.data['shippingAddress']['postalCode'] == '560001'
        assert response.data['items'][0]['quantity'] == 2

        order = Order.objects.get(pk=response.data['id'])
        assert order.customer.email == 'asha@test.com'
        assert order.customer_email == 'asha@test.com'
        assert order.items.count() == 1

    def test_totals_round_trip(self, seller_client, order_payload):
        order_payload['items'] = [{'productId': 'p-1', 'name': 'Tee', 'price': 50, 'quantity': 2}]
        order_payload['totals'] = {'subtotal': 100, 'gst': 5, 'delivery': 30, 'total': 135}
        response = seller_client.post('/api/orders', order_payload, format='json')

        order = Order.objects.get(pk=response.data['id'])
        assert (order.subtotal, order.gst, order.delivery, order.total) == (
            Decimal('100'), Decimal('5'), Decimal('30'), Decimal('135')
        )
        item = order.items.get()
        assert item.quantity * item.price == Decimal('100')

    def test_two_orders_two_addresses_one_customer(self, seller_client, order_payload):
        seller_client.post('/api/orders', order_payload, format='json')
        order_payload['shippingAddress'] = {
            **order_payload['shippingAddress'], 'line1': '99 Brigade Road', 'phone': '1111111111'
        }
        seller_client.post('/api/orders', order_payload, format='json')

        customer = Customer.objects.get()
        assert customer.addresses.count() == 2
        assert customer.orders.count() == 2

    def test_payment_defaults(self, seller_client, order_payload):
        del order_payload['payment']
        response = seller_client.post('/api/orders', order_payload, format='json')

        assert response.data['payment'] == {
            'method': 'unknown', 'status': 'Pending', 'transactionId': ''
        }

    def test_items_normalised(self, seller_client, order_payload):
        order_payload['items'] = [{'productId': 42, 'name': 'Pen', 'price': '12.505'}]
        del order_payload['totals']
        response = seller_client.post('/api/orders', order_payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        item = response.data['items'][0]
        assert item['productId'] == '42'
        assert item['quantity'] == 1
        assert item['price'] == Decimal('12.51')
        assert response.data['totals']['subtotal'] == Decimal('12.51')
        assert response.data['totals']['total'] == Decimal('12.51')

    def test_null_quantity_defaults_to_one(self, seller_client, order_payload):
        order_payload['items'] = [{'productId': 'p-1', 'name': 'Pen', 'price': 20, 'quantity': None}]
        del order_payload['totals']
        response = seller_client.post('/api/orders', order_payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['items'][0]['quantity'] == 1
        assert response.data['totals']['subtotal'] == Decimal('20.00')
        assert Order.objects.get(pk=response.data['id']).items.get().quantity == 1

    def test_repeat_customer_reused(self, seller_client, order_payload):
        seller_client.post('/api/orders', order_payload, format='json')
        seller_client.post('/api/orders', order_payload, format='json')

        assert Order.objects.count() == 2
        assert Customer.objects.count() == 1
        assert CustomerAddress.objects.count() == 1

    def test_requires_header(self, api_client, order_payload):
        response = api_client.post('/api/orders?shop=acme', order_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'seller id header required'

    def test_empty_items_rejected(self, seller_client, order_payload):
        order_payload['items'] = []
        response = seller_client.post('/api/orders', order_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'].startswith('items:')
        assert Order.objects.count() == 0
        assert Customer.objects.count() == 0

    def test_missing_address_field_rejected(self, seller_client, order_payload):
        order_payload['shippingAddress']['postalCode'] = '  '
        response = seller_client.post('/api/orders', order_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'].startswith('shippingAddress.postalCode:')
        assert Customer.objects.count() == 0

    def test_negative_price_rejected(self, seller_client, order_payload):
        order_payload['items'][0]['price'] = -5
        response = seller_client.post('/api/orders', order_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'].startswith('items[0].price:')

    def test_database_failure_returns_server_error(self, seller_client, order_payload):
        with patch('orders.services.OrderItem.objects.bulk_create', side_effect=DatabaseError('disk full')):
            response = seller_client.post('/api/orders', order_payload, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {'error': 'Server error'}
        assert Order.objects.count() == 0
        assert Customer.objects.count() == 0


@pytest.mark.django_db
class TestOrderListAPI:
    """Test order listing"""

    def test_lists_only_callers_orders(self, seller_client, order, seller2_order):
        response = seller_client.get('/api/orders')

        assert response.status_code == status.HTTP_200_OK
        assert [item['id'] for item in response.data] == [str(order.id)]

    def test_admin_sees_all_newest_first(self, admin_client, order, seller2_order):
        response = admin_client.get('/api/orders')

        assert [item['id'] for item in response.data] == [str(seller2_order.id), str(order.id)]

    def test_requires_header(self, api_client, order):
        response = api_client.get('/api/orders')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_filter_by_status(self, seller_client, order):
        Order.objects.create(
            seller_id=SELLER_ID, shipping_address={}, payment_status=Order.PaymentStatus.PAID
        )
        response = seller_client.get('/api/orders', {'status': 'paid'})

        assert len(response.data) == 1
        assert response.data[0]['payment']['status'] == 'Paid'

    def test_page_and_limit(self, seller_client, order):
        for _ in range(3):
            Order.objects.create(seller_id=SELLER_ID, shipping_address={})

        first_page = seller_client.get('/api/orders', {'limit': 3, 'page': 1})
        second_page = seller_client.get('/api/orders', {'limit': 3, 'page': 2})

        assert len(first_page.data) == 3
        assert [item['id'] for item in second_page.data] == [str(order.id)]

    def test_bad_limit(self, seller_client, db):
        response = seller_client.get('/api/orders', {'limit': 'ten'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestOrderDetailAPI:
    """Test order detail and payment updates"""

    def test_get_order(self, seller_client, order):
        response = seller_client.get(f'/api/orders/{order.id}')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['customerName'] == 'Ravi Kumar'
        assert response.data['items'][0]['name'] == 'Pen'

    def test_bad_id(self, seller_client, db):
        response = seller_client.get('/api/orders/123')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'error': 'Bad id'}

    def test_other_sellers_order_not_found(self, seller2_client, order):
        response = seller2_client.get(f'/api/orders/{order.id}')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_mark_paid(self, seller_client, order):
        response = seller_client.patch(
            f'/api/orders/{order.id}',
            {'payment': {'status': 'Paid', 'transactionId': 'pay_123'}},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['payment'] == {
            'method': 'cod', 'status': 'Paid', 'transactionId': 'pay_123'
        }

    def test_update_is_idempotent(self, seller_client, order):
        body = {'paymentStatus': 'Paid', 'transactionId': 'pay_123'}
        first = seller_client.patch(f'/api/orders/{order.id}', body, format='json')
        second = seller_client.patch(f'/api/orders/{order.id}', body, format='json')

        first.data.pop('updatedAt')
        second.data.pop('updatedAt')
        assert first.data == second.data

    def test_invalid_status(self, seller_client, order):
        response = seller_client.patch(
            f'/api/orders/{order.id}', {'payment': {'status': 'Shipped'}}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        order.refresh_from_db()
        assert order.payment_status == Order.PaymentStatus.PENDING

    def test_empty_update(self, seller_client, order):
        response = seller_client.patch(f'/api/orders/{order.id}', {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'No payment fields to update'

    def test_admin_can_update_any(self, admin_client, seller2_order):
        response = admin_client.patch(
            f'/api/orders/{seller2_order.id}', {'paymentStatus': 'Refunded'}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        seller2_order.refresh_from_db()
        assert seller2_order.payment_status == Order.PaymentStatus.REFUNDED


@pytest.mark.django_db
def test_order_item_line_total(order):
    item = OrderItem.objects.get(order=order)
    assert item.line_total == Decimal('50.00')
