"""
Tests for Catalog Module.
Tests for: discount evaluation, product/offer listing and product detail.
"""
import uuid
from datetime import timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest
from django.utils import timezone
from rest_framework import status

from conftest import SELLER_ID, SELLER2_ID
from catalog.discounts import (
    active_auto_discounts, apply_discount, applies_to_product, best_discount, is_discount_active
)
from catalog.models import Discount, Offer, Product


def make_discount(**kwargs):
    values = {
        'id': uuid.uuid4(),
        'type': Discount.Type.PERCENTAGE,
        'amount': Decimal('10'),
        'status': Discount.Status.ACTIVE,
        'method': Discount.Method.AUTO,
        'starts_at': None,
        'ends_at': None,
        'product_ids': [],
    }
    values.update(kwargs)
    return SimpleNamespace(**values)


def make_product(price, product_id='p-1'):
    return SimpleNamespace(id=product_id, price=Decimal(price))


# ============== Discount Evaluator Tests ==============

class TestApplyDiscount:
    """Test price arithmetic"""

    def test_percentage(self):
        assert apply_discount(Decimal('100.00'), make_discount(amount=Decimal('10'))) == Decimal('90.00')

    def test_fixed(self):
        discount = make_discount(type=Discount.Type.FIXED, amount=Decimal('15'))
        assert apply_discount(Decimal('100.00'), discount) == Decimal('85.00')

    def test_floored_at_zero(self):
        discount = make_discount(type=Discount.Type.FIXED, amount=Decimal('150'))
        assert apply_discount(Decimal('100.00'), discount) == Decimal('0.00')
        assert apply_discount(Decimal('100.00'), make_discount(amount=Decimal('120'))) == Decimal('0.00')

    def test_rounds_half_up(self):
        # 0.25 * 0.9 = 0.225
        assert apply_discount(Decimal('0.25'), make_discount(amount=Decimal('10'))) == Decimal('0.23')

    def test_unknown_type(self):
        assert apply_discount(Decimal('100.00'), make_discount(type='bogo')) is None

    def test_non_numeric_amount(self):
        assert apply_discount(Decimal('100.00'), make_discount(amount='abc')) is None


class TestBestDiscount:
    """Test picking the lowest price"""

    def test_lowest_price_wins(self):
        ten_percent = make_discount(amount=Decimal('10'))
        twenty_off = make_discount(type=Discount.Type.FIXED, amount=Decimal('20'))
        result = best_discount(make_product('100.00'), [ten_percent, twenty_off])

        assert result.discount is twenty_off
        assert result.discounted_price == Decimal('80.00')

    def test_ten_percent_beats_five_flat(self):
        ten_percent = make_discount(amount=Decimal('10'))
        five_flat = make_discount(type=Discount.Type.FIXED, amount=Decimal('5'))
        result = best_discount(make_product('100.00'), [five_flat, ten_percent])

        assert result.discount is ten_percent
        assert result.discounted_price == Decimal('90.00')

    def test_tie_keeps_first(self):
        first = make_discount(amount=Decimal('10'))
        second = make_discount(type=Discount.Type.FIXED, amount=Decimal('10'))
        result = best_discount(make_product('100.00'), [first, second])

        assert result.discount is first

    def test_targeted_discount_skips_other_products(self):
        targeted = make_discount(product_ids=['p-2'])
        assert best_discount(make_product('100.00', 'p-1'), [targeted]) is None
        assert best_discount(make_product('100.00', 'p-2'), [targeted]).discounted_price == Decimal('90.00')

    def test_no_discounts(self):
        assert best_discount(make_product('100.00'), []) is None

    def test_applies_to_product_compares_as_strings(self):
        product_id = uuid.uuid4()
        assert applies_to_product(make_discount(product_ids=[str(product_id)]), product_id)
        assert applies_to_product(make_discount(product_ids=[]), product_id)


class TestIsDiscountActive:
    """Date window bounds are inclusive"""

    def test_bounds_inclusive(self):
        now = timezone.now()
        discount = make_discount(starts_at=now, ends_at=now)
        assert is_discount_active(discount, now)

    def test_ends_at_now_active_one_microsecond_later_not(self):
        now = timezone.now()
        discount = make_discount(ends_at=now)
        assert is_discount_active(discount, now)
        assert not is_discount_active(discount, now + timedelta(microseconds=1))

    def test_outside_window(self):
        now = timezone.now()
        assert not is_discount_active(make_discount(starts_at=now + timedelta(seconds=1)), now)
        assert not is_discount_active(make_discount(ends_at=now - timedelta(seconds=1)), now)

    def test_inactive_status(self):
        assert not is_discount_active(make_discount(status=Discount.Status.INACTIVE))


@pytest.mark.django_db
class TestActiveAutoDiscounts:
    """Test the running discount query"""

    def test_filters_method_status_window_and_seller(self, auto_discount):
        now = timezone.now()
        Discount.objects.create(seller_id=SELLER_ID, method=Discount.Method.CODE, code='SAVE5', amount=5)
        Discount.objects.create(seller_id=SELLER_ID, amount=5, status=Discount.Status.INACTIVE)
        Discount.objects.create(seller_id=SELLER_ID, amount=5, ends_at=now - timedelta(days=1))
        Discount.objects.create(seller_id=SELLER_ID, amount=5, starts_at=now + timedelta(days=1))
        Discount.objects.create(seller_id=SELLER2_ID, amount=5)

        assert list(active_auto_discounts(SELLER_ID, now)) == [auto_discount]

    def test_ends_at_boundary(self, db):
        now = timezone.now()
        discount = Discount.objects.create(seller_id=SELLER_ID, amount=5, ends_at=now)

        assert active_auto_discounts(SELLER_ID, now) == [discount]
        assert active_auto_discounts(SELLER_ID, now + timedelta(microseconds=1)) == []

    def test_starts_at_boundary(self, db):
        now = timezone.now()
        discount = Discount.objects.create(seller_id=SELLER_ID, amount=5, starts_at=now)

        assert active_auto_discounts(SELLER_ID, now) == [discount]
        assert active_auto_discounts(SELLER_ID, now - timedelta(microseconds=1)) == []


# ============== API Tests ==============

@pytest.mark.django_db
class TestProductListAPI:
    """Test product listing"""

    def test_list_by_shop_newest_first(self, api_client, product, product2, seller2_product):
        response = api_client.get('/api/products', {'shop': 'acme'})

        assert response.status_code == status.HTTP_200_OK
        assert [item['title'] for item in response.data] == ['Test Mug', 'Test Shirt']

    def test_list_by_header(self, seller2_client, product, seller2_product):
        response = seller2_client.get('/api/products')

        assert [item['id'] for item in response.data] == [str(seller2_product.id)]

    def test_unknown_shop_lists_nothing(self, api_client, product):
        response = api_client.get('/api/products', {'shop': 'nowhere'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []

    def test_missing_tenant(self, api_client, db):
        response = api_client.get('/api/products')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'error': 'shop or seller id required'}

    def test_discount_fields_added(self, api_client, product, auto_discount):
        response = api_client.get('/api/products', {'shop': 'acme'})
        item = response.data[0]

        assert item['discountedPrice'] == Decimal('90.00')
        assert item['discount']['id'] == str(auto_discount.id)
        assert item['discount']['type'] == 'percentage'
        assert item['discount']['method'] == 'auto'

    def test_no_discount_fields_without_discount(self, api_client, product):
        response = api_client.get('/api/products', {'shop': 'acme'})

        assert 'discountedPrice' not in response.data[0]
        assert 'discount' not in response.data[0]

    def test_other_seller_discount_ignored(self, api_client, product):
        Discount.objects.create(seller_id=SELLER2_ID, amount=Decimal('50'))
        response = api_client.get('/api/products', {'shop': 'acme'})

        assert 'discountedPrice' not in response.data[0]

    def test_filter_by_category_and_search(self, api_client, product, product2):
        by_category = api_client.get('/api/products', {'shop': 'acme', 'category': 'apparel'})
        by_search = api_client.get('/api/products', {'shop': 'acme', 'search': 'mug'})

        assert [item['title'] for item in by_category.data] == ['Test Shirt']
        assert [item['title'] for item in by_search.data] == ['Test Mug']


@pytest.mark.django_db
class TestProductDetailAPI:
    """Test product detail"""

    def test_get_product(self, api_client, product, auto_discount):
        response = api_client.get(f'/api/products/{product.id}', {'shop': 'acme'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['title'] == 'Test Shirt'
        assert response.data['discountedPrice'] == Decimal('90.00')

    def test_bad_id(self, api_client, shop):
        response = api_client.get('/api/products/not-a-uuid', {'shop': 'acme'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'error': 'Bad id'}

    def test_other_sellers_product_not_found(self, api_client, product, seller2_product):
        response = api_client.get(f'/api/products/{seller2_product.id}', {'shop': 'acme'})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unknown_shop_not_found(self, api_client, product):
        response = api_client.get(f'/api/products/{product.id}', {'shop': 'nowhere'})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Shop not found'}


@pytest.mark.django_db
class TestOfferListAPI:
    """Test running offers"""

    def test_only_running_offers(self, api_client, shop, offer):
        now = timezone.now()
        Offer.objects.create(seller_id=SELLER_ID, title='Paused', status=Offer.Status.INACTIVE)
        Offer.objects.create(seller_id=SELLER_ID, title='Over', ends_at=now - timedelta(days=1))
        Offer.objects.create(seller_id=SELLER_ID, title='Soon', starts_at=now + timedelta(days=1))
        Offer.objects.create(seller_id=SELLER2_ID, title='Elsewhere')

        response = api_client.get('/api/offers', {'shop': 'acme'})

        assert response.status_code == status.HTTP_200_OK
        assert [item['title'] for item in response.data] == ['Summer Sale']
        assert response.data[0]['bannerUrl'] == 'https://cdn.test/summer.png'
