"""
Tests for Shops Module.
Tests for: seller resolution, shop lookup/upsert endpoints and the health check.
"""
from io import StringIO

import pytest
from django.core.management import call_command
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.test import APIRequestFactory
from rest_framework.request import Request

from conftest import SELLER_ID, SELLER2_ID, ADMIN_ID
from main.exceptions import BadRequest
from shops.models import Shop
from shops.resolvers import find_shop, is_admin_identity, resolve_seller_id


factory = APIRequestFactory()


def make_request(path='/api/products', **headers):
    return Request(factory.get(path, **headers))


# ============== Resolver Tests ==============

@pytest.mark.django_db
class TestResolveSellerId:
    """Test seller resolution from shop slug or identity header"""

    def test_shop_slug_resolves_owner(self, shop):
        request = make_request('/api/products?shop=acme')
        assert resolve_seller_id(request) == SELLER_ID

    def test_shop_slug_is_case_insensitive(self, shop):
        request = make_request('/api/products?shop=ACME')
        assert resolve_seller_id(request) == SELLER_ID

    def test_shop_slug_wins_over_header(self, shop):
        request = make_request('/api/products?shop=acme', HTTP_X_USER_ID=SELLER2_ID)
        assert resolve_seller_id(request) == SELLER_ID

    def test_unknown_shop_raises_not_found(self, db):
        request = make_request('/api/products?shop=nowhere')
        with pytest.raises(NotFound):
            resolve_seller_id(request)

    def test_header_used_without_shop(self, db):
        request = make_request(HTTP_X_USER_ID=SELLER2_ID)
        assert resolve_seller_id(request) == SELLER2_ID

    def test_missing_both_raises_bad_request(self, db):
        with pytest.raises(BadRequest):
            resolve_seller_id(make_request())

    def test_header_only_mode_ignores_shop(self, shop):
        request = make_request('/api/orders?shop=acme')
        with pytest.raises(BadRequest):
            resolve_seller_id(request, allow_shop=False)


@pytest.mark.django_db
class TestFindShop:
    """Slugs are unique per seller only"""

    def test_header_seller_shop_preferred(self, shop):
        other = Shop.objects.create(seller_id=SELLER2_ID, slug='acme', name='Other Acme')
        assert find_shop('acme', SELLER2_ID) == other
        assert find_shop('acme', 'someone-else') == shop

    def test_oldest_shop_without_seller(self, shop):
        Shop.objects.create(seller_id=SELLER2_ID, slug='acme', name='Other Acme')
        assert find_shop('acme') == shop

    def test_slug_stored_lower_case(self, db):
        created = Shop.objects.create(seller_id=SELLER_ID, slug='MixedCase', name='Mixed')
        assert created.slug == 'mixedcase'


def test_is_admin_identity():
    assert is_admin_identity(ADMIN_ID)
    assert not is_admin_identity(SELLER_ID)
    assert not is_admin_identity(None)


def test_no_admin_when_unset(settings):
    settings.STOREFRONT_ADMIN_ID = ''
    assert not is_admin_identity('')


# ============== API Tests ==============

class TestHealthAPI:
    """Test the liveness check"""

    def test_health(self, api_client):
        response = api_client.get('/api/health')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'ok': True}


@pytest.mark.django_db
class TestShopAPI:
    """Test shop lookup and upsert endpoints"""

    def test_get_shop(self, api_client, shop):
        response = api_client.get('/api/shops/acme')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['slug'] == 'acme'
        assert response.data['sellerId'] == SELLER_ID
        assert response.data['name'] == 'Acme Store'

    def test_get_unknown_shop(self, api_client, db):
        response = api_client.get('/api/shops/missing')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Shop not found'}

    def test_upsert_creates_shop(self, seller_client, db):
        response = seller_client.post('/api/shops', {'slug': 'New-Shop', 'name': 'New'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['slug'] == 'new-shop'
        assert Shop.objects.filter(seller_id=SELLER_ID, slug='new-shop').exists()

    def test_upsert_updates_existing_shop(self, seller_client, shop):
        response = seller_client.post(
            '/api/shops', {'slug': 'acme', 'description': 'Updated'}, format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        shop.refresh_from_db()
        assert shop.description == 'Updated'
        assert shop.name == 'Acme Store'
        assert Shop.objects.filter(slug='acme').count() == 1

    def test_upsert_defaults_name_to_slug(self, seller_client, db):
        response = seller_client.post('/api/shops', {'slug': 'plain'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'plain'

    def test_upsert_requires_header(self, api_client, db):
        response = api_client.post('/api/shops', {'slug': 'acme'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'seller id header required'

    def test_upsert_rejects_bad_slug(self, seller_client, db):
        response = seller_client.post('/api/shops', {'slug': 'not a slug!'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'].startswith('slug:')


# ============== Management Command Tests ==============

@pytest.mark.django_db
class TestLoadDemoData:
    """Test the demo data command"""

    def test_loads_demo_shop(self):
        from catalog.models import Discount, Product
        from accounts.models import StorefrontUser

        call_command('load_demo_data', '--seller', 'demo-seller', stdout=StringIO())

        assert Shop.objects.get(slug='demo').seller_id == 'demo-seller'
        assert Product.objects.filter(seller_id='demo-seller').count() == 5
        assert Discount.objects.filter(seller_id='demo-seller').count() == 1
        assert StorefrontUser.objects.get(email='shopper@demo.test').check_password('Demo1234@')

    def test_running_twice_does_not_duplicate(self):
        from catalog.models import Product

        call_command('load_demo_data', stdout=StringIO())
        call_command('load_demo_data', stdout=StringIO())

        assert Shop.objects.filter(slug='demo').count() == 1
        assert Product.objects.filter(seller_id='demo-seller').count() == 5

    def test_demo_shop_served_by_api(self, api_client):
        call_command('load_demo_data', stdout=StringIO())

        response = api_client.get('/api/products', {'shop': 'demo'})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 5
        assert all('discountedPrice' in item for item in response.data)
