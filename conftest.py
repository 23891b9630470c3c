"""
Pytest fixtures for storefront API tests.
Provides common test data and utilities for all test modules.
"""
import pytest
from decimal import Decimal
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient


SELLER_ID = 'seller-1'
SELLER2_ID = 'seller-2'
ADMIN_ID = 'storefront-admin'


@pytest.fixture(autouse=True)
def storefront_settings(settings):
    """Fixed admin identity and gateway credentials for every test"""
    settings.STOREFRONT_ADMIN_ID = ADMIN_ID
    settings.RAZORPAY_KEY_ID = 'rzp_test_key'
    settings.RAZORPAY_KEY_SECRET = 'rzp_test_secret'
    settings.RAZORPAY_API_URL = 'https://gateway.test/v1'
    settings.AUTH_TOKEN_SECRET = 'test-token-secret'
    return settings


# ============== Shop Fixtures ==============

@pytest.fixture
def shop(db):
    """Create a test shop for the first seller"""
    from shops.models import Shop
    return Shop.objects.create(
        seller_id=SELLER_ID,
        slug='acme',
        name='Acme Store',
        description='Everything Acme'
    )


@pytest.fixture
def shop2(db):
    """Create a shop for the second seller"""
    from shops.models import Shop
    return Shop.objects.create(
        seller_id=SELLER2_ID,
        slug='globex',
        name='Globex Store'
    )


# ============== Catalog Fixtures ==============

@pytest.fixture
def product(db, shop):
    """Create a test product"""
    from catalog.models import Product
    return Product.objects.create(
        seller_id=SELLER_ID,
        title='Test Shirt',
        description='Cotton shirt',
        price=Decimal('100.00'),
        mrp=Decimal('150.00'),
        quantity=10,
        category='Apparel',
        images=['https://cdn.test/shirt.png']
    )


@pytest.fixture
def product2(db, shop):
    """Create a second test product"""
    from catalog.models import Product
    return Product.objects.create(
        seller_id=SELLER_ID,
        title='Test Mug',
        description='Ceramic mug',
        price=Decimal('40.00'),
        quantity=25,
        category='Kitchen'
    )


@pytest.fixture
def seller2_product(db, shop2):
    """Create a product for the second seller"""
    from catalog.models import Product
    return Product.objects.create(
        seller_id=SELLER2_ID,
        title='Globex Lamp',
        price=Decimal('80.00'),
        quantity=3
    )


@pytest.fixture
def auto_discount(db):
    """10% automatic discount on the whole catalog"""
    from catalog.models import Discount
    return Discount.objects.create(
        seller_id=SELLER_ID,
        method=Discount.Method.AUTO,
        type=Discount.Type.PERCENTAGE,
        amount=Decimal('10'),
        starts_at=timezone.now() - timedelta(days=1),
        ends_at=timezone.now() + timedelta(days=1)
    )


@pytest.fixture
def offer(db):
    """Create a running offer"""
    from catalog.models import Offer
    return Offer.objects.create(
        seller_id=SELLER_ID,
        title='Summer Sale',
        banner_url='https://cdn.test/summer.png',
        starts_at=timezone.now() - timedelta(days=1),
        ends_at=timezone.now() + timedelta(days=7)
    )


# ============== Order Fixtures ==============

@pytest.fixture
def shipping_address():
    """Shipping address in the client's camelCase shape"""
    return {
        'name': 'Asha Rao',
        'line1': '12 MG Road',
        'line2': 'Flat 4',
        'city': 'Bengaluru',
        'state': 'KA',
        'postalCode': '560001',
        'country': 'IN',
        'phone': '9876543210',
        'email': 'asha@test.com',
    }


@pytest.fixture
def order_payload(shipping_address, product):
    """Checkout body for one product"""
    return {
        'items': [
            {'productId': str(product.id), 'name': product.title, 'price': 100, 'quantity': 2}
        ],
        'totals': {'subtotal': 200, 'gst': 36, 'delivery': 0, 'total': 236},
        'payment': {'method': 'razorpay', 'status': 'Pending', 'transactionId': ''},
        'shippingAddress': shipping_address,
        'customerEmail': 'Asha@Test.com',
        'customerName': 'Asha Rao',
    }


@pytest.fixture
def order(db):
    """Create a stored order for the first seller"""
    from orders.models import Order, OrderItem
    order = Order.objects.create(
        seller_id=SELLER_ID,
        customer_name='Ravi Kumar',
        customer_email='ravi@test.com',
        shipping_address={
            'name': 'Ravi Kumar', 'line1': '1 Park St', 'city': 'Kolkata',
            'state': 'WB', 'postal_code': '700016', 'phone': '9000000000'
        },
        subtotal=Decimal('50.00'),
        total=Decimal('50.00'),
        payment_method='cod'
    )
    OrderItem.objects.create(order=order, product_id='p-1', name='Pen', price=Decimal('25.00'), quantity=2)
    return order


@pytest.fixture
def seller2_order(db):
    """Create an order belonging to the second seller"""
    from orders.models import Order
    return Order.objects.create(
        seller_id=SELLER2_ID,
        customer_name='Other Buyer',
        shipping_address={},
        subtotal=Decimal('10.00'),
        total=Decimal('10.00')
    )


# ============== Account Fixtures ==============

@pytest.fixture
def storefront_user(db):
    """Create a registered shopper of the first seller"""
    from accounts.models import StorefrontUser
    user = StorefrontUser(seller_id=SELLER_ID, name='Asha', email='asha@test.com')
    user.set_password('secret123')
    user.save()
    return user


# ============== API Client Fixtures ==============

@pytest.fixture
def api_client():
    """Create API test client"""
    return APIClient()


@pytest.fixture
def seller_client(api_client):
    """API client sending the first seller's identity header"""
    api_client.credentials(HTTP_X_USER_ID=SELLER_ID)
    return api_client


@pytest.fixture
def seller2_client():
    """API client sending the second seller's identity header"""
    client = APIClient()
    client.credentials(HTTP_X_USER_ID=SELLER2_ID)
    return client


@pytest.fixture
def admin_client():
    """API client sending the storefront admin identity header"""
    client = APIClient()
    client.credentials(HTTP_X_USER_ID=ADMIN_ID)
    return client


@pytest.fixture
def user_client(api_client, storefront_user):
    """API client carrying a bearer token for the shopper"""
    from accounts.tokens import issue_token
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(storefront_user)}')
    return api_client
