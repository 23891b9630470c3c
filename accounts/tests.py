"""
Tests for Accounts Module.
Tests for: StorefrontUser model, tokens, register/login/eligibility/profile endpoints.
"""
from unittest.mock import patch

import pytest
from django.contrib.auth.hashers import make_password
from rest_framework import status

from conftest import SELLER_ID, SELLER2_ID
from accounts.models import StorefrontUser
from accounts.tokens import InvalidToken, issue_token, read_token


# ============== Model Tests ==============

@pytest.mark.django_db
class TestStorefrontUserModel:
    """Test cases for StorefrontUser model"""

    def test_password_is_hashed(self, storefront_user):
        assert storefront_user.password_hash != 'secret123'
        assert storefront_user.password_hash.startswith('bcrypt_sha256$')
        assert storefront_user.check_password('secret123')
        assert not storefront_user.check_password('wrong')

    def test_str_representation(self, storefront_user):
        assert str(storefront_user) == f"asha@test.com ({SELLER_ID})"


# ============== Token Tests ==============

@pytest.mark.django_db
class TestTokens:
    """Test stateless bearer tokens"""

    def test_round_trip_claims(self, storefront_user):
        payload = read_token(issue_token(storefront_user))
        assert payload['sub'] == str(storefront_user.id)
        assert payload['sid'] == SELLER_ID

    def test_tampered_token_rejected(self, storefront_user):
        token = issue_token(storefront_user)
        with pytest.raises(InvalidToken):
            read_token(token[:-2] + 'xx')

    def test_expired_token_rejected(self, storefront_user):
        token = issue_token(storefront_user)
        with pytest.raises(InvalidToken, match='expired'):
            read_token(token, max_age=-1)

    def test_other_secret_rejected(self, storefront_user, settings):
        token = issue_token(storefront_user)
        settings.AUTH_TOKEN_SECRET = 'rotated'
        with pytest.raises(InvalidToken):
            read_token(token)


# ============== API Tests ==============

@pytest.mark.django_db
class TestRegisterAPI:
    """Test account registration"""

    def test_register_success(self, api_client, shop):
        response = api_client.post('/api/auth/register?shop=acme', {
            'name': 'Meera',
            'email': 'meera@test.com',
            'password': 'pass1234'
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert 'token' in response.data
        assert response.data['user']['email'] == 'meera@test.com'
        assert 'password_hash' not in response.data['user']
        user = StorefrontUser.objects.get(email='meera@test.com')
        assert user.seller_id == SELLER_ID

    def test_register_missing_fields(self, api_client, shop):
        response = api_client.post('/api/auth/register?shop=acme', {'email': 'x@test.com'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'email and password required'

    def test_register_twice_conflicts(self, api_client, shop, shop2):
        body = {'email': 'a@x.com', 'password': 'pass1234'}
        first = api_client.post('/api/auth/register?shop=acme', body, format='json')
        second = api_client.post('/api/auth/register?shop=acme', body, format='json')
        other_seller = api_client.post('/api/auth/register?shop=globex', body, format='json')

        assert first.status_code == status.HTTP_200_OK
        assert second.status_code == status.HTTP_409_CONFLICT
        assert other_seller.status_code == status.HTTP_200_OK

    def test_register_duplicate_email_case_insensitive(self, api_client, shop, storefront_user):
        response = api_client.post('/api/auth/register?shop=acme', {
            'email': 'ASHA@test.com',
            'password': 'pass1234'
        }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error'] == 'Email already registered'

    def test_same_email_other_seller_allowed(self, api_client, shop2, storefront_user):
        response = api_client.post('/api/auth/register?shop=globex', {
            'email': 'asha@test.com',
            'password': 'pass1234'
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert StorefrontUser.objects.filter(email='asha@test.com').count() == 2

    def test_register_with_header(self, seller2_client, db):
        response = seller2_client.post('/api/auth/register', {
            'email': 'new@test.com',
            'password': 'pass1234'
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert StorefrontUser.objects.get(email='new@test.com').seller_id == SELLER2_ID

    def test_register_without_tenant(self, api_client, db):
        response = api_client.post('/api/auth/register', {
            'email': 'new@test.com',
            'password': 'pass1234'
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'shop or seller id required'

    def test_register_unknown_shop(self, api_client, db):
        response = api_client.post('/api/auth/register?shop=nowhere', {
            'email': 'new@test.com',
            'password': 'pass1234'
        }, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Shop not found'


@pytest.mark.django_db
class TestLoginAPI:
    """Test login"""

    def test_login_success(self, api_client, shop, storefront_user):
        response = api_client.post('/api/auth/login?shop=acme', {
            'email': 'Asha@Test.com',
            'password': 'secret123'
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert read_token(response.data['token'])['sub'] == str(storefront_user.id)
        assert response.data['user']['id'] == str(storefront_user.id)

    def test_wrong_password_and_unknown_email_look_alike(self, api_client, shop, storefront_user):
        wrong_password = api_client.post('/api/auth/login?shop=acme', {
            'email': 'asha@test.com', 'password': 'nope'
        }, format='json')
        unknown_email = api_client.post('/api/auth/login?shop=acme', {
            'email': 'ghost@test.com', 'password': 'nope'
        }, format='json')

        assert wrong_password.status_code == status.HTTP_401_UNAUTHORIZED
        assert unknown_email.status_code == status.HTTP_401_UNAUTHORIZED
        assert wrong_password.data == unknown_email.data == {'error': 'Invalid credentials'}

    def test_unknown_email_still_hashes(self, api_client, shop):
        with patch('accounts.models.make_password', wraps=make_password) as hasher:
            response = api_client.post('/api/auth/login?shop=acme', {
                'email': 'ghost@test.com', 'password': 'nope'
            }, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        hasher.assert_called_once_with('nope')

    def test_login_other_seller_fails(self, api_client, shop2, storefront_user):
        response = api_client.post('/api/auth/login?shop=globex', {
            'email': 'asha@test.com', 'password': 'secret123'
        }, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_missing_credentials(self, api_client, shop):
        response = api_client.post('/api/auth/login?shop=acme', {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestEligibilityAPI:
    """Test the registered-email check"""

    def test_registered(self, api_client, shop, storefront_user):
        response = api_client.get('/api/auth/eligibility', {'email': 'ASHA@test.com', 'shop': 'acme'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'email': 'ASHA@test.com', 'registered': True}

    def test_not_registered(self, api_client, shop):
        response = api_client.get('/api/auth/eligibility', {'email': 'new@test.com', 'shop': 'acme'})

        assert response.data['registered'] is False

    def test_email_required(self, api_client, shop):
        response = api_client.get('/api/auth/eligibility', {'shop': 'acme'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestProfileAPI:
    """Test token-authenticated account endpoints"""

    def test_me(self, user_client, storefront_user):
        response = user_client.get('/api/auth/me')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == 'asha@test.com'

    def test_me_without_token(self, api_client, db):
        response = api_client.get('/api/auth/me')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_me_with_bad_token(self, api_client, db):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
        response = api_client.get('/api/auth/me')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Invalid token'

    def test_me_for_deleted_account(self, user_client, storefront_user):
        storefront_user.delete()
        response = user_client.get('/api/auth/me')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_update_display_name(self, user_client, storefront_user):
        response = user_client.patch('/api/auth/profile', {'displayName': 'Asha R'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Asha R'
        storefront_user.refresh_from_db()
        assert storefront_user.name == 'Asha R'

    def test_catalog_ignores_stale_token(self, api_client, shop, product):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer expired-or-bogus')
        response = api_client.get('/api/products?shop=acme')

        assert response.status_code == status.HTTP_200_OK
