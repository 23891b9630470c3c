"""
Tests for Payments Module.
Tests for: Razorpay order creation and payment signature verification.
"""
import hashlib
import hmac
from unittest.mock import MagicMock, patch

import requests
from rest_framework import status

from payments.gateway import expected_signature, verify_payment_signature
from payments.views import parse_amount


def gateway_response(status_code, body):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    return response


class TestParseAmount:
    """Amounts are whole minor units"""

    def test_rounds_to_integer(self):
        assert parse_amount(49999.5) == 50000
        assert parse_amount('1200.4') == 1200
        assert parse_amount(100) == 100

    def test_rejects_missing_and_non_numeric(self):
        assert parse_amount(None) is None
        assert parse_amount('') is None
        assert parse_amount('abc') is None
        assert parse_amount('NaN') is None
        assert parse_amount(0) is None
        assert parse_amount(True) is None


class TestCreateOrderAPI:
    """Test gateway order creation"""

    @patch('payments.gateway.requests.post')
    def test_create_order(self, mock_post, api_client):
        mock_post.return_value = gateway_response(200, {
            'id': 'order_ABC', 'amount': 23600, 'currency': 'INR', 'status': 'created'
        })

        response = api_client.post('/api/razorpay/create-order', {
            'amount': 23600.4, 'receipt': 'rcpt_1', 'notes': {'shop': 'acme'}
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['order_id'] == 'order_ABC'
        assert response.data['data']['status'] == 'created'

        args, kwargs = mock_post.call_args
        assert args[0] == 'https://gateway.test/v1/orders'
        assert kwargs['auth'] == ('rzp_test_key', 'rzp_test_secret')
        assert kwargs['json']['amount'] == 23600
        assert kwargs['json']['currency'] == 'INR'
        assert kwargs['json']['receipt'] == 'rcpt_1'
        assert kwargs['timeout'] == 10

    def test_invalid_amount(self, api_client):
        response = api_client.post('/api/razorpay/create-order', {'amount': 'lots'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'success': False, 'error': 'Invalid or missing amount'}

    def test_not_configured(self, api_client, settings):
        settings.RAZORPAY_KEY_SECRET = ''
        response = api_client.post('/api/razorpay/create-order', {'amount': 100}, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['error'] == 'Payment gateway not configured'

    @patch('payments.gateway.requests.post')
    def test_gateway_rejects(self, mock_post, api_client):
        mock_post.return_value = gateway_response(400, {
            'error': {'code': 'BAD_REQUEST_ERROR', 'description': 'amount exceeds maximum amount allowed'}
        })

        response = api_client.post('/api/razorpay/create-order', {'amount': 10 ** 12}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {
            'success': False,
            'error': 'amount exceeds maximum amount allowed',
            'code': 'BAD_REQUEST_ERROR'
        }

    @patch('payments.gateway.requests.post', side_effect=requests.ConnectionError('refused'))
    def test_gateway_unreachable(self, mock_post, api_client):
        response = api_client.post('/api/razorpay/create-order', {'amount': 100}, format='json')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['success'] is False
        assert mock_post.call_count == 1

    @patch('payments.gateway.requests.post')
    def test_gateway_server_error_page(self, mock_post, api_client):
        mock_post.return_value = gateway_response(503, None)
        mock_post.return_value.json.side_effect = ValueError('not json')

        response = api_client.post('/api/razorpay/create-order', {'amount': 100}, format='json')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data == {'success': False, 'error': 'Gateway returned 503'}

    @patch('payments.gateway.requests.post')
    def test_gateway_server_error_with_json(self, mock_post, api_client):
        mock_post.return_value = gateway_response(500, {
            'error': {'code': 'SERVER_ERROR', 'description': 'internal failure'}
        })

        response = api_client.post('/api/razorpay/create-order', {'amount': 100}, format='json')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['success'] is False

    @patch('payments.gateway.requests.post')
    def test_gateway_non_object_body(self, mock_post, api_client):
        mock_post.return_value = gateway_response(400, ['unexpected'])

        response = api_client.post('/api/razorpay/create-order', {'amount': 100}, format='json')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data == {'success': False, 'error': 'Gateway returned 400'}

    @patch('payments.gateway.requests.post')
    def test_gateway_success_with_unreadable_body(self, mock_post, api_client):
        mock_post.return_value = gateway_response(200, 'ok')

        response = api_client.post('/api/razorpay/create-order', {'amount': 100}, format='json')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['success'] is False


class TestVerifyPaymentAPI:
    """Test payment signature verification"""

    def test_valid_signature(self, api_client):
        signature = expected_signature('order_ABC', 'pay_XYZ', 'rzp_test_secret')
        response = api_client.post('/api/razorpay/verify-payment', {
            'order_id': 'order_ABC', 'payment_id': 'pay_XYZ', 'signature': signature
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['verified'] is True

    def test_invalid_signature(self, api_client):
        response = api_client.post('/api/razorpay/verify-payment', {
            'order_id': 'order_ABC', 'payment_id': 'pay_XYZ', 'signature': 'deadbeef'
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['verified'] is False

    def test_missing_fields(self, api_client):
        response = api_client.post('/api/razorpay/verify-payment', {'order_id': 'order_ABC'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['verified'] is False

    def test_not_configured(self, api_client, settings):
        settings.RAZORPAY_KEY_SECRET = ''
        response = api_client.post('/api/razorpay/verify-payment', {
            'order_id': 'order_ABC', 'payment_id': 'pay_XYZ', 'signature': 'deadbeef'
        }, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR


def test_signature_is_hmac_of_order_and_payment():
    expected = hmac.new(b'secret', b'order_1|pay_1', hashlib.sha256).hexdigest()

    assert expected_signature('order_1', 'pay_1', 'secret') == expected


def test_any_other_signature_rejected(settings):
    settings.RAZORPAY_KEY_SECRET = 's'
    signature = hmac.new(b's', b'o1|p1', hashlib.sha256).hexdigest()

    assert verify_payment_signature('o1', 'p1', signature) is True
    assert verify_payment_signature('o1', 'p1', signature.upper()) is False
    assert verify_payment_signature('o1', 'p1', signature[:-1]) is False


def test_signature_checked_with_configured_secret(settings):
    settings.RAZORPAY_KEY_SECRET = 'other'
    signature = expected_signature('order_1', 'pay_1', 'rzp_test_secret')

    assert verify_payment_signature('order_1', 'pay_1', signature) is False
