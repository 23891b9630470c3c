"""
Razorpay adapter: order creation over the REST API and payment signature
verification. One request per call, no retries.
"""
import hashlib
import hmac
import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class GatewayNotConfigured(Exception):
    """Key id or key secret is not set."""


class GatewayError(Exception):
    """The gateway answered with an error, or could not be reached."""

    def __init__(self, message, code=None, status_code=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


def get_credentials():
    key_id = settings.RAZORPAY_KEY_ID
    key_secret = settings.RAZORPAY_KEY_SECRET
    if not key_id or not key_secret:
        raise GatewayNotConfigured('Payment gateway not configured')
    return key_id, key_secret


def create_gateway_order(amount, currency=None, receipt=None, notes=None):
    """
    Create a gateway order for ``amount`` minor currency units.

    Returns the gateway's order document. Raises GatewayNotConfigured,
    or GatewayError. ``status_code`` is set only for a 4xx rejection with a
    JSON error; it is None when the gateway could not be reached, failed
    with a 5xx or answered with an unreadable body.
    """
    key_id, key_secret = get_credentials()
    payload = {
        'amount': amount,
        'currency': currency or settings.RAZORPAY_DEFAULT_CURRENCY,
        'receipt': receipt,
        'notes': notes or {},
        'payment_capture': 1,
    }

    try:
        response = requests.post(
            f"{settings.RAZORPAY_API_URL.rstrip('/')}/orders",
            json=payload,
            auth=(key_id, key_secret),
            timeout=settings.RAZORPAY_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.error(f"Razorpay order request failed: {e}")
        raise GatewayError('Payment gateway unreachable') from e

    try:
        body = response.json()
    except ValueError:
        body = None

    error = body.get('error') if isinstance(body, dict) else None
    if 400 <= response.status_code < 500 and isinstance(error, dict):
        message = error.get('description') or f'Gateway returned {response.status_code}'
        logger.warning(f"Razorpay rejected order: {message}")
        raise GatewayError(message, code=error.get('code'), status_code=response.status_code)

    # Server errors and unreadable bodies are gateway failures, not client errors
    if response.status_code >= 400 or not isinstance(body, dict):
        logger.error(f"Razorpay order request failed with status {response.status_code}")
        raise GatewayError(f'Gateway returned {response.status_code}')

    logger.info(f"Razorpay order created: {body.get('id')}")
    return body


def expected_signature(order_id, payment_id, secret):
    message = f"{order_id}|{payment_id}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


def verify_payment_signature(order_id, payment_id, signature):
    """True when ``signature`` is the HMAC-SHA256 of ``order_id|payment_id``."""
    secret = settings.RAZORPAY_KEY_SECRET
    if not secret:
        raise GatewayNotConfigured('Payment gateway not configured')
    if not (order_id and payment_id and signature):
        return False
    expected = expected_signature(order_id, payment_id, secret)
    return hmac.compare_digest(expected.encode(), str(signature).encode())
