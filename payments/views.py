import logging
import math

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .gateway import (
    GatewayError, GatewayNotConfigured, create_gateway_order, verify_payment_signature
)

logger = logging.getLogger(__name__)


def parse_amount(value):
    """Amount in minor units rounded half up, or None when not a finite number."""
    if value is None or value == '' or isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return int(math.floor(amount + 0.5))


@api_view(['POST'])
@permission_classes([AllowAny])
def create_order_view(request):
    """Create a Razorpay order for the checkout amount"""
    data = request.data if hasattr(request.data, 'get') else {}
    amount = parse_amount(data.get('amount'))
    if amount is None:
        return Response(
            {'success': False, 'error': 'Invalid or missing amount'},
            status=status.HTTP_400_BAD_REQUEST
        )

    try:
        order = create_gateway_order(
            amount,
            currency=data.get('currency'),
            receipt=data.get('receipt'),
            notes=data.get('notes'),
        )
    except GatewayNotConfigured as e:
        logger.error(str(e))
        return Response(
            {'success': False, 'error': str(e)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    except GatewayError as e:
        if e.status_code is None:
            return Response(
                {'success': False, 'error': e.message},
                status=status.HTTP_502_BAD_GATEWAY
            )
        return Response(
            {'success': False, 'error': e.message, 'code': e.code},
            status=status.HTTP_400_BAD_REQUEST
        )

    return Response({'success': True, 'order_id': order.get('id'), 'data': order})


@api_view(['POST'])
@permission_classes([AllowAny])
def verify_payment_view(request):
    """Check the payment signature returned by the Razorpay checkout"""
    data = request.data if hasattr(request.data, 'get') else {}

    try:
        verified = verify_payment_signature(
            data.get('order_id'), data.get('payment_id'), data.get('signature')
        )
    except GatewayNotConfigured as e:
        logger.error(str(e))
        return Response(
            {'success': False, 'verified': False, 'error': str(e)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    if verified:
        return Response({
            'success': True,
            'verified': True,
            'message': 'Payment verified successfully'
        })

    logger.warning(f"Payment signature mismatch for order {data.get('order_id')}")
    return Response(
        {'success': False, 'verified': False, 'message': 'Invalid payment signature'},
        status=status.HTTP_400_BAD_REQUEST
    )
