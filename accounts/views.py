import logging

from django.db import IntegrityError, transaction
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from main.exceptions import Conflict
from shops.resolvers import resolve_seller_id
from .authentication import StorefrontTokenAuthentication
from .models import StorefrontUser
from .serializers import (
    StorefrontUserSerializer, RegisterSerializer, LoginSerializer, ProfileUpdateSerializer
)
from .tokens import issue_token

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = 'Invalid credentials'
EMAIL_TAKEN_MESSAGE = 'Email already registered'


def auth_response(user):
    return {
        'token': issue_token(user),
        'user': StorefrontUserSerializer(user).data,
    }


@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    """
    Register a storefront account for the seller resolved from ``shop`` or
    the identity header. Returns a token so the client is signed in at once.
    """
    email = request.data.get('email')
    password = request.data.get('password')

    if not email or not password:
        return Response(
            {'error': 'email and password required'},
            status=status.HTTP_400_BAD_REQUEST
        )

    seller_id = resolve_seller_id(request)

    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    email = serializer.validated_data['email']
    if StorefrontUser.objects.filter(seller_id=seller_id, email__iexact=email).exists():
        raise Conflict(EMAIL_TAKEN_MESSAGE)

    try:
        with transaction.atomic():
            user = serializer.save(seller_id=seller_id)
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same email
        raise Conflict(EMAIL_TAKEN_MESSAGE) from e

    logger.info(f"Registered storefront account {user.id} for seller {seller_id}")
    return Response(auth_response(user))


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """
    Exchange email and password for a token. Unknown email and wrong
    password get the same answer.
    """
    serializer = LoginSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(
            {'error': 'email and password required'},
            status=status.HTTP_400_BAD_REQUEST
        )

    seller_id = resolve_seller_id(request)

    email = serializer.validated_data['email'].strip()
    user = StorefrontUser.objects.filter(seller_id=seller_id, email__iexact=email).first()
    password = serializer.validated_data['password']

    if user is None:
        # Unknown emails still pay for one password hash
        StorefrontUser().set_password(password)

    if user is None or not user.check_password(password):
        return Response(
            {'error': INVALID_CREDENTIALS_MESSAGE},
            status=status.HTTP_401_UNAUTHORIZED
        )

    return Response(auth_response(user))


@api_view(['GET'])
@permission_classes([AllowAny])
def eligibility_view(request):
    """Tell the client whether an email already has an account in this shop."""
    email = (request.query_params.get('email') or '').strip()
    if not email:
        return Response(
            {'error': 'email required'},
            status=status.HTTP_400_BAD_REQUEST
        )

    seller_id = resolve_seller_id(request)
    registered = StorefrontUser.objects.filter(seller_id=seller_id, email__iexact=email).exists()

    return Response({'email': email, 'registered': registered})


@api_view(['GET'])
@authentication_classes([StorefrontTokenAuthentication])
@permission_classes([IsAuthenticated])
def current_user_view(request):
    """Get the account the bearer token belongs to"""
    return Response(StorefrontUserSerializer(request.user).data)


@api_view(['PATCH'])
@authentication_classes([StorefrontTokenAuthentication])
@permission_classes([IsAuthenticated])
def update_profile_view(request):
    """Update the signed-in account's display name"""
    serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()
    return Response(StorefrontUserSerializer(user).data)
