from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import authentication
from rest_framework.exceptions import AuthenticationFailed

from .models import StorefrontUser
from .tokens import InvalidToken, read_token


class StorefrontTokenAuthentication(authentication.BaseAuthentication):
    """
    Authenticate ``Authorization: Bearer <token>`` headers carrying a
    storefront account token.
    """
    keyword = 'Bearer'

    def authenticate(self, request):
        auth_header = authentication.get_authorization_header(request).split()
        if not auth_header or auth_header[0].lower() != self.keyword.lower().encode():
            return None
        if len(auth_header) != 2:
            raise AuthenticationFailed('Invalid token header')

        try:
            token = auth_header[1].decode()
        except UnicodeError:
            raise AuthenticationFailed('Invalid token')

        try:
            payload = read_token(token)
        except InvalidToken as e:
            raise AuthenticationFailed(str(e))

        try:
            user = StorefrontUser.objects.get(id=payload['sub'])
        except (StorefrontUser.DoesNotExist, DjangoValidationError, ValueError):
            raise AuthenticationFailed('Invalid token')

        return (user, token)

    def authenticate_header(self, request):
        return self.keyword
