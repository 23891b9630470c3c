"""
Stateless bearer tokens for storefront accounts.

A token is a signed, timestamped payload carrying the account id as the
``sub`` claim. Nothing is stored server-side; a token is valid for as long
as its signature checks out and it is younger than AUTH_TOKEN_MAX_AGE.
"""
from django.conf import settings
from django.core import signing


class InvalidToken(Exception):
    pass


def issue_token(user):
    payload = {'sub': str(user.id), 'sid': user.seller_id}
    return signing.dumps(
        payload,
        key=settings.AUTH_TOKEN_SECRET,
        salt=settings.AUTH_TOKEN_SALT,
        compress=True,
    )


def read_token(token, max_age=None):
    """Return the token payload or raise InvalidToken (bad signature or expired)."""
    if max_age is None:
        max_age = settings.AUTH_TOKEN_MAX_AGE
    try:
        payload = signing.loads(
            token,
            key=settings.AUTH_TOKEN_SECRET,
            salt=settings.AUTH_TOKEN_SALT,
            max_age=max_age,
        )
    except signing.SignatureExpired as e:
        raise InvalidToken('Token expired') from e
    except signing.BadSignature as e:
        raise InvalidToken('Invalid token') from e

    if not isinstance(payload, dict) or not payload.get('sub'):
        raise InvalidToken('Invalid token')
    return payload
