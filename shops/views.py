import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .resolvers import find_shop, get_seller_header, resolve_seller_id
from .serializers import ShopSerializer, ShopUpsertSerializer

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([AllowAny])
def health_check(request):
    """Liveness check. No database access."""
    return Response({'ok': True})


@api_view(['GET'])
@permission_classes([AllowAny])
def shop_detail(request, slug):
    """Look up a shop by slug; 404 when no seller has registered it."""
    shop = find_shop(slug, get_seller_header(request))
    if shop is None:
        return Response({'error': 'Shop not found'}, status=status.HTTP_404_NOT_FOUND)
    return Response(ShopSerializer(shop).data)


@api_view(['POST'])
@permission_classes([AllowAny])
def shop_upsert(request):
    """Create or update the calling seller's shop with the given slug."""
    seller_id = resolve_seller_id(request, allow_shop=False)

    serializer = ShopUpsertSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    shop = serializer.save(seller_id=seller_id)

    logger.info(f"Shop '{shop.slug}' saved for seller {seller_id}")
    return Response(ShopSerializer(shop).data, status=status.HTTP_201_CREATED)
