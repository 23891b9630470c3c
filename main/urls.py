"""
URL configuration for the storefront API.

Routes carry no trailing slash, matching the paths the storefront client calls.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView


urlpatterns = [
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),

    # API endpoints
    path('api/auth/', include('accounts.urls')),
    path('api/razorpay/', include('payments.urls')),
    path('api/', include('shops.urls')),
    path('api/', include('catalog.urls')),
    path('api/', include('orders.urls')),
]
