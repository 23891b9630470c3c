from django.urls import path
from . import views

urlpatterns = [
    path('products', views.ProductListView.as_view(), name='product-list'),
    path('products/<str:pk>', views.ProductDetailView.as_view(), name='product-detail'),
    path('offers', views.OfferListView.as_view(), name='offer-list'),
]
