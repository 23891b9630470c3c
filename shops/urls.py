from django.urls import path
from . import views

urlpatterns = [
    path('health', views.health_check, name='health-check'),
    path('shops', views.shop_upsert, name='shop-upsert'),
    path('shops/<slug:slug>', views.shop_detail, name='shop-detail'),
]
