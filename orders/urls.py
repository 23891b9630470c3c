from django.urls import path
from . import views

urlpatterns = [
    path('orders', views.OrderListCreateView.as_view(), name='order-list-create'),
    path('orders/<str:pk>', views.OrderDetailView.as_view(), name='order-detail'),
]
