from django.urls import path
from . import views

urlpatterns = [
    path('create-order', views.create_order_view, name='razorpay-create-order'),
    path('verify-payment', views.verify_payment_view, name='razorpay-verify-payment'),
]
