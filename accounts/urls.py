from django.urls import path
from . import views

urlpatterns = [
    path('register', views.register_view, name='register'),
    path('login', views.login_view, name='login'),
    path('eligibility', views.eligibility_view, name='eligibility'),
    path('me', views.current_user_view, name='current-user'),
    path('profile', views.update_profile_view, name='update-profile'),
]
