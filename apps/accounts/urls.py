from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Users
    path('users', views.register, name='register'),
    path('users/<int:pk>', views.update, name='update'),

    # Sessions
    path('sessions', views.SessionView.as_view(), name='sessions'),

    # Password recovery
    path('forgot-password', views.forgot_password, name='forgot-password'),
    path('reset-password', views.reset_password, name='reset-password'),
]
