"""
URL configuration for mpesa app.
"""

from django.urls import path
from . import views

urlpatterns = [
    path('api/pay', views.pay, name='mpesa_pay'),
    path('api/token', views.token, name='mpesa_token'),
    path('mpesa/callback', views.mpesa_callback, name='mpesa_callback'),
    path('simulate-callback', views.simulate_callback, name='mpesa_simulate_callback'),
]
