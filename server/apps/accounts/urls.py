"""URL configuration for accounts app."""

from django.urls import path

from server.apps.accounts import views

app_name = 'accounts'

urlpatterns = [
    path('session/', views.session_start, name='session'),
]
