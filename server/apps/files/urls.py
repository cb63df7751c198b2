"""URL configuration for files app."""

from django.urls import path

from server.apps.files import views

app_name = 'files'

urlpatterns = [
    path('files/', views.files_collection, name='files'),
    path('files/upload-url/', views.upload_url, name='upload-url'),
    path('files/url/', views.file_url, name='file-url'),
    path('files/<int:file_id>/', views.file_detail, name='file-detail'),
    path(
        'files/<int:file_id>/favorite/',
        views.file_favorite,
        name='file-favorite',
    ),
    path('favorites/', views.favorites_collection, name='favorites'),
]
