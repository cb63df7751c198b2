"""Main URL mapping configuration file.

Include other URLConfs from external apps using method `include()`.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('api/', include('server.apps.accounts.urls')),
    path('api/', include('server.apps.files.urls')),
    path('admin/', admin.site.urls),
]
