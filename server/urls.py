"""
Main URL mapping configuration file.

The file system itself is driven by chat commands, the only web
surface is django-admin for inspecting guilds, folders and files.
"""

from django.contrib import admin
from django.urls import path

admin.autodiscover()

urlpatterns = [
    # django-admin:
    path('admin/', admin.site.urls),
]
