"""Django app configuration for filesystem app."""

from django.apps import AppConfig


class FilesystemConfig(AppConfig):
    """Configuration for filesystem app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.filesystem'
    verbose_name = 'Guild File System'
