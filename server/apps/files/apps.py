"""App configuration for the scoped file store."""

from typing import override

from django.apps import AppConfig


class FilesConfig(AppConfig):
    """Scoped file records, favorites and their blob cleanup."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.files'
    label = 'files'
    verbose_name = 'File storage'

    @override
    def ready(self) -> None:
        """Connect the handler that removes blobs of deleted files."""
        from server.apps.files import signals  # noqa: F401
