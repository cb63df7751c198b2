"""Django admin configuration for files app."""

from typing import override

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.files.models import Favorite, File


@admin.register(File)
class FileAdmin(admin.ModelAdmin[File]):
    """Admin interface for File model."""

    list_display = [
        'name',
        'scope_display',
        'media_type',
        'favorite_count',
        'created_at',
    ]

    list_filter = [
        'media_type',
        'scope_kind',
        'created_at',
    ]

    search_fields = [
        'name',
        'scope_id',
        'blob',
    ]

    # Files are immutable after creation
    readonly_fields = [
        'name',
        'scope_kind',
        'scope_id',
        'blob',
        'media_type',
        'created_at',
    ]

    fieldsets = (
        ('File Information', {
            'fields': ('name', 'media_type', 'blob'),
        }),
        ('Owner', {
            'fields': ('scope_kind', 'scope_id'),
        }),
        ('Timestamps', {
            'fields': ('created_at',),
        }),
    )

    def scope_display(self, obj: File) -> str:
        """Display owning scope.

        Args:
            obj: File instance.

        Returns:
            Scope as 'kind:id'.
        """
        return f'{obj.scope_kind}:{obj.scope_id}'
    scope_display.short_description = 'Scope'  # type: ignore[attr-defined]

    def favorite_count(self, obj: File) -> int:
        """Count of accounts that starred this file.

        Args:
            obj: File instance.

        Returns:
            Number of favorite markers.
        """
        return obj.favorites.count()
    favorite_count.short_description = 'Favorites'  # type: ignore[attr-defined]

    @override
    def has_add_permission(self, request: HttpRequest) -> bool:
        """Disable adding files via admin.

        Files are created from uploads through the API.

        Args:
            request: HTTP request.

        Returns:
            False - files cannot be added manually.
        """
        return False


@admin.register(Favorite)
class FavoriteAdmin(admin.ModelAdmin[Favorite]):
    """Admin interface for Favorite model."""

    list_display = [
        'file',
        'account',
        'scope_kind',
        'scope_id',
        'created_at',
    ]

    list_filter = [
        'scope_kind',
    ]

    search_fields = [
        'file__name',
        'account__token_identifier',
        'scope_id',
    ]

    @override
    def get_queryset(self, request: HttpRequest) -> QuerySet[Favorite]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('file', 'account')
