"""Database models for files app."""

from typing import ClassVar, Final, final, override

from django.db import models

from server.apps.accounts.models import Account

# Constants for field max lengths
_NAME_MAX_LENGTH: Final = 255
_SCOPE_KIND_MAX_LENGTH: Final = 16
_SCOPE_ID_MAX_LENGTH: Final = 255
_MEDIA_TYPE_MAX_LENGTH: Final = 16
_BLOB_MAX_LENGTH: Final = 255


class ScopeKind(models.TextChoices):
    """Kind of boundary that owns a file."""

    PERSONAL = 'personal', 'Personal'
    ORGANIZATION = 'organization', 'Organization'


class MediaType(models.TextChoices):
    """Recognized kinds of uploaded content."""

    IMAGE = 'image', 'Image'
    PDF = 'pdf', 'PDF'
    CSV = 'csv', 'CSV'


@final
class File(models.Model):
    """File owned by a personal or organization scope.

    The content itself lives in the blob store; ``blob`` holds the
    storage key the client uploaded to. Files are never renamed or
    moved, only created and deleted.
    """

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
        help_text='Display name chosen at upload time',
    )

    scope_kind = models.CharField(
        max_length=_SCOPE_KIND_MAX_LENGTH,
        choices=ScopeKind.choices,
    )

    scope_id = models.CharField(
        max_length=_SCOPE_ID_MAX_LENGTH,
        help_text='User subject or organization id owning the file',
    )

    # upload_to='' means the storage key is chosen by the upload URL step.
    # One file per key: deleting a file deletes the blob.
    blob = models.FileField(
        upload_to='',
        max_length=_BLOB_MAX_LENGTH,
        unique=True,
        help_text='Storage key in the blob store',
    )

    media_type = models.CharField(
        max_length=_MEDIA_TYPE_MAX_LENGTH,
        choices=MediaType.choices,
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        # Insertion order; listing applies no other sort
        ordering: ClassVar[list[str]] = ['id']

        indexes: ClassVar[list[models.Index]] = [
            # Exact-match lookup of all files in a scope
            models.Index(
                fields=['scope_kind', 'scope_id'],
                name='files_scope_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.scope_kind}:{self.scope_id}:{self.name}'


@final
class Favorite(models.Model):
    """Marker recording that an account starred a file within a scope."""

    account = models.ForeignKey(
        Account,
        on_delete=models.CASCADE,
        related_name='favorites',
    )

    scope_kind = models.CharField(
        max_length=_SCOPE_KIND_MAX_LENGTH,
        choices=ScopeKind.choices,
    )

    scope_id = models.CharField(
        max_length=_SCOPE_ID_MAX_LENGTH,
    )

    # Markers go away together with their file
    file = models.ForeignKey(
        File,
        on_delete=models.CASCADE,
        related_name='favorites',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Favorite'  # type: ignore[mutable-override]
        verbose_name_plural = 'Favorites'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['id']

        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(
                fields=['account', 'scope_kind', 'scope_id', 'file'],
                name='favorites_account_scope_file_unique',
            ),
        ]

        indexes: ClassVar[list[models.Index]] = [
            models.Index(
                fields=['account', 'scope_kind', 'scope_id'],
                name='favorites_account_scope_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.account.token_identifier}:{self.file_id}'
