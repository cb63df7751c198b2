"""Business logic for changing files.

Every mutation runs in a single transaction that covers both the access
check and the write. The check locks the caller's account row (and the
file row where one is involved), so a concurrent membership revocation
or a concurrent toggle is serialized against it.
"""

import logging
from typing import TYPE_CHECKING

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.files.storage import default_storage
from django.db import IntegrityError, transaction

from server.apps.accounts.identity import Identity
from server.apps.files.exceptions import NotAuthenticatedError
from server.apps.files.infrastructure.metadata import resolve_media_type
from server.apps.files.logic.access import (
    Scope,
    require_file_access,
    require_scope_access,
)
from server.apps.files.models import Favorite, File

if TYPE_CHECKING:
    from server.apps.files.infrastructure.storage import BlobStorage

logger = logging.getLogger(__name__)


def _get_storage() -> 'BlobStorage':
    """Get the configured default storage backend.

    Returns:
        BlobStorage instance with proper S3 configuration.
    """
    return default_storage  # type: ignore[return-value]


def _validate_blob(blob: str) -> None:
    """Check that a blob key may back a new file.

    Only keys under the prefix ``generate_upload_url`` hands out are
    accepted, and each key backs at most one file, so no caller can
    attach a file to content owned by another scope.

    Raises:
        ValidationError: If the key is blank, outside the upload prefix,
            or already used by a file.
    """
    if not blob:
        raise ValidationError('Blob reference cannot be empty')
    if not blob.startswith(f'{settings.BLOB_UPLOAD_PREFIX}/'):
        raise ValidationError(f'Blob is not an upload key: {blob}')
    if File.objects.filter(blob=blob).exists():
        logger.warning('Rejected file create for blob in use: %s', blob)
        raise ValidationError(f'Blob already in use: {blob}')


def generate_upload_url(identity: Identity | None) -> tuple[str, str]:
    """Hand out a single-use upload URL.

    Args:
        identity: Caller identity or None.

    Returns:
        Tuple of (upload URL, storage key to pass to create_file).

    Raises:
        NotAuthenticatedError: If there is no caller identity.
    """
    if identity is None:
        raise NotAuthenticatedError
    return _get_storage().generate_upload_url()


def create_file(  # noqa: WPS211
    identity: Identity | None,
    scope: Scope,
    name: str,
    blob: str,
    media_type: str,
) -> File:
    """Create a file record for an uploaded blob.

    Args:
        identity: Caller identity or None.
        scope: Scope that will own the file.
        name: Display name.
        blob: Storage key the content was uploaded to.
        media_type: Media kind or MIME content type of the upload.

    Returns:
        Created File instance.

    Raises:
        NotAuthenticatedError: If there is no caller identity.
        ForbiddenError: If the caller may not act within the scope.
        UnsupportedMediaTypeError: If the content is not an image, PDF
            or CSV.
        ValidationError: If name is blank, or blob is not an unused
            upload key.
    """
    with transaction.atomic():
        require_scope_access(identity, scope)

        resolved_media_type = resolve_media_type(media_type)
        name = name.strip()
        if not name:
            raise ValidationError('File name cannot be empty')
        _validate_blob(blob)

        try:
            file_instance = File.objects.create(
                name=name,
                blob=blob,
                media_type=resolved_media_type,
                **scope.as_filter(),
            )
        except IntegrityError as exc:
            # Lost a race with a concurrent create for the same key
            raise ValidationError(f'Blob already in use: {blob}') from exc

    logger.info(
        'File record created: %s in %s (ID: %d)',
        name,
        scope,
        file_instance.id,
    )
    return file_instance


def delete_file(identity: Identity | None, file_id: int) -> None:
    """Delete a file and its favorite markers.

    The blob is removed from storage by the post_delete signal handler
    once the transaction commits.

    Args:
        identity: Caller identity or None.
        file_id: ID of file to delete.

    Raises:
        NotAuthenticatedError: If there is no caller identity.
        FileRecordNotFoundError: If the file does not exist.
        ForbiddenError: If the caller may not act on the file.
    """
    with transaction.atomic():
        file_instance = require_file_access(identity, file_id).file
        try:
            favorites_deleted, _ = Favorite.objects.filter(
                file=file_instance,
            ).delete()
            file_instance.delete()
        except Exception:
            logger.exception('Failed to delete file from database: ID=%s', file_id)
            raise

    logger.info(
        'File deleted: ID=%s (favorite markers removed: %d)',
        file_id,
        favorites_deleted,
    )


def toggle_favorite(identity: Identity | None, file_id: int) -> bool:
    """Star or unstar a file for the caller.

    Args:
        identity: Caller identity or None.
        file_id: ID of the file.

    Returns:
        True if the file is now a favorite, False if it no longer is.

    Raises:
        NotAuthenticatedError: If there is no caller identity.
        FileRecordNotFoundError: If the file does not exist.
        ForbiddenError: If the caller may not act on the file.
    """
    with transaction.atomic():
        access = require_file_access(identity, file_id)
        file_instance = access.file
        scope = Scope.of(file_instance)

        deleted, _ = Favorite.objects.filter(
            account=access.account,
            file=file_instance,
            **scope.as_filter(),
        ).delete()

        if not deleted:
            Favorite.objects.create(
                account=access.account,
                file=file_instance,
                **scope.as_filter(),
            )

    is_favorite = not deleted
    logger.info(
        'Favorite %s: file ID=%s by %s',
        'added' if is_favorite else 'removed',
        file_id,
        access.account.token_identifier,
    )
    return is_favorite
