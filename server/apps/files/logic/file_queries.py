"""Business logic for reading files.

Reads never raise for authorization problems: a caller who may not
see a scope gets an empty result, so listing has no error path.
"""

import logging
from typing import TYPE_CHECKING

from django.core.files.storage import default_storage

from server.apps.accounts.identity import Identity
from server.apps.files.exceptions import (
    FileRecordNotFoundError,
    NotAuthenticatedError,
)
from server.apps.files.logic.access import (
    Denied,
    Scope,
    check_scope_access,
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


def list_files(
    identity: Identity | None,
    scope: Scope,
    name_filter: str | None = None,
    *,
    favorites_only: bool = False,
) -> list[File]:
    """List files of a scope visible to the caller.

    Args:
        identity: Caller identity or None.
        scope: Scope to list.
        name_filter: Keep only files whose name contains this text,
            ignoring case. Empty or None disables the filter.
        favorites_only: Keep only files the caller marked as favorite
            within this scope.

    Returns:
        Files in insertion order, or an empty list if the caller may
        not see the scope.
    """
    result = check_scope_access(identity, scope)
    if isinstance(result, Denied):
        logger.debug('Listing denied (%s) for scope %s', result.reason, scope)
        return []

    files = File.objects.filter(**scope.as_filter())

    if name_filter:
        files = files.filter(name__icontains=name_filter)

    if favorites_only:
        favorite_ids = Favorite.objects.filter(
            account=result.account,
            **scope.as_filter(),
        ).values('file_id')
        files = files.filter(id__in=favorite_ids)

    logger.debug(
        'Listing files for scope %s (query=%r, favorites_only=%s)',
        scope,
        name_filter,
        favorites_only,
    )
    return list(files)


def list_favorites(identity: Identity | None, scope: Scope) -> list[Favorite]:
    """List the caller's favorite markers within a scope.

    Args:
        identity: Caller identity or None.
        scope: Scope the markers belong to.

    Returns:
        Favorite markers, or an empty list if the caller may not see
        the scope.
    """
    result = check_scope_access(identity, scope)
    if isinstance(result, Denied):
        return []

    return list(
        Favorite.objects.filter(account=result.account, **scope.as_filter()),
    )


def get_file_url(identity: Identity | None, blob: str) -> str:
    """Resolve a download URL for a file's blob.

    The blob must belong to a file in a scope the caller may see.
    Blobs the caller may not see are reported as missing.

    Args:
        identity: Caller identity or None.
        blob: Storage key of the blob.

    Returns:
        Download URL.

    Raises:
        NotAuthenticatedError: If there is no caller identity.
        FileRecordNotFoundError: If no visible file references the blob,
            or the blob is missing from storage.
    """
    if identity is None:
        raise NotAuthenticatedError

    try:
        file_instance = File.objects.get(blob=blob)
    except File.DoesNotExist as exc:
        raise FileRecordNotFoundError(blob) from exc

    result = check_scope_access(identity, Scope.of(file_instance))
    if isinstance(result, Denied):
        logger.warning(
            'Download URL denied (%s) for blob %s',
            result.reason,
            blob,
        )
        raise FileRecordNotFoundError(blob)

    url = _get_storage().get_url(blob)
    if url is None:
        raise FileRecordNotFoundError(blob)
    return url
