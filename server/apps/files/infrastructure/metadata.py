"""Media type recognition for uploaded files."""

from typing import Final

from server.apps.files.exceptions import UnsupportedMediaTypeError
from server.apps.files.models import MediaType

_IMAGE_PREFIX: Final = 'image/'

# Exact content types accepted besides any image/*
_CONTENT_TYPES: Final[dict[str, MediaType]] = {
    'application/pdf': MediaType.PDF,
    'text/csv': MediaType.CSV,
    'application/csv': MediaType.CSV,
}


def resolve_media_type(value: str) -> MediaType:
    """Map a media kind or a MIME content type to a recognized kind.

    Accepts the kinds themselves ('image', 'pdf', 'csv') as well as
    the content type reported by the client for the uploaded file,
    e.g. 'image/png', 'application/pdf' or 'text/csv; charset=utf-8'.

    Args:
        value: Media kind or MIME content type.

    Returns:
        Recognized MediaType.

    Raises:
        UnsupportedMediaTypeError: If the value is not recognized.
    """
    normalized = value.split(';', 1)[0].strip().lower()

    if normalized in MediaType.values:
        return MediaType(normalized)

    if normalized.startswith(_IMAGE_PREFIX) and len(normalized) > len(
        _IMAGE_PREFIX,
    ):
        return MediaType.IMAGE

    media_type = _CONTENT_TYPES.get(normalized)
    if media_type is None:
        raise UnsupportedMediaTypeError(value)
    return media_type
