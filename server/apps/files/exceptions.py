"""Exceptions for files app.

Write operations raise these; read operations never do and return
empty results instead.
"""


class FilesError(Exception):
    """Base class for rejected file operations."""


class NotAuthenticatedError(FilesError):
    """Raised when an operation requires a caller identity and has none."""

    def __init__(self) -> None:
        """Initialize NotAuthenticatedError."""
        super().__init__('You must be logged in.')


class ForbiddenError(FilesError):
    """Raised when the caller may not act within the target scope."""

    def __init__(self, scope: str) -> None:
        """Initialize ForbiddenError.

        Args:
            scope: Wire form of the scope access was denied to.
        """
        self.scope = scope
        super().__init__(f'You do not have access to scope {scope}.')


class FileRecordNotFoundError(FilesError):
    """Raised when a referenced file or blob does not exist."""

    def __init__(self, reference: object) -> None:
        """Initialize FileRecordNotFoundError.

        Args:
            reference: File id or blob key that could not be resolved.
        """
        self.reference = reference
        super().__init__(f'File not found: {reference}')


class UnsupportedMediaTypeError(FilesError):
    """Raised when uploaded content is not an image, PDF or CSV."""

    def __init__(self, media_type: str) -> None:
        """Initialize UnsupportedMediaTypeError.

        Args:
            media_type: The rejected media type or content type.
        """
        self.media_type = media_type
        super().__init__(f'Unsupported media type: {media_type!r}')
