"""Custom storage backend for the S3-compatible blob store."""

import logging
import uuid
from typing import final, override

from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from storages.backends.s3 import S3Storage

logger = logging.getLogger(__name__)


@final
class BlobStorage(S3Storage):
    """S3 storage backend for uploaded file contents.

    Extends django-storages S3Storage with the two primitives the
    application needs from a blob store:
    - presigned single-use upload URLs for fresh storage keys
    - download URLs for existing keys
    """

    def generate_upload_url(self) -> tuple[str, str]:
        """Create a presigned PUT URL for a new storage key.

        Returns:
            Tuple of (upload URL, storage key the URL writes to).

        Raises:
            Exception: If the URL cannot be signed.
        """
        key = '{prefix}/{name}'.format(
            prefix=settings.BLOB_UPLOAD_PREFIX,
            name=uuid.uuid4().hex,
        )
        try:
            url = self.connection.meta.client.generate_presigned_url(
                'put_object',
                Params={'Bucket': self.bucket_name, 'Key': key},
                ExpiresIn=settings.BLOB_UPLOAD_URL_EXPIRY,
            )
        except Exception:
            logger.exception('Failed to sign upload URL: %s', key)
            raise

        logger.info('Generated upload URL for key: %s', key)
        return url, key

    def get_url(self, name: str) -> str | None:
        """Get download URL for a stored blob.

        Args:
            name: Storage key of the blob.

        Returns:
            Download URL, or None if the blob does not exist.
        """
        if not name or not self.exists(name):
            logger.debug('Blob not found in storage: %s', name)
            return None
        return self.url(name)

    @override
    def delete(self, name: str) -> None:
        """Delete blob from S3 with error handling and logging.

        Args:
            name: Storage key of blob to delete.

        Raises:
            Exception: If S3 delete fails.
        """
        try:
            logger.info('Deleting blob from storage: %s', name)
            super().delete(name)
            logger.info('Successfully deleted blob: %s', name)
        except (BotoCoreError, ClientError):
            logger.exception('Failed to delete blob from storage: %s', name)
            raise
