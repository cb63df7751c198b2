"""Django storage configuration for the blob store.

Uploaded file contents live in S3-compatible object storage:
- MinIO for local development
- Any S3 provider in production

Clients never stream bytes through the API: they upload to a presigned
URL and read through presigned download URLs.
"""

from typing import Any, Final

from server.settings.components import config

STORAGES: Final[dict[str, dict[str, Any]]] = {
    'default': {
        'BACKEND': 'server.apps.files.infrastructure.storage.BlobStorage',
        'OPTIONS': {
            'bucket_name': config(
                'AWS_STORAGE_BUCKET_NAME',
                default='file-drive',
            ),
            'access_key': config('AWS_ACCESS_KEY_ID', default='minioadmin'),
            'secret_key': config(
                'AWS_SECRET_ACCESS_KEY',
                default='minioadmin',
            ),
            'endpoint_url': config(
                'AWS_S3_ENDPOINT_URL',
                default=None,
            ),
            'region_name': config(
                'AWS_S3_REGION_NAME',
                default='us-east-1',
            ),
            'file_overwrite': False,  # Prevent accidental overwrites
            'default_acl': None,  # Inherit bucket ACL
            'querystring_auth': True,  # Download URLs are presigned
            'querystring_expire': config(
                'AWS_QUERYSTRING_EXPIRE',
                cast=int,
                default=3600,
            ),
        },
    },
    'staticfiles': {
        # Keep static files separate from user files
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

# Lifetime of presigned upload URLs in seconds
BLOB_UPLOAD_URL_EXPIRY = config('BLOB_UPLOAD_URL_EXPIRY', cast=int, default=300)

# Prefix for storage keys handed out with upload URLs
BLOB_UPLOAD_PREFIX = config('BLOB_UPLOAD_PREFIX', default='uploads')
