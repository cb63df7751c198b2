"""This file contains all the settings that defines the development server.

SECURITY WARNING: don't run with debug turned on in production!
"""

from server.settings.components import config
from server.settings.components.common import SECRET_KEY

DEBUG = True

ALLOWED_HOSTS = [
    config('DOMAIN_NAME', default='localhost'),
    'localhost',
    '0.0.0.0',  # noqa: S104
    '127.0.0.1',
    'testserver',
]

# Insecure fallback so that local runs and tests work without a `.env`
SECRET_KEY = SECRET_KEY or 'development-only-insecure-secret-key'  # noqa: S105
