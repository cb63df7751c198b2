"""Identity provider settings."""

from server.settings.components import config

# Dotted path to the class resolving the caller's identity from a request
IDENTITY_PROVIDER = config(
    'IDENTITY_PROVIDER',
    default='server.apps.accounts.identity.DjangoUserIdentityProvider',
)

# Issuer prefix used to build opaque token identifiers
IDENTITY_ISSUER = config('IDENTITY_ISSUER', default='file-drive')
