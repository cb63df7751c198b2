"""Caller identity resolution.

The identity provider is an external collaborator: it either yields a
verified, opaque identity for the current request or nothing. Which
provider is used is configured with the ``IDENTITY_PROVIDER`` setting.
"""

import dataclasses
import logging
from functools import cache
from typing import Protocol, final

from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.http import HttpRequest
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Identity:
    """Verified caller identity.

    Attributes:
        token_identifier: Opaque identifier unique per identity.
        subject: The identity's own id; personal scopes are keyed by it.
    """

    token_identifier: str
    subject: str


class IdentityProvider(Protocol):
    """Resolves the identity behind a request."""

    def current_identity(self, request: HttpRequest) -> Identity | None:
        """Return the verified identity or None for anonymous callers."""


@final
class DjangoUserIdentityProvider:
    """Identity provider backed by Django's authentication.

    Any authenticated request user becomes an identity whose subject is
    the user's primary key and whose token identifier is prefixed with
    the configured issuer.
    """

    def __init__(self, issuer: str | None = None) -> None:
        """Initialize the provider.

        Args:
            issuer: Token identifier prefix. Defaults to IDENTITY_ISSUER.
        """
        self._issuer = issuer or settings.IDENTITY_ISSUER

    def current_identity(self, request: HttpRequest) -> Identity | None:
        """Build identity from the authenticated request user.

        Args:
            request: Incoming HTTP request.

        Returns:
            Identity for active authenticated users, None otherwise.
        """
        user = getattr(request, 'user', None)
        if user is None or not user.is_authenticated:
            return None

        if not user.is_active:
            logger.warning('Inactive user attempted access: %s', user.pk)
            return None

        subject = str(user.pk)
        return Identity(
            token_identifier=f'{self._issuer}|{subject}',
            subject=subject,
        )


@cache
def get_identity_provider() -> IdentityProvider:
    """Load the identity provider configured in settings.

    Returns:
        Instance of the class named by IDENTITY_PROVIDER.
    """
    provider_class = import_string(settings.IDENTITY_PROVIDER)
    logger.debug('Using identity provider: %s', settings.IDENTITY_PROVIDER)
    return provider_class()


@receiver(setting_changed)
def reset_identity_provider(setting: str, **kwargs: object) -> None:
    """Drop the cached provider when identity settings are overridden.

    Args:
        setting: Name of the changed setting.
        **kwargs: Additional signal arguments.
    """
    if setting in {'IDENTITY_PROVIDER', 'IDENTITY_ISSUER'}:
        get_identity_provider.cache_clear()


def current_identity(request: HttpRequest) -> Identity | None:
    """Resolve the caller identity for a request.

    Args:
        request: Incoming HTTP request.

    Returns:
        Identity or None when the caller is not authenticated.
    """
    return get_identity_provider().current_identity(request)
