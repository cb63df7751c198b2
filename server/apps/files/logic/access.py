"""Access control for scopes and files.

Every file belongs to exactly one scope: a user's personal scope or an
organization. A caller may act within a scope when it is their own
personal scope or an organization they are a member of. Access is
evaluated against the database on every call and never cached.

Checks return an explicit ``Authorized`` or ``Denied`` result. Read
paths turn ``Denied`` into empty results, write paths use the
``require_*`` helpers which raise instead.
"""

import dataclasses
import enum
import logging
from typing import Final, Self, assert_never, final

from django.core.exceptions import ValidationError

from server.apps.accounts.identity import Identity
from server.apps.accounts.logic.account_operations import get_account
from server.apps.accounts.models import Account
from server.apps.files.exceptions import (
    FileRecordNotFoundError,
    ForbiddenError,
    NotAuthenticatedError,
)
from server.apps.files.models import Favorite, File, ScopeKind

logger = logging.getLogger(__name__)

# Wire prefixes of the scope kinds, e.g. 'user:42' or 'org:acme'
_WIRE_PREFIXES: Final[dict[ScopeKind, str]] = {
    ScopeKind.PERSONAL: 'user',
    ScopeKind.ORGANIZATION: 'org',
}
_WIRE_SEPARATOR: Final = ':'


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Scope:
    """Owning boundary of a file."""

    kind: ScopeKind
    scope_id: str

    @classmethod
    def personal(cls, subject: str) -> Self:
        """Personal scope of the identity with the given subject."""
        return cls(ScopeKind.PERSONAL, subject)

    @classmethod
    def organization(cls, org_id: str) -> Self:
        """Scope of an organization."""
        return cls(ScopeKind.ORGANIZATION, org_id)

    @classmethod
    def of(cls, record: File | Favorite) -> Self:
        """Scope owning a stored record."""
        return cls(ScopeKind(record.scope_kind), record.scope_id)

    @classmethod
    def parse(cls, raw: str) -> Self:
        """Parse the wire form of a scope.

        Args:
            raw: Scope as sent by clients, 'user:<subject>' or
                'org:<org_id>'.

        Returns:
            Parsed Scope.

        Raises:
            ValidationError: If the value is not a valid scope.
        """
        prefix, separator, scope_id = raw.partition(_WIRE_SEPARATOR)
        scope_id = scope_id.strip()
        if not separator or not scope_id:
            raise ValidationError(f'Invalid scope: {raw!r}')

        for kind, wire_prefix in _WIRE_PREFIXES.items():
            if prefix == wire_prefix:
                return cls(kind, scope_id)
        raise ValidationError(f'Unknown scope kind: {prefix!r}')

    def as_filter(self) -> dict[str, str]:
        """Field lookups selecting records owned by this scope."""
        return {'scope_kind': self.kind.value, 'scope_id': self.scope_id}

    def __str__(self) -> str:
        """Wire form of the scope."""
        return f'{_WIRE_PREFIXES[self.kind]}{_WIRE_SEPARATOR}{self.scope_id}'


class DenialReason(enum.StrEnum):
    """Why access was denied."""

    UNAUTHENTICATED = 'unauthenticated'
    UNKNOWN_ACCOUNT = 'unknown_account'
    FORBIDDEN = 'forbidden'
    NOT_FOUND = 'not_found'


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Authorized:
    """Caller may act; carries what the check already loaded."""

    account: Account
    file: File | None = None


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Denied:
    """Caller may not act."""

    reason: DenialReason
    scope: Scope | None = None


type AccessResult = Authorized | Denied


def has_scope_access(account: Account, scope: Scope) -> bool:
    """Decide whether an account may act within a scope.

    Args:
        account: Resolved caller account.
        scope: Target scope.

    Returns:
        True if the scope is the account's personal scope or an
        organization the account is a member of.
    """
    if scope.kind is ScopeKind.PERSONAL:
        return scope.scope_id == account.subject
    if scope.kind is ScopeKind.ORGANIZATION:
        return account.memberships.filter(org_id=scope.scope_id).exists()
    assert_never(scope.kind)


def check_scope_access(
    identity: Identity | None,
    scope: Scope,
    *,
    for_update: bool = False,
) -> AccessResult:
    """Check whether the caller may act within a scope.

    Never raises for missing identity or account; those are denials.

    Args:
        identity: Caller identity or None.
        scope: Target scope.
        for_update: Lock the caller's account row for the rest of the
            surrounding transaction.

    Returns:
        Authorized with the account, or Denied with the reason.
    """
    if identity is None:
        return Denied(DenialReason.UNAUTHENTICATED, scope)

    account = get_account(identity, for_update=for_update)
    if account is None:
        return Denied(DenialReason.UNKNOWN_ACCOUNT, scope)

    if not has_scope_access(account, scope):
        logger.debug(
            'Scope access denied: %s -> %s',
            identity.token_identifier,
            scope,
        )
        return Denied(DenialReason.FORBIDDEN, scope)

    return Authorized(account)


def check_file_access(
    identity: Identity | None,
    file_id: int,
    *,
    for_update: bool = False,
) -> AccessResult:
    """Resolve a file and check access to its owning scope.

    Args:
        identity: Caller identity or None.
        file_id: ID of the file.
        for_update: Lock the file and account rows for the rest of the
            surrounding transaction.

    Returns:
        Authorized with account and file, or Denied with the reason.
    """
    if identity is None:
        return Denied(DenialReason.UNAUTHENTICATED)

    queryset = File.objects.all()
    if for_update:
        queryset = queryset.select_for_update()

    try:
        file_instance = queryset.get(id=file_id)
    except File.DoesNotExist:
        logger.debug('File not found for access check: ID=%s', file_id)
        return Denied(DenialReason.NOT_FOUND)

    result = check_scope_access(
        identity,
        Scope.of(file_instance),
        for_update=for_update,
    )
    if isinstance(result, Denied):
        return result
    return Authorized(result.account, file_instance)


def _denial_error(denied: Denied, reference: object) -> Exception:
    if denied.reason is DenialReason.UNAUTHENTICATED:
        return NotAuthenticatedError()
    if denied.reason is DenialReason.NOT_FOUND:
        return FileRecordNotFoundError(reference)
    # Callers without an account record are treated like outsiders
    return ForbiddenError(str(denied.scope or reference))


def require_scope_access(identity: Identity | None, scope: Scope) -> Authorized:
    """Check scope access for a write, raising on denial.

    Must be called inside ``transaction.atomic()``.

    Args:
        identity: Caller identity or None.
        scope: Target scope.

    Returns:
        Authorized result.

    Raises:
        NotAuthenticatedError: If there is no caller identity.
        ForbiddenError: If the caller may not act within the scope.
    """
    result = check_scope_access(identity, scope, for_update=True)
    if isinstance(result, Denied):
        logger.warning('Write rejected (%s) for scope %s', result.reason, scope)
        raise _denial_error(result, scope)
    return result


def require_file_access(identity: Identity | None, file_id: int) -> Authorized:
    """Check file access for a write, raising on denial.

    Must be called inside ``transaction.atomic()``.

    Args:
        identity: Caller identity or None.
        file_id: ID of the file.

    Returns:
        Authorized result carrying the file.

    Raises:
        NotAuthenticatedError: If there is no caller identity.
        FileRecordNotFoundError: If the file does not exist.
        ForbiddenError: If the caller may not act on the file.
    """
    result = check_file_access(identity, file_id, for_update=True)
    if isinstance(result, Denied):
        logger.warning(
            'Write rejected (%s) for file ID=%s',
            result.reason,
            file_id,
        )
        raise _denial_error(result, file_id)
    return result
