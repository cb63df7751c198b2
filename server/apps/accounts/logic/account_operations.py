"""Business logic for account and membership operations."""

import logging

from django.db import transaction

from server.apps.accounts.identity import Identity
from server.apps.accounts.models import Account, Membership

logger = logging.getLogger(__name__)


def ensure_account(identity: Identity) -> Account:
    """Get or create the account for an identity.

    Idempotent: calling it again for the same identity returns the
    existing record. Meant to run once at session start.

    Args:
        identity: Verified caller identity.

    Returns:
        Account instance for the identity.
    """
    account, created = Account.objects.get_or_create(
        token_identifier=identity.token_identifier,
        defaults={'subject': identity.subject},
    )
    if created:
        logger.info(
            'Created account for identity %s (ID: %d)',
            identity.token_identifier,
            account.id,
        )
    return account


def get_account(
    identity: Identity | None,
    *,
    for_update: bool = False,
) -> Account | None:
    """Find the account for an identity.

    Args:
        identity: Verified caller identity or None.
        for_update: Lock the account row until the transaction ends.
            Must be called inside ``transaction.atomic()``.

    Returns:
        Account instance or None if there is no identity or no record.
    """
    if identity is None:
        return None

    queryset = Account.objects.all()
    if for_update:
        queryset = queryset.select_for_update()

    try:
        return queryset.get(token_identifier=identity.token_identifier)
    except Account.DoesNotExist:
        logger.debug(
            'No account for identity: %s',
            identity.token_identifier,
        )
        return None


def add_membership(
    token_identifier: str,
    org_id: str,
    role: str = Membership.Role.MEMBER,
) -> Membership:
    """Add an organization membership to an account.

    Adding an existing membership updates its role.

    Args:
        token_identifier: Account's token identifier.
        org_id: Organization id.
        role: Membership role.

    Returns:
        Membership instance.

    Raises:
        Account.DoesNotExist: If no account has the token identifier.
    """
    with transaction.atomic():
        account = Account.objects.select_for_update().get(
            token_identifier=token_identifier,
        )
        membership, created = Membership.objects.update_or_create(
            account=account,
            org_id=org_id,
            defaults={'role': role},
        )

    logger.info(
        '%s membership for %s in org %s (role: %s)',
        'Added' if created else 'Updated',
        token_identifier,
        org_id,
        role,
    )
    return membership


def remove_membership(token_identifier: str, org_id: str) -> bool:
    """Remove an organization membership from an account.

    The account row is locked so removal serializes with in-flight
    mutations that checked access against it.

    Args:
        token_identifier: Account's token identifier.
        org_id: Organization id.

    Returns:
        True if a membership was removed, False otherwise.
    """
    with transaction.atomic():
        try:
            account = Account.objects.select_for_update().get(
                token_identifier=token_identifier,
            )
        except Account.DoesNotExist:
            logger.warning(
                'Cannot remove membership, no account: %s',
                token_identifier,
            )
            return False

        deleted, _ = Membership.objects.filter(
            account=account,
            org_id=org_id,
        ).delete()

    if deleted:
        logger.info(
            'Removed membership for %s in org %s',
            token_identifier,
            org_id,
        )
    return deleted > 0
