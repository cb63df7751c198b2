"""Management command to grant or revoke organization memberships."""

from typing import Any, final, override

from django.core.management.base import BaseCommand, CommandError

from server.apps.accounts.logic.account_operations import (
    add_membership,
    remove_membership,
)
from server.apps.accounts.models import Account, Membership


@final
class Command(BaseCommand):
    """Sync organization memberships from the identity provider."""

    help = 'Grant or revoke an organization membership for an account'

    @override
    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            'action',
            choices=['grant', 'revoke'],
            help='Whether to add or remove the membership',
        )
        parser.add_argument(
            'token_identifier',
            help='Token identifier of the account',
        )
        parser.add_argument('org_id', help='Organization id')
        parser.add_argument(
            '--role',
            choices=Membership.Role.values,
            default=Membership.Role.MEMBER,
            help='Role for granted memberships (default: member)',
        )

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        token_identifier = options['token_identifier']
        org_id = options['org_id']

        if options['action'] == 'grant':
            try:
                membership = add_membership(
                    token_identifier,
                    org_id,
                    role=options['role'],
                )
            except Account.DoesNotExist as exc:
                raise CommandError(
                    f'No account for token identifier {token_identifier}',
                ) from exc
            self.stdout.write(
                self.style.SUCCESS(f'Granted membership: {membership}'),
            )
            return

        if remove_membership(token_identifier, org_id):
            self.stdout.write(
                self.style.SUCCESS(
                    f'Revoked membership of {token_identifier} in {org_id}',
                ),
            )
        else:
            self.stdout.write(
                self.style.WARNING(
                    f'No membership of {token_identifier} in {org_id}',
                ),
            )
