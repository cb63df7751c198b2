"""Database models for accounts app."""

from typing import ClassVar, Final, final, override

from django.db import models

# Constants for field max lengths
_TOKEN_IDENTIFIER_MAX_LENGTH: Final = 255
_SUBJECT_MAX_LENGTH: Final = 255
_ORG_ID_MAX_LENGTH: Final = 255
_ROLE_MAX_LENGTH: Final = 16


@final
class Account(models.Model):
    """Persisted record of an external identity.

    One account exists per distinct token identifier handed out by the
    identity provider. The ``subject`` is the identity's own id and is
    what personal scopes are keyed by.
    """

    token_identifier = models.CharField(
        max_length=_TOKEN_IDENTIFIER_MAX_LENGTH,
        unique=True,
        help_text='Opaque verified identifier from the identity provider',
    )

    subject = models.CharField(
        max_length=_SUBJECT_MAX_LENGTH,
        db_index=True,
        help_text='Identity subject, used as the personal scope id',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Account'  # type: ignore[mutable-override]
        verbose_name_plural = 'Accounts'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['id']

    @override
    def __str__(self) -> str:
        """String representation."""
        return self.token_identifier


@final
class Membership(models.Model):
    """Membership of an account in an organization."""

    class Role(models.TextChoices):
        """Role of the member inside the organization."""

        ADMIN = 'admin', 'Admin'
        MEMBER = 'member', 'Member'

    account = models.ForeignKey(
        Account,
        on_delete=models.CASCADE,
        related_name='memberships',
    )

    org_id = models.CharField(
        max_length=_ORG_ID_MAX_LENGTH,
        help_text='Organization id from the identity provider',
    )

    role = models.CharField(
        max_length=_ROLE_MAX_LENGTH,
        choices=Role.choices,
        default=Role.MEMBER,
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Membership'  # type: ignore[mutable-override]
        verbose_name_plural = 'Memberships'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['id']

        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(
                fields=['account', 'org_id'],
                name='memberships_account_org_unique',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.account.token_identifier}@{self.org_id} ({self.role})'
