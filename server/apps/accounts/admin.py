"""Django admin configuration for accounts app."""

from typing import override

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.accounts.models import Account, Membership


class MembershipInline(admin.TabularInline):
    """Inline editor for an account's memberships."""

    model = Membership
    extra = 0
    fields = ['org_id', 'role', 'created_at']
    readonly_fields = ['created_at']


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin[Account]):
    """Admin interface for Account model."""

    list_display = [
        'token_identifier',
        'subject',
        'membership_count',
        'created_at',
    ]

    search_fields = [
        'token_identifier',
        'subject',
        'memberships__org_id',
    ]

    readonly_fields = [
        'token_identifier',
        'subject',
        'created_at',
    ]

    inlines = [MembershipInline]

    def membership_count(self, obj: Account) -> int:
        """Count of organizations the account belongs to.

        Args:
            obj: Account instance.

        Returns:
            Number of memberships.
        """
        return obj.memberships.count()
    membership_count.short_description = 'Organizations'  # type: ignore[attr-defined]


@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin[Membership]):
    """Admin interface for Membership model."""

    list_display = [
        'account',
        'org_id',
        'role',
        'created_at',
    ]

    list_filter = [
        'role',
        'org_id',
    ]

    search_fields = [
        'org_id',
        'account__token_identifier',
    ]

    @override
    def get_queryset(self, request: HttpRequest) -> QuerySet[Membership]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('account')
