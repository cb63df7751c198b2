"""Shared fixtures for accounts app tests."""

import pytest

from server.apps.accounts.identity import Identity
from server.apps.accounts.logic.account_operations import ensure_account


@pytest.fixture
def identity():
    """Identity of the test user."""
    return Identity(token_identifier='file-drive|alice', subject='alice')


@pytest.fixture
def account(db, identity):
    """Account of the test user without memberships.

    Returns:
        Account instance.
    """
    return ensure_account(identity)
