"""Shared fixtures for files app tests."""

import uuid

import boto3
import pytest
from moto import mock_aws

from server.apps.accounts.identity import Identity
from server.apps.accounts.logic.account_operations import (
    add_membership,
    ensure_account,
)
from server.apps.files.logic.access import Scope
from server.apps.files.models import File, MediaType

BUCKET_NAME = 'file-drive'
ORG_ID = 'org_acme'
OTHER_ORG_ID = 'org_globex'


@pytest.fixture
def identity():
    """Identity of the test user.

    Returns:
        Identity instance.
    """
    return Identity(token_identifier='file-drive|alice', subject='alice')


@pytest.fixture
def other_identity():
    """Identity of a second user for isolation tests.

    Returns:
        Identity instance.
    """
    return Identity(token_identifier='file-drive|bob', subject='bob')


@pytest.fixture
def account(db, identity):
    """Create account for the test user, member of ORG_ID.

    Returns:
        Account instance.
    """
    created = ensure_account(identity)
    add_membership(identity.token_identifier, ORG_ID)
    return created


@pytest.fixture
def other_account(db, other_identity):
    """Create account for the second user, member of OTHER_ORG_ID.

    Returns:
        Account instance.
    """
    created = ensure_account(other_identity)
    add_membership(other_identity.token_identifier, OTHER_ORG_ID)
    return created


@pytest.fixture
def personal_scope(identity):
    """Personal scope of the test user."""
    return Scope.personal(identity.subject)


@pytest.fixture
def org_scope():
    """Scope of the organization the test user belongs to."""
    return Scope.organization(ORG_ID)


@pytest.fixture
def other_org_scope():
    """Scope of an organization the test user does not belong to."""
    return Scope.organization(OTHER_ORG_ID)


@pytest.fixture
def make_file(db):
    """Factory creating File records directly in the database.

    Returns:
        Callable taking a scope and a name. Each file gets its own blob
        key unless one is given.
    """
    def factory(scope, name='report.pdf', media_type=MediaType.PDF, blob=None):
        return File.objects.create(
            name=name,
            blob=blob or f'uploads/{uuid.uuid4().hex}',
            media_type=media_type,
            **scope.as_filter(),
        )
    return factory


@pytest.fixture
def mock_s3():
    """Mock S3 service with file-drive bucket.

    Yields:
        boto3 S3 resource with file-drive bucket created.
    """
    with mock_aws():
        # Create S3 resource
        conn = boto3.resource('s3', region_name='us-east-1')

        # Create bucket
        conn.create_bucket(Bucket=BUCKET_NAME)

        yield conn
