"""Tests for the files JSON API."""

from http import HTTPStatus

import pytest
from django.test import Client

from server.apps.accounts.logic.account_operations import add_membership
from server.apps.files.logic.access import Scope
from server.apps.files.models import Favorite, File
from tests.test_apps.test_files.conftest import ORG_ID, OTHER_ORG_ID

_JSON = 'application/json'


@pytest.fixture
def api_user(db, django_user_model):
    """Django user backing the API caller."""
    return django_user_model.objects.create_user(
        username='alice',
        password='secret-password',
    )


@pytest.fixture
def api_client(client, api_user):
    """Logged in client whose session has been started.

    Returns:
        Django test client.
    """
    client.force_login(api_user)
    response = client.post('/api/session/')
    assert response.status_code == HTTPStatus.OK
    add_membership(response.json()['token_identifier'], ORG_ID)
    return client


@pytest.fixture
def user_scope(api_user):
    """Personal scope of the API caller."""
    return Scope.personal(str(api_user.pk))


@pytest.mark.django_db
def test_create_and_list(api_client, user_scope):
    """Test a created file shows up in the scope listing."""
    response = api_client.post(
        '/api/files/',
        {
            'scope': str(user_scope),
            'name': 'scan.jpg',
            'blob': 'uploads/scan',
            'media_type': 'image/jpeg',
        },
        content_type=_JSON,
    )

    assert response.status_code == HTTPStatus.CREATED
    created = response.json()
    assert created['name'] == 'scan.jpg'
    assert created['media_type'] == 'image'
    assert created['scope'] == str(user_scope)

    listing = api_client.get('/api/files/', {'scope': str(user_scope)})

    assert listing.status_code == HTTPStatus.OK
    assert [item['id'] for item in listing.json()['files']] == [created['id']]


@pytest.mark.django_db
def test_list_with_query(api_client, make_file):
    """Test the query parameter filters by name."""
    scope = Scope.organization(ORG_ID)
    make_file(scope, name='Report.csv')
    make_file(scope, name='REPORT_old.pdf')
    make_file(scope, name='invoice.png')

    response = api_client.get(
        '/api/files/',
        {'scope': str(scope), 'query': 'rep'},
    )

    names = [item['name'] for item in response.json()['files']]
    assert names == ['Report.csv', 'REPORT_old.pdf']


@pytest.mark.django_db
@pytest.mark.parametrize('scope', ['', 'bogus', f'org:{OTHER_ORG_ID}'])
def test_list_invalid_or_foreign_scope_is_empty(api_client, make_file, scope):
    """Test listing never errors, it just returns nothing."""
    make_file(Scope.organization(OTHER_ORG_ID))

    response = api_client.get('/api/files/', {'scope': scope})

    assert response.status_code == HTTPStatus.OK
    assert response.json() == {'files': []}


@pytest.mark.django_db
def test_list_anonymous_is_empty(client, make_file):
    """Test anonymous listing returns an empty result."""
    make_file(Scope.organization(ORG_ID))

    response = client.get('/api/files/', {'scope': f'org:{ORG_ID}'})

    assert response.status_code == HTTPStatus.OK
    assert response.json() == {'files': []}


@pytest.mark.django_db
def test_create_anonymous(client):
    """Test anonymous create is rejected with 401."""
    response = client.post(
        '/api/files/',
        {'scope': 'user:1', 'name': 'a.pdf', 'blob': 'b', 'media_type': 'pdf'},
        content_type=_JSON,
    )

    assert response.status_code == HTTPStatus.UNAUTHORIZED
    assert 'error' in response.json()


@pytest.mark.django_db
def test_create_forbidden(api_client):
    """Test create in a foreign organization is rejected with 403."""
    response = api_client.post(
        '/api/files/',
        {
            'scope': f'org:{OTHER_ORG_ID}',
            'name': 'a.pdf',
            'blob': 'uploads/a',
            'media_type': 'pdf',
        },
        content_type=_JSON,
    )

    assert response.status_code == HTTPStatus.FORBIDDEN
    assert File.objects.count() == 0


@pytest.mark.django_db
def test_create_unsupported_media_type(api_client, user_scope):
    """Test unsupported content is rejected with 415."""
    response = api_client.post(
        '/api/files/',
        {
            'scope': str(user_scope),
            'name': 'notes.txt',
            'blob': 'uploads/notes',
            'media_type': 'text/plain',
        },
        content_type=_JSON,
    )

    assert response.status_code == HTTPStatus.UNSUPPORTED_MEDIA_TYPE
    assert File.objects.count() == 0


@pytest.mark.django_db
@pytest.mark.parametrize('body', [
    b'not json',
    b'[1, 2]',
    b'{"scope": "nope", "name": "a", "blob": "b", "media_type": "pdf"}',
])
def test_create_bad_request(api_client, body):
    """Test malformed input is rejected with 400."""
    response = api_client.post('/api/files/', body, content_type=_JSON)

    assert response.status_code == HTTPStatus.BAD_REQUEST


@pytest.mark.django_db
def test_delete(api_client, user_scope, make_file):
    """Test deleting an own file."""
    file_instance = make_file(user_scope)

    response = api_client.delete(f'/api/files/{file_instance.id}/')

    assert response.status_code == HTTPStatus.NO_CONTENT
    assert not File.objects.filter(id=file_instance.id).exists()


@pytest.mark.django_db
def test_delete_foreign(api_client, make_file):
    """Test deleting another organization's file is rejected."""
    file_instance = make_file(Scope.organization(OTHER_ORG_ID))

    response = api_client.delete(f'/api/files/{file_instance.id}/')

    assert response.status_code == HTTPStatus.FORBIDDEN
    assert File.objects.filter(id=file_instance.id).exists()


@pytest.mark.django_db
def test_delete_missing(api_client):
    """Test deleting a missing file yields 404."""
    response = api_client.delete('/api/files/99999/')

    assert response.status_code == HTTPStatus.NOT_FOUND


@pytest.mark.django_db
def test_toggle_favorite_and_list(api_client, make_file):
    """Test favorite toggling and the favorites listings."""
    scope = Scope.organization(ORG_ID)
    file_instance = make_file(scope)
    make_file(scope, name='other.pdf')

    response = api_client.post(f'/api/files/{file_instance.id}/favorite/')
    assert response.json() == {'favorite': True}

    favorites = api_client.get('/api/favorites/', {'scope': str(scope)})
    assert [item['file_id'] for item in favorites.json()['favorites']] == [
        file_instance.id,
    ]

    starred = api_client.get(
        '/api/files/',
        {'scope': str(scope), 'favorites': 'true'},
    )
    assert [item['id'] for item in starred.json()['files']] == [
        file_instance.id,
    ]

    response = api_client.post(f'/api/files/{file_instance.id}/favorite/')
    assert response.json() == {'favorite': False}
    assert Favorite.objects.count() == 0


@pytest.mark.django_db
def test_favorites_invalid_scope_is_empty(api_client):
    """Test favorites listing with invalid scope returns nothing."""
    response = api_client.get('/api/favorites/', {'scope': 'x'})

    assert response.status_code == HTTPStatus.OK
    assert response.json() == {'favorites': []}


@pytest.mark.django_db
def test_upload_url(api_client, mock_s3):
    """Test upload URL endpoint returns URL and blob key."""
    response = api_client.post('/api/files/upload-url/')

    assert response.status_code == HTTPStatus.OK
    payload = response.json()
    assert payload['blob'].startswith('uploads/')
    assert payload['blob'] in payload['upload_url']


@pytest.mark.django_db
def test_upload_url_anonymous(client):
    """Test anonymous callers get no upload URL."""
    response = client.post('/api/files/upload-url/')

    assert response.status_code == HTTPStatus.UNAUTHORIZED


@pytest.mark.django_db
def test_file_url(api_client, user_scope, make_file, mock_s3):
    """Test download URL endpoint."""
    mock_s3.Object('file-drive', 'uploads/mine').put(Body=b'data')
    make_file(user_scope, blob='uploads/mine')

    response = api_client.get('/api/files/url/', {'blob': 'uploads/mine'})

    assert response.status_code == HTTPStatus.OK
    assert 'uploads/mine' in response.json()['url']


@pytest.mark.django_db
def test_file_url_foreign(api_client, make_file, mock_s3):
    """Test download URL of a foreign blob yields 404."""
    mock_s3.Object('file-drive', 'uploads/theirs').put(Body=b'data')
    make_file(Scope.organization(OTHER_ORG_ID), blob='uploads/theirs')

    response = api_client.get('/api/files/url/', {'blob': 'uploads/theirs'})

    assert response.status_code == HTTPStatus.NOT_FOUND


@pytest.mark.django_db
def test_method_not_allowed(api_client):
    """Test unsupported methods are rejected."""
    response = api_client.put('/api/files/')

    assert response.status_code == HTTPStatus.METHOD_NOT_ALLOWED


@pytest.mark.django_db
def test_create_with_blob_in_use(api_client, make_file):
    """Test a blob backing another scope's file cannot be reused."""
    make_file(Scope.organization(OTHER_ORG_ID), blob='uploads/taken')

    response = api_client.post(
        '/api/files/',
        {
            'scope': str(Scope.organization(ORG_ID)),
            'name': 'copy.pdf',
            'blob': 'uploads/taken',
            'media_type': 'pdf',
        },
        content_type=_JSON,
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert File.objects.count() == 1


@pytest.fixture
def csrf_client(api_user):
    """Logged in client that enforces CSRF checks like a browser would."""
    browser = Client(enforce_csrf_checks=True)
    browser.force_login(api_user)
    return browser


@pytest.mark.django_db
def test_session_start_issues_csrf_token(csrf_client):
    """Test session start works without a token and hands one out."""
    response = csrf_client.post('/api/session/')

    assert response.status_code == HTTPStatus.OK
    assert response.json()['csrf_token']


@pytest.mark.django_db
def test_write_without_csrf_token(csrf_client, mock_s3):
    """Test a write lacking the token is rejected with a JSON error."""
    csrf_client.post('/api/session/')

    response = csrf_client.post('/api/files/upload-url/')

    assert response.status_code == HTTPStatus.FORBIDDEN
    assert response['Content-Type'] == _JSON
    assert 'CSRF' in response.json()['error']


@pytest.mark.django_db
def test_writes_with_csrf_token(csrf_client, api_user, mock_s3):
    """Test the token from session start authorizes later writes."""
    token = csrf_client.post('/api/session/').json()['csrf_token']
    user_scope = Scope.personal(str(api_user.pk))

    upload = csrf_client.post(
        '/api/files/upload-url/',
        HTTP_X_CSRFTOKEN=token,
    )
    assert upload.status_code == HTTPStatus.OK

    created = csrf_client.post(
        '/api/files/',
        {
            'scope': str(user_scope),
            'name': 'scan.png',
            'blob': upload.json()['blob'],
            'media_type': 'image/png',
        },
        content_type=_JSON,
        HTTP_X_CSRFTOKEN=token,
    )
    assert created.status_code == HTTPStatus.CREATED

    file_id = created.json()['id']
    favorite = csrf_client.post(
        f'/api/files/{file_id}/favorite/',
        HTTP_X_CSRFTOKEN=token,
    )
    assert favorite.json() == {'favorite': True}

    deleted = csrf_client.delete(
        f'/api/files/{file_id}/',
        HTTP_X_CSRFTOKEN=token,
    )
    assert deleted.status_code == HTTPStatus.NO_CONTENT
    assert File.objects.count() == 0


@pytest.mark.django_db
def test_reads_need_no_csrf_token(csrf_client):
    """Test safe methods pass without a token."""
    csrf_client.post('/api/session/')

    response = csrf_client.get('/api/files/', {'scope': 'org:org_acme'})

    assert response.status_code == HTTPStatus.OK
