"""JSON API views for accounts app."""

from http import HTTPStatus

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.middleware.csrf import get_token
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from server.apps.accounts.identity import current_identity
from server.apps.accounts.logic.account_operations import ensure_account


@csrf_exempt
@require_POST
def session_start(request: HttpRequest) -> HttpResponse:
    """Make sure the caller has an account record.

    Clients call this once when a session starts, before issuing any
    file queries or mutations. The response carries the CSRF token the
    client must send back in the ``X-CSRFToken`` header on every later
    write. The call itself is exempt: it only ever touches the caller's
    own account and is idempotent.
    """
    identity = current_identity(request)
    if identity is None:
        return JsonResponse(
            {'error': 'You must be logged in.'},
            status=HTTPStatus.UNAUTHORIZED,
        )

    account = ensure_account(identity)
    memberships = account.memberships.all()
    return JsonResponse({
        'token_identifier': account.token_identifier,
        'subject': account.subject,
        'memberships': [
            {'org_id': membership.org_id, 'role': membership.role}
            for membership in memberships
        ],
        'csrf_token': get_token(request),
    })


def csrf_failure(request: HttpRequest, reason: str = '') -> HttpResponse:
    """Report a rejected CSRF check as JSON instead of the HTML page."""
    return JsonResponse(
        {'error': f'CSRF verification failed: {reason}'},
        status=HTTPStatus.FORBIDDEN,
    )
