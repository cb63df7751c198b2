"""JSON API views for files app.

Views stay thin: resolve the caller identity, parse input, call the
logic layer and translate its exceptions into HTTP status codes.
"""

import json
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any, Final

from django.core.exceptions import ValidationError
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.http import (
    require_GET,
    require_http_methods,
    require_POST,
)

from server.apps.accounts.identity import current_identity
from server.apps.files.exceptions import (
    FileRecordNotFoundError,
    FilesError,
    ForbiddenError,
    NotAuthenticatedError,
    UnsupportedMediaTypeError,
)
from server.apps.files.logic.access import Scope
from server.apps.files.logic.file_mutations import (
    create_file,
    delete_file,
    generate_upload_url,
    toggle_favorite,
)
from server.apps.files.logic.file_queries import (
    get_file_url,
    list_favorites,
    list_files,
)
from server.apps.files.models import Favorite, File

_ERROR_STATUSES: Final[dict[type[FilesError], HTTPStatus]] = {
    NotAuthenticatedError: HTTPStatus.UNAUTHORIZED,
    ForbiddenError: HTTPStatus.FORBIDDEN,
    FileRecordNotFoundError: HTTPStatus.NOT_FOUND,
    UnsupportedMediaTypeError: HTTPStatus.UNSUPPORTED_MEDIA_TYPE,
}

_TRUTHY: Final = frozenset(('1', 'true', 'yes', 'on'))

_View = Callable[..., HttpResponse]


def _error(message: str, status: HTTPStatus) -> JsonResponse:
    return JsonResponse({'error': message}, status=status)


def json_errors(view: _View) -> _View:
    """Translate rejected operations into JSON error responses.

    Args:
        view: View function to wrap.

    Returns:
        Wrapped view.
    """
    @wraps(view)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        try:
            return view(request, *args, **kwargs)
        except FilesError as exc:
            return _error(str(exc), _ERROR_STATUSES[type(exc)])
        except ValidationError as exc:
            return _error(' '.join(exc.messages), HTTPStatus.BAD_REQUEST)
    return wrapper


def serialize_file(file_instance: File) -> dict[str, Any]:
    """Convert a File into its JSON representation."""
    return {
        'id': file_instance.id,
        'name': file_instance.name,
        'scope': str(Scope.of(file_instance)),
        'blob': file_instance.blob.name,
        'media_type': file_instance.media_type,
        'created_at': file_instance.created_at.isoformat(),
    }


def serialize_favorite(favorite: Favorite) -> dict[str, Any]:
    """Convert a Favorite into its JSON representation."""
    return {
        'id': favorite.id,
        'file_id': favorite.file_id,
        'scope': str(Scope.of(favorite)),
        'created_at': favorite.created_at.isoformat(),
    }


def _read_json(request: HttpRequest) -> dict[str, Any]:
    try:
        payload = json.loads(request.body or b'{}')
    except json.JSONDecodeError as exc:
        raise ValidationError('Request body must be valid JSON') from exc
    if not isinstance(payload, dict):
        raise ValidationError('Request body must be a JSON object')
    return payload


def _query_scope(request: HttpRequest) -> Scope | None:
    try:
        return Scope.parse(request.GET.get('scope', ''))
    except ValidationError:
        return None


@require_http_methods(['GET', 'POST'])
@json_errors
def files_collection(request: HttpRequest) -> HttpResponse:
    """List files of a scope (GET) or create a file (POST)."""
    identity = current_identity(request)

    if request.method == 'POST':
        payload = _read_json(request)
        file_instance = create_file(
            identity,
            Scope.parse(str(payload.get('scope', ''))),
            name=str(payload.get('name', '')),
            blob=str(payload.get('blob', '')),
            media_type=str(payload.get('media_type', '')),
        )
        return JsonResponse(
            serialize_file(file_instance),
            status=HTTPStatus.CREATED,
        )

    scope = _query_scope(request)
    if scope is None:
        return JsonResponse({'files': []})

    files = list_files(
        identity,
        scope,
        request.GET.get('query', ''),
        favorites_only=request.GET.get('favorites', '').lower() in _TRUTHY,
    )
    return JsonResponse({'files': [serialize_file(item) for item in files]})


@require_http_methods(['DELETE'])
@json_errors
def file_detail(request: HttpRequest, file_id: int) -> HttpResponse:
    """Delete a file."""
    delete_file(current_identity(request), file_id)
    return HttpResponse(status=HTTPStatus.NO_CONTENT)


@require_POST
@json_errors
def file_favorite(request: HttpRequest, file_id: int) -> HttpResponse:
    """Toggle the caller's favorite marker on a file."""
    is_favorite = toggle_favorite(current_identity(request), file_id)
    return JsonResponse({'favorite': is_favorite})


@require_GET
@json_errors
def favorites_collection(request: HttpRequest) -> HttpResponse:
    """List the caller's favorite markers within a scope."""
    scope = _query_scope(request)
    if scope is None:
        return JsonResponse({'favorites': []})

    favorites = list_favorites(current_identity(request), scope)
    return JsonResponse({
        'favorites': [serialize_favorite(item) for item in favorites],
    })


@require_POST
@json_errors
def upload_url(request: HttpRequest) -> HttpResponse:
    """Hand out a presigned upload URL and the blob key it writes to."""
    url, blob = generate_upload_url(current_identity(request))
    return JsonResponse({'upload_url': url, 'blob': blob})


@require_GET
@json_errors
def file_url(request: HttpRequest) -> HttpResponse:
    """Resolve a download URL for a blob."""
    blob = request.GET.get('blob', '')
    url = get_file_url(current_identity(request), blob)
    return JsonResponse({'url': url})
