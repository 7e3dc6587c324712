"""JSON plumbing for the API views: envelope, body parsing, pagination."""

from __future__ import annotations

import json
import logging
import math
from functools import wraps

from django.conf import settings
from django.core.paginator import EmptyPage, Paginator
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt

from .errors import InternalError, JoblifyError, ValidationError

logger = logging.getLogger(__name__)


def ok(payload: dict | None = None, *, message: str | None = None, status: int = 200) -> JsonResponse:
    body = {"success": True}
    if message:
        body["message"] = message
    body.update(payload or {})
    return JsonResponse(body, status=status)


def fail(message: str, *, status: int, error=None) -> JsonResponse:
    body = {"success": False, "message": message}
    if error is not None and settings.DEBUG:
        body["error"] = error
    return JsonResponse(body, status=status)


def api_view(methods):
    """Route allowed methods to the view and convert errors to the envelope.

    This is the single place where workflow exceptions leave the service
    layer; anything that is not a ``JoblifyError`` is logged and reported as
    a 500 with the detail hidden outside DEBUG.
    """
    allowed = {m.upper() for m in methods}

    def decorator(view_func):
        @csrf_exempt
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            if request.method not in allowed:
                response = fail(f"Method {request.method} not allowed", status=405)
                response["Allow"] = ", ".join(sorted(allowed))
                return response
            try:
                return view_func(request, *args, **kwargs)
            except JoblifyError as exc:
                if exc.status_code >= 500:
                    logger.error("Request failed: path=%s error=%s", request.path, exc.message)
                return fail(exc.message, status=exc.status_code, error=exc.errors)
            except Exception as exc:
                logger.exception("Unhandled error: method=%s path=%s", request.method, request.path)
                return fail(InternalError.default_message, status=500, error=str(exc))

        return _wrapped

    return decorator


def parse_body(request) -> dict:
    """Return the request payload as a dict (JSON or form-encoded)."""
    content_type = (request.content_type or "").lower()
    if content_type == "application/json":
        raw = request.body or b""
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            raise ValidationError("Request body must be valid JSON")
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data
    if request.method == "POST":
        return request.POST.dict()
    return {}


def first_form_error(form) -> str:
    for field, errors in form.errors.items():
        if errors:
            return str(errors[0])
    return "Invalid request"


def raise_for_form(form) -> None:
    if not form.is_valid():
        raise ValidationError(first_form_error(form), errors=form.errors.get_json_data())


def _safe_int(v):
    try:
        if v is None or v == "":
            return None
        return int(v)
    except (TypeError, ValueError):
        return None


def paginate(request, queryset):
    """Slice ``queryset`` by the ``page``/``limit`` query parameters.

    Returns ``(items, pagination)``. A page past the end is an empty list, not
    an error.
    """
    conf = settings.JOBLIFY
    page = _safe_int(request.GET.get("page")) or 1
    limit = _safe_int(request.GET.get("limit")) or conf["DEFAULT_PAGE_SIZE"]
    page = max(1, page)
    limit = max(1, min(limit, conf["MAX_PAGE_SIZE"]))

    paginator = Paginator(queryset, limit)
    try:
        items = list(paginator.page(page).object_list)
    except EmptyPage:
        items = []
    total = paginator.count
    return items, {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": math.ceil(total / limit),
    }
