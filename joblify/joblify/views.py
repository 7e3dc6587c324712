import logging

from django.conf import settings
from django.db import DatabaseError, connection
from django.utils import timezone

from .errors import InternalError
from .http import api_view, fail, ok

logger = logging.getLogger(__name__)


@api_view(["GET"])
def health(request):
    return ok(
        {
            "status": "OK",
            "timestamp": timezone.now(),
            "environment": "development" if settings.DEBUG else "production",
            "service": "Joblify API",
        }
    )


@api_view(["GET"])
def db_health(request):
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as exc:
        logger.exception("Database health check failed")
        return fail("Database health check failed", status=500, error=str(exc))
    return ok({"status": "OK", "database": connection.vendor}, message="Database connection is healthy")


def route_not_found(request, exception=None):
    return fail(f"Route {request.path} not found", status=404)


def server_error(request):
    return fail(InternalError.default_message, status=500)
