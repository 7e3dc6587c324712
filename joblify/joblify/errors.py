"""Error taxonomy shared by every workflow service.

Services raise these; ``joblify.http.api_view`` turns them into the JSON
envelope with the matching status code.
"""

from __future__ import annotations

from typing import Any


class JoblifyError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, *, errors: Any = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(JoblifyError):
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(JoblifyError):
    status_code = 401
    default_message = "Not authenticated"


class AuthorizationError(JoblifyError):
    status_code = 403
    default_message = "Access denied"


class NotFoundError(JoblifyError):
    status_code = 404
    default_message = "Not found"


class ConflictError(JoblifyError):
    # Duplicates are reported as bad requests, like other input problems.
    status_code = 400
    default_message = "Already exists"


class InternalError(JoblifyError):
    status_code = 500
