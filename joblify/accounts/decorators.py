from dataclasses import dataclass
from functools import wraps

from django.contrib.auth import logout

from joblify.errors import AuthenticationError, AuthorizationError
from .models import LoginSession, User


@dataclass(frozen=True)
class Actor:
    """Who is calling a workflow operation, resolved once per request."""

    user: User

    @property
    def id(self) -> int:
        return self.user.pk

    @property
    def role(self) -> str:
        return self.user.role

    @property
    def is_company(self) -> bool:
        return self.user.is_company

    @property
    def is_job_seeker(self) -> bool:
        return self.user.is_job_seeker


def _resolve_actor(request) -> Actor:
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        raise AuthenticationError("Not authenticated")

    # Sessions revoked by "sign out all devices" stop working here.
    login_session_id = request.session.get("login_session_id")
    if login_session_id and not LoginSession.objects.filter(pk=login_session_id, is_active=True).exists():
        logout(request)
        raise AuthenticationError("Session has been signed out")
    return Actor(user=user)


def login_required(view_func):
    """Resolve the session into an ``Actor`` passed as the view's second argument."""
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        return view_func(request, _resolve_actor(request), *args, **kwargs)
    return _wrapped


def role_required(role: str, message: str = "Access denied"):
    """Ensure logged-in user has the given role."""
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            actor = _resolve_actor(request)
            if actor.role != role:
                raise AuthorizationError(message)
            return view_func(request, actor, *args, **kwargs)
        return _wrapped
    return decorator


company_required = role_required(User.Role.COMPANY, "Only companies can perform this action")
jobseeker_required = role_required(User.Role.JOB_SEEKER, "Only job seekers can perform this action")


def ensure_role(actor: Actor, role: str, message: str) -> None:
    """Service-level guard for callers that bypass the view decorators."""
    if actor.role != role:
        raise AuthorizationError(message)
