import logging

from django.contrib.auth import authenticate, login, logout
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_ipv46_address
from django.db import IntegrityError, transaction
from django.db.models import Count, Q

from joblify.errors import AuthenticationError, ConflictError, NotFoundError
from .decorators import Actor, ensure_role
from .models import CompanyProfile, JobSeekerProfile, LoginSession, ProfileType, User

logger = logging.getLogger(__name__)

REDIRECTS = {
    User.Role.JOB_SEEKER: "/jobseeker/dashboard",
    User.Role.COMPANY: "/company/dashboard",
}


def _ensure_unique_contact(email: str, phone: str, *, email_message: str) -> None:
    if User.objects.filter(email__iexact=email).exists():
        raise ConflictError(email_message)
    if User.objects.filter(phone=phone).exists():
        raise ConflictError("User with this phone number already exists")


def _conflict_from_integrity(exc: IntegrityError, email_message: str) -> ConflictError:
    # A concurrent registration won the race between the check and the insert.
    text = str(exc).lower()
    if "phone" in text:
        return ConflictError("User with this phone number already exists")
    return ConflictError(email_message)


# -----------------------------
# Registration
# -----------------------------
def register_job_seeker(data: dict) -> User:
    """Create a job seeker account and its default EMPLOYABLE profile.

    ``data`` is the cleaned ``JobSeekerRegistrationForm`` payload.
    """
    email = data["email"]
    phone = data["phoneNumber"]
    email_message = "User with this email already exists"
    _ensure_unique_contact(email, phone, email_message=email_message)

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=email,
                email=email,
                password=data["password"],
                first_name=data["firstName"].strip(),
                last_name=data["lastName"].strip(),
                phone=phone,
                role=User.Role.JOB_SEEKER,
            )
            JobSeekerProfile.objects.create(user=user, profile_type=ProfileType.EMPLOYABLE)
    except IntegrityError as exc:
        raise _conflict_from_integrity(exc, email_message)

    logger.info("JobSeeker registered: user_id=%s email=%s", user.pk, email)
    return user


def register_company(data: dict) -> User:
    email = data["email"]
    phone = data["phone"]
    email_message = "Company with this email already exists"
    _ensure_unique_contact(email, phone, email_message=email_message)

    company_name = data["companyName"].strip()
    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=email,
                email=email,
                password=data["password"],
                phone=phone,
                company_name=company_name,
                role=User.Role.COMPANY,
            )
            CompanyProfile.objects.create(
                user=user,
                company_name=company_name,
                industry=data["industry"].strip(),
                company_size=data["companySize"].strip(),
                establishment_year=data["establishmentYear"],
                description=data["description"].strip(),
                phone=phone,
                email=email,
                address=data["address"].strip(),
                website=data.get("website") or "",
                linkedin=data.get("linkedin") or "",
                contact_person_name=data["contactPersonName"].strip(),
                contact_person_position=data["contactPersonPosition"].strip(),
            )
    except IntegrityError as exc:
        raise _conflict_from_integrity(exc, email_message)

    logger.info("Company registered: user_id=%s email=%s", user.pk, email)
    return user


# -----------------------------
# Sessions
# -----------------------------
def _valid_ip(value):
    value = (value or "").strip()
    try:
        validate_ipv46_address(value)
    except DjangoValidationError:
        return None
    return value


def _client_ip(request):
    # Proxies may forward placeholders such as "unknown"; the column is an inet.
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        ip = _valid_ip(forwarded.split(",")[0])
        if ip:
            return ip
    return _valid_ip(request.META.get("REMOTE_ADDR"))


def login_user(request, email: str, password: str) -> tuple[User, str]:
    """Authenticate, open the Django session and record the login.

    Returns the user and the dashboard path the client should go to.
    """
    email = (email or "").strip().lower()
    user = authenticate(request, username=email, password=password)
    if user is None:
        logger.warning("Login failed: email=%s", email)
        raise AuthenticationError("Invalid email or password")

    login(request, user)
    record = LoginSession.objects.create(
        user=user,
        ip_address=_client_ip(request),
        user_agent=(request.META.get("HTTP_USER_AGENT") or "Unknown")[:255],
    )
    request.session["login_session_id"] = record.pk
    request.session["role"] = user.role
    logger.info("Login success: user_id=%s role=%s", user.pk, user.role)
    return user, REDIRECTS.get(user.role, "/dashboard")


def logout_user(request) -> None:
    login_session_id = request.session.get("login_session_id")
    if login_session_id:
        LoginSession.objects.filter(pk=login_session_id).update(is_active=False)
    user_id = request.user.pk if request.user.is_authenticated else None
    logout(request)
    if user_id:
        logger.info("Logout: user_id=%s", user_id)


def sign_out_all_devices(request, actor: Actor) -> int:
    revoked = LoginSession.objects.filter(user=actor.user, is_active=True).update(is_active=False)
    logout(request)
    logger.info("Signed out all devices: user_id=%s sessions=%s", actor.id, revoked)
    return revoked


def login_activity(actor: Actor, limit: int = 10):
    return list(LoginSession.objects.filter(user=actor.user)[:limit])


# -----------------------------
# Privacy settings
# -----------------------------
def update_privacy_settings(actor: Actor, data: dict) -> User:
    user = actor.user
    fields = []
    if data.get("firstName"):
        user.first_name = data["firstName"].strip()
        fields.append("first_name")
    if data.get("lastName"):
        user.last_name = data["lastName"].strip()
        fields.append("last_name")
    if data.get("phone") and data["phone"] != user.phone:
        if User.objects.filter(phone=data["phone"]).exclude(pk=user.pk).exists():
            raise ConflictError("User with this phone number already exists")
        user.phone = data["phone"]
        fields.append("phone")
    if data.get("privacySettings") is not None:
        user.privacy_settings = data["privacySettings"]
        fields.append("privacy_settings")

    if fields:
        try:
            with transaction.atomic():
                user.save(update_fields=fields + ["updated_at"])
        except IntegrityError:
            raise ConflictError("User with this phone number already exists")
        logger.info("Privacy settings updated: user_id=%s fields=%s", user.pk, ",".join(fields))
    return user


# -----------------------------
# Job seeker profile
# -----------------------------
def save_job_seeker_profile(actor: Actor, data: dict) -> JobSeekerProfile:
    """Create or update the actor's profile (upsert on the owner)."""
    ensure_role(actor, User.Role.JOB_SEEKER, "Only job seekers can create profiles")
    profile, created = JobSeekerProfile.objects.update_or_create(
        user=actor.user,
        defaults={
            "profile_type": data["profileType"],
            "bio": data["bio"],
            "skills": data["skills"],
            "education": data["education"],
            "experience": data.get("experience") or "",
            "certifications": data.get("certifications") or [],
            "portfolio": data.get("portfolio") or "",
            "visibility": data.get("visibility") or JobSeekerProfile.Visibility.PRIVATE,
        },
    )
    logger.info("JobSeeker profile %s: user_id=%s", "created" if created else "updated", actor.id)
    return profile


def get_job_seeker(actor: Actor) -> User:
    ensure_role(actor, User.Role.JOB_SEEKER, "Only job seekers can view this profile")
    return (
        User.objects.select_related("jobseeker_profile")
        .filter(pk=actor.id)
        .first()
    )


# -----------------------------
# Listings
# -----------------------------
def search_companies(*, search="", industry="", company_size=""):
    """Verified companies, optionally narrowed by free text and facets."""
    qs = CompanyProfile.objects.select_related("user").filter(
        user__role=User.Role.COMPANY,
        user__verification_status=User.VerificationStatus.VERIFIED,
    )
    if search:
        qs = qs.filter(Q(company_name__icontains=search) | Q(description__icontains=search))
    if industry:
        qs = qs.filter(industry=industry)
    if company_size:
        qs = qs.filter(company_size=company_size)
    return qs.annotate(
        active_jobs=Count("user__job_posts", filter=Q(user__job_posts__is_active=True))
    ).order_by("company_name", "id")


def search_job_seekers(*, search="", profile_type="", skills=None):
    """Job seekers whose profile is PUBLIC.

    ``skills`` matches profiles holding any of the given skills.
    """
    qs = JobSeekerProfile.objects.select_related("user").filter(
        user__role=User.Role.JOB_SEEKER,
        visibility=JobSeekerProfile.Visibility.PUBLIC,
    )
    if search:
        qs = qs.filter(
            Q(user__first_name__icontains=search)
            | Q(user__last_name__icontains=search)
            | Q(user__email__icontains=search)
            | Q(bio__icontains=search)
        )
    if profile_type:
        qs = qs.filter(profile_type=profile_type)
    if skills:
        any_skill = Q()
        for skill in skills:
            # skills is a JSON list; match the quoted element in its text form.
            any_skill |= Q(skills__icontains=f'"{skill}"')
        qs = qs.filter(any_skill)
    return qs.annotate(applications_count=Count("user__applications")).order_by("-user__date_joined", "-id")


def get_company(company_id) -> User:
    company = User.objects.filter(pk=company_id, role=User.Role.COMPANY).first()
    if company is None:
        raise NotFoundError("Company not found")
    return company


def get_job_seeker_by_id(job_seeker_id) -> User:
    seeker = User.objects.filter(pk=job_seeker_id, role=User.Role.JOB_SEEKER).first()
    if seeker is None:
        raise NotFoundError("Jobseeker not found")
    return seeker
