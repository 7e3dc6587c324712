import logging
from collections import Counter

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Count
from django.utils import timezone

from accounts.decorators import Actor, ensure_role
from accounts.models import Notification, User
from accounts.notifications import notify
from chat.services import enroll, enroll_in_job_chat, ensure_chat_area
from joblify.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from resumes.models import Resume
from .models import ApplicationEvent, ApplicationStatus, JobApplication, JobPost

logger = logging.getLogger(__name__)

# Request field -> model field for job post writes.
POST_FIELDS = {
    "title": "title",
    "description": "description",
    "industry": "industry",
    "jobType": "job_type",
    "location": "location",
    "salaryRange": "salary_range",
    "salaryMin": "salary_min",
    "salaryMax": "salary_max",
    "requirements": "requirements",
    "skillsRequired": "skills_required",
    "benefits": "benefits",
    "experienceLevel": "experience_level",
    "isRemote": "is_remote",
    "applicationDeadline": "application_deadline",
    "hasChatArea": "has_chat_area",
}
# Columns that must never be blanked by a partial update.
NON_BLANK_FIELDS = {"title", "description", "industry", "job_type", "application_deadline"}


def record_application_event(application, status: str, note: str | None = None):
    """Append a timeline event for an application."""
    return ApplicationEvent.objects.create(application=application, status=status, note=(note or "")[:255])


def _sync_chat_members(post: JobPost) -> None:
    """Create the post's chat area and enroll the seekers entitled to it.

    Accepted applicants always belong; every applicant does when
    ``CHAT_ENROLL_ON_APPLY`` is on. Enrollment is idempotent.
    """
    area = ensure_chat_area(post)
    applications = post.applications.select_related("job_seeker")
    if not settings.JOBLIFY["CHAT_ENROLL_ON_APPLY"]:
        applications = applications.filter(status=ApplicationStatus.ACCEPTED)
    for application in applications:
        enroll(area, application.job_seeker)


def _owned_post(actor: Actor, job_post_id, *, lock: bool = False) -> JobPost:
    qs = JobPost.objects.select_for_update() if lock else JobPost.objects
    post = qs.filter(pk=job_post_id, company=actor.user).first()
    if post is None:
        raise NotFoundError("Job post not found")
    return post


# -----------------------------
# Job posts
# -----------------------------
def create_job_post(actor: Actor, data: dict) -> JobPost:
    ensure_role(actor, User.Role.COMPANY, "Only companies can post jobs")
    deadline = data["applicationDeadline"]
    if deadline <= timezone.now():
        raise ValidationError("Application deadline must be in the future")

    fields = {POST_FIELDS[key]: value for key, value in data.items() if key in POST_FIELDS and value is not None}
    with transaction.atomic():
        post = JobPost.objects.create(company=actor.user, **fields)
        if post.has_chat_area:
            ensure_chat_area(post)

    logger.info("Job created: job_id=%s company_id=%s chat=%s", post.pk, actor.id, post.has_chat_area)
    return post


def update_job_post(actor: Actor, job_post_id, data: dict) -> JobPost:
    """Merge the supplied fields into an owned post."""
    ensure_role(actor, User.Role.COMPANY, "Only companies can update job posts")
    post = _owned_post(actor, job_post_id)

    changed = []
    for key, value in data.items():
        field = POST_FIELDS.get(key)
        if field is None:
            continue
        if value in (None, "") and field in NON_BLANK_FIELDS:
            continue
        setattr(post, field, value)
        changed.append(field)

    if not changed:
        return post

    with transaction.atomic():
        post.save(update_fields=changed + ["updated_at"])
        if post.has_chat_area:
            _sync_chat_members(post)

    logger.info("Job updated: job_id=%s company_id=%s fields=%s", post.pk, actor.id, ",".join(changed))
    return post


def delete_job_post(actor: Actor, job_post_id) -> bool:
    """Hard delete a post without applications, otherwise deactivate it.

    Returns True when the row was removed.
    """
    ensure_role(actor, User.Role.COMPANY, "Only companies can delete job posts")
    with transaction.atomic():
        # Row lock so a concurrent apply cannot slip in before the delete.
        post = _owned_post(actor, job_post_id, lock=True)
        if not post.applications.exists():
            post.delete()
            logger.info("Job deleted: job_id=%s company_id=%s", job_post_id, actor.id)
            return True
        post.is_active = False
        post.save(update_fields=["is_active", "updated_at"])

    logger.info("Job deactivated: job_id=%s company_id=%s", post.pk, actor.id)
    return False


def get_job_post(actor: Actor, job_post_id) -> JobPost:
    post = JobPost.objects.select_related("company", "company__company_profile").filter(pk=job_post_id).first()
    if post is None:
        raise NotFoundError("Job post not found")
    return post


def get_company_job_post(actor: Actor, job_post_id) -> JobPost:
    ensure_role(actor, User.Role.COMPANY, "Only companies can view their job posts")
    return _owned_post(actor, job_post_id)


def list_job_posts(*, search="", industry="", job_type="", location="", experience_level=""):
    """Open posts, newest first."""
    return (
        JobPost.objects.open_for_applications()
        .search(q=search, industry=industry, job_type=job_type, location=location, experience_level=experience_level)
        .select_related("company", "company__company_profile")
        .annotate(applications_count=Count("applications"))
        .recent()
    )


def list_company_job_posts(actor: Actor, is_active=None):
    ensure_role(actor, User.Role.COMPANY, "Only companies can view their job posts")
    qs = JobPost.objects.for_company(actor.user)
    if is_active is not None:
        qs = qs.filter(is_active=is_active)
    return qs.annotate(applications_count=Count("applications")).recent()


# -----------------------------
# Applications
# -----------------------------
def _resolve_resume(actor: Actor, post: JobPost, resume_id=None, custom_resume=None):
    if custom_resume:
        return Resume.objects.create(
            owner=actor.user,
            title=f"Custom Resume for {post.title}"[:200],
            summary=str(custom_resume.get("summary") or ""),
            experience=str(custom_resume.get("experience") or ""),
            education=str(custom_resume.get("education") or "")[:255],
            skills=custom_resume.get("skills") or [],
            custom=True,
        )
    if resume_id:
        resume = Resume.objects.filter(pk=resume_id, owner=actor.user).first()
        if resume is None:
            raise ValidationError("Resume not found")
        return resume
    return None


def apply(actor: Actor, job_post_id, *, resume_id=None, cover_letter=None, custom_resume=None) -> JobApplication:
    """Submit the actor's application to an open job post.

    Chat enrollment and the timeline event commit together with the
    application; the company notification is best-effort.
    """
    ensure_role(actor, User.Role.JOB_SEEKER, "Only job seekers can apply to jobs")

    post = JobPost.objects.open_for_applications().filter(pk=job_post_id).select_related("company").first()
    if post is None:
        raise NotFoundError("Job post not found or expired")

    if JobApplication.objects.filter(job_post=post, job_seeker=actor.user).exists():
        raise ConflictError("You have already applied to this job")

    try:
        with transaction.atomic():
            resume = _resolve_resume(actor, post, resume_id, custom_resume)
            application = JobApplication.objects.create(
                job_post=post,
                job_seeker=actor.user,
                resume=resume,
                cover_letter=(cover_letter or "").strip(),
            )
            record_application_event(application, ApplicationStatus.NOT_VIEWED, "Application submitted")
            if settings.JOBLIFY["CHAT_ENROLL_ON_APPLY"]:
                enroll_in_job_chat(post, actor.user)
    except IntegrityError:
        logger.warning("Duplicate application blocked by constraint: job_id=%s user_id=%s", post.pk, actor.id)
        raise ConflictError("You have already applied to this job")

    notify(
        post.company,
        Notification.Kind.APPLICATION,
        "New Job Application",
        f"New application received for {post.title}",
        related_id=application.pk,
    )
    logger.info("Application submitted: app_id=%s job_id=%s user_id=%s", application.pk, post.pk, actor.id)
    return application


def update_applicant_status(actor: Actor, application_id, new_status: str, notes: str | None = None) -> JobApplication:
    ensure_role(actor, User.Role.COMPANY, "Only companies can update applicant status")
    if new_status == ApplicationStatus.NOT_VIEWED or new_status not in ApplicationStatus.values:
        raise ValidationError("Invalid status")

    with transaction.atomic():
        application = (
            JobApplication.objects.select_for_update()
            .select_related("job_post", "job_seeker")
            .filter(pk=application_id, job_post__company=actor.user)
            .first()
        )
        if application is None:
            raise NotFoundError("Application not found")

        previous = application.status
        application.status = new_status
        application.save(update_fields=["status", "updated_at"])
        record_application_event(application, new_status, notes)
        if new_status == ApplicationStatus.ACCEPTED:
            enroll_in_job_chat(application.job_post, application.job_seeker)

    post = application.job_post
    notify(
        application.job_seeker,
        Notification.Kind.APPLICATION_STATUS,
        "Application Status Updated",
        f"Your application for {post.title} has been {new_status.lower()}",
        related_id=application.pk,
    )
    logger.info(
        "Application status changed: app_id=%s from=%s to=%s company_id=%s",
        application.pk,
        previous,
        new_status,
        actor.id,
    )
    return application


def list_applicants(actor: Actor, job_post_id, status=None):
    ensure_role(actor, User.Role.COMPANY, "Only companies can view applicants")
    post = _owned_post(actor, job_post_id)
    qs = (
        JobApplication.objects.for_job(post)
        .select_related("job_seeker", "job_seeker__jobseeker_profile", "resume")
    )
    if status:
        qs = qs.filter(status=status)
    return post, qs.recent()


def application_tracking(actor: Actor):
    """All of a premium seeker's applications plus per-status counts."""
    ensure_role(actor, User.Role.JOB_SEEKER, "Only job seekers can track applications")
    if actor.user.subscription_status != User.SubscriptionStatus.ACTIVE:
        raise AuthorizationError("Premium feature requires active subscription")

    applications = list(
        JobApplication.objects.for_jobseeker(actor.user)
        .select_related("job_post", "job_post__company")
        .prefetch_related("events")
        .recent()
    )
    counts = Counter(app.status for app in applications)
    stats = {"total": len(applications)}
    for status in ApplicationStatus:
        stats[status.value] = counts.get(status.value, 0)
    return applications, stats


def recent_applications_for(user, limit: int = 5):
    return list(
        JobApplication.objects.for_jobseeker(user)
        .select_related("job_post", "job_post__company")
        .recent()[:limit]
    )

