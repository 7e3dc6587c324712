import logging
from datetime import timedelta

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from accounts.decorators import Actor, ensure_role
from accounts.models import JobSeekerProfile, Notification, ProfileType, User
from accounts.notifications import notify
from accounts.services import get_company, get_job_seeker_by_id
from jobs.models import JobPost
from joblify.errors import ConflictError, NotFoundError, ValidationError
from .models import Invitation, Subscription

logger = logging.getLogger(__name__)

ACCEPT = "accept"
DECLINE = "decline"


def _check_profile_type(profile_type: str) -> None:
    if profile_type not in ProfileType.values:
        raise ValidationError("Valid profile type is required (EMPLOYABLE or VIRTUAL_INTERN)")


def _company_label(company) -> str:
    return company.company_name or company.email


# -----------------------------
# Subscribe (seeker -> company)
# -----------------------------
def subscribe(actor: Actor, company_id, profile_type: str) -> Subscription:
    ensure_role(actor, User.Role.JOB_SEEKER, "Only job seekers can subscribe to companies")
    _check_profile_type(profile_type)
    company = get_company(company_id)

    if not JobSeekerProfile.objects.filter(user=actor.user).exists():
        raise ValidationError("Please create your job seeker profile first")

    duplicate = ConflictError(f"You are already subscribed to this company as {profile_type}")
    if Subscription.objects.filter(company=company, job_seeker=actor.user, profile_type=profile_type).exists():
        raise duplicate
    try:
        with transaction.atomic():
            subscription = Subscription.objects.create(
                company=company, job_seeker=actor.user, profile_type=profile_type
            )
    except IntegrityError:
        raise duplicate

    notify(
        company,
        Notification.Kind.SUBSCRIPTION,
        "New Subscription",
        f"New {profile_type.lower()} subscription received",
        related_id=subscription.pk,
    )
    logger.info(
        "Subscription created: subscription_id=%s company_id=%s user_id=%s type=%s",
        subscription.pk,
        company.pk,
        actor.id,
        profile_type,
    )
    return subscription


# -----------------------------
# Invitations (company -> seeker)
# -----------------------------
def invite(actor: Actor, job_seeker_id, profile_type: str, message: str = "") -> Invitation:
    """Send a pending invitation that expires after ``INVITATION_TTL_DAYS``.

    A pending invitation already past its expiry is closed as EXPIRED here
    so it no longer blocks a fresh one.
    """
    ensure_role(actor, User.Role.COMPANY, "Only companies can send invitations")
    _check_profile_type(profile_type)
    seeker = get_job_seeker_by_id(job_seeker_id)

    now = timezone.now()
    triple = {"company": actor.user, "job_seeker": seeker, "profile_type": profile_type}
    try:
        with transaction.atomic():
            expired = Invitation.objects.filter(**triple).stale(now).update(status=Invitation.Status.EXPIRED)
            if expired:
                logger.info("Stale invitations expired: company_id=%s user_id=%s count=%s", actor.id, seeker.pk, expired)
            if Invitation.objects.filter(**triple).pending().exists():
                raise ConflictError("Invitation already sent and pending")
            invitation = Invitation.objects.create(
                **triple,
                message=(message or "").strip(),
                expires_at=now + timedelta(days=settings.JOBLIFY["INVITATION_TTL_DAYS"]),
            )
    except IntegrityError:
        raise ConflictError("Invitation already sent and pending")

    notify(
        seeker,
        Notification.Kind.INVITATION,
        "New Company Invitation",
        f"{_company_label(actor.user)} invited you to subscribe as {profile_type}",
        related_id=invitation.pk,
    )
    logger.info(
        "Invitation sent: invitation_id=%s company_id=%s user_id=%s type=%s",
        invitation.pk,
        actor.id,
        seeker.pk,
        profile_type,
    )
    return invitation


def respond_to_invitation(actor: Actor, invitation_id, action: str):
    """Accept or decline one of the actor's pending invitations.

    Returns ``(invitation, subscription)``; ``subscription`` is None unless
    the invitation was accepted.
    """
    ensure_role(actor, User.Role.JOB_SEEKER, "Only job seekers can respond to invitations")
    action = (action or "").lower()
    if action not in (ACCEPT, DECLINE):
        raise ValidationError("Action must be 'accept' or 'decline'")

    now = timezone.now()
    subscription = None
    with transaction.atomic():
        invitation = (
            Invitation.objects.select_for_update()
            .select_related("company")
            .filter(pk=invitation_id, job_seeker=actor.user, status=Invitation.Status.PENDING)
            .first()
        )
        if invitation is None:
            raise NotFoundError("Invitation not found or already responded")

        if invitation.is_expired(now):
            invitation.status = Invitation.Status.EXPIRED
            invitation.save(update_fields=["status"])
        elif action == ACCEPT:
            invitation.status = Invitation.Status.ACCEPTED
            invitation.responded_at = now
            invitation.save(update_fields=["status", "responded_at"])
            subscription, created = Subscription.objects.get_or_create(
                company=invitation.company,
                job_seeker=actor.user,
                profile_type=invitation.profile_type,
            )
            if not created:
                logger.warning(
                    "Invitation accepted for existing subscription: invitation_id=%s subscription_id=%s",
                    invitation.pk,
                    subscription.pk,
                )
        else:
            invitation.status = Invitation.Status.DECLINED
            invitation.responded_at = now
            invitation.save(update_fields=["status", "responded_at"])

    if invitation.status == Invitation.Status.EXPIRED:
        logger.info("Invitation expired on response: invitation_id=%s user_id=%s", invitation.pk, actor.id)
        raise ValidationError("Invitation has expired")

    logger.info(
        "Invitation %s: invitation_id=%s company_id=%s user_id=%s",
        invitation.status.lower(),
        invitation.pk,
        invitation.company_id,
        actor.id,
    )
    return invitation, subscription


def list_invitations(actor: Actor, status=None):
    ensure_role(actor, User.Role.JOB_SEEKER, "Only job seekers can view invitations")
    qs = Invitation.objects.filter(job_seeker=actor.user).select_related("company", "company__company_profile")
    if status:
        qs = qs.filter(status=status)
    return qs.order_by("-created_at", "-id")


# -----------------------------
# Share a job post with a seeker
# -----------------------------
def share_job(actor: Actor, job_seeker_id, job_post_id) -> JobPost:
    ensure_role(actor, User.Role.COMPANY, "Only companies can share jobs")
    post = JobPost.objects.filter(pk=job_post_id, company=actor.user).first()
    if post is None:
        raise NotFoundError("Job post not found")
    seeker = get_job_seeker_by_id(job_seeker_id)

    notify(
        seeker,
        Notification.Kind.JOB_SHARED,
        "Job Shared With You",
        f"{_company_label(actor.user)} shared a job with you: {post.title}",
        related_id=post.pk,
    )
    logger.info("Job shared: job_id=%s company_id=%s user_id=%s", post.pk, actor.id, seeker.pk)
    return post


def recent_subscriptions_for_seeker(user, limit: int = 5):
    return list(Subscription.objects.filter(job_seeker=user).select_related("company")[:limit])


def recent_subscribers_for_company(company, limit: int = 5):
    return list(Subscription.objects.filter(company=company).select_related("job_seeker")[:limit])
