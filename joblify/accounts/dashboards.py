"""Dashboard read models for both roles."""

from django.db.models import Count

from jobs.models import JobApplication, JobPost
from jobs.services import recent_applications_for
from subscriptions.models import Subscription
from subscriptions.services import recent_subscribers_for_company, recent_subscriptions_for_seeker
from .models import Notification


def _unread(user) -> int:
    return Notification.objects.filter(user=user, is_read=False).count()


def jobseeker_dashboard(user) -> dict:
    return {
        "profile": getattr(user, "jobseeker_profile", None),
        "stats": {
            "applications": JobApplication.objects.for_jobseeker(user).count(),
            "subscriptions": Subscription.objects.filter(job_seeker=user).count(),
            "unreadNotifications": _unread(user),
        },
        "recent_applications": recent_applications_for(user),
        "recent_subscriptions": recent_subscriptions_for_seeker(user),
    }


def company_dashboard(user) -> dict:
    recent_jobs = list(
        JobPost.objects.for_company(user)
        .active()
        .annotate(applications_count=Count("applications"))
        .recent()[:5]
    )
    return {
        "profile": getattr(user, "company_profile", None),
        "stats": {
            "activeJobs": JobPost.objects.for_company(user).active().count(),
            "totalApplications": JobApplication.objects.for_company(user).count(),
            "subscriptions": Subscription.objects.filter(company=user).count(),
            "unreadNotifications": _unread(user),
        },
        "recent_jobs": recent_jobs,
        "recent_subscriptions": recent_subscribers_for_company(user),
    }
