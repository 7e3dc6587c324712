from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from accounts.models import ProfileType


class Subscription(models.Model):
    company = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="subscribers")
    job_seeker = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="subscriptions")
    profile_type = models.CharField(max_length=20, choices=ProfileType.choices)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "job_seeker", "profile_type"],
                name="unique_subscription_per_profile_type",
            ),
        ]

    def __str__(self):
        return f"{self.job_seeker.email} → {self.company.email} ({self.profile_type})"


class InvitationQuerySet(models.QuerySet):
    def pending(self):
        return self.filter(status=Invitation.Status.PENDING)

    def stale(self, now=None):
        """Pending invitations whose expiry has passed."""
        return self.pending().filter(expires_at__lte=now or timezone.now())


class Invitation(models.Model):
    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        ACCEPTED = "ACCEPTED", "Accepted"
        DECLINED = "DECLINED", "Declined"
        EXPIRED = "EXPIRED", "Expired"

    company = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="sent_invitations")
    job_seeker = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="invitations")
    profile_type = models.CharField(max_length=20, choices=ProfileType.choices)
    message = models.TextField(blank=True, default="")
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING)
    expires_at = models.DateTimeField()
    responded_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = InvitationQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "job_seeker", "profile_type"],
                condition=Q(status="PENDING"),
                name="unique_pending_invitation",
            ),
        ]

    def __str__(self):
        return f"Invitation {self.pk} ({self.status})"

    def is_expired(self, now=None) -> bool:
        return self.expires_at <= (now or timezone.now())
