from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    class Role(models.TextChoices):
        JOB_SEEKER = "JOB_SEEKER", "Job Seeker"
        COMPANY = "COMPANY", "Company"

    class VerificationStatus(models.TextChoices):
        PENDING = "PENDING", "Pending"
        VERIFIED = "VERIFIED", "Verified"
        REJECTED = "REJECTED", "Rejected"

    class SubscriptionStatus(models.TextChoices):
        ACTIVE = "ACTIVE", "Active"
        INACTIVE = "INACTIVE", "Inactive"

    email = models.EmailField(unique=True)
    # NULL for accounts without a phone, so the unique index ignores them.
    phone = models.CharField(max_length=20, unique=True, blank=True, null=True)
    role = models.CharField(max_length=20, choices=Role.choices)
    company_name = models.CharField(max_length=150, blank=True, default="")
    verification_status = models.CharField(
        max_length=20, choices=VerificationStatus.choices, default=VerificationStatus.PENDING
    )
    subscription_status = models.CharField(
        max_length=20, choices=SubscriptionStatus.choices, default=SubscriptionStatus.INACTIVE
    )
    points = models.PositiveIntegerField(default=0)
    privacy_settings = models.JSONField(default=dict, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def is_job_seeker(self) -> bool:
        return self.role == self.Role.JOB_SEEKER

    @property
    def is_company(self) -> bool:
        return self.role == self.Role.COMPANY

    @property
    def display_name(self) -> str:
        if self.is_company and self.company_name:
            return self.company_name
        return self.get_full_name() or self.email


class ProfileType(models.TextChoices):
    EMPLOYABLE = "EMPLOYABLE", "Employable"
    VIRTUAL_INTERN = "VIRTUAL_INTERN", "Virtual Intern"


class JobSeekerProfile(models.Model):
    class Visibility(models.TextChoices):
        PUBLIC = "PUBLIC", "Public"
        PRIVATE = "PRIVATE", "Private"

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="jobseeker_profile")
    profile_type = models.CharField(max_length=20, choices=ProfileType.choices, default=ProfileType.EMPLOYABLE)
    bio = models.TextField(blank=True, default="")
    skills = models.JSONField(default=list, blank=True)
    education = models.CharField(max_length=255, blank=True, default="")
    experience = models.TextField(blank=True, default="")
    certifications = models.JSONField(default=list, blank=True)
    portfolio = models.URLField(blank=True, default="")
    visibility = models.CharField(max_length=10, choices=Visibility.choices, default=Visibility.PRIVATE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.user.get_full_name() or self.user.email


class CompanyProfile(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="company_profile")
    company_name = models.CharField(max_length=150)
    industry = models.CharField(max_length=100)
    company_size = models.CharField(max_length=50)
    establishment_year = models.PositiveIntegerField(blank=True, null=True)
    description = models.TextField(blank=True, default="")
    phone = models.CharField(max_length=20, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    address = models.CharField(max_length=255, blank=True, default="")
    website = models.URLField(blank=True, default="")
    linkedin = models.URLField(blank=True, default="")
    contact_person_name = models.CharField(max_length=150, blank=True, default="")
    contact_person_position = models.CharField(max_length=150, blank=True, default="")
    logo = models.URLField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.company_name


class Notification(models.Model):
    class Kind(models.TextChoices):
        APPLICATION = "APPLICATION", "New application"
        APPLICATION_STATUS = "APPLICATION_STATUS", "Application status"
        SUBSCRIPTION = "SUBSCRIPTION", "Subscription"
        INVITATION = "INVITATION", "Invitation"
        JOB_SHARED = "JOB_SHARED", "Job shared"

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="notifications")
    kind = models.CharField(max_length=30, choices=Kind.choices)
    title = models.CharField(max_length=200)
    message = models.TextField(blank=True, default="")
    related_id = models.CharField(max_length=64, blank=True, default="")
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [models.Index(fields=["user", "is_read"], name="notification_user_read_idx")]

    def __str__(self):
        return f"{self.kind}: {self.title}"


class LoginSession(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="login_sessions")
    ip_address = models.GenericIPAddressField(blank=True, null=True)
    user_agent = models.CharField(max_length=255, blank=True, default="")
    login_time = models.DateTimeField(auto_now_add=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["-login_time", "-id"]
