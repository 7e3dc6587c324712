from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone


class JobType(models.TextChoices):
    FULL_TIME = "FULL_TIME", "Full-time"
    PART_TIME = "PART_TIME", "Part-time"
    CONTRACT = "CONTRACT", "Contract"
    INTERNSHIP = "INTERNSHIP", "Internship"
    VIRTUAL_INTERNSHIP = "VIRTUAL_INTERNSHIP", "Virtual internship"


class ExperienceLevel(models.TextChoices):
    ENTRY = "ENTRY", "Entry"
    MID = "MID", "Mid"
    SENIOR = "SENIOR", "Senior"
    LEAD = "LEAD", "Lead"


class JobPostQuerySet(models.QuerySet):
    def for_company(self, company):
        return self.filter(company=company)

    def active(self):
        return self.filter(is_active=True)

    def open_for_applications(self, now=None):
        """Active posts whose deadline has not passed."""
        return self.active().filter(application_deadline__gt=now or timezone.now())

    def recent(self):
        return self.order_by("-created_at", "-id")

    def search(self, *, q=None, industry=None, job_type=None, location=None, experience_level=None):
        qs = self
        if q:
            qs = qs.filter(
                Q(title__icontains=q)
                | Q(description__icontains=q)
                | Q(company__company_name__icontains=q)
            )
        if industry:
            qs = qs.filter(industry=industry)
        if job_type:
            qs = qs.filter(job_type=job_type)
        if location:
            qs = qs.filter(location__icontains=location)
        if experience_level:
            qs = qs.filter(experience_level=experience_level)
        return qs


class JobPost(models.Model):
    company = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="job_posts")
    title = models.CharField(max_length=255)
    description = models.TextField()
    industry = models.CharField(max_length=100)
    job_type = models.CharField(max_length=30, choices=JobType.choices)
    location = models.CharField(max_length=255, blank=True, default="")
    salary_range = models.CharField(max_length=100, blank=True, default="")
    salary_min = models.PositiveIntegerField(blank=True, null=True)
    salary_max = models.PositiveIntegerField(blank=True, null=True)
    requirements = models.JSONField(default=list, blank=True)
    skills_required = models.JSONField(default=list, blank=True)
    benefits = models.JSONField(default=list, blank=True)
    experience_level = models.CharField(max_length=20, choices=ExperienceLevel.choices, blank=True, default="")
    is_remote = models.BooleanField(default=False)
    application_deadline = models.DateTimeField()
    has_chat_area = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = JobPostQuerySet.as_manager()

    def __str__(self):
        return self.title


class ApplicationStatus(models.TextChoices):
    NOT_VIEWED = "NOT_VIEWED", "Not viewed"
    VIEWED = "VIEWED", "Viewed"
    SHORTLISTED = "SHORTLISTED", "Shortlisted"
    INTERVIEW_SCHEDULED = "INTERVIEW_SCHEDULED", "Interview scheduled"
    REJECTED = "REJECTED", "Rejected"
    ACCEPTED = "ACCEPTED", "Accepted"


# Statuses a company may set; NOT_VIEWED is only ever the initial state.
SETTABLE_STATUSES = [
    ApplicationStatus.VIEWED,
    ApplicationStatus.SHORTLISTED,
    ApplicationStatus.INTERVIEW_SCHEDULED,
    ApplicationStatus.REJECTED,
    ApplicationStatus.ACCEPTED,
]


class JobApplicationQuerySet(models.QuerySet):
    def for_job(self, job_post):
        return self.filter(job_post=job_post)

    def for_jobseeker(self, user):
        return self.filter(job_seeker=user)

    def for_company(self, company):
        return self.filter(job_post__company=company)

    def recent(self):
        return self.order_by("-applied_at", "-id")


class JobApplication(models.Model):
    job_post = models.ForeignKey(JobPost, on_delete=models.CASCADE, related_name="applications")
    job_seeker = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="applications")
    resume = models.ForeignKey(
        "resumes.Resume", on_delete=models.SET_NULL, blank=True, null=True, related_name="applications"
    )
    cover_letter = models.TextField(blank=True, default="")
    status = models.CharField(max_length=30, choices=ApplicationStatus.choices, default=ApplicationStatus.NOT_VIEWED)
    applied_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = JobApplicationQuerySet.as_manager()

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["job_post", "job_seeker"], name="unique_application_per_job_seeker"),
        ]

    def __str__(self):
        return f"{self.job_seeker.email} → {self.job_post.title}"


class ApplicationEvent(models.Model):
    application = models.ForeignKey(JobApplication, on_delete=models.CASCADE, related_name="events")
    status = models.CharField(max_length=30, choices=ApplicationStatus.choices)
    note = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]
