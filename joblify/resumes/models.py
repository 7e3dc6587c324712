from django.conf import settings
from django.db import models


class Resume(models.Model):
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="resumes")
    title = models.CharField(max_length=200, blank=True)  # optional title for the resume
    summary = models.TextField(blank=True, default="")
    experience = models.TextField(blank=True, default="")
    education = models.CharField(max_length=255, blank=True, default="")
    skills = models.JSONField(default=list, blank=True)
    file = models.FileField(upload_to="resumes/", blank=True, null=True)
    # One-off resumes written inline while applying to a specific job.
    custom = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        name = self.owner.get_full_name() or self.owner.email
        return f"{name} - {self.title or 'Resume'}"
