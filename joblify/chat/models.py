from django.conf import settings
from django.db import models


class ChatArea(models.Model):
    job_post = models.OneToOneField("jobs.JobPost", on_delete=models.CASCADE, related_name="chat_area")
    company = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="chat_areas")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Chat for {self.job_post.title}"


class ChatParticipant(models.Model):
    chat_area = models.ForeignKey(ChatArea, on_delete=models.CASCADE, related_name="participants")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="chat_memberships")
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["chat_area", "user"], name="unique_chat_participant"),
        ]

    def __str__(self):
        return f"{self.user.email} in {self.chat_area_id}"


class ChatMessage(models.Model):
    chat_area = models.ForeignKey(ChatArea, on_delete=models.CASCADE, related_name="messages")
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="chat_messages")
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]
