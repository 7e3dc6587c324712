from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


STATUS_CHOICES = [
    ("NOT_VIEWED", "Not viewed"),
    ("VIEWED", "Viewed"),
    ("SHORTLISTED", "Shortlisted"),
    ("INTERVIEW_SCHEDULED", "Interview scheduled"),
    ("REJECTED", "Rejected"),
    ("ACCEPTED", "Accepted"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("resumes", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="JobPost",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("industry", models.CharField(max_length=100)),
                ("job_type", models.CharField(choices=[("FULL_TIME", "Full-time"), ("PART_TIME", "Part-time"), ("CONTRACT", "Contract"), ("INTERNSHIP", "Internship"), ("VIRTUAL_INTERNSHIP", "Virtual internship")], max_length=30)),
                ("location", models.CharField(blank=True, default="", max_length=255)),
                ("salary_range", models.CharField(blank=True, default="", max_length=100)),
                ("salary_min", models.PositiveIntegerField(blank=True, null=True)),
                ("salary_max", models.PositiveIntegerField(blank=True, null=True)),
                ("requirements", models.JSONField(blank=True, default=list)),
                ("skills_required", models.JSONField(blank=True, default=list)),
                ("benefits", models.JSONField(blank=True, default=list)),
                ("experience_level", models.CharField(blank=True, choices=[("ENTRY", "Entry"), ("MID", "Mid"), ("SENIOR", "Senior"), ("LEAD", "Lead")], default="", max_length=20)),
                ("is_remote", models.BooleanField(default=False)),
                ("application_deadline", models.DateTimeField()),
                ("has_chat_area", models.BooleanField(default=False)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="job_posts", to=settings.AUTH_USER_MODEL)),
            ],
        ),
        migrations.CreateModel(
            name="JobApplication",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("cover_letter", models.TextField(blank=True, default="")),
                ("status", models.CharField(choices=STATUS_CHOICES, default="NOT_VIEWED", max_length=30)),
                ("applied_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("job_post", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="applications", to="jobs.jobpost")),
                ("job_seeker", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="applications", to=settings.AUTH_USER_MODEL)),
                ("resume", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="applications", to="resumes.resume")),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("job_post", "job_seeker"), name="unique_application_per_job_seeker"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ApplicationEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(choices=STATUS_CHOICES, max_length=30)),
                ("note", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("application", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="events", to="jobs.jobapplication")),
            ],
            options={
                "ordering": ["created_at", "id"],
            },
        ),
    ]
