from django.urls import path
from . import views

urlpatterns = [
    path("auth/jobs", views.create_job, name="create_job"),
    path("jobseeker/jobs", views.job_list, name="job_list"),
    path("jobseeker/jobs/<int:job_id>", views.job_detail, name="job_detail"),
    path("jobseeker/jobs/<int:job_id>/apply", views.apply_job, name="apply_job"),
    path("jobseeker/applications/tracking", views.application_tracking, name="application_tracking"),
    path("company/jobs", views.company_jobs, name="company_jobs"),
    path("company/jobs/<int:job_id>", views.company_job_detail, name="company_job_detail"),
    path("company/jobs/<int:job_id>/applicants", views.job_applicants, name="job_applicants"),
    path(
        "company/applicants/<int:application_id>/status",
        views.update_applicant_status,
        name="update_applicant_status",
    ),
]
