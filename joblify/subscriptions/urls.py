from django.urls import path
from . import views

urlpatterns = [
    path("jobseeker/companies/<int:company_id>/subscribe", views.subscribe, name="subscribe"),
    path("jobseeker/invitations", views.invitations, name="invitations"),
    path(
        "jobseeker/invitations/<int:invitation_id>/respond",
        views.respond_to_invitation,
        name="respond_to_invitation",
    ),
    path("company/jobseekers/<int:job_seeker_id>/invite", views.invite, name="invite_jobseeker"),
    path("company/jobseekers/<int:job_seeker_id>/share-job", views.share_job, name="share_job"),
]
