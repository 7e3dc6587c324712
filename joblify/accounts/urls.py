from django.urls import path
from . import views

urlpatterns = [
    path("auth/register/jobseeker", views.register_jobseeker, name="register_jobseeker"),
    path("auth/register/company", views.register_company, name="register_company"),
    path("auth/login", views.user_login, name="login"),
    path("auth/logout", views.user_logout, name="logout"),
    path("auth/signout-all", views.signout_all, name="signout_all"),
    path("auth/login-activity", views.login_activity, name="login_activity"),
    path("auth/privacy-settings", views.privacy_settings, name="privacy_settings"),
    path("auth/job-seeker/profile", views.save_jobseeker_profile, name="save_jobseeker_profile"),
    path("jobseeker/dashboard", views.jobseeker_dashboard, name="jobseeker_dashboard"),
    path("jobseeker/profile", views.jobseeker_profile, name="jobseeker_profile"),
    path("jobseeker/companies", views.companies, name="jobseeker_companies"),
    path("company/dashboard", views.company_dashboard, name="company_dashboard"),
    path("company/jobseekers", views.jobseekers, name="company_jobseekers"),
    path("notifications/", views.notifications_list, name="notifications_list"),
    path("notifications/read-all", views.notifications_mark_all_read, name="notifications_mark_all_read"),
    path("notifications/<int:notification_id>/read", views.notification_mark_read, name="notification_mark_read"),
]
