from jobs.payloads import application_payload, job_post_payload
from joblify.http import api_view, ok, paginate, parse_body, raise_for_form
from subscriptions.payloads import subscription_payload
from . import dashboards, services
from .decorators import company_required, jobseeker_required, login_required
from .forms import (
    CompanyRegistrationForm,
    JobSeekerProfileForm,
    JobSeekerRegistrationForm,
    LoginForm,
    PrivacySettingsForm,
)
from .models import Notification
from .notifications import mark_all_read, mark_read
from .payloads import (
    company_listing_payload,
    company_profile_payload,
    jobseeker_listing_payload,
    jobseeker_profile_payload,
    login_session_payload,
    notification_payload,
    privacy_payload,
    user_payload,
)

# -----------------------------
# Registration + sessions
# -----------------------------
@api_view(["POST"])
def register_jobseeker(request):
    form = JobSeekerRegistrationForm(parse_body(request))
    raise_for_form(form)
    user = services.register_job_seeker(form.cleaned_data)
    return ok({"user": user_payload(user)}, message="Account created successfully. Please login.", status=201)


@api_view(["POST"])
def register_company(request):
    form = CompanyRegistrationForm(parse_body(request))
    raise_for_form(form)
    user = services.register_company(form.cleaned_data)
    return ok(
        {"user": user_payload(user)},
        message="Company account created successfully. Please login.",
        status=201,
    )


@api_view(["POST"])
def user_login(request):
    form = LoginForm(parse_body(request))
    raise_for_form(form)
    user, redirect_to = services.login_user(request, form.cleaned_data["email"], form.cleaned_data["password"])
    return ok({"user": user_payload(user), "redirectTo": redirect_to}, message="Login successful")


@api_view(["POST"])
def user_logout(request):
    services.logout_user(request)
    return ok(message="Logged out successfully")


@api_view(["POST"])
@login_required
def signout_all(request, actor):
    services.sign_out_all_devices(request, actor)
    return ok(message="Signed out from all devices successfully")


@api_view(["GET"])
@login_required
def login_activity(request, actor):
    records = services.login_activity(actor)
    return ok({"loginActivity": [login_session_payload(r) for r in records]})


@api_view(["GET", "PUT"])
@login_required
def privacy_settings(request, actor):
    if request.method == "GET":
        return ok({"user": privacy_payload(actor.user)})

    form = PrivacySettingsForm(parse_body(request))
    raise_for_form(form)
    user = services.update_privacy_settings(actor, form.cleaned_data)
    return ok({"user": privacy_payload(user)}, message="Privacy settings updated successfully")


@api_view(["POST"])
@login_required
def save_jobseeker_profile(request, actor):
    # Role is checked by the service so the message names the operation.
    form = JobSeekerProfileForm(parse_body(request))
    raise_for_form(form)
    profile = services.save_job_seeker_profile(actor, form.cleaned_data)
    return ok({"profile": jobseeker_profile_payload(profile)}, message="Profile saved successfully")


# -----------------------------
# Job seeker area
# -----------------------------
@api_view(["GET"])
@jobseeker_required
def jobseeker_dashboard(request, actor):
    data = dashboards.jobseeker_dashboard(actor.user)
    user = actor.user
    return ok(
        {
            "dashboard": {
                "user": {
                    "id": user.pk,
                    "firstName": user.first_name,
                    "lastName": user.last_name,
                    "email": user.email,
                    "points": user.points,
                },
                "profile": jobseeker_profile_payload(data["profile"]),
                "stats": data["stats"],
                "recentApplications": [
                    {**application_payload(app), "jobTitle": app.job_post.title}
                    for app in data["recent_applications"]
                ],
                "recentSubscriptions": [
                    subscription_payload(sub, with_company=True) for sub in data["recent_subscriptions"]
                ],
            }
        }
    )


@api_view(["GET"])
@jobseeker_required
def jobseeker_profile(request, actor):
    user = services.get_job_seeker(actor)
    return ok(
        {
            "user": user_payload(user),
            "profile": jobseeker_profile_payload(getattr(user, "jobseeker_profile", None)),
        },
        message="Profile loaded successfully",
    )


@api_view(["GET"])
@jobseeker_required
def companies(request, actor):
    qs = services.search_companies(
        search=(request.GET.get("search") or "").strip(),
        industry=(request.GET.get("industry") or "").strip(),
        company_size=(request.GET.get("companySize") or "").strip(),
    )
    items, pagination = paginate(request, qs)
    return ok({"companies": [company_listing_payload(p) for p in items], "pagination": pagination})


# -----------------------------
# Company area
# -----------------------------
@api_view(["GET"])
@company_required
def company_dashboard(request, actor):
    data = dashboards.company_dashboard(actor.user)
    user = actor.user
    profile = data["profile"]
    return ok(
        {
            "dashboard": {
                "company": {
                    "id": user.pk,
                    "companyName": user.company_name,
                    "email": user.email,
                    "industry": profile.industry if profile else None,
                },
                "profile": company_profile_payload(profile),
                "stats": data["stats"],
                "recentJobs": [job_post_payload(post) for post in data["recent_jobs"]],
                "recentSubscriptions": [
                    subscription_payload(sub, with_job_seeker=True) for sub in data["recent_subscriptions"]
                ],
            }
        }
    )


@api_view(["GET"])
@company_required
def jobseekers(request, actor):
    skills = [s.strip() for s in (request.GET.get("skills") or "").split(",") if s.strip()]
    qs = services.search_job_seekers(
        search=(request.GET.get("search") or "").strip(),
        profile_type=(request.GET.get("profileType") or "").strip(),
        skills=skills,
    )
    items, pagination = paginate(request, qs)
    return ok({"jobseekers": [jobseeker_listing_payload(p) for p in items], "pagination": pagination})


# -----------------------------
# Notifications
# -----------------------------
@api_view(["GET"])
@login_required
def notifications_list(request, actor):
    qs = Notification.objects.filter(user=actor.user)
    if (request.GET.get("unread") or "").lower() in ("1", "true"):
        qs = qs.filter(is_read=False)
    items, pagination = paginate(request, qs)
    unread = Notification.objects.filter(user=actor.user, is_read=False).count()
    return ok(
        {
            "notifications": [notification_payload(n) for n in items],
            "unreadCount": unread,
            "pagination": pagination,
        }
    )


@api_view(["POST"])
@login_required
def notification_mark_read(request, actor, notification_id):
    notif = mark_read(actor.user, notification_id)
    return ok({"notification": notification_payload(notif)})


@api_view(["POST"])
@login_required
def notifications_mark_all_read(request, actor):
    updated = mark_all_read(actor.user)
    return ok({"updated": updated})
