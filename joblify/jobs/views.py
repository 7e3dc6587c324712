from accounts.decorators import company_required, jobseeker_required, login_required
from joblify.errors import ValidationError
from joblify.http import api_view, ok, paginate, parse_body, raise_for_form
from . import services
from .forms import ApplicantStatusForm, ApplyForm, JobPostForm
from .models import ApplicationStatus
from .payloads import applicant_payload, application_payload, job_post_payload, tracked_application_payload


def _create_post(request, actor):
    form = JobPostForm(parse_body(request))
    raise_for_form(form)
    post = services.create_job_post(actor, form.supplied_data())
    return ok({"jobPost": job_post_payload(post)}, message="Job post created successfully", status=201)


# -----------------------------
# Job posts
# -----------------------------
@api_view(["POST"])
@login_required
def create_job(request, actor):
    return _create_post(request, actor)


@api_view(["GET", "POST"])
@company_required
def company_jobs(request, actor):
    if request.method == "POST":
        return _create_post(request, actor)

    raw = (request.GET.get("isActive") or "").lower()
    is_active = {"true": True, "1": True, "false": False, "0": False}.get(raw)
    items, pagination = paginate(request, services.list_company_job_posts(actor, is_active))
    return ok({"jobPosts": [job_post_payload(p) for p in items], "pagination": pagination})


@api_view(["GET", "PUT", "DELETE"])
@company_required
def company_job_detail(request, actor, job_id):
    if request.method == "GET":
        post = services.get_company_job_post(actor, job_id)
        return ok({"jobPost": job_post_payload(post)})

    if request.method == "PUT":
        form = JobPostForm(parse_body(request), partial=True)
        raise_for_form(form)
        post = services.update_job_post(actor, job_id, form.supplied_data())
        return ok({"jobPost": job_post_payload(post)}, message="Job post updated successfully")

    if services.delete_job_post(actor, job_id):
        return ok(message="Job post deleted successfully")
    return ok(message="Job post deactivated (has existing applications)")


@api_view(["GET"])
@jobseeker_required
def job_list(request, actor):
    qs = services.list_job_posts(
        search=(request.GET.get("search") or "").strip(),
        industry=(request.GET.get("industry") or "").strip(),
        job_type=(request.GET.get("jobType") or "").strip(),
        location=(request.GET.get("location") or "").strip(),
        experience_level=(request.GET.get("experienceLevel") or "").strip(),
    )
    items, pagination = paginate(request, qs)
    return ok({"jobPosts": [job_post_payload(p, with_company=True) for p in items], "pagination": pagination})


@api_view(["GET"])
@login_required
def job_detail(request, actor, job_id):
    post = services.get_job_post(actor, job_id)
    return ok({"jobPost": job_post_payload(post, with_company=True)})


# -----------------------------
# Applications
# -----------------------------
@api_view(["POST"])
@jobseeker_required
def apply_job(request, actor, job_id):
    form = ApplyForm(parse_body(request))
    raise_for_form(form)
    data = form.cleaned_data
    application = services.apply(
        actor,
        job_id,
        resume_id=data.get("resumeId"),
        cover_letter=data.get("coverLetter"),
        custom_resume=data.get("customResume"),
    )
    return ok({"application": application_payload(application)}, message="Application submitted successfully", status=201)


@api_view(["GET"])
@company_required
def job_applicants(request, actor, job_id):
    status = (request.GET.get("status") or "").strip().upper()
    if status and status not in ApplicationStatus.values:
        raise ValidationError("Invalid status")
    post, qs = services.list_applicants(actor, job_id, status or None)
    items, pagination = paginate(request, qs)
    return ok(
        {
            "jobPost": {"id": post.pk, "title": post.title},
            "applicants": [applicant_payload(app) for app in items],
            "pagination": pagination,
        }
    )


@api_view(["PUT"])
@company_required
def update_applicant_status(request, actor, application_id):
    form = ApplicantStatusForm(parse_body(request))
    raise_for_form(form)
    application = services.update_applicant_status(
        actor, application_id, form.cleaned_data["status"], form.cleaned_data.get("notes")
    )
    return ok({"application": application_payload(application)}, message="Application status updated successfully")


@api_view(["GET"])
@jobseeker_required
def application_tracking(request, actor):
    applications, stats = services.application_tracking(actor)
    return ok({"applications": [tracked_application_payload(a) for a in applications], "stats": stats})
