import logging

from accounts.decorators import jobseeker_required
from jobs.payloads import resume_ref_payload
from joblify.http import api_view, ok, paginate, parse_body, raise_for_form
from .forms import ResumeForm
from .models import Resume

logger = logging.getLogger(__name__)


def resume_payload(resume) -> dict:
    return {
        **resume_ref_payload(resume),
        "summary": resume.summary,
        "experience": resume.experience,
        "education": resume.education,
        "skills": resume.skills,
        "createdAt": resume.created_at,
    }


@api_view(["GET", "POST"])
@jobseeker_required
def resumes(request, actor):
    if request.method == "GET":
        qs = Resume.objects.filter(owner=actor.user)
        if (request.GET.get("custom") or "").lower() not in ("1", "true"):
            qs = qs.filter(custom=False)
        items, pagination = paginate(request, qs)
        return ok({"resumes": [resume_payload(r) for r in items], "pagination": pagination})

    form = ResumeForm(parse_body(request), request.FILES or None)
    raise_for_form(form)
    resume = form.save(commit=False)
    resume.owner = actor.user
    resume.save()
    logger.info("Resume uploaded: resume_id=%s user_id=%s", resume.id, actor.id)
    return ok({"resume": resume_payload(resume)}, message="Resume saved successfully", status=201)
