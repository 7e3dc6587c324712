from accounts.payloads import jobseeker_profile_payload, user_brief


def _company_summary(user) -> dict:
    profile = getattr(user, "company_profile", None)
    return {
        "id": user.pk,
        "companyName": user.company_name or (profile.company_name if profile else None),
        "industry": profile.industry if profile else None,
        "logo": (profile.logo or None) if profile else None,
    }


def job_post_payload(post, *, with_company: bool = False) -> dict:
    data = {
        "id": post.pk,
        "companyId": post.company_id,
        "title": post.title,
        "description": post.description,
        "industry": post.industry,
        "jobType": post.job_type,
        "location": post.location,
        "salaryRange": post.salary_range,
        "salaryMin": post.salary_min,
        "salaryMax": post.salary_max,
        "requirements": post.requirements,
        "skillsRequired": post.skills_required,
        "benefits": post.benefits,
        "experienceLevel": post.experience_level or None,
        "isRemote": post.is_remote,
        "applicationDeadline": post.application_deadline,
        "hasChatArea": post.has_chat_area,
        "isActive": post.is_active,
        "createdAt": post.created_at,
        "updatedAt": post.updated_at,
    }
    if hasattr(post, "applications_count"):
        data["applicationsCount"] = post.applications_count
    if with_company:
        data["company"] = _company_summary(post.company)
    return data


def resume_ref_payload(resume) -> dict | None:
    if resume is None:
        return None
    return {
        "id": resume.pk,
        "title": resume.title,
        "custom": resume.custom,
        "file": resume.file.url if resume.file else None,
    }


def application_payload(app) -> dict:
    return {
        "id": app.pk,
        "jobPostId": app.job_post_id,
        "jobSeekerId": app.job_seeker_id,
        "resumeId": app.resume_id,
        "coverLetter": app.cover_letter,
        "status": app.status,
        "appliedAt": app.applied_at,
        "updatedAt": app.updated_at,
    }


def applicant_payload(app) -> dict:
    """Application as seen by the company that owns the post."""
    seeker = app.job_seeker
    data = application_payload(app)
    data["jobSeeker"] = {
        **user_brief(seeker),
        "email": seeker.email,
        "phone": seeker.phone,
        "profile": jobseeker_profile_payload(getattr(seeker, "jobseeker_profile", None)),
    }
    data["resume"] = resume_ref_payload(app.resume)
    return data


def tracked_application_payload(app) -> dict:
    data = application_payload(app)
    data["jobPost"] = {
        "id": app.job_post_id,
        "title": app.job_post.title,
        "company": _company_summary(app.job_post.company),
    }
    data["timeline"] = [
        {"status": ev.status, "note": ev.note, "createdAt": ev.created_at}
        for ev in app.events.all()
    ]
    return data
