from accounts.payloads import user_brief


def subscription_payload(sub, *, with_company: bool = False, with_job_seeker: bool = False) -> dict:
    data = {
        "id": sub.pk,
        "companyId": sub.company_id,
        "jobSeekerId": sub.job_seeker_id,
        "profileType": sub.profile_type,
        "createdAt": sub.created_at,
    }
    if with_company:
        data["company"] = user_brief(sub.company)
    if with_job_seeker:
        data["jobSeeker"] = user_brief(sub.job_seeker)
    return data


def invitation_payload(inv, *, with_company: bool = False) -> dict:
    data = {
        "id": inv.pk,
        "companyId": inv.company_id,
        "jobSeekerId": inv.job_seeker_id,
        "profileType": inv.profile_type,
        "message": inv.message,
        "status": inv.status,
        "expiresAt": inv.expires_at,
        "respondedAt": inv.responded_at,
        "createdAt": inv.created_at,
    }
    if with_company:
        profile = getattr(inv.company, "company_profile", None)
        data["company"] = {
            **user_brief(inv.company),
            "industry": profile.industry if profile else None,
            "logo": (profile.logo or None) if profile else None,
        }
    return data
