"""Read projections for account data.

Each function names exactly the fields a response exposes; related rows are
passed in explicitly by the caller rather than followed implicitly.
"""


def user_payload(user) -> dict:
    return {
        "id": user.pk,
        "email": user.email,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "companyName": user.company_name or None,
        "phone": user.phone,
        "userType": user.role,
        "points": user.points,
        "subscriptionStatus": user.subscription_status,
        "verificationStatus": user.verification_status,
    }


def user_brief(user) -> dict:
    return {
        "id": user.pk,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "companyName": user.company_name or None,
        "userType": user.role,
    }


def jobseeker_profile_payload(profile) -> dict | None:
    if profile is None:
        return None
    return {
        "id": profile.pk,
        "userId": profile.user_id,
        "profileType": profile.profile_type,
        "bio": profile.bio,
        "skills": profile.skills,
        "education": profile.education,
        "experience": profile.experience,
        "certifications": profile.certifications,
        "portfolio": profile.portfolio,
        "visibility": profile.visibility,
        "updatedAt": profile.updated_at,
    }


def company_profile_payload(profile) -> dict | None:
    if profile is None:
        return None
    return {
        "id": profile.pk,
        "userId": profile.user_id,
        "companyName": profile.company_name,
        "industry": profile.industry,
        "companySize": profile.company_size,
        "establishmentYear": profile.establishment_year,
        "description": profile.description,
        "phone": profile.phone,
        "email": profile.email,
        "address": profile.address,
        "website": profile.website,
        "linkedin": profile.linkedin,
        "contactPersonName": profile.contact_person_name,
        "contactPersonPosition": profile.contact_person_position,
        "logo": profile.logo or None,
    }


def company_listing_payload(profile) -> dict:
    """Company card for the job seeker's company browser."""
    return {
        "id": profile.user_id,
        "companyName": profile.company_name,
        "industry": profile.industry,
        "companySize": profile.company_size,
        "description": profile.description,
        "establishmentYear": profile.establishment_year,
        "address": profile.address,
        "website": profile.website,
        "linkedin": profile.linkedin,
        "logo": profile.logo or None,
        "activeJobs": getattr(profile, "active_jobs", 0),
    }


def jobseeker_listing_payload(profile) -> dict:
    user = profile.user
    return {
        "id": user.pk,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "email": user.email,
        "phone": user.phone,
        "points": user.points,
        "profile": {
            "profileType": profile.profile_type,
            "bio": profile.bio,
            "skills": profile.skills,
            "education": profile.education,
            "experience": profile.experience,
            "portfolio": profile.portfolio,
            "certifications": profile.certifications,
        },
        "applicationsCount": getattr(profile, "applications_count", 0),
    }


def privacy_payload(user) -> dict:
    return {
        "id": user.pk,
        "email": user.email,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "phone": user.phone,
        "userType": user.role,
        "privacySettings": user.privacy_settings,
    }


def login_session_payload(record) -> dict:
    return {
        "id": record.pk,
        "loginTime": record.login_time,
        "ipAddress": record.ip_address,
        "userAgent": record.user_agent,
        "isActive": record.is_active,
        "current": record.is_active,
    }


def notification_payload(notif) -> dict:
    return {
        "id": notif.pk,
        "type": notif.kind,
        "title": notif.title,
        "message": notif.message,
        "relatedId": notif.related_id or None,
        "isRead": notif.is_read,
        "createdAt": notif.created_at,
    }
