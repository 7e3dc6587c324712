from accounts.payloads import user_brief


def chat_area_payload(area) -> dict:
    return {
        "id": area.pk,
        "jobPost": {"id": area.job_post_id, "title": area.job_post.title},
        "companyId": area.company_id,
        "participantCount": getattr(area, "participant_count", None),
        "messageCount": getattr(area, "message_count", None),
        "createdAt": area.created_at,
    }


def chat_message_payload(msg) -> dict:
    return {
        "id": msg.pk,
        "content": msg.content,
        "author": user_brief(msg.author),
        "createdAt": msg.created_at,
    }
