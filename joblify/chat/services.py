import logging

from django.db import IntegrityError, transaction
from django.db.models import Count

from accounts.decorators import Actor
from joblify.errors import AuthorizationError, NotFoundError, ValidationError
from .models import ChatArea, ChatMessage, ChatParticipant

logger = logging.getLogger(__name__)


def enroll(chat_area: ChatArea, user) -> ChatParticipant:
    """Add ``user`` to ``chat_area``; enrolling twice is a no-op."""
    try:
        with transaction.atomic():
            participant, created = ChatParticipant.objects.get_or_create(chat_area=chat_area, user=user)
    except IntegrityError:
        # Lost a race with a concurrent enrollment of the same pair.
        participant, created = ChatParticipant.objects.get(chat_area=chat_area, user=user), False
    if created:
        logger.info("Chat participant added: chat_area_id=%s user_id=%s", chat_area.pk, user.pk)
    return participant


def ensure_chat_area(job_post) -> ChatArea:
    """Return the post's chat area, creating it with the company enrolled."""
    area, created = ChatArea.objects.get_or_create(job_post=job_post, defaults={"company": job_post.company})
    if created:
        logger.info("Chat area created: chat_area_id=%s job_id=%s", area.pk, job_post.pk)
    enroll(area, job_post.company)
    return area


def enroll_in_job_chat(job_post, user):
    """Enroll ``user`` in the post's chat if chat is enabled, else do nothing."""
    if not job_post.has_chat_area:
        return None
    return enroll(ensure_chat_area(job_post), user)


def list_chat_areas(actor: Actor):
    if actor.is_company:
        qs = ChatArea.objects.filter(company=actor.user)
    else:
        # Subquery so the membership join does not narrow the counts below.
        member_of = ChatParticipant.objects.filter(user=actor.user).values("chat_area_id")
        qs = ChatArea.objects.filter(pk__in=member_of)
    return (
        qs.select_related("job_post")
        .annotate(
            participant_count=Count("participants", distinct=True),
            message_count=Count("messages", distinct=True),
        )
        .order_by("-created_at", "-id")
    )


def _member_area(actor: Actor, chat_area_id) -> ChatArea:
    area = ChatArea.objects.select_related("job_post").filter(pk=chat_area_id).first()
    if area is None:
        raise NotFoundError("Chat area not found")
    if not ChatParticipant.objects.filter(chat_area=area, user=actor.user).exists():
        raise AuthorizationError("Access denied to chat area")
    return area


def list_messages(actor: Actor, chat_area_id):
    area = _member_area(actor, chat_area_id)
    return area, ChatMessage.objects.filter(chat_area=area).select_related("author")


def send_message(actor: Actor, chat_area_id, content: str) -> ChatMessage:
    content = (content or "").strip()
    if not content:
        raise ValidationError("Message content is required")
    area = _member_area(actor, chat_area_id)
    msg = ChatMessage.objects.create(chat_area=area, author=actor.user, content=content)
    logger.info("Chat message sent: chat_area_id=%s user_id=%s message_id=%s", area.pk, actor.id, msg.pk)
    return msg
