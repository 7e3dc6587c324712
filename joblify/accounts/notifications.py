import logging

from django.db import transaction

from joblify.errors import NotFoundError
from .models import Notification

logger = logging.getLogger(__name__)


def notify(user, kind: str, title: str, message: str = "", related_id=None):
    """Persist one unread notification for ``user``.

    Best-effort: failures are logged and swallowed so the transition that
    triggered the notification is never undone or reported as failed. The
    insert runs in its own savepoint so a database error here leaves the
    surrounding transaction usable.
    """
    try:
        with transaction.atomic():
            return Notification.objects.create(
                user=user,
                kind=kind,
                title=title,
                message=message or "",
                related_id="" if related_id is None else str(related_id),
            )
    except Exception:
        logger.exception(
            "Failed to create in-app notification: kind=%s user_id=%s related_id=%s",
            kind,
            getattr(user, "pk", None),
            related_id,
        )
        return None


def mark_read(user, notification_id) -> Notification:
    notif = Notification.objects.filter(id=notification_id, user=user).first()
    if notif is None:
        raise NotFoundError("Notification not found")
    if not notif.is_read:
        notif.is_read = True
        notif.save(update_fields=["is_read"])
    return notif


def mark_all_read(user) -> int:
    return Notification.objects.filter(user=user, is_read=False).update(is_read=True)
