# notifications/service.py
import logging
from django.db import transaction

from .models import Notification, NotificationTemplate, UserNotificationPreference, Channel
from .delivery import send_notification

logger = logging.getLogger(__name__)


def _determine_channels_for_user(user, topic, explicit_channels=None, tpl: NotificationTemplate = None):
    """
    Priority:
      explicit_channels > user preference > template.default_channels > ['inapp']
    """
    if explicit_channels:
        return explicit_channels
    pref = UserNotificationPreference.objects.filter(user=user, topic=topic).first()
    if pref is not None and not pref.enabled:
        # l'utilisateur a coupé ce topic : on garde la trace in-app uniquement
        return [Channel.INAPP.value]
    if pref and pref.channels:
        return pref.channels
    if tpl and tpl.default_channels:
        return tpl.default_channels
    return [Channel.INAPP.value]


@transaction.atomic
def create_notification_for_user(recipient_user, topic: str, payload: dict = None, template_key: str = None,
                                 channels: list = None, auto_send: bool = True) -> Notification:
    """
    Create a Notification and (optionally) send it immediately through send_notification.
    """
    payload = payload or {}
    tpl = None
    if template_key:
        tpl = NotificationTemplate.objects.filter(key=template_key).first()
    if not tpl:
        tpl = NotificationTemplate.objects.filter(topic=topic).first()

    chosen_channels = _determine_channels_for_user(recipient_user, topic, explicit_channels=channels, tpl=tpl)

    notif = Notification.objects.create(
        template=tpl,
        topic=topic,
        recipient_user=recipient_user,
        payload=payload,
        channels=chosen_channels,
    )

    if auto_send:
        try:
            send_notification(notif)
        except Exception:
            logger.exception("send_notification failed for notif %s", notif.id)

    return notif
