# notifications/delivery.py
import logging
from typing import Dict, Tuple

from django.conf import settings
from django.core.mail import send_mail, BadHeaderError
from django.utils import timezone

from .models import Notification, NotificationAttempt, Channel

logger = logging.getLogger(__name__)

# --- helpers for each channel ---


def _send_inapp(notification: Notification) -> Tuple[bool, str]:
    """
    In-app is considered always successful because the Notification row is stored in DB.
    We still create a NotificationAttempt to track it.
    """
    return True, "stored-in-db"


def _send_email(notification: Notification, title: str, body: str) -> Tuple[bool, str]:
    """
    Uses django.core.mail.send_mail. Returns (success, response_message).
    """
    user = notification.recipient_user
    to = getattr(user, "email", None)
    if not to:
        return False, "no-email"
    try:
        send_mail(subject=title or "", message=body or "", from_email=settings.DEFAULT_FROM_EMAIL,
                  recipient_list=[to], fail_silently=False)
        return True, "sent"
    except BadHeaderError as e:
        logger.exception("BadHeaderError sending email for notif %s: %s", notification.id, e)
        return False, f"bad-header: {e}"
    except Exception as e:
        logger.exception("Exception sending email for notif %s: %s", notification.id, e)
        return False, str(e)


_SENDERS = {
    Channel.INAPP.value: lambda notif, title, body: _send_inapp(notif),
    Channel.EMAIL.value: _send_email,
}


# --- main pipeline ---


def _normalize_channel(ch) -> str:
    """
    Accept either Channel enum members or raw strings.
    Normalize to lowercase strings: 'inapp', 'email'
    """
    if ch is None:
        return ""
    if isinstance(ch, Channel):
        return str(ch.value).lower()
    return str(ch).lower()


def send_notification(notification: Notification) -> Dict[str, bool]:
    """
    Delivery pipeline.
    - For each configured channel, attempt delivery and create a NotificationAttempt.
    - If at least one channel succeeds, mark the Notification as sent.
    - Returns a dict mapping channel -> bool (success).
    """
    results: Dict[str, bool] = {}
    any_success = False

    title = notification.render_title()
    body = notification.render_body()

    # determine channels (fallback to template default channels or inapp)
    raw_channels = notification.channels
    if not raw_channels and notification.template:
        raw_channels = notification.template.default_channels or []
    if not raw_channels:
        raw_channels = [Channel.INAPP.value]

    for raw_ch in raw_channels:
        ch = _normalize_channel(raw_ch)
        sender = _SENDERS.get(ch)
        if sender is None:
            success, response = False, f"unknown-channel:{raw_ch}"
        else:
            success, response = sender(notification, title, body)

        NotificationAttempt.objects.create(
            notification=notification,
            channel=ch,
            success=bool(success),
            response=str(response)
        )

        results[ch] = bool(success)
        if success:
            any_success = True

    if any_success:
        notification.mark_sent(sent_at=timezone.now())
    else:
        notification.error = "all channels failed"
        notification.save(update_fields=["error"])

    return results
