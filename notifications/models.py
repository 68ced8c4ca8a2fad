import logging
import uuid

from django.db import models
from django.conf import settings
from django.template import Context, Template, TemplateSyntaxError
from django.utils import timezone

logger = logging.getLogger(__name__)


def _render(source, payload):
    # un template cassé ne doit pas bloquer la lecture : on renvoie la source brute
    try:
        return Template(source).render(Context(payload))
    except TemplateSyntaxError:
        logger.warning("Template de notification invalide: %.80s", source)
        return source


class NotificationTopic(models.TextChoices):
    FEES = 'fees', 'Frais'
    MESSAGE = 'message', 'Messagerie'


class Channel(models.TextChoices):
    INAPP = 'inapp', 'In-App'
    EMAIL = 'email', 'Email'


class NotificationTemplate(models.Model):
    key = models.CharField(max_length=120, unique=True)
    topic = models.CharField(max_length=50, choices=NotificationTopic.choices)
    title_template = models.CharField(max_length=200)
    body_template = models.TextField()
    default_channels = models.JSONField(default=list)

    def __str__(self):
        return f"{self.key} ({self.topic})"


class Notification(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    template = models.ForeignKey(NotificationTemplate, on_delete=models.SET_NULL, null=True, blank=True)
    topic = models.CharField(max_length=50, choices=NotificationTopic.choices)
    recipient_user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notifications')
    payload = models.JSONField(default=dict)
    channels = models.JSONField(default=list)
    sent = models.BooleanField(default=False)
    read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    sent_at = models.DateTimeField(null=True, blank=True)
    error = models.TextField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=['recipient_user', 'created_at'], name='notif_recipient_created_idx'),
            models.Index(fields=['topic', 'created_at'], name='notif_topic_created_idx'),
        ]
        ordering = ['-created_at']

    def clean(self):
        if self.template and self.template.topic != self.topic:
            from django.core.exceptions import ValidationError
            raise ValidationError("Le template doit appartenir au même topic que la notification.")

    def render_title(self):
        payload = self.payload or {}
        if self.template and self.template.title_template:
            return _render(self.template.title_template, payload)
        return payload.get('title') or f"Notification {self.topic}"

    def render_body(self):
        payload = self.payload or {}
        if self.template and self.template.body_template:
            return _render(self.template.body_template, payload)
        return payload.get('body') or ''

    def mark_sent(self, sent_at=None):
        self.sent = True
        self.sent_at = sent_at or timezone.now()
        self.save(update_fields=['sent', 'sent_at'])

    def mark_read(self):
        self.read = True
        self.save(update_fields=['read'])


class UserNotificationPreference(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    topic = models.CharField(max_length=50, choices=NotificationTopic.choices)
    channels = models.JSONField(default=list)
    enabled = models.BooleanField(default=True)

    class Meta:
        unique_together = ('user', 'topic')


class NotificationAttempt(models.Model):
    notification = models.ForeignKey(Notification, on_delete=models.CASCADE, related_name='attempts')
    channel = models.CharField(max_length=20, choices=Channel.choices)
    tried_at = models.DateTimeField(auto_now_add=True)
    success = models.BooleanField(default=False)
    response = models.TextField(null=True, blank=True)
