# notifications/tests.py
from django.contrib.auth import get_user_model
from django.core import mail
from django.core.management import call_command
from django.test import TestCase
from rest_framework.test import APIClient

from .models import Notification, NotificationTemplate, UserNotificationPreference, NotificationAttempt
from .service import create_notification_for_user

User = get_user_model()


class NotificationServiceTest(TestCase):
    def setUp(self):
        call_command("seed_notification_templates", verbosity=0)
        self.user = User.objects.create_user(username="stu", password="pass", email="stu@school.local",
                                             first_name="Awa", last_name="Diallo")
        self.payload = {"student_name": "Awa Diallo", "accepted_count": 2, "accepted_at": "2026-01-10"}

    def test_template_defaults_send_inapp_and_email(self):
        notif = create_notification_for_user(self.user, "fees", self.payload, template_key="submission_accepted")
        self.assertEqual(notif.channels, ["inapp", "email"])
        self.assertTrue(notif.sent)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].subject, "Paiement validé pour Awa Diallo")
        self.assertIn("2 soumissions", mail.outbox[0].body)
        self.assertEqual(NotificationAttempt.objects.filter(notification=notif, success=True).count(), 2)

    def test_user_preference_overrides_template(self):
        UserNotificationPreference.objects.create(user=self.user, topic="fees", channels=["inapp"])
        notif = create_notification_for_user(self.user, "fees", self.payload, template_key="submission_accepted")
        self.assertEqual(notif.channels, ["inapp"])
        self.assertEqual(len(mail.outbox), 0)

    def test_disabled_topic_keeps_inapp_only(self):
        UserNotificationPreference.objects.create(user=self.user, topic="fees", channels=["email"], enabled=False)
        notif = create_notification_for_user(self.user, "fees", self.payload, template_key="submission_accepted")
        self.assertEqual(notif.channels, ["inapp"])
        self.assertEqual(len(mail.outbox), 0)

    def test_email_without_address_fails_but_inapp_succeeds(self):
        user = User.objects.create_user(username="nomail", password="pass")
        notif = create_notification_for_user(user, "fees", self.payload, template_key="submission_accepted")
        self.assertTrue(notif.sent)
        attempt = NotificationAttempt.objects.get(notification=notif, channel="email")
        self.assertFalse(attempt.success)
        self.assertEqual(attempt.response, "no-email")

    def test_broken_template_renders_source(self):
        tpl = NotificationTemplate.objects.create(key="broken", topic="fees", title_template="Reçu {% if %}",
                                                  body_template="", default_channels=["inapp"])
        notif = Notification.objects.create(topic="fees", recipient_user=self.user, template=tpl,
                                            payload={"body": "Corps"})
        with self.assertLogs("notifications.models", level="WARNING"):
            self.assertEqual(notif.render_title(), "Reçu {% if %}")
        self.assertEqual(notif.render_body(), "Corps")

    def test_seed_is_idempotent(self):
        call_command("seed_notification_templates", verbosity=0)
        self.assertEqual(NotificationTemplate.objects.filter(key="submission_accepted").count(), 1)


class NotificationApiTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="stu", password="pass")
        self.other = User.objects.create_user(username="other", password="pass")
        self.mine = Notification.objects.create(topic="fees", recipient_user=self.user, payload={"title": "A"})
        self.theirs = Notification.objects.create(topic="fees", recipient_user=self.other, payload={"title": "B"})
        self.client = APIClient()
        self.client.force_authenticate(self.user)

    def test_list_only_own_notifications(self):
        resp = self.client.get("/api/notifications/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([row["title"] for row in resp.data], ["A"])

    def test_ack_marks_only_own(self):
        resp = self.client.post("/api/notifications/ack/", {"ids": [str(self.mine.id), str(self.theirs.id)]}, format="json")
        self.assertEqual(resp.data["updated"], 1)
        self.mine.refresh_from_db()
        self.theirs.refresh_from_db()
        self.assertTrue(self.mine.read)
        self.assertFalse(self.theirs.read)

    def test_ack_rejects_malformed_ids(self):
        resp = self.client.post("/api/notifications/ack/", {"ids": [str(self.mine.id), "not-a-uuid"]}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("ids", resp.data)
        self.mine.refresh_from_db()
        self.assertFalse(self.mine.read)

    def test_ack_rejects_non_list(self):
        resp = self.client.post("/api/notifications/ack/", {"ids": "abc"}, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_ack_without_ids_updates_nothing(self):
        resp = self.client.post("/api/notifications/ack/", {}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["updated"], 0)

    def test_mark_as_read(self):
        resp = self.client.post(f"/api/notifications/{self.mine.id}/mark_as_read/")
        self.assertEqual(resp.status_code, 200)
        self.mine.refresh_from_db()
        self.assertTrue(self.mine.read)

    def test_mark_as_read_forbidden_for_other_recipient(self):
        resp = self.client.post(f"/api/notifications/{self.theirs.id}/mark_as_read/")
        self.assertEqual(resp.status_code, 403)

    def test_mark_as_read_malformed_id_is_not_found(self):
        resp = self.client.post("/api/notifications/not-a-uuid/mark_as_read/")
        self.assertEqual(resp.status_code, 404)
        resp = self.client.get("/api/notifications/not-a-uuid/")
        self.assertEqual(resp.status_code, 404)

    def test_preferences_are_per_user(self):
        UserNotificationPreference.objects.create(user=self.other, topic="fees", channels=["email"])
        resp = self.client.post("/api/notifications/preferences/",
                                {"topic": "fees", "channels": ["inapp"], "enabled": True}, format="json")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.data["username"], "stu")
        resp = self.client.get("/api/notifications/preferences/")
        self.assertEqual([row["channels"] for row in resp.data], [["inapp"]])
