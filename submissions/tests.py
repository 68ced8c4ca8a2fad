# submissions/tests.py
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group, Permission
from django.test import TestCase
from rest_framework.test import APIClient

from core.models import Student
from notifications.models import Notification, NotificationTemplate

from .counter import pending_count
from .exceptions import ValidationError, NotFoundError, AuthorizationError
from .models import Submission, SubmissionStatus
from .store import SubmissionStore
from .workflow import create_submission, approve_submission

User = get_user_model()


class WorkflowTestMixin:
    def setUp(self):
        self.admin = User.objects.create_user(username="admin", password="pass", is_staff=True)
        self.s1_user = User.objects.create_user(username="stu1", password="pass", first_name="Awa", last_name="Diallo")
        self.s1 = Student.objects.create(user=self.s1_user)
        self.s2_user = User.objects.create_user(username="stu2", password="pass", first_name="Koffi", last_name="Mensah")
        self.s2 = Student.objects.create(user=self.s2_user)

    def submit(self, student, file_reference="receipt.pdf", actor=None, fees=None):
        return create_submission(
            actor=actor or student.user,
            student_id=student.pk,
            student_name=None,
            fee_selection=fees if fees is not None else {"fees": [{"id": 1, "amount": "150.00"}]},
            file_reference=file_reference,
        )


class CreateSubmissionTest(WorkflowTestMixin, TestCase):
    def test_created_pending_with_file_reference(self):
        submission = self.submit(self.s1)
        submission.refresh_from_db()
        self.assertIsNotNone(submission.pk)
        self.assertEqual(submission.status, SubmissionStatus.PENDING)
        self.assertEqual(submission.file_reference, "receipt.pdf")
        self.assertEqual(submission.student_id, self.s1.pk)
        self.assertEqual(submission.fee_selection, {"fees": [{"id": 1, "amount": "150.00"}]})

    def test_student_name_defaults_to_profile_name(self):
        submission = self.submit(self.s1)
        self.assertEqual(submission.student_name, "Awa Diallo")

    def test_student_name_is_kept_as_submitted(self):
        submission = create_submission(self.s1_user, self.s1.pk, "A. Diallo", {}, "r.pdf")
        self.s1_user.first_name = "Aminata"
        self.s1_user.save()
        submission.refresh_from_db()
        self.assertEqual(submission.student_name, "A. Diallo")

    def test_missing_file_reference_rejected(self):
        for empty in (None, "", "   "):
            with self.assertRaises(ValidationError):
                self.submit(self.s1, file_reference=empty)
        self.assertEqual(Submission.objects.count(), 0)

    def test_overlong_fields_rejected(self):
        with self.assertRaises(ValidationError):
            self.submit(self.s1, file_reference="r" * 501)
        with self.assertRaises(ValidationError):
            create_submission(self.s1_user, self.s1.pk, "x" * 151, {}, "receipt.pdf")
        self.assertEqual(Submission.objects.count(), 0)

    def test_file_reference_at_max_length_accepted(self):
        submission = self.submit(self.s1, file_reference="r" * 500)
        self.assertEqual(len(submission.file_reference), 500)

    def test_unknown_student(self):
        with self.assertRaises(NotFoundError):
            create_submission(self.admin, "S999999X", "Ghost", {}, "receipt.pdf")
        self.assertEqual(Submission.objects.count(), 0)

    def test_student_cannot_submit_for_another_student(self):
        with self.assertRaises(AuthorizationError):
            self.submit(self.s2, actor=self.s1_user)
        self.assertEqual(Submission.objects.count(), 0)

    def test_admin_can_submit_on_behalf(self):
        submission = self.submit(self.s2, actor=self.admin)
        self.assertEqual(submission.student_id, self.s2.pk)

    def test_create_does_not_touch_student_profile(self):
        self.s1.meta = {"paid": False}
        self.s1.save()
        self.submit(self.s1)
        self.s1.refresh_from_db()
        self.assertEqual(self.s1.meta, {"paid": False})


class ApproveSubmissionTest(WorkflowTestMixin, TestCase):
    def test_approve_accepts_all_pending_of_student_only(self):
        a = self.submit(self.s1)
        b = self.submit(self.s1, file_reference="receipt-2.pdf")
        other = self.submit(self.s2)

        accepted = approve_submission(self.admin, self.s1.pk, {"paid": True})

        self.assertEqual(accepted, 2)
        for sub in (a, b):
            sub.refresh_from_db()
            self.assertEqual(sub.status, SubmissionStatus.ACCEPTED)
            self.assertEqual(sub.reviewed_by, self.admin)
            self.assertIsNotNone(sub.reviewed_at)
        other.refresh_from_db()
        self.assertEqual(other.status, SubmissionStatus.PENDING)

    def test_approve_stores_meta_verbatim(self):
        meta = {"term": "T1", "fees": [{"id": 3, "paid": True}], "note": None}
        approve_submission(self.admin, self.s1.pk, meta)
        self.s1.refresh_from_db()
        self.assertEqual(self.s1.meta, meta)

    def test_second_approve_is_noop(self):
        self.submit(self.s1)
        self.assertEqual(approve_submission(self.admin, self.s1.pk, {}), 1)
        before = pending_count()
        self.assertEqual(approve_submission(self.admin, self.s1.pk, {}), 0)
        self.assertEqual(pending_count(), before)

    def test_approve_without_pending_is_not_an_error(self):
        self.assertEqual(approve_submission(self.admin, self.s2.pk, {"paid": True}), 0)

    def test_student_cannot_approve(self):
        self.submit(self.s1)
        with self.assertRaises(AuthorizationError):
            approve_submission(self.s1_user, self.s1.pk, {"paid": True})
        self.s1.refresh_from_db()
        self.assertEqual(self.s1.meta, {})
        self.assertEqual(pending_count(), 1)

    def test_authorization_checked_before_lookup(self):
        with self.assertRaises(AuthorizationError):
            approve_submission(self.s1_user, "S999999X", {})

    def test_unknown_student(self):
        with self.assertRaises(NotFoundError):
            approve_submission(self.admin, "S999999X", {})

    def test_employee_with_review_permission_can_approve(self):
        employee = User.objects.create_user(username="clerk", password="pass")
        group = Group.objects.create(name="employee")
        group.permissions.add(Permission.objects.get(codename="review_submission"))
        employee.groups.add(group)
        employee = User.objects.get(pk=employee.pk)

        self.submit(self.s1)
        self.assertEqual(approve_submission(employee, self.s1.pk, {}), 1)

    def test_accepted_submission_notifies_student(self):
        NotificationTemplate.objects.create(
            key="submission_accepted",
            topic="fees",
            title_template="Paiement validé pour {{ student_name }}",
            body_template="{{ accepted_count }} acceptée(s)",
            default_channels=["inapp"],
        )
        self.submit(self.s1)
        with self.captureOnCommitCallbacks(execute=True):
            approve_submission(self.admin, self.s1.pk, {"paid": True})

        notif = Notification.objects.get(recipient_user=self.s1_user)
        self.assertEqual(notif.topic, "fees")
        self.assertEqual(notif.payload["accepted_count"], 1)
        self.assertEqual(notif.render_title(), "Paiement validé pour Awa Diallo")
        self.assertTrue(notif.sent)

    def test_noop_approve_sends_no_notification(self):
        with self.captureOnCommitCallbacks(execute=True):
            approve_submission(self.admin, self.s1.pk, {})
        self.assertFalse(Notification.objects.exists())

    def test_meta_rolled_back_when_status_update_fails(self):
        submission = self.submit(self.s1)
        with patch.object(SubmissionStore, "update_status_for_student", side_effect=RuntimeError("db down")):
            with self.assertRaises(RuntimeError):
                approve_submission(self.admin, self.s1.pk, {"paid": True})

        self.s1.refresh_from_db()
        submission.refresh_from_db()
        self.assertEqual(self.s1.meta, {})
        self.assertEqual(submission.status, SubmissionStatus.PENDING)
        self.assertIsNone(submission.reviewed_by)

    def test_failed_notification_does_not_fail_approval(self):
        submission = self.submit(self.s1)
        with patch("notifications.service.create_notification_for_user", side_effect=RuntimeError("smtp")):
            with self.assertLogs("submissions.workflow", level="ERROR"):
                with self.captureOnCommitCallbacks(execute=True):
                    accepted = approve_submission(self.admin, self.s1.pk, {"paid": True})

        self.assertEqual(accepted, 1)
        submission.refresh_from_db()
        self.assertEqual(submission.status, SubmissionStatus.ACCEPTED)
        self.s1.refresh_from_db()
        self.assertEqual(self.s1.meta, {"paid": True})


class PendingCountTest(WorkflowTestMixin, TestCase):
    def test_scenario(self):
        start = pending_count()

        submission = self.submit(self.s1, file_reference="receipt.pdf")
        self.assertEqual(pending_count(), start + 1)

        approve_submission(self.admin, self.s1.pk, {"paid": True})
        submission.refresh_from_db()
        self.assertEqual(submission.status, "accepted")
        self.assertEqual(pending_count(), start)

        with self.assertRaises(ValidationError):
            self.submit(self.s1, file_reference="")
        self.assertEqual(pending_count(), start)

    def test_matches_pending_rows(self):
        self.submit(self.s1)
        self.submit(self.s1)
        self.submit(self.s2)
        self.assertEqual(pending_count(), 3)
        approve_submission(self.admin, self.s1.pk, {})
        self.assertEqual(pending_count(), 1)
        self.assertEqual(pending_count(), Submission.objects.filter(status="pending").count())


class SubmissionStoreTest(WorkflowTestMixin, TestCase):
    def test_update_status_for_student_reports_rows(self):
        store = SubmissionStore()
        self.submit(self.s1)
        self.submit(self.s1)
        self.assertEqual(store.update_status_for_student(self.s1.pk, "pending", "accepted"), 2)
        self.assertEqual(store.update_status_for_student(self.s1.pk, "pending", "accepted"), 0)
        self.assertEqual(store.count("accepted"), 2)
        self.assertEqual(store.find_by_student(self.s1.pk, status="accepted").count(), 2)
        self.assertFalse(store.find_by_student(self.s2.pk).exists())


class SubmissionApiTest(WorkflowTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.client = APIClient()

    def test_student_submits_fees(self):
        self.client.force_authenticate(self.s1_user)
        resp = self.client.post("/api/submissions/", {
            "student": self.s1.pk,
            "student_name": "Awa Diallo",
            "fee_selection": {"fees": [1, 2]},
            "file_reference": "uploads/receipt.pdf",
        }, format="json")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.data["status"], "pending")
        self.assertEqual(resp.data["file_reference"], "uploads/receipt.pdf")
        self.assertEqual(resp["X-Notification-Count"], "1")

    def test_submit_without_file_returns_400(self):
        self.client.force_authenticate(self.s1_user)
        resp = self.client.post("/api/submissions/", {"student": self.s1.pk, "fee_selection": {}}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("detail", resp.data)
        self.assertFalse(Submission.objects.exists())

    def test_submit_for_unknown_student_returns_404(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.post("/api/submissions/", {"student": "S999999X", "file_reference": "r.pdf"}, format="json")
        self.assertEqual(resp.status_code, 404)

    def test_submit_for_other_student_returns_403(self):
        self.client.force_authenticate(self.s1_user)
        resp = self.client.post("/api/submissions/", {"student": self.s2.pk, "file_reference": "r.pdf"}, format="json")
        self.assertEqual(resp.status_code, 403)

    def test_anonymous_rejected(self):
        resp = self.client.post("/api/submissions/", {"student": self.s1.pk, "file_reference": "r.pdf"}, format="json")
        self.assertEqual(resp.status_code, 401)

    def test_admin_approves_payment(self):
        self.submit(self.s1)
        self.client.force_authenticate(self.admin)
        resp = self.client.post(f"/api/submissions/students/{self.s1.pk}/approve/", {"meta": {"paid": True}}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["accepted"], 1)
        self.assertEqual(resp["X-Notification-Count"], "0")
        self.s1.refresh_from_db()
        self.assertEqual(self.s1.meta, {"paid": True})

    def test_student_cannot_approve_via_api(self):
        self.submit(self.s1)
        self.client.force_authenticate(self.s1_user)
        resp = self.client.post(f"/api/submissions/students/{self.s1.pk}/approve/", {"meta": {}}, format="json")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(pending_count(), 1)

    def test_approve_unknown_student_returns_404(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.post("/api/submissions/students/S999999X/approve/", {"meta": {}}, format="json")
        self.assertEqual(resp.status_code, 404)

    def test_list_is_scoped_to_student(self):
        self.submit(self.s1)
        self.submit(self.s2)
        self.client.force_authenticate(self.s1_user)
        resp = self.client.get("/api/submissions/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([row["student"] for row in resp.data], [self.s1.pk])

    def test_reviewer_lists_and_filters_by_status(self):
        self.submit(self.s1)
        self.submit(self.s2)
        approve_submission(self.admin, self.s2.pk, {})
        self.client.force_authenticate(self.admin)
        resp = self.client.get("/api/submissions/", {"status": "pending"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([row["student"] for row in resp.data], [self.s1.pk])

    def test_student_cannot_read_other_submission(self):
        other = self.submit(self.s2)
        self.client.force_authenticate(self.s1_user)
        resp = self.client.get(f"/api/submissions/{other.pk}/")
        self.assertEqual(resp.status_code, 404)

    def test_pending_count_endpoint(self):
        self.submit(self.s1)
        self.client.force_authenticate(self.s1_user)
        resp = self.client.get("/api/submissions/pending-count/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data, {"pending_count": 1})
