# core/tests.py
import json

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser, Group
from django.test import TestCase, RequestFactory
from rest_framework.test import APIClient

from core.context_processors import shared
from core.models import Student
from core.roles import get_role_flags
from submissions.workflow import create_submission

User = get_user_model()


class RoleFlagsTest(TestCase):
    def test_anonymous_has_no_flags(self):
        self.assertIsNone(get_role_flags(AnonymousUser()))
        self.assertIsNone(get_role_flags(None))

    def test_student_flags(self):
        user = User.objects.create_user(username="stu", password="pass")
        student = Student.objects.create(user=user)
        flags = get_role_flags(User.objects.get(pk=user.pk))
        self.assertTrue(flags.is_student)
        self.assertFalse(flags.is_admin)
        self.assertFalse(flags.can_review)
        self.assertEqual(flags.student_id, student.pk)
        self.assertTrue(flags.acts_for(student.pk))

    def test_admin_group_flags(self):
        user = User.objects.create_user(username="boss", password="pass")
        user.groups.add(Group.objects.create(name="admin"))
        flags = get_role_flags(user)
        self.assertTrue(flags.is_admin)
        self.assertTrue(flags.can_review)
        self.assertTrue(flags.can_submit_for_others)
        self.assertIsNone(flags.student_id)

    def test_employee_without_permission_cannot_review(self):
        user = User.objects.create_user(username="clerk", password="pass")
        user.groups.add(Group.objects.create(name="employee"))
        flags = get_role_flags(user)
        self.assertTrue(flags.is_employee)
        self.assertFalse(flags.can_review)


class SharedContextTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="stu", password="pass", first_name="Awa", last_name="Diallo")
        self.student = Student.objects.create(user=self.user)
        self.client = APIClient()

    def test_anonymous_context(self):
        resp = self.client.get("/api/core/context/")
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(resp.data["auth"]["user"])
        self.assertEqual(resp.data["auth"]["role"], {"is_admin": None, "is_student": None, "is_employee": None})
        self.assertEqual(resp.data["notification_count"], 0)
        self.assertEqual(resp["X-Notification-Count"], "0")

    def test_context_counts_pending_submissions(self):
        create_submission(self.user, self.student.pk, None, {}, "receipt.pdf")
        self.client.force_authenticate(self.user)
        resp = self.client.get("/api/core/context/")
        self.assertEqual(resp.data["notification_count"], 1)
        self.assertEqual(resp.data["auth"]["user"]["username"], "stu")
        self.assertEqual(resp.data["auth"]["role"], {"is_admin": False, "is_student": True, "is_employee": False})

    def test_template_context_processor(self):
        request = RequestFactory().get("/")
        request.user = self.user
        ctx = shared(request)["shared"]
        self.assertEqual(ctx["notification_count"], 0)
        self.assertTrue(ctx["auth"]["role"]["is_student"])

    def test_api_responses_carry_role_header(self):
        resp = self.client.get("/api/core/context/")
        self.assertEqual(json.loads(resp["X-User-Role"]), {"is_admin": None, "is_student": None, "is_employee": None})

        self.client.force_authenticate(self.user)
        resp = self.client.get("/api/fees/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(json.loads(resp["X-User-Role"]), {"is_admin": False, "is_student": True, "is_employee": False})
        self.assertEqual(resp["X-Notification-Count"], "0")

    def test_header_only_on_api_paths(self):
        resp = self.client.get("/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(resp.has_header("X-Notification-Count"))
        self.assertFalse(resp.has_header("X-User-Role"))


class StudentDirectoryTest(TestCase):
    def setUp(self):
        self.u1 = User.objects.create_user(username="stu1", password="pass")
        self.s1 = Student.objects.create(user=self.u1)
        self.u2 = User.objects.create_user(username="stu2", password="pass")
        self.s2 = Student.objects.create(user=self.u2)
        self.admin = User.objects.create_user(username="admin", password="pass", is_staff=True)
        self.client = APIClient()

    def test_student_sees_only_self(self):
        self.client.force_authenticate(self.u1)
        resp = self.client.get("/api/core/students/")
        self.assertEqual([row["id"] for row in resp.data], [self.s1.pk])

    def test_reviewer_sees_everyone(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.get("/api/core/students/")
        self.assertEqual(len(resp.data), 2)

    def test_profile(self):
        self.client.force_authenticate(self.u1)
        resp = self.client.get("/api/core/me/")
        self.assertEqual(resp.data["id"], self.s1.pk)
        self.assertEqual(resp.data["meta"], {})


class SeedRolesTest(TestCase):
    def test_employee_group_can_review_after_seed(self):
        from django.core.management import call_command

        call_command("seed_roles", verbosity=0)
        user = User.objects.create_user(username="clerk", password="pass")
        user.groups.add(Group.objects.get(name="employee"))
        flags = get_role_flags(User.objects.get(pk=user.pk))
        self.assertTrue(flags.can_review)
        self.assertFalse(flags.is_admin)
        self.assertTrue(Group.objects.filter(name="student").exists())
