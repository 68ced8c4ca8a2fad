# fees/tests.py
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from fees.models import Fee

User = get_user_model()


class FeeCatalogTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="stu", password="pass")
        self.client = APIClient()
        self.client.force_authenticate(self.user)

    def _create_fees(self, n, **kwargs):
        for i in range(n):
            Fee.objects.create(name=kwargs.get("name", f"Frais {i}"), amount=Decimal("100.00") + i)

    def test_billable_excludes_nameless_fees(self):
        Fee.objects.create(name="Inscription", amount=Decimal("50.00"))
        Fee.objects.create(name=None, amount=Decimal("10.00"))
        Fee.objects.create(name="", amount=Decimal("10.00"))
        self.assertEqual(list(Fee.objects.billable().values_list("name", flat=True)), ["Inscription"])

    def test_default_page_size_is_15(self):
        self._create_fees(20)
        resp = self.client.get("/api/fees/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["count"], 20)
        self.assertEqual(len(resp.data["results"]), 15)

        resp = self.client.get("/api/fees/", {"page": 2})
        self.assertEqual(len(resp.data["results"]), 5)

    def test_per_page_param(self):
        self._create_fees(8)
        resp = self.client.get("/api/fees/", {"per_page": 5})
        self.assertEqual(len(resp.data["results"]), 5)
        self.assertIsNotNone(resp.data["next"])

    def test_listing_hides_nameless_fees(self):
        Fee.objects.create(name="Scolarité", amount=Decimal("300.00"))
        Fee.objects.create(name=None, amount=Decimal("1.00"))
        resp = self.client.get("/api/fees/")
        self.assertEqual([row["name"] for row in resp.data["results"]], ["Scolarité"])

    def test_amount_filters(self):
        Fee.objects.create(name="Cantine", amount=Decimal("20.00"))
        Fee.objects.create(name="Scolarité", amount=Decimal("300.00"))
        resp = self.client.get("/api/fees/", {"amount_min": 100})
        self.assertEqual([row["name"] for row in resp.data["results"]], ["Scolarité"])

    def test_catalog_is_read_only(self):
        resp = self.client.post("/api/fees/", {"name": "Nouveau", "amount": "1.00"}, format="json")
        self.assertEqual(resp.status_code, 405)

    def test_requires_authentication(self):
        resp = APIClient().get("/api/fees/")
        self.assertEqual(resp.status_code, 401)
