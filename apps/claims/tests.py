from datetime import datetime, timezone
from unittest.mock import patch
import uuid

from django.core import mail
from django.db import DatabaseError
from django.test import SimpleTestCase, TestCase
from rest_framework.test import APIClient

from apps.brands.models import Brand
from apps.claims import dashboard
from apps.claims.models import Claim, ClaimStatus
from apps.claims.notifications import NotificationError
from apps.claims.serializers import REQUIRED_CLAIM_FIELDS


def claim_payload(brand, /, **overrides):
    payload = {
        "orderNumber": "ORD-1001",
        "email": "jane@example.com",
        "name": "Jane Doe",
        "address": "1 Main Street, Springfield",
        "phoneNumber": "555-0100",
        "brand": brand.id,
        "problemDescription": "The kettle stopped heating after two weeks.",
        "notificationAcknowledged": True,
    }
    payload.update(overrides)
    return payload


def make_claim(brand, order_number, status=ClaimStatus.PENDING, submitted=None, email="jane@example.com"):
    claim = Claim.objects.create(
        order_number=order_number,
        email=email,
        name="Jane Doe",
        address="1 Main Street",
        phone_number="555-0100",
        brand=brand,
        problem_description="Broken",
        notification_acknowledged=True,
        status=status,
    )
    if submitted is not None:
        Claim.objects.filter(pk=claim.pk).update(submission_date=submitted)
        claim.refresh_from_db()
    return claim


class TestClaimSubmission(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.brand = Brand.objects.create(name="Acme")

    def test_create_claim(self):
        response = self.client.post("/api/claims", claim_payload(self.brand), format="json")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["orderNumber"], "ORD-1001")
        self.assertEqual(response.data["brand"], self.brand.id)
        self.assertEqual(response.data["brandName"], "Acme")
        self.assertEqual(response.data["status"], "Pending")
        self.assertIsNotNone(response.data["submissionDate"])
        self.assertEqual(Claim.objects.count(), 1)

    def test_create_claim_sends_confirmation_email(self):
        self.client.post("/api/claims", claim_payload(self.brand), format="json")

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["jane@example.com"])
        self.assertIn("ORD-1001", mail.outbox[0].subject)
        self.assertIn("Acme", mail.outbox[0].body)

    def test_missing_fields_are_listed(self):
        payload = claim_payload(self.brand, name="   ")
        del payload["email"]
        del payload["brand"]

        response = self.client.post("/api/claims", payload, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "Missing required fields")
        self.assertEqual(response.data["missingFields"], ["email", "name", "brand"])
        self.assertFalse(Claim.objects.exists())

    def test_empty_body_lists_every_required_field(self):
        response = self.client.post("/api/claims", {}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["missingFields"], list(REQUIRED_CLAIM_FIELDS))

    def test_unacknowledged_notification_is_rejected(self):
        for value in (False, "false", 0):
            response = self.client.post(
                "/api/claims",
                claim_payload(self.brand, notificationAcknowledged=value),
                format="json",
            )
            self.assertEqual(response.status_code, 400)
            self.assertIn("acknowledge", response.data["error"])
        self.assertFalse(Claim.objects.exists())
        self.assertEqual(len(mail.outbox), 0)

    def test_unacknowledged_notification_wins_over_other_errors(self):
        response = self.client.post(
            "/api/claims",
            claim_payload(self.brand, email="not-an-email", notificationAcknowledged=False),
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("acknowledge", response.data["error"])

    def test_duplicate_order_number_is_a_conflict(self):
        first = self.client.post("/api/claims", claim_payload(self.brand), format="json")
        second = self.client.post(
            "/api/claims",
            claim_payload(self.brand, email="other@example.com", name="Someone Else"),
            format="json",
        )

        self.assertEqual(first.status_code, 201)
        self.assertEqual(second.status_code, 400)
        self.assertEqual(second.data["error"], "A claim with this order number already exists")
        self.assertEqual(Claim.objects.filter(order_number="ORD-1001").count(), 1)
        self.assertEqual(len(mail.outbox), 1)

    def test_status_is_always_pending_on_creation(self):
        response = self.client.post(
            "/api/claims",
            claim_payload(self.brand, status="Resolved"),
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["status"], "Pending")
        self.assertEqual(Claim.objects.get().status, ClaimStatus.PENDING)

    def test_unknown_brand_is_rejected(self):
        response = self.client.post("/api/claims", claim_payload(self.brand, brand=9999), format="json")

        self.assertEqual(response.status_code, 400)
        self.assertIn("brand", response.data["details"])

    def test_invalid_email_is_rejected(self):
        response = self.client.post("/api/claims", claim_payload(self.brand, email="nope"), format="json")

        self.assertEqual(response.status_code, 400)
        self.assertIn("email", response.data["details"])

    def test_non_object_body_is_rejected(self):
        response = self.client.post("/api/claims", [1, 2], format="json")

        self.assertEqual(response.status_code, 400)

    def test_malformed_json_is_a_client_error(self):
        response = self.client.post("/api/claims", data="{not json", content_type="application/json")

        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.json())

    @patch("apps.claims.views.send_claim_submission_email", side_effect=NotificationError("smtp down"))
    def test_notification_failure_is_a_server_error(self, mocked_send):
        response = self.client.post("/api/claims", claim_payload(self.brand), format="json")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["error"], "Failed to submit claim")
        self.assertEqual(response.data["details"], "smtp down")
        mocked_send.assert_called_once()

    @patch("apps.claims.serializers.ClaimSerializer.save", side_effect=DatabaseError("db is gone"))
    def test_persistence_failure_is_a_server_error(self, mocked_save):
        response = self.client.post("/api/claims", claim_payload(self.brand), format="json")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["details"], "db is gone")
        self.assertEqual(len(mail.outbox), 0)

    def test_trailing_slash_is_accepted(self):
        response = self.client.post("/api/claims/", claim_payload(self.brand), format="json")

        self.assertEqual(response.status_code, 201)


class TestClaimLookup(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.brand = Brand.objects.create(name="Acme")
        self.claim = make_claim(self.brand, "ORD-1")
        make_claim(self.brand, "ORD-2", email="bob@example.com")

    def test_retrieve(self):
        response = self.client.get(f"/api/claims/{self.claim.id}")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["id"], str(self.claim.id))
        self.assertEqual(response.data["orderNumber"], "ORD-1")

    def test_retrieve_unknown_claim(self):
        response = self.client.get(f"/api/claims/{uuid.uuid4()}")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"], "Claim not found")

    def test_retrieve_malformed_id(self):
        response = self.client.get("/api/claims/not-a-uuid")

        self.assertEqual(response.status_code, 404)

    def test_track_by_order_number_and_email(self):
        response = self.client.get("/api/claims", {"orderNumber": "ORD-1", "email": "jane@example.com"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual([c["orderNumber"] for c in response.data], ["ORD-1"])

    def test_track_with_wrong_email_returns_empty_list(self):
        response = self.client.get("/api/claims", {"orderNumber": "ORD-1", "email": "bob@example.com"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, [])

    def test_order_number_alone_is_rejected(self):
        response = self.client.get("/api/claims", {"orderNumber": "ORD-1"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "orderNumber and email must be given together")

    def test_email_alone_is_rejected(self):
        response = self.client.get("/api/claims", {"email": "jane@example.com"})

        self.assertEqual(response.status_code, 400)

    def test_list_without_filters_returns_everything(self):
        response = self.client.get("/api/claims")

        self.assertEqual(len(response.data), 2)

    def test_list_with_unknown_status_filter(self):
        response = self.client.get("/api/claims", {"status": "Lost"})

        self.assertEqual(response.status_code, 400)


class TestClaimStatusUpdate(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.brand = Brand.objects.create(name="Acme")
        self.claim = make_claim(self.brand, "ORD-1")

    def test_update_changes_only_status(self):
        before = Claim.objects.values().get(pk=self.claim.pk)

        response = self.client.patch(
            f"/api/claims/{self.claim.id}", {"status": "In Progress"}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["status"], "In Progress")
        after = Claim.objects.values().get(pk=self.claim.pk)
        self.assertEqual(after.pop("status"), "In Progress")
        before.pop("status")
        after.pop("updated_at")
        before.pop("updated_at")
        self.assertEqual(after, before)

    def test_update_sends_one_status_email(self):
        self.client.patch(f"/api/claims/{self.claim.id}", {"status": "Resolved"}, format="json")

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["jane@example.com"])
        self.assertIn("Resolved", mail.outbox[0].subject)

    def test_unknown_status_is_rejected(self):
        response = self.client.patch(f"/api/claims/{self.claim.id}", {"status": "Lost"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "Invalid status")
        self.assertEqual(response.data["allowed"], ["Pending", "In Progress", "Resolved", "Rejected"])
        self.claim.refresh_from_db()
        self.assertEqual(self.claim.status, ClaimStatus.PENDING)
        self.assertEqual(len(mail.outbox), 0)

    def test_missing_status_is_rejected(self):
        response = self.client.patch(f"/api/claims/{self.claim.id}", {}, format="json")

        self.assertEqual(response.status_code, 400)

    def test_unknown_claim(self):
        response = self.client.patch(f"/api/claims/{uuid.uuid4()}", {"status": "Resolved"}, format="json")

        self.assertEqual(response.status_code, 404)

    @patch("apps.claims.views.send_claim_status_update_email", side_effect=NotificationError("smtp down"))
    def test_notification_failure_is_a_server_error(self, mocked_send):
        response = self.client.patch(f"/api/claims/{self.claim.id}", {"status": "Rejected"}, format="json")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["error"], "Failed to update claim")


class TestDashboardEndpoint(TestCase):
    def setUp(self):
        self.client = APIClient()
        brand = Brand.objects.create(name="Acme")
        make_claim(brand, "ORD-1", ClaimStatus.RESOLVED, datetime(2024, 1, 1, tzinfo=timezone.utc))
        make_claim(brand, "ORD-2", ClaimStatus.PENDING, datetime(2024, 2, 1, tzinfo=timezone.utc))
        make_claim(brand, "ORD-3", ClaimStatus.RESOLVED, datetime(2024, 3, 1, tzinfo=timezone.utc))

    def test_defaults_to_all_newest_first(self):
        response = self.client.get("/api/claims/dashboard")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["statusFilter"], "All")
        self.assertEqual(response.data["sortOrder"], "desc")
        self.assertEqual([c["orderNumber"] for c in response.data["claims"]], ["ORD-3", "ORD-2", "ORD-1"])

    def test_filter_and_sort(self):
        response = self.client.get("/api/claims/dashboard", {"status": "Resolved", "sort": "asc"})

        self.assertEqual([c["orderNumber"] for c in response.data["claims"]], ["ORD-1", "ORD-3"])

    def test_unknown_filter(self):
        response = self.client.get("/api/claims/dashboard", {"status": "Lost"})

        self.assertEqual(response.status_code, 400)


class TestDashboardState(SimpleTestCase):
    def setUp(self):
        self.claims = [
            {"id": "a", "status": "Pending", "submissionDate": "2024-02-01T09:00:00Z"},
            {"id": "b", "status": "Resolved", "submissionDate": "2024-01-01T09:00:00Z"},
            {"id": "c", "status": "Resolved", "submissionDate": "2024-03-01T09:00:00+00:00"},
            {"id": "d", "status": "Rejected", "submissionDate": datetime(2023, 12, 1, 9, 0)},
        ]
        self.state = dashboard.load_claims(dashboard.DashboardState(), self.claims)

    def ids(self, state):
        return [claim["id"] for claim in dashboard.visible_claims(state)]

    def test_defaults(self):
        state = dashboard.DashboardState()

        self.assertEqual(state.status_filter, "All")
        self.assertEqual(state.sort_order, "desc")
        self.assertEqual(dashboard.visible_claims(state), [])

    def test_all_sorted_newest_first(self):
        self.assertEqual(self.ids(self.state), ["c", "a", "b", "d"])

    def test_filter_resolved(self):
        state = dashboard.set_status_filter(self.state, "Resolved")

        visible = dashboard.visible_claims(state)
        self.assertEqual({claim["status"] for claim in visible}, {"Resolved"})
        self.assertEqual([claim["id"] for claim in visible], ["c", "b"])

    def test_toggle_sort_reverses_order(self):
        toggled = dashboard.toggle_sort_order(self.state)

        self.assertEqual(toggled.sort_order, "asc")
        self.assertEqual(self.ids(toggled), list(reversed(self.ids(self.state))))
        self.assertEqual(dashboard.toggle_sort_order(toggled).sort_order, "desc")

    def test_status_update_patches_one_row(self):
        state = dashboard.apply_status_update(self.state, "a", "In Progress")

        self.assertEqual(state.claims[0], {**self.claims[0], "status": "In Progress"})
        self.assertEqual(state.claims[1:], self.state.claims[1:])
        self.assertEqual(self.state.claims[0]["status"], "Pending")

    def test_status_update_matches_uuid_ids(self):
        claim_id = uuid.uuid4()
        state = dashboard.load_claims(
            dashboard.DashboardState(),
            [{"id": str(claim_id), "status": "Pending", "submissionDate": "2024-01-01T00:00:00Z"}],
        )

        state = dashboard.apply_status_update(state, claim_id, "Resolved")

        self.assertEqual(state.claims[0]["status"], "Resolved")

    def test_updated_row_moves_between_filters(self):
        state = dashboard.set_status_filter(self.state, "Resolved")
        state = dashboard.apply_status_update(state, "a", "Resolved")

        self.assertEqual(self.ids(state), ["c", "a", "b"])

    def test_rejects_unknown_values(self):
        with self.assertRaises(ValueError):
            dashboard.set_status_filter(self.state, "Lost")
        with self.assertRaises(ValueError):
            dashboard.apply_status_update(self.state, "a", "Lost")
        with self.assertRaises(ValueError):
            dashboard.set_sort_order(self.state, "sideways")

    def test_reduce(self):
        state = dashboard.DashboardState()
        for action in [
            (dashboard.LOAD_CLAIMS, self.claims),
            (dashboard.SET_STATUS_FILTER, "Resolved"),
            (dashboard.TOGGLE_SORT_ORDER, None),
            (dashboard.STATUS_UPDATED, ("d", "Resolved")),
        ]:
            state = dashboard.reduce(state, action)

        self.assertEqual(self.ids(state), ["d", "b", "c"])

    def test_reduce_unknown_action(self):
        with self.assertRaises(ValueError):
            dashboard.reduce(self.state, ("delete_claim", "a"))
