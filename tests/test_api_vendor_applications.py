"""
HTTP tests for /vendor-applications: submission, listing, review and stats.
"""

from __future__ import annotations

import httpx
import pytest

from app.core.exceptions import DownstreamError
from app.main import app as fastapi_app
from app.repositories.kv_store import KeyValueStore
from app.routers.vendor_applications import get_notifier
from app.services.notification import NotificationDispatcher
from app.services.vendor_application import VendorApplicationService


async def _submit(client, payload: dict) -> str:
    resp = await client.post("/vendor-applications", json=payload)
    assert resp.status_code == 200, resp.text
    return resp.json()["applicationId"]


class TestSubmit:
    async def test_end_to_end(self, client, application_payload, admin_headers) -> None:
        resp = await client.post("/vendor-applications", json=application_payload)

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["applicationId"]
        assert body["emailSent"] is True

        resp = await client.get("/vendor-applications", headers=admin_headers)
        assert resp.status_code == 200
        applications = resp.json()["applications"]
        assert len(applications) == 1
        listed = applications[0]
        assert listed["id"] == body["applicationId"]
        assert listed["status"] == "pending"
        assert listed["businessName"] == "Jane's Jams"
        assert listed["submittedAt"]
        assert listed["reviewedAt"] is None
        assert listed["reviewedBy"] is None
        assert listed["notes"] == ""

    async def test_sends_notification(self, client, application_payload, sent_emails) -> None:
        application_id = await _submit(client, application_payload)

        assert len(sent_emails) == 1
        assert application_id in sent_emails[0]["body"]["text"]

    async def test_email_failure_does_not_fail_submission(
        self, client, application_payload, admin_headers
    ) -> None:
        fastapi_app.dependency_overrides[get_notifier] = lambda: NotificationDispatcher(None)

        resp = await client.post("/vendor-applications", json=application_payload)

        assert resp.status_code == 200
        assert resp.json()["emailSent"] is False
        listed = (await client.get("/vendor-applications", headers=admin_headers)).json()
        assert [a["id"] for a in listed["applications"]] == [resp.json()["applicationId"]]

    async def test_unexpected_email_error_does_not_fail_submission(
        self, client, application_payload, admin_headers
    ) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"id": "x"}))
        fastapi_app.dependency_overrides[get_notifier] = lambda: NotificationDispatcher(
            "re_cl\u00e9", recipients=["organiser@example.com"], transport=transport
        )

        resp = await client.post("/vendor-applications", json=application_payload)

        assert resp.status_code == 200
        assert resp.json()["success"] is True
        assert resp.json()["emailSent"] is False
        listed = (await client.get("/vendor-applications", headers=admin_headers)).json()
        assert [a["id"] for a in listed["applications"]] == [resp.json()["applicationId"]]

    async def test_email_with_trailing_newline_is_rejected(self, client, application_payload) -> None:
        payload = {**application_payload, "email": "jane@example.com\n"}

        resp = await client.post("/vendor-applications", json=payload)

        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid email format", "field": "email"}

    @pytest.mark.parametrize(
        "field",
        [
            "businessName",
            "contactName",
            "email",
            "phone",
            "vendorType",
            "description",
            "productsServices",
            "foodPermits",
            "availabilityStartWeek",
        ],
    )
    async def test_missing_field(self, client, application_payload, field) -> None:
        payload = {**application_payload, field: ""}

        resp = await client.post("/vendor-applications", json=payload)

        assert resp.status_code == 400
        assert resp.json() == {"error": f"Missing required field: {field}", "field": field}

    async def test_invalid_email(self, client, application_payload) -> None:
        payload = {**application_payload, "email": "not-an-email"}

        resp = await client.post("/vendor-applications", json=payload)

        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid email format", "field": "email"}

    async def test_wrong_json_type(self, client, application_payload) -> None:
        payload = {**application_payload, "phone": 5551234}

        resp = await client.post("/vendor-applications", json=payload)

        assert resp.status_code == 400
        assert resp.json()["field"] == "phone"

    async def test_rejected_submission_is_not_stored(
        self, client, application_payload, admin_headers, sent_emails
    ) -> None:
        await client.post("/vendor-applications", json={**application_payload, "email": "x"})

        listed = (await client.get("/vendor-applications", headers=admin_headers)).json()
        assert listed == {"applications": []}
        assert sent_emails == []


class TestList:
    async def test_empty(self, client, admin_headers) -> None:
        resp = await client.get("/vendor-applications", headers=admin_headers)

        assert resp.status_code == 200
        assert resp.json() == {"applications": []}

    async def test_newest_first(self, client, application_payload, admin_headers) -> None:
        first = await _submit(client, application_payload)
        second = await _submit(client, {**application_payload, "businessName": "Bob's Bowls"})

        listed = (await client.get("/vendor-applications", headers=admin_headers)).json()
        ids = [a["id"] for a in listed["applications"]]
        assert set(ids) == {first, second}
        submitted = [a["submittedAt"] for a in listed["applications"]]
        assert submitted == sorted(submitted, reverse=True)

    async def test_unexpected_error_is_500(self, client, admin_headers, monkeypatch) -> None:
        async def boom(self):
            raise RuntimeError("boom")

        monkeypatch.setattr(VendorApplicationService, "list_all", boom)

        resp = await client.get("/vendor-applications", headers=admin_headers)

        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch applications", "details": "boom"}


class TestUpdate:
    async def test_approve(self, client, application_payload, admin_headers) -> None:
        application_id = await _submit(client, application_payload)

        resp = await client.put(
            f"/vendor-applications/{application_id}",
            json={"status": "approved", "notes": "looks good"},
            headers=admin_headers,
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        updated = body["application"]
        assert updated["status"] == "approved"
        assert updated["notes"] == "looks good"
        assert updated["reviewedBy"] == "admin"
        assert updated["reviewedAt"] is not None

        listed = (await client.get("/vendor-applications", headers=admin_headers)).json()
        assert listed["applications"][0]["status"] == "approved"

    async def test_unknown_id(self, client, admin_headers) -> None:
        resp = await client.put(
            "/vendor-applications/does-not-exist",
            json={"status": "approved"},
            headers=admin_headers,
        )

        assert resp.status_code == 404
        assert resp.json() == {"error": "Application not found"}

    async def test_invalid_status(self, client, application_payload, admin_headers) -> None:
        application_id = await _submit(client, application_payload)

        resp = await client.put(
            f"/vendor-applications/{application_id}",
            json={"status": "maybe"},
            headers=admin_headers,
        )

        assert resp.status_code == 400
        assert resp.json()["field"] == "status"


class TestStats:
    async def test_counts(self, client, application_payload, admin_headers) -> None:
        ids = [await _submit(client, application_payload) for _ in range(3)]
        for application_id, status in zip(ids, ["approved", "rejected"]):
            resp = await client.put(
                f"/vendor-applications/{application_id}",
                json={"status": status},
                headers=admin_headers,
            )
            assert resp.status_code == 200

        resp = await client.get("/vendor-applications/stats", headers=admin_headers)

        assert resp.status_code == 200
        assert resp.json() == {"total": 3, "pending": 1, "approved": 1, "rejected": 1}

    async def test_store_failure_is_500(self, client, admin_headers, monkeypatch) -> None:
        async def unavailable(self, keys):
            raise DownstreamError("Key-value store error", details="connection refused")

        monkeypatch.setattr(KeyValueStore, "mget", unavailable)

        resp = await client.get("/vendor-applications/stats", headers=admin_headers)

        assert resp.status_code == 500
        assert resp.json() == {
            "error": "Failed to fetch statistics",
            "details": "connection refused",
        }
