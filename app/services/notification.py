"""New-application notification emails via the Resend HTTP API.

Delivery is best-effort: :meth:`NotificationDispatcher.notify` never raises.
Every failure, including unexpected ones while building the request, is
logged and reported back as ``NotificationResult(success=False, error=...)``
so the submission response can still be returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from app.core.config import settings
from app.core.exceptions import NotificationError
from app.schemas.vendor_application import VendorApplication

logger = logging.getLogger(__name__)

_RULE = "-" * 58


@dataclass(frozen=True)
class NotificationResult:
    success: bool
    email_id: Optional[str] = None
    error: Optional[str] = None


def format_application_email(application: VendorApplication) -> tuple[str, str]:
    """Return ``(subject, text)`` for a new application."""
    subject = f"New Vendor Application: {application.business_name}"
    submitted = application.submitted_at.strftime("%Y-%m-%d %H:%M:%S %Z").strip()
    text = f"""New Vendor Application Submitted - Amherst Artisan Market

Application Details:
{_RULE}

BASIC INFORMATION
- Business Name: {application.business_name}
- Contact Person: {application.contact_name}
- Email: {application.email}
- Phone: {application.phone}
- Website: {application.website or 'Not provided'}
- Vendor Type: {application.vendor_type}

BUSINESS DETAILS
- Description: {application.description}
- Products/Services: {application.products_services}
- Experience: {application.experience or 'Not provided'}

FOOD PERMITS
{application.food_permits or 'Not provided'}

AVAILABILITY
- Start Week: {application.availability_start_week or 'Not provided'}

SPECIAL REQUIREMENTS
{application.special_requirements or 'None specified'}

{_RULE}

Application ID: {application.id}
Submitted: {submitted}

You can review this application in the admin dashboard.

Best regards,
Amherst Artisan Market System"""
    return subject, text


class NotificationDispatcher:
    """Sends one email per new application to the market organisers."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        api_url: str | None = None,
        sender: str | None = None,
        recipients: list[str] | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self._api_url = api_url or settings.resend_api_url
        self._sender = sender or settings.notification_from
        self._recipients = recipients if recipients is not None else list(settings.notification_to)
        self._timeout = timeout if timeout is not None else settings.email_timeout_seconds
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "NotificationDispatcher":
        return cls(settings.resend_api_key)

    async def notify(self, application: VendorApplication) -> NotificationResult:
        try:
            email_id = await self._send(application)
        except NotificationError as exc:
            logger.error("Notification for application %s failed: %s", application.id, exc)
            return NotificationResult(success=False, error=str(exc))
        except Exception as exc:
            logger.exception("Notification for application %s failed unexpectedly", application.id)
            return NotificationResult(success=False, error=f"Unexpected email error: {exc}")
        logger.info("Notification email sent for application %s: %s", application.id, email_id)
        return NotificationResult(success=True, email_id=email_id)

    async def _send(self, application: VendorApplication) -> str | None:
        if not self._api_key:
            raise NotificationError("Email service not configured")
        if not self._recipients:
            raise NotificationError("No notification recipients configured")

        subject, text = format_application_email(application)
        payload = {
            "from": self._sender,
            "to": self._recipients,
            "subject": subject,
            "text": text,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.post(self._api_url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise NotificationError(f"Email request failed: {exc}") from exc

        try:
            body = resp.json()
        except ValueError:
            body = {}

        if resp.is_error:
            message = body.get("message") if isinstance(body, dict) else None
            raise NotificationError(message or f"Email API responded {resp.status_code}")

        return body.get("id") if isinstance(body, dict) else None
