"""
Alert Dispatcher

Sends emergency SMS alerts through the Twilio Messages REST API.
Credentials and the emergency contact come from settings at process start.
One attempt per event; failures are reported as a DispatchResult, never
raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from ashwini.config import Settings, settings
from ashwini.models.schemas import DispatchResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlertConfig:
    """Twilio account and destination used for outbound alerts."""

    account_sid: str
    auth_token: str
    from_number: str
    contact: str
    api_base: str = "https://api.twilio.com/2010-04-01"

    @classmethod
    def from_settings(cls, config: Settings) -> "AlertConfig":
        return cls(
            account_sid=config.TWILIO_ACCOUNT_SID,
            auth_token=config.TWILIO_AUTH_TOKEN,
            from_number=config.TWILIO_FROM_NUMBER,
            contact=config.EMERGENCY_CONTACT,
            api_base=config.TWILIO_API_BASE,
        )

    @property
    def is_configured(self) -> bool:
        return all((self.account_sid, self.auth_token, self.from_number))

    @property
    def messages_url(self) -> str:
        return f"{self.api_base.rstrip('/')}/Accounts/{self.account_sid}/Messages.json"


class AlertDispatcher:
    """Outbound SMS sender.

    Args:
        config: Account credentials and the default emergency contact.
        transport: Optional httpx transport (tests pass a MockTransport).
    """

    def __init__(
        self,
        config: AlertConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self._transport = transport

    async def dispatch(self, contact: str, message: str) -> DispatchResult:
        """Send *message* to *contact*."""
        if not self.config.is_configured:
            logger.error("SMS alert not sent: Twilio credentials are not configured")
            return DispatchResult(success=False, error="SMS alerts are not configured.")
        if not contact:
            logger.error("SMS alert not sent: no destination number")
            return DispatchResult(success=False, error="No emergency contact is configured.")

        logger.info("Sending emergency alert to %s", contact)
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self.config.messages_url,
                    auth=(self.config.account_sid, self.config.auth_token),
                    data={
                        "To": contact,
                        "From": self.config.from_number,
                        "Body": message,
                    },
                )
        except httpx.HTTPError as exc:
            logger.error("Network error while sending SMS: %s", exc)
            return DispatchResult(
                success=False,
                error="A network error occurred while sending the alert.",
            )

        if response.is_success:
            logger.info("Emergency SMS sent")
            return DispatchResult(success=True)

        error = None
        try:
            payload = response.json()
            if isinstance(payload, dict):
                error = payload.get("message")
        except ValueError:
            error = response.text
        logger.error("Twilio API error (%s): %s", response.status_code, error)
        return DispatchResult(
            success=False,
            error=error or "Failed to send SMS due to an API error.",
        )

    async def dispatch_to_emergency_contact(self, message: str) -> DispatchResult:
        """Send *message* to the configured emergency contact."""
        return await self.dispatch(self.config.contact, message)


alert_dispatcher = AlertDispatcher(AlertConfig.from_settings(settings))
