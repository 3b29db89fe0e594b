"""SMS gateway HTTP clients.

Each provider exposes the same async ``send(destination, body)``: it returns
normally when the gateway accepted the message and raises ``ProviderError``
(or lets an ``httpx`` error escape) when it did not. Providers never retry;
falling back to the next gateway is the dispatcher's job.
"""

from dataclasses import dataclass
from typing import List, Optional

import httpx
import structlog

from roktodao.config import Settings
from roktodao.core.exceptions import ProviderError

logger = structlog.get_logger(__name__)

BULKSMSBD_ACCEPTED = 202


@dataclass(frozen=True)
class SmsProviderConfig:
    """Credentials and endpoint of one gateway, read once at startup."""

    name: str
    url: str
    api_key: str = ""
    sender_id: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.api_key and self.sender_id)


class SmsProvider:
    """Base class for SMS gateways."""

    def __init__(self, config: SmsProviderConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        # Tests inject httpx.MockTransport; production uses the default transport
        self._transport = transport

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport)

    async def send(self, destination: str, body: str) -> None:
        raise NotImplementedError


class GatewaySmsProvider(SmsProvider):
    """Self-hosted gateway: any 2xx response means the message was queued."""

    async def send(self, destination: str, body: str) -> None:
        params = {
            "number": destination,
            "sms": body,
            "api_key": self.config.api_key,
            "senderid": self.config.sender_id,
        }
        async with self._client() as client:
            response = await client.get(self.config.url, params=params)

        if not response.is_success:
            raise ProviderError(
                f"{self.name} returned HTTP {response.status_code}",
                details={"status_code": response.status_code},
            )


class BulkSmsBdProvider(SmsProvider):
    """BulkSMSBD: HTTP 200 with ``response_code`` 202 in the JSON body on success."""

    async def send(self, destination: str, body: str) -> None:
        params = {
            "api_key": self.config.api_key,
            "type": "text",
            "number": destination,
            "senderid": self.config.sender_id,
            "message": body,
        }
        async with self._client() as client:
            response = await client.get(self.config.url, params=params)

        try:
            result = response.json()
        except ValueError:
            raise ProviderError(
                f"{self.name} returned a non-JSON body (HTTP {response.status_code})",
                details={"status_code": response.status_code},
            )

        response_code = result.get("response_code") if isinstance(result, dict) else None
        if response_code != BULKSMSBD_ACCEPTED:
            raise ProviderError(
                f"{self.name} rejected the message",
                details={"response_code": response_code},
            )


def build_sms_providers(settings: Settings) -> List[SmsProvider]:
    """Ordered provider list: the self-hosted gateway first, BulkSMSBD as fallback."""
    return [
        GatewaySmsProvider(
            SmsProviderConfig(
                name="gateway",
                url=settings.SMS_GATEWAY_URL,
                api_key=settings.SMS_GATEWAY_API_KEY,
                sender_id=settings.SMS_GATEWAY_SENDER_ID,
            )
        ),
        BulkSmsBdProvider(
            SmsProviderConfig(
                name="bulksmsbd",
                url=settings.BULKSMSBD_API_URL,
                api_key=settings.BULKSMSBD_API_KEY,
                sender_id=settings.BULKSMSBD_SENDER_ID,
            )
        ),
    ]
