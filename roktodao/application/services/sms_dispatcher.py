"""SMS dispatcher — delivers a text through the first provider that accepts it.

Flow for one ``dispatch`` call:
- providers are tried strictly in order, each at most once
- an unconfigured provider is skipped with a warning
- any exception from a provider counts as that provider's failure
- exactly one delivery log row is written with the final outcome
- when every provider failed, operations staff get an escalation email
"""

from typing import Sequence

import structlog

from roktodao.application.results import DispatchResult
from roktodao.application.services.delivery_log import DeliveryLogWriter
from roktodao.application.services.escalation import FailureEscalation
from roktodao.core.exceptions import ValidationError
from roktodao.domain.models.notification_attempt import DeliveryOutcome
from roktodao.infrastructure.sms_providers import SmsProvider

logger = structlog.get_logger(__name__)


class SmsDispatcher:
    def __init__(
        self,
        providers: Sequence[SmsProvider],
        log_writer: DeliveryLogWriter,
        escalation: FailureEscalation,
    ):
        if not providers:
            raise ValueError("SmsDispatcher needs at least one provider")
        self.providers = list(providers)
        self.log_writer = log_writer
        self.escalation = escalation

    async def _try_provider(self, provider: SmsProvider, destination: str, body: str) -> bool:
        if not provider.is_configured:
            logger.warning("sms_provider_not_configured", provider=provider.name)
            return False

        try:
            await provider.send(destination, body)
        except Exception as e:
            logger.warning(
                "sms_provider_failed",
                provider=provider.name,
                recipient=destination,
                error_type=e.__class__.__name__,
                error=str(e),
            )
            return False

        logger.info("sms_provider_succeeded", provider=provider.name, recipient=destination)
        return True

    async def dispatch(self, destination: str, body: str) -> DispatchResult:
        if not destination or not destination.strip() or not body or not body.strip():
            raise ValidationError("Missing number or message.")

        provider_used = self.providers[0].name
        success = False
        for provider in self.providers:
            provider_used = provider.name
            if await self._try_provider(provider, destination, body):
                success = True
                break

        outcome = DeliveryOutcome.SUCCESS if success else DeliveryOutcome.FAILURE
        self.log_writer.record(destination, body, outcome, provider_used)

        if not success:
            logger.error("sms_dispatch_failed", recipient=destination, providers=len(self.providers))
            await self.escalation.escalate(destination, body)

        return DispatchResult(success=success, provider_used=provider_used)
