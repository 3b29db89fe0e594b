"""Delivery log writer — persists the final outcome of each SMS dispatch."""

import structlog

from roktodao.application.results import SideEffectResult
from roktodao.core.exceptions import PersistenceError
from roktodao.domain.models.notification_attempt import DeliveryOutcome, NotificationAttempt
from roktodao.domain.repositories.notification_repository import NotificationAttemptRepository

logger = structlog.get_logger(__name__)


class DeliveryLogWriter:
    def __init__(self, repo: NotificationAttemptRepository):
        self.repo = repo

    def record(
        self,
        recipient: str,
        body: str,
        outcome: DeliveryOutcome,
        provider_used: str,
    ) -> SideEffectResult:
        attempt = NotificationAttempt(
            recipient=recipient,
            body=body,
            outcome=outcome,
            provider_used=provider_used,
        )
        try:
            self.repo.create(attempt)
        except Exception as e:
            error = PersistenceError(f"Could not write SMS log: {e}")
            logger.error(
                "sms_log_write_failed",
                recipient=recipient,
                outcome=outcome.value,
                provider=provider_used,
                error=str(e),
            )
            return SideEffectResult.failed(error)

        return SideEffectResult.succeeded()
