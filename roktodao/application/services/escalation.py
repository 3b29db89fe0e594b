"""Failure escalation — alerts operations staff when no SMS provider delivered."""

from datetime import datetime
from html import escape

import pytz
import structlog

from roktodao.application.results import SideEffectResult
from roktodao.config import get_settings
from roktodao.core.exceptions import ConfigurationError, PersistenceError
from roktodao.infrastructure.mailer import SmtpMailer

settings = get_settings()
logger = structlog.get_logger(__name__)
tz = pytz.timezone(settings.TIMEZONE)


def format_failure_alert(destination: str, body: str) -> str:
    now = datetime.now(tz)
    return (
        "<h1>SMS Delivery Failed</h1>"
        "<p>All configured SMS providers failed to deliver a message.</p>"
        "<ul>"
        f"<li><strong>Recipient:</strong> {escape(destination)}</li>"
        f"<li><strong>Time:</strong> {now.strftime('%d/%m/%Y %H:%M')} ({settings.TIMEZONE})</li>"
        "</ul>"
        f"<p><strong>Message:</strong></p><pre>{escape(body)}</pre>"
        "<p>Check the provider credentials and the SMS logs in the admin panel.</p>"
    )


class FailureEscalation:
    def __init__(self, mailer: SmtpMailer, ops_email: str):
        self.mailer = mailer
        self.ops_email = ops_email

    async def escalate(self, destination: str, body: str) -> SideEffectResult:
        try:
            if not self.ops_email:
                raise ConfigurationError("No operations alert address configured.")
            await self.mailer.send(
                self.ops_email,
                f"[{settings.SITE_NAME}] SMS delivery failed for {destination}",
                format_failure_alert(destination, body),
            )
        except Exception as e:
            # Reported in the result, never raised
            error = PersistenceError(f"Escalation email not sent: {e}")
            logger.error("sms_escalation_failed", recipient=destination, error=str(e))
            return SideEffectResult.failed(error)

        logger.info("sms_escalation_sent", recipient=destination)
        return SideEffectResult.succeeded()
