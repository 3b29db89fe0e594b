"""SMTP mailer.

smtplib is blocking, so sends run in Starlette's threadpool to keep the
event loop free. Port 465 uses implicit TLS; on any other port the
connection is upgraded with STARTTLS when the server advertises it.
"""

import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr

import structlog
from starlette.concurrency import run_in_threadpool

from roktodao.config import Settings
from roktodao.core.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

SMTP_SSL_PORT = 465


@dataclass(frozen=True)
class SmtpConfig:
    host: str
    port: int
    user: str
    password: str
    sender_name: str

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.user)


class SmtpMailer:
    def __init__(self, config: SmtpConfig):
        self.config = config

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpMailer":
        return cls(
            SmtpConfig(
                host=settings.SMTP_HOST,
                port=settings.SMTP_PORT,
                user=settings.SMTP_USER,
                password=settings.SMTP_PASS,
                sender_name=f"{settings.SITE_NAME} Notifications",
            )
        )

    def build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((self.config.sender_name, self.config.user))
        message["To"] = to
        message["Subject"] = subject
        message.set_content("This message requires an HTML-capable mail client.")
        message.add_alternative(html, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        if self.config.port == SMTP_SSL_PORT:
            smtp = smtplib.SMTP_SSL(self.config.host, self.config.port)
        else:
            smtp = smtplib.SMTP(self.config.host, self.config.port)
        with smtp:
            if self.config.port != SMTP_SSL_PORT:
                smtp.ehlo()
                # Plain relays (port 25) may not offer STARTTLS
                if smtp.has_extn("starttls"):
                    smtp.starttls()
                    smtp.ehlo()
            if self.config.password:
                smtp.login(self.config.user, self.config.password)
            smtp.send_message(message)

    async def send(self, to: str, subject: str, html: str) -> None:
        """Send an HTML email. Raises ConfigurationError or smtplib/OS errors."""
        if not self.config.is_configured:
            raise ConfigurationError("SMTP transport is not configured.")

        message = self.build_message(to, subject, html)
        await run_in_threadpool(self._deliver, message)
        logger.info("Email sent", to=to, subject=subject)
