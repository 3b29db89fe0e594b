"""Admin notification emails — new donors, new blood requests, contact form."""

from html import escape
from typing import Any, Callable, Dict, Optional

import structlog

from roktodao.config import get_settings
from roktodao.core.exceptions import AppError, ConfigurationError, ValidationError
from roktodao.domain.models.site_settings import SiteSettings
from roktodao.domain.repositories.settings_repository import SiteSettingsRepository
from roktodao.infrastructure.mailer import SmtpMailer

settings = get_settings()
logger = structlog.get_logger(__name__)

NEW_DONOR = "new_donor"
NEW_REQUEST = "new_request"
CONTACT_FORM = "contact_form"


def _field(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return escape(str(value)) if value is not None else "—"


def format_new_donor(data: Dict[str, Any]) -> str:
    return (
        "<h1>New Donor Alert!</h1>"
        "<p>A new donor has registered on your platform.</p>"
        "<ul>"
        f"<li><strong>Name:</strong> {_field(data, 'fullName')}</li>"
        f"<li><strong>Blood Group:</strong> {_field(data, 'bloodGroup')}</li>"
        f"<li><strong>Phone:</strong> {_field(data, 'phoneNumber')}</li>"
        f"<li><strong>Location:</strong> {_field(data, 'upazila')}, {_field(data, 'district')}, {_field(data, 'division')}</li>"
        "</ul>"
        "<p>Please review their profile in the admin panel.</p>"
    )


def format_new_request(data: Dict[str, Any]) -> str:
    return (
        "<h1>New Blood Request!</h1>"
        "<p>A new request for blood has been submitted.</p>"
        "<ul>"
        f"<li><strong>Patient Name:</strong> {_field(data, 'patientName')}</li>"
        f"<li><strong>Blood Group:</strong> {_field(data, 'bloodGroup')}</li>"
        f"<li><strong>Bags Needed:</strong> {_field(data, 'numberOfBags')}</li>"
        f"<li><strong>Hospital:</strong> {_field(data, 'hospitalLocation')}</li>"
        f"<li><strong>Contact:</strong> {_field(data, 'contactPhone')}</li>"
        "</ul>"
        "<p>Please review the request in the admin panel.</p>"
    )


def format_contact_form(data: Dict[str, Any]) -> str:
    return (
        "<h1>New Contact Message</h1>"
        "<ul>"
        f"<li><strong>Name:</strong> {_field(data, 'name')}</li>"
        f"<li><strong>Email:</strong> {_field(data, 'email')}</li>"
        "</ul>"
        f"<p>{_field(data, 'message')}</p>"
    )


# type -> (subject, body formatter, settings toggle or None when always sent)
TEMPLATES: Dict[str, tuple[str, Callable[[Dict[str, Any]], str], Optional[str]]] = {
    NEW_DONOR: (f"🎉 New Donor Registered on {settings.SITE_NAME}!", format_new_donor, "notify_new_donor"),
    NEW_REQUEST: (f"🩸 New Blood Request on {settings.SITE_NAME}!", format_new_request, "notify_new_request"),
    CONTACT_FORM: (f"✉️ New Contact Message on {settings.SITE_NAME}", format_contact_form, None),
}


class AdminNotificationService:
    def __init__(self, settings_repo: SiteSettingsRepository, mailer: SmtpMailer):
        self.settings_repo = settings_repo
        self.mailer = mailer

    def _load_settings(self) -> SiteSettings:
        site_settings = self.settings_repo.get_global()
        if site_settings is None:
            logger.warning("email_settings_missing")
            raise ConfigurationError("Email settings not configured.")
        if not site_settings.admin_email:
            raise ConfigurationError("Admin email not set in settings.")
        return site_settings

    async def notify(self, notification_type: str, data: Dict[str, Any]) -> Optional[str]:
        """Email the admin. Returns a message when the notification is switched off."""
        site_settings = self._load_settings()

        template = TEMPLATES.get(notification_type)
        if template is None:
            raise ValidationError("Invalid notification type.")
        subject, formatter, toggle = template

        if toggle and not getattr(site_settings, toggle):
            logger.info("admin_notification_disabled", type=notification_type)
            return f"Notification for {notification_type.replace('_', ' ')} is disabled."

        try:
            await self.mailer.send(site_settings.admin_email, subject, formatter(data or {}))
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error("admin_notification_failed", type=notification_type, error=str(e))
            raise AppError("Failed to send email.") from e
        logger.info("admin_notification_sent", type=notification_type)
        return None
