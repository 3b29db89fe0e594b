"""
API Dependencies — repositories and services wired per request.

Provider adapters and the mailer are built once at startup and kept on
``app.state``; tests replace ``get_sms_providers`` / ``get_mailer`` through
``app.dependency_overrides``.
"""

from datetime import timedelta
from typing import List

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from roktodao.application.services.admin_auth_service import AdminAuthService
from roktodao.application.services.admin_notification_service import AdminNotificationService
from roktodao.application.services.delivery_log import DeliveryLogWriter
from roktodao.application.services.escalation import FailureEscalation
from roktodao.application.services.otp_service import OtpService
from roktodao.application.services.password_reset_service import PasswordResetService
from roktodao.application.services.sms_dispatcher import SmsDispatcher
from roktodao.config import Settings, get_settings
from roktodao.domain.repositories.donor_repository import DonorRepository
from roktodao.domain.repositories.notification_repository import NotificationAttemptRepository
from roktodao.domain.repositories.otp_repository import OneTimeCodeRepository
from roktodao.infrastructure.database import get_db
from roktodao.infrastructure.mailer import SmtpMailer
from roktodao.infrastructure.repositories.admin_user_repository import SQLAlchemyAdminUserRepository
from roktodao.infrastructure.repositories.donor_repository import SQLAlchemyDonorRepository
from roktodao.infrastructure.repositories.notification_repository import (
    SQLAlchemyNotificationAttemptRepository,
)
from roktodao.infrastructure.repositories.otp_repository import SQLAlchemyOneTimeCodeRepository
from roktodao.infrastructure.repositories.settings_repository import SQLAlchemySiteSettingsRepository
from roktodao.infrastructure.sms_providers import SmsProvider


def get_sms_providers(request: Request) -> List[SmsProvider]:
    return request.app.state.sms_providers


def get_mailer(request: Request) -> SmtpMailer:
    return request.app.state.mailer


def get_notification_repository(db: Session = Depends(get_db)) -> NotificationAttemptRepository:
    return SQLAlchemyNotificationAttemptRepository(db)


def get_otp_repository(db: Session = Depends(get_db)) -> OneTimeCodeRepository:
    return SQLAlchemyOneTimeCodeRepository(db)


def get_donor_repository(db: Session = Depends(get_db)) -> DonorRepository:
    return SQLAlchemyDonorRepository(db)


def get_sms_dispatcher(
    providers: List[SmsProvider] = Depends(get_sms_providers),
    mailer: SmtpMailer = Depends(get_mailer),
    repo: NotificationAttemptRepository = Depends(get_notification_repository),
    settings: Settings = Depends(get_settings),
) -> SmsDispatcher:
    return SmsDispatcher(
        providers=providers,
        log_writer=DeliveryLogWriter(repo),
        escalation=FailureEscalation(mailer, settings.OPS_ALERT_EMAIL),
    )


def get_otp_service(
    codes: OneTimeCodeRepository = Depends(get_otp_repository),
    donors: DonorRepository = Depends(get_donor_repository),
    dispatcher: SmsDispatcher = Depends(get_sms_dispatcher),
) -> OtpService:
    return OtpService(codes, donors, dispatcher)


def get_password_reset_service(
    otp_service: OtpService = Depends(get_otp_service),
    donors: DonorRepository = Depends(get_donor_repository),
) -> PasswordResetService:
    return PasswordResetService(otp_service, donors)


def get_admin_notification_service(
    db: Session = Depends(get_db),
    mailer: SmtpMailer = Depends(get_mailer),
) -> AdminNotificationService:
    return AdminNotificationService(SQLAlchemySiteSettingsRepository(db), mailer)


def get_admin_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AdminAuthService:
    return AdminAuthService(
        SQLAlchemyAdminUserRepository(db),
        token_lifetime=timedelta(minutes=settings.JWT_EXPIRATION_MINUTES),
    )
