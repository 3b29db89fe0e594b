"""Notification API routes — SMS dispatch, SMS delivery log and admin emails."""

from fastapi import APIRouter, Depends, Query

from roktodao.application.services.admin_notification_service import AdminNotificationService
from roktodao.application.services.sms_dispatcher import SmsDispatcher
from roktodao.core.exceptions import DeliveryError
from roktodao.domain.models.admin_user import AdminUser
from roktodao.domain.repositories.notification_repository import NotificationAttemptRepository
from roktodao.domain.schemas.notification import (
    ApiResponse,
    NotificationAttemptPage,
    NotificationAttemptRead,
    SendEmailRequest,
    SendSmsRequest,
)
from roktodao.interfaces.api.deps import require_sms_log_viewer
from roktodao.interfaces.deps import (
    get_admin_notification_service,
    get_notification_repository,
    get_sms_dispatcher,
)

router = APIRouter(prefix="/api", tags=["Notifications"])


@router.post("/send-sms", response_model=ApiResponse, response_model_exclude_none=True)
async def send_sms(
    body: SendSmsRequest,
    dispatcher: SmsDispatcher = Depends(get_sms_dispatcher),
):
    """Send a transactional SMS through the first available provider."""
    result = await dispatcher.dispatch(body.destination, body.body)
    if not result.success:
        raise DeliveryError("All SMS providers failed to send the message.")
    return ApiResponse(success=True, message="SMS sent successfully.")


@router.get("/sms-logs", response_model=NotificationAttemptPage)
def list_sms_logs(
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    repo: NotificationAttemptRepository = Depends(get_notification_repository),
    viewer: AdminUser = Depends(require_sms_log_viewer),
):
    total = repo.count()
    logs = repo.list_recent(skip=(page - 1) * page_size, limit=page_size)
    return NotificationAttemptPage(
        items=[NotificationAttemptRead.model_validate(log) for log in logs],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=(total + page_size - 1) // page_size,
    )


@router.post("/send-email", response_model=ApiResponse, response_model_exclude_none=True)
async def send_email(
    body: SendEmailRequest,
    service: AdminNotificationService = Depends(get_admin_notification_service),
):
    """Email the site admin about a new donor, blood request or contact message."""
    message = await service.notify(body.type, body.data)
    return ApiResponse(success=True, message=message)
