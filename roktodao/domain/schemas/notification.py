"""Pydantic schemas for SMS, OTP and email endpoints.

Request fields are optional so that missing values reach the services and
are rejected there with the application's own ``ValidationError``. Each field
also accepts the camelCase name the web client sends.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, BeforeValidator, Field

from roktodao.domain.models.notification_attempt import DeliveryOutcome


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


# Phone numbers and codes arrive padded from form inputs; passwords are kept as typed
Stripped = Annotated[Optional[str], BeforeValidator(_strip)]


class SendSmsRequest(BaseModel):
    destination: Stripped = Field(None, validation_alias=AliasChoices("destination", "number"))
    body: Optional[str] = Field(None, validation_alias=AliasChoices("body", "message"))


class GenerateOtpRequest(BaseModel):
    identifier: Stripped = Field(None, validation_alias=AliasChoices("identifier", "phoneNumber"))


class ResetPasswordRequest(BaseModel):
    identifier: Stripped = Field(None, validation_alias=AliasChoices("identifier", "phoneNumber"))
    code: Stripped = Field(None, validation_alias=AliasChoices("code", "otp"))
    new_secret: Optional[str] = Field(
        None, validation_alias=AliasChoices("newSecret", "new_secret", "newPassword")
    )


class SendEmailRequest(BaseModel):
    type: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)


class ApiResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None


class NotificationAttemptRead(BaseModel):
    id: int
    recipient: str
    body: str
    outcome: DeliveryOutcome
    provider_used: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class NotificationAttemptPage(BaseModel):
    items: List[NotificationAttemptRead]
    total: int
    page: int
    page_size: int
    total_pages: int
