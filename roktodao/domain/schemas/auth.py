"""Pydantic schemas for back-office login."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator

from roktodao.domain.models.admin_user import AdminRole


def _normalize_email(value):
    return value.strip().lower() if isinstance(value, str) else value


class AdminUserRead(BaseModel):
    id: int
    email: str
    display_name: str
    role: AdminRole
    can_view_sms_logs: bool
    last_login_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    email: Annotated[str, BeforeValidator(_normalize_email)]
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: AdminUserRead
