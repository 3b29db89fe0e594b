"""Back-office login and the signed-in account."""

from fastapi import APIRouter, Depends

from roktodao.application.services.admin_auth_service import AdminAuthService
from roktodao.domain.models.admin_user import AdminUser
from roktodao.domain.schemas.auth import AdminUserRead, LoginRequest, TokenResponse
from roktodao.interfaces.api.deps import get_current_admin
from roktodao.interfaces.deps import get_admin_auth_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, auth: AdminAuthService = Depends(get_admin_auth_service)):
    user = auth.authenticate(body.email, body.password)
    access_token, expires_in = auth.issue_token(user)
    return TokenResponse(
        access_token=access_token,
        expires_in=expires_in,
        user=AdminUserRead.model_validate(user),
    )


@router.get("/me", response_model=AdminUserRead)
def get_me(user: AdminUser = Depends(get_current_admin)):
    return AdminUserRead.model_validate(user)
