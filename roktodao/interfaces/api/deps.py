"""Bearer-token dependencies for the back-office routes."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from roktodao.application.services.admin_auth_service import AdminAuthService
from roktodao.core.exceptions import ForbiddenException, UnauthorizedException
from roktodao.domain.models.admin_user import SMS_LOG_VIEWERS, AdminRole, AdminUser
from roktodao.interfaces.deps import get_admin_auth_service

security = HTTPBearer(auto_error=False)


def get_current_admin(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    auth: AdminAuthService = Depends(get_admin_auth_service),
) -> AdminUser:
    if credentials is None:
        raise UnauthorizedException("Not authenticated")
    return auth.resolve(credentials.credentials)


def require_role(*roles: AdminRole):
    """Dependency that lets through only accounts holding one of ``roles``."""
    allowed = frozenset(roles)

    def dependency(user: AdminUser = Depends(get_current_admin)) -> AdminUser:
        if user.role not in allowed:
            raise ForbiddenException("Your role cannot access this resource")
        return user

    return dependency


require_sms_log_viewer = require_role(*SMS_LOG_VIEWERS)
