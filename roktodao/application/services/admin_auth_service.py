"""
Back-office sign-in.

Admins and moderators log in with email and password and receive a bearer
token whose subject is their account id. The role is read from the account on
every request, so demoting or deactivating someone takes effect immediately.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Tuple

import structlog

from roktodao.core.exceptions import UnauthorizedException
from roktodao.core.security import decode_token, encode_token, hash_password, verify_password
from roktodao.domain.models.admin_user import AdminRole, AdminUser
from roktodao.domain.repositories.admin_user_repository import AdminUserRepository

logger = structlog.get_logger(__name__)

TOKEN_TYPE = "admin_access"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AdminAuthService:
    def __init__(
        self,
        users: AdminUserRepository,
        token_lifetime: timedelta,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.users = users
        self.token_lifetime = token_lifetime
        self.clock = clock

    def authenticate(self, email: str, password: str) -> AdminUser:
        user = self.users.get_by_email(email or "")
        if user is None or not user.is_active or not verify_password(password or "", user.password_hash):
            logger.info("admin_login_rejected", email=email)
            raise UnauthorizedException("Incorrect email or password")

        user = self.users.mark_logged_in(user, self.clock())
        logger.info("admin_logged_in", admin_id=user.id, role=user.role.value)
        return user

    def issue_token(self, user: AdminUser) -> Tuple[str, int]:
        """Return the bearer token and its lifetime in seconds."""
        token = encode_token(
            {"sub": str(user.id), "role": user.role.value, "typ": TOKEN_TYPE},
            self.token_lifetime,
        )
        return token, int(self.token_lifetime.total_seconds())

    def resolve(self, token: str) -> AdminUser:
        """Map a bearer token back to an active account."""
        claims = decode_token(token)
        if claims is None or claims.get("typ") != TOKEN_TYPE:
            raise UnauthorizedException("Invalid or expired token")

        try:
            user_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError):
            raise UnauthorizedException("Invalid token")

        user = self.users.get_by_id(user_id)
        if user is None or not user.is_active:
            raise UnauthorizedException("Account not found or inactive")
        return user

    def ensure_account(
        self,
        email: str,
        password: str,
        role: AdminRole = AdminRole.ADMIN,
        display_name: str = "Admin",
    ) -> AdminUser:
        """Create the account unless one with this email exists already."""
        existing = self.users.get_by_email(email)
        if existing is not None:
            return existing

        user = self.users.create(
            AdminUser(
                email=email.strip().lower(),
                display_name=display_name,
                password_hash=hash_password(password),
                role=role,
            )
        )
        logger.info("admin_account_created", admin_id=user.id, role=role.value)
        return user
