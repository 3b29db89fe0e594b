"""OTP API routes — code issuance and OTP-verified password reset."""

from fastapi import APIRouter, Depends

from roktodao.application.services.otp_service import OtpService
from roktodao.application.services.password_reset_service import PasswordResetService
from roktodao.domain.schemas.notification import ApiResponse, GenerateOtpRequest, ResetPasswordRequest
from roktodao.interfaces.deps import get_otp_service, get_password_reset_service

router = APIRouter(prefix="/api", tags=["OTP"])


@router.post("/generate-otp", response_model=ApiResponse, response_model_exclude_none=True)
async def generate_otp(
    body: GenerateOtpRequest,
    service: OtpService = Depends(get_otp_service),
):
    await service.issue(body.identifier)
    # The code itself only ever leaves by SMS
    return ApiResponse(success=True, message="OTP has been sent to your phone number.")


@router.post("/reset-password", response_model=ApiResponse, response_model_exclude_none=True)
def reset_password(
    body: ResetPasswordRequest,
    service: PasswordResetService = Depends(get_password_reset_service),
):
    service.reset(body.identifier, body.code, body.new_secret)
    return ApiResponse(success=True, message="Password has been reset successfully.")
