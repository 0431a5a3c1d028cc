"""
Password Reset Use Case DTOs (Data Transfer Objects)

Response classes and the reset policy shared by the three reset use cases.
"""

from datetime import timedelta

from pydantic import BaseModel

from studio_auth.libs.result import Error

RESET_REQUESTED_MESSAGE = "Password reset instructions have been sent to your email"
PASSWORD_UPDATED_MESSAGE = "Password has been updated successfully"


# ============================================================================
# Policy
# ============================================================================


class ResetPolicy(BaseModel):
    """Tunables of the reset flow, read from ApplicationConfig at the edge"""

    token_ttl_hours: int = 24
    password_min_length: int = 8
    reset_base_url: str = "https://studio-booking.example.com"
    store_timeout_seconds: float = 5.0
    mail_timeout_seconds: float = 10.0

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(hours=self.token_ttl_hours)

    @classmethod
    def from_config(cls, config) -> "ResetPolicy":
        return cls(
            token_ttl_hours=config.RESET_TOKEN_TTL_HOURS,
            password_min_length=config.PASSWORD_MIN_LENGTH,
            reset_base_url=config.RESET_BASE_URL,
            store_timeout_seconds=config.STORE_TIMEOUT_SECONDS,
            mail_timeout_seconds=config.MAIL_TIMEOUT_SECONDS,
        )


# ============================================================================
# Response DTOs
# ============================================================================


class ResetRequestedResponse(BaseModel):
    """Generic acknowledgement, identical for known and unknown emails"""

    message: str = RESET_REQUESTED_MESSAGE


class TokenValidResponse(BaseModel):
    """Response for verify reset token use case"""

    valid: bool = True


class PasswordUpdatedResponse(BaseModel):
    """Response for complete password reset use case"""

    message: str = PASSWORD_UPDATED_MESSAGE


# ============================================================================
# Errors
# ============================================================================


def invalid_parameters(message: str) -> Error:
    return Error("INVALID_PARAMETERS", message)


INVALID_TOKEN = Error("INVALID_TOKEN", "Invalid or expired password reset token")
SERVER_ERROR = Error("SERVER_ERROR", "An error occurred while processing the password reset")
