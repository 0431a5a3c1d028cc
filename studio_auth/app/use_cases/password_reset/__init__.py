"""
Password Reset Use Cases

Issue, verify and consume single-use password reset tokens.
"""

from .request_password_reset_use_case import RequestPasswordResetUseCase, build_reset_link
from .verify_reset_token_use_case import VerifyResetTokenUseCase
from .complete_password_reset_use_case import CompletePasswordResetUseCase
from .dtos import (
    ResetPolicy,
    ResetRequestedResponse,
    TokenValidResponse,
    PasswordUpdatedResponse,
)

__all__ = [
    # Use Cases
    "RequestPasswordResetUseCase",
    "VerifyResetTokenUseCase",
    "CompletePasswordResetUseCase",
    # Policy
    "ResetPolicy",
    # DTOs - Responses
    "ResetRequestedResponse",
    "TokenValidResponse",
    "PasswordUpdatedResponse",
    # Helpers
    "build_reset_link",
]
