"""
Admin Use Cases

Administrator-only account management, guarded by the authorization gate.
"""

from .get_user_use_case import GetUserUseCase
from .set_admin_status_use_case import SetAdminStatusUseCase
from .set_active_status_use_case import SetActiveStatusUseCase
from .dtos import UserProfileResponse, AdminStatusResponse, ActiveStatusResponse

__all__ = [
    # Use Cases
    "GetUserUseCase",
    "SetAdminStatusUseCase",
    "SetActiveStatusUseCase",
    # DTOs - Responses
    "UserProfileResponse",
    "AdminStatusResponse",
    "ActiveStatusResponse",
]
