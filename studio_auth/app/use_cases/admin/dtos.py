"""
Admin Use Case DTOs

Responses of the admin user-management use cases. Password hashes never
leave the application layer.
"""

from datetime import datetime

from pydantic import BaseModel

from studio_auth.domain.entities import User
from studio_auth.libs.result import Error

USER_NOT_FOUND = Error("USER_NOT_FOUND", "User not found")


class UserProfileResponse(BaseModel):
    """User record as exposed to administrators"""

    user_id: str
    email: str
    full_name: str
    is_active: bool
    is_admin: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserProfileResponse":
        return cls(
            user_id=user.id,
            email=user.email,
            full_name=user.full_name,
            is_active=user.is_active,
            is_admin=user.is_admin,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AdminStatusResponse(BaseModel):
    """Response for set admin status use case"""

    user_id: str
    is_admin: bool
    message: str


class ActiveStatusResponse(BaseModel):
    """Response for set active status use case"""

    user_id: str
    is_active: bool
    message: str
