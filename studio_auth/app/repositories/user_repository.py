from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from studio_auth.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (case-insensitive)"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def update_password(
        self, user_id: str, password_hash: str, updated_at: datetime
    ) -> bool:
        """Set password hash if the user exists; False when no row matched"""
        pass
