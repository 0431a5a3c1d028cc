from abc import ABC, abstractmethod
from typing import Optional

from studio_auth.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer

    Holds at most one token per user id. Every operation is atomic for its
    single key.
    """

    @abstractmethod
    async def put(self, token: PasswordResetToken) -> PasswordResetToken:
        """Store token, overwriting any token already held for the user"""
        pass

    @abstractmethod
    async def get(self, user_id: str) -> Optional[PasswordResetToken]:
        """Get the outstanding token of a user"""
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """Delete the token of a user, if any"""
        pass

    @abstractmethod
    async def delete_if_match(self, user_id: str, token_hash: str) -> bool:
        """Delete the token only if it still carries token_hash.

        Returns True when a row was deleted; False means the token was
        already consumed or superseded.
        """
        pass
