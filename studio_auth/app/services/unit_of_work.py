from abc import ABC, abstractmethod

from studio_auth.app.repositories.password_reset_token_repository import (
    IPasswordResetTokenRepository,
)
from studio_auth.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Transaction over the credential and token stores - application layer

    Leaving the context without commit discards pending writes, so a reset
    either updates the password and consumes the token together or does
    neither.

    Raises StoreError from commit when the store rejects the transaction.
    """

    # Bound in __aenter__
    users: IUserRepository
    password_reset_tokens: IPasswordResetTokenRepository

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork":
        pass

    @abstractmethod
    async def __aexit__(self, *args) -> None:
        pass

    @abstractmethod
    async def commit(self) -> None:
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass
