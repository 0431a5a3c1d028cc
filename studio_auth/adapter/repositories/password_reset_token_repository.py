from typing import Optional

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from studio_auth.app.repositories.password_reset_token_repository import (
    IPasswordResetTokenRepository,
)
from studio_auth.domain.entities import PasswordResetToken
from .errors import translate_store_errors


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_store_errors
    async def put(self, token: PasswordResetToken) -> PasswordResetToken:
        """Insert or overwrite the token row keyed by user_id"""
        merged = await self.session.merge(token)
        await self.session.flush()
        return merged

    @translate_store_errors
    async def get(self, user_id: str) -> Optional[PasswordResetToken]:
        """Get the outstanding token of a user"""
        stmt = select(PasswordResetToken).where(PasswordResetToken.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_store_errors
    async def delete(self, user_id: str) -> None:
        """Delete the token of a user, if any"""
        stmt = delete(PasswordResetToken).where(PasswordResetToken.user_id == user_id)
        await self.session.exec(stmt)

    @translate_store_errors
    async def delete_if_match(self, user_id: str, token_hash: str) -> bool:
        """Compare-and-delete: only the row still holding token_hash goes"""
        stmt = delete(PasswordResetToken).where(
            PasswordResetToken.user_id == user_id,
            PasswordResetToken.token_hash == token_hash,
        )
        result = await self.session.exec(stmt)
        return result.rowcount == 1
