"""
PasswordResetToken Entity

Outstanding password reset attempt, one row per user.
"""

from datetime import datetime

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from studio_auth.domain.base import utcnow


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity - the single active reset token of a user.

    Business Rules:
    - user_id is the primary key: issuing a new token overwrites the old one
    - Token is stored as the SHA-256 hash of the emailed random string
    - Expires 24 hours after issue (checked on read, never actively purged)
    - Deleted when consumed by a successful password reset
    """

    __tablename__ = "password_reset_tokens"

    user_id: str = Field(primary_key=True, foreign_key="users.id", max_length=36)
    token_hash: str = Field(max_length=64)  # SHA-256 output

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_password_reset_expires_at", "expires_at"),)
