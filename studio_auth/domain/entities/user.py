"""
User Entity

A studio-booking account as seen by the credential-reset subsystem.
"""

from datetime import datetime

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from studio_auth.domain.base import generate_uuid, utcnow


class User(SQLModel, table=True):
    """
    User entity - owned by the credential store.

    Business Rules:
    - Email is unique and compared case-insensitively
    - Password stored as bcrypt hash (cost factor 12 by default)
    - Never deleted by the reset subsystem, only updated
    """

    __tablename__ = "users"

    id: str = Field(default_factory=generate_uuid, primary_key=True, max_length=36)
    email: str = Field(unique=True, index=True, max_length=255)
    full_name: str = Field(default="", max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    is_active: bool = Field(default=True)
    is_admin: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_is_admin", "is_admin"),)
