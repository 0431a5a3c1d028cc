"""
Reset token utilities

Generation, hashing, expiry and constant-time validation of reset tokens.
"""

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta
from typing import Optional

from studio_auth.domain.entities import PasswordResetToken

# 32 random bytes = 256 bits, hex encoded to 64 characters
TOKEN_BYTES = 32


def generate_reset_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def compute_expiry(now: datetime, ttl: timedelta) -> datetime:
    return now + ttl


def is_token_valid(
    stored: Optional[PasswordResetToken], presented_token: str, now: datetime
) -> bool:
    """
    A presented token is valid iff a token is stored for the user, its hash
    matches the stored hash, and now is strictly before the expiry.
    """
    if stored is None:
        return False

    presented_hash = hash_reset_token(presented_token)
    if not hmac.compare_digest(stored.token_hash, presented_hash):
        return False

    return now < stored.expires_at
