"""
Complete Password Reset Use Case

Consumes a reset token and sets the user's new password.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from studio_auth.app.services.errors import StoreError
from studio_auth.app.services.guards import call_store, read_store
from studio_auth.app.services.password_hasher import PasswordHasher
from studio_auth.app.services.unit_of_work import UnitOfWork
from studio_auth.domain.base import utcnow
from studio_auth.libs.result import Error, Result, Return
from .dtos import (
    INVALID_TOKEN,
    SERVER_ERROR,
    PasswordUpdatedResponse,
    ResetPolicy,
    invalid_parameters,
)
from .tokens import hash_reset_token, is_token_valid

logger = logging.getLogger(__name__)


class CompletePasswordResetUseCase:
    """
    Use case for completing a password reset.

    Business Rules:
    - New password must be at least 8 characters
    - Token is re-validated here, never trusted from an earlier verify call
    - Token is consumed with a conditional delete: of two concurrent
      completions with the same token exactly one succeeds
    - Password update and token deletion commit together
    - Password is hashed with bcrypt before storing
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_hasher: PasswordHasher,
        policy: Optional[ResetPolicy] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.policy = policy or ResetPolicy()
        self.clock = clock

    def _validate_password(self, password: str) -> Result[None]:
        """
        Validate password strength.

        Only the minimum length is enforced for now.
        """
        min_length = self.policy.password_min_length
        if len(password) < min_length:
            return Return.err(
                Error(
                    "WEAK_PASSWORD",
                    f"Password must be at least {min_length} characters long",
                )
            )

        return Return.ok(None)

    async def execute(
        self,
        user_id: Optional[str],
        token: Optional[str],
        new_password: Optional[str],
    ) -> Result[PasswordUpdatedResponse]:
        """
        Execute complete password reset use case.

        Args:
            user_id: Owner of the reset token (from the reset link)
            token: Plain reset token (from the reset link)
            new_password: Password to set

        Returns:
            Result with confirmation message, or Error

        Errors:
            - INVALID_PARAMETERS: a field is missing
            - WEAK_PASSWORD: password does not meet the policy
            - INVALID_TOKEN: token missing, wrong, expired or already consumed
            - SERVER_ERROR: a store was unavailable; nothing was committed
        """
        if not user_id or not token or not new_password:
            return Return.err(
                invalid_parameters("Token, user ID and new password are required")
            )

        password_validation = self._validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        timeout = self.policy.store_timeout_seconds

        try:
            async with self.uow:
                stored = await read_store(
                    lambda: self.uow.password_reset_tokens.get(user_id), timeout
                )
                if not is_token_valid(stored, token, self.clock()):
                    return Return.err(INVALID_TOKEN)

                password_hash = self.password_hasher.hash(new_password)

                # Losing a race here means another request consumed the token
                consumed = await call_store(
                    self.uow.password_reset_tokens.delete_if_match(
                        user_id, hash_reset_token(token)
                    ),
                    timeout,
                )
                if not consumed:
                    return Return.err(INVALID_TOKEN)

                updated = await call_store(
                    self.uow.users.update_password(user_id, password_hash, self.clock()),
                    timeout,
                )
                if not updated:
                    logger.warning("Reset token held for missing user %s", user_id)
                    return Return.err(INVALID_TOKEN)

                await call_store(self.uow.commit(), timeout)
        except StoreError:
            logger.error("Password reset failed for user %s", user_id, exc_info=True)
            return Return.err(SERVER_ERROR)

        logger.info("Password reset completed for user %s", user_id)
        return Return.ok(PasswordUpdatedResponse())
