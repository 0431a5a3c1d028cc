"""
Verify Reset Token Use Case

Lets a client check whether a reset link is still usable before it asks the
user for a new password.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from studio_auth.app.services.errors import StoreError
from studio_auth.app.services.guards import read_store
from studio_auth.app.services.unit_of_work import UnitOfWork
from studio_auth.domain.base import utcnow
from studio_auth.libs.result import Result, Return
from .dtos import INVALID_TOKEN, SERVER_ERROR, ResetPolicy, TokenValidResponse, invalid_parameters
from .tokens import is_token_valid

logger = logging.getLogger(__name__)


class VerifyResetTokenUseCase:
    """
    Use case for verifying a password reset token.

    Read-only: the token is neither consumed nor modified, so the check can
    be repeated any number of times.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        policy: Optional[ResetPolicy] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.policy = policy or ResetPolicy()
        self.clock = clock

    async def execute(
        self, user_id: Optional[str], token: Optional[str]
    ) -> Result[TokenValidResponse]:
        """
        Execute verify reset token use case.

        Errors:
            - INVALID_PARAMETERS: user_id or token missing
            - INVALID_TOKEN: no token, wrong value, or expired
            - SERVER_ERROR: token store unavailable
        """
        if not user_id or not token:
            return Return.err(invalid_parameters("Token and user ID are required"))

        try:
            async with self.uow:
                stored = await read_store(
                    lambda: self.uow.password_reset_tokens.get(user_id),
                    self.policy.store_timeout_seconds,
                )
        except StoreError:
            logger.error("Reset token lookup failed for user %s", user_id, exc_info=True)
            return Return.err(SERVER_ERROR)

        if not is_token_valid(stored, token, self.clock()):
            return Return.err(INVALID_TOKEN)

        return Return.ok(TokenValidResponse())
