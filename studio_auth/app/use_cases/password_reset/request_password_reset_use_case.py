"""
Request Password Reset Use Case

Issues a reset token for the account behind an email and mails the reset link.
"""

import logging
from datetime import datetime
from typing import Any, Callable, NamedTuple, Optional
from urllib.parse import urlencode

from studio_auth.app.services.errors import MailDeliveryError, StoreError
from studio_auth.app.services.guards import call_mailer, call_store, read_store
from studio_auth.app.services.mailer import Mailer
from studio_auth.app.services.unit_of_work import UnitOfWork
from studio_auth.domain.base import utcnow
from studio_auth.domain.entities import PasswordResetToken
from studio_auth.libs.result import Result, Return
from .dtos import ResetPolicy, ResetRequestedResponse, invalid_parameters
from .tokens import compute_expiry, generate_reset_token, hash_reset_token

logger = logging.getLogger(__name__)


class ResetRecipient(NamedTuple):
    """Detached copy of the user fields the reset email needs"""

    user_id: str
    email: str
    full_name: str


def build_reset_link(base_url: str, token: str, user_id: str) -> str:
    query = urlencode({"token": token, "userId": user_id})
    return f"{base_url.rstrip('/')}/reset-password?{query}"


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Token is 32 cryptographically secure random bytes, hex encoded
    - Only the SHA-256 hash of the token is stored
    - Token expires 24 hours after issue
    - Issuing a token overwrites the user's previous one
    - No email enumeration: unknown emails get the same response, after the
      same store work (one email lookup). Issuing the token and sending the
      email happen in issue_and_send, deferred through the schedule hook.
    - Store and mail failures are logged, never reported to the caller
    - Mail dispatch is not retried
    """

    def __init__(
        self,
        uow: UnitOfWork,
        mailer: Mailer,
        policy: Optional[ResetPolicy] = None,
        schedule: Optional[Callable[..., Any]] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Args:
            uow: Unit of work over the credential and token stores. Entered
                once for the lookup and again by issue_and_send.
            mailer: Outbound mail transport
            policy: Reset tunables, defaults when omitted
            schedule: Optional hook that runs issue_and_send after the
                response is sent (FastAPI BackgroundTasks.add_task). When
                omitted the token is issued and mailed before execute returns.
            clock: Source of the current naive UTC time
        """
        self.uow = uow
        self.mailer = mailer
        self.policy = policy or ResetPolicy()
        self.schedule = schedule
        self.clock = clock

    async def execute(self, email: Optional[str]) -> Result[ResetRequestedResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Email address the caller claims to own

        Returns:
            Result with the generic acknowledgement, or INVALID_PARAMETERS
            when the email is missing
        """
        if not email or not email.strip():
            return Return.err(invalid_parameters("Email is required"))

        try:
            recipient = await self._find_recipient(email.strip())
        except StoreError:
            logger.error("Password reset lookup failed", exc_info=True)
            return Return.ok(ResetRequestedResponse())

        if recipient is None:
            logger.info("Password reset requested for an unregistered email")
            return Return.ok(ResetRequestedResponse())

        if self.schedule is not None:
            self.schedule(self.issue_and_send, recipient)
        else:
            await self.issue_and_send(recipient)

        return Return.ok(ResetRequestedResponse())

    async def _find_recipient(self, email: str) -> Optional[ResetRecipient]:
        async with self.uow:
            user = await read_store(
                lambda: self.uow.users.get_by_email(email),
                self.policy.store_timeout_seconds,
            )
            if user is None:
                return None
            return ResetRecipient(user.id, user.email, user.full_name)

    async def issue_and_send(self, recipient: ResetRecipient) -> bool:
        """Store a fresh token for recipient and email it. False on failure."""
        try:
            token = await self._issue_token(recipient)
        except StoreError:
            logger.error(
                "Password reset token could not be stored for user %s",
                recipient.user_id,
                exc_info=True,
            )
            return False

        logger.info("Password reset token issued for user %s", recipient.user_id)
        return await self.send_reset_email(recipient, token)

    async def _issue_token(self, recipient: ResetRecipient) -> str:
        timeout = self.policy.store_timeout_seconds
        token = generate_reset_token()
        now = self.clock()
        reset_token = PasswordResetToken(
            user_id=recipient.user_id,
            token_hash=hash_reset_token(token),
            expires_at=compute_expiry(now, self.policy.token_ttl),
            created_at=now,
        )

        async with self.uow:
            await call_store(self.uow.password_reset_tokens.put(reset_token), timeout)
            await call_store(self.uow.commit(), timeout)

        return token

    async def send_reset_email(self, recipient: ResetRecipient, token: str) -> bool:
        """Dispatch the reset email once. Failure is logged for operators."""
        reset_link = build_reset_link(self.policy.reset_base_url, token, recipient.user_id)

        try:
            await call_mailer(
                self.mailer.send_password_reset(
                    to_email=recipient.email,
                    full_name=recipient.full_name,
                    reset_link=reset_link,
                ),
                self.policy.mail_timeout_seconds,
            )
        except MailDeliveryError:
            logger.error(
                "Password reset email delivery failed for user %s",
                recipient.user_id,
                exc_info=True,
            )
            return False

        logger.info("Password reset email sent to user %s", recipient.user_id)
        return True
