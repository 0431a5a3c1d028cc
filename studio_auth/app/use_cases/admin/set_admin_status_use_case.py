"""
Use Case: Set Admin Status

Grants or revokes administrator rights on an account.
"""

from studio_auth.app.services.unit_of_work import UnitOfWork
from studio_auth.domain.base import utcnow
from studio_auth.libs.result import Result, Return
from .dtos import USER_NOT_FOUND, AdminStatusResponse


class SetAdminStatusUseCase:
    """
    Grant or revoke administrator rights.

    Business Logic:
    1. Validate user exists
    2. Set is_admin and bump updated_at
    3. Commit

    Idempotent: setting the current value succeeds and changes nothing else
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, is_admin: bool) -> Result[AdminStatusResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(USER_NOT_FOUND)

            user.is_admin = is_admin
            user.updated_at = utcnow()
            await self.uow.users.update(user)

            await self.uow.commit()

            return Return.ok(
                AdminStatusResponse(
                    user_id=user_id,
                    is_admin=is_admin,
                    message="Admin rights granted" if is_admin else "Admin rights revoked",
                )
            )
