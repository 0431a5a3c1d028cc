"""
Use Case: Set Active Status

Activates or deactivates an account.
"""

from studio_auth.app.services.unit_of_work import UnitOfWork
from studio_auth.domain.base import utcnow
from studio_auth.libs.result import Result, Return
from .dtos import USER_NOT_FOUND, ActiveStatusResponse


class SetActiveStatusUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, is_active: bool) -> Result[ActiveStatusResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(USER_NOT_FOUND)

            user.is_active = is_active
            user.updated_at = utcnow()
            await self.uow.users.update(user)

            await self.uow.commit()

            return Return.ok(
                ActiveStatusResponse(
                    user_id=user_id,
                    is_active=is_active,
                    message="User activated" if is_active else "User deactivated",
                )
            )
