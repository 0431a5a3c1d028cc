"""
Use Case: Get User

Administrator lookup of a single account.
"""

from studio_auth.app.services.unit_of_work import UnitOfWork
from studio_auth.libs.result import Result, Return
from .dtos import USER_NOT_FOUND, UserProfileResponse


class GetUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str) -> Result[UserProfileResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(USER_NOT_FOUND)

            return Return.ok(UserProfileResponse.from_user(user))
