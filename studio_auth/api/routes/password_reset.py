from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, status
from pydantic import BaseModel, ConfigDict, Field

from studio_auth.api.error import raise_for_error
from studio_auth.app.services.mailer import Mailer
from studio_auth.app.services.password_hasher import PasswordHasher
from studio_auth.app.services.unit_of_work import UnitOfWork
from studio_auth.app.use_cases.password_reset import (
    CompletePasswordResetUseCase,
    PasswordUpdatedResponse,
    RequestPasswordResetUseCase,
    ResetPolicy,
    ResetRequestedResponse,
    TokenValidResponse,
    VerifyResetTokenUseCase,
)
from studio_auth.depends import (
    get_mailer,
    get_password_hasher,
    get_reset_policy,
    get_unit_of_work,
)
from studio_auth.libs.result import Error, Result

router = APIRouter(prefix="/auth/password-reset", tags=["Password Reset"])


# Fields are optional at the HTTP layer: a missing field is reported by the
# use case as INVALID_PARAMETERS, not by FastAPI as a validation error.


class RequestResetRequest(BaseModel):
    """
    Request password reset HTTP request payload

    Email format is not validated beyond being present.
    """

    email: Optional[str] = Field(None, description="Account email address")


class VerifyTokenRequest(BaseModel):
    """Verify reset token HTTP request payload"""

    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(None, alias="userId", description="User ID from the reset link")
    token: Optional[str] = Field(None, description="Reset token from the reset link")


class CompleteResetRequest(BaseModel):
    """Complete password reset HTTP request payload"""

    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(None, alias="userId", description="User ID from the reset link")
    token: Optional[str] = Field(None, description="Reset token from the reset link")
    new_password: Optional[str] = Field(
        None, alias="newPassword", description="New password (min 8 chars)"
    )


class PasswordResetActionRequest(BaseModel):
    """
    Single-endpoint payload: the action field selects the operation.

    action: "request" | "verify" | "reset"
    """

    model_config = ConfigDict(populate_by_name=True)

    action: Optional[str] = Field(None, description="request, verify or reset")
    email: Optional[str] = None
    user_id: Optional[str] = Field(None, alias="userId")
    token: Optional[str] = None
    new_password: Optional[str] = Field(None, alias="newPassword")


def _unwrap(result: Result):
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/request", status_code=status.HTTP_200_OK, response_model=ResetRequestedResponse)
async def request_password_reset(
    request: RequestResetRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: Mailer = Depends(get_mailer),
    policy: ResetPolicy = Depends(get_reset_policy),
):
    """
    Request Password Reset

    Issues a 24-hour reset token and emails the reset link. Both happen
    after the response, so known and unknown addresses answer after the
    same single lookup.

    Security:
        - No email enumeration (same response for registered and unknown emails)
        - Store and mail failures are logged, never reported

    Raises:
        - 400 Bad Request: INVALID_PARAMETERS (email missing)
    """
    use_case = RequestPasswordResetUseCase(
        uow, mailer, policy=policy, schedule=background_tasks.add_task
    )
    return _unwrap(await use_case.execute(request.email))


@router.post("/verify", status_code=status.HTTP_200_OK, response_model=TokenValidResponse)
async def verify_reset_token(
    request: VerifyTokenRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    policy: ResetPolicy = Depends(get_reset_policy),
):
    """
    Verify Reset Token

    Checks a reset link without consuming it.

    Raises:
        - 400 Bad Request: INVALID_PARAMETERS, INVALID_TOKEN
        - 500 Internal Server Error: token store unavailable
    """
    use_case = VerifyResetTokenUseCase(uow, policy=policy)
    return _unwrap(await use_case.execute(request.user_id, request.token))


@router.post("/complete", status_code=status.HTTP_200_OK, response_model=PasswordUpdatedResponse)
async def complete_password_reset(
    request: CompleteResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    policy: ResetPolicy = Depends(get_reset_policy),
):
    """
    Complete Password Reset

    Consumes the reset token and sets the new password.

    Raises:
        - 400 Bad Request: INVALID_PARAMETERS, WEAK_PASSWORD, INVALID_TOKEN
        - 500 Internal Server Error: store unavailable, nothing committed
    """
    use_case = CompletePasswordResetUseCase(uow, password_hasher, policy=policy)
    return _unwrap(
        await use_case.execute(request.user_id, request.token, request.new_password)
    )


@router.post("", status_code=status.HTTP_200_OK)
async def password_reset_action(
    request: PasswordResetActionRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: Mailer = Depends(get_mailer),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    policy: ResetPolicy = Depends(get_reset_policy),
):
    """
    Password Reset (single endpoint)

    Dispatches on the action field to the same use cases as the dedicated
    endpoints, with the same responses.

    Raises:
        - 400 Bad Request: INVALID_ACTION plus the errors of the chosen action
    """
    if request.action == "request":
        use_case = RequestPasswordResetUseCase(
            uow, mailer, policy=policy, schedule=background_tasks.add_task
        )
        return _unwrap(await use_case.execute(request.email))

    if request.action == "verify":
        use_case = VerifyResetTokenUseCase(uow, policy=policy)
        return _unwrap(await use_case.execute(request.user_id, request.token))

    if request.action == "reset":
        use_case = CompletePasswordResetUseCase(uow, password_hasher, policy=policy)
        return _unwrap(
            await use_case.execute(request.user_id, request.token, request.new_password)
        )

    raise_for_error(Error("INVALID_ACTION", "Invalid action"))
