"""
Admin API Routes - User Management Endpoints

Authentication is via the caller's bearer access token; every endpoint
requires administrator claims.
"""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field

from studio_auth.api.error import raise_for_error
from studio_auth.api.utils.admin_auth import require_admin
from studio_auth.app.services.unit_of_work import UnitOfWork
from studio_auth.app.use_cases.admin import (
    ActiveStatusResponse,
    AdminStatusResponse,
    GetUserUseCase,
    SetActiveStatusUseCase,
    SetAdminStatusUseCase,
    UserProfileResponse,
)
from studio_auth.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


class AdminStatusRequest(BaseModel):
    """Set admin status HTTP request payload"""

    model_config = ConfigDict(populate_by_name=True)

    is_admin: bool = Field(..., alias="isAdmin", description="Grant (true) or revoke (false)")


class ActiveStatusRequest(BaseModel):
    """Set active status HTTP request payload"""

    model_config = ConfigDict(populate_by_name=True)

    is_active: bool = Field(..., alias="isActive", description="Activate (true) or deactivate (false)")


@router.get(
    "/users/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=UserProfileResponse,
    dependencies=[Depends(require_admin)],
)
async def get_user(user_id: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Get User

    Requires: admin bearer token

    Raises:
        - 401 Unauthorized: no valid bearer token
        - 403 Forbidden: caller is not an admin
        - 404 Not Found: USER_NOT_FOUND
    """
    use_case = GetUserUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/users/{user_id}/toggle-admin",
    status_code=status.HTTP_200_OK,
    response_model=AdminStatusResponse,
    dependencies=[Depends(require_admin)],
)
async def set_admin_status(
    user_id: str,
    request: AdminStatusRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Set Admin Status

    Grants or revokes administrator rights.

    Requires: admin bearer token

    Raises:
        - 400 Bad Request: INVALID_PARAMETERS (isAdmin missing)
        - 401 Unauthorized / 403 Forbidden: see get_user
        - 404 Not Found: USER_NOT_FOUND
    """
    use_case = SetAdminStatusUseCase(uow)
    result = await use_case.execute(user_id, request.is_admin)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/users/{user_id}/status",
    status_code=status.HTTP_200_OK,
    response_model=ActiveStatusResponse,
    dependencies=[Depends(require_admin)],
)
async def set_active_status(
    user_id: str,
    request: ActiveStatusRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Set Active Status

    Requires: admin bearer token

    Raises:
        - 400 Bad Request: INVALID_PARAMETERS (isActive missing)
        - 401 Unauthorized / 403 Forbidden: see get_user
        - 404 Not Found: USER_NOT_FOUND
    """
    use_case = SetActiveStatusUseCase(uow)
    result = await use_case.execute(user_id, request.is_active)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
