"""
User Administration Endpoints.

Administrators list, inspect, create, update and delete accounts.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from uxperiment.core.database.entities.users import UserRole, UserStatus
from uxperiment.core.models.io.users import UserCreate, UserRead, UserUpdate
from uxperiment.server.core.security import AdminUserDep
from uxperiment.server.services.deps import UserServiceDep

router = APIRouter(tags=["users"])


@router.get(
    "",
    response_model=List[UserRead],
    summary="List Users",
    description="List accounts newest first, optionally filtered by role and status.",
    responses={403: {"description": "Administrator privileges required"}},
)
async def list_users(
    _: AdminUserDep,
    users: UserServiceDep,
    role: Optional[UserRole] = None,
    status_filter: Optional[UserStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> List[UserRead]:
    """
    List users.

    - **role**: Only accounts with this role (`user` or `admin`).
    - **status**: Only accounts with this status (`active` or `inactive`).
    - **limit** / **offset**: Pagination.
    """
    found = await users.list(
        role=role.value if role else None,
        status=status_filter.value if status_filter else None,
        limit=limit,
        offset=offset,
    )
    return [UserRead.model_validate(user) for user in found]


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get User",
    responses={404: {"description": "User not found"}},
)
async def get_user(user_id: int, _: AdminUserDep, users: UserServiceDep) -> UserRead:
    return UserRead.model_validate(await users.get(user_id))


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    description="Create an account with a password and an explicit role.",
    responses={409: {"description": "Email already registered"}},
)
async def create_user(data: UserCreate, _: AdminUserDep, users: UserServiceDep) -> UserRead:
    return UserRead.model_validate(await users.create(data))


@router.patch(
    "/{user_id}",
    response_model=UserRead,
    summary="Update User",
    description="Change name, picture, role or status of an account.",
    responses={404: {"description": "User not found"}},
)
async def update_user(user_id: int, data: UserUpdate, _: AdminUserDep, users: UserServiceDep) -> UserRead:
    return UserRead.model_validate(await users.update(user_id, data))


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete User",
    description="Delete an account with its favorites, subscriptions and payments.",
    responses={
        404: {"description": "User not found"},
        409: {"description": "Administrators cannot delete themselves"},
    },
)
async def delete_user(user_id: int, admin: AdminUserDep, users: UserServiceDep) -> None:
    await users.delete(admin, user_id)
