"""
Favorite Endpoints.

Users bookmark components they are allowed to view. Every endpoint acts on
the caller's own favorites; administrators may act on anyone's.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from uxperiment.core.models.io.components import ComponentSummary
from uxperiment.core.models.io.favorites import (
    FavoriteCheckResponse,
    FavoriteCreate,
    FavoriteRead,
    FavoriteToggleRequest,
    FavoriteToggleResponse,
    FavoriteWithComponent,
)
from uxperiment.server.core.security import AdminUserDep, CurrentUserDep
from uxperiment.server.services.deps import FavoriteServiceDep

router = APIRouter(tags=["favorites"])


@router.get(
    "",
    response_model=List[FavoriteRead],
    summary="List All Favorites",
    description="Every favorite in the system, newest first (administrators only).",
)
async def list_all_favorites(
    _: AdminUserDep,
    favorites: FavoriteServiceDep,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> List[FavoriteRead]:
    found = await favorites.list_all(limit=limit, offset=offset)
    return [FavoriteRead.model_validate(favorite) for favorite in found]


async def _list_for(user_id: int, actor, favorites) -> List[FavoriteWithComponent]:
    rows = await favorites.list_for_user(actor, user_id)
    result = []
    for favorite, component in rows:
        item = FavoriteWithComponent.model_validate(favorite)
        item.component = ComponentSummary.model_validate(component) if component is not None else None
        result.append(item)
    return result


@router.get(
    "/me",
    response_model=List[FavoriteWithComponent],
    summary="List My Favorites",
    description="The caller's favorites, newest first, each with a component summary.",
)
async def list_my_favorites(user: CurrentUserDep, favorites: FavoriteServiceDep) -> List[FavoriteWithComponent]:
    return await _list_for(user.id, user, favorites)


@router.get(
    "/users/{user_id}",
    response_model=List[FavoriteWithComponent],
    summary="List User Favorites",
    description="Favorites of a user, newest first.",
    responses={403: {"description": "Not your favorites"}},
)
async def list_user_favorites(
    user_id: int, user: CurrentUserDep, favorites: FavoriteServiceDep
) -> List[FavoriteWithComponent]:
    return await _list_for(user_id, user, favorites)


@router.get(
    "/check/{component_id}",
    response_model=FavoriteCheckResponse,
    summary="Check Favorite",
    description="Whether the caller has favorited a component.",
)
async def check_favorite(
    component_id: int, user: CurrentUserDep, favorites: FavoriteServiceDep
) -> FavoriteCheckResponse:
    return FavoriteCheckResponse(is_favorite=await favorites.check(user.id, component_id))


@router.post(
    "/toggle",
    response_model=FavoriteToggleResponse,
    summary="Toggle Favorite",
    description="Favorite the component if it is not a favorite yet, remove it otherwise.",
    responses={
        403: {"description": "The caller may not view this premium component"},
        404: {"description": "Component not found"},
    },
)
async def toggle_favorite(
    data: FavoriteToggleRequest, user: CurrentUserDep, favorites: FavoriteServiceDep
) -> FavoriteToggleResponse:
    """
    Toggle the favorite state of a component for the caller.

    Returns the new state. Favoriting a premium component requires view
    access; removing a favorite is always possible, even after the
    subscription that granted access has ended.
    """
    is_favorite = await favorites.toggle(user, data.component_id)
    return FavoriteToggleResponse(component_id=data.component_id, is_favorite=is_favorite)


@router.post(
    "",
    response_model=FavoriteRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Favorite",
    description="Favorite a component. Adding an existing favorite returns it unchanged.",
    responses={
        403: {"description": "Not allowed for this user or component"},
        404: {"description": "User or component not found"},
    },
)
async def add_favorite(data: FavoriteCreate, user: CurrentUserDep, favorites: FavoriteServiceDep) -> FavoriteRead:
    """
    Add a favorite.

    - **component_id**: Component to bookmark.
    - **user_id**: Target user; defaults to the caller. Only administrators
      may pass another user's id.
    """
    target = data.user_id if data.user_id is not None else user.id
    return FavoriteRead.model_validate(await favorites.add(user, target, data.component_id))


@router.delete(
    "/components/{component_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove Favorite by Component",
    responses={404: {"description": "The component is not a favorite"}},
)
async def remove_favorite_by_component(
    component_id: int,
    user: CurrentUserDep,
    favorites: FavoriteServiceDep,
    user_id: Optional[int] = None,
) -> None:
    await favorites.remove_by_user_and_component(user, user_id if user_id is not None else user.id, component_id)


@router.get(
    "/{favorite_id}",
    response_model=FavoriteRead,
    summary="Get Favorite",
    responses={404: {"description": "Favorite not found"}},
)
async def get_favorite(favorite_id: int, user: CurrentUserDep, favorites: FavoriteServiceDep) -> FavoriteRead:
    return FavoriteRead.model_validate(await favorites.get(user, favorite_id))


@router.delete(
    "/{favorite_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove Favorite",
    responses={404: {"description": "Favorite not found"}},
)
async def remove_favorite(favorite_id: int, user: CurrentUserDep, favorites: FavoriteServiceDep) -> None:
    await favorites.remove(user, favorite_id)
