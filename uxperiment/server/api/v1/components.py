"""
Component Catalogue Endpoints.

Browsing is public. Premium components are listed for everyone but their
CSS/HTML is only served to viewers with access (admins, the author and
subscribers). Catalogue management is restricted to administrators.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from uxperiment.core.logging_config import get_logger
from uxperiment.core.models.io.components import (
    ComponentCreate,
    ComponentListItem,
    ComponentRead,
    ComponentUpdate,
    ValidationResult,
)
from uxperiment.server.core.security import AdminUserDep, OptionalUserDep
from uxperiment.server.services.components import validate_component
from uxperiment.server.services.deps import ComponentServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["components"])


@router.get(
    "",
    response_model=List[ComponentListItem],
    summary="List Components",
    description="Browse the catalogue with optional category and text filters.",
    response_description="Catalogue entries with the viewer's favorite and lock flags.",
)
async def list_components(
    viewer: OptionalUserDep,
    components: ComponentServiceDep,
    category: Optional[str] = None,
    search: Optional[str] = Query(default=None, max_length=100),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> List[ComponentListItem]:
    """
    List components, newest first.

    Each entry carries:

    - **is_favorited**: Whether the caller bookmarked it (always false when anonymous).
    - **is_locked**: Premium component the caller may not view; `css_content`
      and `html_content` are omitted.

    Filters:

    - **category**: Exact category name.
    - **search**: Case-insensitive match on name or description.
    """
    return await components.list(viewer, category=category, search=search, limit=limit, offset=offset)


@router.get(
    "/categories",
    response_model=List[str],
    summary="List Categories",
    description="Distinct categories used by the catalogue, sorted alphabetically.",
)
async def list_categories(components: ComponentServiceDep) -> List[str]:
    return await components.categories()


@router.post(
    "/validate",
    response_model=ValidationResult,
    summary="Validate Component",
    description="Check component content without saving it.",
)
async def validate(data: ComponentCreate, _: AdminUserDep) -> ValidationResult:
    return validate_component(data.name, data.css_content, data.html_content, data.color)


@router.get(
    "/{component_id}",
    response_model=ComponentRead,
    summary="Get Component",
    description="Retrieve a component including its CSS and HTML.",
    responses={
        403: {"description": "Login or an active subscription is required"},
        404: {"description": "Component not found"},
    },
)
async def get_component(component_id: int, viewer: OptionalUserDep, components: ComponentServiceDep) -> ComponentRead:
    """
    Get a component.

    Premium components are served to administrators, their author and users
    with an active subscription. Anonymous callers get 403 with reason
    `login_required`; other callers get `subscription_required`.
    """
    return ComponentRead.model_validate(await components.get_for_viewer(viewer, component_id))


@router.post(
    "",
    response_model=ComponentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Component",
    description="Add a component to the catalogue. The caller becomes its author.",
    responses={422: {"description": "Content failed validation"}},
)
async def create_component(
    data: ComponentCreate, admin: AdminUserDep, components: ComponentServiceDep
) -> ComponentRead:
    """
    Create a component.

    - **name**: 3 to 100 characters.
    - **css_content**: Required, at most 10000 characters.
    - **html_content**: Optional preview markup, at most 5000 characters, no script tags.
    - **color**: `#RRGGBB`; invalid values fall back to `#6366F1`.
    - **category**: Defaults to `Outros`.
    - **requires_subscription**: Mark as premium.
    """
    return ComponentRead.model_validate(await components.create(admin, data))


@router.patch(
    "/{component_id}",
    response_model=ComponentRead,
    summary="Update Component",
    description="Partially update a component; the merged result is validated again.",
    responses={
        404: {"description": "Component not found"},
        422: {"description": "Content failed validation"},
    },
)
async def update_component(
    component_id: int, data: ComponentUpdate, _: AdminUserDep, components: ComponentServiceDep
) -> ComponentRead:
    return ComponentRead.model_validate(await components.update(component_id, data))


@router.delete(
    "/{component_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Component",
    description="Delete a component together with its favorites and view history.",
    responses={404: {"description": "Component not found"}},
)
async def delete_component(component_id: int, _: AdminUserDep, components: ComponentServiceDep) -> None:
    await components.delete(component_id)
