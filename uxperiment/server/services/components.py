"""Component catalogue.

Content rules
-------------
* name: required, 3 to 100 characters after trimming
* css_content: required, at most 10000 characters; a stylesheet without
  both ``{`` and ``}`` is accepted with a warning
* html_content: optional, at most 5000 characters, no ``<script`` tags
* color: ``#RRGGBB``; anything else is replaced by the default color with a
  warning
"""

import re
from typing import List, Optional

from uxperiment.core.database.entities.components import DEFAULT_CATEGORY, DEFAULT_COLOR, Component
from uxperiment.core.database.entities.users import User
from uxperiment.core.database.repositories import RepositoryBundle
from uxperiment.core.logging_config import get_logger
from uxperiment.core.models.io.components import (
    ComponentCreate,
    ComponentListItem,
    ComponentUpdate,
    ValidationResult,
)

from .access import AccessService
from .errors import NotFoundError, ValidationFailedError
from .favorite_cache import FavoriteStateCache

logger = get_logger(__name__)

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100
CSS_MAX_LENGTH = 10000
HTML_MAX_LENGTH = 5000

_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")
_SCRIPT_RE = re.compile(r"<script", re.IGNORECASE)


def is_valid_color(color: Optional[str]) -> bool:
    return bool(color) and _COLOR_RE.match(color) is not None


def normalize_color(color: Optional[str]) -> str:
    """Return the color if it is ``#RRGGBB``, the default color otherwise."""
    return color if is_valid_color(color) else DEFAULT_COLOR


def validate_component(
    name: Optional[str],
    css_content: Optional[str],
    html_content: Optional[str] = None,
    color: Optional[str] = None,
) -> ValidationResult:
    """Check component content against the catalogue rules."""
    errors: List[str] = []
    warnings: List[str] = []

    trimmed = (name or "").strip()
    if not trimmed:
        errors.append("Name is required")
    elif not NAME_MIN_LENGTH <= len(trimmed) <= NAME_MAX_LENGTH:
        errors.append(f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters")

    if not css_content or not css_content.strip():
        errors.append("CSS content is required")
    else:
        if len(css_content) > CSS_MAX_LENGTH:
            errors.append(f"CSS content must be at most {CSS_MAX_LENGTH} characters")
        if "{" not in css_content or "}" not in css_content:
            warnings.append("CSS appears incomplete")

    if html_content:
        if len(html_content) > HTML_MAX_LENGTH:
            errors.append(f"HTML content must be at most {HTML_MAX_LENGTH} characters")
        if _SCRIPT_RE.search(html_content):
            errors.append("Script tags are not allowed in HTML content")

    if color and not is_valid_color(color):
        warnings.append(f"Invalid color '{color}', using default {DEFAULT_COLOR}")

    return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)


def _raise_if_invalid(result: ValidationResult) -> None:
    if not result.is_valid:
        raise ValidationFailedError("Component validation failed", result.errors)
    for warning in result.warnings:
        logger.info(f"Component validation warning: {warning}")


class ComponentService:
    """Business logic for the component catalogue."""

    def __init__(self, repos: RepositoryBundle, access: AccessService, cache: FavoriteStateCache) -> None:
        self.repos = repos
        self.access = access
        self.cache = cache

    async def list(
        self,
        viewer: Optional[User],
        category: Optional[str] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[ComponentListItem]:
        """Catalogue page with the viewer's favorite and lock flags.

        Locked premium components are listed without their CSS/HTML.
        """
        components = await self.repos.components.search(category=category, search=search, limit=limit, offset=offset)
        decisions = await self.access.decide_many(viewer, components)
        favorited = set()
        if viewer is not None:
            favorited = await self.repos.favorites.favorited_component_ids(viewer.id, [c.id for c in components])
            for component in components:
                await self.cache.prime(viewer.id, component.id, component.id in favorited)

        items = []
        for component in components:
            locked = not decisions[component.id].allowed
            item = ComponentListItem.model_validate(component.model_dump())
            item.is_favorited = component.id in favorited
            item.is_locked = locked
            if locked:
                item.css_content = None
                item.html_content = None
            items.append(item)
        return items

    async def categories(self) -> List[str]:
        return await self.repos.components.list_categories()

    async def get(self, component_id: int) -> Component:
        component = await self.repos.components.get_by_id(component_id)
        if component is None:
            raise NotFoundError(f"Component {component_id} not found")
        return component

    async def get_for_viewer(self, viewer: Optional[User], component_id: int) -> Component:
        """Full component, or 403 when the viewer may not see it."""
        component = await self.get(component_id)
        await self.access.ensure_can_view(viewer, component)
        return component

    async def create(self, author: User, data: ComponentCreate) -> Component:
        _raise_if_invalid(validate_component(data.name, data.css_content, data.html_content, data.color))
        component = Component(
            name=data.name.strip(),
            description=data.description,
            category=(data.category or "").strip() or DEFAULT_CATEGORY,
            color=normalize_color(data.color),
            css_content=data.css_content,
            html_content=data.html_content,
            requires_subscription=data.requires_subscription,
            user_id=author.id,
        )
        component = await self.repos.components.create(component)
        logger.info(f"Created component {component.id} ({component.name}) by user {author.id}")
        return component

    async def update(self, component_id: int, data: ComponentUpdate) -> Component:
        """Apply a partial update, validating the merged result."""
        component = await self.get(component_id)
        changes = data.model_dump(exclude_unset=True)
        merged = {**component.model_dump(), **{k: v for k, v in changes.items() if v is not None}}
        if "html_content" in changes:
            merged["html_content"] = changes["html_content"]
        if "description" in changes:
            merged["description"] = changes["description"]

        _raise_if_invalid(
            validate_component(merged["name"], merged["css_content"], merged["html_content"], changes.get("color"))
        )
        component.name = merged["name"].strip()
        component.description = merged["description"]
        component.category = (merged["category"] or "").strip() or DEFAULT_CATEGORY
        if "color" in changes:
            component.color = normalize_color(changes["color"])
        component.css_content = merged["css_content"]
        component.html_content = merged["html_content"]
        component.requires_subscription = merged["requires_subscription"]
        return await self.repos.components.update(component)

    async def delete(self, component_id: int) -> None:
        """Delete a component with its favorites and views."""
        component = await self.get(component_id)
        await self.repos.components.delete_cascade(component)
        await self.cache.evict_component(component_id)
        logger.info(f"Deleted component {component_id}")
