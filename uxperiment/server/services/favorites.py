"""Favorite management.

Favorites are written to the database and mirrored into the process-wide
``FavoriteStateCache`` so every consumer observes the same state. A user may
only favorite components they are allowed to view; removing a favorite is
always allowed.
"""

from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from uxperiment.core.database.entities.components import Component
from uxperiment.core.database.entities.favorites import Favorite
from uxperiment.core.database.entities.users import User
from uxperiment.core.database.repositories import RepositoryBundle
from uxperiment.core.logging_config import get_logger

from .access import AccessService
from .errors import AccessDeniedError, NotFoundError
from .favorite_cache import FavoriteStateCache

logger = get_logger(__name__)


def ensure_self_or_admin(actor: User, user_id: int) -> None:
    """Users act on their own resources; administrators act on anyone's."""
    if actor.id != user_id and not actor.is_admin:
        raise AccessDeniedError("You can only manage your own favorites")


class FavoriteService:
    """Business logic for user bookmarks."""

    def __init__(self, repos: RepositoryBundle, access: AccessService, cache: FavoriteStateCache) -> None:
        self.repos = repos
        self.access = access
        self.cache = cache

    async def _get_component(self, component_id: int) -> Component:
        component = await self.repos.components.get_by_id(component_id)
        if component is None:
            raise NotFoundError(f"Component {component_id} not found")
        return component

    async def _get_user(self, user_id: int) -> User:
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    async def _insert(self, user_id: int, component_id: int) -> Favorite:
        try:
            favorite = await self.repos.favorites.create(Favorite(user_id=user_id, component_id=component_id))
        except IntegrityError:
            # Lost a race with a concurrent insert of the same pair
            await self.repos.favorites.session.rollback()
            favorite = await self.repos.favorites.get_by_user_and_component(user_id, component_id)
            if favorite is None:
                raise
        await self.cache.set(user_id, component_id, True)
        return favorite

    async def add(self, actor: User, user_id: int, component_id: int) -> Favorite:
        """Favorite a component for a user; adding an existing favorite returns it unchanged."""
        ensure_self_or_admin(actor, user_id)
        user = await self._get_user(user_id)
        component = await self._get_component(component_id)

        existing = await self.repos.favorites.get_by_user_and_component(user_id, component_id)
        if existing is not None:
            await self.cache.prime(user_id, component_id, True)
            return existing

        await self.access.ensure_can_view(user, component)
        favorite = await self._insert(user_id, component_id)
        logger.info(f"User {user_id} favorited component {component_id}")
        return favorite

    async def remove(self, actor: User, favorite_id: int) -> None:
        favorite = await self.repos.favorites.get_by_id(favorite_id)
        if favorite is None:
            raise NotFoundError(f"Favorite {favorite_id} not found")
        ensure_self_or_admin(actor, favorite.user_id)
        await self._delete(favorite)

    async def remove_by_user_and_component(self, actor: User, user_id: int, component_id: int) -> None:
        ensure_self_or_admin(actor, user_id)
        favorite = await self.repos.favorites.get_by_user_and_component(user_id, component_id)
        if favorite is None:
            raise NotFoundError(f"Component {component_id} is not in the favorites of user {user_id}")
        await self._delete(favorite)

    async def _delete(self, favorite: Favorite) -> None:
        user_id, component_id = favorite.user_id, favorite.component_id
        await self.repos.favorites.delete(favorite.id)
        await self.cache.set(user_id, component_id, False)
        logger.info(f"User {user_id} removed component {component_id} from favorites")

    async def toggle(self, user: User, component_id: int) -> bool:
        """Flip the favorite state of a component for the caller.

        Returns:
            The new state (True when the component is now a favorite)
        """
        user_id = user.id
        component = await self._get_component(component_id)
        existing = await self.repos.favorites.get_by_user_and_component(user_id, component_id)
        if existing is not None:
            await self._delete(existing)
            return False

        await self.access.ensure_can_view(user, component)
        await self._insert(user_id, component_id)
        logger.info(f"User {user_id} favorited component {component_id}")
        return True

    async def check(self, user_id: int, component_id: int) -> bool:
        """Whether the user has favorited the component, read through the cache."""
        cached = await self.cache.get(user_id, component_id)
        if cached is not None:
            return cached
        favorite = await self.repos.favorites.get_by_user_and_component(user_id, component_id)
        is_favorite = favorite is not None
        await self.cache.prime(user_id, component_id, is_favorite)
        return is_favorite

    async def list_for_user(self, actor: User, user_id: int) -> List[Tuple[Favorite, Optional[Component]]]:
        """Favorites of a user, newest first, each with its component."""
        ensure_self_or_admin(actor, user_id)
        favorites = await self.repos.favorites.list_for_user(user_id)
        components = await self.repos.components.get_many(f.component_id for f in favorites)
        for favorite in favorites:
            await self.cache.prime(user_id, favorite.component_id, True)
        return [(favorite, components.get(favorite.component_id)) for favorite in favorites]

    async def list_all(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[Favorite]:
        return await self.repos.favorites.list_recent(limit=limit, offset=offset)

    async def get(self, actor: User, favorite_id: int) -> Favorite:
        favorite = await self.repos.favorites.get_by_id(favorite_id)
        if favorite is None:
            raise NotFoundError(f"Favorite {favorite_id} not found")
        ensure_self_or_admin(actor, favorite.user_id)
        return favorite
