"""Accounts: registration, login and administration."""

from datetime import datetime
from typing import Callable, List, Optional

from uxperiment.core.database.base import utc_now
from uxperiment.core.database.entities.users import User, UserRole, UserStatus
from uxperiment.core.database.repositories import RepositoryBundle
from uxperiment.core.logging_config import get_logger
from uxperiment.core.models.io.auth import RegisterRequest
from uxperiment.core.models.io.users import UserCreate, UserUpdate
from uxperiment.server.core.security import hash_password, verify_password

from .errors import AuthenticationError, ConflictError, NotFoundError
from .favorite_cache import FavoriteStateCache

logger = get_logger(__name__)


class UserService:
    def __init__(
        self, repos: RepositoryBundle, cache: FavoriteStateCache, clock: Callable[[], datetime] = utc_now
    ) -> None:
        self.repos = repos
        self.cache = cache
        self.clock = clock

    async def authenticate(self, email: str, password: str) -> User:
        """Check credentials and record the login.

        Raises:
            AuthenticationError: Unknown email, wrong password or inactive account
        """
        user = await self.repos.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info(f"Failed login attempt for {email}")
            raise AuthenticationError("Invalid email or password")
        if not user.is_active:
            raise AuthenticationError("Account is inactive")

        user.last_login = self.clock()
        user = await self.repos.users.update(user)
        logger.info(f"User {user.id} logged in")
        return user

    async def register(self, data: RegisterRequest) -> User:
        return await self._create(data.email, data.password, data.name)

    async def _create(
        self,
        email: str,
        password: str,
        name: Optional[str] = None,
        picture: Optional[str] = None,
        role: UserRole = UserRole.USER,
        status: UserStatus = UserStatus.ACTIVE,
    ) -> User:
        if await self.repos.users.get_by_email(email) is not None:
            raise ConflictError(f"Email {email} is already registered")
        user = User(
            email=email,
            password_hash=hash_password(password),
            name=name,
            picture=picture,
            role=role.value,
            status=status.value,
        )
        user = await self.repos.users.create(user)
        logger.info(f"Created user {user.id} with role {user.role}")
        return user

    async def list(
        self,
        role: Optional[str] = None,
        status: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[User]:
        return await self.repos.users.search(role=role, status=status, limit=limit, offset=offset)

    async def get(self, user_id: int) -> User:
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    async def create(self, data: UserCreate) -> User:
        return await self._create(data.email, data.password, data.name, data.picture, data.role, data.status)

    async def update(self, user_id: int, data: UserUpdate) -> User:
        user = await self.get(user_id)
        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(user, field, value.value if isinstance(value, (UserRole, UserStatus)) else value)
        return await self.repos.users.update(user)

    async def delete(self, actor: User, user_id: int) -> None:
        if actor.id == user_id:
            raise ConflictError("You cannot delete your own account")
        user = await self.get(user_id)
        await self.repos.users.delete_cascade(user)
        await self.cache.evict_user(user_id)
        logger.info(f"Deleted user {user_id}")
