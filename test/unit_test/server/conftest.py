from typing import AsyncGenerator, Callable, Dict

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from uxperiment.core.database import get_session
from uxperiment.core.database.entities import User
from uxperiment.server.core.security import create_access_token
from uxperiment.server.services.favorite_cache import reset_favorite_cache


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client bound to the test session."""
    from uxperiment.server.main import app

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    reset_favorite_cache()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()
    reset_favorite_cache()


@pytest.fixture(name="auth_headers")
def auth_headers_fixture() -> Callable[[User], Dict[str, str]]:
    """Build a Bearer header carrying a session token for a user."""

    def _headers(user: User) -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _headers
