"""
Authentication and Authorization.

Password hashing (passlib), JWT session tokens (PyJWT) and the FastAPI
dependencies that resolve the caller from a request.

The token is read from the ``auth_token`` cookie first and then from an
``Authorization: Bearer`` header, so browser sessions and API clients share
the same checks.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Annotated, Optional

import jwt
from fastapi import Depends, Request
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from uxperiment.core.database import get_session
from uxperiment.core.database.entities.users import User, UserRole
from uxperiment.core.logging_config import get_logger
from uxperiment.server.core.config import settings
from uxperiment.server.services.errors import AccessDeniedError, AuthenticationError

logger = get_logger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class TokenPayload(BaseModel):
    """Claims carried by a session token."""

    sub: str
    email: str
    name: Optional[str] = None
    role: str = UserRole.USER.value
    picture: Optional[str] = None
    exp: int

    @property
    def user_id(self) -> int:
        return int(self.sub)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Check a password; accounts without a local password never match."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        logger.warning("Stored password hash has an unknown format")
        return False


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed session token for a user.

    Args:
        user: Authenticated account
        expires_delta: Token lifetime, defaults to ``JWT_EXPIRE_MINUTES``

    Returns:
        Encoded JWT
    """
    jwt_config = settings.jwt
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=jwt_config.expire_minutes))
    claims = {
        "sub": str(user.id),
        "email": user.email,
        "name": user.display_name,
        "role": user.role or UserRole.USER.value,
        "picture": user.picture,
        "exp": expire,
    }
    return jwt.encode(claims, jwt_config.secret, algorithm=jwt_config.algorithm)


def decode_access_token(token: str) -> Optional[TokenPayload]:
    """Verify a session token.

    Returns:
        The claims, or None for a bad signature, an expired token or missing
        ``sub``/``email`` claims
    """
    jwt_config = settings.jwt
    try:
        claims = jwt.decode(
            token,
            jwt_config.secret,
            algorithms=[jwt_config.algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        logger.debug("Rejected expired session token")
        return None
    except jwt.InvalidTokenError as e:
        logger.debug(f"Rejected session token: {e}")
        return None

    try:
        payload = TokenPayload.model_validate(claims)
    except ValidationError:
        logger.debug("Rejected session token with malformed claims")
        return None
    if not payload.sub.isdigit():
        logger.debug("Rejected session token with a non-numeric subject")
        return None
    return payload


def extract_token(request: Request) -> Optional[str]:
    """Return the session token from the auth cookie or the Bearer header."""
    token = request.cookies.get(settings.cookie.name)
    if token:
        return token
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


async def _load_active_user(session: AsyncSession, payload: TokenPayload) -> Optional[User]:
    user = await session.get(User, payload.user_id)
    if user is None or not user.is_active:
        return None
    return user


async def get_optional_user(
    request: Request, session: Annotated[AsyncSession, Depends(get_session)]
) -> Optional[User]:
    """Resolve the caller if a valid session is present; never raises."""
    token = extract_token(request)
    if not token:
        return None
    payload = decode_access_token(token)
    if payload is None:
        return None
    return await _load_active_user(session, payload)


async def get_current_user(request: Request, session: Annotated[AsyncSession, Depends(get_session)]) -> User:
    """Resolve the caller or fail with 401."""
    token = extract_token(request)
    if not token:
        raise AuthenticationError("No token provided")
    payload = decode_access_token(token)
    if payload is None:
        raise AuthenticationError("Invalid token")
    user = await _load_active_user(session, payload)
    if user is None:
        raise AuthenticationError("User not found or inactive")
    return user


async def require_admin(user: Annotated[User, Depends(get_current_user)]) -> User:
    """Resolve the caller and fail with 403 unless they are an administrator."""
    if not user.is_admin:
        raise AccessDeniedError("Administrator privileges required", reason="admin_required")
    return user


OptionalUserDep = Annotated[Optional[User], Depends(get_optional_user)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
AdminUserDep = Annotated[User, Depends(require_admin)]
