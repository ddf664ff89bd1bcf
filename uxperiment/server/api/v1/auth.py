"""
Authentication Endpoints.

Password login, self-service registration and session probing. A successful
login stores the session token in an httpOnly cookie (``auth_token``) and a
script-readable ``user_info`` cookie; the token is also returned in the body
for API clients that send it as a Bearer header.
"""

import json
from urllib.parse import quote

from fastapi import APIRouter, Response, status

from uxperiment.core.database.entities.users import User
from uxperiment.core.logging_config import get_logger
from uxperiment.core.models.io.auth import LoginRequest, RegisterRequest, SessionCheckResponse, TokenResponse
from uxperiment.core.models.io.common import MessageResponse
from uxperiment.core.models.io.users import UserRead
from uxperiment.server.core.config import settings
from uxperiment.server.core.security import CurrentUserDep, OptionalUserDep, create_access_token
from uxperiment.server.services.deps import UserServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])


def _set_session_cookies(response: Response, user: User, token: str) -> None:
    cookie = settings.cookie
    max_age = settings.jwt.expire_minutes * 60
    response.set_cookie(
        key=cookie.name,
        value=token,
        max_age=max_age,
        httponly=True,
        secure=cookie.secure,
        samesite="lax",
        domain=cookie.domain,
    )
    user_info = {"id": user.id, "email": user.email, "name": user.display_name, "role": user.role, "picture": user.picture}
    response.set_cookie(
        key=cookie.user_info_name,
        value=quote(json.dumps(user_info)),
        max_age=max_age,
        httponly=False,
        secure=cookie.secure,
        samesite="lax",
        domain=cookie.domain,
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log In",
    description="Authenticate with email and password and open a cookie session.",
    response_description="The session token and the authenticated user.",
    responses={
        200: {"description": "Logged in"},
        401: {"description": "Invalid credentials or inactive account"},
    },
)
async def login(credentials: LoginRequest, response: Response, users: UserServiceDep) -> TokenResponse:
    """
    Log in with email and password.

    Updates the user's last login time, which feeds the daily active-user
    statistics.

    - **email**: Account email (case-insensitive).
    - **password**: Account password.
    """
    user = await users.authenticate(credentials.email, credentials.password)
    token = create_access_token(user)
    _set_session_cookies(response, user, token)
    return TokenResponse(access_token=token, user=UserRead.model_validate(user))


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a new account with the `user` role.",
    responses={
        201: {"description": "Account created"},
        409: {"description": "Email already registered"},
    },
)
async def register(data: RegisterRequest, users: UserServiceDep) -> UserRead:
    user = await users.register(data)
    return UserRead.model_validate(user)


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Log Out",
    description="Clear the session cookies.",
)
async def logout(response: Response) -> MessageResponse:
    cookie = settings.cookie
    response.delete_cookie(cookie.name, domain=cookie.domain)
    response.delete_cookie(cookie.user_info_name, domain=cookie.domain)
    return MessageResponse(message="Logged out")


@router.get(
    "/session-check",
    response_model=SessionCheckResponse,
    summary="Check Session",
    description="Report whether the request carries a valid session. Never fails.",
)
async def session_check(user: OptionalUserDep) -> SessionCheckResponse:
    """
    Probe the current session.

    Always answers 200 so the frontend can poll it; an invalid or expired
    token simply reports ``authenticated: false``.
    """
    if user is None:
        return SessionCheckResponse(authenticated=False, message="Not authenticated")
    return SessionCheckResponse(authenticated=True, user=UserRead.model_validate(user))


@router.get(
    "/profile",
    response_model=UserRead,
    summary="Get Profile",
    description="Return the authenticated user.",
    responses={401: {"description": "Missing or invalid token"}},
)
async def profile(user: CurrentUserDep) -> UserRead:
    return UserRead.model_validate(user)
