"""Unit tests for password hashing, session tokens and token extraction."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from starlette.requests import Request

from uxperiment.core.database.entities import User, UserRole
from uxperiment.server.core.config import settings
from uxperiment.server.core.security import (
    create_access_token,
    decode_access_token,
    extract_token,
    hash_password,
    verify_password,
)


def _user(**overrides) -> User:
    values = {"id": 42, "email": "ada@example.com", "name": "Ada", "role": UserRole.ADMIN.value}
    values.update(overrides)
    return User(**values)


def _request(headers: dict) -> Request:
    raw = [(key.lower().encode(), value.encode()) for key, value in headers.items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


def _encode(claims: dict) -> str:
    return jwt.encode(claims, settings.jwt.secret, algorithm=settings.jwt.algorithm)


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("correct horse")

        assert hashed != "correct horse"
        assert hashed.startswith("$pbkdf2-sha256$")
        assert verify_password("correct horse", hashed) is True
        assert verify_password("wrong horse", hashed) is False

    @pytest.mark.parametrize("stored", [None, ""])
    def test_account_without_password_never_matches(self, stored):
        assert verify_password("anything", stored) is False

    def test_unknown_hash_format_does_not_match(self):
        assert verify_password("secret", "plain-text-not-a-hash") is False


class TestSessionTokens:
    def test_round_trip_claims(self):
        token = create_access_token(_user())

        payload = decode_access_token(token)

        assert payload is not None
        assert payload.user_id == 42
        assert payload.sub == "42"
        assert payload.email == "ada@example.com"
        assert payload.name == "Ada"
        assert payload.role == "admin"

    def test_name_falls_back_to_email_local_part(self):
        payload = decode_access_token(create_access_token(_user(name=None)))

        assert payload.name == "ada"

    def test_expired_token_is_rejected(self):
        token = create_access_token(_user(), expires_delta=timedelta(seconds=-5))

        assert decode_access_token(token) is None

    def test_wrong_signature_is_rejected(self):
        token = jwt.encode(
            {"sub": "42", "email": "ada@example.com", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            "another-secret",
            algorithm="HS256",
        )

        assert decode_access_token(token) is None

    def test_garbage_is_rejected(self):
        assert decode_access_token("not-a-jwt") is None

    @pytest.mark.parametrize(
        "claims",
        [
            {"email": "ada@example.com"},
            {"sub": "42"},
            {"sub": "ada", "email": "ada@example.com"},
        ],
    )
    def test_missing_or_malformed_claims_are_rejected(self, claims):
        token = _encode({**claims, "exp": datetime.now(timezone.utc) + timedelta(minutes=5)})

        assert decode_access_token(token) is None

    def test_token_without_expiry_is_rejected(self):
        assert decode_access_token(_encode({"sub": "42", "email": "ada@example.com"})) is None


class TestExtractToken:
    def test_cookie_wins_over_header(self):
        request = _request({"Cookie": "auth_token=from-cookie", "Authorization": "Bearer from-header"})

        assert extract_token(request) == "from-cookie"

    def test_bearer_header(self):
        assert extract_token(_request({"Authorization": "Bearer abc.def"})) == "abc.def"

    def test_scheme_is_case_insensitive(self):
        assert extract_token(_request({"Authorization": "bearer abc.def"})) == "abc.def"

    @pytest.mark.parametrize("value", ["Basic dXNlcjpwYXNz", "Bearer ", "Bearer"])
    def test_unusable_header(self, value):
        assert extract_token(_request({"Authorization": value})) is None

    def test_no_credentials(self):
        assert extract_token(_request({})) is None
