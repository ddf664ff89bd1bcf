"""
Unit tests for the favorites endpoints.

Covers adding, toggling, checking, listing and removing favorites, the
ownership rules between users and administrators, premium access checks and
the process-wide favorite state cache.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from uxperiment.core.database import utc_now
from uxperiment.server.services.favorite_cache import get_favorite_cache

pytestmark = pytest.mark.asyncio

BASE = "/api/v1/favorites"


class TestAddFavorite:
    async def test_add_favorite_for_self(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()
        component = await factory.component()

        response = await client.post(BASE, json={"component_id": component.id}, headers=auth_headers(user))

        assert response.status_code == 201
        data = response.json()
        assert data["user_id"] == user.id
        assert data["component_id"] == component.id

    async def test_add_existing_favorite_returns_same_row(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()
        component = await factory.component()

        first = await client.post(BASE, json={"component_id": component.id}, headers=auth_headers(user))
        second = await client.post(BASE, json={"component_id": component.id}, headers=auth_headers(user))

        assert second.status_code == 201
        assert second.json()["id"] == first.json()["id"]

    async def test_add_unknown_component_returns_404(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()

        response = await client.post(BASE, json={"component_id": 9999}, headers=auth_headers(user))

        assert response.status_code == 404
        assert response.json()["error_type"] == "NotFoundError"

    async def test_add_for_another_user_requires_admin(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()
        other = await factory.user()
        component = await factory.component()

        response = await client.post(
            BASE, json={"component_id": component.id, "user_id": other.id}, headers=auth_headers(user)
        )

        assert response.status_code == 403

    async def test_admin_adds_for_another_user(self, client: AsyncClient, factory, auth_headers):
        admin = await factory.admin()
        user = await factory.user()
        component = await factory.component()

        response = await client.post(
            BASE, json={"component_id": component.id, "user_id": user.id}, headers=auth_headers(admin)
        )

        assert response.status_code == 201
        assert response.json()["user_id"] == user.id

    async def test_admin_adds_for_unknown_user_returns_404(self, client: AsyncClient, factory, auth_headers):
        admin = await factory.admin()
        component = await factory.component()

        response = await client.post(
            BASE, json={"component_id": component.id, "user_id": 4242}, headers=auth_headers(admin)
        )

        assert response.status_code == 404

    async def test_premium_component_requires_subscription(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()
        component = await factory.component(requires_subscription=True)

        response = await client.post(BASE, json={"component_id": component.id}, headers=auth_headers(user))

        assert response.status_code == 403
        assert response.json()["reason"] == "subscription_required"

    async def test_anonymous_request_is_rejected(self, client: AsyncClient, factory):
        component = await factory.component()

        response = await client.post(BASE, json={"component_id": component.id})

        assert response.status_code == 401
        assert response.json()["detail"] == "No token provided"


class TestToggleFavorite:
    async def test_toggle_twice_flips_state(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()
        component = await factory.component()
        headers = auth_headers(user)

        first = await client.post(f"{BASE}/toggle", json={"component_id": component.id}, headers=headers)
        second = await client.post(f"{BASE}/toggle", json={"component_id": component.id}, headers=headers)

        assert first.status_code == 200
        assert first.json() == {"component_id": component.id, "is_favorite": True}
        assert second.json() == {"component_id": component.id, "is_favorite": False}

    async def test_toggle_premium_with_active_subscription(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()
        plan = await factory.plan()
        await factory.subscription(user, plan)
        component = await factory.component(requires_subscription=True)

        response = await client.post(
            f"{BASE}/toggle", json={"component_id": component.id}, headers=auth_headers(user)
        )

        assert response.status_code == 200
        assert response.json()["is_favorite"] is True

    async def test_toggle_premium_with_ended_subscription_is_denied(
        self, client: AsyncClient, factory, auth_headers
    ):
        user = await factory.user()
        plan = await factory.plan()
        now = utc_now()
        # Still ACTIVE in storage, but the period has passed
        await factory.subscription(user, plan, start_date=now - timedelta(days=40), end_date=now - timedelta(days=10))
        component = await factory.component(requires_subscription=True)

        response = await client.post(
            f"{BASE}/toggle", json={"component_id": component.id}, headers=auth_headers(user)
        )

        assert response.status_code == 403

    async def test_unfavorite_premium_is_always_allowed(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()
        component = await factory.component(requires_subscription=True)
        # Favorited while the user still had access
        await factory.favorite(user, component)

        response = await client.post(
            f"{BASE}/toggle", json={"component_id": component.id}, headers=auth_headers(user)
        )

        assert response.status_code == 200
        assert response.json()["is_favorite"] is False

    async def test_author_can_favorite_own_premium_component(self, client: AsyncClient, factory, auth_headers):
        author = await factory.user()
        component = await factory.component(requires_subscription=True, author=author)

        response = await client.post(
            f"{BASE}/toggle", json={"component_id": component.id}, headers=auth_headers(author)
        )

        assert response.json()["is_favorite"] is True

    async def test_toggle_unknown_component_returns_404(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()

        response = await client.post(f"{BASE}/toggle", json={"component_id": 123}, headers=auth_headers(user))

        assert response.status_code == 404


class TestCheckFavorite:
    async def test_check_reflects_toggle(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()
        component = await factory.component()
        headers = auth_headers(user)

        before = await client.get(f"{BASE}/check/{component.id}", headers=headers)
        await client.post(f"{BASE}/toggle", json={"component_id": component.id}, headers=headers)
        after = await client.get(f"{BASE}/check/{component.id}", headers=headers)

        assert before.json() == {"is_favorite": False}
        assert after.json() == {"is_favorite": True}

    async def test_check_populates_cache(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()
        component = await factory.component()
        await factory.favorite(user, component)

        response = await client.get(f"{BASE}/check/{component.id}", headers=auth_headers(user))

        assert response.json()["is_favorite"] is True
        assert await get_favorite_cache().get(user.id, component.id) is True


class TestFavoriteCacheNotifications:
    async def test_toggle_notifies_listeners_once_per_change(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()
        component = await factory.component()
        headers = auth_headers(user)
        events = []
        unsubscribe = get_favorite_cache().subscribe(lambda *change: events.append(change))

        await client.post(f"{BASE}/toggle", json={"component_id": component.id}, headers=headers)
        await client.post(f"{BASE}/toggle", json={"component_id": component.id}, headers=headers)
        unsubscribe()
        await client.post(f"{BASE}/toggle", json={"component_id": component.id}, headers=headers)

        assert events == [(user.id, component.id, True), (user.id, component.id, False)]

    async def test_idempotent_add_does_not_notify(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()
        component = await factory.component()
        headers = auth_headers(user)
        await client.post(BASE, json={"component_id": component.id}, headers=headers)
        events = []
        get_favorite_cache().subscribe(lambda *change: events.append(change))

        await client.post(BASE, json={"component_id": component.id}, headers=headers)

        assert events == []


class TestListFavorites:
    async def test_my_favorites_newest_first_with_component(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()
        older = await factory.component(name="Older Card")
        newer = await factory.component(name="Newer Card")
        now = utc_now()
        await factory.favorite(user, older, created_at=now - timedelta(hours=2))
        await factory.favorite(user, newer, created_at=now - timedelta(hours=1))

        response = await client.get(f"{BASE}/me", headers=auth_headers(user))

        assert response.status_code == 200
        data = response.json()
        assert [item["component_id"] for item in data] == [newer.id, older.id]
        assert data[0]["component"]["name"] == "Newer Card"

    async def test_user_cannot_list_other_users_favorites(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()
        other = await factory.user()

        response = await client.get(f"{BASE}/users/{other.id}", headers=auth_headers(user))

        assert response.status_code == 403

    async def test_admin_lists_any_user(self, client: AsyncClient, factory, auth_headers):
        admin = await factory.admin()
        user = await factory.user()
        component = await factory.component()
        await factory.favorite(user, component)

        response = await client.get(f"{BASE}/users/{user.id}", headers=auth_headers(admin))

        assert response.status_code == 200
        assert len(response.json()) == 1

    async def test_list_all_requires_admin(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()

        response = await client.get(BASE, headers=auth_headers(user))

        assert response.status_code == 403
        assert response.json()["reason"] == "admin_required"

    async def test_list_all_for_admin(self, client: AsyncClient, factory, auth_headers):
        admin = await factory.admin()
        user = await factory.user()
        await factory.favorite(user, await factory.component())
        await factory.favorite(user, await factory.component())

        response = await client.get(BASE, headers=auth_headers(admin))

        assert response.status_code == 200
        assert len(response.json()) == 2


class TestRemoveFavorite:
    async def test_remove_by_id(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()
        favorite = await factory.favorite(user, await factory.component())
        headers = auth_headers(user)

        response = await client.delete(f"{BASE}/{favorite.id}", headers=headers)
        missing = await client.get(f"{BASE}/{favorite.id}", headers=headers)

        assert response.status_code == 204
        assert missing.status_code == 404

    async def test_remove_missing_returns_404(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()

        response = await client.delete(f"{BASE}/777", headers=auth_headers(user))

        assert response.status_code == 404

    async def test_remove_other_users_favorite_is_forbidden(self, client: AsyncClient, factory, auth_headers):
        owner = await factory.user()
        intruder = await factory.user()
        favorite = await factory.favorite(owner, await factory.component())

        response = await client.delete(f"{BASE}/{favorite.id}", headers=auth_headers(intruder))

        assert response.status_code == 403

    async def test_remove_by_component(self, client: AsyncClient, factory, auth_headers):
        user = await factory.user()
        component = await factory.component()
        await factory.favorite(user, component)
        headers = auth_headers(user)

        response = await client.delete(f"{BASE}/components/{component.id}", headers=headers)
        again = await client.delete(f"{BASE}/components/{component.id}", headers=headers)

        assert response.status_code == 204
        assert again.status_code == 404
        assert await get_favorite_cache().get(user.id, component.id) is False
