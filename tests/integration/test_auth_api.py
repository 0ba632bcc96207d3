"""Integration tests for account endpoints."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.models.user import User
from expense_tracker.repositories.user import UserRepository


async def register(client: AsyncClient, name: str, email: str, password: str):
    return await client.post(
        "/auth/register", json={"name": name, "email": email, "password": password}
    )


class TestRegistration:
    async def test_register_success(self, client: AsyncClient, db_session: AsyncSession, token_service):
        response = await register(client, "Alice", "alice@x.com", "pw123456")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Registered successfully."
        assert data["user"]["name"] == "Alice"
        assert data["user"]["email"] == "alice@x.com"
        assert set(data["user"]) == {"id", "name", "email"}
        assert str(token_service.validate(data["token"]).user_id) == data["user"]["id"]

        user = await UserRepository(db_session).get_by_email("alice@x.com")
        assert user is not None
        assert user.password_hash != "pw123456"

    async def test_register_duplicate_email(self, client: AsyncClient, db_session: AsyncSession):
        await register(client, "Alice", "alice@x.com", "pw123456")

        response = await register(client, "Impostor", "alice@x.com", "different-pw")

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error_code"] == "AUTH_001"
        assert "already registered" in data["message"].lower()

        count = await db_session.scalar(select(func.count(User.id)))
        assert count == 1
        user = await UserRepository(db_session).get_by_email("alice@x.com")
        assert user.name == "Alice"

        login = await client.post(
            "/auth/login", json={"email": "alice@x.com", "password": "pw123456"}
        )
        assert login.status_code == 200

    async def test_register_email_is_case_insensitive(self, client: AsyncClient):
        await register(client, "Alice", "Alice@X.com", "pw123456")

        response = await register(client, "Alice 2", "alice@x.com", "pw123456")

        assert response.status_code == 400

    async def test_register_invalid_email(self, client: AsyncClient):
        response = await register(client, "Alice", "not-an-email", "pw123456")

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_001"

    async def test_register_short_password(self, client: AsyncClient):
        response = await register(client, "Alice", "alice@x.com", "short")

        assert response.status_code == 400
        assert "password" in response.json()["message"]

    async def test_password_never_echoed_on_validation_error(self, client: AsyncClient):
        response = await register(client, "", "alice@x.com", "hunter2-secret")

        assert response.status_code == 400
        assert "hunter2-secret" not in response.text


class TestLogin:
    async def test_login_success(self, client: AsyncClient, test_user: User, token_service):
        response = await client.post(
            "/auth/login", json={"email": test_user.email, "password": "password123"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Login successful."
        assert data["user"]["email"] == test_user.email
        assert token_service.validate(data["token"]).user_id == test_user.id

    async def test_login_uppercase_email(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/auth/login", json={"email": test_user.email.upper(), "password": "password123"}
        )

        assert response.status_code == 200

    async def test_wrong_password_and_unknown_email_look_the_same(
        self, client: AsyncClient, test_user: User
    ):
        wrong_password = await client.post(
            "/auth/login", json={"email": test_user.email, "password": "wrongpassword"}
        )
        unknown_email = await client.post(
            "/auth/login", json={"email": "nobody@example.com", "password": "password123"}
        )

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()
        assert wrong_password.json()["message"] == "Invalid email or password."


class TestCurrentUser:
    async def test_get_me(self, client: AsyncClient, test_user: User, auth_headers):
        response = await client.get("/auth/me", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["user"] == {
            "id": str(test_user.id),
            "name": test_user.name,
            "email": test_user.email,
        }

    async def test_get_me_without_token(self, client: AsyncClient):
        response = await client.get("/auth/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json()["error_code"] == "AUTH_003"

    async def test_get_me_with_wrong_scheme(self, client: AsyncClient, auth_headers):
        token = auth_headers["Authorization"].split(" ", 1)[1]

        response = await client.get("/auth/me", headers={"Authorization": f"Basic {token}"})

        assert response.status_code == 401

    async def test_get_me_with_invalid_token(self, client: AsyncClient):
        response = await client.get(
            "/auth/me", headers={"Authorization": "Bearer invalid.token.here"}
        )

        assert response.status_code == 401

    async def test_get_me_with_expired_token(self, client: AsyncClient, test_user: User, token_service):
        issued = datetime.now(timezone.utc) - timedelta(days=7, minutes=1)
        token = token_service.issue(test_user.id, test_user.email, now=issued)

        response = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    async def test_get_me_token_nearly_expired(self, client: AsyncClient, test_user: User, token_service):
        issued = datetime.now(timezone.utc) - timedelta(days=6, hours=23)
        token = token_service.issue(test_user.id, test_user.email, now=issued)

        response = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200

    async def test_get_me_unknown_user(self, client: AsyncClient, token_service, db_session):
        token = token_service.issue(uuid4(), "ghost@example.com")

        response = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 404
        assert response.json()["error_code"] == "USER_001"


class TestUpdateProfile:
    async def test_update_profile(self, client: AsyncClient, test_user: User, auth_headers):
        response = await client.put(
            "/auth/update",
            json={"name": "  Renamed  ", "email": "Renamed@Example.com"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["user"]["name"] == "Renamed"
        assert data["user"]["email"] == "renamed@example.com"

        login = await client.post(
            "/auth/login", json={"email": "renamed@example.com", "password": "password123"}
        )
        assert login.status_code == 200

    async def test_update_profile_keep_own_email(self, client: AsyncClient, test_user: User, auth_headers):
        response = await client.put(
            "/auth/update",
            json={"name": "New Name", "email": test_user.email},
            headers=auth_headers,
        )

        assert response.status_code == 200

    async def test_update_profile_email_taken(
        self, client: AsyncClient, test_user: User, another_user: User, auth_headers
    ):
        response = await client.put(
            "/auth/update",
            json={"name": "Test User", "email": another_user.email},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "AUTH_001"

    async def test_update_profile_blank_name(self, client: AsyncClient, auth_headers):
        response = await client.put(
            "/auth/update",
            json={"name": "   ", "email": "someone@example.com"},
            headers=auth_headers,
        )

        assert response.status_code == 400

    async def test_update_profile_requires_auth(self, client: AsyncClient):
        response = await client.put(
            "/auth/update", json={"name": "X", "email": "x@example.com"}
        )

        assert response.status_code == 401


class TestDeleteAccount:
    async def test_delete_account(self, client: AsyncClient, test_user: User, auth_headers, db_session):
        response = await client.delete("/auth/delete", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "User deleted."}
        assert await UserRepository(db_session).get_by_id(test_user.id) is None

    async def test_delete_twice(self, client: AsyncClient, test_user: User, auth_headers):
        await client.delete("/auth/delete", headers=auth_headers)

        response = await client.delete("/auth/delete", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "USER_001"

    async def test_token_outlives_account(self, client: AsyncClient, test_user: User, auth_headers):
        await client.post(
            "/expenses/add",
            json={"title": "Lunch", "amount": 12, "category": "Food"},
            headers=auth_headers,
        )
        await client.delete("/auth/delete", headers=auth_headers)

        me = await client.get("/auth/me", headers=auth_headers)
        expenses = await client.get("/expenses/all", headers=auth_headers)

        assert me.status_code == 404
        # No revocation and no cascade: the token still works and the rows remain.
        assert expenses.status_code == 200
        assert len(expenses.json()) == 1
