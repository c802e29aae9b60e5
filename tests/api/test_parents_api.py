"""
Tests for Parent API Endpoints

Signup, login, bearer tokens and consent.
"""

from httpx import AsyncClient


class TestSignup:
    async def test_signup_by_email(self, client: AsyncClient):
        response = await client.post("/api/v1/parent/signup", json={"email": "A@X.com"})

        assert response.status_code == 201
        data = response.json()
        assert data["parent_id"] == "parent_00000001"
        assert data["token"].startswith("tok_")

    async def test_signup_by_phone(self, client: AsyncClient):
        response = await client.post("/api/v1/parent/signup", json={"phone": "+6591234567"})
        assert response.status_code == 201

    async def test_repeat_signup_same_parent_new_token(self, client: AsyncClient, signup):
        first = await signup("a@x.com")
        second = await signup(" A@x.COM ")

        assert second["parent_id"] == first["parent_id"]
        assert second["token"] != first["token"]

    async def test_both_tokens_stay_valid(self, client: AsyncClient, signup):
        first = await signup("a@x.com")
        await signup("a@x.com")

        response = await client.get("/api/v1/children", headers=first["headers"])
        assert response.status_code == 200

    async def test_missing_identity(self, client: AsyncClient):
        response = await client.post("/api/v1/parent/signup", json={})

        assert response.status_code == 400
        assert response.json()["detail"] == "Provide email or phone."

    async def test_blank_identity(self, client: AsyncClient):
        response = await client.post("/api/v1/parent/signup", json={"email": "  ", "phone": ""})
        assert response.status_code == 400

    async def test_non_string_email_is_ignored(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/parent/signup", json={"email": 5, "phone": "+6591234567"}
        )
        assert response.status_code == 201

        login = await client.post("/api/v1/parent/login", json={"phone": "+6591234567"})
        assert login.json()["parent_id"] == response.json()["parent_id"]

    async def test_non_string_identity_only(self, client: AsyncClient):
        response = await client.post("/api/v1/parent/signup", json={"email": ["a@x.com"]})

        assert response.status_code == 400
        assert response.json()["detail"] == "Provide email or phone."


class TestLogin:
    async def test_login_existing_parent(self, client: AsyncClient, signup):
        account = await signup("+6590000000")

        response = await client.post("/api/v1/parent/login", json={"phone": " +6590000000 "})

        assert response.status_code == 200
        assert response.json()["parent_id"] == account["parent_id"]

    async def test_login_unknown_parent(self, client: AsyncClient):
        response = await client.post("/api/v1/parent/login", json={"email": "ghost@x.com"})
        assert response.status_code == 404


class TestBearerAuth:
    async def test_missing_header(self, client: AsyncClient):
        response = await client.get("/api/v1/children")

        assert response.status_code == 401
        assert response.json()["detail"] == "Missing bearer token."

    async def test_wrong_scheme(self, client: AsyncClient, signup):
        account = await signup("a@x.com")

        response = await client.get(
            "/api/v1/children", headers={"Authorization": f"Basic {account['token']}"}
        )
        assert response.status_code == 401

    async def test_unknown_token(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/consent",
            json={"accepted": True},
            headers={"Authorization": "Bearer tok_made_up"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token."


class TestConsent:
    async def test_accept(self, client: AsyncClient, signup):
        account = await signup("a@x.com")

        response = await client.post(
            "/api/v1/consent",
            json={"accepted": True, "market": "Malaysia"},
            headers=account["headers"],
        )

        assert response.status_code == 201
        data = response.json()
        assert data["parent_id"] == account["parent_id"]
        assert data["accepted"] is True
        assert data["market"] == "Malaysia"

    async def test_market_defaults(self, client: AsyncClient, signup):
        account = await signup("a@x.com")

        response = await client.post(
            "/api/v1/consent", json={"accepted": True}, headers=account["headers"]
        )
        assert response.json()["market"] == "Singapore"

    async def test_non_string_market_defaults(self, client: AsyncClient, signup):
        account = await signup("a@x.com")

        response = await client.post(
            "/api/v1/consent", json={"accepted": True, "market": 65}, headers=account["headers"]
        )

        assert response.status_code == 201
        assert response.json()["market"] == "Singapore"

    async def test_declined(self, client: AsyncClient, signup):
        account = await signup("a@x.com")

        response = await client.post(
            "/api/v1/consent", json={"accepted": False}, headers=account["headers"]
        )
        assert response.status_code == 400

    async def test_accepted_must_be_boolean(self, client: AsyncClient, signup):
        account = await signup("a@x.com")

        response = await client.post(
            "/api/v1/consent", json={"accepted": "yes"}, headers=account["headers"]
        )
        assert response.status_code == 400

    async def test_requires_auth(self, client: AsyncClient):
        response = await client.post("/api/v1/consent", json={"accepted": True})
        assert response.status_code == 401
