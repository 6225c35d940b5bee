"""API tests for the auth endpoints."""

import pytest

pytestmark = pytest.mark.asyncio


def _auth(session):
    return {"Authorization": f"Bearer {session.token}"}


class TestSignUpAndSignIn:
    async def test_sign_up_then_sign_in(self, client, world):
        sign_up = await client.post(
            "/api/v1/auth/sign-up",
            json={"email": "new@example.com", "password": "secret1", "full_name": "Newbie", "role": "author"},
        )
        assert sign_up.status_code == 201
        assert sign_up.json()["role"] == "author"

        sign_in = await client.post("/api/v1/auth/sign-in", json={"email": "new@example.com", "password": "secret1"})

        assert sign_in.status_code == 200
        body = sign_in.json()
        assert body["name"] == "Newbie"
        assert body["uid"] == sign_up.json()["uid"]
        assert body["token"]
        assert world.backend.headers["Authorization"] == "Bearer service-role-key"

    async def test_sign_up_validation(self, client):
        response = await client.post(
            "/api/v1/auth/sign-up",
            json={"email": "new@example.com", "password": "123", "full_name": "Newbie", "role": "author"},
        )

        assert response.status_code == 422

    async def test_sign_up_unknown_role(self, client):
        response = await client.post(
            "/api/v1/auth/sign-up",
            json={"email": "new@example.com", "password": "secret1", "full_name": "Newbie", "role": "admin"},
        )

        assert response.status_code == 422

    async def test_bad_credentials(self, client, world):
        response = await client.post("/api/v1/auth/sign-in", json={"email": "nobody@example.com", "password": "x"})

        assert response.status_code == 401
        assert response.json()["error_type"] == "AuthenticationError"


class TestSession:
    async def test_session_of_signed_in_user(self, client, world):
        response = await client.get("/api/v1/auth/session", headers=_auth(world.reader))

        assert response.status_code == 200
        assert response.json()["uid"] == world.reader.uid
        assert response.json()["role"] == "reader"

    async def test_session_without_token(self, client, world):
        response = await client.get("/api/v1/auth/session")

        assert response.status_code == 401
        assert response.json()["detail"] == "User is not authenticated"

    async def test_session_with_bad_token(self, client, world):
        response = await client.get("/api/v1/auth/session", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401

    async def test_sign_out(self, client, world):
        response = await client.post("/api/v1/auth/sign-out", headers=_auth(world.reader))

        assert response.status_code == 200
        assert (await client.get("/api/v1/auth/session", headers=_auth(world.reader))).status_code == 401

    async def test_sign_out_without_token(self, client, world):
        assert (await client.post("/api/v1/auth/sign-out")).status_code == 401
