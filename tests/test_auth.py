"""Testes de login, token e dependências de autenticação"""
from datetime import timedelta

from events_erp.core import create_access_token, settings, token_claims_for, verify_access_token
from events_erp.database import bootstrap_master
from events_erp.models import UserRole


async def test_login_returns_token_and_user(client, make_unit, make_user):
    unit = await make_unit("Sebrae Roraima")
    user = await make_user(UserRole.MANAGER, unit, email="gerente@sebrae.com.br")

    response = await client.post(
        "/api/auth/login",
        json={"email": "gerente@sebrae.com.br", "password": "secret123"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["token"] == data["access_token"]
    assert data["token_type"] == "bearer"
    assert data["user"]["id"] == user.id
    assert data["user"]["role"] == "MANAGER"
    assert data["user"]["unit_name"] == "Sebrae Roraima"
    assert "password_hash" not in data["user"]

    payload = verify_access_token(data["token"])
    assert payload["sub"] == user.id
    assert payload["role"] == "MANAGER"
    assert payload["unit_id"] == unit.id


async def test_wrong_password_and_unknown_email_look_the_same(client, make_user):
    await make_user(UserRole.STANDARD, email="analista@sebrae.com.br")

    wrong_password = await client.post(
        "/api/auth/login",
        json={"email": "analista@sebrae.com.br", "password": "nope-nope"},
    )
    unknown_email = await client.post(
        "/api/auth/login",
        json={"email": "ninguem@sebrae.com.br", "password": "nope-nope"},
    )

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


async def test_login_validation_error_is_400(client):
    response = await client.post("/api/auth/login", json={"email": "not-an-email"})

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Validation error"
    fields = {error["field"] for error in body["errors"]}
    assert "body.email" in fields
    assert "body.password" in fields


async def test_register_is_always_forbidden(client):
    response = await client.post(
        "/api/auth/register",
        json={"name": "X", "email": "x@sebrae.com.br", "password": "123456", "role": "MASTER"},
    )
    assert response.status_code == 403


async def test_missing_token_is_401(client):
    response = await client.get("/api/events")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


async def test_invalid_token_is_401(client):
    response = await client.get("/api/events", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


async def test_expired_token_is_401(client, make_user):
    user = await make_user(UserRole.STANDARD)
    token = create_access_token(token_claims_for(user), expires_delta=timedelta(minutes=-5))

    response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


async def test_me_reads_role_from_database(client, db, make_user, auth_headers):
    user = await make_user(UserRole.STANDARD)
    headers = auth_headers(user)

    # O token continua dizendo STANDARD; o banco manda
    user.role = UserRole.MANAGER.value
    await db.commit()

    response = await client.get("/api/auth/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["role"] == "MANAGER"


async def test_token_of_deleted_user_is_401(client, db, make_user, auth_headers):
    user = await make_user(UserRole.STANDARD)
    headers = auth_headers(user)

    await db.delete(user)
    await db.commit()

    response = await client.get("/api/auth/me", headers=headers)
    assert response.status_code == 401


async def test_auth_responses_are_not_cached(client):
    response = await client.post(
        "/api/auth/login",
        json={"email": "ninguem@sebrae.com.br", "password": "x"},
    )
    assert "no-store" in response.headers["cache-control"]
    assert response.headers["x-content-type-options"] == "nosniff"


async def test_bootstrap_creates_master_once(client, db):
    assert await bootstrap_master(db) is True
    assert await bootstrap_master(db) is False

    response = await client.post(
        "/api/auth/login",
        json={"email": settings.MASTER_EMAIL, "password": settings.MASTER_PASSWORD},
    )
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "MASTER"
