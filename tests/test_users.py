"""Testes da gestão de usuários e do perfil"""
from events_erp.models import UserRole


async def test_master_creates_user_bound_to_unit(client, make_unit, make_user, auth_headers):
    master = await make_user(UserRole.MASTER)
    unit = await make_unit("Sebrae Roraima")

    response = await client.post(
        "/api/users",
        headers=auth_headers(master),
        json={
            "name": "Gerente Sebrae",
            "email": "gerente@sebrae.com.br",
            "password": "123456",
            "role": "MANAGER",
            "unitId": unit.id,
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["role"] == "MANAGER"
    assert data["unit_id"] == unit.id
    assert data["unit_name"] == "Sebrae Roraima"
    assert "password" not in data
    assert "password_hash" not in data

    login = await client.post(
        "/api/auth/login",
        json={"email": "gerente@sebrae.com.br", "password": "123456"},
    )
    assert login.status_code == 200


async def test_duplicate_email_is_rejected(client, make_user, auth_headers):
    master = await make_user(UserRole.MASTER)
    await make_user(UserRole.STANDARD, email="repetido@sebrae.com.br")

    response = await client.post(
        "/api/users",
        headers=auth_headers(master),
        json={"name": "Outro", "email": "repetido@sebrae.com.br", "password": "123456", "role": "STANDARD"},
    )
    assert response.status_code == 400


async def test_unknown_unit_is_404(client, make_user, auth_headers):
    master = await make_user(UserRole.MASTER)

    response = await client.post(
        "/api/users",
        headers=auth_headers(master),
        json={"name": "Sem", "email": "sem@sebrae.com.br", "password": "123456",
              "role": "STANDARD", "unitId": "does-not-exist"},
    )
    assert response.status_code == 404


async def test_invalid_role_is_400(client, make_user, auth_headers):
    master = await make_user(UserRole.MASTER)

    response = await client.post(
        "/api/users",
        headers=auth_headers(master),
        json={"name": "X", "email": "x@sebrae.com.br", "password": "123456", "role": "ADMIN"},
    )
    assert response.status_code == 400


async def test_user_management_is_master_only(client, make_unit, make_user, auth_headers):
    unit = await make_unit()
    manager = await make_user(UserRole.MANAGER, unit)
    headers = auth_headers(manager)

    assert (await client.get("/api/users", headers=headers)).status_code == 403
    assert (await client.get(f"/api/users/{manager.id}", headers=headers)).status_code == 403
    response = await client.post(
        "/api/users",
        headers=headers,
        json={"name": "X", "email": "x@sebrae.com.br", "password": "123456", "role": "STANDARD"},
    )
    assert response.status_code == 403


async def test_master_lists_and_updates_users(client, make_unit, make_user, auth_headers):
    master = await make_user(UserRole.MASTER, name="Ana Master")
    unit = await make_unit()
    standard = await make_user(UserRole.STANDARD, name="Bruno Standard")
    headers = auth_headers(master)

    listed = await client.get("/api/users", headers=headers)
    assert listed.status_code == 200
    assert [u["name"] for u in listed.json()] == ["Ana Master", "Bruno Standard"]

    response = await client.put(
        f"/api/users/{standard.id}",
        headers=headers,
        json={"role": "OBSERVER", "unitId": unit.id, "password": "nova-senha"},
    )
    assert response.status_code == 200
    assert response.json()["role"] == "OBSERVER"
    assert response.json()["unit_id"] == unit.id

    login = await client.post(
        "/api/auth/login",
        json={"email": standard.email, "password": "nova-senha"},
    )
    assert login.status_code == 200

    cleared = await client.put(f"/api/users/{standard.id}", headers=headers, json={"unitId": None})
    assert cleared.status_code == 200
    assert cleared.json()["unit_id"] is None


async def test_master_cannot_delete_itself(client, make_user, auth_headers):
    master = await make_user(UserRole.MASTER)

    response = await client.delete(f"/api/users/{master.id}", headers=auth_headers(master))

    assert response.status_code == 400
    still_there = await client.get(f"/api/users/{master.id}", headers=auth_headers(master))
    assert still_there.status_code == 200


async def test_non_master_cannot_delete_users(client, make_user, auth_headers):
    manager = await make_user(UserRole.MANAGER)

    response = await client.delete(f"/api/users/{manager.id}", headers=auth_headers(manager))
    assert response.status_code == 403


async def test_delete_user(client, make_user, auth_headers):
    master = await make_user(UserRole.MASTER)
    standard = await make_user(UserRole.STANDARD)
    headers = auth_headers(master)

    response = await client.delete(f"/api/users/{standard.id}", headers=headers)

    assert response.status_code == 204
    assert (await client.get(f"/api/users/{standard.id}", headers=headers)).status_code == 404


async def test_user_owning_events_cannot_be_deleted(client, make_user, make_event, auth_headers):
    master = await make_user(UserRole.MASTER)
    owner = await make_user(UserRole.STANDARD)
    await make_event(owner)

    response = await client.delete(f"/api/users/{owner.id}", headers=auth_headers(master))
    assert response.status_code == 400


async def test_profile_update_keeps_role_and_unit(client, make_unit, make_user, auth_headers):
    unit = await make_unit()
    user = await make_user(UserRole.STANDARD, unit)

    response = await client.put(
        "/api/users/profile",
        headers=auth_headers(user),
        json={"name": "Novo Nome", "role": "MASTER", "unitId": None},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Novo Nome"
    assert data["role"] == "STANDARD"
    assert data["unit_id"] == unit.id


async def test_profile_email_must_be_free(client, make_user, auth_headers):
    await make_user(UserRole.STANDARD, email="ocupado@sebrae.com.br")
    user = await make_user(UserRole.STANDARD)

    response = await client.put(
        "/api/users/profile",
        headers=auth_headers(user),
        json={"email": "ocupado@sebrae.com.br"},
    )
    assert response.status_code == 400


async def test_emails_are_case_insensitive(client, make_user, auth_headers):
    master = await make_user(UserRole.MASTER)
    headers = auth_headers(master)

    created = await client.post(
        "/api/users",
        headers=headers,
        json={"name": "Gerente", "email": "Gerente@Sebrae.com.br", "password": "123456", "role": "MANAGER"},
    )
    assert created.status_code == 201
    assert created.json()["email"] == "gerente@sebrae.com.br"

    duplicate = await client.post(
        "/api/users",
        headers=headers,
        json={"name": "Outro", "email": "GERENTE@sebrae.com.br", "password": "123456", "role": "STANDARD"},
    )
    assert duplicate.status_code == 400

    login = await client.post("/api/auth/login", json={"email": "GeRente@sebrae.com.br", "password": "123456"})
    assert login.status_code == 200


async def test_master_cannot_change_own_role(client, make_user, auth_headers):
    master = await make_user(UserRole.MASTER)
    headers = auth_headers(master)

    demoted = await client.put(f"/api/users/{master.id}", headers=headers, json={"role": "STANDARD"})
    assert demoted.status_code == 400

    renamed = await client.put(f"/api/users/{master.id}", headers=headers, json={"name": "Novo", "role": "MASTER"})
    assert renamed.status_code == 200
    assert renamed.json()["role"] == "MASTER"
    assert renamed.json()["name"] == "Novo"
