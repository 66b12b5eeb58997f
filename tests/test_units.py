"""Testes de unidades"""
from events_erp.models import UserRole


async def test_master_creates_unit(client, make_user, auth_headers):
    master = await make_user(UserRole.MASTER)

    response = await client.post("/api/units", headers=auth_headers(master), json={"name": "Sebrae Roraima"})

    assert response.status_code == 201
    unit = response.json()
    assert unit["name"] == "Sebrae Roraima"

    fetched = await client.get(f"/api/units/{unit['id']}", headers=auth_headers(master))
    assert fetched.status_code == 200
    assert fetched.json()["name"] == "Sebrae Roraima"


async def test_unit_names_are_unique(client, make_unit, make_user, auth_headers):
    master = await make_user(UserRole.MASTER)
    await make_unit("Sebrae Roraima")

    response = await client.post("/api/units", headers=auth_headers(master), json={"name": "Sebrae Roraima"})
    assert response.status_code == 400


async def test_only_master_creates_units(client, make_user, auth_headers):
    manager = await make_user(UserRole.MANAGER)

    response = await client.post("/api/units", headers=auth_headers(manager), json={"name": "Nova"})
    assert response.status_code == 403


async def test_any_user_lists_units_by_name(client, make_unit, make_user, auth_headers):
    observer = await make_user(UserRole.OBSERVER)
    await make_unit("Boa Vista")
    await make_unit("Alto Alegre")

    response = await client.get("/api/units", headers=auth_headers(observer))

    assert response.status_code == 200
    assert [u["name"] for u in response.json()] == ["Alto Alegre", "Boa Vista"]


async def test_unknown_unit_is_404(client, make_user, auth_headers):
    user = await make_user(UserRole.STANDARD)

    response = await client.get("/api/units/missing", headers=auth_headers(user))
    assert response.status_code == 404
