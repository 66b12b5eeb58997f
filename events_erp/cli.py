"""
Events ERP - CLI Admin
Ferramenta de linha de comando que conversa com a API

Uso:
    events-erp-cli login [email] [senha]
    events-erp-cli events list
    events-erp-cli events show <event_id>
    events-erp-cli units list
    events-erp-cli units create "Nome da Unidade"
    events-erp-cli users list
    events-erp-cli users create <nome> <email> <senha> <papel> [unit_id]
    events-erp-cli seed
"""
import inspect
import os
import sys
from pathlib import Path
from typing import Optional

import httpx

from events_erp.core.config import settings

BASE_URL = os.getenv("EVENTS_API_URL", settings.EVENTS_API_URL)
TOKEN_FILE = Path(settings.CLI_TOKEN_FILE)

DEMO_UNIT = "Sebrae Roraima"
DEMO_MANAGER = {
    "name": "Gerente Sebrae",
    "email": "gerente@sebrae.com.br",
    "password": "123456",
    "role": "MANAGER",
}
DEMO_EVENT = {
    "name": "Decola Roraima",
    "startDate": "2026-02-27T03:00:00Z",
    "endDate": "2026-03-27T06:30:00Z",
    "location": "D Rosi",
    "description": "Um evento para muita gente",
    "budget": 50000,
    "project": "Decola",
    "action": "Feira de negócios",
    "responsibleUnit": "Sebrae Roraima",
    "responsibleEmail": "gerente@sebrae.com.br",
    "responsiblePhone": "(95) 99999-0000",
}


class CLIError(Exception):
    """Erro reportado ao usuário sem stack trace"""


def make_client() -> httpx.Client:
    return httpx.Client(base_url=BASE_URL, timeout=15.0)


def save_token(token: str):
    TOKEN_FILE.write_text(token)


def load_token() -> Optional[str]:
    if TOKEN_FILE.exists():
        return TOKEN_FILE.read_text().strip()
    return None


def get_headers():
    token = load_token()
    if not token:
        raise CLIError("Faça login primeiro com 'events-erp-cli login'")
    return {"Authorization": f"Bearer {token}"}


def _error_detail(response: httpx.Response) -> str:
    try:
        return str(response.json().get("detail", response.text))
    except ValueError:
        return response.text


def _request(client: httpx.Client, method: str, path: str, expected: int = 200, **kwargs):
    response = client.request(method, f"/api{path}", headers=get_headers(), **kwargs)
    if response.status_code != expected:
        raise CLIError(f"{response.status_code}: {_error_detail(response)}")
    if response.status_code == 204:
        return None
    return response.json()


def cmd_login(client: httpx.Client, email: str = None, password: str = None):
    """Login no sistema"""
    email = email or input(f"Email [{settings.MASTER_EMAIL}]: ").strip() or settings.MASTER_EMAIL
    password = password or input("Senha: ").strip()

    response = client.post("/api/auth/login", json={"email": email, "password": password})
    if response.status_code != 200:
        raise CLIError(f"Falha no login: {_error_detail(response)}")

    data = response.json()
    save_token(data["access_token"])
    print("\n✓ Login bem sucedido!")
    print(f"  Usuário: {data['user']['email']} ({data['user']['role']})")


def cmd_events_list(client: httpx.Client):
    """Lista eventos visíveis"""
    events = _request(client, "GET", "/events")
    print(f"\n{'='*100}")
    print(f"{'ID':<36} | {'Nome':<24} | {'Status':<11} | {'Orçamento':>12} | {'Saldo':>12}")
    print(f"{'='*100}")
    for ev in events:
        summary = ev["summary"]
        print(
            f"{ev['id']:<36} | {ev['name'][:24]:<24} | {ev['status']:<11} | "
            f"{summary['budget']:>12.2f} | {summary['balance']:>12.2f}"
        )
    print(f"\nTotal: {len(events)} eventos")
    return events


def cmd_events_show(client: httpx.Client, event_id: str):
    """Detalhe de um evento"""
    ev = _request(client, "GET", f"/events/{event_id}")
    summary = ev["summary"]
    print(f"\n{ev['name']} [{ev['status']}]")
    print(f"  Unidade: {ev.get('unit_name') or '-'}")
    print(f"  Período: {ev['start_date'][:10]} a {ev['end_date'][:10]}")
    if ev.get("cancellation_reason"):
        print(f"  Motivo do cancelamento: {ev['cancellation_reason']}")
    print(f"  Orçamento: {summary['budget']:.2f}")
    print(f"  Gasto:     {summary['spent']:.2f}")
    print(f"  Saldo:     {summary['balance']:.2f}")
    print(f"  Lançamentos: {len(ev.get('transactions', []))}")
    return ev


def cmd_units_list(client: httpx.Client):
    units = _request(client, "GET", "/units")
    for unit in units:
        print(f"{unit['id']:<36} | {unit['name']}")
    print(f"\nTotal: {len(units)} unidades")
    return units


def cmd_units_create(client: httpx.Client, name: str):
    unit = _request(client, "POST", "/units", expected=201, json={"name": name})
    print(f"\n✓ Unidade criada: {unit['name']} (ID: {unit['id']})")
    return unit


def cmd_users_list(client: httpx.Client):
    users = _request(client, "GET", "/users")
    for u in users:
        print(f"{u['id']:<36} | {u['name'][:20]:<20} | {u['email']:<30} | {u['role']:<8} | {u.get('unit_name') or '-'}")
    print(f"\nTotal: {len(users)} usuários")
    return users


def cmd_users_create(client: httpx.Client, name: str, email: str, password: str, role: str, unit_id: str = None):
    payload = {"name": name, "email": email, "password": password, "role": role.upper()}
    if unit_id:
        payload["unitId"] = unit_id
    user = _request(client, "POST", "/users", expected=201, json=payload)
    print(f"\n✓ Usuário criado: {user['email']} ({user['role']})")
    return user


def cmd_seed(client: httpx.Client):
    """Cria dados de demonstração: unidade, gerente e evento"""
    units = _request(client, "GET", "/units")
    unit = next((u for u in units if u["name"] == DEMO_UNIT), None)
    if unit:
        print(f"  Unidade já existe: {DEMO_UNIT}")
    else:
        unit = cmd_units_create(client, DEMO_UNIT)

    users = _request(client, "GET", "/users")
    if any(u["email"] == DEMO_MANAGER["email"] for u in users):
        print(f"  Gerente já existe: {DEMO_MANAGER['email']}")
    else:
        cmd_users_create(client, unit_id=unit["id"], **DEMO_MANAGER)

    event = _request(client, "POST", "/events", expected=201, json={**DEMO_EVENT, "unitId": unit["id"]})
    print(f"\n✓ Evento criado: {event['name']} (ID: {event['id']})")
    return event


COMMANDS = {
    ("login",): cmd_login,
    ("events", "list"): cmd_events_list,
    ("events", "show"): cmd_events_show,
    ("units", "list"): cmd_units_list,
    ("units", "create"): cmd_units_create,
    ("users", "list"): cmd_users_list,
    ("users", "create"): cmd_users_create,
    ("seed",): cmd_seed,
}


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    command = None
    for size in (2, 1):
        key = tuple(args[:size])
        if key in COMMANDS:
            command = COMMANDS[key]
            args = args[size:]
            break

    if command is None:
        print(__doc__)
        return 1

    try:
        inspect.signature(command).bind(None, *args)
    except TypeError:
        print(__doc__)
        return 1

    try:
        with make_client() as client:
            command(client, *args)
    except CLIError as e:
        print(f"✗ Erro: {e}")
        return 1
    except httpx.HTTPError as e:
        print(f"✗ Erro de conexão: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
