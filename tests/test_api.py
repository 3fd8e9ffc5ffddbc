"""HTTP level tests: envelopes, status codes and error bodies."""
from fastapi.routing import APIRoute

from hub.main import create_application

from .conftest import PASSWORD

ENTITY = {
    "name": "Maria",
    "lastname": "Perez",
    "birthdate": "1990-04-12",
    "national_id": "12345678",
    "nationality_type": "V",
    "emails": ["maria@example.com"],
    "phones": ["+58-412-5550001"],
}


def test_collection_routes_are_mounted_under_module_prefixes(settings):
    app = create_application(settings)

    methods = {}
    for route in app.routes:
        if isinstance(route, APIRoute):
            methods.setdefault(route.path, set()).update(route.methods)

    assert {"GET", "POST"} <= methods["/api/v1/entities"]
    assert {"GET", "POST"} <= methods["/api/v1/accounts"]
    assert {"GET", "PUT", "DELETE"} <= methods["/api/v1/entities/{entity_id}"]
    assert {"GET", "PUT", "DELETE"} <= methods["/api/v1/accounts/{account_id}"]
    assert "POST" in methods["/api/v1/auth/signin"]
    assert "GET" in methods["/api/v1/auth/session"]
    assert "POST" in methods["/api/v1/auth/logout"]


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["database"]["status"] == "healthy"


def test_entity_lifecycle(client):
    created = client.post("/api/v1/entities", json=ENTITY)
    assert created.status_code == 201
    body = created.json()
    assert body["message"] == "Entity created!"
    entity_id = body["data"]["id"]
    assert body["data"]["emails"] == ["maria@example.com"]

    fetched = client.get(f"/api/v1/entities/{entity_id}")
    assert fetched.status_code == 200
    assert fetched.json() == {"message": "Retrieved entity!", "data": body["data"]}

    listed = client.get("/api/v1/entities")
    assert listed.json()["message"] == "Retrieved all entities!"
    assert [item["id"] for item in listed.json()["data"]] == [entity_id]

    unchanged = client.put(f"/api/v1/entities/{entity_id}", json=ENTITY)
    assert unchanged.status_code == 200
    assert unchanged.json() == {"message": "Entity unchanged!", "data": None}

    updated = client.put(f"/api/v1/entities/{entity_id}", json={**ENTITY, "phones": []})
    assert updated.json()["message"] == "Entity updated!"
    assert client.get(f"/api/v1/entities/{entity_id}").json()["data"]["phones"] == []

    deleted = client.delete(f"/api/v1/entities/{entity_id}")
    assert deleted.json()["message"] == "Entity deleted!"
    assert client.get(f"/api/v1/entities/{entity_id}").status_code == 404


def test_search_by_dni(client):
    client.post("/api/v1/entities", json=ENTITY)

    response = client.get("/api/v1/entities/dni/V-12345678")
    assert response.json()["message"] == "1 entity found!"
    assert response.json()["data"][0]["national_id"] == "12345678"

    assert client.get("/api/v1/entities/dni/E-12345678").json()["message"] == "0 entities found!"


def test_entity_conflict_body(client):
    client.post("/api/v1/entities", json=ENTITY)

    response = client.post("/api/v1/entities", json={**ENTITY, "phones": []})

    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "ENTITY_CONFLICT"
    assert error["message"] == "Conflicts encountered!"
    assert error["details"] == {
        "duplicated_national_id": True,
        "emails_used": ["maria@example.com"],
        "phones_used": [],
    }
    assert error["path"] == "/api/v1/entities"
    assert error["method"] == "POST"
    assert error["request_id"] == response.headers["X-Request-ID"]


def test_not_found_body(client):
    response = client.get("/api/v1/entities/42")

    assert response.status_code == 404
    error = response.json()["error"]
    assert error["code"] == "NOT_FOUND"
    assert error["message"] == "Entity '42' not found!"
    assert error["details"]["resource_type"] == "entity"


def test_update_unknown_entity(client):
    response = client.put("/api/v1/entities/42", json=ENTITY)
    assert response.status_code == 404


def test_validation_error_body(client):
    response = client.post("/api/v1/entities", json={**ENTITY, "nationality_type": "VE"})

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert any(item["field"].endswith("nationality_type") for item in error["details"]["validation_errors"])


def test_request_id_is_echoed(client):
    response = client.get("/api/v1/entities", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_deleting_entity_with_account_is_a_conflict(client, api_roles):
    created = client.post(
        "/api/v1/accounts",
        json={"username": "mperez", "password": PASSWORD, "role_id": api_roles["admin"], "entity": ENTITY},
    )
    entity_id = created.json()["data"]["entity_id"]

    response = client.delete(f"/api/v1/entities/{entity_id}")

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "INTEGRITY_CONFLICT"
    assert client.get(f"/api/v1/entities/{entity_id}").status_code == 200


def test_account_endpoints(client, api_roles):
    created = client.post(
        "/api/v1/accounts",
        json={"username": "mperez", "password": PASSWORD, "role_id": api_roles["admin"], "entity": ENTITY},
    )
    assert created.status_code == 201
    account = created.json()["data"]
    assert created.json()["message"] == "Account created!"
    assert "password" not in account
    assert "password_hash" not in account
    assert account["entity"]["emails"] == ["maria@example.com"]

    duplicate = client.post(
        "/api/v1/accounts",
        json={"username": "mperez", "password": PASSWORD, "role_id": api_roles["admin"], "entity_id": account["entity_id"]},
    )
    assert duplicate.status_code == 409
    details = duplicate.json()["error"]["details"]
    assert details["username_used"] is True
    assert details["another_account_with_entity"] is True
    assert details["entity"] is None

    updated = client.put(f"/api/v1/accounts/{account['id']}", json={"enabled": False})
    assert updated.json()["message"] == "Account updated!"
    fetched = client.get(f"/api/v1/accounts/{account['id']}")
    assert fetched.json()["message"] == "Retrieved account!"
    assert fetched.json()["data"]["enabled"] is False

    assert client.get("/api/v1/accounts").json()["message"] == "Retrieved all accounts!"
    assert client.delete(f"/api/v1/accounts/{account['id']}").json()["message"] == "Account deleted!"
    assert client.get(f"/api/v1/accounts/{account['id']}").status_code == 404


def test_auth_flow(client, api_roles):
    client.post(
        "/api/v1/accounts",
        json={"username": "mperez", "password": PASSWORD, "role_id": api_roles["admin"], "entity": ENTITY},
    )

    signed_in = client.post("/api/v1/auth/signin", json={"email": "maria@example.com", "password": PASSWORD})
    assert signed_in.status_code == 200
    assert signed_in.json()["message"] == "Signed in!"
    session = signed_in.json()["data"]
    assert session["username"] == "mperez"
    assert session["role"]["modules"][0] == {"name": "entities", "permissions": ["read", "create"]}
    headers = {"Authorization": f"Bearer {session['token']}"}

    current = client.get("/api/v1/auth/session", headers=headers)
    assert current.json()["message"] == "Session retrieved!"
    assert current.json()["data"]["session_id"] == session["session_id"]

    logged_out = client.post("/api/v1/auth/logout", headers=headers)
    assert logged_out.json() == {"message": "Logged out!", "data": None}

    assert client.get("/api/v1/auth/session", headers=headers).status_code == 401
    assert client.post("/api/v1/auth/logout", headers=headers).status_code == 401


def test_auth_failures_are_uniform(client, api_roles):
    wrong = client.post("/api/v1/auth/signin", json={"email": "nobody@example.com", "password": "x"})
    assert wrong.status_code == 401
    assert wrong.json()["error"]["code"] == "INVALID_CREDENTIALS"

    missing = client.get("/api/v1/auth/session")
    assert missing.status_code == 401

    garbage = client.get("/api/v1/auth/session", headers={"Authorization": "Bearer nonsense"})
    assert garbage.status_code == 401
    assert garbage.json()["error"]["message"] == missing.json()["error"]["message"]


def test_disabled_account_sign_in(client, api_roles):
    client.post(
        "/api/v1/accounts",
        json={
            "username": "mperez",
            "password": PASSWORD,
            "enabled": False,
            "role_id": api_roles["admin"],
            "entity": ENTITY,
        },
    )

    response = client.post("/api/v1/auth/signin", json={"email": "maria@example.com", "password": PASSWORD})

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "ACCOUNT_DISABLED"
