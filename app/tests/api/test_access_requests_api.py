import uuid

from app.tests.factories import child, login, register, verify


def _two_mothers(client):
    maria = register(client, "Maria", "maria@example.com")
    ana = register(client, "Ana", "ana@example.com")
    h_maria = login(client, "maria@example.com")
    h_ana = login(client, "ana@example.com")
    verify(client, h_maria, child(4, name="Lucas", activities=["Leitura"]))
    verify(client, h_ana, child(5, name="Julia", activities=["Música"]) | {"allergies": "amendoim"})
    return maria, ana, h_maria, h_ana


def test_children_hidden_until_request_accepted(client):
    maria, ana, h_maria, h_ana = _two_mothers(client)

    r = client.get(f"/api/v1/users/{ana['id']}", headers=h_maria)
    assert r.status_code == 200
    assert r.json()["can_view_children"] is False
    assert r.json()["children"] is None

    created = client.post("/api/v1/access-requests", json={"recipient_id": ana["id"]}, headers=h_maria)
    assert created.status_code == 201
    req = created.json()
    assert req["status"] == "pending"
    assert req["requester_name"] == "Maria"

    status = client.get(f"/api/v1/access-requests/status/{ana['id']}", headers=h_maria).json()
    assert status == {"other_id": ana["id"], "has_pending_request": True, "can_view": False}

    pending = client.get("/api/v1/access-requests/pending", headers=h_ana).json()
    assert [p["id"] for p in pending] == [req["id"]]

    chat = client.get(f"/api/v1/conversations/{maria['id']}", headers=h_ana).json()
    [msg] = chat["messages"]
    assert msg["kind"] == "child_data_request"
    assert msg["request_id"] == req["id"]
    assert msg["request_status"] == "pending"

    accepted = client.post(f"/api/v1/access-requests/{req['id']}/accept", headers=h_ana)
    assert accepted.status_code == 200
    assert accepted.json()["status"] == "accepted"
    assert accepted.json()["responded_at_iso"]

    chat = client.get(f"/api/v1/conversations/{ana['id']}", headers=h_maria).json()
    assert chat["messages"][0]["request_status"] == "accepted"

    detail = client.get(f"/api/v1/users/{ana['id']}", headers=h_maria).json()
    assert detail["can_view_children"] is True
    assert detail["children"][0]["name"] == "Julia"
    assert detail["children"][0]["allergies"] == "amendoim"
    # mother identity documents never leave the owner's view
    assert "rg" not in detail and "cpf" not in detail

    # grant is one-way
    back = client.get(f"/api/v1/users/{maria['id']}", headers=h_ana).json()
    assert back["can_view_children"] is False


def test_owner_always_sees_own_children(client):
    _maria, ana, _h_maria, h_ana = _two_mothers(client)

    detail = client.get(f"/api/v1/users/{ana['id']}", headers=h_ana).json()
    assert detail["can_view_children"] is True
    assert detail["children"][0]["name"] == "Julia"

    mine = client.get("/api/v1/users/me/verification", headers=h_ana).json()
    assert mine["rg_masked"].endswith("-9")
    assert "12.345" not in mine["rg_masked"]


def test_duplicate_request_conflict(client):
    _maria, ana, h_maria, _h_ana = _two_mothers(client)

    first = client.post("/api/v1/access-requests", json={"recipient_id": ana["id"]}, headers=h_maria)
    assert first.status_code == 201
    second = client.post("/api/v1/access-requests", json={"recipient_id": ana["id"]}, headers=h_maria)
    assert second.status_code == 409


def test_second_response_conflict(client):
    _maria, ana, h_maria, h_ana = _two_mothers(client)
    req = client.post("/api/v1/access-requests", json={"recipient_id": ana["id"]}, headers=h_maria).json()

    assert client.post(f"/api/v1/access-requests/{req['id']}/decline", headers=h_ana).status_code == 200
    again = client.post(f"/api/v1/access-requests/{req['id']}/accept", headers=h_ana)
    assert again.status_code == 409

    current = client.get(f"/api/v1/access-requests/{req['id']}", headers=h_maria).json()
    assert current["status"] == "declined"


def test_requester_cannot_answer_own_request(client):
    _maria, ana, h_maria, _h_ana = _two_mothers(client)
    req = client.post("/api/v1/access-requests", json={"recipient_id": ana["id"]}, headers=h_maria).json()

    r = client.post(f"/api/v1/access-requests/{req['id']}/accept", headers=h_maria)
    assert r.status_code == 403


def test_outsider_cannot_read_request(client):
    _maria, ana, h_maria, _h_ana = _two_mothers(client)
    register(client, "Carla", "carla@example.com")
    h_carla = login(client, "carla@example.com")
    req = client.post("/api/v1/access-requests", json={"recipient_id": ana["id"]}, headers=h_maria).json()

    assert client.get(f"/api/v1/access-requests/{req['id']}", headers=h_carla).status_code == 403


def test_unknown_recipient_and_request(client):
    _maria, _ana, h_maria, _h_ana = _two_mothers(client)

    r = client.post("/api/v1/access-requests", json={"recipient_id": str(uuid.uuid4())}, headers=h_maria)
    assert r.status_code == 404
    r2 = client.post(f"/api/v1/access-requests/{uuid.uuid4()}/accept", headers=h_maria)
    assert r2.status_code == 404


def test_self_request_rejected(client):
    maria, _ana, h_maria, _h_ana = _two_mothers(client)
    r = client.post("/api/v1/access-requests", json={"recipient_id": maria["id"]}, headers=h_maria)
    assert r.status_code == 400


def test_unverified_user_cannot_open_other_profiles(client):
    _maria, ana, _h_maria, _h_ana = _two_mothers(client)
    carla = register(client, "Carla", "carla@example.com")
    h_carla = login(client, "carla@example.com")

    r = client.get(f"/api/v1/users/{ana['id']}", headers=h_carla)
    assert r.status_code == 403

    # own profile stays reachable
    own = client.get(f"/api/v1/users/{carla['id']}", headers=h_carla)
    assert own.status_code == 200

    verify(client, h_carla, child(6, name="Davi"))
    r2 = client.get(f"/api/v1/users/{ana['id']}", headers=h_carla)
    assert r2.status_code == 200
    assert r2.json()["children"] is None
