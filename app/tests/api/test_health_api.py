def test_health(client):
    r = client.get("/api/v1/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_request_id_is_echoed(client):
    r = client.get("/api/v1/health", headers={"X-Request-Id": "rid-123"})
    assert r.headers["X-Request-Id"] == "rid-123"
    assert r.json()["request_id"] == "rid-123"


def test_request_id_generated_when_missing(client):
    r = client.get("/api/v1/health")
    assert r.headers["X-Request-Id"]
