from app.tests.factories import child, login, register, verify


def test_ranked_matches_and_pair_score(client):
    maria = register(client, "Maria", "maria@example.com")
    ana = register(client, "Ana", "ana@example.com")
    carla = register(client, "Carla", "carla@example.com")
    h_maria = login(client, "maria@example.com")
    h_ana = login(client, "ana@example.com")

    verify(client, h_maria, child(4, activities=["Leitura", "Música"]))
    verify(client, h_ana, child(5, activities=["Música", "Desenho/Pintura"]))

    r = client.get("/api/v1/matching", headers=h_maria)
    assert r.status_code == 200
    matches = r.json()["matches"]
    assert [(m["user"]["id"], m["match_percentage"]) for m in matches] == [
        (ana["id"], 78),
        (carla["id"], 0),
    ]

    own = client.get(f"/api/v1/matching/score/{ana['id']}", headers=h_ana).json()
    assert own["match_percentage"] == 100

    score = client.get(f"/api/v1/matching/score/{maria['id']}", headers=h_ana).json()
    assert score["match_percentage"] == 78


def test_limit_and_validation(client):
    register(client, "Maria", "maria@example.com")
    register(client, "Ana", "ana@example.com")
    register(client, "Carla", "carla@example.com")
    h_maria = login(client, "maria@example.com")

    r = client.get("/api/v1/matching?limit=1", headers=h_maria)
    assert len(r.json()["matches"]) == 1

    r0 = client.get("/api/v1/matching?limit=0", headers=h_maria)
    assert r0.json()["matches"] == []

    bad = client.get("/api/v1/matching?limit=-1", headers=h_maria)
    assert bad.status_code == 422


def test_unverified_user_scores_zero(client):
    register(client, "Maria", "maria@example.com")
    carla = register(client, "Carla", "carla@example.com")
    h_maria = login(client, "maria@example.com")
    verify(client, h_maria, child(4, activities=["Leitura"]))

    score = client.get(f"/api/v1/matching/score/{carla['id']}", headers=h_maria).json()
    assert score["match_percentage"] == 0


def test_missing_limit_returns_full_ranking(client):
    register(client, "Maria", "maria@example.com")
    for n in range(4):
        register(client, f"Mãe {n}", f"mae{n}@example.com")
    h_maria = login(client, "maria@example.com")

    full = client.get("/api/v1/matching", headers=h_maria).json()["matches"]
    assert len(full) == 4

    two = client.get("/api/v1/matching?limit=2", headers=h_maria).json()["matches"]
    assert two == full[:2]
