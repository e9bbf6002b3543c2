def child(age, screen_restricted=False, activities=(), name="Criança"):
    return {
        "name": name,
        "age": age,
        "screen_restricted": screen_restricted,
        "activities": list(activities),
    }


def register(client, name, email, password="senha123", **extra):
    body = {
        "name": name,
        "email": email,
        "password": password,
        "mother_age": 30,
        "child_age_range": "3-5",
        "work_hours": "08:00-17:00",
        "location": "São Paulo, SP",
    }
    body.update(extra)
    r = client.post("/api/v1/auth/register", json=body)
    assert r.status_code == 201, r.text
    return r.json()


def login(client, email, password="senha123"):
    r = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


def verify(client, headers, *children, rg="12.345.678-9", cpf="123.456.789-00"):
    r = client.put(
        "/api/v1/users/me/verification",
        json={"rg": rg, "cpf": cpf, "children": list(children)},
        headers=headers,
    )
    assert r.status_code == 200, r.text
    return r.json()
