import app.main as main_mod
import app.routers.auth as auth_mod


def test_auth_rate_limit_blocks_excess_requests(monkeypatch, client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_auth_per_min", 2)
    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: None)

    payload = {"email": "x@example.com", "password": "bad"}
    r1 = client.post("/api/v1/auth/login", json=payload)
    r2 = client.post("/api/v1/auth/login", json=payload)
    r3 = client.post("/api/v1/auth/login", json=payload)

    assert r1.status_code == 401
    assert r2.status_code == 401
    assert r3.status_code == 429
    assert int(r3.headers["Retry-After"]) >= 1


def test_rate_limit_counts_each_auth_path_separately(monkeypatch, client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_auth_per_min", 1)
    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: None)

    assert client.post("/api/v1/auth/login", json={"email": "x@example.com", "password": "bad"}).status_code == 401
    resp = client.post("/api/v1/auth/register", json={"name": "Jordan", "email": "x@example.com", "password": "short"})
    assert resp.status_code == 422
    assert client.post("/api/v1/auth/login", json={"email": "x@example.com", "password": "bad"}).status_code == 429
