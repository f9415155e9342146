def test_pages_respond(client):
    for path in ("/", "/dashboard", "/checkout"):
        r = client.get(path)
        assert r.status_code == 200, path


def test_unknown_path_is_json_404(client):
    r = client.get("/nulle-part/ici")
    assert r.status_code == 404
    assert r.json()["detail"] == "Page introuvable: /nulle-part/ici"


def test_health(client):
    assert client.get("/health").json() == {"ok": True}
    assert client.get("/health/supabase").json() == {"connect_ok": True}


def test_rate_limit_disabled_in_tests(client):
    assert client.get("/health/rate-limit").json()["enabled"] is False


def test_security_headers(client):
    r = client.get("/health")
    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert "checkout.razorpay.com" in r.headers["Content-Security-Policy"]


def test_health_supabase_reads_service_at_request_time(client, monkeypatch):
    monkeypatch.setattr("rewear.health.service.health_supabase_info", lambda: {"connect_ok": False, "dns_ok": False})
    assert client.get("/health/supabase").json() == {"connect_ok": False, "dns_ok": False}
