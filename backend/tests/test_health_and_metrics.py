"""Operational endpoints — health probes and request metrics."""

from sqlalchemy.exc import OperationalError

from app.core import database


def test_simple_health(client):
    res = client.get("/health")

    assert res.status_code == 200
    assert res.json()["status"] == "ok"


def test_healthz_reports_healthy_database(client):
    res = client.get("/healthz")

    assert res.status_code == 200
    assert res.json()["checks"]["database"]["status"] == "healthy"


def test_healthz_returns_503_when_database_down(client, monkeypatch):
    class _DownSession:
        def execute(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        def close(self):
            pass

    monkeypatch.setattr(database, "SessionLocal", _DownSession)

    res = client.get("/healthz")

    assert res.status_code == 503
    assert res.json()["error"]["status"] == "unhealthy"


def test_root_lists_links(client):
    body = client.get("/").json()

    assert body["health"] == "/healthz"
    assert "version" in body


def test_metrics_count_requests_by_route_and_status(client, auth_headers):
    headers = auth_headers(1)
    client.get("/destinations", headers=headers)
    client.delete("/destinations/77", headers=headers)

    metrics = client.get("/metrics").json()

    assert metrics["requests_total"] >= 2
    assert metrics["status_codes"]["200"] >= 1
    assert metrics["status_codes"]["404"] == 1
    assert metrics["routes"]["GET /destinations"]["count"] == 1
    assert metrics["routes"]["DELETE /destinations/{destination_id}"]["count"] == 1


def test_prometheus_metrics_are_plain_text(client, auth_headers):
    client.get("/destinations", headers=auth_headers(1))

    res = client.get("/metrics/prometheus")

    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/plain")
    assert "destinations_api_requests_total" in res.text
    assert 'route="/destinations"' in res.text
