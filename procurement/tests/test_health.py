def test_health(client):
    r = client.get("/api/v1/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_request_id_is_echoed(client):
    r = client.get("/api/v1/health", headers={"X-Request-Id": "rid-123"})
    assert r.headers["X-Request-Id"] == "rid-123"
    assert r.json()["request_id"] == "rid-123"


def test_request_id_is_generated(client):
    r = client.get("/api/v1/health")
    assert r.headers.get("X-Request-Id")
    assert r.json()["request_id"] == r.headers["X-Request-Id"]


def test_unknown_route_uses_error_envelope(client):
    r = client.get("/api/v1/nowhere")
    assert r.status_code == 404
    assert r.json()["success"] is False
    assert r.json()["error"]


def test_unhandled_error_uses_error_envelope(session_factory, monkeypatch):
    from fastapi.testclient import TestClient

    from conftest import assert_api_error
    from procurement.db.session import get_db
    from procurement.main import create_app
    from procurement.services.projects_service import ProjectsService

    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    def boom(self, db, *, name, for_update=False):
        raise RuntimeError("database went away")

    monkeypatch.setattr(ProjectsService, "require", boom)

    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.get("/api/v1/projects/anything")
    assert_api_error(r, 500, "internal server error")
    assert "database went away" not in r.text


def test_health_reports_database(client):
    body = client.get("/api/v1/health").json()
    assert body["database"] == "ok"
    from procurement.core.config import get_settings

    assert body["environment"] == get_settings().environment


def test_health_degraded_when_database_unreachable():
    from fastapi.testclient import TestClient
    from sqlalchemy.exc import OperationalError

    from procurement.db.session import get_db
    from procurement.main import create_app

    class DeadSession:
        def execute(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    app = create_app()
    app.dependency_overrides[get_db] = lambda: DeadSession()

    with TestClient(app) as c:
        r = c.get("/api/v1/health")
    assert r.status_code == 503
    assert r.json()["status"] == "degraded"
    assert r.json()["database"] == "unavailable"


def test_openapi_documents_error_envelope(client):
    spec = client.get("/openapi.json").json()
    assert "ErrorEnvelope" in spec["components"]["schemas"]
    responses = spec["paths"]["/api/v1/projects"]["post"]["responses"]
    assert responses["409"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorEnvelope")
