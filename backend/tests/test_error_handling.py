from fastapi import FastAPI
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from invoicer.core.config import settings
from invoicer.core.error_handlers import database_exception_handler, generic_exception_handler
from invoicer.middleware.request_context import RequestContextMiddleware


def _failing_app():
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(ServerSelectionTimeoutError, database_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret internals")

    @app.get("/db-down")
    async def db_down():
        raise ServerSelectionTimeoutError("no servers")

    return TestClient(app, raise_server_exceptions=False)


def test_production_hides_error_details(monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")

    response = _failing_app().get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "Internal server error"
    assert body["requestId"]
    assert "secret internals" not in response.text
    assert "traceback" not in body


def test_development_includes_error_details(monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "development")

    body = _failing_app().get("/boom").json()

    assert body["error"] == "secret internals"
    assert body["traceback"]


def test_store_outage_is_503(monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")

    response = _failing_app().get("/db-down")

    assert response.status_code == 503
    body = response.json()
    assert body["message"] == "Service temporarily unavailable."
    assert body["requestId"]
    assert "error" not in body
    assert "no servers" not in response.text


def test_request_id_is_echoed(client):
    response = client.get("/api/health", headers={"X-Request-ID": "abc123"})

    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "abc123"
    assert response.json()["status"] == "healthy"


def test_errors_use_message_key(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert "message" in response.json()


def test_store_outage_details_shown_in_development(monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "development")

    body = _failing_app().get("/db-down").json()

    assert body["error"] == "no servers"
