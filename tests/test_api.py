"""Tests for the HTTP tool surface."""

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from code_mentor.interface.app import create_app

from conftest import SAMPLE_SRP_CLASS, VALID_TOKEN


@pytest.fixture
def client(settings, github):
    """Test client whose outgoing GitHub traffic hits the fake transport."""
    app = create_app(settings=settings, transport=github.transport)
    with TestClient(app) as test_client:
        yield test_client


class TestHealthAndCatalogue:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "configured": False}

    def test_tools_catalogue(self, client):
        tools = client.get("/tools").json()["tools"]

        names = [t["name"] for t in tools]
        assert names == [
            "configure-access",
            "list-source-files",
            "analyze-file",
            "analyze-repository",
            "suggest-architecture",
            "explain-pattern",
        ]
        schema = next(t for t in tools if t["name"] == "explain-pattern")["inputSchema"]
        assert "patternName" in schema["properties"]


class TestErrorEnvelope:
    """Every failure uses the same envelope."""

    def test_unknown_tool(self, client):
        response = client.post("/tools/delete-repository", json={})

        assert response.status_code == 404
        body = response.json()
        assert body["status"] == "error"
        assert body["error"]["code"] == "UNKNOWN_TOOL"
        assert body["error"]["retryable"] is False

    def test_invalid_arguments(self, client):
        response = client.post("/tools/analyze-file", json={"owner": "acme"})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "repo" in error["message"]

    def test_extra_arguments_rejected(self, client):
        response = client.post("/tools/explain-pattern", json={"patternName": "factory", "x": 1})
        assert response.status_code == 422

    def test_unconfigured_access(self, client):
        response = client.post("/tools/list-source-files", json={"owner": "acme", "repo": "shop"})

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFIGURATION_ERROR"

    def test_remote_not_found(self, client, github):
        github.rate_limit()
        client.post("/tools/configure-access", json={"token": VALID_TOKEN})

        response = client.post(
            "/tools/analyze-file", json={"owner": "acme", "repo": "shop", "path": "src/a.ts"}
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "GITHUB_API_ERROR"

    def test_remote_server_error_is_retryable(self, client, github):
        github.add("/rate_limit", {"message": "down"}, status=503)

        response = client.post("/tools/configure-access", json={"token": VALID_TOKEN})

        assert response.status_code == 502
        assert response.json()["error"]["retryable"] is True


class TestToolCalls:
    """Successful invocations through HTTP."""

    def test_explain_pattern(self, client):
        response = client.post("/tools/explain-pattern", json={"patternName": "Observer"})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["result"]["name"] == "Observer Pattern"

    def test_configure_then_analyze(self, client, github):
        github.rate_limit()
        github.file("src/UserService.ts", SAMPLE_SRP_CLASS)

        configured = client.post("/tools/configure-access", json={"token": VALID_TOKEN})
        assert configured.json()["result"]["configured"] is True
        assert client.get("/health").json()["configured"] is True

        response = client.post(
            "/tools/analyze-file",
            json={"owner": "acme", "repo": "shop", "path": "src/UserService.ts"},
        )

        assert response.status_code == 200
        result = response.json()["result"]
        assert result["file"] == "src/UserService.ts"
        assert result["analysis"]["summary"]["critical"] >= 1

    def test_settings_token_is_installed_at_startup(self, settings, github):
        configured = settings.model_copy(update={"github_token": SecretStr(VALID_TOKEN)})
        app = create_app(settings=configured, transport=github.transport)

        with TestClient(app) as test_client:
            health = test_client.get("/health").json()

        assert health["configured"] is True
        assert health["cache"] == {"enabled": True, "size": 0, "entries": 0}
