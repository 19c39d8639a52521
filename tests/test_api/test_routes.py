"""Tests for the HTTP surface — FastAPI TestClient with injected services."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from role_rag.api.app import create_app
from role_rag.messages import NO_ACCESS_ANSWER, NO_DOCUMENTS_TO_EXPLAIN
from role_rag.reports.questions import RISK_QUERIES, ROLE_QUESTIONS


class TestHealth:

    def test_liveness(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "chunks": 1}


class TestChat:

    def test_answer_with_sources(self, client):
        response = client.post("/api/chat", json={
            "question": "How do platform doors work?",
            "role": "StationController",
        })
        assert response.status_code == 200
        body = response.json()
        assert body["answer"] == "Platform doors close automatically."
        assert body["sources"] == [{"source": "ops.pdf", "page": 2}]
        assert body["retrieved"][0]["metadata"]["source"] == "ops.pdf"
        assert "allowed_roles" not in body["retrieved"][0]

    def test_other_role_gets_no_access(self, client):
        response = client.post("/api/chat", json={"question": "How do platform doors work?", "role": "HR"})
        assert response.status_code == 200
        assert response.json() == {"answer": NO_ACCESS_ANSWER, "sources": [], "retrieved": []}

    def test_filter_and_k_accepted(self, client):
        response = client.post("/api/chat", json={
            "question": "doors?",
            "role": "StationController",
            "filter": {"department": "HR"},
            "k": 2,
        })
        assert response.status_code == 200
        assert response.json()["answer"] == NO_ACCESS_ANSWER

    @pytest.mark.parametrize("body", [
        {"role": "HR"},
        {"question": "doors?"},
        {"question": "   ", "role": "HR"},
        {"question": "doors?", "role": "HR; DROP TABLE"},
        {"question": "doors?", "role": "HR", "k": 0},
        {"question": "doors?", "role": "HR", "k": 21},
    ])
    def test_malformed_input_is_400(self, client, body):
        response = client.post("/api/chat", json=body)
        assert response.status_code == 400
        assert "error" in response.json()

    def test_missing_field_named_in_error(self, client):
        response = client.post("/api/chat", json={"role": "HR"})
        assert "question" in response.json()["error"]

    def test_invalid_json_is_400(self, client):
        response = client.post(
            "/api/chat", content="{not json", headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    def test_internal_failure_is_500(self, services):
        services.orchestrator = MagicMock()
        services.orchestrator.ask.side_effect = RuntimeError("boom")
        client = TestClient(create_app(services=services), raise_server_exceptions=False)

        response = client.post("/api/chat", json={"question": "q", "role": "HR"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error"}


class TestWhy:

    def test_explains_documents(self, client):
        docs = client.post("/api/chat", json={
            "question": "How do platform doors work?", "role": "StationController",
        }).json()["retrieved"]

        response = client.post("/api/why", json={
            "question": "How do platform doors work?",
            "role": "StationController",
            "docs": docs,
        })

        assert response.status_code == 200
        assert response.json() == {
            "why": "The operations manual says so.",
            "evidence": [{"source": "ops.pdf", "page": 2}],
        }

    def test_empty_docs(self, client):
        response = client.post("/api/why", json={"question": "q", "role": "HR", "docs": []})
        assert response.status_code == 200
        assert response.json() == {"why": NO_DOCUMENTS_TO_EXPLAIN, "evidence": []}

    def test_docs_required(self, client):
        response = client.post("/api/why", json={"question": "q", "role": "HR"})
        assert response.status_code == 400
        assert "docs" in response.json()["error"]


class TestBriefings:

    def test_briefing_for_role(self, client):
        response = client.get("/api/briefings", params={"role": "StationController"})
        assert response.status_code == 200
        body = response.json()
        assert body["role"] == "StationController"
        assert "generatedAt" in body
        assert [item["question"] for item in body["items"]] == list(ROLE_QUESTIONS["StationController"])
        assert body["items"][0]["answer"] == "* **Doors**: closing automatically."
        assert body["items"][0]["sources"] == [{"source": "ops.pdf", "page": 2}]

    def test_unknown_role_is_empty(self, client):
        response = client.get("/api/briefings", params={"role": "Auditor"})
        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_role_required(self, client):
        response = client.get("/api/briefings")
        assert response.status_code == 400
        assert "error" in response.json()

    def test_malformed_role(self, client):
        response = client.get("/api/briefings", params={"role": "!!"})
        assert response.status_code == 400
        assert response.json() == {"error": "Malformed role: '!!'"}


class TestAlerts:

    def test_alerts_for_authorized_role(self, client):
        response = client.get("/api/alerts", params={"role": "StationController"})
        assert response.status_code == 200
        body = response.json()
        assert body["role"] == "StationController"
        assert "timestamp" in body
        assert [a["query"] for a in body["alerts"]] == list(RISK_QUERIES)
        assert all(a["sources"] == [{"source": "ops.pdf", "page": 2}] for a in body["alerts"])

    def test_role_required(self, client):
        response = client.get("/api/alerts")
        assert response.status_code == 400
        assert "role" in response.json()["error"]

    def test_role_without_access_sees_nothing(self, client):
        response = client.get("/api/alerts", params={"role": "HR"})
        assert response.status_code == 200
        assert response.json()["role"] == "HR"
        assert response.json()["alerts"] == []


class TestOpenAPI:

    def test_error_shape_documented(self, client):
        schema = client.get("/openapi.json").json()
        assert "ErrorResponse" in schema["components"]["schemas"]
        assert "400" in schema["paths"]["/api/alerts"]["get"]["responses"]
        assert "500" in schema["paths"]["/api/chat"]["post"]["responses"]


class TestUnknownRoute:

    def test_404_uses_error_shape(self, client):
        response = client.get("/api/nothing")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}


class TestLifespan:

    @patch("role_rag.api.app.configure_logging")
    @patch("role_rag.api.app.build_services")
    def test_services_built_once_on_startup(self, mock_build, _mock_logging, services, service_config):
        mock_build.return_value = services

        with TestClient(create_app(config=service_config)) as client:
            assert client.get("/health").status_code == 200
            assert client.get("/health").status_code == 200

        mock_build.assert_called_once_with(service_config)

    @patch("role_rag.api.app.configure_logging")
    @patch("role_rag.api.app.build_services")
    def test_injected_services_not_rebuilt(self, mock_build, _mock_logging, services):
        with TestClient(create_app(services=services)) as client:
            assert client.get("/health").json()["chunks"] == 1
        mock_build.assert_not_called()
