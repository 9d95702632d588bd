"""Tests for the readiness and health HTTP endpoints."""

from collections.abc import Generator
from datetime import datetime, timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from eho_readiness.api.dependencies import get_readiness_engine
from eho_readiness.api.response_patterns import map_error_to_status
from eho_readiness.main import create_app
from eho_readiness.models.evidence import DocumentEvidence
from eho_readiness.readiness.engine import ReadinessEngine
from eho_readiness.stores.memory import InMemoryEvidenceStore
from eho_readiness.stores.protocols import EvidenceSourceError


@pytest.fixture
def app(engine: ReadinessEngine) -> Generator[FastAPI, None, None]:
    """Application with the engine dependency overridden."""
    application = create_app()
    application.dependency_overrides[get_readiness_engine] = lambda: engine
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client for the application."""
    with TestClient(app) as test_client:
        yield test_client


class TestErrorMapping:
    """Test engine errors map to HTTP statuses."""

    @pytest.mark.parametrize(
        ("message", "status_code"),
        [
            ("Site not found or has no company: cannot evaluate readiness", 404),
            ("Site id is required field: cannot evaluate readiness", 400),
            ("Site lookup unavailable: cannot evaluate readiness for site x", 503),
            ("Site lookup unavailable: site missing-1 (sites: HTTP 404 not found)", 503),
            ("Site not found or has no company: for site invalid-timed-out", 404),
            ("something else entirely", 422),
        ],
    )
    def test_map_error_to_status(self, message: str, status_code: int) -> None:
        """Test phrase-based status mapping."""
        assert map_error_to_status(message) == status_code

    def test_details_after_colon_are_ignored(self) -> None:
        """Test only the leading clause decides the status."""
        assert map_error_to_status("Quota exceeded: site not found") == 422


class TestReadinessEndpoint:
    """Test GET /api/v1/readiness/sites/{site_id}."""

    def test_returns_report(
        self,
        client: TestClient,
        memory_store: InMemoryEvidenceStore,
        now: datetime,
    ) -> None:
        """Test a known site returns the report JSON."""
        memory_store.documents.append(
            DocumentEvidence(
                name="Fire Safety Policy", expiry_date=now + timedelta(days=400)
            )
        )

        response = client.get(
            "/api/v1/readiness/sites/site-001",
            params={
                "company_id": "company-001",
                "as_of": now.isoformat().replace("+00:00", "Z"),
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["site_id"] == "site-001"
        assert body["company_id"] == "company-001"
        assert body["overall"]["total_requirements"] == 43
        assert body["partial_data"] is False
        assert len(body["categories"]) == 8
        fire = next(c for c in body["categories"] if c["category"] == "Fire Safety")
        policy = next(r for r in fire["requirements"] if r["requirement_id"] == "fire-policy")
        assert policy["status"] == "valid"

    def test_company_resolved_from_site(self, client: TestClient) -> None:
        """Test the company query parameter is optional."""
        response = client.get("/api/v1/readiness/sites/site-001")

        assert response.status_code == 200
        assert response.json()["company_id"] == "company-001"

    def test_unknown_site_is_404(self, client: TestClient) -> None:
        """Test an unresolvable site returns an error body."""
        response = client.get("/api/v1/readiness/sites/site-unknown")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert "cannot evaluate" in body["error"]

    def test_lookup_failure_is_503(
        self, client: TestClient, memory_store: InMemoryEvidenceStore
    ) -> None:
        """Test a failing site directory returns service unavailable."""
        memory_store.failures["resolve_company_id"] = EvidenceSourceError(
            "sites", "HTTP 500"
        )

        response = client.get("/api/v1/readiness/sites/site-001")

        assert response.status_code == 503

    @pytest.mark.parametrize("site_id", ["missing-42", "invalid-42", "timed-out"])
    def test_lookup_failure_status_ignores_site_id(
        self, client: TestClient, memory_store: InMemoryEvidenceStore, site_id: str
    ) -> None:
        """Test the site id text never changes a lookup failure's status."""
        memory_store.failures["resolve_company_id"] = EvidenceSourceError(
            "sites", "HTTP 500"
        )

        response = client.get(f"/api/v1/readiness/sites/{site_id}")

        assert response.status_code == 503
        assert site_id in response.json()["error"]

    @pytest.mark.parametrize("site_id", ["unavailable-7", "invalid-7", "required-field"])
    def test_unknown_site_status_ignores_site_id(
        self, client: TestClient, site_id: str
    ) -> None:
        """Test an unknown site is 404 whatever its id contains."""
        response = client.get(f"/api/v1/readiness/sites/{site_id}")

        assert response.status_code == 404
        assert site_id in response.json()["error"]

    def test_partial_data_reported(
        self, client: TestClient, memory_store: InMemoryEvidenceStore
    ) -> None:
        """Test failed sources are listed in the response."""
        memory_store.failures["list_logs"] = EvidenceSourceError("temperature_logs", "down")

        response = client.get(
            "/api/v1/readiness/sites/site-001", params={"company_id": "company-001"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["partial_data"] is True
        assert body["failed_sources"] == ["temperature_logs"]

    def test_unconfigured_store_is_503(self) -> None:
        """Test the default dependency refuses to run without a store."""
        with TestClient(create_app()) as test_client:
            response = test_client.get("/api/v1/readiness/sites/site-001")

        assert response.status_code == 503


class TestHealthEndpoint:
    """Test GET /api/v1/health."""

    def test_degraded_without_store(self, client: TestClient) -> None:
        """Test health reports the missing evidence store."""
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "degraded"
        assert body["evidence_store_configured"] is False
        assert body["requirement_count"] == 43

    def test_healthy_when_configured(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test health is healthy once URL and key are set."""
        from eho_readiness.core.config import clear_settings_cache

        monkeypatch.setenv("EVIDENCE_API_URL", "https://example.supabase.co/rest/v1")
        monkeypatch.setenv("EVIDENCE_API_KEY", "service-role-key")
        clear_settings_cache()

        response = client.get("/api/v1/health")

        assert response.json()["status"] == "healthy"
