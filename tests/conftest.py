"""Shared fixtures for the readiness engine test suite.

Fixtures build evidence snapshots and in-memory stores around a fixed
reference time so every evaluation is deterministic.
"""

from collections.abc import Callable, Generator
from datetime import datetime, timezone
from typing import Any

import pytest

from eho_readiness.core.config import Settings, clear_settings_cache
from eho_readiness.models.evidence import EvidenceSnapshot
from eho_readiness.readiness.engine import ReadinessEngine
from eho_readiness.readiness.snapshot import EvidenceSnapshotLoader
from eho_readiness.stores.memory import InMemoryEvidenceStore
from eho_readiness.stores.protocols import EvidenceStores

SITE_ID = "site-001"
COMPANY_ID = "company-001"


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep environment overrides from leaking between tests."""
    for name in ("EVIDENCE_API_URL", "EVIDENCE_API_KEY", "API_ENV", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for evaluations."""
    return datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings() -> Settings:
    """Settings with a short source timeout for fast failure tests."""
    return Settings(source_timeout_seconds=0.2)


@pytest.fixture
def make_snapshot(now: datetime) -> Callable[..., EvidenceSnapshot]:
    """Factory for snapshots of the default site; collections as kwargs."""

    def _make(**collections: Any) -> EvidenceSnapshot:
        return EvidenceSnapshot(
            site_id=SITE_ID,
            company_id=COMPANY_ID,
            captured_at=now,
            **collections,
        )

    return _make


@pytest.fixture
def empty_snapshot(make_snapshot: Callable[..., EvidenceSnapshot]) -> EvidenceSnapshot:
    """Snapshot with no evidence at all."""
    return make_snapshot()


@pytest.fixture
def memory_store() -> InMemoryEvidenceStore:
    """Empty in-memory store for the default site."""
    return InMemoryEvidenceStore(site_id=SITE_ID, company_id=COMPANY_ID)


@pytest.fixture
def loader(
    memory_store: InMemoryEvidenceStore, settings: Settings
) -> EvidenceSnapshotLoader:
    """Snapshot loader reading from the in-memory store."""
    return EvidenceSnapshotLoader(EvidenceStores.from_store(memory_store), settings)


@pytest.fixture
def engine(
    loader: EvidenceSnapshotLoader,
    memory_store: InMemoryEvidenceStore,
    settings: Settings,
) -> ReadinessEngine:
    """Readiness engine over the in-memory store."""
    return ReadinessEngine(loader, memory_store, settings=settings)
