from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.catalog.seed import seed_catalog
from core.documents.generator import InMemoryDocumentGenerator
from core.time.clock import FixedClock
from engines.order_lifecycle.config import EngineSettings
from engines.order_lifecycle.services import OrderLifecycleEngine


@pytest.fixture
def seeded_catalog():
    return seed_catalog()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 2, 1, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def documents() -> InMemoryDocumentGenerator:
    return InMemoryDocumentGenerator()


@pytest.fixture
def engine_settings(tmp_path) -> EngineSettings:
    return EngineSettings(document_output_dir=tmp_path / "invoices")


@pytest.fixture
def engine(seeded_catalog, engine_settings, documents, clock) -> OrderLifecycleEngine:
    return OrderLifecycleEngine(
        settings=engine_settings,
        document_generator=documents,
        clock=clock,
    )
