"""Integration test fixtures backed by an in-memory SQLite database."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import pytest
from sqlalchemy.orm import Session

from curatio.config import CuratioSettings
from curatio.core.types import TitleType
from curatio.db.models import ResourceModel, TitleModel
from curatio.services import DataCiteTransformer, DoiSuggestionService, EntityResolver


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def transformer(seeded_session: Session, test_settings: CuratioSettings) -> DataCiteTransformer:
    """Importer bound to a seeded session."""
    return DataCiteTransformer(seeded_session, test_settings)


@pytest.fixture
def doi_service(db_session: Session, test_settings: CuratioSettings) -> DoiSuggestionService:
    return DoiSuggestionService(db_session, test_settings)


@pytest.fixture
def resolver(db_session: Session, test_settings: CuratioSettings) -> EntityResolver:
    return EntityResolver(db_session, test_settings)


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
def store_resource(db_session: Session) -> Callable[..., ResourceModel]:
    """Factory that stores a resource with the given DOI."""

    def _store(
        doi: str | None,
        title: str = "Stored resource",
        created_at: datetime | None = None,
    ) -> ResourceModel:
        resource = ResourceModel(doi=doi, publication_year=2024)
        if created_at is not None:
            resource.created_at = created_at
        resource.titles = [TitleModel(value=title, title_type=TitleType.MAIN_TITLE)]
        db_session.add(resource)
        db_session.flush()
        return resource

    return _store
