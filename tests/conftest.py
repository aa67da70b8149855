"""Shared test fixtures for all tests."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from curatio.config import CuratioSettings
from curatio.db import Base, create_engine, create_session_factory, seed_reference_data

# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def test_settings() -> CuratioSettings:
    """Create settings isolated from the environment and any .env file."""
    return CuratioSettings(
        _env_file=None,
        database_url="sqlite://",
        log_level="DEBUG",
    )


@pytest.fixture
def normalized_settings() -> CuratioSettings:
    """Settings with accent- and case-folded name matching."""
    return CuratioSettings(
        _env_file=None,
        database_url="sqlite://",
        name_match_normalized=True,
    )


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def db_engine() -> Iterator[Engine]:
    """Create an in-memory SQLite engine with all tables."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine: Engine) -> Iterator[Session]:
    """Get a session that is rolled back after the test."""
    factory = create_session_factory(db_engine)
    with factory() as session:
        yield session
        session.rollback()


@pytest.fixture
def seeded_session(db_session: Session, test_settings: CuratioSettings) -> Session:
    """Session with resource types, languages and the default publisher."""
    seed_reference_data(db_session, test_settings)
    return db_session


# ============================================================================
# DataCite Payload Fixtures
# ============================================================================


@pytest.fixture
def datacite_attributes() -> dict[str, Any]:
    """A fully populated DataCite 4.6 attribute object."""
    return {
        "doi": "10.5880/GFZ.1.2.2024.001",
        "identifiers": [{"identifier": "10.5880/GFZ.1.2.2024.001", "identifierType": "DOI"}],
        "creators": [
            {
                "name": "Smith, Jane",
                "nameType": "Personal",
                "givenName": "Jane",
                "familyName": "Smith",
                "nameIdentifiers": [
                    {
                        "nameIdentifier": "0000-0001-2345-6789",
                        "nameIdentifierScheme": "ORCID",
                        "schemeUri": "https://orcid.org/",
                    }
                ],
                "affiliation": [
                    {
                        "name": "GFZ Helmholtz Centre for Geosciences",
                        "affiliationIdentifier": "https://ror.org/04z8jg394",
                        "affiliationIdentifierScheme": "ROR",
                        "schemeUri": "https://ror.org/",
                    }
                ],
            },
            {
                "name": "GFZ Data Services",
                "nameType": "Organizational",
                "nameIdentifiers": [
                    {"nameIdentifier": "04z8jg394", "nameIdentifierScheme": "ROR"}
                ],
            },
        ],
        "contributors": [
            {
                "name": "Müller, Max",
                "nameType": "Personal",
                "givenName": "Max",
                "familyName": "Müller",
                "contributorType": "Translator",
            },
            {
                "name": "Doe, John",
                "nameType": "Personal",
                "contributorType": "ChiefCoffeeOfficer",
            },
        ],
        "titles": [
            {"title": "Seismic records of the 2024 swarm", "lang": "en"},
            {"title": "Raw waveforms", "titleType": "Subtitle", "lang": "en"},
        ],
        "publisher": {
            "name": "GFZ Data Services",
            "publisherIdentifier": "https://doi.org/10.17616/R3VQ0S",
            "publisherIdentifierScheme": "re3data",
            "schemeUri": "https://re3data.org/",
            "lang": "en",
        },
        "publicationYear": "2024",
        "types": {"resourceTypeGeneral": "Dataset", "resourceType": "Waveforms"},
        "language": "en",
        "subjects": [
            {"subject": "seismology"},
            {
                "subject": "EARTH SCIENCE > SOLID EARTH > SEISMOLOGY",
                "subjectScheme": "GCMD Science Keywords",
                "schemeUri": "https://gcmd.earthdata.nasa.gov/kms",
                "classificationCode": "550",
                "lang": "en",
            },
        ],
        "dates": [
            {"date": "2024-03", "dateType": "Collected"},
            {"date": "2020/2021-02", "dateType": "Valid"},
            {"date": "2024-05-01", "dateType": "Available", "dateInformation": "embargo end"},
        ],
        "descriptions": [
            {"description": "Broadband records.", "descriptionType": "Abstract", "lang": "en"},
            {"description": "Unclassified text.", "descriptionType": "Summary"},
            {"description": "   ", "descriptionType": "Methods"},
        ],
        "rightsList": [
            {
                "rights": "Creative Commons Attribution 4.0 International",
                "rightsUri": "https://creativecommons.org/licenses/by/4.0/legalcode",
                "rightsIdentifier": "CC-BY-4.0",
                "rightsIdentifierScheme": "SPDX",
            }
        ],
        "relatedIdentifiers": [
            {
                "relatedIdentifier": "10.1000/xyz123",
                "relatedIdentifierType": "DOI",
                "relationType": "IsPublishedIn",
            },
            {
                "relatedIdentifier": "RRID:SCR_012345",
                "relatedIdentifierType": "RRID",
                "relationType": "Collects",
            },
            {
                "relatedIdentifier": "foo",
                "relatedIdentifierType": "Carrier Pigeon",
                "relationType": "References",
            },
        ],
        "fundingReferences": [
            {
                "funderName": "Deutsche Forschungsgemeinschaft",
                "funderIdentifier": "https://doi.org/10.13039/501100001659",
                "funderIdentifierType": "Crossref Funder ID",
                "awardNumber": "DFG-1234",
                "awardTitle": "Swarm dynamics",
            }
        ],
        "geoLocations": [
            {
                "geoLocationPlace": "Vogtland",
                "geoLocationPoint": {"pointLongitude": 12.4, "pointLatitude": 50.3},
                "geoLocationBox": {
                    "westBoundLongitude": 12.0,
                    "eastBoundLongitude": 12.8,
                    "southBoundLatitude": 50.0,
                    "northBoundLatitude": 50.6,
                },
                "geoLocationPolygon": [
                    {"polygonPoint": {"pointLongitude": 12.0, "pointLatitude": 50.0}},
                    {"polygonPoint": {"pointLongitude": 12.8, "pointLatitude": 50.0}},
                    {"polygonPoint": {"pointLongitude": 12.4, "pointLatitude": 50.6}},
                    {"polygonPoint": {"pointLongitude": 12.0, "pointLatitude": 50.0}},
                    {"inPolygonPoint": {"pointLongitude": 12.4, "pointLatitude": 50.2}},
                ],
            }
        ],
        "sizes": ["12 GB"],
        "formats": ["application/x-miniseed"],
        "version": "1.0",
        "alternateIdentifiers": [
            {"alternateIdentifier": "VOG-2024-01", "alternateIdentifierType": "Local accession"}
        ],
        "schemaVersion": "http://datacite.org/schema/kernel-4",
    }


@pytest.fixture
def datacite_document(datacite_attributes: dict[str, Any]) -> dict[str, Any]:
    """The attribute object wrapped in the JSON:API envelope."""
    return {"data": {"type": "dois", "attributes": datacite_attributes}}


# ============================================================================
# Marker Registration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as an integration test requiring external services",
    )
    config.addinivalue_line(
        "markers",
        "requires_db: mark test as requiring database connection",
    )
