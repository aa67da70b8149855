"""Unit test fixtures: in-memory resource graphs that never touch a database."""

from __future__ import annotations

from typing import Any

import pytest

from curatio.core.types import ContributorType, DateType, TitleType
from curatio.db.models import (
    AffiliationModel,
    InstitutionModel,
    PersonModel,
    ResourceContributorModel,
    ResourceCreatorModel,
    ResourceModel,
)
from curatio.db.models.records import ResourceDateModel, TitleModel

# ============================================================================
# Model Builders
# ============================================================================


def _person(
    family: str | None,
    given: str | None = None,
    orcid: str | None = None,
) -> PersonModel:
    """Create a transient person, optionally with an ORCID."""
    return PersonModel(
        family_name=family,
        given_name=given,
        name_identifier=orcid,
        name_identifier_scheme="ORCID" if orcid else None,
        scheme_uri="https://orcid.org/" if orcid else None,
    )


def _creator(
    agent: PersonModel | InstitutionModel,
    position: int = 1,
    affiliations: list[dict[str, Any]] | None = None,
) -> ResourceCreatorModel:
    """Create a creator row pointing at ``agent``."""
    creator = ResourceCreatorModel(position=position)
    creator.set_agent(agent)
    creator.affiliations = [
        AffiliationModel(position=i, **fields) for i, fields in enumerate(affiliations or [])
    ]
    return creator


def _contributor(
    agent: PersonModel | InstitutionModel,
    position: int = 1,
    contributor_type: ContributorType = ContributorType.OTHER,
) -> ResourceContributorModel:
    """Create a contributor row pointing at ``agent``."""
    contributor = ResourceContributorModel(position=position, contributor_type=contributor_type)
    contributor.set_agent(agent)
    return contributor


@pytest.fixture
def make_person():
    """Factory for transient persons."""
    return _person


@pytest.fixture
def make_creator():
    """Factory for creator rows."""
    return _creator


@pytest.fixture
def make_contributor():
    """Factory for contributor rows."""
    return _contributor


@pytest.fixture
def empty_resource() -> ResourceModel:
    """A resource with no collections and no reference data."""
    return ResourceModel(publication_year=2024)


@pytest.fixture
def sample_resource() -> ResourceModel:
    """A resource with a DOI, two titles, a creator and a date range."""
    resource = ResourceModel(doi="10.5880/fidgeo.2026.005", publication_year=2026, version="2.1")
    resource.titles = [
        TitleModel(value="Gravity field model", title_type=TitleType.MAIN_TITLE, position=0),
        TitleModel(
            value="Release 2",
            title_type=TitleType.SUBTITLE,
            language="de",
            position=1,
        ),
    ]
    resource.creators = [
        _creator(
            _person("Smith", "Jane", "https://orcid.org/0000-0001-2345-6789"),
            affiliations=[
                {
                    "name": "GFZ",
                    "identifier": "https://ror.org/04z8jg394",
                    "identifier_scheme": "ROR",
                    "scheme_uri": "https://ror.org/",
                }
            ],
        )
    ]
    resource.dates = [
        ResourceDateModel(
            date_type=DateType.COLLECTED,
            start_date="2020-01-01",
            end_date="2021-02-28",
            position=0,
        ),
        ResourceDateModel(date_type=DateType.CREATED, date_value="2026-01-15", position=1),
    ]
    return resource
