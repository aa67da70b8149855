"""Plain data records exchanged between services."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ResolvedLabel(BaseModel):
    """An identifier paired with a human-readable label."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str


class AffiliationData(BaseModel):
    """A parsed affiliation, not yet attached to an owner."""

    name: str | None = None
    identifier: str | None = None
    identifier_scheme: str | None = None
    scheme_uri: str | None = None


class PersonData(BaseModel):
    """Person fields extracted from an external creator or contributor entry."""

    family_name: str | None = None
    given_name: str | None = None
    orcid: str | None = Field(default=None, description="Canonical ORCID URL")


class InstitutionData(BaseModel):
    """Institution fields extracted from an external entry."""

    name: str
    ror_id: str | None = Field(default=None, description="Canonical ROR URL")


class Violation(BaseModel):
    """A single schema violation."""

    path: str
    message: str
    keyword: str
    context: dict[str, Any] = Field(default_factory=dict)


class ResourceSummary(BaseModel):
    """Minimal view of a stored resource."""

    id: UUID
    title: str | None = None
