"""Identifier canonicalization and value objects for ORCID, ROR and DOI."""

from __future__ import annotations

import re
from typing import ClassVar, Self

from pydantic import BaseModel, Field, field_validator, model_validator

ORCID_BASE_URL = "https://orcid.org/"
ROR_BASE_URL = "https://ror.org/"
DOI_BASE_URL = "https://doi.org/"

# Bare ID, optionally behind an http(s) URL on the scheme's host
_ORCID_PATTERN = re.compile(
    r"^(?:https?://(?:www\.)?orcid\.org/)?(\d{4}-\d{4}-\d{4}-\d{3}[\dX])/?$",
    re.IGNORECASE,
)
_ORCID_URL_PATTERN = re.compile(
    r"^https?://(?:www\.)?orcid\.org/\d{4}-\d{4}-\d{4}-\d{3}[\dX]/?$",
    re.IGNORECASE,
)
_ROR_PATTERN = re.compile(
    r"^(?:https?://(?:www\.)?ror\.org/)?(0[a-z0-9]{6}[0-9]{2})/?$",
    re.IGNORECASE,
)
_ROR_URL_PATTERN = re.compile(
    r"^https?://(?:www\.)?ror\.org/0[a-z0-9]{6}[0-9]{2}/?$",
    re.IGNORECASE,
)
_DOI_RESOLVER_PATTERN = re.compile(r"^https?://(?:dx\.)?doi\.org/", re.IGNORECASE)
_DOI_PATTERN = re.compile(r"^10\.\d{4,}(?:\.\d+)*/\S+$")


def canonicalise_orcid(raw: str | None) -> str | None:
    """
    Canonicalise an ORCID iD.

    Args:
        raw: Bare iD or orcid.org URL in any case

    Returns:
        ``https://orcid.org/XXXX-XXXX-XXXX-XXXX`` or None if the input
        is empty or not ORCID-shaped
    """
    if raw is None:
        return None
    match = _ORCID_PATTERN.match(str(raw).strip())
    if not match:
        return None
    return ORCID_BASE_URL + match.group(1).upper()


def canonicalise_ror(raw: str | None) -> str | None:
    """
    Canonicalise a ROR identifier.

    Args:
        raw: Bare ROR ID or ror.org URL in any case

    Returns:
        ``https://ror.org/<id>`` with a lowercased ID, or None if the input
        is empty or not ROR-shaped
    """
    if raw is None:
        return None
    match = _ROR_PATTERN.match(str(raw).strip())
    if not match:
        return None
    return ROR_BASE_URL + match.group(1).lower()


def canonicalise(raw: str | None) -> str | None:
    """Canonicalise whichever of ORCID or ROR the input is shaped like."""
    return canonicalise_orcid(raw) or canonicalise_ror(raw)


def is_orcid_url(raw: str | None) -> bool:
    """Return True if the input is an orcid.org URL with a well-formed iD."""
    if not raw:
        return False
    return _ORCID_URL_PATTERN.match(str(raw).strip()) is not None


def is_ror_url(raw: str | None) -> bool:
    """Return True if the input is a ror.org URL with a well-formed ID."""
    if not raw:
        return False
    return _ROR_URL_PATTERN.match(str(raw).strip()) is not None


def normalize_doi(raw: str | None) -> str:
    """Trim and strip a doi.org / dx.doi.org resolver prefix."""
    if raw is None:
        return ""
    return _DOI_RESOLVER_PATTERN.sub("", str(raw).strip(), count=1)


def is_valid_doi_format(raw: str | None) -> bool:
    """Return True for ``10.<registrant>/<suffix>`` after normalization."""
    return _DOI_PATTERN.match(normalize_doi(raw)) is not None


class ORCID(BaseModel):
    """ORCID iD value object."""

    value: str = Field(..., description="Bare iD (e.g., 0000-0002-1825-0097)")

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^\d{4}-\d{4}-\d{4}-\d{3}[\dX]$")

    @field_validator("value", mode="before")
    @classmethod
    def normalize_orcid(cls, v: str) -> str:
        """Extract the iD from an orcid.org URL if provided."""
        canonical = canonicalise_orcid(v)
        if canonical is None:
            return str(v).strip()
        return canonical[len(ORCID_BASE_URL) :]

    @model_validator(mode="after")
    def validate_orcid(self) -> Self:
        if not self.PATTERN.match(self.value):
            raise ValueError(f"Invalid ORCID format: {self.value}")
        return self

    @classmethod
    def parse(cls, value: str) -> ORCID:
        return cls(value=value)

    @property
    def url(self) -> str:
        """Return the canonical orcid.org URL."""
        return ORCID_BASE_URL + self.value

    def __str__(self) -> str:
        return self.url

    def __hash__(self) -> int:
        return hash(self.value)


class ROR(BaseModel):
    """Research Organization Registry identifier value object."""

    value: str = Field(..., description="Bare lowercased ROR ID (e.g., 04z8jg394)")

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^0[a-z0-9]{6}[0-9]{2}$")

    @field_validator("value", mode="before")
    @classmethod
    def normalize_ror(cls, v: str) -> str:
        canonical = canonicalise_ror(v)
        if canonical is None:
            return str(v).strip()
        return canonical[len(ROR_BASE_URL) :]

    @model_validator(mode="after")
    def validate_ror(self) -> Self:
        if not self.PATTERN.match(self.value):
            raise ValueError(f"Invalid ROR format: {self.value}")
        return self

    @classmethod
    def parse(cls, value: str) -> ROR:
        return cls(value=value)

    @property
    def url(self) -> str:
        return ROR_BASE_URL + self.value

    def __str__(self) -> str:
        return self.url

    def __hash__(self) -> int:
        return hash(self.value)


class DOI(BaseModel):
    """Digital Object Identifier value object."""

    value: str = Field(..., description="DOI value (e.g., 10.5880/fidgeo.2026.005)")

    @field_validator("value", mode="before")
    @classmethod
    def normalize(cls, v: str) -> str:
        """Extract DOI from a resolver URL if provided."""
        return normalize_doi(v)

    @model_validator(mode="after")
    def validate_doi(self) -> Self:
        if not _DOI_PATTERN.match(self.value):
            raise ValueError(f"Invalid DOI format: {self.value}")
        return self

    @classmethod
    def parse(cls, value: str) -> DOI:
        return cls(value=value)

    @property
    def prefix(self) -> str:
        return self.value.split("/", 1)[0]

    @property
    def suffix(self) -> str:
        return self.value.split("/", 1)[1]

    @property
    def url(self) -> str:
        """Return the doi.org URL."""
        return DOI_BASE_URL + self.value

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value.lower())
