"""Person and institution identity resolution."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from curatio.config import CuratioSettings, get_settings
from curatio.core.identifiers import canonicalise_orcid, canonicalise_ror
from curatio.core.models import InstitutionData, PersonData
from curatio.core.normalization import clean_string, normalize_text, split_person_name
from curatio.core.types import IdentifierScheme
from curatio.db.models.agent import InstitutionModel, PersonModel
from curatio.db.repositories.agent import InstitutionRepository, PersonRepository

logger = logging.getLogger(__name__)


def is_same_person(
    a: PersonModel | PersonData,
    b: PersonModel | PersonData,
    *,
    normalized_names: bool = False,
) -> bool:
    """
    Decide whether two person records describe the same individual.

    Two records match when both carry an ORCID and the canonical forms are
    equal. When at least one side has no ORCID, family and given names must
    match exactly (case-sensitive unless ``normalized_names``).

    Args:
        a: First person
        b: Second person
        normalized_names: Compare names accent- and case-folded

    Returns:
        True if the records are the same person
    """
    orcid_a = _orcid_of(a)
    orcid_b = _orcid_of(b)
    if orcid_a and orcid_b:
        return orcid_a == orcid_b

    family_a, given_a = clean_string(a.family_name), clean_string(a.given_name)
    family_b, given_b = clean_string(b.family_name), clean_string(b.given_name)
    if not (family_a or given_a) or not (family_b or given_b):
        return False

    if normalized_names:
        return normalize_text(family_a) == normalize_text(family_b) and normalize_text(
            given_a
        ) == normalize_text(given_b)
    return family_a == family_b and given_a == given_b


def _orcid_of(person: PersonModel | PersonData) -> str | None:
    if isinstance(person, PersonModel):
        return canonicalise_orcid(person.name_identifier)
    return canonicalise_orcid(person.orcid)


def _name_identifiers(entry: Mapping[str, Any]) -> list[tuple[str | None, str]]:
    """``(scheme, identifier)`` pairs from a DataCite nameIdentifiers list."""
    pairs = []
    raw = entry.get("nameIdentifiers")
    if not isinstance(raw, list):
        return pairs
    for item in raw:
        if isinstance(item, Mapping):
            identifier = clean_string(item.get("nameIdentifier"))
            if identifier:
                pairs.append((clean_string(item.get("nameIdentifierScheme")), identifier))
    return pairs


def extract_person_data(entry: Mapping[str, Any]) -> PersonData:
    """
    Read person fields from a DataCite creator or contributor entry.

    ``familyName``/``givenName`` win; otherwise ``name`` is split as
    "Family, Given" or "Given Family". The ORCID comes from the first
    ORCID-scheme name identifier that canonicalises.
    """
    family = clean_string(entry.get("familyName"))
    given = clean_string(entry.get("givenName"))
    if family is None and given is None:
        family, given = split_person_name(entry.get("name"))

    orcid = None
    for scheme, identifier in _name_identifiers(entry):
        if scheme is None or scheme.upper() == IdentifierScheme.ORCID:
            orcid = canonicalise_orcid(identifier)
            if orcid:
                break
    return PersonData(family_name=family, given_name=given, orcid=orcid)


def extract_institution_data(entry: Mapping[str, Any]) -> InstitutionData | None:
    """Read institution fields from an organizational DataCite entry."""
    name = clean_string(entry.get("name"))
    if name is None:
        return None
    ror_id = None
    for scheme, identifier in _name_identifiers(entry):
        if scheme is None or scheme.upper() == IdentifierScheme.ROR:
            ror_id = canonicalise_ror(identifier)
            if ror_id:
                break
    return InstitutionData(name=name, ror_id=ror_id)


class EntityResolver:
    """
    Find or create shared Person and Institution records.

    Lookup order is canonical identifier, then exact name. New rows are
    flushed immediately so later lookups in the same session see them.
    """

    def __init__(self, session: Session, settings: CuratioSettings | None = None) -> None:
        self._session = session
        self._settings = settings or get_settings()
        self._persons = PersonRepository(session)
        self._institutions = InstitutionRepository(session)

    def is_same_person(self, a: PersonModel | PersonData, b: PersonModel | PersonData) -> bool:
        return is_same_person(a, b, normalized_names=self._settings.name_match_normalized)

    def find_or_create_person(self, data: PersonData) -> tuple[PersonModel, bool]:
        """
        Get an existing person or create a new one.

        A name match without an ORCID is backfilled with the incoming ORCID.
        A name match that already holds a different ORCID is a different
        person.

        Returns:
            Tuple of (person, created)
        """
        if data.orcid:
            existing = self._persons.get_by_orcid(data.orcid)
            if existing is not None:
                return existing, False

        if data.family_name or data.given_name:
            if self._settings.name_match_normalized:
                existing = self._persons.get_by_name_normalized(data.family_name, data.given_name)
            else:
                existing = self._persons.get_by_name(data.family_name, data.given_name)

            if existing is not None:
                if data.orcid is None:
                    return existing, False
                if existing.name_identifier is None:
                    existing.name_identifier = data.orcid
                    existing.name_identifier_scheme = IdentifierScheme.ORCID.value
                    existing.scheme_uri = IdentifierScheme.ORCID.scheme_uri
                    self._persons.update(existing)
                    logger.info(f"Backfilled ORCID {data.orcid} on person {existing.id}")
                    return existing, False

        person = PersonModel(
            family_name=data.family_name,
            given_name=data.given_name,
            name_identifier=data.orcid,
            name_identifier_scheme=IdentifierScheme.ORCID.value if data.orcid else None,
            scheme_uri=IdentifierScheme.ORCID.scheme_uri if data.orcid else None,
        )
        self._persons.create(person)
        logger.debug(f"Created person {person.id} ({data.family_name}, {data.given_name})")
        return person, True

    def find_or_create_institution(self, data: InstitutionData) -> tuple[InstitutionModel, bool]:
        """
        Get an existing institution or create a new one.

        Returns:
            Tuple of (institution, created)
        """
        if data.ror_id:
            existing = self._institutions.get_by_ror(data.ror_id)
            if existing is not None:
                return existing, False

        existing = self._institutions.get_by_name(data.name)
        if existing is not None:
            if data.ror_id is None:
                return existing, False
            if existing.name_identifier is None:
                existing.name_identifier = data.ror_id
                existing.name_identifier_scheme = IdentifierScheme.ROR.value
                existing.scheme_uri = IdentifierScheme.ROR.scheme_uri
                self._institutions.update(existing)
                return existing, False

        institution = InstitutionModel(
            name=data.name,
            name_identifier=data.ror_id,
            name_identifier_scheme=IdentifierScheme.ROR.value if data.ror_id else None,
            scheme_uri=IdentifierScheme.ROR.scheme_uri if data.ror_id else None,
        )
        self._institutions.create(institution)
        logger.debug(f"Created institution {institution.id} ({data.name})")
        return institution, True
