"""Affiliation parsing and replacement for creators and contributors."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from curatio.core.identifiers import canonicalise_ror, is_ror_url
from curatio.core.labels import RorLabelResolver
from curatio.core.models import AffiliationData
from curatio.core.normalization import clean_string
from curatio.core.types import IdentifierScheme, lookup_enum
from curatio.db.models.authorship import (
    AffiliationModel,
    ResourceContributorModel,
    ResourceCreatorModel,
)

logger = logging.getLogger(__name__)

_NAME_KEYS = ("name", "value")
_IDENTIFIER_KEYS = ("identifier", "affiliationIdentifier", "rorId")
_SCHEME_KEYS = ("identifierScheme", "affiliationIdentifierScheme", "identifier_scheme")
_SCHEME_URI_KEYS = ("schemeUri", "schemeURI", "scheme_uri")


def _first(entry: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = clean_string(entry.get(key))
        if value is not None:
            return value
    return None


class AffiliationService:
    """
    Parse loosely-typed affiliation input and replace owner affiliation sets.

    Replacement is total: syncing an owner with an empty list leaves it with
    no affiliations.
    """

    def __init__(self, label_resolver: RorLabelResolver | None = None) -> None:
        self._labels = label_resolver or RorLabelResolver()

    def parse_affiliations_from_data(self, raw: Any) -> list[AffiliationData]:
        """
        Parse affiliation entries.

        Entries that are not mappings are dropped, as are entries with neither
        a name nor an identifier. A name that is a ROR URL is moved into the
        identifier. ROR identifiers are canonicalised; GRID and ISNI schemes
        are kept; any other scheme becomes None. Duplicate entries are
        collapsed, first occurrence wins.

        Args:
            raw: List of mappings using DataCite or editor key names

        Returns:
            Ordered list of parsed affiliations
        """
        if not isinstance(raw, list):
            return []

        parsed: list[AffiliationData] = []
        seen: set[tuple[str, str]] = set()
        for entry in raw:
            if not isinstance(entry, Mapping):
                continue
            affiliation = self._parse_entry(entry)
            if affiliation is None:
                continue

            key = (
                ("id", affiliation.identifier)
                if affiliation.identifier
                else ("name", affiliation.name or "")
            )
            if key in seen:
                continue
            seen.add(key)
            parsed.append(affiliation)
        return parsed

    def _parse_entry(self, entry: Mapping[str, Any]) -> AffiliationData | None:
        name = _first(entry, _NAME_KEYS)
        identifier = _first(entry, _IDENTIFIER_KEYS)
        scheme = _first(entry, _SCHEME_KEYS)
        scheme_uri = _first(entry, _SCHEME_URI_KEYS)

        if name is not None and is_ror_url(name):
            identifier = identifier or name
            name = None

        if name is None and identifier is None:
            return None
        if identifier is None:
            return AffiliationData(name=name)

        known_scheme = lookup_enum(IdentifierScheme, scheme) if scheme else None
        ror_id = None
        if scheme is None or known_scheme is IdentifierScheme.ROR:
            ror_id = canonicalise_ror(identifier)
        if ror_id is not None:
            return AffiliationData(
                name=name or self._labels.lookup(ror_id),
                identifier=ror_id,
                identifier_scheme=IdentifierScheme.ROR.value,
                scheme_uri=IdentifierScheme.ROR.scheme_uri,
            )

        if known_scheme in (IdentifierScheme.GRID, IdentifierScheme.ISNI):
            return AffiliationData(
                name=name,
                identifier=identifier,
                identifier_scheme=known_scheme.value,
                scheme_uri=scheme_uri or known_scheme.scheme_uri,
            )

        return AffiliationData(name=name, identifier=identifier)

    def sync_for_creator(self, owner: ResourceCreatorModel, raw: Any) -> list[AffiliationData]:
        """Replace a creator's affiliations; returns the previous set."""
        return self._replace(owner, self.parse_affiliations_from_data(raw))

    def sync_for_contributor(
        self,
        owner: ResourceContributorModel,
        raw: Any,
    ) -> list[AffiliationData]:
        """Replace a contributor's affiliations; returns the previous set."""
        return self._replace(owner, self.parse_affiliations_from_data(raw))

    @staticmethod
    def _replace(
        owner: ResourceCreatorModel | ResourceContributorModel,
        affiliations: list[AffiliationData],
    ) -> list[AffiliationData]:
        previous = [
            AffiliationData(
                name=row.name,
                identifier=row.identifier,
                identifier_scheme=row.identifier_scheme,
                scheme_uri=row.scheme_uri,
            )
            for row in owner.affiliations
        ]
        # delete-orphan removes the old rows on flush
        owner.affiliations = [
            AffiliationModel(
                name=a.name,
                identifier=a.identifier,
                identifier_scheme=a.identifier_scheme,
                scheme_uri=a.scheme_uri,
                position=i,
            )
            for i, a in enumerate(affiliations)
        ]
        logger.debug(f"Replaced {len(previous)} affiliations with {len(affiliations)}")
        return previous
