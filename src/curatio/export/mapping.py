"""Mapping from the internal resource graph to DataCite 4.6 attributes.

Both the JSON and the XML exporter render from the attribute dictionary built
here, so the two serializations cannot drift apart.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from sqlalchemy.orm import Session, object_session

from curatio.config import CuratioSettings, get_settings
from curatio.core.dates import format_date_range
from curatio.core.normalization import format_person_name, label_to_pascal
from curatio.core.types import (
    ContributorType,
    FunderIdentifierType,
    IdentifierScheme,
    NameType,
    ResourceTypeGeneral,
    lookup_enum,
)
from curatio.db.models.agent import InstitutionModel, PersonModel
from curatio.db.models.authorship import (
    AffiliationModel,
    ResourceContributorModel,
    ResourceCreatorModel,
)
from curatio.db.models.records import GeoLocationModel
from curatio.db.models.resource import ResourceModel
from curatio.db.repositories.reference import PublisherRepository
from curatio.services.entities import is_same_person

logger = logging.getLogger(__name__)

SCHEMA_VERSION_URI = "http://datacite.org/schema/kernel-4"
PLACEHOLDER_TITLE = "Untitled"
PLACEHOLDER_CREATOR = {"name": "Unknown", "nameType": NameType.PERSONAL.value}
PHYSICAL_OBJECT_FALLBACK = "Physical Object"


def _compact(entry: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None or an empty string/list."""
    return {k: v for k, v in entry.items() if v is not None and v != "" and v != []}


def _by_position(items):
    return sorted(items, key=lambda item: item.position or 0)


class DataCiteMapping:
    """
    Builds the ``attributes`` object of a DataCite JSON document.

    Optional sections are omitted when empty; required sections have
    placeholders so a document can always be produced.
    """

    def __init__(
        self,
        settings: CuratioSettings | None = None,
        session: Session | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._session = session

    def build_attributes(self, resource: ResourceModel) -> dict[str, Any]:
        """
        Map a resource to DataCite attributes.

        Args:
            resource: Resource with its collections loaded

        Returns:
            Attribute dictionary in DataCite JSON key naming
        """
        attributes: dict[str, Any] = {}
        if resource.doi:
            attributes["doi"] = resource.doi
            attributes["identifiers"] = [{"identifier": resource.doi, "identifierType": "DOI"}]

        attributes["creators"] = self.build_creators(resource)
        attributes["titles"] = self.build_titles(resource)
        attributes["publisher"] = self.build_publisher(resource)
        attributes["publicationYear"] = str(resource.publication_year or date.today().year)
        attributes["types"] = self.build_types(resource)
        attributes["schemaVersion"] = SCHEMA_VERSION_URI

        optional = {
            "contributors": [
                self._contributor_entry(c) for c in _by_position(resource.contributors)
            ],
            "subjects": [self._subject_entry(s) for s in _by_position(resource.subjects)],
            "dates": self.build_dates(resource),
            "language": self.language_code(resource),
            "alternateIdentifiers": [
                {"alternateIdentifier": a.value, "alternateIdentifierType": a.identifier_type}
                for a in _by_position(resource.alternate_identifiers)
            ],
            "relatedIdentifiers": [
                _compact(
                    {
                        "relatedIdentifier": r.identifier,
                        "relatedIdentifierType": r.identifier_type.value
                        if r.identifier_type
                        else "DOI",
                        "relationType": r.relation_type.value if r.relation_type else "References",
                        "resourceTypeGeneral": r.resource_type_general,
                    }
                )
                for r in _by_position(resource.related_identifiers)
            ],
            "sizes": [s.value for s in _by_position(resource.sizes)],
            "formats": [f.value for f in _by_position(resource.formats)],
            "version": resource.version,
            "rightsList": [
                _compact(
                    {
                        "rights": r.name,
                        "rightsUri": r.uri,
                        "rightsIdentifier": r.identifier,
                        "rightsIdentifierScheme": r.identifier_scheme
                        or ("SPDX" if r.identifier else None),
                        "schemeUri": r.scheme_uri,
                        "lang": r.language,
                    }
                )
                for r in _by_position(resource.rights)
            ],
            "descriptions": [
                _compact(
                    {
                        "description": d.value,
                        "descriptionType": d.description_type.value
                        if d.description_type
                        else "Abstract",
                        "lang": d.language,
                    }
                )
                for d in _by_position(resource.descriptions)
            ],
            "geoLocations": [
                entry
                for entry in (self._geo_entry(g) for g in _by_position(resource.geo_locations))
                if entry
            ],
            "fundingReferences": [
                self._funding_entry(f) for f in _by_position(resource.funding_references)
            ],
        }
        attributes.update(_compact(optional))
        return attributes

    # ------------------------------------------------------------------
    # Required sections
    # ------------------------------------------------------------------

    def build_titles(self, resource: ResourceModel) -> list[dict[str, Any]]:
        """Titles with ``titleType`` only for non-main titles."""
        resource_lang = self.language_code(resource)
        titles = []
        for title in _by_position(resource.titles):
            if not (title.value or "").strip():
                continue
            entry: dict[str, Any] = {"title": title.value}
            if not title.is_main:
                entry["titleType"] = title.title_type.value
            lang = title.language or resource_lang
            if lang:
                entry["lang"] = lang
            titles.append(entry)
        return titles or [{"title": PLACEHOLDER_TITLE}]

    def build_creators(self, resource: ResourceModel) -> list[dict[str, Any]]:
        """
        Creators in position order.

        For physical samples, person contributors are appended after the
        creators unless they match a person already listed.
        """
        entries = []
        listed: list[PersonModel] = []
        for creator in _by_position(resource.creators):
            entry = self._agent_entry(creator)
            if entry is None:
                continue
            entries.append(entry)
            if creator.is_person and creator.person is not None:
                listed.append(creator.person)

        if resource.is_physical_sample:
            for contributor in _by_position(resource.contributors):
                person = contributor.person if contributor.is_person else None
                if person is None:
                    continue
                if any(self._same_person(person, other) for other in listed):
                    continue
                entries.append(self._person_entry(person, contributor.affiliations))
                listed.append(person)

        return entries or [dict(PLACEHOLDER_CREATOR)]

    def build_publisher(self, resource: ResourceModel) -> dict[str, Any]:
        """Assigned publisher, else the reference default, else the configured fallback."""
        publisher = resource.publisher or self._default_publisher(resource)
        if publisher is not None:
            return _compact(
                {
                    "name": publisher.name,
                    "publisherIdentifier": publisher.identifier,
                    "publisherIdentifierScheme": publisher.identifier_scheme,
                    "schemeUri": publisher.scheme_uri,
                    "lang": publisher.language,
                }
            )

        s = self._settings
        return _compact(
            {
                "name": s.fallback_publisher_name,
                "publisherIdentifier": s.fallback_publisher_identifier,
                "publisherIdentifierScheme": s.fallback_publisher_identifier_scheme,
                "schemeUri": s.fallback_publisher_scheme_uri,
                "lang": s.fallback_publisher_language,
            }
        )

    def build_types(self, resource: ResourceModel) -> dict[str, str]:
        """``resourceTypeGeneral`` from the type label; samples describe their material."""
        label = resource.resource_type.name if resource.resource_type else None
        general = lookup_enum(ResourceTypeGeneral, label_to_pascal(label)) if label else None
        types = {
            "resourceTypeGeneral": (general or ResourceTypeGeneral.OTHER).value,
            "resourceType": label or ResourceTypeGeneral.OTHER.value,
        }

        if resource.is_physical_sample:
            igsn = resource.igsn_metadata
            if igsn.sample_type and igsn.material:
                types["resourceType"] = f"{igsn.sample_type}: {igsn.material}"
            else:
                types["resourceType"] = (
                    igsn.sample_type or igsn.material or PHYSICAL_OBJECT_FALLBACK
                )
            types["resourceTypeGeneral"] = ResourceTypeGeneral.PHYSICAL_OBJECT.value
        return types

    # ------------------------------------------------------------------
    # Optional sections
    # ------------------------------------------------------------------

    def language_code(self, resource: ResourceModel) -> str | None:
        if resource.language is not None:
            return resource.language.code
        if resource.is_physical_sample:
            return self._settings.igsn_default_language
        return None

    def build_dates(self, resource: ResourceModel) -> list[dict[str, Any]]:
        dates = []
        for item in _by_position(resource.dates):
            value = format_date_range(item.date_value, item.start_date, item.end_date)
            if value is None:
                continue
            dates.append(
                _compact(
                    {
                        "date": value,
                        "dateType": item.date_type.value,
                        "dateInformation": item.date_information,
                    }
                )
            )
        return dates

    @staticmethod
    def _subject_entry(subject) -> dict[str, Any]:
        return _compact(
            {
                "subject": subject.value,
                "subjectScheme": subject.subject_scheme,
                "schemeUri": subject.scheme_uri,
                "valueUri": subject.value_uri,
                "classificationCode": subject.classification_code,
                "lang": subject.language,
            }
        )

    @staticmethod
    def _funding_entry(funding) -> dict[str, Any]:
        identifier_type = None
        if funding.funder_identifier:
            known = lookup_enum(FunderIdentifierType, funding.funder_identifier_type)
            identifier_type = (known or FunderIdentifierType.OTHER).value
        return _compact(
            {
                "funderName": funding.funder_name,
                "funderIdentifier": funding.funder_identifier,
                "funderIdentifierType": identifier_type,
                "schemeUri": funding.scheme_uri if funding.funder_identifier else None,
                "awardNumber": funding.award_number,
                "awardUri": funding.award_uri,
                "awardTitle": funding.award_title,
            }
        )

    @staticmethod
    def _geo_entry(geo: GeoLocationModel) -> dict[str, Any]:
        entry: dict[str, Any] = {}
        if geo.place:
            entry["geoLocationPlace"] = geo.place
        if geo.has_point:
            entry["geoLocationPoint"] = {
                "pointLongitude": geo.point_longitude,
                "pointLatitude": geo.point_latitude,
            }
        if geo.has_box:
            entry["geoLocationBox"] = {
                "westBoundLongitude": geo.west_bound_longitude,
                "eastBoundLongitude": geo.east_bound_longitude,
                "southBoundLatitude": geo.south_bound_latitude,
                "northBoundLatitude": geo.north_bound_latitude,
            }

        points = [
            {"pointLongitude": p["longitude"], "pointLatitude": p["latitude"]}
            for p in (geo.polygon_points or [])
            if isinstance(p, dict)
            and p.get("longitude") is not None
            and p.get("latitude") is not None
        ]
        if len(points) >= 3:
            if points[0] != points[-1]:
                points.append(dict(points[0]))
            polygon: list[dict[str, Any]] = [{"polygonPoint": p} for p in points]
            if geo.in_polygon_longitude is not None and geo.in_polygon_latitude is not None:
                polygon.append(
                    {
                        "inPolygonPoint": {
                            "pointLongitude": geo.in_polygon_longitude,
                            "pointLatitude": geo.in_polygon_latitude,
                        }
                    }
                )
            entry["geoLocationPolygon"] = polygon
        return entry

    # ------------------------------------------------------------------
    # Creators and contributors
    # ------------------------------------------------------------------

    def _agent_entry(
        self,
        link: ResourceCreatorModel | ResourceContributorModel,
    ) -> dict[str, Any] | None:
        agent = link.agent
        if isinstance(agent, PersonModel):
            return self._person_entry(agent, link.affiliations)
        if isinstance(agent, InstitutionModel):
            return self._institution_entry(agent, link.affiliations)
        logger.warning(f"Skipping {link!r} without an agent")
        return None

    def _contributor_entry(self, contributor: ResourceContributorModel) -> dict[str, Any]:
        entry = self._agent_entry(contributor) or dict(PLACEHOLDER_CREATOR)
        contributor_type = contributor.contributor_type or ContributorType.OTHER
        return {**entry, "contributorType": contributor_type.value}

    def _person_entry(
        self,
        person: PersonModel,
        affiliations: list[AffiliationModel],
    ) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "name": format_person_name(person.family_name, person.given_name),
            "nameType": NameType.PERSONAL.value,
        }
        if person.given_name:
            entry["givenName"] = person.given_name
        if person.family_name:
            entry["familyName"] = person.family_name
        if person.name_identifier:
            entry["nameIdentifiers"] = [
                self._name_identifier(
                    person.name_identifier,
                    person.name_identifier_scheme,
                    person.scheme_uri,
                    IdentifierScheme.ORCID,
                )
            ]
        if affiliations:
            entry["affiliation"] = [self._affiliation_entry(a) for a in _by_position(affiliations)]
        return entry

    def _institution_entry(
        self,
        institution: InstitutionModel,
        affiliations: list[AffiliationModel],
    ) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "name": institution.name,
            "nameType": NameType.ORGANIZATIONAL.value,
        }
        if institution.name_identifier:
            entry["nameIdentifiers"] = [
                self._name_identifier(
                    institution.name_identifier,
                    institution.name_identifier_scheme,
                    institution.scheme_uri,
                    IdentifierScheme.ROR,
                )
            ]
        if affiliations:
            entry["affiliation"] = [self._affiliation_entry(a) for a in _by_position(affiliations)]
        return entry

    @staticmethod
    def _name_identifier(
        identifier: str,
        scheme: str | None,
        scheme_uri: str | None,
        default_scheme: IdentifierScheme,
    ) -> dict[str, str]:
        known = lookup_enum(IdentifierScheme, scheme) or default_scheme
        return {
            "nameIdentifier": identifier,
            "nameIdentifierScheme": scheme or default_scheme.value,
            "schemeUri": scheme_uri or known.scheme_uri,
        }

    @staticmethod
    def _affiliation_entry(affiliation: AffiliationModel) -> dict[str, Any]:
        entry: dict[str, Any] = {"name": affiliation.name or affiliation.identifier}
        # An identifier without a known scheme cannot be expressed in DataCite
        if affiliation.identifier and affiliation.identifier_scheme:
            entry["affiliationIdentifier"] = affiliation.identifier
            entry["affiliationIdentifierScheme"] = affiliation.identifier_scheme
            if affiliation.scheme_uri:
                entry["schemeUri"] = affiliation.scheme_uri
        return entry

    def _same_person(self, a: PersonModel, b: PersonModel) -> bool:
        if a is b or (a.id is not None and a.id == b.id):
            return True
        return is_same_person(a, b, normalized_names=self._settings.name_match_normalized)

    def _default_publisher(self, resource: ResourceModel):
        session = self._session or object_session(resource)
        if session is None:
            return None
        return PublisherRepository(session).get_default()
