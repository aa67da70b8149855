"""DataCite JSON to internal resource graph transformation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from sqlalchemy.orm import Session

from curatio.config import CuratioSettings, get_settings
from curatio.core.dates import parse_date, parse_date_range
from curatio.core.exceptions import ResolutionError, TransformError
from curatio.core.identifiers import normalize_doi
from curatio.core.labels import RorLabelResolver
from curatio.core.normalization import clean_string, pascal_to_kebab
from curatio.core.types import (
    ContributorType,
    DateType,
    DescriptionType,
    NameType,
    RelatedIdentifierType,
    RelationType,
    TitleType,
    lookup_enum,
)
from curatio.db.models.agent import InstitutionModel, PersonModel
from curatio.db.models.authorship import ResourceContributorModel, ResourceCreatorModel
from curatio.db.models.records import (
    AlternateIdentifierModel,
    DescriptionModel,
    FormatModel,
    FundingReferenceModel,
    GeoLocationModel,
    RelatedIdentifierModel,
    ResourceDateModel,
    RightModel,
    SizeModel,
    SubjectModel,
    TitleModel,
)
from curatio.db.models.reference import LanguageModel, PublisherModel, ResourceTypeModel
from curatio.db.models.resource import ResourceModel
from curatio.db.repositories.reference import (
    LanguageRepository,
    PublisherRepository,
    ResourceTypeRepository,
)
from curatio.services.affiliations import AffiliationService
from curatio.services.entities import (
    EntityResolver,
    extract_institution_data,
    extract_person_data,
)

logger = logging.getLogger(__name__)

FALLBACK_RESOURCE_TYPE_SLUG = "other"
DEFAULT_SUBJECT_LANGUAGE = "en"


def unwrap_attributes(document: Any) -> Mapping[str, Any]:
    """
    Return the attribute object of a DataCite document.

    Accepts ``{"data": {"attributes": ...}}``, ``{"attributes": ...}`` or the
    bare attributes.
    """
    if not isinstance(document, Mapping):
        raise TransformError("DataCite document must be a JSON object")
    data = document.get("data")
    if isinstance(data, Mapping):
        document = data
    attributes = document.get("attributes", document)
    if not isinstance(attributes, Mapping):
        raise TransformError("DataCite attributes must be a JSON object")
    return attributes


def _entries(attributes: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    """Mapping entries of a list-valued attribute; anything else is ignored."""
    raw = attributes.get(key)
    if not isinstance(raw, list):
        return []
    return [entry for entry in raw if isinstance(entry, Mapping)]


def _float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _point(raw: Any) -> tuple[float, float] | None:
    """``(longitude, latitude)`` from a DataCite point object."""
    if not isinstance(raw, Mapping):
        return None
    longitude = _float(raw.get("pointLongitude"))
    latitude = _float(raw.get("pointLatitude"))
    if longitude is None or latitude is None:
        return None
    return longitude, latitude


def _publication_year(raw: Any) -> int | None:
    text = clean_string(str(raw)) if raw is not None else None
    if text is None or not text.isdigit() or len(text) != 4:
        return None
    return int(text)


class DataCiteTransformer:
    """
    Build a ResourceModel graph from a DataCite JSON document.

    People and institutions are resolved through the EntityResolver, so
    importing the same payload twice reuses the reference rows created the
    first time. The new resource is added to the session and flushed; the
    caller owns the transaction.
    """

    def __init__(
        self,
        session: Session,
        settings: CuratioSettings | None = None,
        entity_resolver: EntityResolver | None = None,
        affiliation_service: AffiliationService | None = None,
    ) -> None:
        self._session = session
        self._settings = settings or get_settings()
        self._entities = entity_resolver or EntityResolver(session, self._settings)
        self._affiliations = affiliation_service or AffiliationService(
            RorLabelResolver(self._settings.ror_affiliations_path)
        )
        self._resource_types = ResourceTypeRepository(session)
        self._languages = LanguageRepository(session)
        self._publishers = PublisherRepository(session)

    def transform(
        self,
        external_attributes: Mapping[str, Any],
        actor_id: str | None = None,
    ) -> ResourceModel:
        """
        Import a DataCite document.

        Args:
            external_attributes: DataCite attributes, bare or in a JSON:API envelope
            actor_id: Recorded as creator and last editor of the resource

        Returns:
            The new resource, flushed but not committed

        Raises:
            TransformError: If the document is not an object or has no usable title
            ResolutionError: If resource types have not been seeded
        """
        attributes = unwrap_attributes(external_attributes)

        titles = self._build_titles(attributes)
        if not titles:
            raise TransformError("Document has no usable title")

        resource = ResourceModel(
            doi=normalize_doi(attributes.get("doi")) or None,
            publication_year=_publication_year(attributes.get("publicationYear")),
            version=clean_string(attributes.get("version")),
            created_by=actor_id,
            updated_by=actor_id,
        )
        resource.resource_type = self._resolve_resource_type(attributes.get("types"))
        resource.publisher = self._resolve_publisher(attributes.get("publisher"))
        resource.language = self._resolve_language(attributes.get("language"))

        resource.titles = titles
        resource.creators = self._build_creators(attributes)
        resource.contributors = self._build_contributors(attributes)
        resource.dates = self._build_dates(attributes)
        resource.descriptions = self._build_descriptions(attributes)
        resource.subjects = self._build_subjects(attributes)
        resource.rights = self._build_rights(attributes)
        resource.related_identifiers = self._build_related_identifiers(attributes)
        resource.funding_references = self._build_funding_references(attributes)
        resource.geo_locations = self._build_geo_locations(attributes)
        resource.sizes = [
            SizeModel(value=value, position=i)
            for i, value in enumerate(self._strings(attributes, "sizes"))
        ]
        resource.formats = [
            FormatModel(value=value, position=i)
            for i, value in enumerate(self._strings(attributes, "formats"))
        ]
        resource.alternate_identifiers = self._build_alternate_identifiers(attributes)

        self._session.add(resource)
        self._session.flush()
        logger.info(
            f"Imported resource {resource.id} (doi={resource.doi}) with "
            f"{len(resource.creators)} creators and {len(resource.contributors)} contributors"
        )
        return resource

    # ------------------------------------------------------------------
    # Reference data
    # ------------------------------------------------------------------

    def _resolve_resource_type(self, types: Any) -> ResourceTypeModel:
        general = None
        if isinstance(types, Mapping):
            general = clean_string(types.get("resourceTypeGeneral"))
        if general:
            resource_type = self._resource_types.get_by_slug(pascal_to_kebab(general))
            if resource_type is not None:
                return resource_type
            logger.warning(f"Unknown resourceTypeGeneral '{general}', using fallback")

        fallback = self._resource_types.get_by_slug(FALLBACK_RESOURCE_TYPE_SLUG)
        if fallback is None:
            raise ResolutionError(
                "Resource types are not seeded",
                details={"slug": FALLBACK_RESOURCE_TYPE_SLUG},
            )
        return fallback

    def _resolve_publisher(self, raw: Any) -> PublisherModel | None:
        if isinstance(raw, Mapping):
            fields = raw
            name = clean_string(raw.get("name"))
        else:
            fields = {}
            name = clean_string(raw)

        if name is None:
            return self._publishers.get_default()

        existing = self._publishers.get_by_name(name)
        if existing is not None:
            return existing

        publisher = PublisherModel(
            name=name,
            identifier=clean_string(fields.get("publisherIdentifier")),
            identifier_scheme=clean_string(fields.get("publisherIdentifierScheme")),
            scheme_uri=clean_string(fields.get("schemeUri")),
            language=clean_string(fields.get("lang")),
        )
        self._publishers.create(publisher)
        logger.info(f"Created publisher '{name}'")
        return publisher

    def _resolve_language(self, raw: Any) -> LanguageModel | None:
        code = clean_string(raw)
        if code is None:
            return None
        language = self._languages.get_by_code(code)
        if language is None:
            logger.warning(f"Unknown language code '{code}'")
        return language

    # ------------------------------------------------------------------
    # Titles and agents
    # ------------------------------------------------------------------

    def _build_titles(self, attributes: Mapping[str, Any]) -> list[TitleModel]:
        titles = []
        for entry in _entries(attributes, "titles"):
            value = clean_string(entry.get("title"))
            if value is None:
                continue
            title_type = lookup_enum(TitleType, entry.get("titleType")) or TitleType.MAIN_TITLE
            titles.append(
                TitleModel(
                    value=value,
                    title_type=title_type,
                    language=clean_string(entry.get("lang")),
                    position=len(titles),
                )
            )
        return titles

    def _resolve_agent(self, entry: Mapping[str, Any]) -> PersonModel | InstitutionModel | None:
        if lookup_enum(NameType, entry.get("nameType")) == NameType.ORGANIZATIONAL:
            data = extract_institution_data(entry)
            if data is None:
                return None
            institution, _ = self._entities.find_or_create_institution(data)
            return institution

        data = extract_person_data(entry)
        if not (data.family_name or data.given_name):
            return None
        person, _ = self._entities.find_or_create_person(data)
        return person

    def _build_creators(self, attributes: Mapping[str, Any]) -> list[ResourceCreatorModel]:
        creators = []
        for entry in _entries(attributes, "creators"):
            agent = self._resolve_agent(entry)
            if agent is None:
                logger.warning(f"Skipping creator without a name: {dict(entry)}")
                continue
            creator = ResourceCreatorModel(position=len(creators) + 1)
            creator.set_agent(agent)
            self._affiliations.sync_for_creator(creator, entry.get("affiliation"))
            creators.append(creator)
        return creators

    def _build_contributors(self, attributes: Mapping[str, Any]) -> list[ResourceContributorModel]:
        contributors = []
        for entry in _entries(attributes, "contributors"):
            agent = self._resolve_agent(entry)
            if agent is None:
                logger.warning(f"Skipping contributor without a name: {dict(entry)}")
                continue
            contributor_type = lookup_enum(ContributorType, entry.get("contributorType"))
            if contributor_type is None:
                contributor_type = ContributorType.OTHER
            contributor = ResourceContributorModel(
                position=len(contributors) + 1,
                contributor_type=contributor_type,
            )
            contributor.set_agent(agent)
            self._affiliations.sync_for_contributor(contributor, entry.get("affiliation"))
            contributors.append(contributor)
        return contributors

    # ------------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------------

    def _build_dates(self, attributes: Mapping[str, Any]) -> list[ResourceDateModel]:
        """
        Store supplied dates; add a Created date of today if none was given.

        Range values ``start/end`` are split into boundary dates, with a
        partial end resolved to the last day of its period.
        """
        dates: list[ResourceDateModel] = []
        for entry in _entries(attributes, "dates"):
            date_type = lookup_enum(DateType, entry.get("dateType"))
            raw = clean_string(entry.get("date"))
            if date_type is None or raw is None:
                logger.warning(f"Skipping date entry: {dict(entry)}")
                continue

            record = ResourceDateModel(
                date_type=date_type,
                date_information=clean_string(entry.get("dateInformation")),
                position=len(dates),
            )
            if "/" in raw:
                record.start_date, record.end_date = parse_date_range(raw)
                if record.start_date is None:
                    logger.warning(f"Skipping unparseable date range '{raw}'")
                    continue
            else:
                record.date_value = parse_date(raw)
                if record.date_value is None:
                    logger.warning(f"Skipping unparseable date '{raw}'")
                    continue
            dates.append(record)

        if not any(d.date_type == DateType.CREATED for d in dates):
            dates.append(
                ResourceDateModel(
                    date_type=DateType.CREATED,
                    date_value=date.today().isoformat(),
                    position=len(dates),
                )
            )
        return dates

    # ------------------------------------------------------------------
    # Flat records
    # ------------------------------------------------------------------

    def _build_descriptions(self, attributes: Mapping[str, Any]) -> list[DescriptionModel]:
        descriptions = []
        for entry in _entries(attributes, "descriptions"):
            value = clean_string(entry.get("description"))
            if value is None:
                continue
            description_type = lookup_enum(DescriptionType, entry.get("descriptionType"))
            if description_type is None:
                logger.warning(f"Skipping description with type {entry.get('descriptionType')!r}")
                continue
            descriptions.append(
                DescriptionModel(
                    value=value,
                    description_type=description_type,
                    language=clean_string(entry.get("lang")),
                    position=len(descriptions),
                )
            )
        return descriptions

    def _build_subjects(self, attributes: Mapping[str, Any]) -> list[SubjectModel]:
        subjects = []
        for entry in _entries(attributes, "subjects"):
            value = clean_string(entry.get("subject"))
            if value is None:
                continue
            subjects.append(
                SubjectModel(
                    value=value,
                    subject_scheme=clean_string(entry.get("subjectScheme")),
                    scheme_uri=clean_string(entry.get("schemeUri")),
                    value_uri=clean_string(entry.get("valueUri")),
                    classification_code=clean_string(entry.get("classificationCode")),
                    language=clean_string(entry.get("lang")) or DEFAULT_SUBJECT_LANGUAGE,
                    position=len(subjects),
                )
            )
        return subjects

    def _build_rights(self, attributes: Mapping[str, Any]) -> list[RightModel]:
        rights = []
        for entry in _entries(attributes, "rightsList"):
            identifier = clean_string(entry.get("rightsIdentifier"))
            name = clean_string(entry.get("rights")) or identifier
            if name is None:
                continue
            rights.append(
                RightModel(
                    name=name,
                    uri=clean_string(entry.get("rightsUri")),
                    identifier=identifier,
                    identifier_scheme=clean_string(entry.get("rightsIdentifierScheme")),
                    scheme_uri=clean_string(entry.get("schemeUri")),
                    language=clean_string(entry.get("lang")),
                    position=len(rights),
                )
            )
        return rights

    def _build_related_identifiers(
        self,
        attributes: Mapping[str, Any],
    ) -> list[RelatedIdentifierModel]:
        related = []
        for entry in _entries(attributes, "relatedIdentifiers"):
            identifier = clean_string(entry.get("relatedIdentifier"))
            identifier_type = lookup_enum(RelatedIdentifierType, entry.get("relatedIdentifierType"))
            relation_type = lookup_enum(RelationType, entry.get("relationType"))
            if identifier is None or identifier_type is None or relation_type is None:
                logger.warning(f"Skipping related identifier: {dict(entry)}")
                continue
            related.append(
                RelatedIdentifierModel(
                    identifier=identifier,
                    identifier_type=identifier_type,
                    relation_type=relation_type,
                    resource_type_general=clean_string(entry.get("resourceTypeGeneral")),
                    position=len(related),
                )
            )
        return related

    def _build_funding_references(
        self,
        attributes: Mapping[str, Any],
    ) -> list[FundingReferenceModel]:
        funding = []
        for entry in _entries(attributes, "fundingReferences"):
            funder_name = clean_string(entry.get("funderName"))
            if funder_name is None:
                continue
            funding.append(
                FundingReferenceModel(
                    funder_name=funder_name,
                    funder_identifier=clean_string(entry.get("funderIdentifier")),
                    funder_identifier_type=clean_string(entry.get("funderIdentifierType")),
                    scheme_uri=clean_string(entry.get("schemeUri")),
                    award_number=clean_string(entry.get("awardNumber")),
                    award_uri=clean_string(entry.get("awardUri")),
                    award_title=clean_string(entry.get("awardTitle")),
                    position=len(funding),
                )
            )
        return funding

    def _build_geo_locations(self, attributes: Mapping[str, Any]) -> list[GeoLocationModel]:
        locations = []
        for entry in _entries(attributes, "geoLocations"):
            geo = GeoLocationModel(place=clean_string(entry.get("geoLocationPlace")))

            if point := _point(entry.get("geoLocationPoint")):
                geo.point_longitude, geo.point_latitude = point

            box = entry.get("geoLocationBox")
            if isinstance(box, Mapping):
                geo.west_bound_longitude = _float(box.get("westBoundLongitude"))
                geo.east_bound_longitude = _float(box.get("eastBoundLongitude"))
                geo.south_bound_latitude = _float(box.get("southBoundLatitude"))
                geo.north_bound_latitude = _float(box.get("northBoundLatitude"))

            polygon = entry.get("geoLocationPolygon")
            if isinstance(polygon, list):
                points = []
                for item in polygon:
                    if not isinstance(item, Mapping):
                        continue
                    if vertex := _point(item.get("polygonPoint")):
                        points.append({"longitude": vertex[0], "latitude": vertex[1]})
                    elif inner := _point(item.get("inPolygonPoint")):
                        geo.in_polygon_longitude, geo.in_polygon_latitude = inner
                geo.polygon_points = points or None

            if not (geo.place or geo.has_point or geo.has_box or geo.polygon_points):
                continue
            geo.position = len(locations)
            locations.append(geo)
        return locations

    def _build_alternate_identifiers(
        self,
        attributes: Mapping[str, Any],
    ) -> list[AlternateIdentifierModel]:
        alternates = []
        for entry in _entries(attributes, "alternateIdentifiers"):
            value = clean_string(entry.get("alternateIdentifier"))
            identifier_type = clean_string(entry.get("alternateIdentifierType"))
            if value is None or identifier_type is None:
                continue
            alternates.append(
                AlternateIdentifierModel(
                    value=value,
                    identifier_type=identifier_type,
                    position=len(alternates),
                )
            )
        return alternates

    @staticmethod
    def _strings(attributes: Mapping[str, Any], key: str) -> list[str]:
        raw = attributes.get(key)
        if not isinstance(raw, list):
            return []
        return [value for value in (clean_string(item) for item in raw) if value]
