"""Tests for the DataCite attribute mapping and JSON exporter."""

from __future__ import annotations

import json
from datetime import date

import pytest

from curatio.config import CuratioSettings
from curatio.core.types import ContributorType, DescriptionType, TitleType
from curatio.db.models import (
    DescriptionModel,
    GeoLocationModel,
    IgsnMetadataModel,
    InstitutionModel,
    LanguageModel,
    PublisherModel,
    ResourceModel,
    ResourceTypeModel,
    TitleModel,
)
from curatio.export import DataCiteJsonExporter, DataCiteMapping

ORCID_JANE = "https://orcid.org/0000-0001-2345-6789"
ORCID_MAX = "https://orcid.org/0000-0002-1825-0097"


@pytest.fixture
def exporter(test_settings: CuratioSettings) -> DataCiteJsonExporter:
    return DataCiteJsonExporter(test_settings)


@pytest.fixture
def mapping(test_settings: CuratioSettings) -> DataCiteMapping:
    return DataCiteMapping(test_settings)


# ============================================================================
# Document Shape Tests
# ============================================================================


class TestJsonDocument:
    """Tests for the JSON:API envelope."""

    def test_envelope(self, exporter: DataCiteJsonExporter, sample_resource: ResourceModel):
        document = exporter.export(sample_resource)
        assert document["data"]["type"] == "dois"
        assert document["data"]["attributes"]["doi"] == "10.5880/fidgeo.2026.005"

    def test_export_string(self, exporter: DataCiteJsonExporter, sample_resource: ResourceModel):
        text = exporter.export_string(sample_resource)
        assert json.loads(text) == exporter.export(sample_resource)
        assert "\n  " in text

    def test_non_ascii_kept(
        self,
        exporter: DataCiteJsonExporter,
        empty_resource: ResourceModel,
        make_creator,
        make_person,
    ):
        empty_resource.creators = [make_creator(make_person("Müller", "Max"))]
        assert "Müller" in exporter.export_string(empty_resource, indent=None)


# ============================================================================
# Required Section Tests
# ============================================================================


class TestRequiredSections:
    """Required sections always exist, with placeholders if needed."""

    def test_placeholders(self, mapping: DataCiteMapping, empty_resource: ResourceModel):
        attributes = mapping.build_attributes(empty_resource)

        assert attributes["creators"] == [{"name": "Unknown", "nameType": "Personal"}]
        assert attributes["titles"] == [{"title": "Untitled"}]
        assert attributes["publicationYear"] == "2024"
        assert attributes["types"] == {"resourceTypeGeneral": "Other", "resourceType": "Other"}
        assert attributes["schemaVersion"] == "http://datacite.org/schema/kernel-4"

    def test_fallback_publisher(self, mapping: DataCiteMapping, empty_resource: ResourceModel):
        """Without a publisher or session the configured fallback is used."""
        assert mapping.build_attributes(empty_resource)["publisher"] == {
            "name": "GFZ Data Services",
            "publisherIdentifier": "https://doi.org/10.17616/R3VQ0S",
            "publisherIdentifierScheme": "re3data",
            "schemeUri": "https://re3data.org/",
            "lang": "en",
        }

    def test_assigned_publisher(self, mapping: DataCiteMapping, empty_resource: ResourceModel):
        empty_resource.publisher = PublisherModel(name="Own Press")
        assert mapping.build_attributes(empty_resource)["publisher"] == {"name": "Own Press"}

    def test_no_identifiers_without_doi(
        self, mapping: DataCiteMapping, empty_resource: ResourceModel
    ):
        attributes = mapping.build_attributes(empty_resource)
        assert "doi" not in attributes
        assert "identifiers" not in attributes

    def test_identifiers_with_doi(self, mapping: DataCiteMapping, sample_resource: ResourceModel):
        attributes = mapping.build_attributes(sample_resource)
        assert attributes["identifiers"] == [
            {"identifier": "10.5880/fidgeo.2026.005", "identifierType": "DOI"}
        ]

    def test_missing_publication_year_uses_current_year(self, mapping: DataCiteMapping):
        attributes = mapping.build_attributes(ResourceModel())
        assert attributes["publicationYear"] == str(date.today().year)

    def test_resource_type_from_label(
        self, mapping: DataCiteMapping, empty_resource: ResourceModel
    ):
        empty_resource.resource_type = ResourceTypeModel(name="Book Chapter", slug="book-chapter")
        assert mapping.build_attributes(empty_resource)["types"] == {
            "resourceTypeGeneral": "BookChapter",
            "resourceType": "Book Chapter",
        }


# ============================================================================
# Titles and Agents
# ============================================================================


class TestTitlesAndAgents:
    """Tests for titles, creators and contributors."""

    def test_title_type_only_for_non_main(
        self, mapping: DataCiteMapping, sample_resource: ResourceModel
    ):
        assert mapping.build_attributes(sample_resource)["titles"] == [
            {"title": "Gravity field model"},
            {"title": "Release 2", "titleType": "Subtitle", "lang": "de"},
        ]

    def test_title_inherits_resource_language(
        self, mapping: DataCiteMapping, empty_resource: ResourceModel
    ):
        empty_resource.language = LanguageModel(code="en", name="English")
        empty_resource.titles = [TitleModel(value="Data", title_type=TitleType.MAIN_TITLE)]
        attributes = mapping.build_attributes(empty_resource)
        assert attributes["titles"] == [{"title": "Data", "lang": "en"}]
        assert attributes["language"] == "en"

    def test_blank_titles_skipped(self, mapping: DataCiteMapping, empty_resource: ResourceModel):
        empty_resource.titles = [TitleModel(value="   ", title_type=TitleType.MAIN_TITLE)]
        assert mapping.build_attributes(empty_resource)["titles"] == [{"title": "Untitled"}]

    def test_person_creator(self, mapping: DataCiteMapping, sample_resource: ResourceModel):
        creator = mapping.build_attributes(sample_resource)["creators"][0]
        assert creator == {
            "name": "Smith, Jane",
            "nameType": "Personal",
            "givenName": "Jane",
            "familyName": "Smith",
            "nameIdentifiers": [
                {
                    "nameIdentifier": ORCID_JANE,
                    "nameIdentifierScheme": "ORCID",
                    "schemeUri": "https://orcid.org/",
                }
            ],
            "affiliation": [
                {
                    "name": "GFZ",
                    "affiliationIdentifier": "https://ror.org/04z8jg394",
                    "affiliationIdentifierScheme": "ROR",
                    "schemeUri": "https://ror.org/",
                }
            ],
        }

    def test_institution_creator(
        self, mapping: DataCiteMapping, empty_resource: ResourceModel, make_creator
    ):
        empty_resource.creators = [make_creator(InstitutionModel(name="GFZ Data Services"))]
        assert mapping.build_attributes(empty_resource)["creators"] == [
            {"name": "GFZ Data Services", "nameType": "Organizational"}
        ]

    def test_affiliation_without_scheme_keeps_name_only(
        self, mapping: DataCiteMapping, empty_resource: ResourceModel, make_creator, make_person
    ):
        empty_resource.creators = [
            make_creator(make_person("Doe"), affiliations=[{"name": "Lab", "identifier": "Q42"}])
        ]
        creator = mapping.build_attributes(empty_resource)["creators"][0]
        assert creator["affiliation"] == [{"name": "Lab"}]

    def test_creators_in_position_order(
        self, mapping: DataCiteMapping, empty_resource: ResourceModel, make_creator, make_person
    ):
        empty_resource.creators = [
            make_creator(make_person("Second"), position=2),
            make_creator(make_person("First"), position=1),
        ]
        names = [c["name"] for c in mapping.build_attributes(empty_resource)["creators"]]
        assert names == ["First", "Second"]

    def test_contributor_type(
        self, mapping: DataCiteMapping, empty_resource: ResourceModel, make_contributor, make_person
    ):
        empty_resource.contributors = [
            make_contributor(make_person("Doe", "John"), contributor_type=ContributorType.EDITOR)
        ]
        contributor = mapping.build_attributes(empty_resource)["contributors"][0]
        assert contributor["contributorType"] == "Editor"
        assert contributor["name"] == "Doe, John"


# ============================================================================
# Optional Section Tests
# ============================================================================


class TestOptionalSections:
    """Optional sections are omitted when empty."""

    def test_empty_sections_omitted(self, mapping: DataCiteMapping, empty_resource: ResourceModel):
        attributes = mapping.build_attributes(empty_resource)
        for key in (
            "contributors",
            "subjects",
            "dates",
            "language",
            "relatedIdentifiers",
            "sizes",
            "formats",
            "version",
            "rightsList",
            "descriptions",
            "geoLocations",
            "fundingReferences",
        ):
            assert key not in attributes

    def test_date_ranges(self, mapping: DataCiteMapping, sample_resource: ResourceModel):
        assert mapping.build_attributes(sample_resource)["dates"] == [
            {"date": "2020-01-01/2021-02-28", "dateType": "Collected"},
            {"date": "2026-01-15", "dateType": "Created"},
        ]

    def test_descriptions(self, mapping: DataCiteMapping, empty_resource: ResourceModel):
        empty_resource.descriptions = [
            DescriptionModel(value="How it was done", description_type=DescriptionType.METHODS)
        ]
        assert mapping.build_attributes(empty_resource)["descriptions"] == [
            {"description": "How it was done", "descriptionType": "Methods"}
        ]

    def test_polygon_closed_automatically(
        self, mapping: DataCiteMapping, empty_resource: ResourceModel
    ):
        empty_resource.geo_locations = [
            GeoLocationModel(
                polygon_points=[
                    {"longitude": 1.0, "latitude": 1.0},
                    {"longitude": 2.0, "latitude": 1.0},
                    {"longitude": 2.0, "latitude": 2.0},
                ]
            )
        ]
        polygon = mapping.build_attributes(empty_resource)["geoLocations"][0][
            "geoLocationPolygon"
        ]
        assert len(polygon) == 4
        assert polygon[0] == polygon[-1]

    def test_short_polygon_dropped(self, mapping: DataCiteMapping, empty_resource: ResourceModel):
        empty_resource.geo_locations = [
            GeoLocationModel(
                place="Somewhere",
                polygon_points=[{"longitude": 1.0, "latitude": 1.0}],
            )
        ]
        assert mapping.build_attributes(empty_resource)["geoLocations"] == [
            {"geoLocationPlace": "Somewhere"}
        ]


# ============================================================================
# Physical Sample Tests
# ============================================================================


class TestPhysicalSample:
    """Physical samples list person contributors as additional creators."""

    @pytest.fixture
    def sample(
        self, empty_resource: ResourceModel, make_creator, make_contributor, make_person
    ) -> ResourceModel:
        jane = make_person("Smith", "Jane", ORCID_JANE)
        empty_resource.igsn_metadata = IgsnMetadataModel(sample_type="Core", material="Basalt")
        empty_resource.creators = [make_creator(jane)]
        empty_resource.contributors = [
            make_contributor(make_person("Müller", "Max", ORCID_MAX), position=1),
            make_contributor(make_person("Smith", "J.", ORCID_JANE), position=2),
            make_contributor(InstitutionModel(name="GFZ Data Services"), position=3),
        ]
        return empty_resource

    def test_contributors_projected(self, mapping: DataCiteMapping, sample: ResourceModel):
        creators = mapping.build_attributes(sample)["creators"]
        assert [c["name"] for c in creators] == ["Smith, Jane", "Müller, Max"]

    def test_projected_contributors_deduplicated(
        self, mapping: DataCiteMapping, sample: ResourceModel, make_contributor, make_person
    ):
        sample.contributors.append(
            make_contributor(make_person("Mueller", "Max", ORCID_MAX), position=4)
        )
        creators = mapping.build_attributes(sample)["creators"]
        assert [c["name"] for c in creators] == ["Smith, Jane", "Müller, Max"]
        assert len(mapping.build_attributes(sample)["contributors"]) == 4

    def test_name_match_not_projected(
        self, mapping: DataCiteMapping, sample: ResourceModel, make_contributor, make_person
    ):
        sample.contributors = [make_contributor(make_person("Smith", "Jane"), position=1)]
        creators = mapping.build_attributes(sample)["creators"]
        assert [c["name"] for c in creators] == ["Smith, Jane"]

    def test_name_differs_in_case_projected(
        self, mapping: DataCiteMapping, sample: ResourceModel, make_contributor, make_person
    ):
        sample.contributors = [make_contributor(make_person("smith", "jane"), position=1)]
        creators = mapping.build_attributes(sample)["creators"]
        assert [c["name"] for c in creators] == ["Smith, Jane", "smith, jane"]

    def test_contributors_unchanged(self, mapping: DataCiteMapping, sample: ResourceModel):
        contributors = mapping.build_attributes(sample)["contributors"]
        assert len(contributors) == 3
        assert contributors[2]["nameType"] == "Organizational"

    def test_types_and_language(self, mapping: DataCiteMapping, sample: ResourceModel):
        attributes = mapping.build_attributes(sample)
        assert attributes["types"] == {
            "resourceTypeGeneral": "PhysicalObject",
            "resourceType": "Core: Basalt",
        }
        assert attributes["language"] == "en"

    def test_type_without_material(self, mapping: DataCiteMapping, sample: ResourceModel):
        sample.igsn_metadata.material = None
        assert mapping.build_attributes(sample)["types"]["resourceType"] == "Core"

    def test_type_without_details(self, mapping: DataCiteMapping, sample: ResourceModel):
        sample.igsn_metadata.sample_type = None
        sample.igsn_metadata.material = None
        assert mapping.build_attributes(sample)["types"]["resourceType"] == "Physical Object"

    def test_regular_resource_not_projected(
        self,
        mapping: DataCiteMapping,
        empty_resource: ResourceModel,
        make_creator,
        make_contributor,
        make_person,
    ):
        empty_resource.creators = [make_creator(make_person("Smith", "Jane"))]
        empty_resource.contributors = [make_contributor(make_person("Doe", "John"))]
        assert len(mapping.build_attributes(empty_resource)["creators"]) == 1
