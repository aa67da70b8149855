"""DataCite XML exporter (kernel-4, schema 4.6)."""

from __future__ import annotations

import re
from typing import Any

from lxml import etree
from sqlalchemy.orm import Session

from curatio.config import CuratioSettings
from curatio.db.models.resource import ResourceModel
from curatio.export.mapping import DataCiteMapping

DATACITE_NS = "http://datacite.org/schema/kernel-4"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"
SCHEMA_LOCATION = f"{DATACITE_NS} https://schema.datacite.org/meta/kernel-4.6/metadata.xsd"

# Characters XML 1.0 cannot represent, even escaped
_XML_INVALID = re.compile("[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def ns(tag: str) -> str:
    return f"{{{DATACITE_NS}}}{tag}"


def _text(value: Any) -> str:
    return _XML_INVALID.sub("", str(value))


def sub_element(
    parent: etree._Element,
    tag: str,
    text: Any = None,
    attrib: dict[str, Any] | None = None,
) -> etree._Element:
    """Append a DataCite element; None attributes are skipped."""
    element = etree.SubElement(parent, ns(tag))
    for key, value in (attrib or {}).items():
        if value is not None and value != "":
            element.set(key, _text(value))
    if text is not None:
        element.text = _text(text)
    return element


class DataCiteXmlExporter:
    """
    Render a resource as a DataCite XML document.

    Elements follow the kernel-4 sequence. Optional wrappers such as
    ``<subjects>`` are only written when they have children.
    """

    def __init__(
        self,
        settings: CuratioSettings | None = None,
        session: Session | None = None,
        mapping: DataCiteMapping | None = None,
    ) -> None:
        self._mapping = mapping or DataCiteMapping(settings, session)

    def export(self, resource: ResourceModel) -> str:
        """Return the UTF-8 XML document as a string, with declaration."""
        root = self.build(resource)
        return etree.tostring(
            root,
            xml_declaration=True,
            encoding="UTF-8",
            pretty_print=True,
        ).decode("utf-8")

    def build(self, resource: ResourceModel) -> etree._Element:
        """Build the ``<resource>`` element tree."""
        return self.render(self._mapping.build_attributes(resource))

    def render(self, attrs: dict[str, Any]) -> etree._Element:
        """Render a DataCite attribute dictionary as XML."""
        root = etree.Element(
            ns("resource"),
            attrib={f"{{{XSI_NS}}}schemaLocation": SCHEMA_LOCATION},
            nsmap={None: DATACITE_NS, "xsi": XSI_NS},
        )

        # Empty when no DOI is assigned yet
        sub_element(root, "identifier", attrs.get("doi"), {"identifierType": "DOI"})

        creators = sub_element(root, "creators")
        for entry in attrs["creators"]:
            self._render_agent(sub_element(creators, "creator"), entry, "creatorName")

        titles = sub_element(root, "titles")
        for entry in attrs["titles"]:
            sub_element(
                titles,
                "title",
                entry["title"],
                {XML_LANG: entry.get("lang"), "titleType": entry.get("titleType")},
            )

        publisher = attrs["publisher"]
        sub_element(
            root,
            "publisher",
            publisher["name"],
            {
                XML_LANG: publisher.get("lang"),
                "publisherIdentifier": publisher.get("publisherIdentifier"),
                "publisherIdentifierScheme": publisher.get("publisherIdentifierScheme"),
                "schemeURI": publisher.get("schemeUri"),
            },
        )
        sub_element(root, "publicationYear", attrs["publicationYear"])
        sub_element(
            root,
            "resourceType",
            attrs["types"].get("resourceType"),
            {"resourceTypeGeneral": attrs["types"]["resourceTypeGeneral"]},
        )

        if subjects := attrs.get("subjects"):
            wrapper = sub_element(root, "subjects")
            for entry in subjects:
                sub_element(
                    wrapper,
                    "subject",
                    entry["subject"],
                    {
                        XML_LANG: entry.get("lang"),
                        "subjectScheme": entry.get("subjectScheme"),
                        "schemeURI": entry.get("schemeUri"),
                        "valueURI": entry.get("valueUri"),
                        "classificationCode": entry.get("classificationCode"),
                    },
                )

        if contributors := attrs.get("contributors"):
            wrapper = sub_element(root, "contributors")
            for entry in contributors:
                element = sub_element(
                    wrapper,
                    "contributor",
                    attrib={"contributorType": entry["contributorType"]},
                )
                self._render_agent(element, entry, "contributorName")

        if dates := attrs.get("dates"):
            wrapper = sub_element(root, "dates")
            for entry in dates:
                sub_element(
                    wrapper,
                    "date",
                    entry["date"],
                    {
                        "dateType": entry["dateType"],
                        "dateInformation": entry.get("dateInformation"),
                    },
                )

        if language := attrs.get("language"):
            sub_element(root, "language", language)

        if alternates := attrs.get("alternateIdentifiers"):
            wrapper = sub_element(root, "alternateIdentifiers")
            for entry in alternates:
                sub_element(
                    wrapper,
                    "alternateIdentifier",
                    entry["alternateIdentifier"],
                    {"alternateIdentifierType": entry["alternateIdentifierType"]},
                )

        if related := attrs.get("relatedIdentifiers"):
            wrapper = sub_element(root, "relatedIdentifiers")
            for entry in related:
                sub_element(
                    wrapper,
                    "relatedIdentifier",
                    entry["relatedIdentifier"],
                    {
                        "relatedIdentifierType": entry["relatedIdentifierType"],
                        "relationType": entry["relationType"],
                        "resourceTypeGeneral": entry.get("resourceTypeGeneral"),
                    },
                )

        if sizes := attrs.get("sizes"):
            wrapper = sub_element(root, "sizes")
            for size in sizes:
                sub_element(wrapper, "size", size)

        if formats := attrs.get("formats"):
            wrapper = sub_element(root, "formats")
            for fmt in formats:
                sub_element(wrapper, "format", fmt)

        if version := attrs.get("version"):
            sub_element(root, "version", version)

        if rights_list := attrs.get("rightsList"):
            wrapper = sub_element(root, "rightsList")
            for entry in rights_list:
                sub_element(
                    wrapper,
                    "rights",
                    entry.get("rights"),
                    {
                        XML_LANG: entry.get("lang"),
                        "rightsURI": entry.get("rightsUri"),
                        "rightsIdentifier": entry.get("rightsIdentifier"),
                        "rightsIdentifierScheme": entry.get("rightsIdentifierScheme"),
                        "schemeURI": entry.get("schemeUri"),
                    },
                )

        if descriptions := attrs.get("descriptions"):
            wrapper = sub_element(root, "descriptions")
            for entry in descriptions:
                sub_element(
                    wrapper,
                    "description",
                    entry["description"],
                    {XML_LANG: entry.get("lang"), "descriptionType": entry["descriptionType"]},
                )

        if geo_locations := attrs.get("geoLocations"):
            wrapper = sub_element(root, "geoLocations")
            for entry in geo_locations:
                self._render_geo_location(sub_element(wrapper, "geoLocation"), entry)

        if funding := attrs.get("fundingReferences"):
            wrapper = sub_element(root, "fundingReferences")
            for entry in funding:
                self._render_funding(sub_element(wrapper, "fundingReference"), entry)

        return root

    @staticmethod
    def _render_agent(parent: etree._Element, entry: dict[str, Any], name_tag: str) -> None:
        sub_element(parent, name_tag, entry["name"], {"nameType": entry.get("nameType")})
        if given := entry.get("givenName"):
            sub_element(parent, "givenName", given)
        if family := entry.get("familyName"):
            sub_element(parent, "familyName", family)
        for identifier in entry.get("nameIdentifiers", []):
            sub_element(
                parent,
                "nameIdentifier",
                identifier["nameIdentifier"],
                {
                    "nameIdentifierScheme": identifier.get("nameIdentifierScheme"),
                    "schemeURI": identifier.get("schemeUri"),
                },
            )
        for affiliation in entry.get("affiliation", []):
            sub_element(
                parent,
                "affiliation",
                affiliation["name"],
                {
                    "affiliationIdentifier": affiliation.get("affiliationIdentifier"),
                    "affiliationIdentifierScheme": affiliation.get("affiliationIdentifierScheme"),
                    "schemeURI": affiliation.get("schemeUri"),
                },
            )

    @staticmethod
    def _render_point(parent: etree._Element, tag: str, point: dict[str, Any]) -> None:
        element = sub_element(parent, tag)
        sub_element(element, "pointLongitude", point["pointLongitude"])
        sub_element(element, "pointLatitude", point["pointLatitude"])

    def _render_geo_location(self, parent: etree._Element, entry: dict[str, Any]) -> None:
        if place := entry.get("geoLocationPlace"):
            sub_element(parent, "geoLocationPlace", place)
        if point := entry.get("geoLocationPoint"):
            self._render_point(parent, "geoLocationPoint", point)
        if box := entry.get("geoLocationBox"):
            element = sub_element(parent, "geoLocationBox")
            for key in (
                "westBoundLongitude",
                "eastBoundLongitude",
                "southBoundLatitude",
                "northBoundLatitude",
            ):
                sub_element(element, key, box[key])
        if polygon := entry.get("geoLocationPolygon"):
            element = sub_element(parent, "geoLocationPolygon")
            for item in polygon:
                if "polygonPoint" in item:
                    self._render_point(element, "polygonPoint", item["polygonPoint"])
                elif "inPolygonPoint" in item:
                    self._render_point(element, "inPolygonPoint", item["inPolygonPoint"])

    @staticmethod
    def _render_funding(parent: etree._Element, entry: dict[str, Any]) -> None:
        sub_element(parent, "funderName", entry["funderName"])
        if identifier := entry.get("funderIdentifier"):
            sub_element(
                parent,
                "funderIdentifier",
                identifier,
                {
                    "funderIdentifierType": entry.get("funderIdentifierType"),
                    "schemeURI": entry.get("schemeUri"),
                },
            )
        if entry.get("awardNumber") or entry.get("awardUri"):
            sub_element(
                parent,
                "awardNumber",
                entry.get("awardNumber", ""),
                {"awardURI": entry.get("awardUri")},
            )
        if title := entry.get("awardTitle"):
            sub_element(parent, "awardTitle", title)
