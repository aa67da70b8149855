"""Flat records attached to a resource."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID

from sqlalchemy import JSON, Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from curatio.core.types import (
    DateType,
    DescriptionType,
    RelatedIdentifierType,
    RelationType,
    TitleType,
)
from curatio.db.base import Base, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from curatio.db.models.resource import ResourceModel


def _resource_fk() -> Mapped[UUID]:
    return mapped_column(
        ForeignKey("resources.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


class TitleModel(Base, UUIDPrimaryKeyMixin):
    """A title; MainTitle is the untyped title in DataCite output."""

    __tablename__ = "titles"

    resource_id: Mapped[UUID] = _resource_fk()
    value: Mapped[str] = mapped_column(Text, nullable=False)
    title_type: Mapped[TitleType] = mapped_column(
        Enum(TitleType, name="title_type", create_constraint=True),
        nullable=False,
        default=TitleType.MAIN_TITLE,
    )
    language: Mapped[str | None] = mapped_column(String(10), nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    resource: Mapped["ResourceModel"] = relationship(back_populates="titles")

    @property
    def is_main(self) -> bool:
        return self.title_type in (None, TitleType.MAIN_TITLE)

    def __repr__(self) -> str:
        return f"<TitleModel(type={self.title_type}, value='{self.value[:50]}')>"


class DescriptionModel(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "descriptions"

    resource_id: Mapped[UUID] = _resource_fk()
    value: Mapped[str] = mapped_column(Text, nullable=False)
    description_type: Mapped[DescriptionType] = mapped_column(
        Enum(DescriptionType, name="description_type", create_constraint=True),
        nullable=False,
        default=DescriptionType.ABSTRACT,
    )
    language: Mapped[str | None] = mapped_column(String(10), nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    resource: Mapped["ResourceModel"] = relationship(back_populates="descriptions")


class SubjectModel(Base, UUIDPrimaryKeyMixin):
    """A free keyword or a controlled-vocabulary term."""

    __tablename__ = "subjects"

    resource_id: Mapped[UUID] = _resource_fk()
    value: Mapped[str] = mapped_column(String(1000), nullable=False)
    subject_scheme: Mapped[str | None] = mapped_column(String(255), nullable=True)
    scheme_uri: Mapped[str | None] = mapped_column(String(500), nullable=True)
    value_uri: Mapped[str | None] = mapped_column(String(500), nullable=True)
    classification_code: Mapped[str | None] = mapped_column(String(255), nullable=True)
    language: Mapped[str | None] = mapped_column(String(10), nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    resource: Mapped["ResourceModel"] = relationship(back_populates="subjects")


class RightModel(Base, UUIDPrimaryKeyMixin):
    """A license or rights statement, usually an SPDX license."""

    __tablename__ = "rights"

    resource_id: Mapped[UUID] = _resource_fk()
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    uri: Mapped[str | None] = mapped_column(String(500), nullable=True)
    identifier: Mapped[str | None] = mapped_column(String(100), nullable=True)
    identifier_scheme: Mapped[str | None] = mapped_column(String(50), nullable=True)
    scheme_uri: Mapped[str | None] = mapped_column(String(500), nullable=True)
    language: Mapped[str | None] = mapped_column(String(10), nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    resource: Mapped["ResourceModel"] = relationship(back_populates="rights")


class ResourceDateModel(Base, UUIDPrimaryKeyMixin):
    """A single date (``date_value``) or a range (``start_date``/``end_date``)."""

    __tablename__ = "resource_dates"

    resource_id: Mapped[UUID] = _resource_fk()
    date_type: Mapped[DateType] = mapped_column(
        Enum(DateType, name="date_type", create_constraint=True),
        nullable=False,
    )
    date_value: Mapped[str | None] = mapped_column(String(50), nullable=True)
    start_date: Mapped[str | None] = mapped_column(String(50), nullable=True)
    end_date: Mapped[str | None] = mapped_column(String(50), nullable=True)
    date_information: Mapped[str | None] = mapped_column(String(500), nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    resource: Mapped["ResourceModel"] = relationship(back_populates="dates")

    @property
    def is_range(self) -> bool:
        return self.start_date is not None

    def __repr__(self) -> str:
        return (
            f"<ResourceDateModel(type={self.date_type}, value={self.date_value}, "
            f"start={self.start_date}, end={self.end_date})>"
        )


class RelatedIdentifierModel(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "related_identifiers"

    resource_id: Mapped[UUID] = _resource_fk()
    identifier: Mapped[str] = mapped_column(String(1000), nullable=False)
    identifier_type: Mapped[RelatedIdentifierType] = mapped_column(
        Enum(RelatedIdentifierType, name="related_identifier_type", create_constraint=True),
        nullable=False,
        default=RelatedIdentifierType.DOI,
    )
    relation_type: Mapped[RelationType] = mapped_column(
        Enum(RelationType, name="relation_type", create_constraint=True),
        nullable=False,
        default=RelationType.REFERENCES,
    )
    resource_type_general: Mapped[str | None] = mapped_column(String(100), nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    resource: Mapped["ResourceModel"] = relationship(back_populates="related_identifiers")


class FundingReferenceModel(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "funding_references"

    resource_id: Mapped[UUID] = _resource_fk()
    funder_name: Mapped[str] = mapped_column(String(500), nullable=False)
    funder_identifier: Mapped[str | None] = mapped_column(String(500), nullable=True)
    funder_identifier_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    scheme_uri: Mapped[str | None] = mapped_column(String(500), nullable=True)
    award_number: Mapped[str | None] = mapped_column(String(255), nullable=True)
    award_uri: Mapped[str | None] = mapped_column(String(500), nullable=True)
    award_title: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    resource: Mapped["ResourceModel"] = relationship(back_populates="funding_references")


class GeoLocationModel(Base, UUIDPrimaryKeyMixin):
    """
    A spatial coverage entry.

    Any combination of place name, point, bounding box and polygon may be
    set. Polygon points are stored as ``[{"longitude": .., "latitude": ..}]``.
    """

    __tablename__ = "geo_locations"

    resource_id: Mapped[UUID] = _resource_fk()
    place: Mapped[str | None] = mapped_column(Text, nullable=True)
    point_longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    point_latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    west_bound_longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    east_bound_longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    south_bound_latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    north_bound_latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    polygon_points: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)
    in_polygon_longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    in_polygon_latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    resource: Mapped["ResourceModel"] = relationship(back_populates="geo_locations")

    @property
    def has_point(self) -> bool:
        return self.point_longitude is not None and self.point_latitude is not None

    @property
    def has_box(self) -> bool:
        return None not in (
            self.west_bound_longitude,
            self.east_bound_longitude,
            self.south_bound_latitude,
            self.north_bound_latitude,
        )


class SizeModel(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "sizes"

    resource_id: Mapped[UUID] = _resource_fk()
    value: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    resource: Mapped["ResourceModel"] = relationship(back_populates="sizes")


class FormatModel(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "formats"

    resource_id: Mapped[UUID] = _resource_fk()
    value: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    resource: Mapped["ResourceModel"] = relationship(back_populates="formats")


class AlternateIdentifierModel(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "alternate_identifiers"

    resource_id: Mapped[UUID] = _resource_fk()
    value: Mapped[str] = mapped_column(String(500), nullable=False)
    identifier_type: Mapped[str] = mapped_column(String(100), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    resource: Mapped["ResourceModel"] = relationship(back_populates="alternate_identifiers")
