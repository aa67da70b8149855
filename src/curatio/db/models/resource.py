"""Resource model and its physical-sample extension."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from curatio.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
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


def _owned(target: str, order_by: str | None = None):
    return relationship(
        target,
        back_populates="resource",
        cascade="all, delete-orphan",
        order_by=order_by,
        lazy="selectin",
    )


class ResourceModel(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """
    A curated research output.

    The DOI stays empty until the resource is registered. Child collections
    are ordered by their ``position`` so serialization order is stable.
    """

    __tablename__ = "resources"

    doi: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    publication_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    version: Mapped[str | None] = mapped_column(String(50), nullable=True)

    resource_type_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("resource_types.id"),
        nullable=True,
    )
    language_id: Mapped[UUID | None] = mapped_column(ForeignKey("languages.id"), nullable=True)
    publisher_id: Mapped[UUID | None] = mapped_column(ForeignKey("publishers.id"), nullable=True)

    created_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    updated_by: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Reference data
    resource_type: Mapped[ResourceTypeModel | None] = relationship(lazy="selectin")
    language: Mapped[LanguageModel | None] = relationship(lazy="selectin")
    publisher: Mapped[PublisherModel | None] = relationship(lazy="selectin")

    # Owned collections
    titles: Mapped[list[TitleModel]] = _owned("TitleModel", "TitleModel.position")
    creators: Mapped[list[ResourceCreatorModel]] = _owned(
        "ResourceCreatorModel", "ResourceCreatorModel.position"
    )
    contributors: Mapped[list[ResourceContributorModel]] = _owned(
        "ResourceContributorModel", "ResourceContributorModel.position"
    )
    descriptions: Mapped[list[DescriptionModel]] = _owned(
        "DescriptionModel", "DescriptionModel.position"
    )
    subjects: Mapped[list[SubjectModel]] = _owned("SubjectModel", "SubjectModel.position")
    rights: Mapped[list[RightModel]] = _owned("RightModel", "RightModel.position")
    dates: Mapped[list[ResourceDateModel]] = _owned(
        "ResourceDateModel", "ResourceDateModel.position"
    )
    related_identifiers: Mapped[list[RelatedIdentifierModel]] = _owned(
        "RelatedIdentifierModel", "RelatedIdentifierModel.position"
    )
    funding_references: Mapped[list[FundingReferenceModel]] = _owned(
        "FundingReferenceModel", "FundingReferenceModel.position"
    )
    geo_locations: Mapped[list[GeoLocationModel]] = _owned(
        "GeoLocationModel", "GeoLocationModel.position"
    )
    sizes: Mapped[list[SizeModel]] = _owned("SizeModel", "SizeModel.position")
    formats: Mapped[list[FormatModel]] = _owned("FormatModel", "FormatModel.position")
    alternate_identifiers: Mapped[list[AlternateIdentifierModel]] = _owned(
        "AlternateIdentifierModel", "AlternateIdentifierModel.position"
    )

    igsn_metadata: Mapped["IgsnMetadataModel | None"] = relationship(
        back_populates="resource",
        cascade="all, delete-orphan",
        uselist=False,
        lazy="selectin",
    )

    @property
    def main_title(self) -> str | None:
        """The first untyped title, if any."""
        for title in self.titles:
            if title.is_main:
                return title.value
        return None

    @property
    def is_physical_sample(self) -> bool:
        return self.igsn_metadata is not None

    def __repr__(self) -> str:
        return f"<ResourceModel(id={self.id}, doi='{self.doi}')>"


class IgsnMetadataModel(Base, UUIDPrimaryKeyMixin):
    """Physical-sample metadata; its presence marks a resource as an IGSN sample."""

    __tablename__ = "igsn_metadata"

    resource_id: Mapped[UUID] = mapped_column(
        ForeignKey("resources.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    sample_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    material: Mapped[str | None] = mapped_column(String(255), nullable=True)

    resource: Mapped[ResourceModel] = relationship(back_populates="igsn_metadata")

    def __repr__(self) -> str:
        return f"<IgsnMetadataModel(sample_type='{self.sample_type}')>"
