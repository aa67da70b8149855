"""Creator, contributor and affiliation models.

Creators and contributors are a tagged variant over person and institution:
``agent_kind`` says which of the two foreign keys is set.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import CheckConstraint, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from curatio.core.types import AgentKind, ContributorType
from curatio.db.base import Base, UUIDPrimaryKeyMixin
from curatio.db.models.agent import InstitutionModel, PersonModel

if TYPE_CHECKING:
    from curatio.db.models.resource import ResourceModel

_ONE_AGENT = (
    "(agent_kind = 'PERSON' AND person_id IS NOT NULL AND institution_id IS NULL) OR "
    "(agent_kind = 'INSTITUTION' AND institution_id IS NOT NULL AND person_id IS NULL)"
)


class AgentLinkMixin:
    """Accessors shared by creator and contributor rows."""

    @property
    def agent(self) -> PersonModel | InstitutionModel | None:
        """The person or institution selected by ``agent_kind``."""
        if self.agent_kind == AgentKind.PERSON:
            return self.person
        return self.institution

    @property
    def is_person(self) -> bool:
        return self.agent_kind == AgentKind.PERSON

    def set_agent(self, agent: PersonModel | InstitutionModel) -> None:
        """Point the row at an agent, keeping the discriminant in step."""
        if isinstance(agent, PersonModel):
            self.agent_kind = AgentKind.PERSON
            self.person = agent
            self.institution = None
        else:
            self.agent_kind = AgentKind.INSTITUTION
            self.institution = agent
            self.person = None


class ResourceCreatorModel(Base, UUIDPrimaryKeyMixin, AgentLinkMixin):
    """An ordered creator of a resource."""

    __tablename__ = "resource_creators"

    resource_id: Mapped[UUID] = mapped_column(
        ForeignKey("resources.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    agent_kind: Mapped[AgentKind] = mapped_column(
        Enum(AgentKind, name="agent_kind", create_constraint=True),
        nullable=False,
    )
    person_id: Mapped[UUID | None] = mapped_column(ForeignKey("persons.id"), nullable=True)
    institution_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("institutions.id"),
        nullable=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    resource: Mapped["ResourceModel"] = relationship(back_populates="creators")
    person: Mapped[PersonModel | None] = relationship(lazy="selectin")
    institution: Mapped[InstitutionModel | None] = relationship(lazy="selectin")
    affiliations: Mapped[list["AffiliationModel"]] = relationship(
        "AffiliationModel",
        back_populates="creator",
        cascade="all, delete-orphan",
        order_by="AffiliationModel.position",
        lazy="selectin",
    )

    __table_args__ = (CheckConstraint(_ONE_AGENT, name="one_agent"),)

    def __repr__(self) -> str:
        return f"<ResourceCreatorModel(position={self.position}, kind={self.agent_kind})>"


class ResourceContributorModel(Base, UUIDPrimaryKeyMixin, AgentLinkMixin):
    """An ordered contributor of a resource."""

    __tablename__ = "resource_contributors"

    resource_id: Mapped[UUID] = mapped_column(
        ForeignKey("resources.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    agent_kind: Mapped[AgentKind] = mapped_column(
        Enum(AgentKind, name="agent_kind", create_constraint=True),
        nullable=False,
    )
    person_id: Mapped[UUID | None] = mapped_column(ForeignKey("persons.id"), nullable=True)
    institution_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("institutions.id"),
        nullable=True,
    )
    contributor_type: Mapped[ContributorType] = mapped_column(
        Enum(ContributorType, name="contributor_type", create_constraint=True),
        nullable=False,
        default=ContributorType.OTHER,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    resource: Mapped["ResourceModel"] = relationship(back_populates="contributors")
    person: Mapped[PersonModel | None] = relationship(lazy="selectin")
    institution: Mapped[InstitutionModel | None] = relationship(lazy="selectin")
    affiliations: Mapped[list["AffiliationModel"]] = relationship(
        "AffiliationModel",
        back_populates="contributor",
        cascade="all, delete-orphan",
        order_by="AffiliationModel.position",
        lazy="selectin",
    )

    __table_args__ = (CheckConstraint(_ONE_AGENT, name="one_agent"),)

    def __repr__(self) -> str:
        return (
            f"<ResourceContributorModel(position={self.position}, "
            f"kind={self.agent_kind}, type={self.contributor_type})>"
        )


class AffiliationModel(Base, UUIDPrimaryKeyMixin):
    """An affiliation owned by exactly one creator or contributor."""

    __tablename__ = "affiliations"

    creator_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("resource_creators.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    contributor_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("resource_contributors.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    name: Mapped[str | None] = mapped_column(String(500), nullable=True)
    identifier: Mapped[str | None] = mapped_column(String(255), nullable=True)
    identifier_scheme: Mapped[str | None] = mapped_column(String(50), nullable=True)
    scheme_uri: Mapped[str | None] = mapped_column(String(255), nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    creator: Mapped[ResourceCreatorModel | None] = relationship(back_populates="affiliations")
    contributor: Mapped[ResourceContributorModel | None] = relationship(
        back_populates="affiliations"
    )

    __table_args__ = (
        CheckConstraint(
            "(creator_id IS NULL) != (contributor_id IS NULL)",
            name="one_owner",
        ),
    )

    def __repr__(self) -> str:
        return f"<AffiliationModel(name='{self.name}', identifier='{self.identifier}')>"
