"""Person and institution models shared across resources."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from curatio.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class PersonModel(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """
    Deduplicated person.

    Looked up by canonical ORCID first, then by exact family/given name,
    so repeated imports reuse the same row.
    """

    __tablename__ = "persons"

    family_name: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    given_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Canonical https://orcid.org/... form
    name_identifier: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        unique=True,
        index=True,
    )
    name_identifier_scheme: Mapped[str | None] = mapped_column(String(50), nullable=True)
    scheme_uri: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<PersonModel(id={self.id}, family_name='{self.family_name}')>"


class InstitutionModel(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Deduplicated institution, looked up by canonical ROR then by name."""

    __tablename__ = "institutions"

    name: Mapped[str] = mapped_column(String(500), nullable=False, index=True)

    # Canonical https://ror.org/... form
    name_identifier: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        unique=True,
        index=True,
    )
    name_identifier_scheme: Mapped[str | None] = mapped_column(String(50), nullable=True)
    scheme_uri: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<InstitutionModel(id={self.id}, name='{self.name}')>"
