"""Reference vocabulary models: resource types, languages and publishers."""

from __future__ import annotations

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from curatio.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class ResourceTypeModel(Base, UUIDPrimaryKeyMixin):
    """
    A resourceTypeGeneral term.

    ``name`` is the display label ("Book Chapter"); ``slug`` is the kebab-case
    lookup key ("book-chapter") that imported PascalCase values resolve to.
    """

    __tablename__ = "resource_types"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)

    def __repr__(self) -> str:
        return f"<ResourceTypeModel(slug='{self.slug}')>"


class LanguageModel(Base, UUIDPrimaryKeyMixin):
    """An ISO 639-1 language."""

    __tablename__ = "languages"

    code: Mapped[str] = mapped_column(String(10), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<LanguageModel(code='{self.code}')>"


class PublisherModel(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A publisher; at most one row is flagged as the default."""

    __tablename__ = "publishers"

    name: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    identifier: Mapped[str | None] = mapped_column(String(500), nullable=True)
    identifier_scheme: Mapped[str | None] = mapped_column(String(100), nullable=True)
    scheme_uri: Mapped[str | None] = mapped_column(String(500), nullable=True)
    language: Mapped[str | None] = mapped_column(String(10), nullable=True)
    is_default: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default="0",
    )

    def __repr__(self) -> str:
        return f"<PublisherModel(id={self.id}, name='{self.name}')>"
