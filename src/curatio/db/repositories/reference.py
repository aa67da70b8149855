"""Repositories for reference vocabularies and publishers."""

from __future__ import annotations

from sqlalchemy import func, select

from curatio.db.models.reference import LanguageModel, PublisherModel, ResourceTypeModel
from curatio.db.repositories.base import BaseRepository


class ResourceTypeRepository(BaseRepository[ResourceTypeModel]):
    model = ResourceTypeModel

    def get_by_slug(self, slug: str) -> ResourceTypeModel | None:
        stmt = select(ResourceTypeModel).where(ResourceTypeModel.slug == slug)
        return self._session.execute(stmt).scalar_one_or_none()


class LanguageRepository(BaseRepository[LanguageModel]):
    model = LanguageModel

    def get_by_code(self, code: str) -> LanguageModel | None:
        """Find a language by ISO code, ignoring case."""
        stmt = select(LanguageModel).where(func.lower(LanguageModel.code) == code.strip().lower())
        return self._session.execute(stmt).scalar_one_or_none()


class PublisherRepository(BaseRepository[PublisherModel]):
    model = PublisherModel

    def get_by_name(self, name: str) -> PublisherModel | None:
        """Find a publisher by exact name."""
        stmt = (
            select(PublisherModel)
            .where(PublisherModel.name == name)
            .order_by(PublisherModel.created_at)
            .limit(1)
        )
        return self._session.execute(stmt).scalar()

    def get_default(self) -> PublisherModel | None:
        """Get the publisher flagged as default, if any."""
        stmt = select(PublisherModel).where(PublisherModel.is_default.is_(True)).limit(1)
        return self._session.execute(stmt).scalar()
