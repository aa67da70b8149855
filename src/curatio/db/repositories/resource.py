"""Resource repository with DOI lookups."""

from __future__ import annotations

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select

from curatio.db.models.resource import ResourceModel
from curatio.db.repositories.base import BaseRepository


class ResourceRepository(BaseRepository[ResourceModel]):
    """Repository for Resource entities.

    DOIs are compared case-insensitively, as DOI names are.
    """

    model = ResourceModel

    def get_by_doi(self, doi: str) -> ResourceModel | None:
        """Find the most recently created resource with a DOI."""
        stmt = (
            select(ResourceModel)
            .where(func.lower(ResourceModel.doi) == doi.lower())
            .order_by(ResourceModel.created_at.desc())
            .limit(1)
        )
        return self._session.execute(stmt).scalar()

    def doi_exists(self, doi: str, exclude_id: UUID | None = None) -> bool:
        """Check whether a DOI is taken, optionally ignoring one resource."""
        stmt = select(ResourceModel.id).where(func.lower(ResourceModel.doi) == doi.lower())
        if exclude_id is not None:
            stmt = stmt.where(ResourceModel.id != exclude_id)
        return self._session.execute(stmt.limit(1)).scalar() is not None

    def get_last_assigned(self) -> ResourceModel | None:
        """Get the most recently created resource that has a DOI."""
        stmt = (
            select(ResourceModel)
            .where(ResourceModel.doi.is_not(None), ResourceModel.doi != "")
            .order_by(ResourceModel.created_at.desc())
            .limit(1)
        )
        return self._session.execute(stmt).scalar()

    def find_dois_starting_with(self, prefix: str) -> Sequence[str]:
        """List stored DOIs beginning with ``prefix`` (case-insensitive)."""
        escaped = prefix.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        stmt = select(ResourceModel.doi).where(
            func.lower(ResourceModel.doi).like(f"{escaped}%", escape="\\")
        )
        return self._session.execute(stmt).scalars().all()
