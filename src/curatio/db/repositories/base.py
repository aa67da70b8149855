"""Base repository with generic CRUD operations."""

from __future__ import annotations

from typing import Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from curatio.db.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Generic repository with CRUD operations."""

    model: type[T]

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, id: UUID) -> T | None:
        """Get a single entity by ID."""
        return self._session.get(self.model, id)

    def list(
        self,
        *,
        offset: int = 0,
        limit: int = 100,
    ) -> Sequence[T]:
        """List entities with pagination."""
        stmt = select(self.model).offset(offset).limit(limit)
        return self._session.execute(stmt).scalars().all()

    def create(self, entity: T) -> T:
        """Add a new entity and flush it so its ID is assigned."""
        self._session.add(entity)
        self._session.flush()
        return entity

    def update(self, entity: T) -> T:
        """Flush pending changes to an existing entity."""
        self._session.flush()
        return entity

    def delete(self, id: UUID) -> bool:
        """Delete an entity by ID."""
        stmt = delete(self.model).where(self.model.id == id)
        result = self._session.execute(stmt)
        return result.rowcount > 0

    def exists(self, id: UUID) -> bool:
        """Check if an entity exists."""
        stmt = select(self.model.id).where(self.model.id == id)
        return self._session.execute(stmt).scalar() is not None
