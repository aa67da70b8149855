"""Database session management."""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from curatio.config import CuratioSettings, get_settings
from curatio.core.exceptions import DatabaseError
from curatio.db.base import Base, create_engine, create_session_factory


class DatabaseManager:
    """Manages database connections and sessions.

    ``session()`` is the unit of work an import runs in: it commits when the
    block completes and rolls back on any error.
    """

    def __init__(self, database_url: str, echo: bool = False) -> None:
        self._database_url = database_url
        self._echo = echo
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @classmethod
    def from_settings(cls, settings: CuratioSettings | None = None) -> "DatabaseManager":
        """Build a manager from settings; ``debug`` echoes SQL."""
        settings = settings or get_settings()
        return cls(settings.database_url, echo=settings.debug)

    @property
    def engine(self) -> Engine:
        """Get the database engine, creating it if necessary."""
        if self._engine is None:
            self._engine = create_engine(self._database_url, self._echo)
        return self._engine

    @property
    def session_factory(self) -> sessionmaker[Session]:
        """Get the session factory, creating it if necessary."""
        if self._session_factory is None:
            self._session_factory = create_session_factory(self.engine)
        return self._session_factory

    def create_all(self) -> None:
        """Create all tables that do not exist yet."""
        Base.metadata.create_all(self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Get a session that commits on success and rolls back on error."""
        with self.session_factory() as session:
            try:
                yield session
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise DatabaseError(f"Database operation failed: {e}") from e
            except Exception:
                session.rollback()
                raise

    def close(self) -> None:
        """Close the database engine."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None

    def __enter__(self) -> "DatabaseManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
