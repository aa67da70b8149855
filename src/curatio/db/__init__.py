"""Database layer."""

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, create_engine, create_session_factory
from .models import (
    AffiliationModel,
    InstitutionModel,
    PersonModel,
    PublisherModel,
    ResourceContributorModel,
    ResourceCreatorModel,
    ResourceModel,
)
from .repositories import (
    BaseRepository,
    InstitutionRepository,
    LanguageRepository,
    PersonRepository,
    PublisherRepository,
    ResourceRepository,
    ResourceTypeRepository,
)
from .seed import seed_reference_data
from .session import DatabaseManager

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "create_engine",
    "create_session_factory",
    # Models
    "AffiliationModel",
    "InstitutionModel",
    "PersonModel",
    "PublisherModel",
    "ResourceContributorModel",
    "ResourceCreatorModel",
    "ResourceModel",
    # Repositories
    "BaseRepository",
    "InstitutionRepository",
    "LanguageRepository",
    "PersonRepository",
    "PublisherRepository",
    "ResourceRepository",
    "ResourceTypeRepository",
    # Seeding
    "seed_reference_data",
    # Session
    "DatabaseManager",
]
