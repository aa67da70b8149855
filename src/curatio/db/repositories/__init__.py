"""Repository implementations."""

from .agent import InstitutionRepository, PersonRepository
from .base import BaseRepository
from .reference import LanguageRepository, PublisherRepository, ResourceTypeRepository
from .resource import ResourceRepository

__all__ = [
    "BaseRepository",
    "InstitutionRepository",
    "LanguageRepository",
    "PersonRepository",
    "PublisherRepository",
    "ResourceRepository",
    "ResourceTypeRepository",
]
