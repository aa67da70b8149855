"""Business logic services."""

from .affiliations import AffiliationService
from .doi_suggestion import DoiSuggestionService
from .entities import EntityResolver, is_same_person
from .importer import DataCiteTransformer

__all__ = [
    "AffiliationService",
    "DataCiteTransformer",
    "DoiSuggestionService",
    "EntityResolver",
    "is_same_person",
]
