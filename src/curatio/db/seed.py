"""Reference data seeding for resource types, languages and the default publisher."""

from __future__ import annotations

import logging
import re

from sqlalchemy.orm import Session

from curatio.config import CuratioSettings, get_settings
from curatio.core.normalization import slugify_label
from curatio.core.types import ResourceTypeGeneral
from curatio.db.models.reference import LanguageModel, PublisherModel, ResourceTypeModel
from curatio.db.repositories.reference import (
    LanguageRepository,
    PublisherRepository,
    ResourceTypeRepository,
)

logger = logging.getLogger(__name__)

LANGUAGES: dict[str, str] = {
    "en": "English",
    "de": "German",
    "fr": "French",
    "es": "Spanish",
    "it": "Italian",
    "nl": "Dutch",
    "pt": "Portuguese",
    "ru": "Russian",
    "zh": "Chinese",
    "ja": "Japanese",
}


def resource_type_label(term: ResourceTypeGeneral) -> str:
    """``BookChapter`` -> ``Book Chapter``."""
    return re.sub(r"(?<=[a-z])(?=[A-Z])", " ", term.value)


def seed_reference_data(
    session: Session,
    settings: CuratioSettings | None = None,
    *,
    with_default_publisher: bool = True,
) -> None:
    """
    Insert missing vocabulary rows. Safe to run repeatedly.

    Args:
        session: Open session; the caller commits
        settings: Supplies the default publisher fields
        with_default_publisher: Also create a publisher flagged as default
    """
    settings = settings or get_settings()

    types = ResourceTypeRepository(session)
    created = 0
    for term in ResourceTypeGeneral:
        label = resource_type_label(term)
        if types.get_by_slug(slugify_label(label)) is None:
            session.add(ResourceTypeModel(name=label, slug=slugify_label(label)))
            created += 1

    languages = LanguageRepository(session)
    for code, name in LANGUAGES.items():
        if languages.get_by_code(code) is None:
            session.add(LanguageModel(code=code, name=name))
            created += 1

    publishers = PublisherRepository(session)
    if with_default_publisher and publishers.get_default() is None:
        session.add(
            PublisherModel(
                name=settings.fallback_publisher_name,
                identifier=settings.fallback_publisher_identifier,
                identifier_scheme=settings.fallback_publisher_identifier_scheme,
                scheme_uri=settings.fallback_publisher_scheme_uri,
                language=settings.fallback_publisher_language,
                is_default=True,
            )
        )
        created += 1

    session.flush()
    logger.info(f"Seeded {created} reference data rows")
