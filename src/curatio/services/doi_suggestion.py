"""Next-DOI suggestion from known suffix conventions."""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import NamedTuple
from uuid import UUID

from sqlalchemy.orm import Session

from curatio.config import CuratioSettings, get_settings
from curatio.core import identifiers
from curatio.core.exceptions import SuggestionExhaustedError
from curatio.core.models import ResourceSummary
from curatio.db.repositories.resource import ResourceRepository

logger = logging.getLogger(__name__)

DOI_PARTS_PATTERN = re.compile(r"^(10\.\d+)/(.+)$")
PROJECT_PATTERN = re.compile(r"^([a-z0-9-]+)", re.IGNORECASE)
TRAILING_NUMBER_PATTERN = re.compile(r"\.(\d+)$")


class SuffixShape(NamedTuple):
    """A DOI suffix convention whose last group is the running number."""

    name: str
    pattern: re.Pattern[str]
    min_width: int


# Tried in order; the first full match wins
SUFFIX_SHAPES: tuple[SuffixShape, ...] = (
    SuffixShape("project.year.number", re.compile(r"([a-z0-9-]+)\.(\d{4})\.(\d+)", re.I), 3),
    SuffixShape(
        "project.letter.year.number",
        re.compile(r"([a-z0-9-]+)\.([a-z])\.(\d{4})\.(\d+)", re.I),
        3,
    ),
    SuffixShape("gfz.code.year.number", re.compile(r"gfz\.([a-z0-9]+)\.(\d{4})\.(\d+)", re.I), 3),
    SuffixShape(
        "gfz.section.section.year.number",
        re.compile(r"gfz\.(\d+)\.(\d+)\.(\d{4})\.(\d+)", re.I),
        3,
    ),
    SuffixShape("projectdb.number", re.compile(r"([a-z0-9]+db)\.(\d+)", re.I), 0),
    SuffixShape(
        "project-suffix.number.number",
        re.compile(r"([a-z]+-[a-z]+)\.(\d+)\.(\d+)", re.I),
        0,
    ),
    SuffixShape("igets.station.level.number", re.compile(r"(igets\.[a-z]+\.l\d+)\.(\d+)", re.I), 3),
)


def normalize_doi(raw: str | None) -> str:
    """Trim and strip a ``https://doi.org/`` style resolver prefix."""
    return identifiers.normalize_doi(raw)


def is_valid_doi_format(raw: str | None) -> bool:
    """True for ``10.<registrant>/<suffix>``; ``doi:`` prefixed forms are rejected."""
    return identifiers.is_valid_doi_format(raw)


class DoiSuggestionService:
    """
    Suggest the next free DOI after a given one.

    The suffix is matched against :data:`SUFFIX_SHAPES`; its trailing number
    is incremented and zero-padded back to its original width, skipping
    DOIs that are already stored. Unknown suffixes get a
    ``<project>.<year>.<NNN>`` suggestion instead.
    """

    def __init__(self, session: Session, settings: CuratioSettings | None = None) -> None:
        self._settings = settings or get_settings()
        self._resources = ResourceRepository(session)

    normalize_doi = staticmethod(normalize_doi)
    is_valid_doi_format = staticmethod(is_valid_doi_format)

    def check_doi_exists(self, doi: str, exclude_id: UUID | None = None) -> bool:
        """Check whether a DOI is stored, optionally ignoring the resource being edited."""
        return self._resources.doi_exists(normalize_doi(doi), exclude_id=exclude_id)

    def get_last_assigned_doi(self) -> str | None:
        """DOI of the most recently created resource that has one."""
        resource = self._resources.get_last_assigned()
        return resource.doi if resource else None

    def get_resource_by_doi(
        self,
        doi: str,
        exclude_id: UUID | None = None,
    ) -> ResourceSummary | None:
        """Summary of the resource holding ``doi``, or None."""
        resource = self._resources.get_by_doi(normalize_doi(doi))
        if resource is None or (exclude_id is not None and resource.id == exclude_id):
            return None
        return ResourceSummary(id=resource.id, title=resource.main_title)

    def suggest_next_doi(self, last_doi: str) -> str | None:
        """
        Suggest the DOI following ``last_doi``.

        Args:
            last_doi: A DOI, bare or as a resolver URL

        Returns:
            The suggested DOI, or None when ``last_doi`` is not a DOI

        Raises:
            SuggestionExhaustedError: If every candidate within the attempt
                limit is already taken
        """
        match = DOI_PARTS_PATTERN.match(normalize_doi(last_doi))
        if match is None:
            return None
        prefix, suffix = match.groups()

        for shape in SUFFIX_SHAPES:
            shape_match = shape.pattern.fullmatch(suffix)
            if shape_match is None:
                continue
            number_group = len(shape_match.groups())
            head = suffix[: shape_match.start(number_group)]
            digits = shape_match.group(number_group)
            logger.debug(f"Suffix '{suffix}' matches shape {shape.name}")
            return self._find_next_available(
                prefix,
                head,
                int(digits),
                max(len(digits), shape.min_width),
            )

        return self._fallback_suggestion(prefix, suffix)

    def _find_next_available(self, prefix: str, head: str, start: int, width: int) -> str:
        max_attempts = self._settings.doi_suggestion_max_attempts
        number = start + 1
        for _ in range(max_attempts):
            candidate = f"{prefix}/{head}{str(number).zfill(width)}"
            if not self._resources.doi_exists(candidate):
                return candidate
            number += 1

        base_doi = f"{prefix}/{head}{str(start).zfill(width)}"
        logger.warning(f"No free DOI after {max_attempts} attempts starting from {base_doi}")
        raise SuggestionExhaustedError(
            f"Could not find an available DOI after {max_attempts} attempts",
            base_doi=base_doi,
            attempts=max_attempts,
        )

    def _fallback_suggestion(self, prefix: str, suffix: str) -> str:
        year = date.today().year
        project_match = PROJECT_PATTERN.match(suffix)
        if project_match is None:
            return f"{prefix}/new.{year}.001"

        project = project_match.group(1).lower()
        base = f"{prefix}/{project}.{year}."
        highest = 0
        for doi in self._resources.find_dois_starting_with(base):
            if number_match := TRAILING_NUMBER_PATTERN.search(doi):
                highest = max(highest, int(number_match.group(1)))
        return f"{base}{highest + 1:03d}"
