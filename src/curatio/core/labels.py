"""ROR label lookup backed by a local reference dataset."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from curatio.core.identifiers import canonicalise_ror
from curatio.core.models import ResolvedLabel

logger = logging.getLogger(__name__)


class RorLabelResolver:
    """
    Resolve human-readable labels for ROR identifiers.

    The dataset is a JSON list of ``{"prefLabel": ..., "rorId": ...}``
    entries. It is read lazily on first use; a missing or malformed file
    leaves the resolver with an empty map instead of failing.
    """

    def __init__(self, dataset_path: Path | str | None = None) -> None:
        self._dataset_path = Path(dataset_path) if dataset_path else None
        self._labels: dict[str, str] | None = None

    @property
    def labels(self) -> dict[str, str]:
        """Canonical ROR URL to preferred label."""
        if self._labels is None:
            self._labels = self._load()
        return self._labels

    def _load(self) -> dict[str, str]:
        if self._dataset_path is None:
            return {}
        try:
            entries = json.loads(self._dataset_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"ROR label dataset unavailable at {self._dataset_path}: {e}")
            return {}

        if not isinstance(entries, list):
            logger.warning(f"ROR label dataset at {self._dataset_path} is not a list")
            return {}

        labels: dict[str, str] = {}
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            ror_id = canonicalise_ror(entry.get("rorId"))
            label = entry.get("prefLabel")
            if ror_id and isinstance(label, str) and label.strip():
                labels[ror_id] = label.strip()
        logger.debug(f"Loaded {len(labels)} ROR labels")
        return labels

    def lookup(self, raw: str | None) -> str | None:
        """Return the dataset label for an identifier, or None."""
        ror_id = canonicalise_ror(raw)
        if ror_id is None:
            return None
        return self.labels.get(ror_id)

    def resolve_with_fallback(
        self,
        raw: str | None,
        fallback_label: str | None = None,
    ) -> ResolvedLabel | None:
        """
        Resolve an identifier to ``(id, label)``.

        Args:
            raw: Bare ROR ID or URL
            fallback_label: Label used when the dataset has no entry

        Returns:
            The canonical ID with the dataset label, else the fallback label,
            else the canonical ID itself as label. None if the input is not a
            ROR identifier.
        """
        ror_id = canonicalise_ror(raw)
        if ror_id is None:
            return None

        label = self.labels.get(ror_id)
        if label is None:
            fallback = (fallback_label or "").strip()
            label = fallback or ror_id
        return ResolvedLabel(id=ror_id, label=label)
