"""DataCite JSON exporter."""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy.orm import Session

from curatio.config import CuratioSettings
from curatio.db.models.resource import ResourceModel
from curatio.export.mapping import DataCiteMapping


class DataCiteJsonExporter:
    """
    Render a resource as a DataCite REST API document.

    Usage:
        exporter = DataCiteJsonExporter(settings)
        document = exporter.export(resource)
        # {"data": {"type": "dois", "attributes": {...}}}
    """

    def __init__(
        self,
        settings: CuratioSettings | None = None,
        session: Session | None = None,
        mapping: DataCiteMapping | None = None,
    ) -> None:
        self._mapping = mapping or DataCiteMapping(settings, session)

    def export(self, resource: ResourceModel) -> dict[str, Any]:
        """Build the ``{"data": {"type": "dois", "attributes": ...}}`` document."""
        return {
            "data": {
                "type": "dois",
                "attributes": self._mapping.build_attributes(resource),
            }
        }

    def export_string(self, resource: ResourceModel, *, indent: int | None = 2) -> str:
        """Serialize :meth:`export` to a JSON string."""
        return json.dumps(self.export(resource), indent=indent, ensure_ascii=False)
