"""DataCite 4.6 JSON Schema validation."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from importlib import resources
from typing import Any

from jsonschema import Draft7Validator, exceptions

from curatio.config import CuratioSettings, get_settings
from curatio.core.exceptions import ValidationFailure
from curatio.core.models import Violation

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "4.6"
SCHEMA_RESOURCE = "datacite-v4.6.json"

_REQUIRED_PROPERTY = re.compile(r"^'(?P<name>[^']+)' is a required property")

# Keyword -> human-readable message template
_HUMAN_MESSAGES = {
    "required": "Required field '{field}' is missing",
    "type": "Field '{field}' has an invalid type",
    "enum": "Field '{field}' has an invalid value",
    "const": "Field '{field}' has an invalid value",
    "minimum": "Field '{field}' is out of range",
    "maximum": "Field '{field}' is out of range",
    "pattern": "Field '{field}' does not match the expected pattern",
    "minLength": "Field '{field}' has an invalid length",
    "maxLength": "Field '{field}' has an invalid length",
    "minItems": "Field '{field}' has an invalid number of items",
    "maxItems": "Field '{field}' has an invalid number of items",
    "uniqueItems": "Field '{field}' contains duplicate items",
    "format": "Field '{field}' has an invalid format (e.g., date, URI)",
    "additionalProperties": "Field '{field}' contains unexpected properties",
}

_MISSING_IDENTIFIERS = {
    "path": "/identifiers",
    "message": (
        "Required field 'identifiers' is missing. "
        "DOI is required for DataCite registration. (Path: /identifiers)"
    ),
    "keyword": "required",
    "context": {
        "raw_message": (
            "The identifiers field is required for DataCite registration but is missing."
        ),
    },
}


def load_schema() -> dict[str, Any]:
    """Read the bundled DataCite 4.6 schema."""
    source = resources.files("curatio.validation").joinpath("schemas", SCHEMA_RESOURCE)
    return json.loads(source.read_text(encoding="utf-8"))


def _field_name(path: str) -> str:
    if path in ("", "/"):
        return "root"
    segments = path.strip("/").split("/")
    last = segments[-1]
    if last.isdigit() and len(segments) > 1:
        return f"{segments[-2]}[{last}]"
    return last or "unknown"


def _pointer(parts) -> str:
    return "/" + "/".join(str(p) for p in parts)


class DataCiteSchemaValidator:
    """
    Validate DataCite JSON documents against the 4.6 schema.

    Every violation is reported, up to ``validation_max_errors``. In strict
    mode the document must also carry ``identifiers``, as required for
    registration; drafts without a DOI are valid otherwise.
    """

    _validator: Draft7Validator | None = None

    def __init__(self, settings: CuratioSettings | None = None) -> None:
        self._settings = settings or get_settings()

    @classmethod
    def schema_validator(cls) -> Draft7Validator:
        if cls._validator is None:
            schema = load_schema()
            Draft7Validator.check_schema(schema)
            cls._validator = Draft7Validator(schema)
        return cls._validator

    def validate(self, document: Mapping[str, Any], strict_mode: bool = False) -> bool:
        """
        Validate a DataCite document.

        Args:
            document: ``{"data": {"attributes": ...}}`` envelope or bare attributes
            strict_mode: Also require a non-empty ``identifiers`` list

        Returns:
            True when the document conforms

        Raises:
            ValidationFailure: With every violation found
        """
        attributes = self._attributes(document)
        errors = self.collect_errors(attributes)

        if strict_mode and not attributes.get("identifiers"):
            errors.append(dict(_MISSING_IDENTIFIERS))

        if errors:
            self._log_failure(attributes, errors)
            raise ValidationFailure(
                f"JSON export validation failed against DataCite Schema version {SCHEMA_VERSION}",
                schema_version=SCHEMA_VERSION,
                errors=errors,
            )
        return True

    def is_valid(
        self,
        document: Mapping[str, Any],
        errors_out: list[dict[str, Any]] | None = None,
        strict_mode: bool = False,
    ) -> bool:
        """Non-raising variant of :meth:`validate`; violations go into ``errors_out``."""
        try:
            return self.validate(document, strict_mode=strict_mode)
        except ValidationFailure as e:
            if errors_out is not None:
                errors_out.extend(e.errors)
            return False

    def collect_errors(self, attributes: Mapping[str, Any]) -> list[dict[str, Any]]:
        """Schema violations for bare attributes, capped at the configured maximum."""
        errors = []
        for error in self.schema_validator().iter_errors(attributes):
            errors.append(self._format_error(error))
            if len(errors) >= self._settings.validation_max_errors:
                break
        return errors

    @staticmethod
    def _attributes(document: Any) -> Mapping[str, Any]:
        if not isinstance(document, Mapping):
            return {}
        data = document.get("data")
        if isinstance(data, Mapping) and isinstance(data.get("attributes"), Mapping):
            return data["attributes"]
        return document

    @staticmethod
    def _format_error(error: exceptions.ValidationError) -> dict[str, Any]:
        parts = list(error.absolute_path)
        if error.validator == "required":
            match = _REQUIRED_PROPERTY.match(error.message)
            if match:
                parts.append(match.group("name"))
        path = _pointer(parts)

        template = _HUMAN_MESSAGES.get(str(error.validator), "Validation error in field '{field}'")
        human = template.format(field=_field_name(path))
        return Violation(
            path=path,
            message=f"{human} (Path: {path})",
            keyword=str(error.validator),
            context={"raw_message": error.message},
        ).model_dump()

    @staticmethod
    def _log_failure(attributes: Mapping[str, Any], errors: list[dict[str, Any]]) -> None:
        doi = attributes.get("doi") or "unknown"
        summary = [{"path": e["path"], "message": e["message"]} for e in errors[:10]]
        logger.error(
            f"DataCite JSON Schema validation failed: doi={doi} "
            f"schema_version={SCHEMA_VERSION} error_count={len(errors)} errors={summary}"
        )
