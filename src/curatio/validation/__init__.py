"""DataCite schema validation."""

from .validator import SCHEMA_VERSION, DataCiteSchemaValidator

__all__ = ["SCHEMA_VERSION", "DataCiteSchemaValidator"]
