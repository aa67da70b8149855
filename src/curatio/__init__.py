"""Curatio - DataCite metadata interchange: import, export, validation and DOI suggestion."""

from curatio.config import CuratioSettings, configure_logging, get_settings
from curatio.core.dates import parse_date, parse_date_range
from curatio.core.exceptions import CuratioError, TransformError, ValidationFailure
from curatio.core.identifiers import canonicalise, is_orcid_url, is_ror_url
from curatio.export.json_exporter import DataCiteJsonExporter
from curatio.export.xml_exporter import DataCiteXmlExporter
from curatio.services.doi_suggestion import DoiSuggestionService
from curatio.services.importer import DataCiteTransformer
from curatio.validation.validator import DataCiteSchemaValidator

__version__ = "0.1.0"
__all__ = [
    # Configuration
    "CuratioSettings",
    "configure_logging",
    "get_settings",
    # Identifiers and dates
    "canonicalise",
    "is_orcid_url",
    "is_ror_url",
    "parse_date",
    "parse_date_range",
    # Interchange
    "DataCiteJsonExporter",
    "DataCiteTransformer",
    "DataCiteXmlExporter",
    "DataCiteSchemaValidator",
    "DoiSuggestionService",
    # Errors
    "CuratioError",
    "TransformError",
    "ValidationFailure",
    # Version
    "__version__",
]
