"""Core types, identifiers, dates and normalization utilities."""

from .dates import format_date_range, parse_date, parse_date_range, strict_parse_date
from .exceptions import (
    CuratioError,
    DatabaseError,
    FormatError,
    ResolutionError,
    SuggestionExhaustedError,
    TransformError,
    ValidationFailure,
)
from .identifiers import (
    DOI,
    ORCID,
    ROR,
    canonicalise,
    canonicalise_orcid,
    canonicalise_ror,
    is_orcid_url,
    is_ror_url,
    is_valid_doi_format,
    normalize_doi,
)
from .labels import RorLabelResolver
from .models import (
    AffiliationData,
    InstitutionData,
    PersonData,
    ResolvedLabel,
    ResourceSummary,
    Violation,
)
from .normalization import (
    clean_string,
    format_person_name,
    normalize_text,
    pascal_to_kebab,
    split_person_name,
)
from .types import (
    AgentKind,
    ContributorType,
    DateType,
    DescriptionType,
    FunderIdentifierType,
    IdentifierScheme,
    NameType,
    RelatedIdentifierType,
    RelationType,
    ResourceTypeGeneral,
    TitleType,
    lookup_enum,
)

__all__ = [
    # Types
    "AgentKind",
    "ContributorType",
    "DateType",
    "DescriptionType",
    "FunderIdentifierType",
    "IdentifierScheme",
    "NameType",
    "RelatedIdentifierType",
    "RelationType",
    "ResourceTypeGeneral",
    "TitleType",
    "lookup_enum",
    # Identifiers
    "DOI",
    "ORCID",
    "ROR",
    "RorLabelResolver",
    "canonicalise",
    "canonicalise_orcid",
    "canonicalise_ror",
    "is_orcid_url",
    "is_ror_url",
    "is_valid_doi_format",
    "normalize_doi",
    # Dates
    "format_date_range",
    "parse_date",
    "parse_date_range",
    "strict_parse_date",
    # Models
    "AffiliationData",
    "InstitutionData",
    "PersonData",
    "ResolvedLabel",
    "ResourceSummary",
    "Violation",
    # Normalization
    "clean_string",
    "format_person_name",
    "normalize_text",
    "pascal_to_kebab",
    "split_person_name",
    # Exceptions
    "CuratioError",
    "DatabaseError",
    "FormatError",
    "ResolutionError",
    "SuggestionExhaustedError",
    "TransformError",
    "ValidationFailure",
]
