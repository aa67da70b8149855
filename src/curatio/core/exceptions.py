"""Custom exception hierarchy for curatio."""

from typing import Any


class CuratioError(Exception):
    """Base exception for all curatio errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationFailure(CuratioError):
    """Document does not conform to the DataCite schema.

    Carries every violation found, not only the first one.
    """

    def __init__(
        self,
        message: str,
        schema_version: str,
        errors: list[dict[str, Any]],
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.schema_version = schema_version
        self.errors = errors

    def to_response(self) -> dict[str, Any]:
        """Render the failure as an API error payload."""
        return {
            "message": self.message,
            "schema_version": self.schema_version,
            "errors": self.errors,
        }


class FormatError(CuratioError):
    """Malformed DOI or date input."""

    def __init__(
        self,
        message: str,
        value: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.value = value


class ResolutionError(CuratioError):
    """Required reference data is missing, e.g. an unseeded vocabulary."""

    pass


class TransformError(CuratioError):
    """Imported document has a structural problem that cannot be defaulted."""

    pass


class SuggestionExhaustedError(CuratioError):
    """No free DOI found within the configured number of attempts."""

    def __init__(
        self,
        message: str,
        base_doi: str,
        attempts: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.base_doi = base_doi
        self.attempts = attempts


class DatabaseError(CuratioError):
    """Database operation failed."""

    pass
