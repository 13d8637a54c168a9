"""Error Hierarchy: typed, categorized exceptions for every API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - http_status is the status the global handler responds with
    - message is the exact plain-text response body

Design Decisions:
    - Single hierarchy with CountriesError base: one FastAPI handler catches all
    - Request validation is not part of this hierarchy; FastAPI raises
      RequestValidationError before a route runs
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class CountriesError(Exception):
    """Base exception for all World Countries API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_log_extra(self) -> dict:
        """Fields attached to the log record when this error is handled."""
        return {
            "error_code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(CountriesError):
    """No row matches the requested code or region."""
    def __init__(self, message: str):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )

    @classmethod
    def for_code(cls, code: str) -> "ResourceNotFoundError":
        return cls(f"Country with code {code} not found")

    @classmethod
    def for_region(cls, region: str) -> "ResourceNotFoundError":
        return cls(f"No countries found in region {region}")


class CountryConflictError(CountriesError):
    """Insert targets a code that is already in use."""
    def __init__(self, code: str):
        super().__init__(
            f"Country with code {code} already exists",
            "COUNTRY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, 400,
        )
        self.country_code = code


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageUnavailableError(CountriesError):
    """Opening, preparing or executing a statement against the store failed."""
    def __init__(self, detail: str, operation: str = "unknown"):
        super().__init__(
            f"Database error: {detail}",
            "STORAGE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500,
        )
        self.detail = detail
        self.operation = operation
