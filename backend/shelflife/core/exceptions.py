"""Typed exception hierarchy for the shelf-life domain.

Every error carries a machine-readable ``code`` and the HTTP status the API
layer maps it to, so callers catch by type and never by message text.

    ShelfLifeError
    +-- ValidationError          400  VALIDATION_ERROR
    +-- DateError                400  INVALID_DATE
    |   +-- ExpiryComputationError   400  EXPIRY_COMPUTATION_ERROR
    +-- NotFoundError            404  NOT_FOUND
    +-- DuplicateKeyError        409  DUPLICATE_KEY
    +-- DuplicateRecordError     409  DUPLICATE_RECORD
    +-- StoreUnavailableError    503  STORE_UNAVAILABLE
"""

from typing import Any


class ShelfLifeError(Exception):
    """Base class for all domain errors."""

    code: str = "SHELF_LIFE_ERROR"
    status_code: int = 500

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        """Structured error body returned to API clients."""
        payload: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(ShelfLifeError):
    """A required field is missing or out of range."""

    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, field: str, message: str, details: str | None = None) -> None:
        super().__init__(message, details=details or f"field: {field}")
        self.field = field


class DateError(ShelfLifeError):
    """A date value could not be parsed or is inconsistent."""

    code = "INVALID_DATE"
    status_code = 400

    def __init__(self, value: Any, message: str | None = None) -> None:
        super().__init__(
            message or f"Invalid calendar date: {value!r}",
            details="expected ISO format YYYY-MM-DD",
        )
        self.value = value


class ExpiryComputationError(DateError):
    """Expiry parameters that cannot yield a meaningful classification."""

    code = "EXPIRY_COMPUTATION_ERROR"

    def __init__(self, message: str) -> None:
        ShelfLifeError.__init__(self, message)
        self.value = None


class NotFoundError(ShelfLifeError):
    """Referenced entity does not exist."""

    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, entity: str, key: str) -> None:
        super().__init__(f"{entity} {key!r} not found")
        self.entity = entity
        self.key = key


class DuplicateKeyError(ShelfLifeError):
    """A product with the same SKU already exists."""

    code = "DUPLICATE_KEY"
    status_code = 409

    def __init__(self, sku: str) -> None:
        super().__init__(
            f"SKU {sku!r} already exists",
            details="use a different SKU code",
        )
        self.sku = sku


class DuplicateRecordError(ShelfLifeError):
    """A production record with the same (sku, production_date) already exists."""

    code = "DUPLICATE_RECORD"
    status_code = 409

    def __init__(self, sku: str, production_date: str, existing: Any = None) -> None:
        super().__init__(
            "Duplicate record",
            details=(
                f"a record for SKU {sku} produced on {production_date} already exists"
            ),
        )
        self.sku = sku
        self.production_date = production_date
        self.existing = existing


class StoreUnavailableError(ShelfLifeError):
    """The persistence layer could not be reached or timed out."""

    code = "STORE_UNAVAILABLE"
    status_code = 503

    def __init__(self, details: str | None = None) -> None:
        super().__init__("Storage is unavailable", details=details)
