"""Exception hierarchy for book-vault."""

from pathlib import Path


class BookVaultError(Exception):
    """Base exception for all book-vault errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all book-vault errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(BookVaultError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Store Errors
class StoreError(BookVaultError):
    """Record store could not be read or written."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Record store error at {path}: {detail}")


class RecordNotFoundError(BookVaultError):
    """Record doesn't exist."""

    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"Record not found: {record_id}")


# Import Errors
class ImportDataError(BookVaultError):
    """Import or seed data was rejected. Storage is left untouched."""

    pass


class ImportParseError(ImportDataError):
    """Import data is not valid JSON."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__("Error reading file. Please ensure it's a valid JSON file.")


class ImportFormatError(ImportDataError):
    """Import data is not an array of complete records."""

    def __init__(self, reason: str, index: int | None = None) -> None:
        self.reason = reason
        self.index = index
        super().__init__("Invalid data format. Please check your JSON file.")


# Validation Errors
class ValidationError(BookVaultError):
    """Invalid input value."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")
