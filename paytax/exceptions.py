"""Custom exceptions for PayTax."""


class TaxComputationError(Exception):
    """Base exception for tax computation errors."""


class DataValidationError(TaxComputationError):
    """Raised when input data fails validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error on '{field}': {message}")


class BracketScheduleError(TaxComputationError):
    """Raised when a bracket schedule has overlapping or inverted bands."""

    def __init__(self, message: str):
        super().__init__(f"Invalid bracket schedule: {message}")


class DataImportError(TaxComputationError):
    """Raised when bracket or profile import data is malformed."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Import error from {source}: {message}")
