"""
Domain-specific exception hierarchy for the flex time balance application.
"""


class FlexBalanceError(Exception):
    """Base class for all application-level errors."""


class ConfigurationError(FlexBalanceError):
    """Raised when the configuration file is missing, unreadable or invalid."""


class LedgerError(FlexBalanceError):
    """Raised when logged time cannot be fetched from the ledger or parsed."""


class InvalidDateRangeError(FlexBalanceError):
    """Raised when a date range ends before it starts."""
