"""Custom exception hierarchy for lendtrack."""


class LendTrackError(Exception):
    """Base exception for all lendtrack errors."""


class LoanNotFoundError(LendTrackError):
    """Raised when a referenced loan does not exist in the book."""


class InvalidLoanStateError(LendTrackError):
    """Raised when a loan cannot accept the requested change."""


class ConfigurationError(LendTrackError):
    """Raised when configuration is invalid or missing."""


class ImportFormatError(LendTrackError):
    """Raised when an import file cannot be read as a loan collection."""
