"""Custom exception types for the release cadence report."""


class ReleaseCadenceError(Exception):
    """Base exception for all recoverable release cadence errors."""


class ConfigurationError(ReleaseCadenceError):
    """Raised when runtime configuration values are missing or invalid."""


class ResolutionError(ReleaseCadenceError):
    """Raised when a repository identifier cannot be resolved to an owner and name."""


class FetchError(ReleaseCadenceError):
    """Raised when a GitHub API request fails or returns an unexpected response."""


class AuthenticationError(FetchError):
    """Raised when GitHub rejects the configured access token."""


class NoQualifyingDataError(ReleaseCadenceError):
    """Raised when a repository has no intervals between x.y.0 releases."""
