"""
Error types raised by the sentiment insights package.

The aggregation core never raises on provider output; these errors cover
provider selection at construction time and provider transport failures.
"""

from typing import Optional


class SentimentInsightsError(Exception):
    """Base class for all package errors."""


class UnsupportedCapabilityError(SentimentInsightsError, NotImplementedError):
    """Requested insight cannot be produced by the selected provider."""


class UnknownProviderError(SentimentInsightsError, ValueError):
    """Provider identifier is not one of the supported providers."""


class ConfigurationError(SentimentInsightsError, ValueError):
    """A provider client is missing required configuration."""


class ProviderTransportError(SentimentInsightsError):
    """
    A provider call failed after all retry attempts.

    Attributes:
        provider: Name of the provider that failed
        status_code: HTTP status code, when the failure came from an HTTP API
        error_code: Service error code, when the failure came from AWS
    """

    def __init__(
        self,
        message: str,
        provider: str = "",
        status_code: Optional[int] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.error_code = error_code
