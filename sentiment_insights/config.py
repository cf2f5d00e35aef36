"""
Configuration management for provider selection and client settings.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import UnknownProviderError


class Provider(Enum):
    """Supported NLP providers."""
    OPENAI = "openai"
    AWS = "aws"
    CLAUDE = "claude"
    LEXICON = "sentimental"

    @classmethod
    def parse(cls, value: Union['Provider', str, None]) -> Optional['Provider']:
        """
        Resolve a provider identifier.

        Accepts a Provider member or a case-insensitive name. "local",
        "lexicon" and "local-lexicon" are aliases of the local lexicon
        provider. None is passed through so callers can fall back to
        their own default.

        Raises:
            UnknownProviderError: If the identifier is not recognized
        """
        if value is None or isinstance(value, cls):
            return value

        name = str(value).strip().lower()
        if name in _LEXICON_ALIASES:
            return cls.LEXICON
        for provider in cls:
            if provider.value == name:
                return provider
        raise UnknownProviderError(f"Unsupported provider: {value}")


_LEXICON_ALIASES = {"local", "lexicon", "local-lexicon"}


@dataclass
class InsightsConfig:
    """Configuration parameters shared by the insight facades and provider clients."""

    # Provider selection; None means each insight uses its own default
    provider: Optional[Provider] = None

    # Hosted API credentials
    openai_api_key: Optional[str] = None
    claude_api_key: Optional[str] = None

    # AWS configuration
    aws_region: str = "us-east-1"

    # Model selection
    openai_model: str = "gpt-3.5-turbo"
    claude_model: str = "claude-3-haiku-20240307"

    # Transport behaviour
    max_retries: int = 3
    request_timeout: float = 30.0

    # Number of extreme comments reported by sentiment analysis
    top_count: int = 5

    def __post_init__(self):
        """Normalize the provider and validate numeric settings."""
        self.provider = Provider.parse(self.provider)

        if self.max_retries < 0:
            raise ValueError("max_retries cannot be negative")

        if self.top_count < 0:
            raise ValueError("top_count cannot be negative")

        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")

    @classmethod
    def from_environment(cls) -> 'InsightsConfig':
        """Create configuration from environment variables."""
        return cls(
            provider=os.getenv('SENTIMENT_INSIGHTS_PROVIDER') or None,
            openai_api_key=os.getenv('OPENAI_API_KEY'),
            claude_api_key=os.getenv('CLAUDE_API_KEY'),
            aws_region=os.getenv('AWS_REGION', 'us-east-1'),
            openai_model=os.getenv('OPENAI_MODEL', 'gpt-3.5-turbo'),
            claude_model=os.getenv('CLAUDE_MODEL', 'claude-3-haiku-20240307'),
            max_retries=int(os.getenv('SENTIMENT_INSIGHTS_MAX_RETRIES', '3')),
            top_count=int(os.getenv('SENTIMENT_INSIGHTS_TOP_COUNT', '5'))
        )

    def resolve_provider(
        self,
        provider: Union[Provider, str, None] = None,
        default: Provider = Provider.LEXICON
    ) -> Provider:
        """Pick the explicit provider, then the configured one, then the default."""
        return Provider.parse(provider) or self.provider or default
