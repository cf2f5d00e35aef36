"""
Provider clients and the factory resolving a provider to a client.

Resolution happens once, when an insight is constructed, so the aggregation
code never looks at provider identity.
"""

import logging
from typing import Optional, Union

from ..config import InsightsConfig, Provider
from ..errors import UnsupportedCapabilityError
from .backoff import ExponentialBackoff
from .collector import MentionCollector
from .llm import ChatTransport, ClaudeChatTransport, OpenAIChatTransport
from .sentiment import ComprehendSentimentClient, LexiconSentimentClient, LLMSentimentClient
from .key_phrases import ComprehendKeyPhraseClient, LLMKeyPhraseClient
from .entities import ComprehendEntityClient, LLMEntityClient

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

__all__ = [
    'ExponentialBackoff',
    'MentionCollector',
    'ChatTransport',
    'OpenAIChatTransport',
    'ClaudeChatTransport',
    'LexiconSentimentClient',
    'LLMSentimentClient',
    'ComprehendSentimentClient',
    'ComprehendKeyPhraseClient',
    'LLMKeyPhraseClient',
    'ComprehendEntityClient',
    'LLMEntityClient',
    'build_chat_transport',
    'build_sentiment_client',
    'build_key_phrase_client',
    'build_entity_client',
]


def _resolve(provider: Union[Provider, str, None],
             config: Optional[InsightsConfig]) -> tuple:
    config = config or InsightsConfig()
    return config.resolve_provider(provider, default=Provider.LEXICON), config


def build_chat_transport(provider: Provider, config: InsightsConfig) -> ChatTransport:
    """
    Build the chat transport for a hosted LLM provider.

    Raises:
        ConfigurationError: If the provider's API key is not configured
        ValueError: If provider is not an LLM provider
    """
    if provider is Provider.OPENAI:
        return OpenAIChatTransport(
            api_key=config.openai_api_key,
            model=config.openai_model,
            max_retries=config.max_retries,
            timeout=config.request_timeout
        )
    if provider is Provider.CLAUDE:
        return ClaudeChatTransport(
            api_key=config.claude_api_key,
            model=config.claude_model,
            max_retries=config.max_retries,
            timeout=config.request_timeout
        )
    raise ValueError(f"{provider.value} is not a chat completion provider")


def build_sentiment_client(provider: Union[Provider, str, None] = None,
                           config: Optional[InsightsConfig] = None):
    """Build a sentiment client; unset providers use the local lexicon."""
    provider, config = _resolve(provider, config)
    logger.info(f"Building sentiment client for provider: {provider.value}")

    if provider is Provider.LEXICON:
        return LexiconSentimentClient()
    if provider is Provider.AWS:
        return ComprehendSentimentClient(region=config.aws_region, max_retries=config.max_retries)
    return LLMSentimentClient(build_chat_transport(provider, config))


def build_key_phrase_client(provider: Union[Provider, str, None] = None,
                            config: Optional[InsightsConfig] = None):
    """
    Build a key phrase client.

    Raises:
        UnsupportedCapabilityError: For the local lexicon provider
    """
    provider, config = _resolve(provider, config)
    logger.info(f"Building key phrase client for provider: {provider.value}")

    if provider is Provider.LEXICON:
        raise UnsupportedCapabilityError(
            f"Key phrase extraction is not supported for the '{provider.value}' provider"
        )
    if provider is Provider.AWS:
        return ComprehendKeyPhraseClient(region=config.aws_region, max_retries=config.max_retries)
    return LLMKeyPhraseClient(build_chat_transport(provider, config))


def build_entity_client(provider: Union[Provider, str, None] = None,
                        config: Optional[InsightsConfig] = None):
    """
    Build an entity client.

    Raises:
        UnsupportedCapabilityError: For the local lexicon provider
    """
    provider, config = _resolve(provider, config)
    logger.info(f"Building entity client for provider: {provider.value}")

    if provider is Provider.LEXICON:
        raise UnsupportedCapabilityError(
            f"Entity recognition is not supported for the '{provider.value}' provider"
        )
    if provider is Provider.AWS:
        return ComprehendEntityClient(region=config.aws_region, max_retries=config.max_retries)
    return LLMEntityClient(build_chat_transport(provider, config))
