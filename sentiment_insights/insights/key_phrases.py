"""
Key phrase insight extraction.

This module asks a provider client for key phrases across a batch of entries
and summarizes how often, by whom and with what sentiment each phrase was
mentioned.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Union

from ..clients import build_key_phrase_client
from ..config import InsightsConfig, Provider
from ..models import Entry, KeyPhraseReport
from ..normalization import normalize_entries
from .mentions import PhraseAggregator

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class KeyPhraseInsight:
    """
    Extracts and summarizes key phrases from survey responses.

    Attributes:
        provider_client: Client exposing extract_batch(entries, question=..., ...)
        aggregator: PhraseAggregator computing the phrase summaries
    """

    def __init__(
        self,
        provider: Union[Provider, str, None] = None,
        provider_client: Any = None,
        config: Optional[InsightsConfig] = None
    ):
        """
        Initialize the key phrase insight.

        Raises:
            UnsupportedCapabilityError: If the provider resolves to the local lexicon
            UnknownProviderError: If provider is not a supported identifier
        """
        self.config = config or InsightsConfig()
        effective_provider = self.config.resolve_provider(provider, default=Provider.LEXICON)

        if provider_client is None:
            provider_client = build_key_phrase_client(effective_provider, self.config)

        self.provider_client = provider_client
        self.aggregator = PhraseAggregator()

    def extract(
        self,
        entries: Iterable[Union[Entry, Dict[str, Any]]],
        question: Optional[str] = None,
        key_phrase_prompt: Optional[str] = None,
        sentiment_prompt: Optional[str] = None
    ) -> KeyPhraseReport:
        """
        Extract key phrases and build a summarized report.

        Args:
            entries: Entries or mappings with 'answer' and optional 'segment'
            question: Optional question text for context
            key_phrase_prompt: Custom phrase extraction prompt (LLM providers only)
            sentiment_prompt: Custom sentiment prompt (LLM providers only)

        Returns:
            KeyPhraseReport with enriched phrases and the provider's responses
        """
        entries = normalize_entries(entries)

        options = {}
        if key_phrase_prompt is not None:
            options['key_phrase_prompt'] = key_phrase_prompt
        if sentiment_prompt is not None:
            options['sentiment_prompt'] = sentiment_prompt

        raw_result = self.provider_client.extract_batch(entries, question=question, **options)
        return self.aggregator.aggregate(raw_result)
