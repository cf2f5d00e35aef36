"""
Named entity insight extraction.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Union

from ..clients import build_entity_client
from ..config import InsightsConfig, Provider
from ..models import Entry, EntityReport
from ..normalization import normalize_entries
from .mentions import EntityAggregator

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class EntityInsight:
    """
    Extracts and summarizes named entities from survey responses.

    Entities with the same lower-cased text but different types are kept
    apart; merging is left to the provider client.
    """

    def __init__(
        self,
        provider: Union[Provider, str, None] = None,
        provider_client: Any = None,
        config: Optional[InsightsConfig] = None
    ):
        """
        Initialize the entity insight.

        Raises:
            UnsupportedCapabilityError: If the provider resolves to the local lexicon
            UnknownProviderError: If provider is not a supported identifier
        """
        self.config = config or InsightsConfig()
        effective_provider = self.config.resolve_provider(provider, default=Provider.LEXICON)

        if provider_client is None:
            provider_client = build_entity_client(effective_provider, self.config)

        self.provider_client = provider_client
        self.aggregator = EntityAggregator()

    def extract(
        self,
        entries: Iterable[Union[Entry, Dict[str, Any]]],
        question: Optional[str] = None,
        prompt: Optional[str] = None
    ) -> EntityReport:
        """
        Extract named entities and build a summarized report.

        Args:
            entries: Entries or mappings with 'answer' and optional 'segment'
            question: Optional question text for context
            prompt: Custom entity extraction prompt (LLM providers only)

        Returns:
            EntityReport with enriched entities and the provider's responses
        """
        entries = normalize_entries(entries)
        options = {'prompt': prompt} if prompt is not None else {}
        raw_result = self.provider_client.extract_batch(entries, question=question, **options)
        return self.aggregator.aggregate(raw_result)
