"""
Analyzer facade over the sentiment, key phrase and entity insights.
"""

import logging
from typing import Any, Iterable, Optional, Union

from .config import InsightsConfig, Provider
from .insights import EntityInsight, KeyPhraseInsight, SentimentInsight
from .models import EntityReport, KeyPhraseReport, SentimentReport

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class Analyzer:
    """
    Single entry point for all insight types.

    The provider is validated when the analyzer is built; a fresh insight,
    and therefore a fresh provider client, is created per call.

    Attributes:
        provider: Explicit provider, or None to follow the configuration
        config: Configuration passed to every insight
    """

    def __init__(self, provider: Union[Provider, str, None] = None,
                 config: Optional[InsightsConfig] = None):
        self.provider = Provider.parse(provider)
        self.config = config or InsightsConfig()

    def sentiment(self, entries: Iterable[Any], question: Optional[str] = None,
                  top_count: Optional[int] = None) -> SentimentReport:
        """Analyze the sentiment of entries."""
        insight = SentimentInsight(provider=self.provider, top_count=top_count, config=self.config)
        return insight.analyze(entries, question=question)

    def key_phrases(self, entries: Iterable[Any], question: Optional[str] = None,
                    **options) -> KeyPhraseReport:
        """Extract key phrases; options are key_phrase_prompt and sentiment_prompt."""
        insight = KeyPhraseInsight(provider=self.provider, config=self.config)
        return insight.extract(entries, question=question, **options)

    def entities(self, entries: Iterable[Any], question: Optional[str] = None,
                 **options) -> EntityReport:
        """Extract named entities; the only option is prompt."""
        insight = EntityInsight(provider=self.provider, config=self.config)
        return insight.extract(entries, question=question, **options)
