"""
Local lexicon sentiment client using VADER.

Scores each answer offline with the VADER lexicon; no network access and no
API keys are needed, which makes this the default sentiment provider.
"""

import logging
from typing import Any, Iterable, List, Optional

from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from ...models import NEGATIVE, NEUTRAL, POSITIVE, SentimentResult
from ...normalization import normalize_entries

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class LexiconSentimentClient:
    """
    Classifies entries with the VADER compound score.

    Attributes:
        analyzer: VADER SentimentIntensityAnalyzer
        threshold: Compound magnitude at which text stops being neutral
    """

    DEFAULT_THRESHOLD = 0.05

    def __init__(self, analyzer: Optional[SentimentIntensityAnalyzer] = None,
                 threshold: float = DEFAULT_THRESHOLD):
        self.analyzer = analyzer or SentimentIntensityAnalyzer()
        self.threshold = threshold

    def analyze_entries(
        self,
        entries: Iterable[Any],
        question: Optional[str] = None,
        prompt: Optional[str] = None,
        batch_size: Optional[int] = None
    ) -> List[SentimentResult]:
        """
        Score each entry's answer.

        question, prompt and batch_size are accepted for interface
        compatibility and ignored.

        Returns:
            One SentimentResult per entry, in input order
        """
        entries = normalize_entries(entries)
        logger.info(f"Scoring {len(entries)} entries with the local lexicon")

        results = []
        for entry in entries:
            compound = self.analyzer.polarity_scores(entry.answer.strip())['compound']
            results.append(SentimentResult(label=self._label(compound), score=compound))
        return results

    def _label(self, compound: float) -> str:
        if compound >= self.threshold:
            return POSITIVE
        if compound <= -self.threshold:
            return NEGATIVE
        return NEUTRAL
