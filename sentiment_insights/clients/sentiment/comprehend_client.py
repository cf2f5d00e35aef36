"""
Sentiment client backed by Amazon Comprehend.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import boto3

from ...batching import BatchProcessor
from ...models import NEUTRAL, SentimentResult
from ...normalization import normalize_entries
from ..backoff import ExponentialBackoff

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

MAX_BATCH_SIZE = 25  # BatchDetect* document limit
MAX_TEXT_LENGTH = 5000


def comprehend_text(answer: str) -> str:
    """Strip an answer and truncate it to the Comprehend document limit."""
    return (answer or "").strip()[:MAX_TEXT_LENGTH]


def signed_score(sentiment: str, scores: Dict[str, float]) -> float:
    """
    Collapse Comprehend's per-class confidences into one signed score.

    POSITIVE -> positive confidence, NEGATIVE -> minus negative confidence,
    NEUTRAL -> 0.0, MIXED -> positive minus negative rounded to 2 places.
    """
    sentiment = (sentiment or "").upper()
    if sentiment == "POSITIVE":
        return float(scores.get('Positive', 0.0))
    if sentiment == "NEGATIVE":
        return -float(scores.get('Negative', 0.0))
    if sentiment == "MIXED":
        return round(float(scores.get('Positive', 0.0)) - float(scores.get('Negative', 0.0)), 2)
    return 0.0


class ComprehendSentimentClient:
    """
    Classifies entries with Comprehend BatchDetectSentiment.

    Documents that Comprehend reports in its ErrorList come back as neutral.
    MIXED results keep the label "mixed", which the aggregator counts in no
    sentiment bucket.

    Attributes:
        comprehend_client: Boto3 comprehend client
        language_code: Language of the analyzed text
        backoff: Retry policy for throttled calls
    """

    def __init__(
        self,
        comprehend_client=None,
        region: str = "us-east-1",
        language_code: str = "en",
        max_retries: int = 3
    ):
        self.comprehend_client = comprehend_client or boto3.client('comprehend', region_name=region)
        self.language_code = language_code
        self.backoff = ExponentialBackoff(max_retries=max_retries)
        self.batch_processor = BatchProcessor(max_batch_size=MAX_BATCH_SIZE)

    def analyze_entries(
        self,
        entries: Iterable[Any],
        question: Optional[str] = None,
        prompt: Optional[str] = None,
        batch_size: Optional[int] = None
    ) -> List[SentimentResult]:
        """
        Classify a list of entries.

        question, prompt and batch_size are ignored; Comprehend's own batch
        limit always applies.

        Raises:
            ProviderTransportError: If a Comprehend call fails after retries
        """
        entries = normalize_entries(entries)
        results: List[SentimentResult] = []

        for batch in self.batch_processor.create_batches(entries):
            texts = [comprehend_text(entry.answer) for entry in batch]
            logger.info(f"Detecting sentiment for batch of {len(texts)} entries with Comprehend")

            response = self.backoff.execute(
                lambda: self.comprehend_client.batch_detect_sentiment(
                    TextList=texts,
                    LanguageCode=self.language_code
                ),
                "Comprehend"
            )

            batch_results = [SentimentResult(label=NEUTRAL, score=0.0) for _ in batch]

            for result in response.get('ResultList', []):
                index = result.get('Index')
                if index is None or not 0 <= index < len(batch):
                    continue
                sentiment = result.get('Sentiment', NEUTRAL)
                batch_results[index] = SentimentResult(
                    label=sentiment.lower(),
                    score=signed_score(sentiment, result.get('SentimentScore', {}))
                )

            for error in response.get('ErrorList', []):
                logger.warning(
                    f"Comprehend sentiment error at index {error.get('Index')}: "
                    f"{error.get('ErrorCode')}"
                )

            results.extend(batch_results)

        return results
