"""
Key phrase client backed by Amazon Comprehend.

Each batch is sent to BatchDetectKeyPhrases and BatchDetectSentiment; the
phrase results become responses and the phrases are merged across the whole
input into items referencing those responses.
"""

import logging
from typing import Any, Iterable, List, Optional

import boto3

from ...batching import BatchProcessor
from ...models import NEUTRAL, ExtractionBatch, Response
from ...normalization import normalize_entries
from ..backoff import ExponentialBackoff
from ..collector import MentionCollector
from ..sentiment.comprehend_client import MAX_BATCH_SIZE, comprehend_text, signed_score

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class ComprehendKeyPhraseClient:
    """
    Extracts key phrases and per-response sentiment with Comprehend.

    Phrases are lower-cased and stripped, and each phrase counts once per
    response. Entries Comprehend could not process are reported in the logs
    and produce no response.
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

    def extract_batch(
        self,
        entries: Iterable[Any],
        question: Optional[str] = None,
        key_phrase_prompt: Optional[str] = None,
        sentiment_prompt: Optional[str] = None
    ) -> ExtractionBatch:
        """
        Extract key phrases from entries.

        question and the prompt options are ignored by Comprehend.

        Returns:
            ExtractionBatch with one response per processed entry and one
            item per distinct phrase

        Raises:
            ProviderTransportError: If a Comprehend call fails after retries
        """
        entries = normalize_entries(entries)
        responses: List[Response] = []
        collector = MentionCollector()

        batches = self.batch_processor.create_batches(entries)
        offsets = self.batch_processor.batch_offsets(entries)

        for offset, batch in zip(offsets, batches):
            texts = [comprehend_text(entry.answer) for entry in batch]
            logger.info(f"Detecting key phrases for batch of {len(texts)} entries with Comprehend")

            phrase_resp = self.backoff.execute(
                lambda: self.comprehend_client.batch_detect_key_phrases(
                    TextList=texts,
                    LanguageCode=self.language_code
                ),
                "Comprehend"
            )
            sentiment_resp = self.backoff.execute(
                lambda: self.comprehend_client.batch_detect_sentiment(
                    TextList=texts,
                    LanguageCode=self.language_code
                ),
                "Comprehend"
            )

            sentiments = {
                result.get('Index'): result
                for result in sentiment_resp.get('ResultList', [])
            }

            phrase_results = sorted(
                (r for r in phrase_resp.get('ResultList', []) if r.get('Index') is not None),
                key=lambda r: r['Index']
            )
            for phrase_result in phrase_results:
                index = phrase_result['Index']
                if not 0 <= index < len(batch):
                    continue

                response_id = f"r_{offset + index + 1}"
                sentiment_result = sentiments.get(index) or {}
                sentiment = sentiment_result.get('Sentiment', NEUTRAL)

                responses.append(
                    Response(
                        id=response_id,
                        sentence=texts[index],
                        segment=dict(batch[index].segment),
                        sentiment=sentiment.lower(),
                        sentiment_score=signed_score(
                            sentiment, sentiment_result.get('SentimentScore', {})
                        )
                    )
                )

                for key_phrase in phrase_result.get('KeyPhrases', []):
                    phrase = (key_phrase.get('Text') or "").strip().lower()
                    if phrase:
                        collector.add(phrase, response_id)

            for error in phrase_resp.get('ErrorList', []):
                logger.warning(
                    f"Comprehend key phrase error at index {error.get('Index')}: "
                    f"{error.get('ErrorCode')}"
                )
            for error in sentiment_resp.get('ErrorList', []):
                logger.warning(
                    f"Comprehend sentiment error at index {error.get('Index')}: "
                    f"{error.get('ErrorCode')}"
                )

        logger.info(f"Extracted {len(collector)} distinct phrases from {len(responses)} responses")
        return ExtractionBatch(responses=responses, items=collector.phrase_items())
