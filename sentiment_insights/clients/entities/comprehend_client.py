"""
Entity client backed by Amazon Comprehend BatchDetectEntities.
"""

import logging
from typing import Any, Iterable, List, Optional

import boto3

from ...batching import BatchProcessor
from ...models import ExtractionBatch, Response
from ...normalization import normalize_entries
from ..backoff import ExponentialBackoff
from ..collector import MentionCollector
from ..sentiment.comprehend_client import MAX_BATCH_SIZE, comprehend_text

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class ComprehendEntityClient:
    """
    Extracts named entities with Comprehend.

    Entity text is lower-cased and stripped; an entity counts once per
    response for each (text, type) pair.
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
        prompt: Optional[str] = None
    ) -> ExtractionBatch:
        """
        Extract named entities from entries.

        question and prompt are ignored by Comprehend.

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
            logger.info(f"Detecting entities for batch of {len(texts)} entries with Comprehend")

            resp = self.backoff.execute(
                lambda: self.comprehend_client.batch_detect_entities(
                    TextList=texts,
                    LanguageCode=self.language_code
                ),
                "Comprehend"
            )

            results = sorted(
                (r for r in resp.get('ResultList', []) if r.get('Index') is not None),
                key=lambda r: r['Index']
            )
            for result in results:
                index = result['Index']
                if not 0 <= index < len(batch):
                    continue

                response_id = f"r_{offset + index + 1}"
                responses.append(
                    Response(
                        id=response_id,
                        sentence=texts[index],
                        segment=dict(batch[index].segment)
                    )
                )

                for entity in result.get('Entities', []):
                    text = (entity.get('Text') or "").strip().lower()
                    entity_type = entity.get('Type')
                    if text and entity_type:
                        collector.add((text, entity_type), response_id)

            for error in resp.get('ErrorList', []):
                logger.warning(
                    f"Comprehend entity error at index {error.get('Index')}: "
                    f"{error.get('ErrorCode')}"
                )

        logger.info(f"Extracted {len(collector)} distinct entities from {len(responses)} responses")
        return ExtractionBatch(responses=responses, items=collector.entity_items())
