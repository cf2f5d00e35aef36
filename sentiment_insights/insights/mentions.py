"""
Mention aggregation shared by key phrase and entity extraction.

A provider returns a list of responses and a list of items (phrases or
entities) that reference those responses by ID. The aggregators here join
each item's mentions against the responses and compute its summary: total
mention count, segment distribution and, for phrases, sentiment distribution.
"""

import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List

from ..models import (
    NEGATIVE, NEUTRAL, POSITIVE,
    EntityRecord, EntityReport, EntitySummary, ExtractedItem,
    KeyPhraseReport, PhraseRecord, PhraseSummary, Response
)
from ..normalization import index_responses, normalize_batch, resolve_mentions

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def segment_distribution(responses: Iterable[Response]) -> Dict[str, Dict[Any, int]]:
    """
    Count segment values across responses.

    Each response increments segment_distribution[dimension][value] once per
    dimension it carries. A response listed twice is counted twice.
    """
    distribution: Dict[str, Dict[Any, int]] = defaultdict(lambda: defaultdict(int))
    for response in responses:
        for dimension, value in response.segment.items():
            try:
                hash(value)
            except TypeError:
                logger.warning(
                    f"Skipping unhashable segment value for '{dimension}' in response {response.id}"
                )
                continue
            distribution[dimension][value] += 1
    return {dimension: dict(values) for dimension, values in distribution.items()}


def sentiment_distribution(responses: Iterable[Response]) -> Dict[str, int]:
    """
    Count sentiment labels across responses.

    Unscored responses count as neutral. Labels outside positive, negative
    and neutral are not counted.
    """
    counts = {POSITIVE: 0, NEGATIVE: 0, NEUTRAL: 0}
    for response in responses:
        label = response.sentiment or NEUTRAL
        if label in counts:
            counts[label] += 1
    return counts


class MentionAggregator:
    """
    Base aggregator turning a raw batch extraction result into enriched items.

    Subclasses name the keys used by their provider output and build the
    record and report types for their item kind.

    Attributes:
        items_key: Key of the item list in raw provider output
        text_key: Key of each item's text in raw provider output
    """

    items_key = ""
    text_key = ""

    def aggregate(self, raw_result: Any):
        """
        Enrich every item of a raw batch result with a freshly computed summary.

        Items keep the provider's order and are never dropped, even when
        their text or type is missing. Dangling mention IDs stay in the
        item's mention list and in total_mentions but contribute nothing to
        the distributions.

        Args:
            raw_result: ExtractionBatch or mapping; either key may be missing

        Returns:
            Report with the enriched items and the provider's responses
        """
        batch = normalize_batch(raw_result, self.items_key, self.text_key)
        response_index = index_responses(batch.responses)

        records = []
        for item in batch.items:
            mention_responses = resolve_mentions(item.mentions, response_index)
            if len(mention_responses) != len(item.mentions):
                logger.debug(
                    f"{len(item.mentions) - len(mention_responses)} unresolved mentions "
                    f"for {self.text_key} '{item.text}'"
                )
            records.append(self._build_record(item, mention_responses))

        logger.debug(
            f"Aggregated {len(records)} {self.items_key} over {len(batch.responses)} responses"
        )
        return self._build_report(records, batch.responses)

    def _build_record(self, item: ExtractedItem, mention_responses: List[Response]):
        raise NotImplementedError

    def _build_report(self, records: List[Any], responses: List[Response]):
        raise NotImplementedError


class PhraseAggregator(MentionAggregator):
    """Aggregates key phrases; summaries include a sentiment distribution."""

    items_key = "phrases"
    text_key = "phrase"

    def _build_record(self, item: ExtractedItem, mention_responses: List[Response]) -> PhraseRecord:
        return PhraseRecord(
            phrase=item.text,
            mentions=item.mentions,
            summary=PhraseSummary(
                total_mentions=len(item.mentions),
                sentiment_distribution=sentiment_distribution(mention_responses),
                segment_distribution=segment_distribution(mention_responses)
            )
        )

    def _build_report(self, records: List[PhraseRecord], responses: List[Response]) -> KeyPhraseReport:
        return KeyPhraseReport(phrases=records, responses=responses)


class EntityAggregator(MentionAggregator):
    """Aggregates named entities; summaries carry no sentiment distribution."""

    items_key = "entities"
    text_key = "entity"

    def _build_record(self, item: ExtractedItem, mention_responses: List[Response]) -> EntityRecord:
        return EntityRecord(
            entity=item.text,
            type=item.type,
            mentions=item.mentions,
            summary=EntitySummary(
                total_mentions=len(item.mentions),
                segment_distribution=segment_distribution(mention_responses)
            )
        )

    def _build_report(self, records: List[EntityRecord], responses: List[Response]) -> EntityReport:
        return EntityReport(entities=records, responses=responses)
