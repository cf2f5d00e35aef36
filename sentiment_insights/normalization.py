"""
Boundary normalization for caller input and provider output.

Every defaulting rule is applied here, once, so the aggregators can work on
fully-populated dataclasses: missing collections become empty, missing
segment mappings become empty mappings and null mention lists become empty
lists. Nothing in this module raises on malformed provider output.
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from .models import Entry, ExtractedItem, ExtractionBatch, Response, SentimentResult

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def _as_list(value: Any) -> List[Any]:
    """Turn an optional sequence into a list; scalars become a one-item list."""
    if value is None:
        return []
    if isinstance(value, (str, bytes, Mapping)):
        return [value]
    try:
        return list(value)
    except TypeError:
        return [value]


def _as_mapping(value: Any) -> Dict[Any, Any]:
    if isinstance(value, Mapping):
        return dict(value)
    return {}


def normalize_label(label: Any) -> Optional[str]:
    """
    Normalize a sentiment label to a lower-case string.

    Enum members are reduced to their value. None stays None so unscored
    responses remain distinguishable from neutral ones.
    """
    if label is None:
        return None
    if isinstance(label, Enum):
        label = label.value
    return str(label).strip().lower() or None


def coerce_entry(value: Any) -> Entry:
    """Build an Entry from an Entry, a mapping with 'answer'/'segment', or bare text."""
    if isinstance(value, Entry):
        return Entry(answer=value.answer, segment=_as_mapping(value.segment))
    if isinstance(value, Mapping):
        answer = value.get('answer')
        return Entry(
            answer="" if answer is None else str(answer),
            segment=_as_mapping(value.get('segment'))
        )
    if value is None:
        return Entry()
    return Entry(answer=str(value))


def normalize_entries(entries: Optional[Iterable[Any]]) -> List[Entry]:
    """Normalize an iterable of caller entries."""
    return [coerce_entry(entry) for entry in _as_list(entries)]


def coerce_sentiment_result(value: Any) -> SentimentResult:
    """
    Build a SentimentResult from provider output.

    Accepts a SentimentResult, a mapping with 'label'/'score' keys, or None
    (an unscored entry).
    """
    if isinstance(value, SentimentResult):
        return SentimentResult(label=normalize_label(value.label), score=value.score)
    if isinstance(value, Mapping):
        return SentimentResult(
            label=normalize_label(value.get('label')),
            score=value.get('score')
        )
    return SentimentResult()


def normalize_sentiment_results(results: Optional[Iterable[Any]]) -> List[SentimentResult]:
    """Normalize a positional list of per-entry sentiment results."""
    return [coerce_sentiment_result(result) for result in _as_list(results)]


RESPONSE_FIELDS = ('id', 'sentence', 'segment', 'sentiment', 'sentiment_score')


def coerce_response(value: Any) -> Response:
    """
    Build a Response from a Response or a provider response mapping.

    Keys outside RESPONSE_FIELDS, including the 'answer' and
    'sentiment_label' fallbacks, are kept unchanged in Response.extra.
    """
    if isinstance(value, Response):
        return Response(
            id=value.id,
            sentence=value.sentence,
            segment=_as_mapping(value.segment),
            sentiment=normalize_label(value.sentiment),
            sentiment_score=value.sentiment_score,
            extra=_as_mapping(value.extra)
        )
    if isinstance(value, Mapping):
        sentence = value.get('sentence')
        if sentence is None:
            sentence = value.get('answer')
        sentiment = value.get('sentiment')
        if sentiment is None:
            sentiment = value.get('sentiment_label')
        return Response(
            id=value.get('id'),
            sentence=sentence,
            segment=_as_mapping(value.get('segment')),
            sentiment=normalize_label(sentiment),
            sentiment_score=value.get('sentiment_score'),
            extra={key: v for key, v in value.items() if key not in RESPONSE_FIELDS}
        )
    logger.warning(f"Ignoring fields of malformed response: {value!r}")
    return Response()


def coerce_item(value: Any, text_key: str) -> ExtractedItem:
    """
    Build an ExtractedItem from provider output.

    The item text is read from text_key ('phrase' or 'entity'), falling back
    to 'text'. A provider-supplied 'summary' is never read.
    """
    if isinstance(value, ExtractedItem):
        return ExtractedItem(
            text=value.text,
            type=value.type,
            mentions=_as_list(value.mentions)
        )
    if isinstance(value, Mapping):
        text = value.get(text_key)
        if text is None:
            text = value.get('text')
        return ExtractedItem(
            text=text,
            type=value.get('type'),
            mentions=_as_list(value.get('mentions'))
        )
    if isinstance(value, str):
        return ExtractedItem(text=value)
    logger.warning(f"Ignoring fields of malformed item: {value!r}")
    return ExtractedItem()


def normalize_batch(raw_result: Any, items_key: str, text_key: str) -> ExtractionBatch:
    """
    Normalize a raw batch extraction result.

    Args:
        raw_result: ExtractionBatch, or a mapping that may lack either key
        items_key: Key holding the item list ('phrases' or 'entities')
        text_key: Key holding each item's text ('phrase' or 'entity')

    Returns:
        ExtractionBatch with fully defaulted responses and items
    """
    if isinstance(raw_result, ExtractionBatch):
        raw_responses = raw_result.responses
        raw_items = raw_result.items
    elif isinstance(raw_result, Mapping):
        raw_responses = raw_result.get('responses')
        raw_items = raw_result.get(items_key)
    else:
        if raw_result is not None:
            logger.warning(f"Unexpected batch result type: {type(raw_result).__name__}")
        raw_responses = raw_items = None

    return ExtractionBatch(
        responses=[coerce_response(response) for response in _as_list(raw_responses)],
        items=[coerce_item(item, text_key) for item in _as_list(raw_items)]
    )


def index_responses(responses: Iterable[Response]) -> Dict[Any, Response]:
    """Map response ID to response; a repeated ID keeps the last response seen."""
    index: Dict[Any, Response] = {}
    for response in responses:
        try:
            index[response.id] = response
        except TypeError:
            logger.warning(f"Skipping response with unhashable id: {response.id!r}")
    return index


def resolve_mentions(mentions: Iterable[Any], index: Dict[Any, Response]) -> List[Response]:
    """
    Resolve mention IDs against a response index.

    Unknown IDs are dropped. Duplicate IDs resolve once per occurrence.
    """
    resolved = []
    for mention_id in mentions:
        try:
            response = index.get(mention_id)
        except TypeError:
            response = None
        if response is not None:
            resolved.append(response)
    return resolved
