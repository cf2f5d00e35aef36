"""
Sentiment insight aggregation.

This module joins entries with per-entry sentiment results from a provider
client and summarizes them globally, per segment group, and as lists of the
most extreme positive and negative comments.
"""

import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Union

from ..clients import build_sentiment_client
from ..config import InsightsConfig, Provider
from ..models import (
    NEGATIVE, NEUTRAL, POSITIVE,
    AnnotatedResponse, Comment, Entry, SentimentReport, SummaryStats
)
from ..normalization import normalize_entries, normalize_sentiment_results

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def _sort_score(score: Any) -> float:
    """Score used for ranking only; missing or non-numeric scores rank as 0.0."""
    if score is None:
        return 0.0
    try:
        return float(score)
    except (TypeError, ValueError):
        return 0.0


def summarize(responses: Iterable[AnnotatedResponse]) -> SummaryStats:
    """
    Count sentiment labels and derive percentages for a group of responses.

    Responses with a missing or unrecognized label count toward total_count
    only.
    """
    counts = {POSITIVE: 0, NEUTRAL: 0, NEGATIVE: 0}
    total = 0
    for response in responses:
        total += 1
        if response.sentiment_label in counts:
            counts[response.sentiment_label] += 1

    return SummaryStats.from_counts(
        total_count=total,
        positive_count=counts[POSITIVE],
        neutral_count=counts[NEUTRAL],
        negative_count=counts[NEGATIVE]
    )


class SentimentInsight:
    """
    Analyzes the sentiment of survey responses and produces summarized insights.

    The provider client is resolved once at construction. Aggregation itself
    is a pure function of the entries and the provider's results.

    Attributes:
        provider_client: Client exposing analyze_entries(entries, question=...)
        top_count: Number of comments kept in each top comment list
    """

    DEFAULT_TOP_COUNT = 5

    def __init__(
        self,
        provider: Union[Provider, str, None] = None,
        provider_client: Any = None,
        top_count: Optional[int] = None,
        config: Optional[InsightsConfig] = None
    ):
        """
        Initialize the sentiment insight.

        Args:
            provider: Provider to use; falls back to config, then the local lexicon
            provider_client: Ready-made client, takes precedence over provider
            top_count: Size of the top comment lists (default: config.top_count)
            config: Shared configuration

        Raises:
            UnknownProviderError: If provider is not a supported identifier
            ValueError: If top_count is negative
        """
        if top_count is not None and top_count < 0:
            raise ValueError("top_count cannot be negative")

        self.config = config or InsightsConfig()
        effective_provider = self.config.resolve_provider(provider, default=Provider.LEXICON)

        if provider_client is None:
            provider_client = build_sentiment_client(effective_provider, self.config)

        self.provider_client = provider_client
        self.top_count = self.config.top_count if top_count is None else top_count

    def analyze(
        self,
        entries: Iterable[Union[Entry, Dict[str, Any]]],
        question: Optional[str] = None
    ) -> SentimentReport:
        """
        Analyze a batch of entries and return sentiment insights.

        Args:
            entries: Entries or mappings with 'answer' and optional 'segment'
            question: Optional question text passed to the provider for context

        Returns:
            SentimentReport with global and segment summaries, top comments
            and the annotated responses
        """
        entries = normalize_entries(entries)
        results = self.provider_client.analyze_entries(entries, question=question)
        return self.aggregate(entries, results)

    def aggregate(self, entries: Iterable[Any], results: Optional[Iterable[Any]]) -> SentimentReport:
        """
        Join entries with sentiment results by position and summarize them.

        Entries past the end of the result list are left unscored.
        """
        entries = normalize_entries(entries)
        results = normalize_sentiment_results(results)

        if len(results) != len(entries):
            logger.warning(
                f"Entries and sentiment results count mismatch: {len(entries)} entries, "
                f"{len(results)} results. Unmatched entries are left unscored."
            )

        annotated_responses = []
        for idx, entry in enumerate(entries):
            label = results[idx].label if idx < len(results) else None
            score = results[idx].score if idx < len(results) else None
            annotated_responses.append(
                AnnotatedResponse(
                    answer=entry.answer,
                    segment=entry.segment,
                    sentiment_label=label,
                    sentiment_score=score
                )
            )

        top_positive = self._top_comments(annotated_responses, POSITIVE, most_positive_first=True)
        top_negative = self._top_comments(annotated_responses, NEGATIVE, most_positive_first=False)

        report = SentimentReport(
            global_summary=summarize(annotated_responses),
            segment_summary=self._segment_summary(annotated_responses),
            top_positive_comments=top_positive,
            top_negative_comments=top_negative,
            responses=annotated_responses
        )

        logger.debug(
            f"Summarized {report.global_summary.total_count} responses across "
            f"{len(report.segment_summary)} segment dimensions"
        )
        return report

    def _segment_summary(
        self,
        responses: List[AnnotatedResponse]
    ) -> Dict[str, Dict[Any, SummaryStats]]:
        """
        Summarize each (dimension, value) segment group independently.

        A response carrying several dimensions contributes to one group per
        dimension.
        """
        groups: Dict[str, Dict[Any, List[AnnotatedResponse]]] = defaultdict(
            lambda: defaultdict(list)
        )
        for response in responses:
            for dimension, value in response.segment.items():
                try:
                    hash(value)
                except TypeError:
                    logger.warning(f"Skipping unhashable segment value for '{dimension}'")
                    continue
                groups[dimension][value].append(response)

        return {
            dimension: {value: summarize(members) for value, members in values.items()}
            for dimension, values in groups.items()
        }

    def _top_comments(
        self,
        responses: List[AnnotatedResponse],
        label: str,
        most_positive_first: bool
    ) -> List[Comment]:
        """Select the top_count responses with the given label, ranked by score."""
        selected = [r for r in responses if r.sentiment_label == label]
        # sorted() is stable, so tied scores keep their input order
        ranked = sorted(
            selected,
            key=lambda r: _sort_score(r.sentiment_score),
            reverse=most_positive_first
        )
        return [
            Comment(answer=r.answer, score=r.sentiment_score)
            for r in ranked[:self.top_count]
        ]
