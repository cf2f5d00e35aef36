"""
Data models for the sentiment insights pipeline.

This module defines the input entries, the provider-normalized responses and
extracted items, and the report structures produced by the aggregators.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

POSITIVE = "positive"
NEUTRAL = "neutral"
NEGATIVE = "negative"

SENTIMENT_LABELS = (POSITIVE, NEUTRAL, NEGATIVE)


@dataclass
class Entry:
    """
    One free-form answer with optional segment metadata.

    Attributes:
        answer: Response text, may be empty
        segment: Segment dimension name -> segment value (e.g. {"age": "25-34"})
    """
    answer: str = ""
    segment: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Default missing fields."""
        if self.answer is None:
            self.answer = ""
        if self.segment is None:
            self.segment = {}


@dataclass
class SentimentResult:
    """
    Sentiment returned by a provider for a single entry.

    Attributes:
        label: "positive", "neutral", "negative", or None when unscored
        score: Signed intensity from -1.0 (very negative) to 1.0 (very positive)
    """
    label: Optional[str] = None
    score: Optional[float] = None


@dataclass
class AnnotatedResponse:
    """An entry merged with its sentiment result."""
    answer: str
    segment: Dict[str, Any]
    sentiment_label: Optional[str] = None
    sentiment_score: Optional[float] = None


@dataclass
class SummaryStats:
    """
    Sentiment counts and percentages for a group of responses.

    Percentages are in the range 0-100 and the net sentiment score is
    positive_percentage - negative_percentage.
    """
    total_count: int = 0
    positive_count: int = 0
    neutral_count: int = 0
    negative_count: int = 0
    positive_percentage: float = 0.0
    neutral_percentage: float = 0.0
    negative_percentage: float = 0.0
    net_sentiment_score: float = 0.0

    def __post_init__(self):
        """Validate summary counts."""
        if self.total_count < 0:
            raise ValueError("Total count cannot be negative")
        if min(self.positive_count, self.neutral_count, self.negative_count) < 0:
            raise ValueError("Sentiment counts cannot be negative")
        if self.positive_count + self.neutral_count + self.negative_count > self.total_count:
            raise ValueError("Sum of sentiment counts cannot exceed total_count")

    @classmethod
    def from_counts(
        cls,
        total_count: int,
        positive_count: int,
        neutral_count: int,
        negative_count: int
    ) -> 'SummaryStats':
        """Build a summary, deriving percentages from the counts."""
        if total_count > 0:
            positive_pct = positive_count * 100.0 / total_count
            neutral_pct = neutral_count * 100.0 / total_count
            negative_pct = negative_count * 100.0 / total_count
        else:
            positive_pct = neutral_pct = negative_pct = 0.0

        return cls(
            total_count=total_count,
            positive_count=positive_count,
            neutral_count=neutral_count,
            negative_count=negative_count,
            positive_percentage=positive_pct,
            neutral_percentage=neutral_pct,
            negative_percentage=negative_pct,
            net_sentiment_score=positive_pct - negative_pct
        )


@dataclass
class Comment:
    """A top positive or negative answer with its score."""
    answer: str
    score: Optional[float]


@dataclass
class SentimentReport:
    """
    Result of sentiment analysis over a list of entries.

    Attributes:
        global_summary: Summary across all responses
        segment_summary: dimension -> value -> summary for that segment group
        top_positive_comments: Highest scoring positive answers
        top_negative_comments: Lowest scoring negative answers
        responses: Every annotated response in input order
    """
    global_summary: SummaryStats
    segment_summary: Dict[str, Dict[Any, SummaryStats]] = field(default_factory=dict)
    top_positive_comments: List[Comment] = field(default_factory=list)
    top_negative_comments: List[Comment] = field(default_factory=list)
    responses: List[AnnotatedResponse] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Response:
    """
    Provider-normalized view of one processed entry.

    Attributes:
        id: Identifier referenced by extracted items' mention lists
        sentence: Text that was analyzed
        segment: Segment metadata copied from the source entry
        sentiment: Sentiment label, None when the provider did not score it
        sentiment_score: Optional signed sentiment score
        extra: Provider keys outside the fields above, kept verbatim
    """
    id: Optional[str] = None
    sentence: Optional[str] = None
    segment: Dict[str, Any] = field(default_factory=dict)
    sentiment: Optional[str] = None
    sentiment_score: Optional[float] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Default missing mappings."""
        if self.segment is None:
            self.segment = {}
        if self.extra is None:
            self.extra = {}


@dataclass
class ExtractedItem:
    """
    A phrase or entity produced by a provider.

    Attributes:
        text: Phrase text or entity surface text
        type: Entity category (e.g. ORGANIZATION); None for phrases
        mentions: Response IDs, possibly duplicated or unresolvable
    """
    text: Optional[str] = None
    type: Optional[str] = None
    mentions: List[Any] = field(default_factory=list)

    def __post_init__(self):
        """Default a missing mention list."""
        if self.mentions is None:
            self.mentions = []


@dataclass
class ExtractionBatch:
    """Normalized batch extraction result handed from a provider to an aggregator."""
    responses: List[Response] = field(default_factory=list)
    items: List[ExtractedItem] = field(default_factory=list)


@dataclass
class PhraseSummary:
    """Mention statistics for a key phrase."""
    total_mentions: int = 0
    sentiment_distribution: Dict[str, int] = field(
        default_factory=lambda: {POSITIVE: 0, NEGATIVE: 0, NEUTRAL: 0}
    )
    segment_distribution: Dict[str, Dict[Any, int]] = field(default_factory=dict)


@dataclass
class PhraseRecord:
    """A key phrase with its raw mentions and computed summary."""
    phrase: Optional[str]
    mentions: List[Any]
    summary: PhraseSummary


@dataclass
class KeyPhraseReport:
    """Result of key phrase extraction."""
    phrases: List[PhraseRecord] = field(default_factory=list)
    responses: List[Response] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class EntitySummary:
    """Mention statistics for a named entity."""
    total_mentions: int = 0
    segment_distribution: Dict[str, Dict[Any, int]] = field(default_factory=dict)


@dataclass
class EntityRecord:
    """A named entity with its raw mentions and computed summary."""
    entity: Optional[str]
    type: Optional[str]
    mentions: List[Any]
    summary: EntitySummary


@dataclass
class EntityReport:
    """Result of named entity extraction."""
    entities: List[EntityRecord] = field(default_factory=list)
    responses: List[Response] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
