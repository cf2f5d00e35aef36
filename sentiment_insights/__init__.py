"""
Survey response sentiment, key phrase and entity insights.

Provider clients do the NLP inference; this package normalizes their output
and computes aggregate statistics globally and per segment.
"""

from .config import InsightsConfig, Provider
from .errors import (
    SentimentInsightsError, UnsupportedCapabilityError, UnknownProviderError,
    ConfigurationError, ProviderTransportError
)
from .models import (
    Entry, SentimentResult, Response, ExtractedItem, ExtractionBatch,
    SentimentReport, KeyPhraseReport, EntityReport, SummaryStats
)
from .insights import SentimentInsight, KeyPhraseInsight, EntityInsight
from .analyzer import Analyzer
from .serialization import serialize_to_json, entries_from_json

__version__ = "1.0.0"

__all__ = [
    'InsightsConfig',
    'Provider',
    'SentimentInsightsError',
    'UnsupportedCapabilityError',
    'UnknownProviderError',
    'ConfigurationError',
    'ProviderTransportError',
    'Entry',
    'SentimentResult',
    'Response',
    'ExtractedItem',
    'ExtractionBatch',
    'SentimentReport',
    'KeyPhraseReport',
    'EntityReport',
    'SummaryStats',
    'SentimentInsight',
    'KeyPhraseInsight',
    'EntityInsight',
    'Analyzer',
    'serialize_to_json',
    'entries_from_json',
]
