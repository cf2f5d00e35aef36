"""
Insight facades and aggregators.

Each insight resolves a provider client at construction, calls it, and hands
the raw result to its aggregator.
"""

from .sentiment import SentimentInsight
from .key_phrases import KeyPhraseInsight
from .entities import EntityInsight
from .mentions import MentionAggregator, PhraseAggregator, EntityAggregator

__all__ = [
    'SentimentInsight',
    'KeyPhraseInsight',
    'EntityInsight',
    'MentionAggregator',
    'PhraseAggregator',
    'EntityAggregator',
]
