"""
Sentiment provider clients.

Every client exposes analyze_entries(entries, question=None, ...) returning
one SentimentResult per entry in input order.
"""

from .lexicon_client import LexiconSentimentClient
from .llm_client import LLMSentimentClient
from .comprehend_client import ComprehendSentimentClient

__all__ = [
    'LexiconSentimentClient',
    'LLMSentimentClient',
    'ComprehendSentimentClient',
]
