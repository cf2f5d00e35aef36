"""
Key phrase provider clients.

Every client exposes extract_batch(entries, question=None, key_phrase_prompt=None,
sentiment_prompt=None) returning an ExtractionBatch of responses and phrases.
"""

from .comprehend_client import ComprehendKeyPhraseClient
from .llm_client import LLMKeyPhraseClient

__all__ = [
    'ComprehendKeyPhraseClient',
    'LLMKeyPhraseClient',
]
