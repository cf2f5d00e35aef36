"""
Entity provider clients.

Every client exposes extract_batch(entries, question=None, prompt=None)
returning an ExtractionBatch of responses and entities.
"""

from .comprehend_client import ComprehendEntityClient
from .llm_client import LLMEntityClient

__all__ = [
    'ComprehendEntityClient',
    'LLMEntityClient',
]
