"""
Key phrase client for hosted LLMs (OpenAI, Claude).

Phrases are requested one sentence at a time; sentiment for every response
comes from one batched sentiment call made with the same transport.
"""

import logging
import re
from typing import Any, Iterable, List, Optional

from ...models import NEUTRAL, ExtractionBatch, Response
from ...normalization import normalize_entries
from ..collector import MentionCollector
from ..llm import ChatTransport, interpolate_prompt
from ..sentiment.llm_client import LLMSentimentClient

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class LLMKeyPhraseClient:
    """
    Extracts key phrases by prompting a chat model.

    Blank answers are skipped and produce no response. Phrases are merged
    across responses by their lower-cased text.

    Attributes:
        transport: ChatTransport used for phrase extraction
        sentiment_client: Client scoring each response's sentiment
    """

    DEFAULT_PROMPT = (
        "Extract the most important key phrases that represent the main ideas or feedback "
        "in the sentence below.\n"
        "Ignore stop words and return each key phrase in its natural form, comma-separated.\n"
        "\n"
        "Question: {question}\n"
        "\n"
        "Text: {text}"
    )

    SEPARATOR = re.compile(r',|\n')

    def __init__(self, transport: ChatTransport,
                 sentiment_client: Optional[LLMSentimentClient] = None):
        self.transport = transport
        self.sentiment_client = sentiment_client or LLMSentimentClient(transport)

    def extract_batch(
        self,
        entries: Iterable[Any],
        question: Optional[str] = None,
        key_phrase_prompt: Optional[str] = None,
        sentiment_prompt: Optional[str] = None
    ) -> ExtractionBatch:
        """
        Extract key phrases from entries.

        Args:
            entries: Entries to analyze
            question: Optional question for context
            key_phrase_prompt: Template with {text}/{question} placeholders
            sentiment_prompt: Instructions for the batched sentiment call

        Raises:
            ProviderTransportError: If a model call fails after retries
        """
        entries = normalize_entries(entries)
        sentiments = self.sentiment_client.analyze_entries(
            entries, question=question, prompt=sentiment_prompt
        )

        responses: List[Response] = []
        collector = MentionCollector()

        for index, entry in enumerate(entries):
            sentence = entry.answer.strip()
            if not sentence:
                continue

            response_id = f"r_{index + 1}"
            sentiment = sentiments[index] if index < len(sentiments) else None

            responses.append(
                Response(
                    id=response_id,
                    sentence=sentence,
                    segment=dict(entry.segment),
                    sentiment=sentiment.label if sentiment and sentiment.label else NEUTRAL,
                    sentiment_score=sentiment.score if sentiment else None
                )
            )

            for phrase in self._extract_phrases(sentence, question, key_phrase_prompt):
                collector.add(phrase.lower(), response_id)

        logger.info(f"Extracted {len(collector)} distinct phrases from {len(responses)} responses")
        return ExtractionBatch(responses=responses, items=collector.phrase_items())

    def _extract_phrases(self, text: str, question: Optional[str],
                         prompt: Optional[str]) -> List[str]:
        if prompt:
            prompt_to_use = interpolate_prompt(prompt, text, question)
        else:
            prompt_to_use = interpolate_prompt(self.DEFAULT_PROMPT, text, question or "")

        content = self.transport.complete(prompt_to_use, temperature=0.3)
        return [p.strip() for p in self.SEPARATOR.split(content) if p.strip()]
