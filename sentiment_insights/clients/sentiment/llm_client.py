"""
Sentiment client for hosted LLMs (OpenAI, Claude).

Entries are sent in numbered batches; the model replies with one
"N. Label (score)" line per entry.
"""

import logging
import re
from typing import Any, Iterable, List, Optional

from ...batching import BatchProcessor
from ...models import NEUTRAL, SentimentResult
from ...normalization import normalize_entries
from ..llm import ChatTransport

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class LLMSentimentClient:
    """
    Classifies entries by prompting a chat model.

    Replies that list fewer results than the batch holds are padded with
    neutral results; extra lines are dropped, so the output always has one
    result per entry.

    Attributes:
        transport: ChatTransport used to call the model
        batch_size: Number of entries per prompt
    """

    DEFAULT_BATCH_SIZE = 50

    DEFAULT_INSTRUCTIONS = (
        "For each of the following customer responses, classify the sentiment as "
        "Positive, Neutral, or Negative, and assign a score between -1.0 (very negative) "
        "and 1.0 (very positive).\n"
        "\n"
        "Reply with a numbered list like:\n"
        "1. Positive (0.9)\n"
        "2. Negative (-0.8)\n"
        "3. Neutral (0.0)"
    )

    LINE_PATTERN = re.compile(
        r'^\d+[\.:)]?\s*(Positive|Negative|Neutral)\s*\(([-\d\.]+)\)',
        re.IGNORECASE
    )

    def __init__(self, transport: ChatTransport, batch_size: int = DEFAULT_BATCH_SIZE):
        self.transport = transport
        self.batch_size = batch_size

    def analyze_entries(
        self,
        entries: Iterable[Any],
        question: Optional[str] = None,
        prompt: Optional[str] = None,
        batch_size: Optional[int] = None
    ) -> List[SentimentResult]:
        """
        Classify a list of entries.

        Args:
            entries: Entries to classify
            question: Optional question shown to the model above the responses
            prompt: Custom instructions replacing DEFAULT_INSTRUCTIONS
            batch_size: Overrides the configured batch size

        Returns:
            One SentimentResult per entry, in input order

        Raises:
            ProviderTransportError: If a model call fails after retries
        """
        entries = normalize_entries(entries)
        processor = BatchProcessor(max_batch_size=batch_size or self.batch_size)

        results: List[SentimentResult] = []
        for batch in processor.create_batches(entries):
            logger.info(
                f"Analyzing batch of {len(batch)} entries with {self.transport.provider_name}"
            )
            content = self.transport.complete(
                self._build_prompt(batch, question=question, prompt=prompt),
                temperature=0.0
            )
            results.extend(self._parse_sentiments(content, len(batch)))

        return results

    def _build_prompt(self, batch: List[Any], question: Optional[str] = None,
                      prompt: Optional[str] = None) -> str:
        content = ""
        if question:
            content += f"Question: {question}\n\n"

        content += (prompt or self.DEFAULT_INSTRUCTIONS).strip() + "\n\n"

        for index, entry in enumerate(batch, 1):
            content += f"{index}. \"{entry.answer}\"\n"

        return content

    def _parse_sentiments(self, content: str, expected_count: int) -> List[SentimentResult]:
        sentiments = []

        for line in (content or "").strip().splitlines():
            match = self.LINE_PATTERN.match(line.strip())
            if not match:
                continue
            try:
                score = float(match.group(2))
            except ValueError:
                score = 0.0
            sentiments.append(SentimentResult(label=match.group(1).lower(), score=score))

        if len(sentiments) != expected_count:
            logger.warning(
                f"Expected {expected_count} results, got {len(sentiments)}. Padding with neutral."
            )
            while len(sentiments) < expected_count:
                sentiments.append(SentimentResult(label=NEUTRAL, score=0.0))

        return sentiments[:expected_count]
