"""
Entity client for hosted LLMs (OpenAI, Claude).

The model is asked for a JSON array of {"text", "type"} objects per sentence.
"""

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from ...models import ExtractionBatch, Response
from ...normalization import normalize_entries
from ..collector import MentionCollector
from ..llm import ChatTransport, extract_json_block, interpolate_prompt

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class LLMEntityClient:
    """
    Extracts named entities by prompting a chat model.

    Blank answers are skipped. Replies that are not a JSON array yield no
    entities for that sentence, and entities with blank text or type are
    ignored. Entities are merged across responses by (lower-cased text, type).
    """

    DEFAULT_PROMPT = (
        "Extract named entities from this sentence based on the question.\n"
        "Return them as a JSON array with each item having \"text\" and \"type\" "
        "(e.g., PERSON, ORGANIZATION, LOCATION, PRODUCT).\n"
        "{question}\n"
        "Sentence: \"{text}\""
    )

    def __init__(self, transport: ChatTransport):
        self.transport = transport

    def extract_batch(
        self,
        entries: Iterable[Any],
        question: Optional[str] = None,
        prompt: Optional[str] = None
    ) -> ExtractionBatch:
        """
        Extract named entities from entries.

        Args:
            entries: Entries to analyze
            question: Optional question for context
            prompt: Template with {text}/{question} placeholders

        Raises:
            ProviderTransportError: If a model call fails after retries
        """
        entries = normalize_entries(entries)
        responses: List[Response] = []
        collector = MentionCollector()

        for index, entry in enumerate(entries):
            sentence = entry.answer.strip()
            if not sentence:
                continue

            response_id = f"r_{index + 1}"
            responses.append(
                Response(id=response_id, sentence=sentence, segment=dict(entry.segment))
            )

            for entity in self._extract_entities(sentence, question, prompt):
                text = str(entity.get('text') or "").strip()
                entity_type = str(entity.get('type') or "").strip()
                if not text or not entity_type:
                    continue
                collector.add((text.lower(), entity_type), response_id)

        logger.info(f"Extracted {len(collector)} distinct entities from {len(responses)} responses")
        return ExtractionBatch(responses=responses, items=collector.entity_items())

    def _extract_entities(self, text: str, question: Optional[str],
                          prompt: Optional[str]) -> List[Dict[str, Any]]:
        if prompt:
            prompt_to_use = interpolate_prompt(prompt, text, question)
        else:
            question_line = f"Question: {question}" if question else ""
            prompt_to_use = interpolate_prompt(self.DEFAULT_PROMPT, text, question_line)

        content = self.transport.complete(prompt_to_use, temperature=0.3)
        return self._parse_entities(content)

    def _parse_entities(self, content: str) -> List[Dict[str, Any]]:
        json_text = extract_json_block(content or "")
        if json_text is None:
            logger.warning(f"No entity JSON array found in reply: {content!r}")
            return []

        try:
            data = json.loads(json_text)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse entity JSON: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"Expected JSON array of entities, got {type(data).__name__}")
            return []

        return [item for item in data if isinstance(item, dict)]
