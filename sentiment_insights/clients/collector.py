"""
Merging of per-response extractions into batch items.
"""

from typing import Any, Dict, Hashable, List, Tuple

from ..models import ExtractedItem


class MentionCollector:
    """
    Collects which responses mention which phrase or entity.

    Keys are kept in first-seen order and each key's response IDs are
    de-duplicated in first-seen order. Phrases are keyed by their text,
    entities by a (text, type) tuple.
    """

    def __init__(self):
        self._mentions: Dict[Hashable, List[str]] = {}

    def __len__(self) -> int:
        return len(self._mentions)

    def add(self, key: Hashable, response_id: str) -> None:
        """Record that response_id mentions key."""
        ids = self._mentions.setdefault(key, [])
        if response_id not in ids:
            ids.append(response_id)

    def phrase_items(self) -> List[ExtractedItem]:
        return [
            ExtractedItem(text=phrase, mentions=list(ids))
            for phrase, ids in self._mentions.items()
        ]

    def entity_items(self) -> List[ExtractedItem]:
        items = []
        for key, ids in self._mentions.items():
            text, entity_type = self._split_entity_key(key)
            items.append(ExtractedItem(text=text, type=entity_type, mentions=list(ids)))
        return items

    @staticmethod
    def _split_entity_key(key: Any) -> Tuple[Any, Any]:
        if isinstance(key, tuple) and len(key) == 2:
            return key
        return key, None
