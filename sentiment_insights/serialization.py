"""
JSON serialization utilities for insight reports and entry lists.
"""

import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any, Dict, List

from .models import Entry
from .normalization import coerce_entry


class InsightsJSONEncoder(json.JSONEncoder):
    """JSON encoder for insight data types."""

    def default(self, obj: Any) -> Any:
        """Convert insight objects to JSON-serializable format."""
        if isinstance(obj, Enum):
            return obj.value
        elif is_dataclass(obj) and not isinstance(obj, type):
            return asdict(obj)
        return super().default(obj)


def report_to_dict(report: Any) -> Dict[str, Any]:
    """Convert a report dataclass to plain dictionaries and lists."""
    if not is_dataclass(report) or isinstance(report, type):
        raise ValueError(f"{type(report).__name__} is not a dataclass instance")
    return asdict(report)


def serialize_to_json(obj: Any, indent: int = None) -> str:
    """Serialize an object to a JSON string."""
    try:
        return json.dumps(obj, cls=InsightsJSONEncoder, ensure_ascii=False, indent=indent)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Failed to serialize object to JSON: {e}")


def entries_from_json(json_str: str) -> List[Entry]:
    """
    Deserialize a JSON array of entries.

    Each element may be an object with "answer" and optional "segment", or
    a bare string answer.

    Raises:
        ValueError: If the JSON is malformed or not an array
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to deserialize entries from JSON: {e}")

    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of entries, got {type(data).__name__}")

    return [coerce_entry(item) for item in data]


def entries_from_file(path: str) -> List[Entry]:
    """Load entries from a UTF-8 JSON file."""
    try:
        with open(path, encoding='utf-8') as f:
            return entries_from_json(f.read())
    except OSError as e:
        raise ValueError(f"Failed to read entries file {path}: {e}")
