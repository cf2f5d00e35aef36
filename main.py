#!/usr/bin/env python3
"""
Command line entry point for sentiment insights.

Usage:
    python main.py <sentiment|key_phrases|entities> <entries.json> [question]

The entries file holds a JSON array of {"answer": ..., "segment": {...}}
objects. Provider selection and credentials come from the environment
(SENTIMENT_INSIGHTS_PROVIDER, OPENAI_API_KEY, CLAUDE_API_KEY, AWS_REGION).
The report is printed to stdout as JSON.
"""

import logging
import sys

from sentiment_insights.analyzer import Analyzer
from sentiment_insights.config import InsightsConfig
from sentiment_insights.errors import SentimentInsightsError
from sentiment_insights.serialization import entries_from_file, serialize_to_json


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stderr)
    ]
)
logger = logging.getLogger(__name__)

INSIGHT_TYPES = ('sentiment', 'key_phrases', 'entities')


def run(insight_type: str, entries_path: str, question: str = None) -> str:
    """Run one insight over an entries file and return the JSON report."""
    if insight_type not in INSIGHT_TYPES:
        raise ValueError(
            f"Unknown insight type '{insight_type}'. Must be one of: {', '.join(INSIGHT_TYPES)}"
        )

    config = InsightsConfig.from_environment()
    logger.info(f"Loaded configuration with provider: {config.provider}")

    entries = entries_from_file(entries_path)
    logger.info(f"Loaded {len(entries)} entries from {entries_path}")

    analyzer = Analyzer(config=config)
    report = getattr(analyzer, insight_type)(entries, question=question)
    return serialize_to_json(report, indent=2)


def main(argv=None) -> int:
    """Main entry point."""
    argv = sys.argv[1:] if argv is None else argv

    if len(argv) < 2:
        print(__doc__.strip(), file=sys.stderr)
        return 2

    question = argv[2] if len(argv) > 2 else None

    try:
        print(run(argv[0], argv[1], question))
    except (SentimentInsightsError, ValueError) as e:
        logger.error(f"Fatal error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
