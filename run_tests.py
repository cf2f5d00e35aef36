#!/usr/bin/env python3
"""
Simple test runner to verify the core aggregation without pytest.
"""

import sys
import os
import traceback
import logging

# Add the current directory to the path
sys.path.insert(0, os.path.dirname(__file__))

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


class _FixedSentimentClient:
    """Returns preset sentiment results, one per entry."""

    def __init__(self, results):
        self.results = results

    def analyze_entries(self, entries, question=None):
        return self.results


class _FixedBatchClient:
    """Returns a preset raw batch result."""

    def __init__(self, raw_result):
        self.raw_result = raw_result

    def extract_batch(self, entries, question=None, **options):
        return self.raw_result


def run_basic_tests():
    """Run basic tests to verify the aggregators work correctly."""
    logger.info("Running basic tests for sentiment insights...")

    try:
        # Test imports
        logger.info("✓ Testing imports...")
        from sentiment_insights.insights import SentimentInsight, KeyPhraseInsight, EntityInsight
        from sentiment_insights.serialization import serialize_to_json

        entries = [
            {"answer": "Great support", "segment": {"age": "18-25"}},
            {"answer": "Slow delivery", "segment": {"age": "26-35"}},
            {"answer": "It was fine"},
        ]

        # Test sentiment aggregation
        logger.info("✓ Testing sentiment aggregation...")
        insight = SentimentInsight(
            provider_client=_FixedSentimentClient([
                {"label": "positive", "score": 0.9},
                {"label": "negative", "score": -0.7},
            ]),
            top_count=2
        )
        report = insight.analyze(entries)
        assert report.global_summary.total_count == 3
        assert report.global_summary.positive_count == 1
        assert report.global_summary.negative_count == 1
        assert report.responses[2].sentiment_label is None
        assert report.segment_summary["age"]["18-25"].positive_count == 1
        assert report.top_positive_comments[0].answer == "Great support"

        # Test key phrase aggregation
        logger.info("✓ Testing key phrase aggregation...")
        phrases = KeyPhraseInsight(provider_client=_FixedBatchClient({
            "responses": [
                {"id": "r_1", "sentence": "Great support", "sentiment": "positive",
                 "segment": {"age": "18-25"}},
            ],
            "phrases": [{"phrase": "support", "mentions": ["r_1", "r_9"]}],
        })).extract(entries)
        assert phrases.phrases[0].summary.total_mentions == 2
        assert phrases.phrases[0].summary.sentiment_distribution["positive"] == 1
        assert phrases.phrases[0].summary.segment_distribution == {"age": {"18-25": 1}}

        # Test entity aggregation with missing responses
        logger.info("✓ Testing entity aggregation...")
        entities = EntityInsight(provider_client=_FixedBatchClient({
            "entities": [{"entity": "acme", "type": "ORGANIZATION", "mentions": None}],
        })).extract(entries)
        assert entities.responses == []
        assert entities.entities[0].mentions == []
        assert entities.entities[0].summary.total_mentions == 0

        # Test serialization
        logger.info("✓ Testing serialization...")
        assert serialize_to_json(report) == serialize_to_json(insight.analyze(entries))

        logger.info("\n🎉 All basic tests passed!")
        return True

    except Exception as e:
        logger.error(f"\n❌ Test failed: {e}")
        logger.error(traceback.format_exc())
        return False


if __name__ == "__main__":
    success = run_basic_tests()
    sys.exit(0 if success else 1)
