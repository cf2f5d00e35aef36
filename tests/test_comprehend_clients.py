"""
Unit tests for the Amazon Comprehend clients.
"""

import pytest
import sys
import os
from unittest.mock import Mock, patch
from botocore.exceptions import ClientError

# Add the parent directory to the path so we can import the package
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sentiment_insights.clients.entities.comprehend_client import ComprehendEntityClient
from sentiment_insights.clients.key_phrases.comprehend_client import ComprehendKeyPhraseClient
from sentiment_insights.clients.sentiment.comprehend_client import (
    MAX_TEXT_LENGTH, ComprehendSentimentClient, comprehend_text, signed_score
)
from sentiment_insights.errors import ProviderTransportError


def sentiment_result(index, sentiment, positive=0.0, negative=0.0):
    """Build one BatchDetectSentiment result."""
    return {
        'Index': index,
        'Sentiment': sentiment,
        'SentimentScore': {
            'Positive': positive,
            'Negative': negative,
            'Neutral': 0.0,
            'Mixed': 0.0,
        }
    }


def echo_neutral_sentiment(TextList, LanguageCode):
    """Side effect returning a NEUTRAL result for every document."""
    return {
        'ResultList': [sentiment_result(i, 'NEUTRAL') for i in range(len(TextList))],
        'ErrorList': []
    }


def throttling_error():
    return ClientError(
        {'Error': {'Code': 'ThrottlingException', 'Message': 'Rate exceeded'}},
        'BatchDetectSentiment'
    )


class TestComprehendHelpers:
    """Test text preparation and score conversion."""

    def test_comprehend_text_strips_and_truncates(self):
        assert comprehend_text("  hello  ") == "hello"
        assert len(comprehend_text("x" * 6000)) == MAX_TEXT_LENGTH
        assert comprehend_text(None) == ""

    def test_signed_score(self):
        """Test signed scores for every Comprehend sentiment."""
        scores = {'Positive': 0.7, 'Negative': 0.25}

        assert signed_score('POSITIVE', scores) == 0.7
        assert signed_score('NEGATIVE', scores) == -0.25
        assert signed_score('NEUTRAL', scores) == 0.0
        assert signed_score('MIXED', scores) == 0.45


class TestComprehendSentimentClient:
    """Test sentiment classification through BatchDetectSentiment."""

    @pytest.fixture
    def mock_comprehend(self):
        return Mock()

    def test_results_in_input_order(self, mock_comprehend):
        """Test that results are placed by their Index."""
        mock_comprehend.batch_detect_sentiment.return_value = {
            'ResultList': [
                sentiment_result(1, 'NEGATIVE', negative=0.9),
                sentiment_result(0, 'POSITIVE', positive=0.8),
            ],
            'ErrorList': []
        }
        client = ComprehendSentimentClient(comprehend_client=mock_comprehend)

        results = client.analyze_entries([{"answer": "Great"}, {"answer": "Awful"}])

        assert [(r.label, r.score) for r in results] == [("positive", 0.8), ("negative", -0.9)]
        mock_comprehend.batch_detect_sentiment.assert_called_once_with(
            TextList=["Great", "Awful"], LanguageCode="en"
        )

    def test_error_list_entries_default_to_neutral(self, mock_comprehend):
        """Test that documents Comprehend rejected come back neutral."""
        mock_comprehend.batch_detect_sentiment.return_value = {
            'ResultList': [sentiment_result(0, 'POSITIVE', positive=0.6)],
            'ErrorList': [{'Index': 1, 'ErrorCode': 'INTERNAL_SERVER_ERROR'}]
        }
        client = ComprehendSentimentClient(comprehend_client=mock_comprehend)

        results = client.analyze_entries(["Nice", "???"])

        assert results[1].label == "neutral"
        assert results[1].score == 0.0

    def test_mixed_sentiment_keeps_label(self, mock_comprehend):
        mock_comprehend.batch_detect_sentiment.return_value = {
            'ResultList': [sentiment_result(0, 'MIXED', positive=0.5, negative=0.3)],
        }
        client = ComprehendSentimentClient(comprehend_client=mock_comprehend)

        results = client.analyze_entries(["Good and bad"])

        assert results[0].label == "mixed"
        assert results[0].score == 0.2

    def test_batches_of_twenty_five(self, mock_comprehend):
        """Test that large inputs are split into Comprehend-sized batches."""
        mock_comprehend.batch_detect_sentiment.side_effect = echo_neutral_sentiment
        client = ComprehendSentimentClient(comprehend_client=mock_comprehend)

        results = client.analyze_entries([f"answer {i}" for i in range(30)])

        assert len(results) == 30
        calls = mock_comprehend.batch_detect_sentiment.call_args_list
        assert [len(call[1]['TextList']) for call in calls] == [25, 5]

    def test_empty_input_makes_no_calls(self, mock_comprehend):
        client = ComprehendSentimentClient(comprehend_client=mock_comprehend)

        assert client.analyze_entries([]) == []
        mock_comprehend.batch_detect_sentiment.assert_not_called()

    @patch('sentiment_insights.clients.backoff.time.sleep')
    def test_throttling_is_retried(self, mock_sleep, mock_comprehend):
        """Test that throttled calls are retried with backoff."""
        mock_comprehend.batch_detect_sentiment.side_effect = [
            throttling_error(),
            {'ResultList': [sentiment_result(0, 'POSITIVE', positive=0.9)]},
        ]
        client = ComprehendSentimentClient(comprehend_client=mock_comprehend)

        results = client.analyze_entries(["Great"])

        assert results[0].label == "positive"
        assert mock_comprehend.batch_detect_sentiment.call_count == 2
        mock_sleep.assert_called_once()

    @patch('sentiment_insights.clients.backoff.time.sleep')
    def test_retries_exhausted(self, mock_sleep, mock_comprehend):
        """Test that persistent throttling raises ProviderTransportError."""
        mock_comprehend.batch_detect_sentiment.side_effect = throttling_error()
        client = ComprehendSentimentClient(comprehend_client=mock_comprehend, max_retries=2)

        with pytest.raises(ProviderTransportError) as exc_info:
            client.analyze_entries(["Great"])

        assert exc_info.value.error_code == 'ThrottlingException'
        assert exc_info.value.provider == 'Comprehend'
        assert mock_comprehend.batch_detect_sentiment.call_count == 3
        assert mock_sleep.call_count == 2

    def test_non_retryable_error(self, mock_comprehend):
        """Test that access errors fail immediately."""
        mock_comprehend.batch_detect_sentiment.side_effect = ClientError(
            {'Error': {'Code': 'AccessDeniedException', 'Message': 'Denied'}},
            'BatchDetectSentiment'
        )
        client = ComprehendSentimentClient(comprehend_client=mock_comprehend)

        with pytest.raises(ProviderTransportError) as exc_info:
            client.analyze_entries(["Great"])

        assert exc_info.value.error_code == 'AccessDeniedException'
        assert mock_comprehend.batch_detect_sentiment.call_count == 1

    @patch('sentiment_insights.clients.sentiment.comprehend_client.boto3')
    def test_default_client_uses_region(self, mock_boto3):
        ComprehendSentimentClient(region="eu-west-1")

        mock_boto3.client.assert_called_once_with('comprehend', region_name="eu-west-1")


class TestComprehendKeyPhraseClient:
    """Test key phrase extraction through BatchDetectKeyPhrases."""

    def test_extract_batch(self):
        """Test responses, phrase merging and sentiment."""
        mock_comprehend = Mock()
        mock_comprehend.batch_detect_key_phrases.return_value = {
            'ResultList': [
                {'Index': 0, 'KeyPhrases': [{'Text': 'Battery Life'}, {'Text': 'battery life '}]},
                {'Index': 1, 'KeyPhrases': [{'Text': 'battery life'}, {'Text': 'the screen'}]},
            ],
            'ErrorList': []
        }
        mock_comprehend.batch_detect_sentiment.return_value = {
            'ResultList': [
                sentiment_result(0, 'POSITIVE', positive=0.9),
                sentiment_result(1, 'NEGATIVE', negative=0.6),
            ],
            'ErrorList': []
        }
        client = ComprehendKeyPhraseClient(comprehend_client=mock_comprehend)

        batch = client.extract_batch([
            {"answer": " Battery life is great ", "segment": {"region": "North"}},
            {"answer": "Battery life is fine but the screen is dim", "segment": {"region": "South"}},
        ])

        assert [r.id for r in batch.responses] == ["r_1", "r_2"]
        assert batch.responses[0].sentence == "Battery life is great"
        assert batch.responses[0].segment == {"region": "North"}
        assert batch.responses[0].sentiment == "positive"
        assert batch.responses[1].sentiment_score == -0.6

        assert [(item.text, item.mentions) for item in batch.items] == [
            ("battery life", ["r_1", "r_2"]),
            ("the screen", ["r_2"]),
        ]

    def test_response_ids_continue_across_batches(self):
        """Test that IDs reflect the entry's position in the whole input."""
        mock_comprehend = Mock()
        mock_comprehend.batch_detect_key_phrases.side_effect = lambda TextList, LanguageCode: {
            'ResultList': [{'Index': i, 'KeyPhrases': []} for i in range(len(TextList))]
        }
        mock_comprehend.batch_detect_sentiment.side_effect = echo_neutral_sentiment
        client = ComprehendKeyPhraseClient(comprehend_client=mock_comprehend)

        batch = client.extract_batch([f"answer {i}" for i in range(27)])

        assert len(batch.responses) == 27
        assert batch.responses[25].id == "r_26"
        assert batch.responses[26].sentence == "answer 26"
        assert batch.items == []


class TestComprehendEntityClient:
    """Test entity extraction through BatchDetectEntities."""

    def test_extract_batch(self):
        mock_comprehend = Mock()
        mock_comprehend.batch_detect_entities.return_value = {
            'ResultList': [
                {'Index': 0, 'Entities': [
                    {'Text': 'Acme', 'Type': 'ORGANIZATION'},
                    {'Text': 'Paris', 'Type': 'LOCATION'},
                ]},
                {'Index': 1, 'Entities': [
                    {'Text': 'ACME', 'Type': 'ORGANIZATION'},
                    {'Text': 'Acme', 'Type': 'COMMERCIAL_ITEM'},
                    {'Text': '', 'Type': 'PERSON'},
                ]},
            ],
            'ErrorList': []
        }
        client = ComprehendEntityClient(comprehend_client=mock_comprehend)

        batch = client.extract_batch([
            {"answer": "Acme shipped to Paris", "segment": {"age": "18-25"}},
            {"answer": "ACME makes the Acme phone"},
        ])

        assert [r.id for r in batch.responses] == ["r_1", "r_2"]
        assert batch.responses[0].segment == {"age": "18-25"}
        assert batch.responses[1].sentiment is None
        assert [(i.text, i.type, i.mentions) for i in batch.items] == [
            ("acme", "ORGANIZATION", ["r_1", "r_2"]),
            ("paris", "LOCATION", ["r_1"]),
            ("acme", "COMMERCIAL_ITEM", ["r_2"]),
        ]
