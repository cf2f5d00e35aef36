"""
Unit tests for provider client construction.
"""

import pytest
import sys
import os
from unittest.mock import patch

# Add the parent directory to the path so we can import the package
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sentiment_insights.clients import (
    ClaudeChatTransport, ComprehendEntityClient, ComprehendKeyPhraseClient,
    ComprehendSentimentClient, LexiconSentimentClient, LLMEntityClient,
    LLMKeyPhraseClient, LLMSentimentClient, OpenAIChatTransport,
    build_chat_transport, build_entity_client, build_key_phrase_client,
    build_sentiment_client
)
from sentiment_insights.config import InsightsConfig, Provider
from sentiment_insights.errors import (
    ConfigurationError, UnknownProviderError, UnsupportedCapabilityError
)


@pytest.fixture
def keyed_config():
    return InsightsConfig(
        openai_api_key="sk-test",
        claude_api_key="claude-test",
        openai_model="gpt-4o",
        max_retries=1,
        request_timeout=10.0
    )


class TestBuildSentimentClient:
    """Test sentiment client selection."""

    def test_default_is_lexicon(self):
        assert isinstance(build_sentiment_client(), LexiconSentimentClient)

    def test_lexicon_alias(self):
        assert isinstance(build_sentiment_client("local"), LexiconSentimentClient)

    @patch('sentiment_insights.clients.sentiment.comprehend_client.boto3')
    def test_aws(self, mock_boto3):
        config = InsightsConfig(aws_region="ap-southeast-2", max_retries=4)

        client = build_sentiment_client(Provider.AWS, config)

        assert isinstance(client, ComprehendSentimentClient)
        mock_boto3.client.assert_called_once_with('comprehend', region_name="ap-southeast-2")
        assert client.backoff.max_retries == 4

    def test_openai(self, keyed_config):
        client = build_sentiment_client("openai", keyed_config)

        assert isinstance(client, LLMSentimentClient)
        assert isinstance(client.transport, OpenAIChatTransport)
        assert client.transport.model == "gpt-4o"
        assert client.transport.timeout == 10.0
        assert client.transport.backoff.max_retries == 1

    def test_claude(self, keyed_config):
        client = build_sentiment_client("claude", keyed_config)

        assert isinstance(client.transport, ClaudeChatTransport)
        assert client.transport.model == "claude-3-haiku-20240307"

    def test_missing_key(self):
        with pytest.raises(ConfigurationError, match="OpenAI API key is required"):
            build_sentiment_client("openai", InsightsConfig())

    def test_unknown_provider(self):
        with pytest.raises(UnknownProviderError):
            build_sentiment_client("watson")


class TestBuildExtractionClients:
    """Test key phrase and entity client selection."""

    def test_key_phrases_unsupported_for_lexicon(self):
        with pytest.raises(UnsupportedCapabilityError) as exc_info:
            build_key_phrase_client("local-lexicon")

        assert "'sentimental' provider" in str(exc_info.value)
        assert isinstance(exc_info.value, NotImplementedError)

    def test_entities_unsupported_for_default(self):
        with pytest.raises(UnsupportedCapabilityError, match="Entity recognition is not supported"):
            build_entity_client()

    @patch('sentiment_insights.clients.key_phrases.comprehend_client.boto3')
    def test_key_phrases_aws(self, mock_boto3):
        assert isinstance(build_key_phrase_client("aws"), ComprehendKeyPhraseClient)

    @patch('sentiment_insights.clients.entities.comprehend_client.boto3')
    def test_entities_aws(self, mock_boto3):
        assert isinstance(build_entity_client("aws"), ComprehendEntityClient)

    def test_llm_clients(self, keyed_config):
        key_phrase_client = build_key_phrase_client("claude", keyed_config)
        entity_client = build_entity_client("openai", keyed_config)

        assert isinstance(key_phrase_client, LLMKeyPhraseClient)
        assert isinstance(key_phrase_client.transport, ClaudeChatTransport)
        assert key_phrase_client.sentiment_client.transport is key_phrase_client.transport
        assert isinstance(entity_client, LLMEntityClient)
        assert isinstance(entity_client.transport, OpenAIChatTransport)

    def test_configured_provider_is_used(self, keyed_config):
        keyed_config.provider = Provider.OPENAI

        assert isinstance(build_entity_client(config=keyed_config), LLMEntityClient)


class TestBuildChatTransport:
    """Test chat transport selection."""

    def test_rejects_non_llm_provider(self, keyed_config):
        with pytest.raises(ValueError, match="not a chat completion provider"):
            build_chat_transport(Provider.AWS, keyed_config)
