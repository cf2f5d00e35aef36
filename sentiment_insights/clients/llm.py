"""
Chat completion transports for the hosted LLM providers.

A transport turns a prompt into the model's reply text. The OpenAI and
Anthropic transports differ only in endpoint, headers, request body and
where the reply text sits in the response; retries are shared.
"""

import json
import logging
from typing import Any, Dict, Optional

import requests

from ..errors import ConfigurationError
from .backoff import ExponentialBackoff

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def interpolate_prompt(template: str, text: str, question: Optional[str] = None) -> str:
    """
    Fill a custom prompt template.

    Both "%{text}" and "{text}" placeholders are replaced; question
    placeholders are only replaced when a question is given.
    """
    prompt = template.replace('%{text}', text).replace('{text}', text)
    if question is not None:
        prompt = prompt.replace('%{question}', question).replace('{question}', question)
    return prompt


def extract_json_block(text: str, opener: str = '[', closer: str = ']') -> Optional[str]:
    """
    Extract a JSON array (or object) from text that might contain markdown.

    Returns:
        The bracketed substring, or None if no bracket pair is found
    """
    # Remove markdown code blocks if present
    if "```json" in text:
        start = text.find("```json") + 7
        end = text.find("```", start)
        if end != -1:
            text = text[start:end].strip()
    elif "```" in text:
        start = text.find("```") + 3
        end = text.find("```", start)
        if end != -1:
            text = text[start:end].strip()

    start_idx = text.find(opener)
    end_idx = text.rfind(closer)

    if start_idx == -1 or end_idx == -1 or end_idx < start_idx:
        return None

    return text[start_idx:end_idx + 1]


class ChatTransport:
    """
    Base class for hosted chat completion APIs.

    Attributes:
        provider_name: Name used in logs and errors
        endpoint: URL the request is posted to
        model: Model identifier sent with each request
        session: requests.Session used for HTTP calls
        timeout: Request timeout in seconds
        backoff: Retry policy for transient failures
    """

    provider_name = ""
    endpoint = ""

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        max_retries: int = 3,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the transport.

        Raises:
            ConfigurationError: If no API key is provided
        """
        if not api_key:
            raise ConfigurationError(f"{self.provider_name} API key is required")

        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()
        self.backoff = ExponentialBackoff(
            max_retries=max_retries,
            base_delay_ms=1000.0,  # 1s, 2s, 4s
            max_delay_ms=8000.0,
            jitter=True
        )
        logger.info(f"Initialized {self.provider_name} transport with model: {model}")

    def complete(self, prompt: str, temperature: float = 0.0) -> str:
        """
        Send a single-message prompt and return the reply text.

        Raises:
            ProviderTransportError: If the request fails after retries
        """
        body = self._build_request_body(prompt, temperature)
        data = self.backoff.execute(lambda: self._post(body), self.provider_name)
        return self._extract_text(data)

    def _post(self, body: Dict[str, Any]) -> Dict[str, Any]:
        response = self.session.post(
            self.endpoint,
            headers=self._headers(),
            data=json.dumps(body),
            timeout=self.timeout
        )
        if response.status_code != 200:
            logger.warning(
                f"{self.provider_name} request failed ({response.status_code}): {response.text}"
            )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Expected JSON object, got {type(data).__name__}")
        return data

    def _headers(self) -> Dict[str, str]:
        raise NotImplementedError

    def _build_request_body(self, prompt: str, temperature: float) -> Dict[str, Any]:
        raise NotImplementedError

    def _extract_text(self, data: Dict[str, Any]) -> str:
        raise NotImplementedError


class OpenAIChatTransport(ChatTransport):
    """OpenAI chat completions API."""

    provider_name = "OpenAI"
    endpoint = "https://api.openai.com/v1/chat/completions"

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def _build_request_body(self, prompt: str, temperature: float) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
        }

    def _extract_text(self, data: Dict[str, Any]) -> str:
        choices = data.get("choices") or []
        if not choices:
            return ""
        message = choices[0].get("message") or {}
        return (message.get("content") or "").strip()


class ClaudeChatTransport(ChatTransport):
    """Anthropic messages API."""

    provider_name = "Claude"
    endpoint = "https://api.anthropic.com/v1/messages"
    api_version = "2023-06-01"
    max_tokens = 1000

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
        }

    def _build_request_body(self, prompt: str, temperature: float) -> Dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }

    def _extract_text(self, data: Dict[str, Any]) -> str:
        content = data.get("content") or []
        if not content:
            return ""
        return (content[0].get("text") or "").strip()
