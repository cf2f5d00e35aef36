"""
Retry helper with exponential backoff for provider calls.

Used by both the boto3-based Amazon Comprehend clients and the HTTP chat
transports, so transient throttling and server errors are retried the same
way regardless of provider.
"""

import logging
import random
import time
from typing import Callable, Optional, TypeVar

import requests
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import ProviderTransportError

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

T = TypeVar('T')

RETRYABLE_ERROR_CODES = {
    'ThrottlingException',
    'TooManyRequestsException',
    'InternalServerException',
    'InternalServerError',
    'ServiceUnavailableException',
}

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504, 529}


def _status_code(exception: Exception) -> Optional[int]:
    response = getattr(exception, 'response', None)
    return getattr(response, 'status_code', None)


def _error_code(exception: Exception) -> Optional[str]:
    if isinstance(exception, ClientError):
        return exception.response.get('Error', {}).get('Code')
    return None


class ExponentialBackoff:
    """
    Exponential backoff retry policy.

    Provides exponentially increasing delays between retry attempts with
    optional jitter.

    Attributes:
        max_retries: Maximum number of retry attempts
        base_delay_ms: Initial delay in milliseconds
        max_delay_ms: Maximum delay cap in milliseconds
        jitter: Whether to add random jitter to delays
    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay_ms: float = 100.0,
        max_delay_ms: float = 5000.0,
        jitter: bool = True
    ):
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms
        self.jitter = jitter

    def get_delay(self, attempt: int) -> float:
        """
        Calculate delay in seconds for a given retry attempt (0-indexed).

        delay = base_delay * 2^attempt, capped at max_delay, then scaled by
        a random factor in [0.5, 1.5) when jitter is enabled.
        """
        delay_ms = min(self.base_delay_ms * (2 ** attempt), self.max_delay_ms)

        if self.jitter:
            delay_ms *= random.uniform(0.5, 1.5)

        return delay_ms / 1000.0

    def should_retry(self, attempt: int, exception: Exception) -> bool:
        """
        Determine if an operation should be retried.

        Retryable errors:
        - AWS throttling and internal server error codes
        - HTTP 429 and 5xx responses
        - Connection errors and timeouts

        Args:
            attempt: Current retry attempt number (0-indexed)
            exception: The exception that was raised

        Returns:
            True if the operation should be retried, False otherwise
        """
        if attempt >= self.max_retries:
            return False

        error_code = _error_code(exception)
        if error_code in RETRYABLE_ERROR_CODES:
            logger.info(
                f"Retryable error detected: {error_code}. "
                f"Attempt {attempt + 1}/{self.max_retries}"
            )
            return True

        status_code = _status_code(exception)
        if status_code in RETRYABLE_STATUS_CODES:
            logger.info(
                f"Retryable HTTP status detected: {status_code}. "
                f"Attempt {attempt + 1}/{self.max_retries}"
            )
            return True

        if isinstance(exception, (requests.ConnectionError, requests.Timeout)):
            logger.info(
                f"Retryable connection error detected: {exception.__class__.__name__}. "
                f"Attempt {attempt + 1}/{self.max_retries}"
            )
            return True

        logger.warning(
            f"Non-retryable error detected: {exception.__class__.__name__}. "
            "Will not retry."
        )
        return False

    def execute(self, operation: Callable[[], T], provider: str) -> T:
        """
        Run an operation, retrying transient failures.

        Args:
            operation: Zero-argument callable performing one provider call
            provider: Provider name used in logs and errors

        Returns:
            The operation's result

        Raises:
            ProviderTransportError: If the call fails with a non-retryable
                error or retries are exhausted
        """
        attempt = 0

        while True:
            try:
                result = operation()

                if attempt > 0:
                    logger.info(f"{provider} call succeeded on attempt {attempt + 1}")

                return result

            except (ClientError, BotoCoreError, requests.RequestException, ValueError) as e:
                if self.should_retry(attempt, e):
                    delay = self.get_delay(attempt)
                    logger.warning(
                        f"{provider} call failed (attempt {attempt + 1}): {e}. "
                        f"Retrying in {delay:.3f}s..."
                    )
                    time.sleep(delay)
                    attempt += 1
                    continue

                logger.error(f"{provider} call failed after {attempt + 1} attempts: {e}")
                raise ProviderTransportError(
                    f"{provider} call failed: {e}",
                    provider=provider,
                    status_code=_status_code(e),
                    error_code=_error_code(e)
                ) from e
