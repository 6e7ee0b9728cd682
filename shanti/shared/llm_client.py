"""
Generation Gateway Module
Single entry point for calls to the external generation service.

This module wraps litellm.acompletion with the fixed generation contract used
by the guide:
- One call per invocation (no retries, no streaming)
- Fixed sampling configuration and permissive safety settings
- Bounded timeout
- Typed failures (missing credential, invalid credential, transport)
"""

import asyncio
import time
from collections.abc import Callable
from typing import Any, Dict, Optional

from litellm import acompletion
from litellm.exceptions import AuthenticationError

from shanti.domain.exceptions import (
    GenerationTransportError,
    InvalidCredentialError,
    MissingCredentialError,
)
from shanti.monitoring.logger import AgentLogger
from shanti.shared.constants import (
    DEFAULT_MODEL,
    GENERATION_MAX_TOKENS,
    GENERATION_TEMPERATURE,
    GENERATION_TOP_K,
    GENERATION_TOP_P,
    INVALID_KEY_PHRASES,
    REQUEST_TIMEOUT_SECONDS,
    SAFETY_SETTINGS,
)

EMPTY_REPLY_PLACEHOLDER = "My child, words fail me at this moment, but my presence is with you."


def is_invalid_credential_message(message: str) -> bool:
    """Whether an upstream failure message reports a rejected API key."""
    return any(phrase in (message or "") for phrase in INVALID_KEY_PHRASES)


class GenerationGateway:
    """
    Gateway to the external generation service.

    Usage:
        gateway = GenerationGateway(credential_provider=resolver.resolve)
        text = await gateway.generate(prompt_text)

    Failure modes (in priority order):
        MissingCredentialError: no usable key, raised before any network call
        InvalidCredentialError: upstream rejected the key
        GenerationTransportError: non-success response, network error, timeout,
            or a response without the expected shape
    """

    def __init__(
        self,
        credential_provider: Callable[[], Optional[str]],
        model: str = DEFAULT_MODEL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        logger: Optional[AgentLogger] = None,
    ):
        """
        Initialize the gateway.

        Args:
            credential_provider: Callable returning the API key (or None); called per request
                so runtime overrides take effect without a restart
            model: litellm model identifier (e.g., "gemini/gemini-pro")
            timeout: Upper bound for a single call in seconds
            logger: Optional logger instance for tracking API calls
        """
        self.credential_provider = credential_provider
        self.model = model
        self.timeout = timeout
        self.logger = logger or AgentLogger("generation_gateway")

        # Statistics tracking
        self._total_calls = 0
        self._total_prompt_tokens = 0
        self._total_completion_tokens = 0
        self._total_errors = 0

    def has_credential(self) -> bool:
        return bool(self.credential_provider())

    def request_options(self) -> Dict[str, Any]:
        """Fixed generation configuration sent with every request."""
        return {
            "temperature": GENERATION_TEMPERATURE,
            "top_k": GENERATION_TOP_K,
            "top_p": GENERATION_TOP_P,
            "max_tokens": GENERATION_MAX_TOKENS,
            "safety_settings": SAFETY_SETTINGS,
        }

    async def generate(self, prompt_text: str) -> str:
        """
        Send one prompt and return the first candidate's text.

        Args:
            prompt_text: Fully rendered prompt

        Returns:
            Generated text, or EMPTY_REPLY_PLACEHOLDER when the reply carries no text

        Raises:
            MissingCredentialError: No API key is configured
            InvalidCredentialError: The service rejected the API key
            GenerationTransportError: Any other failure
        """
        api_key = self.credential_provider()
        if not api_key:
            raise MissingCredentialError()

        self.logger.llm_request(self.model, prompt_chars=len(prompt_text))
        start_time = time.time()

        try:
            response = await asyncio.wait_for(
                acompletion(
                    model=self.model,
                    messages=[{"role": "user", "content": prompt_text}],
                    api_key=api_key,
                    **self.request_options(),
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            self._total_errors += 1
            raise GenerationTransportError(
                f"Generation request timed out after {self.timeout}s", model=self.model
            ) from e
        except Exception as e:
            self._total_errors += 1
            raise self._classify_failure(e) from e

        self._total_calls += 1
        text = self._extract_text(response)

        latency_ms = (time.time() - start_time) * 1000
        usage = getattr(response, "usage", None)
        if usage is not None:
            self._total_prompt_tokens += getattr(usage, "prompt_tokens", 0) or 0
            self._total_completion_tokens += getattr(usage, "completion_tokens", 0) or 0
            self.logger.llm_response(
                self.model,
                completion_tokens=getattr(usage, "completion_tokens", None),
                latency_ms=latency_ms,
            )
        else:
            self.logger.llm_response(self.model, latency_ms=latency_ms)

        return text

    def _classify_failure(self, error: Exception) -> GenerationTransportError:
        """Map a transport exception to the gateway's typed failures."""
        status_code = getattr(error, "status_code", None)
        upstream_message = getattr(error, "message", None) or str(error) or type(error).__name__

        if status_code is not None:
            message = f"Generation request failed with status {status_code}: {upstream_message}"
        else:
            message = f"Generation request failed: {upstream_message}"

        if isinstance(error, AuthenticationError) or is_invalid_credential_message(upstream_message):
            return InvalidCredentialError(
                message,
                model=self.model,
                status_code=status_code,
                upstream_message=upstream_message,
            )

        return GenerationTransportError(
            message,
            model=self.model,
            status_code=status_code,
            upstream_message=upstream_message,
        )

    def _extract_text(self, response: Any) -> str:
        try:
            choices = response.choices
        except AttributeError as e:
            self._total_errors += 1
            raise GenerationTransportError(
                "Generation response has no choices field", model=self.model
            ) from e

        if not choices:
            return EMPTY_REPLY_PLACEHOLDER

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None) if message is not None else None
        if not isinstance(content, str) or not content:
            return EMPTY_REPLY_PLACEHOLDER
        return content

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get gateway usage statistics.

        Returns:
            Dictionary with total calls, prompt/completion tokens and errors
        """
        return {
            "total_calls": self._total_calls,
            "total_prompt_tokens": self._total_prompt_tokens,
            "total_completion_tokens": self._total_completion_tokens,
            "total_errors": self._total_errors,
        }

    def reset_statistics(self) -> None:
        """Reset usage statistics to zero."""
        self._total_calls = 0
        self._total_prompt_tokens = 0
        self._total_completion_tokens = 0
        self._total_errors = 0
