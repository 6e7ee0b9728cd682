"""Tests for shanti.shared.llm_client module."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest
from litellm.exceptions import AuthenticationError

from shanti.domain.exceptions import (
    GenerationTransportError,
    InvalidCredentialError,
    MissingCredentialError,
)
from shanti.shared.llm_client import (
    EMPTY_REPLY_PLACEHOLDER,
    GenerationGateway,
    is_invalid_credential_message,
)


def _make_mock_response(content="test response", prompt_tokens=10, completion_tokens=5):
    """Create a mock LLM response."""
    mock = MagicMock()
    mock.choices = [MagicMock()]
    mock.choices[0].message.content = content
    mock.usage = MagicMock()
    mock.usage.prompt_tokens = prompt_tokens
    mock.usage.completion_tokens = completion_tokens
    return mock


class UpstreamError(Exception):
    """litellm 스타일 (status_code, message) 에러"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TestInvalidCredentialMessage:
    def test_detects_phrases(self):
        assert is_invalid_credential_message("400: API key not valid. Please pass a valid key.")
        assert is_invalid_credential_message("reason: API_KEY_INVALID")

    def test_other_messages(self):
        assert not is_invalid_credential_message("quota exceeded")
        assert not is_invalid_credential_message(None)


class TestGenerationGateway:
    @pytest.fixture
    def gateway(self, test_logger):
        return GenerationGateway(credential_provider=lambda: "test-key", logger=test_logger)

    def test_defaults(self, gateway):
        assert gateway.model == "gemini/gemini-pro"
        assert gateway.timeout == 30.0
        assert gateway.has_credential()

    def test_request_options(self, gateway):
        options = gateway.request_options()

        assert options["temperature"] == 0.7
        assert options["top_k"] == 1
        assert options["top_p"] == 1.0
        assert options["max_tokens"] == 250
        assert [s["threshold"] for s in options["safety_settings"]] == ["BLOCK_NONE"] * 4

    @pytest.mark.asyncio
    @patch("shanti.shared.llm_client.acompletion")
    async def test_generate(self, mock_acompletion, gateway):
        mock_acompletion.return_value = _make_mock_response("Be still, my child.")

        result = await gateway.generate("prompt text")

        assert result == "Be still, my child."
        mock_acompletion.assert_called_once()
        call_kwargs = mock_acompletion.call_args[1]
        assert call_kwargs["model"] == "gemini/gemini-pro"
        assert call_kwargs["api_key"] == "test-key"
        assert call_kwargs["messages"] == [{"role": "user", "content": "prompt text"}]
        assert call_kwargs["max_tokens"] == 250

    @pytest.mark.asyncio
    @patch("shanti.shared.llm_client.acompletion")
    async def test_statistics(self, mock_acompletion, gateway):
        mock_acompletion.return_value = _make_mock_response(prompt_tokens=12, completion_tokens=8)

        await gateway.generate("one")
        await gateway.generate("two")
        stats = gateway.get_statistics()

        assert stats["total_calls"] == 2
        assert stats["total_prompt_tokens"] == 24
        assert stats["total_completion_tokens"] == 16
        assert stats["total_errors"] == 0

        gateway.reset_statistics()
        assert gateway.get_statistics()["total_calls"] == 0

    @pytest.mark.asyncio
    @patch("shanti.shared.llm_client.acompletion")
    async def test_missing_credential_makes_no_call(self, mock_acompletion, test_logger):
        gateway = GenerationGateway(credential_provider=lambda: None, logger=test_logger)

        with pytest.raises(MissingCredentialError):
            await gateway.generate("prompt")

        mock_acompletion.assert_not_called()
        assert not gateway.has_credential()

    @pytest.mark.asyncio
    @patch("shanti.shared.llm_client.acompletion")
    async def test_credential_resolved_per_call(self, mock_acompletion, test_logger):
        keys = iter(["first-key", "second-key"])
        gateway = GenerationGateway(credential_provider=lambda: next(keys), logger=test_logger)
        mock_acompletion.return_value = _make_mock_response()

        await gateway.generate("a")
        await gateway.generate("b")

        assert [c[1]["api_key"] for c in mock_acompletion.call_args_list] == [
            "first-key",
            "second-key",
        ]

    @pytest.mark.asyncio
    @patch("shanti.shared.llm_client.acompletion")
    async def test_empty_choices_returns_placeholder(self, mock_acompletion, gateway):
        response = MagicMock()
        response.choices = []
        mock_acompletion.return_value = response

        assert await gateway.generate("prompt") == EMPTY_REPLY_PLACEHOLDER

    @pytest.mark.asyncio
    @patch("shanti.shared.llm_client.acompletion")
    async def test_missing_content_returns_placeholder(self, mock_acompletion, gateway):
        mock_acompletion.return_value = _make_mock_response(content=None)

        assert await gateway.generate("prompt") == EMPTY_REPLY_PLACEHOLDER

    @pytest.mark.asyncio
    @patch("shanti.shared.llm_client.acompletion")
    async def test_unexpected_shape_is_transport_error(self, mock_acompletion, gateway):
        mock_acompletion.return_value = object()

        with pytest.raises(GenerationTransportError):
            await gateway.generate("prompt")

    @pytest.mark.asyncio
    @patch("shanti.shared.llm_client.acompletion")
    async def test_upstream_failure_carries_status(self, mock_acompletion, gateway):
        mock_acompletion.side_effect = UpstreamError("Service unavailable", status_code=503)

        with pytest.raises(GenerationTransportError) as exc_info:
            await gateway.generate("prompt")

        error = exc_info.value
        assert not isinstance(error, InvalidCredentialError)
        assert error.status_code == 503
        assert error.upstream_message == "Service unavailable"
        assert "503" in str(error)
        assert gateway.get_statistics()["total_errors"] == 1

    @pytest.mark.asyncio
    @patch("shanti.shared.llm_client.acompletion")
    async def test_invalid_key_message(self, mock_acompletion, gateway):
        mock_acompletion.side_effect = UpstreamError(
            "API key not valid. Please pass a valid API key.", status_code=400
        )

        with pytest.raises(InvalidCredentialError) as exc_info:
            await gateway.generate("prompt")

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    @patch("shanti.shared.llm_client.acompletion")
    async def test_authentication_error(self, mock_acompletion, gateway):
        mock_acompletion.side_effect = AuthenticationError(
            message="bad key", llm_provider="gemini", model="gemini-pro"
        )

        with pytest.raises(InvalidCredentialError):
            await gateway.generate("prompt")

    @pytest.mark.asyncio
    @patch("shanti.shared.llm_client.acompletion")
    async def test_network_error(self, mock_acompletion, gateway):
        mock_acompletion.side_effect = ConnectionError("connection reset")

        with pytest.raises(GenerationTransportError) as exc_info:
            await gateway.generate("prompt")

        assert exc_info.value.status_code is None
        assert exc_info.value.upstream_message == "connection reset"

    @pytest.mark.asyncio
    @patch("shanti.shared.llm_client.acompletion")
    async def test_timeout(self, mock_acompletion, test_logger):
        async def slow(**kwargs):
            await asyncio.sleep(1)

        mock_acompletion.side_effect = slow
        gateway = GenerationGateway(
            credential_provider=lambda: "key", timeout=0.01, logger=test_logger
        )

        with pytest.raises(GenerationTransportError, match="timed out"):
            await gateway.generate("prompt")
