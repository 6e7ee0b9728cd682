"""Tests for shanti.agents.guide_agent module."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from shanti.agents.guide_agent import (
    INVALID_CREDENTIAL_TEXT,
    MISSING_CREDENTIAL_TEXT,
    GuideAgent,
    get_response,
)
from shanti.core.fallback import FallbackResponder
from shanti.domain.entities.guide import GenerationResult
from shanti.domain.entities.knowledge import ContextBundle
from shanti.domain.exceptions import (
    GenerationTransportError,
    InvalidCredentialError,
    MissingCredentialError,
)
from shanti.infrastructure.container import Container
from shanti.rag.context_builder import ContextComposer
from shanti.rag.loader import KnowledgeSourceLoader
from shanti.rag.wellness_guide import WellnessGuide
from shanti.shared.llm_client import GenerationGateway

CONTEXT = ContextBundle(
    combined="Source: FAQ\nBreathing helps.",
    dataset_part="Source: FAQ\nBreathing helps.",
)


@pytest.fixture
def composer():
    mock = MagicMock(spec=ContextComposer)
    mock.build_context = AsyncMock(return_value=CONTEXT)
    return mock


@pytest.fixture
def gateway():
    mock = MagicMock(spec=GenerationGateway)
    mock.model = "gemini/gemini-pro"
    mock.has_credential.return_value = True
    mock.generate = AsyncMock(return_value="Be at peace.\n[TOOLKIT_SUGGESTION:box-breathing]")
    return mock


@pytest.fixture
def agent(composer, gateway, test_logger):
    return GuideAgent(composer=composer, gateway=gateway, logger=test_logger)


class TestChatPurpose:
    @pytest.mark.asyncio
    async def test_suggestion_extracted(self, agent, composer, gateway):
        result = await agent.get_response("I feel anxious today", "chat")

        assert result.text == "Be at peace."
        assert result.suggestion == "box-breathing"
        assert not result.is_fallback
        composer.build_context.assert_awaited_once_with("I feel anxious today")

    @pytest.mark.asyncio
    async def test_context_embedded_in_prompt(self, agent, gateway):
        await agent.get_response("I feel anxious today", "chat")

        prompt_text = gateway.generate.call_args[0][0]
        assert "Source: FAQ\nBreathing helps." in prompt_text
        assert "[TOOLKIT_SUGGESTION:{exercise_id}]" in prompt_text

    @pytest.mark.asyncio
    async def test_reply_without_marker(self, agent, gateway):
        gateway.generate.return_value = "Walk your path with courage."

        result = await agent.get_response("hello", "chat")

        assert result.text == "Walk your path with courage."
        assert result.suggestion is None


class TestJournalAndMoodPurposes:
    @pytest.mark.asyncio
    async def test_journal_skips_retrieval_and_extraction(self, agent, composer, gateway):
        gateway.generate.return_value = "Insight [TOOLKIT_SUGGESTION:body-scan]"

        result = await agent.get_response("Long day", "journal", mood="calm")

        composer.build_context.assert_not_called()
        assert result.text == "Insight [TOOLKIT_SUGGESTION:body-scan]"
        assert result.suggestion is None
        assert "'calm'" in gateway.generate.call_args[0][0]

    @pytest.mark.asyncio
    async def test_mood_returns_text(self, agent, composer, gateway):
        gateway.generate.return_value = "Peace be with you."

        result = await agent.get_response("Feeling off", "mood")

        composer.build_context.assert_not_called()
        assert result.text == "Peace be with you."

    @pytest.mark.asyncio
    async def test_unknown_purpose(self, agent):
        with pytest.raises(ValueError):
            await agent.get_response("text", "poem")


class TestCredentialFailures:
    @pytest.mark.asyncio
    async def test_missing_credential_skips_everything(self, agent, composer, gateway):
        gateway.has_credential.return_value = False

        result = await agent.get_response("I feel anxious today", "chat")

        assert result.text == MISSING_CREDENTIAL_TEXT
        assert result.suggestion is None
        composer.build_context.assert_not_called()
        gateway.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_credential_raised_by_gateway(self, agent, gateway):
        gateway.generate.side_effect = MissingCredentialError()

        result = await agent.get_response("hello", "mood")

        assert result.text == MISSING_CREDENTIAL_TEXT

    @pytest.mark.asyncio
    async def test_invalid_credential_no_fallback(self, agent, gateway):
        gateway.generate.side_effect = InvalidCredentialError(
            "rejected", status_code=400, upstream_message="API key not valid"
        )

        result = await agent.get_response("I feel so anxious", "chat")

        assert result.text == INVALID_CREDENTIAL_TEXT
        assert result.suggestion is None
        assert not result.is_fallback


class TestFallback:
    @pytest.mark.asyncio
    async def test_transport_error_uses_computed_context(self, agent, composer, gateway):
        gateway.generate.side_effect = GenerationTransportError("503", status_code=503)

        result = await agent.get_response("I am so stressed", "chat")

        assert result.is_fallback
        assert "Source: FAQ Breathing helps." in result.text
        assert result.suggestion == "box-breathing"
        composer.build_context.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_mood_fallback(self, agent, gateway):
        gateway.generate.side_effect = GenerationTransportError("network down")

        result = await agent.get_response("I feel so anxious and panicky", "mood")

        assert result.is_fallback
        assert "I feel so anxious and panicky" in result.text
        assert result.suggestion == "box-breathing"

    @pytest.mark.asyncio
    async def test_journal_fallback_has_no_suggestion(self, agent, gateway):
        gateway.generate.side_effect = GenerationTransportError("timeout")

        result = await agent.get_response("I feel lonely", "journal", mood="sad")

        assert result.is_fallback
        assert result.suggestion is None

    @pytest.mark.asyncio
    async def test_context_failure_falls_back(self, agent, composer, gateway):
        composer.build_context.side_effect = OSError("disk unavailable")

        result = await agent.get_response("I feel anxious today", "chat")

        assert result.is_fallback
        assert result.text not in (MISSING_CREDENTIAL_TEXT, INVALID_CREDENTIAL_TEXT)
        gateway.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_undecodable_wellness_guide_falls_back(self, data_dir, gateway, test_logger):
        guide_path = data_dir / "wellness-info.md"
        guide_path.write_bytes(b"## Calm\n\xff\xfe")
        composer = ContextComposer(
            KnowledgeSourceLoader(data_dir=data_dir), WellnessGuide(path=guide_path)
        )
        gateway.generate.side_effect = GenerationTransportError("503", status_code=503)
        agent = GuideAgent(composer=composer, gateway=gateway, logger=test_logger)

        result = await agent.get_response("I feel anxious today", "chat")

        assert isinstance(result, GenerationResult)
        assert result.is_fallback
        assert FallbackResponder.DATASET_HEADING in result.text


class TestAuditLogging:
    @pytest.mark.asyncio
    async def test_writes_audit_record(self, agent, test_logger):
        await agent.get_response("I feel anxious today", "chat")

        audit_files = list(test_logger.log_dir.glob("guide_audit_*.jsonl"))
        assert len(audit_files) == 1
        content = audit_files[0].read_text(encoding="utf-8")
        assert '"outcome": "generated"' in content
        assert '"suggestion": "box-breathing"' in content
        assert '"dataset_context": true' in content


class TestModuleEntryPoint:
    @pytest.mark.asyncio
    async def test_get_response_uses_container(self, agent, gateway):
        gateway.generate.return_value = "Peace."
        Container.override("guide_agent", agent)

        result = await get_response("Feeling off", "mood", {"mood": "sad"})

        assert result == {"text": "Peace.", "suggestion": None}
        assert "'sad'" in gateway.generate.call_args[0][0]

    @pytest.mark.asyncio
    async def test_get_response_without_options(self, agent):
        Container.override("guide_agent", agent)

        result = await get_response("I feel anxious today", "chat")

        assert result == {"text": "Be at peace.", "suggestion": "box-breathing"}
