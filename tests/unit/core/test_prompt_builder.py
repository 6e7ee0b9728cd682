"""Tests for shanti.core.prompt_builder module."""

import pytest

from shanti.core.prompt_builder import PromptBuilder
from shanti.domain.entities.guide import ExerciseId, MoodType, Purpose
from shanti.shared.constants import NO_CONTEXT_SENTINEL


class TestChatPrompt:
    def test_contains_persona_prompt_and_context(self):
        prompt = PromptBuilder.build("chat", "I feel lost", context="Source: FAQ\nBe gentle.")

        assert prompt.startswith(PromptBuilder.SYSTEM_PROMPT)
        assert '"I feel lost"' in prompt
        assert "Source: FAQ\nBe gentle." in prompt

    def test_marker_instruction(self):
        prompt = PromptBuilder.build(Purpose.CHAT, "I feel lost", context="ctx")
        assert "[TOOLKIT_SUGGESTION:{exercise_id}]" in prompt

    def test_lists_all_exercises(self):
        prompt = PromptBuilder.build(Purpose.CHAT, "I feel lost", context="ctx")
        for exercise in ExerciseId:
            assert f"- {exercise.value} (" in prompt

    def test_missing_context_uses_sentinel(self):
        prompt = PromptBuilder.build(Purpose.CHAT, "I feel lost")
        assert NO_CONTEXT_SENTINEL in prompt


class TestJournalAndMoodPrompts:
    def test_journal_embeds_mood(self):
        prompt = PromptBuilder.build(Purpose.JOURNAL, "Long day at work", mood=MoodType.CALM)

        assert "Their current state of mind is 'calm'." in prompt
        assert "Long day at work" in prompt

    def test_mood_not_specified(self):
        prompt = PromptBuilder.build(Purpose.MOOD, "Feeling off")
        assert "Their mood is 'not specified'." in prompt

    def test_mood_accepts_plain_string(self):
        prompt = PromptBuilder.build("mood", "Feeling off", mood="anxious")
        assert "Their mood is 'anxious'." in prompt

    @pytest.mark.parametrize("purpose", [Purpose.JOURNAL, Purpose.MOOD])
    def test_no_context_or_marker(self, purpose):
        prompt = PromptBuilder.build(purpose, "text", mood="sad", context="SECRET CONTEXT")

        assert "SECRET CONTEXT" not in prompt
        assert "TOOLKIT_SUGGESTION" not in prompt


class TestUnknownPurpose:
    def test_raises_value_error(self):
        with pytest.raises(ValueError):
            PromptBuilder.build("poem", "text")
