"""
ContentSafetyFilter 테스트
"""

import pytest

from shanti.core.content_guard import ContentSafetyFilter


class TestIsSafe:
    @pytest.mark.parametrize("phrase", ContentSafetyFilter.DENYLIST)
    def test_each_denylisted_phrase_is_blocked(self, phrase):
        assert not ContentSafetyFilter.is_safe(f"some text {phrase} more text")

    def test_case_insensitive(self):
        assert not ContentSafetyFilter.is_safe("I want to END IT ALL")

    def test_substring_match(self):
        # "die" 부분 문자열 매칭 (diet)
        assert not ContentSafetyFilter.is_safe("starting a new diet")

    def test_clean_text(self):
        assert ContentSafetyFilter.is_safe("Today I went for a walk and felt better.")

    def test_fullwidth_characters_normalized(self):
        assert not ContentSafetyFilter.is_safe("ｓｕｉｃｉｄｅ")

    def test_empty_text(self):
        assert ContentSafetyFilter.is_safe("")


class TestFindPhrase:
    def test_returns_first_match(self):
        assert ContentSafetyFilter.find_phrase("pills and overdose") == "overdose"

    def test_none_when_clean(self):
        assert ContentSafetyFilter.find_phrase("gratitude journal") is None


class TestScreenStory:
    def test_both_clean(self):
        assert ContentSafetyFilter.screen_story("My week", "Small steps every day")

    def test_title_blocked(self):
        assert not ContentSafetyFilter.screen_story("Thinking about death", "fine body")

    def test_content_blocked(self):
        assert not ContentSafetyFilter.screen_story("Fine title", "I want to hurt myself")
