"""
Tests for JSON extraction from model replies.
"""

import pytest

from services.json_extract import extract_json_text, parse_json_object


class TestExtractJsonText:
    """Test the three extraction strategies."""

    def test_fenced_json_block(self):
        """Content of a ```json fence wins."""
        text = 'Sure!\n```json\n{"tools": ["search"]}\n```\nHope that helps {}'
        assert extract_json_text(text) == '{"tools": ["search"]}'

    def test_bare_fence(self):
        """Fences without a language tag work too."""
        assert extract_json_text('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_non_object_fence_skipped(self):
        """A reasoning fence before the JSON does not hide the object."""
        text = 'Thinking:\n```text\nuser wants search\n```\n{"tools": ["search"], "confidence": 0.9}'
        assert extract_json_text(text) == '{"tools": ["search"], "confidence": 0.9}'

    def test_object_fence_after_text_fence(self):
        """The fence that wraps an object is the one taken."""
        text = '```text\nnotes\n```\n```json\n{"tools": {"a": 1}}\n```'
        assert extract_json_text(text) == '{"tools": {"a": 1}}'

    def test_first_balanced_object(self):
        """Without a fence, the first balanced object is taken."""
        text = 'Answer: {"tools": ["expense"], "meta": {"x": 1}} and also {"other": 2}'
        assert extract_json_text(text) == '{"tools": ["expense"], "meta": {"x": 1}}'

    def test_braces_inside_strings(self):
        """Braces inside string values do not end the object."""
        text = 'x {"reasoning": "use } carefully", "tools": []} y'
        assert extract_json_text(text) == '{"reasoning": "use } carefully", "tools": []}'

    def test_raw_text_fallback(self):
        """No braces at all → the stripped raw text."""
        assert extract_json_text("  not json  ") == "not json"

    def test_empty(self):
        """Empty input yields an empty string."""
        assert extract_json_text("") == ""


class TestParseJsonObject:
    """Test decoding."""

    def test_parses_object(self):
        """A reply with prose around JSON decodes."""
        assert parse_json_object('Here: {"tools": ["search"], "confidence": 0.9}') == {
            "tools": ["search"],
            "confidence": 0.9,
        }

    @pytest.mark.parametrize("text", ["I think search", "{tools: [search]}", "", "{'a': 1}"])
    def test_invalid_json_raises(self, text):
        """Invalid JSON is never repaired."""
        with pytest.raises(ValueError):
            parse_json_object(text)

    def test_non_object_raises(self):
        """A JSON array is not an acceptable reply."""
        with pytest.raises(ValueError):
            parse_json_object('["search"]')
