"""Tests for preview text helpers."""

from promptpilot.utils.text import preview, safe_truncate


class TestSafeTruncate:
    """Tests for safe_truncate."""

    def test_short_text_unchanged(self):
        assert safe_truncate("write a poem", 60) == "write a poem"

    def test_breaks_at_last_word_boundary(self):
        assert safe_truncate("abc def ghi", 9) == "abc def..."

    def test_no_break_point_cuts_hard(self):
        assert safe_truncate("a" * 80, 60) == "a" * 60 + "..."

    def test_danda_is_a_break_point(self):
        text = "केक बनाने की विधि।" + "क" * 60
        assert safe_truncate(text, 20) == "केक बनाने की विधि..."


class TestPreview:
    """Tests for preview."""

    def test_collapses_whitespace(self):
        assert preview("write\n\na   poem") == "write a poem"

    def test_empty(self):
        assert preview("") == ""
