"""
Test suite for rich-text markup cleanup.

System role: Verification of the message cleaning stage
"""

import pytest

from backend.core.document_processing.tasks.cleaning_task import strip_markup


class TestStripMarkup:
    """Test suite for strip_markup()."""

    def test_strip_markup_should_remove_tags_and_unescape_entities(self) -> None:
        """Test inline tags vanish and entities become characters."""
        raw = "<p>Deploys happen on <b>Tuesday</b> &amp; Thursday</p>"

        assert strip_markup(raw) == "Deploys happen on Tuesday & Thursday"

    def test_strip_markup_should_drop_script_and_style_blocks(self) -> None:
        """Test script/style content never reaches the text."""
        raw = "<style>p { color: red; }</style>Hello<script>alert('x')</script> world"

        assert strip_markup(raw) == "Hello world"

    def test_strip_markup_should_turn_block_tags_into_line_breaks(self) -> None:
        """Test paragraphs and breaks keep lines apart."""
        raw = "<p>first</p><p>second</p>third<br/>fourth"

        assert strip_markup(raw) == "first\nsecond\nthird\nfourth"

    def test_strip_markup_should_collapse_whitespace(self) -> None:
        """Test runs of spaces and blank lines collapse."""
        raw = "a    b&nbsp;&nbsp;c\n\n\n\nd"

        assert strip_markup(raw) == "a b c\n\nd"

    @pytest.mark.parametrize("raw", [None, "", "<p></p>", "<br>  <br>"])
    def test_strip_markup_should_return_empty_when_nothing_remains(self, raw) -> None:
        """Test markup-only input becomes an empty string."""
        assert strip_markup(raw) == ""

    def test_strip_markup_should_leave_plain_text_untouched(self) -> None:
        """Test plain text passes through."""
        assert strip_markup("plain text") == "plain text"
