"""Tests for byte offset to line/column resolution."""

import pytest

from template_i18n.extract.position import position_for


class TestPositionFor:
    """Tests for position_for."""

    @pytest.mark.parametrize(
        ("content", "offset", "expected"),
        [
            ("Hello world", 0, "test.html:1:1"),
            ("Hello world", 5, "test.html:1:6"),
            ("Hello\nWorld", 7, "test.html:2:2"),
            ("Hello\nWorld", 6, "test.html:2:1"),
            ("Line1\nLine2\nLine3", 15, "test.html:3:4"),
        ],
    )
    def test_resolves_line_and_column(self, content: str, offset: int, expected: str) -> None:
        assert position_for(content.encode(), offset, "test.html") == expected

    def test_newline_byte_belongs_to_its_line(self) -> None:
        """The newline itself is the last column of the line it ends."""
        assert position_for(b"Hello\nWorld", 5, "a.txt") == "a.txt:1:6"

    def test_negative_offset_is_unknown(self) -> None:
        assert position_for(b"Hello", -1, "test.html") == "test.html:?:?"

    def test_offset_at_length_is_unknown(self) -> None:
        assert position_for(b"Hello", 5, "test.html") == "test.html:?:?"

    def test_offset_past_length_is_unknown(self) -> None:
        assert position_for(b"Hello", 42, "test.html") == "test.html:?:?"

    def test_empty_buffer_is_unknown(self) -> None:
        assert position_for(b"", 0, "empty.html") == "empty.html:?:?"

    def test_columns_count_bytes(self) -> None:
        """Multi-byte characters advance the column by their byte length."""
        content = "é\"x\"".encode()
        assert position_for(content, 2, "u.html") == "u.html:1:3"

    def test_path_label_is_kept_verbatim(self) -> None:
        assert position_for(b"abc", 1, "sub/dir/page.html") == "sub/dir/page.html:1:2"
