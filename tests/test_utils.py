"""Tests for streamini utility modules."""

import logging

import pytest

from streamini.location import SourceLocation
from streamini.stringbuilder import StringBuilder
from streamini.utils.logger import get_logger


class TestGetLogger:
    """Tests for get_logger."""

    def test_prefixes_name(self) -> None:
        assert get_logger("mymodule").name == "streamini.mymodule"

    def test_keeps_package_names(self) -> None:
        assert get_logger("streamini.lexer.core").name == "streamini.lexer.core"
        assert get_logger("streamini").name == "streamini"

    def test_returns_stdlib_logger(self) -> None:
        assert isinstance(get_logger("x"), logging.Logger)


class TestStringBuilder:
    """Tests for StringBuilder."""

    def test_build(self) -> None:
        sb = StringBuilder()
        sb.append("sect").append("ion").append(".")
        assert sb.build() == "section."

    def test_suffix_counts_characters(self) -> None:
        sb = StringBuilder().append("kŭ").append("\U0001f600")
        assert sb
        assert sb.endswith("ŭ\U0001f600")
        assert not sb.endswith("xkŭ\U0001f600")

    def test_empty(self) -> None:
        sb = StringBuilder().append("")
        assert not sb
        assert sb.build() == ""

    @pytest.mark.parametrize(
        "parts,suffix,expected",
        [
            (["a", "b", "."], ".", True),
            (["a", "_-", "_"], "_-_", True),
            (["a_-_"], "_-_", True),
            (["a", "_-"], "_-_", False),
            (["_"], "_-_", False),
            (["x"], "", True),
        ],
    )
    def test_endswith(self, parts: list[str], suffix: str, expected: bool) -> None:
        sb = StringBuilder()
        for part in parts:
            sb.append(part)
        assert sb.endswith(suffix) is expected

    def test_build_is_repeatable(self) -> None:
        sb = StringBuilder().append("a").append("b")
        assert sb.build() == "ab"
        sb.append("c")
        assert sb.build() == "abc"
        assert sb.endswith("abc")

    def test_clear(self) -> None:
        sb = StringBuilder().append("abc").clear()
        assert not sb
        assert not sb.endswith("c")
        assert sb.build() == ""


class TestSourceLocation:
    """Tests for SourceLocation."""

    def test_str(self) -> None:
        assert str(SourceLocation(2, 5)) == "2:5"
        assert str(SourceLocation(2, 5, "settings.ini")) == "settings.ini:2:5"

    def test_frozen(self) -> None:
        loc = SourceLocation(1, 1)
        with pytest.raises(AttributeError):
            loc.lineno = 2  # type: ignore[misc]
