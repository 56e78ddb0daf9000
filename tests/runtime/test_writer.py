"""Tests for the render-time sinks."""

from io import StringIO

import pytest

from cssderive.runtime import CssWriter, SequenceWriter, ToCss, Verbatim, render_value, to_css_string
from tests.conftest import FailingSink


class Percentage:
    def __init__(self, value: float) -> None:
        self.value = value

    def to_css(self, dest: CssWriter) -> None:
        dest.write_str(f"{self.value * 100:g}%")


class TestRenderValue:
    def test_to_css_object(self) -> None:
        assert to_css_string(Percentage(0.5)) == "50%"
        assert isinstance(Percentage(1), ToCss)

    @pytest.mark.parametrize(("value", "expected"), [("auto", "auto"), (3, "3"), (1.5, "1.5")])
    def test_primitives(self, value: object, expected: str) -> None:
        assert to_css_string(value) == expected

    def test_bool_rejected(self) -> None:
        with pytest.raises(TypeError, match="bool"):
            to_css_string(True)

    def test_unrenderable(self) -> None:
        with pytest.raises(TypeError, match="dict does not implement to_css"):
            render_value({}, CssWriter(StringIO()))

    def test_verbatim(self) -> None:
        assert to_css_string(Verbatim('"quoted"')) == '"quoted"'


class TestSequenceWriter:
    def test_separator_between_items_only(self) -> None:
        buf = StringIO()
        writer = SequenceWriter(CssWriter(buf), ", ")
        for item in ("a", "b", "c"):
            writer.item(item)
        assert buf.getvalue() == "a, b, c"

    def test_no_items_writes_nothing(self) -> None:
        buf = StringIO()
        SequenceWriter(CssWriter(buf), ", ")
        assert buf.getvalue() == ""

    def test_single_item_no_separator(self) -> None:
        buf = StringIO()
        SequenceWriter(CssWriter(buf), " ").item(Percentage(0.25))
        assert buf.getvalue() == "25%"

    @pytest.mark.parametrize(
        ("items", "expected"),
        [
            (["", "1px", "red"], "1px, red"),
            (["1px", "", "red"], "1px, red"),
            (["1px", "red", ""], "1px, red"),
            (["", "", ""], ""),
        ],
    )
    def test_empty_items_take_no_separator(self, items: list[object], expected: str) -> None:
        buf = StringIO()
        writer = SequenceWriter(CssWriter(buf), ", ")
        for item in items:
            writer.item(item)
        assert buf.getvalue() == expected

    def test_to_css_writing_nothing_is_empty(self) -> None:
        buf = StringIO()
        writer = SequenceWriter(CssWriter(buf), " ")
        for item in ("a", Verbatim(""), "b"):
            writer.item(item)
        assert buf.getvalue() == "a b"

    def test_nested_sequence_inherits_pending_separator(self) -> None:
        class Pair:
            def to_css(self, dest: CssWriter) -> None:
                inner = SequenceWriter(dest, " ")
                inner.item("x")
                inner.item("y")

        buf = StringIO()
        writer = SequenceWriter(CssWriter(buf), ", ")
        writer.item("a")
        writer.item(Pair())
        assert buf.getvalue() == "a, x y"

    def test_separator_reaches_sink_with_next_item(self) -> None:
        sink = FailingSink(limit=10)
        writer = SequenceWriter(CssWriter(sink), ", ")
        writer.item("a")
        writer.item("")
        assert sink.written == ["a"]
        writer.item("b")
        assert sink.written == ["a", ", ", "b"]


class TestFailurePropagation:
    def test_sink_error_propagates_unchanged(self) -> None:
        sink = FailingSink(limit=1)
        writer = SequenceWriter(CssWriter(sink), " ")
        writer.item("a")
        with pytest.raises(OSError, match="sink is full"):
            writer.item("b")
        assert sink.text == "a"
