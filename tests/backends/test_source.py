"""Tests for the source backend."""

from __future__ import annotations

from collections.abc import Callable
from io import StringIO
from typing import Any, NamedTuple

import pytest

from cssderive.backends.closure import ClosureBackend
from cssderive.backends.source import GeneratedSource, SourceBackend
from cssderive.domain.schema import TypeSchema
from cssderive.generator import generate
from cssderive.runtime import CssWriter
from tests.conftest import FailingSink


class Auto(NamedTuple):
    pass


class Px(NamedTuple):
    value: Any


class Url(NamedTuple):
    url: str


class Layers(NamedTuple):
    items: list[Any]
    color: Any


class Image(NamedTuple):
    layers: list[Any]
    note: str


IMAGE = {
    "name": "BackgroundImage",
    "type_params": ["L", "C"],
    "css": {"derive_debug": True},
    "variants": [
        {"name": "Auto", "css": {"keyword": "initial"}},
        {"name": "Px", "fields": [{"type": "L"}], "css": {"dimension": True}},
        {"name": "Url", "fields": [{"name": "url", "type": "str"}], "css": {"function": True}},
        {
            "name": "Layers",
            "fields": [
                {"name": "items", "type": "list[L]", "css": {"iterable": True}},
                {"name": "color", "type": "C"},
            ],
            "css": {"comma": True},
        },
        {
            "name": "Image",
            "fields": [
                {"name": "layers", "type": "list[L]", "css": {"iterable": True, "if_empty": "none"}},
                {"name": "note", "css": {"skip": True}},
            ],
        },
    ],
}


def _lower(data: dict[str, Any], **kwargs: Any) -> GeneratedSource:
    return SourceBackend(**kwargs).lower(generate(TypeSchema.model_validate(data)))


def _load(source: GeneratedSource) -> dict[str, Any]:
    namespace: dict[str, Any] = {}
    exec(compile(source.text, f"<{source.type_name}>", "exec"), namespace)  # noqa: S102
    return namespace


def _call(fn: Callable[[Any, CssWriter], None], value: Any) -> str:
    buf = StringIO()
    fn(value, CssWriter(buf))
    return buf.getvalue()


class TestGeneratedText:
    def test_names(self) -> None:
        source = _lower(IMAGE)
        assert source.function_name == "background_image_to_css"
        assert source.debug_function_name == "background_image_debug"

    def test_header_and_imports(self) -> None:
        text = _lower(IMAGE).text
        assert text.startswith('"""Generated by cssderive for BackgroundImage. Do not edit."""')
        assert (
            "from cssderive.runtime import CssWriter, SequenceWriter, Verbatim" in text
        )

    def test_no_header(self) -> None:
        text = _lower(IMAGE, header=False).text
        assert text.startswith("from __future__ import annotations")

    def test_custom_runtime_module(self) -> None:
        text = _lower(IMAGE, runtime_module="styles.runtime").text
        assert "from styles.runtime import CssWriter" in text

    def test_bound_predicates(self) -> None:
        text = _lower(IMAGE).text
        assert "BOUND_PREDICATES = ('L', 'C')" in text
        assert "from typing import Any\n" in text
        assert "TypeVar" not in text

    def test_type_params_do_not_shadow_module_names(self) -> None:
        data = {
            "name": "Box",
            "type_params": ["type", "CssWriter"],
            "variants": [{"name": "Box", "fields": [{"type": "type"}, {"type": "CssWriter"}]}],
        }
        source = _lower(data)
        assert _call(_load(source)["box_to_css"], ("a", "b")) == "a b"

    def test_unbounded_params_have_no_predicates(self) -> None:
        data = {
            "name": "List",
            "type_params": ["T"],
            "variants": [{"name": "List", "fields": [{"type": "list[T]", "css": {"iterable": True}}]}],
        }
        text = _lower(data).text
        assert "TypeVar" not in text
        assert "BOUND_PREDICATES = ()" in text

    def test_struct_has_no_match(self) -> None:
        data = {"name": "Px", "variants": [{"name": "Px", "fields": [{}], "css": {"dimension": True}}]}
        text = _lower(data).text
        assert "match" not in text
        assert "SequenceWriter" not in text
        assert "_MISSING" not in text

    def test_deterministic(self) -> None:
        assert _lower(IMAGE).text == _lower(IMAGE).text

    def test_literals_are_escaped(self) -> None:
        data = {"name": "Q", "variants": [{"name": "Q", "css": {"keyword": "a\"b'c\\"}}]}
        fn = _load(_lower(data))["q_to_css"]
        assert _call(fn, object()) == "a\"b'c\\"


class TestMatchesClosureBackend:
    VALUES = [
        Auto(),
        Px(3),
        Url("a.png"),
        Layers(["a", "b"], "red"),
        Layers([], "red"),
        Layers(["", "a", ""], "red"),
        Image([], "n"),
        Image(["x", "y"], "n"),
    ]

    @pytest.mark.parametrize("value", VALUES, ids=lambda v: f"{type(v).__name__}{tuple(v)!r}")
    def test_same_output(self, value: Any) -> None:
        procedure = generate(TypeSchema.model_validate(IMAGE))
        closure = ClosureBackend().lower(procedure)
        generated = _load(SourceBackend().lower(procedure))["background_image_to_css"]
        assert _call(generated, value) == closure.to_string(value)

    def test_expected_text(self) -> None:
        fn = _load(_lower(IMAGE))["background_image_to_css"]
        assert [_call(fn, v) for v in self.VALUES] == [
            "initial",
            "3px",
            "url(a.png)",
            "a, b, red",
            "red",
            "a, red",
            "none",
            "x y",
        ]

    def test_debug_function(self) -> None:
        module = _load(_lower(IMAGE))
        assert module["background_image_debug"](Px(3)) == "3px"

    def test_unknown_variant_raises(self) -> None:
        fn = _load(_lower(IMAGE))["background_image_to_css"]
        with pytest.raises(TypeError, match="not a variant of BackgroundImage"):
            _call(fn, (1, 2))

    def test_failure_stops_before_closing_paren(self) -> None:
        fn = _load(_lower(IMAGE))["background_image_to_css"]
        sink = FailingSink(limit=1)
        with pytest.raises(OSError):
            fn(Url("a.png"), CssWriter(sink))
        assert sink.text == "url("

    def test_empty_enum(self) -> None:
        fn = _load(_lower({"name": "Never"}))["never_to_css"]
        with pytest.raises(TypeError):
            _call(fn, object())


class TestGeneratedModuleCompiles:
    @pytest.mark.parametrize("name", ["type", "match", "case", "from_", "None_"])
    def test_unusual_but_valid_names(self, name: str) -> None:
        data = {
            "name": name,
            "type_params": [name],
            "variants": [
                {"name": name, "fields": [{"name": name, "type": name}, {"name": "b"}]},
                {"name": "Other"},
            ],
        }
        source = _lower(data)
        fn = _load(source)[source.function_name]
        value = type(name, (), {name: "1px", "b": "red"})()
        assert _call(fn, value) == "1px red"
