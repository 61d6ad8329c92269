"""Tests for wayfinder.encoding — safe strings and the reserved-character pipeline."""

import dataclasses
import logging
from decimal import Decimal
from enum import Enum

import pytest

from wayfinder.encoding import (
    build_query_string,
    decode_uri_component,
    encode_key_value,
    encode_key_values,
    encode_reserved_chars,
    encode_uri_component,
    encode_value,
    get_raw_encoded_value,
    has_custom_str,
    normalize_percent_escapes,
    query_items,
    to_safe_string,
)
from wayfinder.errors import ConfigurationError


class Color(Enum):
    RED = "red"
    BLUE = 2


@dataclasses.dataclass
class Point:
    x: int
    y: int


class Named:
    def __init__(self, name: str) -> None:
        self.name = name

    def __str__(self) -> str:
        return f"named:{self.name}"


class Plain:
    def __init__(self) -> None:
        self.a = 1
        self.tags = ["x"]


class Broken:
    def __str__(self) -> str:
        raise RuntimeError("boom")


class TestToSafeString:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ""),
            ("text", "text"),
            ("", ""),
            (True, "true"),
            (False, "false"),
            (0, "0"),
            (1.5, "1.5"),
            (Decimal("1.10"), "1.10"),
            (Color.RED, "red"),
            (Color.BLUE, "2"),
        ],
    )
    def test_primitives(self, value: object, expected: str) -> None:
        assert to_safe_string(value) == expected

    def test_functions_and_classes_are_empty(self) -> None:
        assert to_safe_string(len) == ""
        assert to_safe_string(lambda: 1) == ""
        assert to_safe_string(Point) == ""

    def test_custom_str(self) -> None:
        assert to_safe_string(Named("a")) == "named:a"

    def test_raising_str_is_empty(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="wayfinder.encoding"):
            assert to_safe_string(Broken()) == ""
        assert "boom" in caplog.text

    def test_dict_is_compact_json(self) -> None:
        assert to_safe_string({"a": 1, "b": [1, 2]}) == '{"a":1,"b":[1,2]}'

    def test_dataclass_is_json(self) -> None:
        assert to_safe_string(Point(1, 2)) == '{"x":1,"y":2}'

    def test_plain_object_uses_attributes(self) -> None:
        assert to_safe_string(Plain()) == '{"a":1,"tags":["x"]}'

    def test_nested_objects(self) -> None:
        assert to_safe_string({"p": Point(1, 2), "o": Plain()}) == '{"p":{"x":1,"y":2},"o":{"a":1,"tags":["x"]}}'

    def test_circular_is_empty(self) -> None:
        loop: list[object] = []
        loop.append(loop)
        assert to_safe_string(loop) == ""

    def test_unserializable_is_empty(self) -> None:
        assert to_safe_string({"a": object()}) == ""


class TestHasCustomStr:
    def test_primitives(self) -> None:
        assert has_custom_str("a")
        assert has_custom_str(1)
        assert has_custom_str(Color.RED)

    def test_none(self) -> None:
        assert not has_custom_str(None)

    def test_objects(self) -> None:
        assert has_custom_str(Named("a"))
        assert not has_custom_str({"a": 1})
        assert not has_custom_str(Point(1, 2))


class TestComponentEncoding:
    def test_unreserved_untouched(self) -> None:
        assert encode_uri_component("aZ0-_.!~*'()") == "aZ0-_.!~*'()"

    def test_reserved_encoded(self) -> None:
        assert encode_uri_component("a b/c?d") == "a%20b%2Fc%3Fd"

    def test_utf8(self) -> None:
        assert encode_uri_component("café") == "caf%C3%A9"

    def test_decode(self) -> None:
        assert decode_uri_component("caf%C3%A9") == "café"

    def test_decode_invalid_utf8_raises(self) -> None:
        with pytest.raises(UnicodeDecodeError):
            decode_uri_component("%FF")

    def test_encode_value(self) -> None:
        assert encode_value("hello world") == "hello%20world"
        assert encode_value(None) == ""

    def test_encode_value_sequence(self) -> None:
        assert encode_value(["a@b", None, "c/d"]) == "a%40b,,c%2Fd"


class TestReservedChars:
    def test_defaults(self) -> None:
        assert encode_reserved_chars("user@host:port") == "user%40host%3Aport"

    def test_whitespace_by_default(self) -> None:
        assert encode_reserved_chars("a b\tc") == "a%20b%09c"

    def test_percent_triplets_untouched(self) -> None:
        assert encode_reserved_chars("50%20off") == "50%20off"

    def test_custom_sets(self) -> None:
        assert encode_reserved_chars("a|b c", "", "|") == "a%7Cb c"

    def test_both_empty_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="At least one character"):
            encode_reserved_chars("abc", "", "")

    def test_non_ascii_passes_through(self) -> None:
        assert encode_reserved_chars("café") == "café"


class TestNormalizePercentEscapes:
    def test_stray_percent(self) -> None:
        assert normalize_percent_escapes("100%") == "100%25"

    def test_valid_triplet_kept(self) -> None:
        assert normalize_percent_escapes("a%2Fb") == "a%2Fb"

    def test_incomplete_triplet(self) -> None:
        assert normalize_percent_escapes("%2G%") == "%252G%25"


class TestRawEncodedValue:
    def test_default(self) -> None:
        assert get_raw_encoded_value(3) == "3"

    def test_custom_encoder(self) -> None:
        assert get_raw_encoded_value(3, lambda v: f"n{v}") == "n3"

    def test_encoder_result_coerced(self) -> None:
        assert get_raw_encoded_value(3, lambda v: v * 2) == "6"  # type: ignore[arg-type, return-value]

    def test_raising_encoder_is_empty(self) -> None:
        def encoder(value: object) -> str:
            raise ValueError("nope")

        assert get_raw_encoded_value(3, encoder) == ""


class TestEncodeKeyValue:
    def test_reserved_in_value(self) -> None:
        assert encode_key_value("q", "a&b=c") == "q=a%26b%3Dc"

    def test_custom_encoder_cannot_break_structure(self) -> None:
        assert encode_key_value("q", 1, encoder=lambda v: "x&y") == "q=x%26y"

    def test_stray_percent(self) -> None:
        assert encode_key_value("d", "100%") == "d=100%25"

    def test_key_encoded(self) -> None:
        assert encode_key_value("a b", "c") == "a%20b=c"

    def test_empty(self) -> None:
        assert encode_key_value("q", "") == ""
        assert encode_key_value("q", None) == ""

    def test_case_preserved(self) -> None:
        assert encode_key_value("Q", "MiXeD") == "Q=MiXeD"


class TestEncodeKeyValues:
    def test_scalar(self) -> None:
        assert encode_key_values("n", 5) == ["n=5"]

    def test_sorted_and_deduplicated(self) -> None:
        assert encode_key_values("tag", ["charlie", "alpha", "beta", "alpha"]) == [
            "tag=alpha",
            "tag=beta",
            "tag=charlie",
        ]

    def test_elements_without_string_form_skipped(self) -> None:
        assert encode_key_values("tag", ["b", None, {"x": 1}, "a", ""]) == ["tag=a", "tag=b"]

    def test_set(self) -> None:
        assert encode_key_values("n", {3, 1, 2}) == ["n=1", "n=2", "n=3"]

    def test_empty_sequence(self) -> None:
        assert encode_key_values("tag", []) == []


class TestBuildQueryString:
    def test_mapping(self) -> None:
        query = {"q": "hello world", "tag": ["beta", "alpha"], "page": None}
        assert build_query_string(query) == "q=hello%20world&tag=alpha&tag=beta"

    def test_dataclass(self) -> None:
        assert build_query_string(Point(1, 2)) == "x=1&y=2"

    def test_empty(self) -> None:
        assert build_query_string({}) == ""
        assert build_query_string(None) == ""

    def test_encoder(self) -> None:
        assert build_query_string({"c": Color.RED}, lambda v: "custom") == "c=custom"

    def test_unsupported(self) -> None:
        with pytest.raises(TypeError, match="Unsupported query object"):
            list(query_items(42))
