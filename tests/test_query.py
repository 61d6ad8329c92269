"""Tests for wayfinder.query.params — normalization and the base reader."""

import pytest

from wayfinder._internal.multimap import QueryParamsReader
from wayfinder.query.params import QueryParams, normalize_query_values, query_params_from_typed


class TestNormalizeQueryValues:
    def test_trim_dedup_drop_empty(self) -> None:
        assert normalize_query_values(["  react", "react", "typescript", ""]) == [
            "react",
            "typescript",
        ]

    def test_single_string(self) -> None:
        assert normalize_query_values(" a ") == ["a"]

    def test_none(self) -> None:
        assert normalize_query_values(None) == []

    def test_none_elements_dropped(self) -> None:
        assert normalize_query_values(["a", None, "b"]) == ["a", "b"]

    def test_arrival_order_kept(self) -> None:
        assert normalize_query_values(["b", "a", "b"]) == ["b", "a"]


class TestQueryParams:
    def test_value_and_values(self) -> None:
        qp = QueryParams({"tag": ["  react", "react", "typescript", ""]})
        assert qp.value("tag") == "react"
        assert qp.values("tag") == ["react", "typescript"]

    def test_missing_key(self) -> None:
        qp = QueryParams({})
        assert qp.value("x") is None
        assert qp.values("x") == []

    def test_empty_keys_dropped(self) -> None:
        qp = QueryParams({"empty": ["", "  "], "q": "x"})
        assert "empty" not in qp
        assert "q" in qp
        assert len(qp) == 1

    def test_mapping_access(self) -> None:
        qp = QueryParams({"a": ["1", "2"], "b": "3"})
        assert qp["a"] == "1"
        assert list(qp) == ["a", "b"]
        assert qp.keys() == ["a", "b"]
        assert qp.get("b") == "3"
        assert qp.get("zzz", "default") == "default"

    def test_getitem_missing_raises(self) -> None:
        with pytest.raises(KeyError):
            QueryParams({})["x"]

    def test_values_returns_copy(self) -> None:
        qp = QueryParams({"a": ["1"]})
        qp.values("a").append("2")
        assert qp.values("a") == ["1"]

    def test_to_dict(self) -> None:
        qp = QueryParams({"a": [" 1 ", "1", "2"]})
        assert qp.to_dict() == {"a": ["1", "2"]}

    def test_immutable(self) -> None:
        qp = QueryParams({"a": "1"})
        with pytest.raises(AttributeError):
            qp.extra = 1  # type: ignore[attr-defined]

    def test_satisfies_reader_protocol(self) -> None:
        assert isinstance(QueryParams({}), QueryParamsReader)


class TestSyntheticReader:
    def test_scalars_and_sequences(self) -> None:
        qp = query_params_from_typed({"tags": ["a", None, "b"], "n": 3, "none": None})
        assert qp.values("tags") == ["a", "b"]
        assert qp.value("n") == "3"
        assert "none" not in qp

    def test_elements_without_string_form_dropped(self) -> None:
        qp = query_params_from_typed({"mixed": [{"x": 1}, "keep"]})
        assert qp.values("mixed") == ["keep"]

    def test_booleans(self) -> None:
        assert query_params_from_typed({"flag": True}).value("flag") == "true"

    def test_none_query(self) -> None:
        assert len(query_params_from_typed(None)) == 0
