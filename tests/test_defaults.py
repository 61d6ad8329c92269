"""Tests for wayfinder.routing.defaults — table-wide hook defaults."""

from datetime import date, datetime
from enum import Enum
from typing import Any

import pytest

from wayfinder.errors import ConfigurationError
from wayfinder.query.params import QueryParams
from wayfinder.query.serialize import create_default_serializer, serialize_query
from wayfinder.query.typed import TypedQueryParams
from wayfinder.routing.defaults import apply_route_defaults, apply_typed_defaults, encode_typed_value
from wayfinder.routing.href import build_href
from wayfinder.routing.matcher import find_route
from wayfinder.routing.route import Route


class Sort(Enum):
    NEWEST = "newest"
    TOP = 3


def _title(args: Any) -> str:
    return "t"


def _encoder(value: object) -> str:
    return "enc"


class TestApplyRouteDefaults:
    def test_requires_factory(self) -> None:
        with pytest.raises(ConfigurationError, match="A query params factory must be provided"):
            apply_route_defaults([], encode_query_value=_encoder)

    def test_requires_encoding_method(self) -> None:
        with pytest.raises(ConfigurationError, match="At least one encoding method must be provided"):
            apply_route_defaults([], query_params_factory=QueryParams)

    def test_fills_missing_hooks(self) -> None:
        route = Route(path="a", title=_title)
        [result] = apply_route_defaults(
            [route],
            query_params_factory=TypedQueryParams.from_raw,
            encode_query_value=_encoder,
        )
        assert result.query_params_factory == TypedQueryParams.from_raw
        assert result.encode_query_value is _encoder
        assert result.serialize_query is None

    def test_route_hooks_win(self) -> None:
        def own_encoder(value: object) -> str:
            return "own"

        route = Route(path="a", title=_title, query_params_factory=QueryParams, encode_query_value=own_encoder)
        [result] = apply_route_defaults(
            [route],
            query_params_factory=TypedQueryParams.from_raw,
            encode_query_value=_encoder,
        )
        assert result.query_params_factory is QueryParams
        assert result.encode_query_value is own_encoder

    def test_returns_new_objects(self) -> None:
        route = Route(path="a", title=_title)
        [result] = apply_route_defaults([route], query_params_factory=QueryParams, encode_query_value=_encoder)
        assert result is not route
        assert route.encode_query_value is None
        assert result.path == route.path

    def test_order_kept(self) -> None:
        routes = [Route(path=p, title=_title) for p in ("b", "a", "c")]
        result = apply_route_defaults(routes, query_params_factory=QueryParams, encode_query_value=_encoder)
        assert [r.path for r in result] == ["b", "a", "c"]

    def test_serializer_only(self) -> None:
        [result] = apply_route_defaults(
            [Route(path="a", title=_title)],
            query_params_factory=QueryParams,
            serialize_query=create_default_serializer(),
        )
        assert build_href(result, query={"q": "x y"}) == "/a?q=x%20y"

    def test_defaults_flow_into_href(self) -> None:
        [result] = apply_route_defaults(
            [Route(path="a", title=_title)],
            query_params_factory=QueryParams,
            encode_query_value=_encoder,
        )
        assert build_href(result, query={"q": 1}) == "/a?q=enc"


class TestEncodeTypedValue:
    def test_date(self) -> None:
        assert encode_typed_value(date(2024, 1, 2)) == "2024-01-02"

    def test_datetime(self) -> None:
        assert encode_typed_value(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05"

    def test_enum(self) -> None:
        assert encode_typed_value(Sort.NEWEST) == "newest"
        assert encode_typed_value(Sort.TOP) == "3"

    def test_fallback(self) -> None:
        assert encode_typed_value(True) == "true"
        assert encode_typed_value({"a": 1}) == '{"a":1}'


class TestApplyTypedDefaults:
    def test_round_trip(self) -> None:
        route = Route(
            path="feed",
            title=_title,
            get_query=lambda qp: {"since": qp.date("since"), "sort": qp.enum_value(Sort, "sort")},
        )
        [typed] = apply_typed_defaults([route])
        href = build_href(typed, query={"since": date(2024, 1, 2), "sort": Sort.NEWEST})
        assert href == "/feed?since=2024-01-02&sort=newest"

        match = find_route(href, [typed])
        assert match is not None
        assert isinstance(match.query_params, TypedQueryParams)
        assert match.query == {"since": datetime(2024, 1, 2), "sort": Sort.NEWEST}


class TestDefaultSerializer:
    def test_standalone(self) -> None:
        assert serialize_query({"tag": ["b", "a"]}) == "tag=a&tag=b"

    def test_with_encoder(self) -> None:
        assert serialize_query({"q": 1}, None, _encoder) == "q=enc"

    def test_factory(self) -> None:
        serializer = create_default_serializer(encode_typed_value)
        assert serializer({"d": date(2024, 1, 2)}, None) == "d=2024-01-02"
