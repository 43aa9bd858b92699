"""Tests for perch.routing.urls — query encoding and placeholder substitution."""

from perch.routing.parser import tokenize
from perch.routing.route import Route
from perch.routing.urls import encode_query, params_consistent, substitute, with_query


class TestEncodeQuery:
    def test_simple(self) -> None:
        assert encode_query({"a": 1, "b": "x y"}) == "a=1&b=x+y"

    def test_sequences_repeat_key(self) -> None:
        assert encode_query({"tag": ["a", "b"]}) == "tag=a&tag=b"

    def test_none_dropped(self) -> None:
        assert encode_query({"a": None, "b": 2}) == "b=2"

    def test_booleans(self) -> None:
        assert encode_query({"on": True, "off": False}) == "on=1&off=0"

    def test_empty(self) -> None:
        assert encode_query({}) == ""


class TestWithQuery:
    def test_appends(self) -> None:
        assert with_query("/p", {"a": 1}) == "/p?a=1"

    def test_no_question_mark_when_empty(self) -> None:
        assert with_query("/p", {}) == "/p"
        assert with_query("/p", {"a": None}) == "/p"


class TestParamsConsistent:
    def test_missing_keys_are_fine(self) -> None:
        assert params_consistent({"a": 1}, {}) is True

    def test_equal(self) -> None:
        assert params_consistent({"a": 1}, {"a": 1, "b": 2}) is True

    def test_string_form(self) -> None:
        assert params_consistent({"a": 1}, {"a": "1"}) is True

    def test_conflict(self) -> None:
        assert params_consistent({"a": 1}, {"a": 2}) is False


class TestSubstitute:
    def _route(self, template: str) -> Route:
        return Route(tokens=tokenize(template), handler="h", regex="unused")

    def test_fills_and_returns_leftover(self) -> None:
        route = self._route("/u/{id:\\d+}/{tab}")
        assert substitute(route, {"id": 5, "tab": "x", "page": 2}) == ("/u/5/x", {"page": 2})

    def test_missing(self) -> None:
        assert substitute(self._route("/u/{id}"), {}) is None

    def test_pattern_mismatch(self) -> None:
        assert substitute(self._route("/u/{id:\\d+}"), {"id": "12a"}) is None

    def test_pattern_must_match_whole_value(self) -> None:
        assert substitute(self._route("/u/{id:\\d}"), {"id": "12"}) is None

    def test_encodes_slash(self) -> None:
        assert substitute(self._route("/f/{path:.+}"), {"path": "a/b"}) == ("/f/a%2Fb", {})

    def test_booleans_match_query_encoding(self) -> None:
        route = self._route("/flag/{on}")
        assert substitute(route, {"on": True}) == ("/flag/1", {})
        assert substitute(route, {"on": False}) == ("/flag/0", {})

    def test_input_not_mutated(self) -> None:
        params = {"id": 1}
        substitute(self._route("/u/{id}"), params)
        assert params == {"id": 1}
