"""Tests for perch.http.headers — case-insensitive header mapping."""

import pytest

from perch.http.headers import Headers


class TestHeaders:
    def test_case_insensitive_lookup(self) -> None:
        headers = Headers.from_raw([(b"Content-Type", b"text/html")])
        assert headers["content-type"] == "text/html"
        assert headers["CONTENT-TYPE"] == "text/html"

    def test_contains(self) -> None:
        headers = Headers([("accept", "*/*")])
        assert "Accept" in headers
        assert "x-missing" not in headers
        assert 42 not in headers

    def test_get_default(self) -> None:
        assert Headers().get("x-missing", "fallback") == "fallback"

    def test_multiple_values(self) -> None:
        headers = Headers.from_raw([(b"x-tag", b"a"), (b"X-Tag", b"b")])
        assert headers["x-tag"] == "a"
        assert headers.get_list("X-TAG") == ["a", "b"]
        assert len(headers) == 1
        assert list(headers) == ["x-tag"]

    def test_immutable(self) -> None:
        headers = Headers()
        with pytest.raises(AttributeError):
            headers.extra = "x"  # type: ignore[attr-defined]

    def test_repr(self) -> None:
        assert repr(Headers([("Host", "example.com")])) == "Headers({'host': 'example.com'})"
