"""Tests for perch.http.headers.Headers."""

from perch.http.headers import Headers


def _headers() -> Headers:
    return Headers(
        (
            (b"Content-Type", b"text/html"),
            (b"if-none-match", b"abc"),
            (b"accept", b"text/html"),
            (b"Accept", b"application/json"),
        )
    )


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = _headers()
        assert headers["content-type"] == "text/html"
        assert headers["If-None-Match"] == "abc"
        assert "CONTENT-TYPE" in headers

    def test_first_value_wins(self) -> None:
        assert _headers()["accept"] == "text/html"

    def test_get_list(self) -> None:
        assert _headers().get_list("Accept") == ["text/html", "application/json"]

    def test_get_default(self) -> None:
        assert _headers().get("x-missing") is None
        assert _headers().get("x-missing", "fallback") == "fallback"

    def test_iteration_dedupes(self) -> None:
        assert list(_headers()) == ["content-type", "if-none-match", "accept"]
        assert len(_headers()) == 3

    def test_non_str_not_contained(self) -> None:
        assert 42 not in _headers()

    def test_from_mapping(self) -> None:
        headers = Headers.from_pairs({"If-None-Match": "deadbeef"})
        assert headers["if-none-match"] == "deadbeef"
        assert headers.raw == ((b"if-none-match", b"deadbeef"),)

    def test_from_tuples(self) -> None:
        headers = Headers.from_pairs((("Cookie", "a=1"), ("Cookie", "b=2")))
        assert headers.get_list("cookie") == ["a=1", "b=2"]

    def test_empty(self) -> None:
        assert len(Headers()) == 0
