"""Tests for perch.http.response — chainable responses and JSON."""

import pytest

from perch.http.response import Response, json_response


class TestResponse:
    def test_defaults(self) -> None:
        response = Response()
        assert response.status == 200
        assert response.body_bytes == b""
        assert response.content_type == "text/plain; charset=utf-8"
        assert response.headers == ()

    def test_chaining_returns_new_instances(self) -> None:
        original = Response("hi")
        changed = original.with_status(201).with_header("X-A", "1").with_content_type("text/html")
        assert original.status == 200
        assert original.headers == ()
        assert changed.status == 201
        assert changed.header("x-a") == "1"
        assert changed.content_type == "text/html"

    def test_with_header_replaces_case_insensitively(self) -> None:
        response = Response().with_header("ETag", "a").with_header("etag", "b")
        assert response.headers == (("etag", "b"),)

    def test_with_headers(self) -> None:
        response = Response().with_headers({"A": "1", "B": "2"})
        assert response.header("A") == "1"
        assert response.header("B") == "2"

    def test_header_content_type(self) -> None:
        assert Response(content_type="text/css").header("Content-Type") == "text/css"

    def test_header_default(self) -> None:
        assert Response().header("X-Missing", "none") == "none"

    def test_with_body(self) -> None:
        assert Response("a").with_body(b"b").body_bytes == b"b"

    def test_text_and_bytes(self) -> None:
        assert Response("héllo").body_bytes == "héllo".encode()
        assert Response("héllo".encode()).text == "héllo"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Response().status = 404  # type: ignore[misc]


class TestJsonResponse:
    def test_ok(self) -> None:
        response, error = json_response({"a": 1})
        assert error is None
        assert response.text == '{"a": 1}'
        assert response.content_type == "application/json"

    def test_extra_headers(self) -> None:
        response, _ = json_response([1], headers={"Content-Type": "application/ld+json", "X-A": "1"})
        assert response.content_type == "application/ld+json"
        assert response.header("X-A") == "1"

    def test_unserializable(self) -> None:
        response, error = json_response({"a": object()})
        assert response is None
        assert error.message == "failure while encoding json"
        assert error.cause is not None
