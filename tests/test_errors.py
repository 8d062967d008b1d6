"""Tests for perch.errors — exception hierarchy and messages."""

import pytest

from perch.errors import ConfigurationError, HTTPError, MethodNotAllowed, NotFound, PerchError


class TestHierarchy:
    def test_http_error_is_perch_error(self) -> None:
        assert issubclass(HTTPError, PerchError)

    def test_configuration_error_is_perch_error(self) -> None:
        assert issubclass(ConfigurationError, PerchError)

    def test_routing_errors_are_http_errors(self) -> None:
        assert issubclass(NotFound, HTTPError)
        assert issubclass(MethodNotAllowed, HTTPError)


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=404, detail="gone")) == "404: gone"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_frozen(self) -> None:
        exc = HTTPError(status=400)
        with pytest.raises(AttributeError):
            exc.status = 500  # type: ignore[misc]


class TestNotFound:
    def test_defaults(self) -> None:
        exc = NotFound()
        assert exc.status == 404
        assert exc.detail == "Not Found"


class TestMethodNotAllowed:
    def test_allow_header_keeps_order(self) -> None:
        exc = MethodNotAllowed(("POST", "GET"))
        assert exc.status == 405
        assert dict(exc.headers)["Allow"] == "POST, GET"

    def test_allowed_property(self) -> None:
        assert MethodNotAllowed(("GET", "PUT")).allowed == ("GET", "PUT")

    def test_detail_mentions_methods(self) -> None:
        exc = MethodNotAllowed(("GET",))
        assert "GET" in exc.detail
        assert "Method not allowed" in exc.detail

    def test_custom_detail(self) -> None:
        assert MethodNotAllowed(("GET",), detail="nope").detail == "nope"


class TestExports:
    def test_top_level_names(self) -> None:
        import perch

        assert perch.PerchError is PerchError
        assert perch.NotFound is NotFound
        assert perch.MethodNotAllowed is MethodNotAllowed

    def test_unknown_attribute(self) -> None:
        import perch

        with pytest.raises(AttributeError):
            perch.DoesNotExist  # noqa: B018
