"""Tests for perch.dispatch — routing outcomes mapped to HTTP responses."""

import logging

import pytest

from perch.dispatch import Dispatcher, handler_from_routes
from perch.http.request import Request
from perch.http.response import Response
from perch.result import Ok, err
from perch.routing.route import Route
from perch.routing.router import Router


def _ok(body: str = "ok"):
    def handler(request, ctx):
        return Ok(Response(body))

    return handler


class TestRoutingOutcomes:
    @pytest.mark.asyncio
    async def test_not_found(self) -> None:
        dispatcher = Dispatcher([Route("/users", {"GET": _ok()})])
        response = await dispatcher.dispatch(Request.build("GET", "/posts"))
        assert response.status == 404
        assert response.text == "Not Found"

    @pytest.mark.asyncio
    async def test_empty_table_is_404(self) -> None:
        response = await Dispatcher([]).dispatch(Request.build("GET", "/"))
        assert response.status == 404

    @pytest.mark.asyncio
    async def test_method_not_allowed(self) -> None:
        dispatcher = Dispatcher([Route("/items", {"POST": _ok(), "GET": _ok()})])
        response = await dispatcher.dispatch(Request.build("DELETE", "/items"))
        assert response.status == 405
        assert response.header("Allow") == "POST, GET"

    @pytest.mark.asyncio
    async def test_first_matching_route_decides_405(self) -> None:
        dispatcher = Dispatcher(
            [
                Route("/{file:path}", {"GET": _ok("file")}),
                Route("/upload", {"POST": _ok("upload")}),
            ]
        )
        response = await dispatcher.dispatch(Request.build("POST", "/upload"))
        assert response.status == 405
        assert response.header("Allow") == "GET"

    @pytest.mark.asyncio
    async def test_accepts_router(self) -> None:
        dispatcher = Dispatcher(Router([Route("/", {"GET": _ok("root")})]))
        response = await dispatcher.dispatch(Request.build("GET", "/"))
        assert response.text == "root"


class TestHandlerOutcomes:
    @pytest.mark.asyncio
    async def test_ok_response_returned_verbatim(self) -> None:
        produced = Response(b"teapot", status=418, content_type="x/y").with_header("X-A", "1")

        async def handler(request, ctx):
            return Ok(produced)

        dispatcher = Dispatcher([Route("/tea", {"GET": handler})])
        response = await dispatcher.dispatch(Request.build("GET", "/tea"))
        assert response is produced

    @pytest.mark.asyncio
    async def test_sync_handler(self) -> None:
        dispatcher = Dispatcher([Route("/sync", {"GET": _ok("sync")})])
        response = await dispatcher.dispatch(Request.build("GET", "/sync"))
        assert response.status == 200
        assert response.text == "sync"

    @pytest.mark.asyncio
    async def test_err_becomes_500(self, caplog: pytest.LogCaptureFixture) -> None:
        async def handler(request, ctx):
            return err("failure while loading file", err("no such file").error)

        dispatcher = Dispatcher([Route("/x", {"GET": handler})])
        with caplog.at_level(logging.ERROR, logger="perch.server"):
            response = await dispatcher.dispatch(Request.build("GET", "/x"))

        assert response.status == 500
        assert response.text == "Internal Server Error"
        assert "failure while loading file: no such file" in caplog.text
        assert "no such file" not in response.text

    @pytest.mark.asyncio
    async def test_raise_becomes_500(self, caplog: pytest.LogCaptureFixture) -> None:
        async def handler(request, ctx):
            raise RuntimeError("boom")

        dispatcher = Dispatcher([Route("/x", {"GET": handler})])
        with caplog.at_level(logging.ERROR, logger="perch.server"):
            response = await dispatcher.dispatch(Request.build("GET", "/x"))

        assert response.status == 500
        assert "RuntimeError" in caplog.text

    @pytest.mark.asyncio
    async def test_non_result_return_becomes_500(self) -> None:
        async def handler(request, ctx):
            return Response("forgot to wrap")

        dispatcher = Dispatcher([Route("/x", {"GET": handler})])
        response = await dispatcher.dispatch(Request.build("GET", "/x"))
        assert response.status == 500

    @pytest.mark.asyncio
    async def test_ok_without_response_becomes_500(self) -> None:
        async def handler(request, ctx):
            return Ok("just a string")

        dispatcher = Dispatcher([Route("/x", {"GET": handler})])
        response = await dispatcher.dispatch(Request.build("GET", "/x"))
        assert response.status == 500


class TestContext:
    @pytest.mark.asyncio
    async def test_params_query_cookies(self) -> None:
        seen = {}

        async def handler(request, ctx):
            seen["params"] = dict(ctx.params)
            seen["page"] = ctx.query.get("page")
            seen["cookies"] = dict(ctx.cookies)
            seen["url"] = ctx.url
            seen["resource"] = ctx.resource
            return Ok(Response("ok"))

        dispatcher = Dispatcher([Route("/users/{id}", {"GET": handler})])
        request = Request.build(
            "GET",
            "/users/42?page=3",
            headers={"Cookie": "session=abc; theme=dark"},
        )
        response = await dispatcher.dispatch(request)

        assert response.status == 200
        assert seen["params"] == {"id": "42"}
        assert seen["page"] == "3"
        assert seen["cookies"] == {"session": "abc", "theme": "dark"}
        assert seen["url"] == "http://localhost/users/42?page=3"
        assert seen["resource"] == "users/42"

    @pytest.mark.asyncio
    async def test_no_cookie_header(self) -> None:
        seen = {}

        async def handler(request, ctx):
            seen["cookies"] = dict(ctx.cookies)
            return Ok(Response("ok"))

        dispatcher = Dispatcher([Route("/", {"GET": handler})])
        await dispatcher.dispatch(Request.build("GET", "/"))
        assert seen["cookies"] == {}


class TestHandlerFromRoutes:
    @pytest.mark.asyncio
    async def test_callable(self) -> None:
        handle = handler_from_routes([Route("/", {"GET": _ok("hi")})])
        response = await handle(Request.build("GET", "/"))
        assert response.text == "hi"
