"""Shared fixtures for perch tests."""

from pathlib import Path

import pytest

from perch.cache.store import ETagStore
from perch.context import Context
from perch.http.request import Request
from perch.http.response import Response
from perch.result import Ok


@pytest.fixture
def store() -> ETagStore:
    """A fresh etag store per test — no state leaks between tests."""
    return ETagStore()


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """A small directory tree to serve."""
    (tmp_path / "http.ts").write_text("export const answer = 42;\n")
    (tmp_path / "style.css").write_text("body { color: red; }")
    (tmp_path / "index.html").write_text("<h1>Home</h1>")
    (tmp_path / "data.unknownext").write_bytes(b"\x00\x01\x02")
    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "app.js").write_text("console.log('hi');")
    return tmp_path


def make_request(
    method: str = "GET",
    target: str = "/",
    headers: dict[str, str] | None = None,
) -> Request:
    return Request.build(method, target, headers=headers)


def make_context(request: Request, params: dict[str, str] | None = None) -> Context:
    return Context.for_request(request, params or {})


class CountingHandler:
    """A handler that serves a fixed body and counts its calls."""

    def __init__(self, body: bytes = b"hello", *, status: int = 200) -> None:
        self.body = body
        self.status = status
        self.calls = 0

    async def __call__(self, request: Request, ctx: Context) -> Ok[Response]:
        self.calls += 1
        return Ok(Response(body=self.body, status=self.status, content_type="text/css"))
