"""Tests for perch.result — Ok/Err arms, ErrorInfo chains, attempt()."""

import asyncio

import pytest

from perch.result import Err, ErrorInfo, Ok, attempt, err


class TestErrorInfo:
    def test_str_single(self) -> None:
        assert str(ErrorInfo("boom")) == "boom"

    def test_str_chain(self) -> None:
        chain = ErrorInfo("outer", ErrorInfo("middle", ErrorInfo("inner")))
        assert str(chain) == "outer: middle: inner"

    def test_wrap_prepends(self) -> None:
        inner = ErrorInfo("no such file")
        outer = inner.wrap("failure while loading file")
        assert str(outer) == "failure while loading file: no such file"
        assert outer.cause is inner

    def test_root_and_chain(self) -> None:
        chain = ErrorInfo("a", ErrorInfo("b", ErrorInfo("c")))
        assert chain.root.message == "c"
        assert [link.message for link in chain.chain()] == ["a", "b", "c"]

    def test_from_exception_uses_message(self) -> None:
        assert ErrorInfo.from_exception(ValueError("bad value")).message == "bad value"

    def test_from_exception_falls_back_to_class_name(self) -> None:
        assert ErrorInfo.from_exception(KeyError()).message == "KeyError"

    def test_from_os_error(self) -> None:
        exc = FileNotFoundError(2, "No such file or directory", "missing.txt")
        assert str(ErrorInfo.from_exception(exc)) == "No such file or directory: missing.txt"

    def test_frozen(self) -> None:
        info = ErrorInfo("x")
        with pytest.raises(AttributeError):
            info.message = "y"  # type: ignore[misc]


class TestArms:
    def test_ok_arms(self) -> None:
        result = Ok(5)
        assert result.value == 5
        assert result.error is None
        assert result.is_ok()
        assert not result.is_err()

    def test_err_arms(self) -> None:
        result = err("boom")
        assert isinstance(result, Err)
        assert result.value is None
        assert str(result.error) == "boom"
        assert result.is_err()

    def test_unpack_ok(self) -> None:
        value, error = Ok("v")
        assert value == "v"
        assert error is None

    def test_unpack_err(self) -> None:
        value, error = err("outer", ErrorInfo("inner"))
        assert value is None
        assert str(error) == "outer: inner"


class TestAttempt:
    @pytest.mark.asyncio
    async def test_sync_success(self) -> None:
        result = await attempt(lambda: 3)
        assert result == Ok(3)

    @pytest.mark.asyncio
    async def test_async_success(self) -> None:
        async def fetch(x: int) -> int:
            return x * 2

        assert await attempt(fetch, 4) == Ok(8)

    @pytest.mark.asyncio
    async def test_exception_becomes_err(self) -> None:
        def explode() -> None:
            raise RuntimeError("kaboom")

        result = await attempt(explode)
        assert isinstance(result, Err)
        assert str(result.error) == "kaboom"

    @pytest.mark.asyncio
    async def test_async_exception_becomes_err(self) -> None:
        async def explode() -> None:
            raise OSError("disk gone")

        value, error = await attempt(explode)
        assert value is None
        assert error is not None

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self) -> None:
        async def cancelled() -> None:
            raise asyncio.CancelledError

        with pytest.raises(asyncio.CancelledError):
            await attempt(cancelled)
