"""Tests for the async exception bridge."""

from __future__ import annotations

import asyncio
import io

import orjson
import pytest

from fallible import ErrorInfo, describe_exception, err, from_awaitable, match, ok, try_catch_async
from fallible.config import clear_settings_cache
from fallible.logging import configure_logging, reset_logging


@pytest.fixture(autouse=True)
def clean_state() -> object:
    """Reset cached settings and logging configuration around each test."""
    clear_settings_cache()
    reset_logging()
    yield
    clear_settings_cache()
    reset_logging()


# ─── try_catch_async ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_success() -> None:
    async def fetch() -> str:
        return "success"

    assert await try_catch_async(fetch) == ok("success")


@pytest.mark.asyncio
async def test_failure_keeps_original_exception() -> None:
    error = ValueError("error")

    async def fetch() -> str:
        raise error

    result = await try_catch_async(fetch)

    assert result.is_err()
    assert result.unwrap_err() is error
    assert str(result.unwrap_err()) == "error"


@pytest.mark.asyncio
async def test_failure_after_suspension() -> None:
    async def slow() -> int:
        await asyncio.sleep(0)
        raise KeyError("late")

    result = await try_catch_async(slow)
    assert isinstance(result.unwrap_err(), KeyError)


@pytest.mark.asyncio
async def test_match_is_alias() -> None:
    async def fetch() -> int:
        return 1

    assert match is try_catch_async
    assert await match(fetch) == ok(1)


@pytest.mark.asyncio
async def test_lambda_returning_coroutine() -> None:
    async def add(a: int, b: int) -> int:
        return a + b

    assert await try_catch_async(lambda: add(1, 2)) == ok(3)


@pytest.mark.asyncio
async def test_plain_callable() -> None:
    assert await try_catch_async(lambda: 5) == ok(5)

    def fail() -> int:
        raise RuntimeError("sync")

    assert isinstance((await try_catch_async(fail)).unwrap_err(), RuntimeError)


@pytest.mark.asyncio
async def test_cancellation_propagates() -> None:
    started = asyncio.Event()

    async def forever() -> None:
        started.set()
        await asyncio.Event().wait()

    task = asyncio.create_task(try_catch_async(forever))
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task


# ─── from_awaitable ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_from_awaitable_success() -> None:
    async def fetch() -> dict[str, int]:
        return {"id": 1}

    assert await from_awaitable(fetch(), describe_exception) == ok({"id": 1})


@pytest.mark.asyncio
async def test_from_awaitable_uses_handler() -> None:
    async def fetch() -> int:
        raise TimeoutError("too slow")

    result = await from_awaitable(fetch(), lambda e: f"normalized: {e}")
    assert result == err("normalized: too slow")


@pytest.mark.asyncio
async def test_from_awaitable_with_task() -> None:
    async def compute() -> int:
        await asyncio.sleep(0)
        return 7

    task = asyncio.ensure_future(compute())
    assert await from_awaitable(task, describe_exception) == ok(7)


@pytest.mark.asyncio
async def test_from_awaitable_describe_exception() -> None:
    async def fetch() -> int:
        raise ConnectionError("refused")

    result = await from_awaitable(fetch(), describe_exception)
    assert result == err(ErrorInfo(kind="ConnectionError", message="refused"))


@pytest.mark.asyncio
async def test_from_awaitable_handler_errors_propagate() -> None:
    async def fetch() -> int:
        raise ValueError("inner")

    def broken_handler(exc: Exception) -> str:
        raise LookupError("handler failed")

    with pytest.raises(LookupError, match="handler failed"):
        await from_awaitable(fetch(), broken_handler)


# ─── Capture logging ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_captures_are_silent_by_default() -> None:
    buf = io.StringIO()
    configure_logging("json", "DEBUG", output=buf)

    async def fail() -> None:
        raise ValueError("quiet")

    await try_catch_async(fail)
    assert buf.getvalue() == ""


@pytest.mark.asyncio
async def test_captures_logged_when_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FALLIBLE_BRIDGE_LOG_CAPTURES", "true")
    buf = io.StringIO()
    configure_logging("json", "DEBUG", output=buf)

    async def fail() -> None:
        raise ValueError("loud")

    await try_catch_async(fail)
    await from_awaitable(fail(), describe_exception)

    events = [orjson.loads(line) for line in buf.getvalue().splitlines()]
    assert [e["bridge"] for e in events] == ["try_catch_async", "from_awaitable"]
    assert events[0]["event"] == "exception captured"
    assert events[0]["level"] == "debug"
    assert events[0]["kind"] == "ValueError"
    assert events[0]["message"] == "loud"
    assert "exc_info" not in events[0]


@pytest.mark.asyncio
async def test_capture_log_includes_trace(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FALLIBLE_BRIDGE_LOG_CAPTURES", "true")
    monkeypatch.setenv("FALLIBLE_BRIDGE_INCLUDE_TRACE", "true")
    buf = io.StringIO()
    configure_logging("json", "DEBUG", output=buf)

    async def fail() -> None:
        raise ValueError("traced")

    await try_catch_async(fail)

    event = orjson.loads(buf.getvalue().splitlines()[0])
    assert "Traceback" in event["exc_info"]
    assert "ValueError: traced" in event["exc_info"]


@pytest.mark.asyncio
async def test_debug_mode_attaches_trace(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FALLIBLE_DEBUG", "true")
    monkeypatch.setenv("FALLIBLE_BRIDGE_LOG_CAPTURES", "true")
    buf = io.StringIO()
    configure_logging("json", "DEBUG", output=buf)

    async def fail() -> None:
        raise ValueError("debugging")

    await try_catch_async(fail)

    event = orjson.loads(buf.getvalue().splitlines()[0])
    assert "ValueError: debugging" in event["exc_info"]


# ─── Broken configuration ────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_invalid_log_format_still_returns_err(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FALLIBLE_LOG_FORMAT", "xml")
    error = ValueError("still captured")

    async def good() -> int:
        return 1

    async def fail() -> int:
        raise error

    assert await try_catch_async(good) == ok(1)
    with pytest.warns(RuntimeWarning, match="capture logging failed"):
        result = await try_catch_async(fail)

    assert result.unwrap_err() is error


@pytest.mark.asyncio
async def test_invalid_bridge_flag_still_returns_err(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FALLIBLE_BRIDGE_LOG_CAPTURES", "maybe")

    async def fail() -> int:
        raise ConnectionError("refused")

    with pytest.warns(RuntimeWarning, match="capture logging failed"):
        result = await from_awaitable(fail(), describe_exception)

    assert result == err(ErrorInfo(kind="ConnectionError", message="refused"))


@pytest.mark.asyncio
async def test_broken_renderer_still_returns_err(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FALLIBLE_BRIDGE_LOG_CAPTURES", "true")
    buf = io.StringIO()
    configure_logging("json", "DEBUG", output=buf)
    buf.close()

    async def fail() -> int:
        raise KeyError("k")

    with pytest.warns(RuntimeWarning, match="capture logging failed"):
        result = await try_catch_async(fail)

    assert isinstance(result.unwrap_err(), KeyError)
