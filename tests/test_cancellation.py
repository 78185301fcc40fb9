"""
Tests for cancellation tokens and compose_cancellation (external signal + timeout).
"""

from __future__ import annotations

import asyncio

import pytest

from speakmate.api.cancellation import CancellationSource, compose_cancellation
from speakmate.core.exceptions import RequestAborted


async def _fired(token) -> str:
    """Suspend until the token fires; return its reason."""
    fut = asyncio.get_running_loop().create_future()
    token.add_callback(lambda reason: fut.done() or fut.set_result(reason))
    return await fut


def test_cancel_fires_callbacks_once_with_reason():
    source = CancellationSource()
    seen: list[str] = []
    source.token.add_callback(seen.append)
    source.cancel("first")
    source.cancel("second")
    assert seen == ["first"]
    assert source.token.cancelled is True
    assert source.token.reason == "first"


def test_default_reason_is_canceled():
    source = CancellationSource()
    source.cancel()
    assert source.token.reason == "canceled"


def test_callback_added_after_cancel_runs_immediately():
    source = CancellationSource()
    source.cancel("done")
    seen: list[str] = []
    source.token.add_callback(seen.append)
    assert seen == ["done"]


def test_removed_callback_not_called():
    source = CancellationSource()
    seen: list[str] = []
    remove = source.token.add_callback(seen.append)
    remove()
    remove()
    source.cancel("x")
    assert seen == []


def test_raise_if_cancelled():
    source = CancellationSource()
    source.token.raise_if_cancelled()
    source.cancel("stop")
    with pytest.raises(RequestAborted, match="stop"):
        source.token.raise_if_cancelled()


def test_linked_source_follows_any_parent():
    a, b = CancellationSource(), CancellationSource()
    child, unlink = CancellationSource.linked(a.token, None, b.token)
    b.cancel("b fired")
    assert child.token.reason == "b fired"
    a.cancel("a fired")
    assert child.token.reason == "b fired"
    unlink()


def test_linked_to_already_cancelled_parent():
    parent = CancellationSource()
    parent.cancel("already")
    child, _ = CancellationSource.linked(parent.token)
    assert child.cancelled
    assert child.token.reason == "already"


def test_unlink_stops_propagation():
    parent = CancellationSource()
    child, unlink = CancellationSource.linked(parent.token)
    unlink()
    parent.cancel("late")
    assert not child.cancelled


def test_compose_times_out_with_reason():
    async def scenario():
        source, release = compose_cancellation(None, 10)
        try:
            return await asyncio.wait_for(_fired(source.token), timeout=1.0)
        finally:
            release()

    assert asyncio.run(scenario()) == "Request timed out after 10 ms"


def test_compose_with_already_cancelled_external():
    async def scenario():
        external = CancellationSource()
        external.cancel("user left")
        source, release = compose_cancellation(external.token, 30_000)
        release()
        return source

    source = asyncio.run(scenario())
    assert source.cancelled
    assert source.token.reason == "user left"


def test_compose_propagates_later_external_cancel():
    async def scenario():
        external = CancellationSource()
        source, release = compose_cancellation(external.token, 30_000)
        try:
            assert not source.cancelled
            external.cancel("navigated away")
            return source.token.reason
        finally:
            release()

    assert asyncio.run(scenario()) == "navigated away"


def test_first_trigger_decides_reason():
    async def scenario():
        external = CancellationSource()
        source, release = compose_cancellation(external.token, 5)
        await _fired(source.token)
        external.cancel("too late")
        release()
        return source.token.reason

    assert asyncio.run(scenario()) == "Request timed out after 5 ms"


def test_release_stops_timer_and_subscription():
    async def scenario():
        external = CancellationSource()
        source, release = compose_cancellation(external.token, 10)
        release()
        release()
        await asyncio.sleep(0.05)
        external.cancel("after release")
        return source

    source = asyncio.run(scenario())
    assert not source.cancelled
