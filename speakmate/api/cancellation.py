"""
Cooperative cancellation for analysis calls.

A CancellationSource owns a CancellationToken. Cancelling the source triggers
the token once with a reason; later cancels are no-ops. Anything that does
I/O on behalf of a call observes the token through add_callback() and
aborts with RequestAborted(reason).

compose_cancellation() derives one token from an optional caller token plus
an internal timeout. Whichever fires first decides the abort reason.

All of this is bound to a single asyncio event loop; tokens are not
thread-safe.
"""

from __future__ import annotations

import asyncio
from typing import Callable

from speakmate.core.exceptions import TIMEOUT_REASON_PREFIX, RequestAborted

CancelCallback = Callable[[str], None]


class CancellationToken:
    """Read side: observe whether and why a call was cancelled."""

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: str | None = None
        self._callbacks: list[CancelCallback] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> str | None:
        return self._reason

    def add_callback(self, callback: CancelCallback) -> Callable[[], None]:
        """
        Invoke ``callback(reason)`` once when the token fires (immediately if it
        already has). Returns a function that removes the subscription.
        """
        if self._cancelled:
            callback(self._reason or "")
            return lambda: None
        self._callbacks.append(callback)

        def remove() -> None:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                pass

        return remove

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise RequestAborted(self._reason)

    def _trigger(self, reason: str) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._reason = reason
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback(reason)


class CancellationSource:
    """Write side: the handle that can cancel its token."""

    def __init__(self) -> None:
        self.token = CancellationToken()

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    def cancel(self, reason: str = "canceled") -> None:
        self.token._trigger(reason)

    @classmethod
    def linked(cls, *parents: CancellationToken | None) -> tuple["CancellationSource", Callable[[], None]]:
        """
        New source that fires when any parent fires, with that parent's reason.
        Returns (source, unlink); unlink drops the parent subscriptions.
        """
        source = cls()
        removers: list[Callable[[], None]] = []
        for parent in parents:
            if parent is None:
                continue
            if parent.cancelled:
                source.cancel(parent.reason or "")
                break
            removers.append(parent.add_callback(source.cancel))

        def unlink() -> None:
            while removers:
                removers.pop()()

        return source, unlink


def timeout_reason(timeout_ms: int) -> str:
    return f"{TIMEOUT_REASON_PREFIX}{timeout_ms} ms"


def compose_cancellation(
    external: CancellationToken | None,
    timeout_ms: int,
) -> tuple[CancellationSource, Callable[[], None]]:
    """
    Merge an optional external token with a timeout into one derived source.

    Returns (source, release). ``source.token`` is the derived signal. release()
    stops the timer and the external subscription; call it on every exit path.
    Must be called with a running event loop.
    """
    source, unlink = CancellationSource.linked(external)
    loop = asyncio.get_running_loop()
    timer = loop.call_later(timeout_ms / 1000, source.cancel, timeout_reason(timeout_ms))

    def release() -> None:
        timer.cancel()
        unlink()

    return source, release
