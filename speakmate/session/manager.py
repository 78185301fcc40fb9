"""
Analysis session — request lifecycle with loading/data/error state.

Runs at most one analysis call at a time. Each analyze() supersedes the
previous call: the old call's cancellation handle is fired and its eventual
result (success or failure) is discarded. Ownership is tracked with a
monotonically increasing generation number; only the call whose generation
is still active may write state.

Error policy at this boundary:
- RequestAborted (cancel, supersede, timeout, external signal): silent.
- SchemaError: rewrapped as SchemaValidationFailed ("Schema validation failed: ...").
- ConfigurationError (malformed SPEAKMATE_TIMEOUT_MS with no timeout_ms
  supplied): surfaced in ``error`` before any call starts.
- anything else: surfaced as-is in ``error``.

Bound to one asyncio event loop; there is no await between reading and
writing the active handle, so the loop serializes ownership checks.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable

from speakmate.api.cancellation import CancellationSource, compose_cancellation
from speakmate.api.client import AnalyzeClient
from speakmate.api.models import AnalyzeOptions, AnalyzeRequest, resolve_options
from speakmate.api.schema import AnalyzeResponse
from speakmate.core.exceptions import ConfigurationError, RequestAborted, SchemaError, SchemaValidationFailed
from speakmate.speakmate_logging import bind_call, get_logger

logger = get_logger(__name__)

CANCEL_REASON = "canceled"


@dataclass(frozen=True)
class AnalyzeState:
    """Snapshot published to consumers."""

    loading: bool = False
    error: Exception | None = None
    data: AnalyzeResponse | None = None


StateListener = Callable[[AnalyzeState], None]


@dataclass(frozen=True)
class _ActiveCall:
    generation: int
    source: CancellationSource


class AnalyzeSession:
    """
    Stateful wrapper around AnalyzeClient for one consumer (e.g. a screen).

    Usage:
        session = AnalyzeSession(defaults=AnalyzeOptions(timeout_ms=10_000))
        unsubscribe = session.subscribe(render)
        await session.analyze(AnalyzeRequest(transcript_key="uploads/abc.json"))
        session.cancel()
    """

    def __init__(
        self,
        client: AnalyzeClient | None = None,
        defaults: AnalyzeOptions | None = None,
    ) -> None:
        self._client = client or AnalyzeClient()
        self._defaults = defaults
        self._state = AnalyzeState()
        self._active: _ActiveCall | None = None
        self._generation = 0
        self._listeners: list[StateListener] = []

    # -------------------------------------------------------------------------
    # Observable state
    # -------------------------------------------------------------------------

    @property
    def state(self) -> AnalyzeState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Exception | None:
        return self._state.error

    @property
    def data(self) -> AnalyzeResponse | None:
        return self._state.data

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener(state)`` after every state change. Returns unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as e:
                logger.exception("session_listener_failed", error=str(e))

    def _owns(self, generation: int) -> bool:
        return self._active is not None and self._active.generation == generation

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def _cancel_active(self) -> bool:
        active = self._active
        if active is None:
            return False
        self._active = None
        active.source.cancel(CANCEL_REASON)
        logger.info("analyze_canceled", generation=active.generation)
        return True

    def cancel(self) -> None:
        """Cancel the in-flight call, if any; it settles to not loading, no error, no data."""
        if self._cancel_active():
            self._publish(loading=False, error=None, data=None)

    def reset(self) -> None:
        """Cancel and return to the pristine state."""
        self._cancel_active()
        self._publish(loading=False, error=None, data=None)

    async def analyze(
        self,
        payload: AnalyzeRequest,
        options: AnalyzeOptions | None = None,
    ) -> AnalyzeResponse | None:
        """
        Run one analysis call, superseding any call still in flight.

        Returns the validated response, or None when the call failed, was
        cancelled, or was superseded (see ``error`` for surfaced failures).
        """
        self.cancel()

        self._generation += 1
        generation = self._generation
        log = bind_call(__name__, generation, payload.transcript_key)

        try:
            merged = resolve_options(self._defaults, options)
        except ConfigurationError as e:
            log.warning("analyze_misconfigured", error=str(e))
            self._publish(loading=False, error=e)
            return None

        source, release = compose_cancellation(merged.cancellation_signal, merged.timeout_ms)
        self._active = _ActiveCall(generation, source)
        self._publish(loading=True, error=None)
        log.info("analyze_started", dry_run=merged.dry_run, timeout_ms=merged.timeout_ms)

        try:
            response = await self._client.analyze_with_token(payload, merged, source.token)
            if not self._owns(generation):
                log.info("analyze_superseded", outcome="success")
                return None
            self._publish(data=response)
            log.info("analyze_succeeded", overall=response.scores.overall)
            return response
        except RequestAborted as e:
            log.info("analyze_aborted", reason=e.reason, timed_out=e.timed_out)
            if self._owns(generation):
                self._publish(error=None, data=None)
            return None
        except SchemaError as e:
            if not self._owns(generation):
                log.info("analyze_superseded", outcome="schema_error")
                return None
            log.warning("analyze_schema_invalid", path=e.dotted_path, error=str(e))
            self._publish(error=SchemaValidationFailed(e))
            return None
        except Exception as e:
            if not self._owns(generation):
                log.info("analyze_superseded", outcome="error")
                return None
            log.warning("analyze_failed", error_type=type(e).__name__, error=str(e))
            self._publish(error=e)
            return None
        finally:
            release()
            if self._owns(generation):
                self._active = None
                self._publish(loading=False)
