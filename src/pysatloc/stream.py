"""Self-adjusting polling stream of satellite positions.

:class:`SatLocStream` is an async iterator. Each ``__anext__`` arms one
timer, the timer triggers one fetch, and the fetch result (a
:class:`PositionRecord` or an :class:`ErrorRecord`) is handed to the
waiting consumer.  The timer delay is the configured interval minus the
round-trip time of the previous fetch, so the delivery cadence stays close
to the interval even on a slow link.

Usage::

    async with SatLocStream(interval_ms=2000, options={"calculateChange": True}) as stream:
        async for record in stream:
            print(record.to_dict())
"""

from __future__ import annotations

import asyncio
import collections
import contextlib
import json
import logging
import time
from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any

from pydantic import ValidationError

from pysatloc._transport import Fetcher, SatLocFetcher
from pysatloc.change import compute_change
from pysatloc.config import StreamConfig
from pysatloc.exceptions import SatLocTransportError
from pysatloc.models import ErrorRecord, PositionRecord, StreamStats
from pysatloc.normalize import normalize_error, parse_error

_logger = logging.getLogger(__name__)

StreamItem = PositionRecord | ErrorRecord

# Resolves a pending consumer wait once the stream is closed.
_END = object()


class StreamState(StrEnum):
    IDLE = "idle"
    WAITING = "waiting"
    FETCHING = "fetching"
    DELIVERING = "delivering"


def adjust_for_lag(interval_ms: float, lag_ms: float) -> float:
    """Return the wait before the next fetch: ``interval - lag``, never negative."""
    return max(interval_ms - lag_ms, 0)


class SatLocStream:
    """Pull-driven stream of positions for one satellite.

    Parameters
    ----------
    satellite_id : str or None
        NORAD catalog number. Unsupported ids fall back to the default.
    interval_ms : float or None
        Desired delay between deliveries. Values below the floor fall back
        to the default.
    options : Mapping or None
        Stream flags; only ``calculateChange`` is recognized.
    config : StreamConfig or None
        Complete configuration; takes precedence over the three arguments
        above.
    fetcher : Fetcher or None
        Source of raw payloads. Defaults to a :class:`SatLocFetcher` bound
        to the resolved satellite id.
    """

    def __init__(
        self,
        satellite_id: str | None = None,
        interval_ms: float | None = None,
        options: Mapping[str, Any] | None = None,
        *,
        config: StreamConfig | None = None,
        fetcher: Fetcher | None = None,
    ) -> None:
        if config is None:
            config = StreamConfig(
                satellite_id=satellite_id,  # type: ignore[arg-type]
                interval_ms=interval_ms,  # type: ignore[arg-type]
                options=options or {},
            )
        self._config = config
        self._fetcher: Fetcher = fetcher or SatLocFetcher(
            config.satellite_id,
            base_url=config.base_url,
            timeout=config.request_timeout,
        )

        self._lag_ms: float = 0.0
        self._requests = 0
        self._responses = 0
        self._previous: PositionRecord | None = None

        self._state = StreamState.IDLE
        self._paused = False
        self._closed = False
        self._timer: asyncio.TimerHandle | None = None
        self._fetch_task: asyncio.Task[StreamItem] | None = None
        self._waiter: asyncio.Future[Any] | None = None
        self._buffer: collections.deque[StreamItem] = collections.deque()
        self._failure: BaseException | None = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def config(self) -> StreamConfig:
        return self._config

    @property
    def satellite_id(self) -> str:
        return self._config.satellite_id

    @property
    def interval_ms(self) -> float:
        return self._config.interval_ms

    @property
    def options(self) -> Mapping[str, bool]:
        return self._config.options

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def previous(self) -> PositionRecord | None:
        """Most recent successfully parsed position (delta baseline)."""
        return self._previous

    @property
    def stats(self) -> StreamStats:
        return StreamStats(
            requests_issued=self._requests,
            responses_received=self._responses,
            last_observed_lag_ms=self._lag_ms,
        )

    @property
    def _fetch_in_flight(self) -> bool:
        return self._fetch_task is not None and not self._fetch_task.done()

    # ------------------------------------------------------------------
    # Timer seams
    # ------------------------------------------------------------------

    def _make_timeout(self, callback: Callable[[], None], delay_ms: float) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay_ms / 1000, callback)

    def _unmake_timeout(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()

    # ------------------------------------------------------------------
    # Flow control
    # ------------------------------------------------------------------

    def adjust_for_lag(self) -> float:
        """Delay in milliseconds before the next fetch."""
        return adjust_for_lag(self._config.interval_ms, self._lag_ms)

    def pause(self) -> None:
        """Disarm any pending fetch and stop producing until :meth:`resume`.

        A request already in flight is not cancelled; its result is still
        delivered.
        """
        if self._timer is not None:
            self._unmake_timeout(self._timer)
            self._timer = None
        self._paused = True
        if self._state is not StreamState.FETCHING:
            self._state = StreamState.IDLE

    def resume(self) -> None:
        """Resume production; re-arms the timer if a consumer is waiting."""
        self._paused = False
        waiting = self._waiter is not None and not self._waiter.done()
        if waiting and self._timer is None and not self._fetch_in_flight:
            self._read()

    def _read(self) -> None:
        if self._paused or self._closed:
            self._state = StreamState.IDLE
            return
        if self._timer is not None:
            return
        delay_ms = self.adjust_for_lag()
        _logger.debug(
            "Satellite %s: next fetch in %.0f ms (lag %.0f ms)",
            self._config.satellite_id,
            delay_ms,
            self._lag_ms,
        )
        self._timer = self._make_timeout(self._on_timer, delay_ms)
        self._state = StreamState.WAITING

    def _on_timer(self) -> None:
        self._timer = None
        task = asyncio.get_running_loop().create_task(self.fetch_position())
        task.add_done_callback(self._on_fetch_done)
        self._fetch_task = task

    def _on_fetch_done(self, task: asyncio.Task[StreamItem]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        if self._waiter is not None and not self._waiter.done():
            self._waiter.set_exception(exc)
        else:
            self._failure = exc

    # ------------------------------------------------------------------
    # Fetch and parse
    # ------------------------------------------------------------------

    async def fetch_position(self) -> StreamItem:
        """Fetch, parse and deliver one record.

        Failures of any kind are delivered as :class:`ErrorRecord` and
        never raised. The record is also returned.
        """
        self._state = StreamState.FETCHING
        self._requests += 1
        started = time.monotonic()

        record: StreamItem
        try:
            payload = await self._fetcher.fetch()
        except SatLocTransportError as exc:
            _logger.debug("Satellite %s: fetch failed: %s", self._config.satellite_id, exc)
            record = normalize_error(exc)
        else:
            record = self._handle_payload(payload)

        self._lag_ms = (time.monotonic() - started) * 1000
        self._push(record)
        return record

    def _handle_payload(self, payload: str) -> StreamItem:
        try:
            decoded = json.loads(payload)
        except json.JSONDecodeError as exc:
            _logger.debug("Satellite %s: body is not JSON: %s", self._config.satellite_id, payload[:200])
            return parse_error(exc)
        if not isinstance(decoded, dict):
            return parse_error(ValueError(f"expected a JSON object, got {type(decoded).__name__}"))

        normalized = normalize_error(decoded)
        if isinstance(normalized, ErrorRecord):
            _logger.debug(
                "Satellite %s: service reported error=%s message=%s",
                self._config.satellite_id,
                normalized.error,
                normalized.message,
            )
            return normalized

        try:
            record = PositionRecord.model_validate(decoded)
        except ValidationError as exc:
            _logger.debug("Satellite %s: unexpected payload: %s", self._config.satellite_id, payload[:200])
            return parse_error(exc)

        self._responses += 1
        if self._config.calculate_change:
            return self.calculate_change(record)
        self._previous = record
        return record

    def calculate_change(self, record: StreamItem) -> StreamItem:
        """Attach per-second deltas relative to the previous position.

        Error records are returned unchanged. Any position becomes the new
        baseline, including the first one, which has nothing to compare to.
        """
        if isinstance(record, ErrorRecord):
            return record
        if self._previous is not None:
            latitude_delta, longitude_delta = compute_change(record, self._previous)
            record = record.with_change(latitude_delta, longitude_delta)
        self._previous = record
        return record

    def _push(self, record: StreamItem) -> None:
        self._state = StreamState.DELIVERING
        if self._waiter is not None and not self._waiter.done():
            self._waiter.set_result(record)
        else:
            self._buffer.append(record)

    # ------------------------------------------------------------------
    # Async iteration and lifecycle
    # ------------------------------------------------------------------

    def __aiter__(self) -> SatLocStream:
        return self

    async def __anext__(self) -> StreamItem:
        if self._closed:
            raise StopAsyncIteration
        if self._failure is not None:
            failure, self._failure = self._failure, None
            raise failure
        if self._buffer:
            return self._buffer.popleft()

        self._waiter = asyncio.get_running_loop().create_future()
        if not self._fetch_in_flight:
            self._read()
        try:
            result = await self._waiter
        finally:
            self._waiter = None

        if result is _END:
            raise StopAsyncIteration
        return result

    async def aclose(self) -> None:
        """Tear the stream down; iteration ends and in-flight work is dropped."""
        if self._closed:
            return
        self._closed = True
        self.pause()

        task = self._fetch_task
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._state = StreamState.IDLE
        self._buffer.clear()

        if self._waiter is not None and not self._waiter.done():
            self._waiter.set_result(_END)

    async def __aenter__(self) -> SatLocStream:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()
