"""Flow-restricted batch executor.

Dispatches one remote call per key while keeping the number of calls in
any window at or below the configured ceiling:

    1. ceiling = floor(rate_limit.max_requests * buffer_ratio)
    2. keys are split into consecutive chunks of ``ceiling`` keys
    3. each chunk is fired concurrently and awaited until every call settles
    4. the full window is slept between chunks (never after the last one)

Per-call failures are recorded and dropped from the result list. Only
configuration and argument errors raise, and they raise before any call
is made.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Sequence, Tuple

from core.exceptions import ValidationError
from core.observability.metrics import record_batch_completion

from .models import BatchReport, CallFailure, CallOutcome, CallSuccess, RateLimit, effective_ceiling

logger = logging.getLogger(__name__)

CallFunction = Callable[..., Any]
SleepFunction = Callable[[float], Awaitable[Any]]


def chunked(keys: Sequence[Any], size: int) -> List[List[Any]]:
    """Split ``keys`` into consecutive chunks of at most ``size`` items."""

    if size < 1:
        raise ValueError("chunk size must be at least 1")
    return [list(keys[start:start + size]) for start in range(0, len(keys), size)]


class FlowRestrictedExecutor:
    """Run one call per key in rate-limited concurrent chunks."""

    def __init__(
        self,
        rate_limit: RateLimit,
        buffer_ratio: float = 1.0,
        *,
        sleep: SleepFunction = asyncio.sleep,
        label: str = "batch",
    ) -> None:
        self.rate_limit = rate_limit
        self.buffer_ratio = buffer_ratio
        self.ceiling = effective_ceiling(rate_limit, buffer_ratio)
        self.label = label
        self._sleep = sleep

    async def execute(
        self,
        call_fn: CallFunction,
        keys: Iterable[Any],
        fixed_params: Sequence[Any] = (),
        *,
        cancel_event: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> List[Any]:
        """Return the payloads of all successful calls in input key order."""

        report = await self.run(
            call_fn,
            keys,
            fixed_params,
            cancel_event=cancel_event,
            timeout=timeout,
        )
        return report.results

    async def run(
        self,
        call_fn: CallFunction,
        keys: Iterable[Any],
        fixed_params: Sequence[Any] = (),
        *,
        cancel_event: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> BatchReport:
        """Execute every call and return the full tagged report.

        ``cancel_event`` and ``timeout`` (seconds from the start of the run)
        are soft stops: the chunk in flight is allowed to settle, no further
        chunk is dispatched and the partial report is returned.
        """

        if not callable(call_fn):
            raise ValidationError("call_fn must be callable", field="call_fn")
        if timeout is not None and timeout < 0:
            raise ValidationError("timeout must not be negative", field="timeout")

        key_list = list(keys)
        params = tuple(fixed_params)
        report = BatchReport(total_keys=len(key_list))
        if not key_list:
            return report

        loop = asyncio.get_running_loop()
        started_at = loop.time()
        deadline = started_at + timeout if timeout is not None else None

        chunks = chunked(key_list, self.ceiling)
        report.chunks_planned = len(chunks)

        window_observed = True
        for index, chunk in enumerate(chunks):
            if not window_observed or self._stop_requested(cancel_event, deadline, loop):
                report.cancelled = True
                logger.warning(
                    "%s: stopping before chunk %d/%d, %d keys not dispatched",
                    self.label,
                    index + 1,
                    len(chunks),
                    sum(len(rest) for rest in chunks[index:]),
                )
                break

            logger.info(
                "%s: dispatching chunk %d/%d (%d calls)",
                self.label,
                index + 1,
                len(chunks),
                len(chunk),
            )
            report.outcomes.extend(await self._dispatch_chunk(call_fn, chunk, params))
            report.chunks_dispatched += 1

            if index < len(chunks) - 1:
                window_observed = await self._wait_window(cancel_event, deadline, loop)

        report.elapsed_seconds = loop.time() - started_at
        record_batch_completion(
            label=self.label,
            total_keys=report.total_keys,
            succeeded=report.succeeded,
            failed=report.failed,
            chunks_dispatched=report.chunks_dispatched,
            chunks_planned=report.chunks_planned,
            cancelled=report.cancelled,
            elapsed_seconds=report.elapsed_seconds,
        )
        return report

    async def _dispatch_chunk(
        self,
        call_fn: CallFunction,
        chunk: Sequence[Any],
        params: Tuple[Any, ...],
    ) -> List[CallOutcome]:
        outcomes = await asyncio.gather(*(self._invoke(call_fn, key, params) for key in chunk))
        return list(outcomes)

    async def _invoke(self, call_fn: CallFunction, key: Any, params: Tuple[Any, ...]) -> CallOutcome:
        try:
            result = call_fn(key, *params)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            logger.warning("%s: call for key %r failed: %s", self.label, key, exc)
            return CallFailure(key=key, error=exc)
        return CallSuccess(key=key, payload=result)

    async def _wait_window(
        self,
        cancel_event: Optional[asyncio.Event],
        deadline: Optional[float],
        loop: asyncio.AbstractEventLoop,
    ) -> bool:
        """Sleep one full window unless a stop is signalled first.

        Returns ``False`` when the wait was cut short, in which case the
        next chunk must not be dispatched.
        """

        window = self.rate_limit.window_seconds
        delay = window
        if deadline is not None:
            delay = min(window, max(deadline - loop.time(), 0.0))
        full_window = delay >= window

        logger.debug("%s: waiting %.3fs before next chunk", self.label, delay)
        if cancel_event is None:
            await self._sleep(delay)
            return full_window

        sleeper = asyncio.ensure_future(self._sleep(delay))
        watcher = asyncio.ensure_future(cancel_event.wait())
        done, pending = await asyncio.wait({sleeper, watcher}, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        if watcher in done:
            return False
        sleeper.result()
        return full_window

    @staticmethod
    def _stop_requested(
        cancel_event: Optional[asyncio.Event],
        deadline: Optional[float],
        loop: asyncio.AbstractEventLoop,
    ) -> bool:
        if cancel_event is not None and cancel_event.is_set():
            return True
        return deadline is not None and loop.time() >= deadline


async def batch_get_with_flow_restriction(
    call_fn: CallFunction,
    keys: Iterable[Any],
    fixed_params: Sequence[Any],
    rate_limit: RateLimit,
    buffer_ratio: float,
    *,
    cancel_event: Optional[asyncio.Event] = None,
    timeout: Optional[float] = None,
    label: str = "batch",
) -> List[Any]:
    """Fetch every key through ``call_fn`` without exceeding ``rate_limit``.

    ``call_fn`` is invoked as ``call_fn(key, *fixed_params)``. The returned
    list holds successful payloads in input order; failed keys are logged
    and omitted.
    """

    executor = FlowRestrictedExecutor(rate_limit, buffer_ratio, label=label)
    return await executor.execute(
        call_fn,
        keys,
        fixed_params,
        cancel_event=cancel_event,
        timeout=timeout,
    )


__all__ = ["FlowRestrictedExecutor", "batch_get_with_flow_restriction", "chunked"]
