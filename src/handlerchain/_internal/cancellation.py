from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, final

if TYPE_CHECKING:
    from collections.abc import Awaitable, Iterable

    from handlerchain._internal.common.types import ReturnT

logger = logging.getLogger("handlerchain.cancellation")

DEFAULT_REASON = "The operation was cancelled."


@final
class CancellationToken:
    """Cooperative cancellation signal shared by one chain invocation.

    Cancelling the token never interrupts running code by itself. Handlers
    observe it either explicitly via `raise_if_cancelled` or by awaiting
    through `wait`, `sleep` and `gather`, which unwind their sub-tasks and
    raise `asyncio.CancelledError` once the token fires.
    """

    __slots__: tuple[str, ...] = ("_event", "reason")

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self.reason: str | None = None

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"<{type(self).__name__} {state}>"

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str | None = None) -> None:
        if self.cancelled:
            return
        self.reason = reason or DEFAULT_REASON
        self._event.set()
        logger.debug("Cancellation requested: %s", self.reason)

    def cancel_after(self, delay: float) -> asyncio.TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(delay, self.cancel)

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise asyncio.CancelledError(self.reason)

    async def wait(self) -> None:
        _ = await self._event.wait()


async def _unwind(tasks: Iterable[asyncio.Future[Any]]) -> None:
    """Cancel and await ``tasks``, then retrieve every outcome.

    Failures of tasks that finished in the same step as the one being
    reported are read here so asyncio never logs them as unretrieved.
    """
    tasks = list(tasks)
    in_flight = [t for t in tasks if not t.done()]
    for task in in_flight:
        _ = task.cancel()
    if in_flight:
        _ = await asyncio.wait(in_flight)
    for task in tasks:
        if not task.cancelled():
            _ = task.exception()


async def wait(aw: Awaitable[ReturnT], cancel: CancellationToken) -> ReturnT:
    """Await ``aw`` unless ``cancel`` fires first."""
    task = asyncio.ensure_future(aw)
    if cancel.cancelled:
        await _unwind((task,))
        raise asyncio.CancelledError(cancel.reason)

    waiter = asyncio.ensure_future(cancel.wait())
    try:
        done, _ = await asyncio.wait(
            (task, waiter),
            return_when=asyncio.FIRST_COMPLETED,
        )
    except asyncio.CancelledError:
        await _unwind((task, waiter))
        raise

    if task in done:
        _ = waiter.cancel()
        return task.result()

    await _unwind((task,))
    raise asyncio.CancelledError(cancel.reason)


async def sleep(delay: float, cancel: CancellationToken) -> None:
    await wait(asyncio.sleep(delay), cancel)


async def gather(
    *aws: Awaitable[ReturnT],
    cancel: CancellationToken,
) -> list[ReturnT]:
    """Run ``aws`` concurrently and return their results in order.

    The first failure is re-raised as is and the remaining sub-tasks are
    cancelled. When ``cancel`` fires, every sub-task is cancelled and
    awaited before `asyncio.CancelledError` is raised; cancellation wins
    over failures that happen in the same step.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if cancel.cancelled:
        await _unwind(tasks)
        raise asyncio.CancelledError(cancel.reason)
    if not tasks:
        return []

    waiter = asyncio.ensure_future(cancel.wait())
    pending: set[asyncio.Future[Any]] = {*tasks, waiter}
    try:
        while pending - {waiter}:
            done, pending = await asyncio.wait(
                pending,
                return_when=asyncio.FIRST_COMPLETED,
            )
            if waiter in done:
                await _unwind(tasks)
                raise asyncio.CancelledError(cancel.reason)

            for task in tasks:
                if task not in done:
                    continue
                if task.cancelled():
                    await _unwind((*tasks, waiter))
                    raise asyncio.CancelledError
                if (exc := task.exception()) is not None:
                    await _unwind((*tasks, waiter))
                    raise exc
    except asyncio.CancelledError:
        await _unwind((*tasks, waiter))
        raise

    _ = waiter.cancel()
    return [task.result() for task in tasks]
