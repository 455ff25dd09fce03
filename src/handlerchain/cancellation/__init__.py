"""Cooperative cancellation for asynchronous chains.

A `CancellationToken` is threaded through every asynchronous handler.
`wait`, `sleep` and `gather` observe it: when the token fires they cancel
and await their in-flight sub-tasks, then raise `asyncio.CancelledError`.
"""

from handlerchain._internal.cancellation import (
    CancellationToken,
    gather,
    sleep,
    wait,
)

__all__ = (
    "CancellationToken",
    "gather",
    "sleep",
    "wait",
)
