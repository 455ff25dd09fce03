from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, TypeAlias, TypeVar

if TYPE_CHECKING:
    from handlerchain._internal.cancellation import CancellationToken

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")
ReturnT = TypeVar("ReturnT")

CallNext: TypeAlias = Callable[[InputT], OutputT]
AsyncCallNext: TypeAlias = Callable[
    [InputT, "CancellationToken"],
    Awaitable[OutputT],
]
