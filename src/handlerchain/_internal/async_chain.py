from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

from typing_extensions import override

from handlerchain._internal.cancellation import CancellationToken
from handlerchain._internal.common.types import InputT, OutputT
from handlerchain._internal.exceptions import (
    InvalidHandlerError,
    raise_chain_frozen_error,
)
from handlerchain._internal.handler import (
    AsyncBaseHandler,
    is_handler,
    type_name,
)
from handlerchain._internal.interception.strategy import DEFAULT_STRATEGY
from handlerchain._internal.terminal import unsupported_async
from handlerchain._internal.tree import render, walk

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterator

    from handlerchain._internal.common.types import AsyncCallNext
    from handlerchain._internal.interception.strategy import (
        InterceptionStrategy,
    )
    from handlerchain._internal.tree import Node

logger = logging.getLogger("handlerchain.chain")


def _invoke(
    handler: AsyncBaseHandler[InputT, OutputT],
    call_next: AsyncCallNext[InputT, OutputT],
    value: InputT,
    cancel: CancellationToken,
) -> Awaitable[OutputT]:
    return handler.handle(value, call_next, cancel)


class AsyncChain(AsyncBaseHandler[InputT, OutputT]):
    """Asynchronous composite handler.

    Composition is the same as `Chain`: the delegate is built once and
    never suspends on its own. Awaiting happens only inside the children.
    """

    def __init__(
        self,
        *handlers: AsyncBaseHandler[InputT, OutputT],
        strategy: InterceptionStrategy | None = None,
    ) -> None:
        self._strategy = strategy or DEFAULT_STRATEGY
        self._handlers: list[AsyncBaseHandler[InputT, OutputT]] = []
        for handler in handlers:
            self.add(handler)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} handlers={len(self._handlers)}>"

    @override
    def __str__(self) -> str:
        return self.describe()

    def __len__(self) -> int:
        return len(self._handlers)

    @property
    def strategy(self) -> InterceptionStrategy:
        return self._strategy

    @property
    def handlers(self) -> tuple[AsyncBaseHandler[InputT, OutputT], ...]:
        return tuple(self._handlers)

    @property
    def is_built(self) -> bool:
        return "_delegate" in self.__dict__

    def add(
        self,
        handler: AsyncBaseHandler[InputT, OutputT],
        *,
        handler_type: type | None = None,
    ) -> None:
        if self.is_built:
            raise_chain_frozen_error("add")
        if not is_handler(handler):
            raise InvalidHandlerError(handler)

        intercepted = self._strategy.intercept_async(
            handler,
            handler_type=handler_type,
        )
        self._handlers.append(intercepted)
        logger.debug("Added %s to %s", type_name(handler), type_name(self))

    @functools.cached_property
    def _delegate(
        self,
    ) -> Callable[
        [AsyncCallNext[InputT, OutputT]],
        AsyncCallNext[InputT, OutputT],
    ]:
        handlers = tuple(self._handlers)

        def delegate(
            call_next: AsyncCallNext[InputT, OutputT],
        ) -> AsyncCallNext[InputT, OutputT]:
            for handler in reversed(handlers):
                call_next = functools.partial(_invoke, handler, call_next)
            return call_next

        return delegate

    @override
    async def handle(
        self,
        value: InputT,
        call_next: AsyncCallNext[InputT, OutputT] | None = None,
        cancel: CancellationToken | None = None,
    ) -> OutputT:
        if call_next is None:
            call_next = unsupported_async
        if cancel is None:
            cancel = CancellationToken()
        return await self._delegate(call_next)(value, cancel)

    def iter_nodes(self, depth: int = 0) -> Iterator[Node]:
        return walk(self, self._handlers, depth)

    def describe(self) -> str:
        return render(self.iter_nodes())
