from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

from typing_extensions import override

from handlerchain._internal.common.types import InputT, OutputT
from handlerchain._internal.exceptions import (
    InvalidHandlerError,
    raise_chain_frozen_error,
)
from handlerchain._internal.handler import BaseHandler, is_handler, type_name
from handlerchain._internal.interception.strategy import DEFAULT_STRATEGY
from handlerchain._internal.terminal import unsupported
from handlerchain._internal.tree import render, walk

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from handlerchain._internal.common.types import CallNext
    from handlerchain._internal.interception.strategy import (
        InterceptionStrategy,
    )
    from handlerchain._internal.tree import Node

logger = logging.getLogger("handlerchain.chain")


def _invoke(
    handler: BaseHandler[InputT, OutputT],
    call_next: CallNext[InputT, OutputT],
    value: InputT,
) -> OutputT:
    return handler.handle(value, call_next)


class Chain(BaseHandler[InputT, OutputT]):
    """A composite handler made of an ordered list of child handlers.

    The first child sees the input first and decides whether to pass it on;
    the last child sits right before the continuation given to `handle`.
    A chain is itself a handler, so chains nest.

    Children are added at construction time, either positionally or with
    `add` from a subclass ``__init__`` (after calling ``super().__init__``).
    Every child goes through the interception ``strategy`` when added. The
    first invocation builds the composed delegate and freezes the chain.
    """

    def __init__(
        self,
        *handlers: BaseHandler[InputT, OutputT],
        strategy: InterceptionStrategy | None = None,
    ) -> None:
        self._strategy = strategy or DEFAULT_STRATEGY
        self._handlers: list[BaseHandler[InputT, OutputT]] = []
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
    def handlers(self) -> tuple[BaseHandler[InputT, OutputT], ...]:
        return tuple(self._handlers)

    @property
    def is_built(self) -> bool:
        return "_delegate" in self.__dict__

    def add(
        self,
        handler: BaseHandler[InputT, OutputT],
        *,
        handler_type: type | None = None,
    ) -> None:
        """Intercept ``handler`` and append it as the last child.

        ``handler_type`` is the key interceptors are resolved by and
        defaults to the handler's own class.
        """
        if self.is_built:
            raise_chain_frozen_error("add")
        if not is_handler(handler):
            raise InvalidHandlerError(handler)

        intercepted = self._strategy.intercept(
            handler,
            handler_type=handler_type,
        )
        self._handlers.append(intercepted)
        logger.debug("Added %s to %s", type_name(handler), type_name(self))

    @functools.cached_property
    def _delegate(
        self,
    ) -> Callable[[CallNext[InputT, OutputT]], CallNext[InputT, OutputT]]:
        handlers = tuple(self._handlers)

        def delegate(
            call_next: CallNext[InputT, OutputT],
        ) -> CallNext[InputT, OutputT]:
            for handler in reversed(handlers):
                call_next = functools.partial(_invoke, handler, call_next)
            return call_next

        return delegate

    @override
    def handle(
        self,
        value: InputT,
        call_next: CallNext[InputT, OutputT] | None = None,
    ) -> OutputT:
        """Run ``value`` through the children in order.

        Without ``call_next``, an input that falls off the end of the
        chain raises `UnsupportedInputError`.
        """
        if call_next is None:
            call_next = unsupported
        return self._delegate(call_next)(value)

    def iter_nodes(self, depth: int = 0) -> Iterator[Node]:
        return walk(self, self._handlers, depth)

    def describe(self) -> str:
        return render(self.iter_nodes())

