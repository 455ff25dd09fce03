"""Leaf handlers that end a chain without consulting ``call_next``."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Generator
from typing import TYPE_CHECKING, Any, Generic, NoReturn, final

from typing_extensions import override

from handlerchain._internal.common.types import InputT, OutputT
from handlerchain._internal.exceptions import UnsupportedInputError
from handlerchain._internal.handler import AsyncBaseHandler, BaseHandler

if TYPE_CHECKING:
    from handlerchain._internal.cancellation import CancellationToken
    from handlerchain._internal.common.types import AsyncCallNext, CallNext


def unsupported(value: object) -> NoReturn:
    raise UnsupportedInputError(type(value))


async def unsupported_async(
    value: object,
    _cancel: CancellationToken,
) -> NoReturn:
    raise UnsupportedInputError(type(value))


@final
class CompletedResult(Generic[OutputT]):
    """An awaitable that is already resolved and never suspends."""

    __slots__: tuple[str, ...] = ("value",)

    def __init__(self, value: OutputT) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"

    def __await__(self) -> Generator[Any, None, OutputT]:
        return self.value
        yield  # pragma: no cover


class ReturnDefault(BaseHandler[InputT, OutputT]):
    """Return ``factory()`` or `None` when no factory is given.

    ``ReturnDefault(int)`` yields ``0``, ``ReturnDefault(list)`` a new
    empty list on every call.
    """

    def __init__(self, factory: Callable[[], OutputT] | None = None) -> None:
        self.factory = factory

    @override
    def handle(
        self,
        value: InputT,
        call_next: CallNext[InputT, OutputT],
    ) -> OutputT:
        if self.factory is None:
            return None  # type: ignore[return-value]
        return self.factory()


class ReturnCompleted(BaseHandler[InputT, Awaitable[OutputT]]):
    """Resolve an awaitable output immediately, optionally with a payload."""

    def __init__(self, payload: OutputT | None = None) -> None:
        self.payload = payload

    @override
    def handle(
        self,
        value: InputT,
        call_next: CallNext[InputT, Awaitable[OutputT]],
    ) -> Awaitable[OutputT]:
        return CompletedResult(self.payload)


class RaiseUnsupported(BaseHandler[InputT, OutputT]):
    @override
    def handle(
        self,
        value: InputT,
        call_next: CallNext[InputT, OutputT],
    ) -> OutputT:
        unsupported(value)


class AsyncReturnDefault(AsyncBaseHandler[InputT, OutputT]):
    def __init__(self, factory: Callable[[], OutputT] | None = None) -> None:
        self.factory = factory

    @override
    async def handle(
        self,
        value: InputT,
        call_next: AsyncCallNext[InputT, OutputT],
        cancel: CancellationToken,
    ) -> OutputT:
        if self.factory is None:
            return None  # type: ignore[return-value]
        return self.factory()


class AsyncRaiseUnsupported(AsyncBaseHandler[InputT, OutputT]):
    @override
    async def handle(
        self,
        value: InputT,
        call_next: AsyncCallNext[InputT, OutputT],
        cancel: CancellationToken,
    ) -> OutputT:
        unsupported(value)
