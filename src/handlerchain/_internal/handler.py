from __future__ import annotations

from abc import ABCMeta, abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from handlerchain._internal.common.types import InputT, OutputT

if TYPE_CHECKING:
    from handlerchain._internal.cancellation import CancellationToken
    from handlerchain._internal.common.types import AsyncCallNext, CallNext


@runtime_checkable
class BaseHandler(Protocol[InputT, OutputT], metaclass=ABCMeta):
    """A unit of work in a chain.

    A handler either produces the output for ``value`` itself or passes
    ``value`` on to ``call_next``, which stands for the rest of the chain.
    """

    @abstractmethod
    def handle(
        self,
        value: InputT,
        call_next: CallNext[InputT, OutputT],
    ) -> OutputT:
        raise NotImplementedError


@runtime_checkable
class AsyncBaseHandler(Protocol[InputT, OutputT], metaclass=ABCMeta):
    """Asynchronous counterpart of `BaseHandler`.

    ``cancel`` is threaded through every call. Handlers that await
    cancellable primitives must pass it along.
    """

    @abstractmethod
    async def handle(
        self,
        value: InputT,
        call_next: AsyncCallNext[InputT, OutputT],
        cancel: CancellationToken,
    ) -> OutputT:
        raise NotImplementedError


def is_handler(obj: object) -> bool:
    return obj is not None and callable(getattr(obj, "handle", None))


def type_name(obj: object) -> str:
    tp = type(obj)
    return f"{tp.__module__}.{tp.__qualname__}"
