from __future__ import annotations

from abc import ABCMeta, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, final, runtime_checkable

from typing_extensions import override

from handlerchain._internal.common.types import InputT, OutputT
from handlerchain._internal.handler import AsyncBaseHandler, BaseHandler

if TYPE_CHECKING:
    from handlerchain._internal.cancellation import CancellationToken
    from handlerchain._internal.common.types import AsyncCallNext, CallNext


@runtime_checkable
class BaseInterceptor(Protocol[InputT, OutputT], metaclass=ABCMeta):
    """Observes or redirects the invocation of one handler.

    An interceptor may call ``handler.handle(value, call_next)`` zero or
    more times, rewrite the input or the result, translate errors, or
    skip the handler and go straight to ``call_next``.
    """

    @abstractmethod
    def intercept(
        self,
        handler: BaseHandler[InputT, OutputT],
        value: InputT,
        call_next: CallNext[InputT, OutputT],
    ) -> OutputT:
        raise NotImplementedError


@runtime_checkable
class AsyncBaseInterceptor(Protocol[InputT, OutputT], metaclass=ABCMeta):
    @abstractmethod
    async def intercept(
        self,
        handler: AsyncBaseHandler[InputT, OutputT],
        value: InputT,
        call_next: AsyncCallNext[InputT, OutputT],
        cancel: CancellationToken,
    ) -> OutputT:
        raise NotImplementedError


@final
class InterceptedHandler(BaseHandler[InputT, OutputT]):
    __slots__: tuple[str, ...] = ("handler", "interceptor")

    def __init__(
        self,
        handler: BaseHandler[InputT, OutputT],
        interceptor: BaseInterceptor[InputT, OutputT],
    ) -> None:
        self.handler = handler
        self.interceptor = interceptor

    def __repr__(self) -> str:
        name = type(self).__name__
        return f"<{name} {self.interceptor!r} -> {self.handler!r}>"

    @override
    def handle(
        self,
        value: InputT,
        call_next: CallNext[InputT, OutputT],
    ) -> OutputT:
        return self.interceptor.intercept(self.handler, value, call_next)


@final
class AsyncInterceptedHandler(AsyncBaseHandler[InputT, OutputT]):
    __slots__: tuple[str, ...] = ("handler", "interceptor")

    def __init__(
        self,
        handler: AsyncBaseHandler[InputT, OutputT],
        interceptor: AsyncBaseInterceptor[InputT, OutputT],
    ) -> None:
        self.handler = handler
        self.interceptor = interceptor

    def __repr__(self) -> str:
        name = type(self).__name__
        return f"<{name} {self.interceptor!r} -> {self.handler!r}>"

    @override
    async def handle(
        self,
        value: InputT,
        call_next: AsyncCallNext[InputT, OutputT],
        cancel: CancellationToken,
    ) -> OutputT:
        return await self.interceptor.intercept(
            self.handler,
            value,
            call_next,
            cancel,
        )


def unwrap(handler: Any) -> Any:  # noqa: ANN401
    """Return the original handler behind any interception wrappers."""
    while isinstance(handler, (InterceptedHandler, AsyncInterceptedHandler)):
        handler = handler.handler
    return handler
