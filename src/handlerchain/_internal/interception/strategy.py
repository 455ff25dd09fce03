from __future__ import annotations

import logging
from abc import ABCMeta, abstractmethod
from typing import TYPE_CHECKING, Any, final

from typing_extensions import override

from handlerchain._internal.interception.base import (
    AsyncInterceptedHandler,
    InterceptedHandler,
)
from handlerchain._internal.locator import InterceptorsKey, resolve_required

if TYPE_CHECKING:
    from collections.abc import Sequence

    from handlerchain._internal.handler import AsyncBaseHandler, BaseHandler
    from handlerchain._internal.interception.base import (
        AsyncBaseInterceptor,
        BaseInterceptor,
    )
    from handlerchain._internal.locator import ServiceLocator

logger = logging.getLogger("handlerchain.interception")


class InterceptionStrategy(metaclass=ABCMeta):
    """Decides which interceptors wrap a handler when it joins a chain.

    The strategy runs once per handler, at the moment the handler is added
    to a chain. Its failures therefore surface while the chain is being
    constructed and never during invocation.
    """

    @abstractmethod
    def resolve_interceptors(
        self,
        handler_type: type,
    ) -> Sequence[BaseInterceptor[Any, Any]]:
        raise NotImplementedError

    @abstractmethod
    def resolve_async_interceptors(
        self,
        handler_type: type,
    ) -> Sequence[AsyncBaseInterceptor[Any, Any]]:
        raise NotImplementedError

    def wrap(
        self,
        handler: BaseHandler[Any, Any],
        interceptors: Sequence[BaseInterceptor[Any, Any]],
    ) -> BaseHandler[Any, Any]:
        """Wrap ``handler`` so the first interceptor is the outermost."""
        intercepted = handler
        for interceptor in reversed(interceptors):
            intercepted = InterceptedHandler(intercepted, interceptor)
        return intercepted

    def wrap_async(
        self,
        handler: AsyncBaseHandler[Any, Any],
        interceptors: Sequence[AsyncBaseInterceptor[Any, Any]],
    ) -> AsyncBaseHandler[Any, Any]:
        intercepted = handler
        for interceptor in reversed(interceptors):
            intercepted = AsyncInterceptedHandler(intercepted, interceptor)
        return intercepted

    def intercept(
        self,
        handler: BaseHandler[Any, Any],
        *,
        handler_type: type | None = None,
    ) -> BaseHandler[Any, Any]:
        tp = handler_type or type(handler)
        interceptors = self.resolve_interceptors(tp)
        if interceptors:
            logger.debug(
                "Wrapping %s with %d interceptor(s)",
                tp.__qualname__,
                len(interceptors),
            )
        return self.wrap(handler, interceptors)

    def intercept_async(
        self,
        handler: AsyncBaseHandler[Any, Any],
        *,
        handler_type: type | None = None,
    ) -> AsyncBaseHandler[Any, Any]:
        tp = handler_type or type(handler)
        interceptors = self.resolve_async_interceptors(tp)
        if interceptors:
            logger.debug(
                "Wrapping %s with %d async interceptor(s)",
                tp.__qualname__,
                len(interceptors),
            )
        return self.wrap_async(handler, interceptors)


@final
class NoopInterceptionStrategy(InterceptionStrategy):
    """Leaves every handler as it is."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    @override
    def resolve_interceptors(
        self,
        handler_type: type,
    ) -> Sequence[BaseInterceptor[Any, Any]]:
        return ()

    @override
    def resolve_async_interceptors(
        self,
        handler_type: type,
    ) -> Sequence[AsyncBaseInterceptor[Any, Any]]:
        return ()

    @override
    def intercept(
        self,
        handler: BaseHandler[Any, Any],
        *,
        handler_type: type | None = None,
    ) -> BaseHandler[Any, Any]:
        return handler

    @override
    def intercept_async(
        self,
        handler: AsyncBaseHandler[Any, Any],
        *,
        handler_type: type | None = None,
    ) -> AsyncBaseHandler[Any, Any]:
        return handler


@final
class LocatorInterceptionStrategy(InterceptionStrategy):
    """Looks interceptors up in a `ServiceLocator` by handler type.

    A locator that returns nothing for the handler's key is an error.
    Register an empty sequence to state that a handler has no interceptors.
    """

    __slots__: tuple[str, ...] = ("locator",)

    def __init__(self, locator: ServiceLocator) -> None:
        self.locator = locator

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.locator!r})"

    @override
    def resolve_interceptors(
        self,
        handler_type: type,
    ) -> Sequence[BaseInterceptor[Any, Any]]:
        key = InterceptorsKey(handler_type)
        return tuple(resolve_required(self.locator, key))

    @override
    def resolve_async_interceptors(
        self,
        handler_type: type,
    ) -> Sequence[AsyncBaseInterceptor[Any, Any]]:
        key = InterceptorsKey(handler_type, is_async=True)
        return tuple(resolve_required(self.locator, key))


DEFAULT_STRATEGY: InterceptionStrategy = NoopInterceptionStrategy()
