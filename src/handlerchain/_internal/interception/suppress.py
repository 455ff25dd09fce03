from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from typing_extensions import override

from handlerchain._internal.handler import type_name
from handlerchain._internal.interception.base import (
    AsyncBaseInterceptor,
    BaseInterceptor,
    unwrap,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from handlerchain._internal.cancellation import CancellationToken
    from handlerchain._internal.common.types import AsyncCallNext, CallNext
    from handlerchain._internal.handler import AsyncBaseHandler, BaseHandler

logger = logging.getLogger("handlerchain.interception")


class SuppressErrorsInterceptor(BaseInterceptor[Any, Any]):
    """Turn the listed exceptions into a default result.

    With no exception types given, every `Exception` is suppressed.
    The default result is ``factory()``, or `None` without a factory.
    """

    def __init__(
        self,
        *exc_types: type[Exception],
        factory: Callable[[], Any] | None = None,
    ) -> None:
        self.exc_types = exc_types or (Exception,)
        self.factory = factory

    def default(self) -> Any:
        return None if self.factory is None else self.factory()

    @override
    def intercept(
        self,
        handler: BaseHandler[Any, Any],
        value: Any,
        call_next: CallNext[Any, Any],
    ) -> Any:
        try:
            return handler.handle(value, call_next)
        except self.exc_types as exc:
            logger.warning(
                "%s raised %r, returning the default result",
                type_name(unwrap(handler)),
                exc,
            )
            return self.default()


class AsyncSuppressErrorsInterceptor(AsyncBaseInterceptor[Any, Any]):
    def __init__(
        self,
        *exc_types: type[Exception],
        factory: Callable[[], Any] | None = None,
    ) -> None:
        self.exc_types = exc_types or (Exception,)
        self.factory = factory

    def default(self) -> Any:
        return None if self.factory is None else self.factory()

    @override
    async def intercept(
        self,
        handler: AsyncBaseHandler[Any, Any],
        value: Any,
        call_next: AsyncCallNext[Any, Any],
        cancel: CancellationToken,
    ) -> Any:
        try:
            return await handler.handle(value, call_next, cancel)
        except self.exc_types as exc:
            logger.warning(
                "%s raised %r, returning the default result",
                type_name(unwrap(handler)),
                exc,
            )
            return self.default()
