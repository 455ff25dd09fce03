from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from typing_extensions import override

from handlerchain._internal.handler import type_name
from handlerchain._internal.interception.base import (
    AsyncBaseInterceptor,
    BaseInterceptor,
    unwrap,
)

if TYPE_CHECKING:
    from handlerchain._internal.cancellation import CancellationToken
    from handlerchain._internal.common.types import AsyncCallNext, CallNext
    from handlerchain._internal.handler import AsyncBaseHandler, BaseHandler

logger = logging.getLogger("handlerchain.interception")


class StopwatchInterceptor(BaseInterceptor[Any, Any]):
    def __init__(self, log: logging.Logger | None = None) -> None:
        self.logger = log or logger

    @override
    def intercept(
        self,
        handler: BaseHandler[Any, Any],
        value: Any,
        call_next: CallNext[Any, Any],
    ) -> Any:
        name = type_name(unwrap(handler))
        started = time.perf_counter()
        try:
            return handler.handle(value, call_next)
        finally:
            elapsed = (time.perf_counter() - started) * 1000
            self.logger.debug("%s elapsed %.3f ms", name, elapsed)


class AsyncStopwatchInterceptor(AsyncBaseInterceptor[Any, Any]):
    def __init__(self, log: logging.Logger | None = None) -> None:
        self.logger = log or logger

    @override
    async def intercept(
        self,
        handler: AsyncBaseHandler[Any, Any],
        value: Any,
        call_next: AsyncCallNext[Any, Any],
        cancel: CancellationToken,
    ) -> Any:
        name = type_name(unwrap(handler))
        started = time.perf_counter()
        try:
            return await handler.handle(value, call_next, cancel)
        finally:
            elapsed = (time.perf_counter() - started) * 1000
            self.logger.debug("%s elapsed %.3f ms", name, elapsed)
