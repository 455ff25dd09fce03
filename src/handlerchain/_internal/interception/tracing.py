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
    from handlerchain._internal.cancellation import CancellationToken
    from handlerchain._internal.common.types import AsyncCallNext, CallNext
    from handlerchain._internal.handler import AsyncBaseHandler, BaseHandler

logger = logging.getLogger("handlerchain.interception")


class LoggingInterceptor(BaseInterceptor[Any, Any]):
    """Log the input, the output, and any error raised by the handler.

    Errors are logged and re-raised unchanged.
    """

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
        self.logger.debug("%s input = %r", name, value)
        try:
            output = handler.handle(value, call_next)
        except Exception:
            self.logger.exception("%s failed on input %r", name, value)
            raise
        self.logger.debug("%s output = %r", name, output)
        return output


class AsyncLoggingInterceptor(AsyncBaseInterceptor[Any, Any]):
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
        self.logger.debug("%s input = %r", name, value)
        try:
            output = await handler.handle(value, call_next, cancel)
        except Exception:
            self.logger.exception("%s failed on input %r", name, value)
            raise
        self.logger.debug("%s output = %r", name, output)
        return output
