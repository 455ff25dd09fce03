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


class FeatureToggleInterceptor(BaseInterceptor[Any, Any]):
    """Skip the handler while its feature is switched off.

    ``is_enabled`` is consulted on every call; a disabled handler is not
    invoked at all and the input goes straight to ``call_next``.
    """

    def __init__(self, is_enabled: Callable[[], bool]) -> None:
        self.is_enabled = is_enabled

    @override
    def intercept(
        self,
        handler: BaseHandler[Any, Any],
        value: Any,
        call_next: CallNext[Any, Any],
    ) -> Any:
        if self.is_enabled():
            return handler.handle(value, call_next)
        logger.debug("%s is disabled, bypassing", type_name(unwrap(handler)))
        return call_next(value)


class AsyncFeatureToggleInterceptor(AsyncBaseInterceptor[Any, Any]):
    def __init__(self, is_enabled: Callable[[], bool]) -> None:
        self.is_enabled = is_enabled

    @override
    async def intercept(
        self,
        handler: AsyncBaseHandler[Any, Any],
        value: Any,
        call_next: AsyncCallNext[Any, Any],
        cancel: CancellationToken,
    ) -> Any:
        if self.is_enabled():
            return await handler.handle(value, call_next, cancel)
        logger.debug("%s is disabled, bypassing", type_name(unwrap(handler)))
        return await call_next(value, cancel)
