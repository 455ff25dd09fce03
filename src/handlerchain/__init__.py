"""Composable handler chains for the handlerchain library.

This module exposes the composite chains, the handler protocols every
chain member implements, and the terminal handlers that end a chain.
Cross-cutting behavior is woven around handlers by the interception
strategies found in `handlerchain.interception`.
"""

from importlib.metadata import version as get_version

from handlerchain._internal.async_chain import AsyncChain
from handlerchain._internal.cancellation import CancellationToken
from handlerchain._internal.chain import Chain
from handlerchain._internal.common.types import AsyncCallNext, CallNext
from handlerchain._internal.handler import AsyncBaseHandler, BaseHandler
from handlerchain._internal.locator import (
    InterceptorsKey,
    Registry,
    ServiceLocator,
    resolve_required,
)
from handlerchain._internal.terminal import (
    AsyncRaiseUnsupported,
    AsyncReturnDefault,
    CompletedResult,
    RaiseUnsupported,
    ReturnCompleted,
    ReturnDefault,
)

__version__ = get_version("handlerchain")
__all__ = (
    "AsyncBaseHandler",
    "AsyncCallNext",
    "AsyncChain",
    "AsyncRaiseUnsupported",
    "AsyncReturnDefault",
    "BaseHandler",
    "CallNext",
    "CancellationToken",
    "Chain",
    "CompletedResult",
    "InterceptorsKey",
    "RaiseUnsupported",
    "Registry",
    "ReturnCompleted",
    "ReturnDefault",
    "ServiceLocator",
    "resolve_required",
)
