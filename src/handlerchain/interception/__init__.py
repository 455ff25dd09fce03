"""Interception of chain members.

An interceptor wraps a single handler and can:

- Execute code before and after the handler runs
- Rewrite the input or the result
- Catch, translate or suppress the handler's errors
- Bypass the handler entirely by calling `call_next` directly

An interception strategy decides, once per handler and at the moment the
handler joins a chain, which interceptors wrap it.
"""

from handlerchain._internal.interception.base import (
    AsyncBaseInterceptor,
    AsyncInterceptedHandler,
    BaseInterceptor,
    InterceptedHandler,
    unwrap,
)
from handlerchain._internal.interception.feature import (
    AsyncFeatureToggleInterceptor,
    FeatureToggleInterceptor,
)
from handlerchain._internal.interception.strategy import (
    DEFAULT_STRATEGY,
    InterceptionStrategy,
    LocatorInterceptionStrategy,
    NoopInterceptionStrategy,
)
from handlerchain._internal.interception.suppress import (
    AsyncSuppressErrorsInterceptor,
    SuppressErrorsInterceptor,
)
from handlerchain._internal.interception.timing import (
    AsyncStopwatchInterceptor,
    StopwatchInterceptor,
)
from handlerchain._internal.interception.tracing import (
    AsyncLoggingInterceptor,
    LoggingInterceptor,
)

__all__ = (
    "DEFAULT_STRATEGY",
    "AsyncBaseInterceptor",
    "AsyncFeatureToggleInterceptor",
    "AsyncInterceptedHandler",
    "AsyncLoggingInterceptor",
    "AsyncStopwatchInterceptor",
    "AsyncSuppressErrorsInterceptor",
    "BaseInterceptor",
    "FeatureToggleInterceptor",
    "InterceptedHandler",
    "InterceptionStrategy",
    "LocatorInterceptionStrategy",
    "LoggingInterceptor",
    "NoopInterceptionStrategy",
    "StopwatchInterceptor",
    "SuppressErrorsInterceptor",
    "unwrap",
)
