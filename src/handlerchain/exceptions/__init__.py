"""Custom exceptions for the handlerchain library.

Construction errors (`InvalidHandlerError`, `NotRegisteredError`,
`ChainFrozenError`) are raised while a chain is being built.
`UnsupportedInputError` is raised when an input runs off the end of a
chain. Cancellation is reported with `asyncio.CancelledError`.
"""

from handlerchain._internal.exceptions import (
    BaseHandlerChainError,
    ChainFrozenError,
    InvalidHandlerError,
    NotRegisteredError,
    UnsupportedInputError,
)

__all__ = (
    "BaseHandlerChainError",
    "ChainFrozenError",
    "InvalidHandlerError",
    "NotRegisteredError",
    "UnsupportedInputError",
)
