from collections.abc import Hashable
from typing import NoReturn


class BaseHandlerChainError(Exception):
    pass


class InvalidHandlerError(BaseHandlerChainError, TypeError):
    """Raised when an absent or malformed handler is added to a chain."""

    def __init__(self, handler: object) -> None:
        self.handler: object = handler
        if handler is None:
            msg = "Handler must not be None."
        else:
            msg = (
                f"{type(handler).__qualname__!r} is not a handler: "
                "it does not define a callable 'handle' method."
            )
        super().__init__(msg)


class NotRegisteredError(BaseHandlerChainError, LookupError):
    """The service locator has nothing registered under the key."""

    def __init__(self, key: Hashable) -> None:
        self.key: Hashable = key
        super().__init__(f"Nothing is registered for {key!r}.")


class UnsupportedInputError(BaseHandlerChainError, NotImplementedError):
    """No handler in the chain was able to handle the input."""

    def __init__(self, input_type: type) -> None:
        self.input_type: type = input_type
        super().__init__(
            f"Cannot handle this input. Input information: {input_type}"
        )


class ChainFrozenError(BaseHandlerChainError):
    """Raised when a chain is modified after its delegate was built."""

    def __init__(
        self,
        *,
        operation: str,
        reason: str,
        solution: str,
    ) -> None:
        self.operation: str = operation
        self.reason: str = reason
        self.solution: str = solution

        msg = (
            f"Cannot perform operation '{operation}'.\n"
            f"  Reason: {reason}\n"
            f"  Resolution: {solution}"
        )
        super().__init__(msg)


def raise_chain_frozen_error(operation: str) -> NoReturn:
    raise ChainFrozenError(
        operation=operation,
        reason="The chain has already been built and its members are frozen.",
        solution=(
            "Handlers must be added while the chain is being constructed, "
            "before it is invoked for the first time. "
            "Create a new chain instead of extending a built one."
        ),
    )
