from __future__ import annotations

import logging
from abc import ABCMeta, abstractmethod
from collections.abc import Hashable
from dataclasses import dataclass
from typing import Any, Protocol, final, runtime_checkable

from typing_extensions import override

from handlerchain._internal.exceptions import NotRegisteredError

logger = logging.getLogger("handlerchain.locator")


@dataclass(slots=True, frozen=True)
class InterceptorsKey:
    """Lookup key for the interceptors registered for one handler type.

    Matching is by exact type: interceptors registered for a base class
    do not apply to its subclasses.

    The input and output types are not part of the key. Type parameters
    are erased at runtime, so a concrete handler class such as
    ``class Parser(BaseHandler[str, int])`` already fixes both of them.
    Generic handlers shared between chains of different types can be
    told apart by adding them with an explicit ``handler_type``.
    """

    handler_type: type
    is_async: bool = False


@runtime_checkable
class ServiceLocator(Protocol, metaclass=ABCMeta):
    @abstractmethod
    def resolve(self, key: Hashable) -> Any | None:  # noqa: ANN401
        raise NotImplementedError


def resolve_required(
    locator: ServiceLocator,
    key: Hashable,
) -> Any:  # noqa: ANN401
    """Resolve ``key`` and treat a missing registration as an error."""
    instance = locator.resolve(key)
    if instance is None:
        raise NotRegisteredError(key)
    return instance


@final
class Registry(ServiceLocator):
    """Explicit registry of instances and interceptor lists.

    Interceptor keys that were never registered resolve to an empty tuple,
    every other unknown key resolves to `None`.
    """

    __slots__: tuple[str, ...] = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[Hashable, Any] = {}

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def register(self, key: Hashable, instance: object) -> None:
        if instance is None:
            msg = f"Cannot register None for {key!r}"
            raise ValueError(msg)
        self._entries[key] = instance

    def add_interceptors(
        self,
        handler_type: type,
        *interceptors: object,
        is_async: bool = False,
    ) -> None:
        key = InterceptorsKey(handler_type, is_async=is_async)
        current: tuple[object, ...] = self._entries.get(key, ())
        self._entries[key] = (*current, *interceptors)
        logger.debug(
            "Registered %d interceptor(s) for %s",
            len(interceptors),
            handler_type.__qualname__,
        )

    @override
    def resolve(self, key: Hashable) -> Any | None:
        try:
            return self._entries[key]
        except KeyError:
            if isinstance(key, InterceptorsKey):
                return ()
            return None
