from __future__ import annotations

from typing import Any

import pytest
from typing_extensions import override

from handlerchain import (
    AsyncBaseHandler,
    AsyncCallNext,
    BaseHandler,
    CallNext,
    CancellationToken,
)
from handlerchain.cancellation import sleep


@pytest.fixture
def calls() -> list[str]:
    return []


def name_of(tp: type) -> str:
    return f"{tp.__module__}.{tp.__qualname__}"


class Recorder(BaseHandler[Any, Any]):
    """Record that it was called, then delegate."""

    def __init__(self, name: str, calls: list[str]) -> None:
        self.name = name
        self.calls = calls

    @override
    def handle(self, value: Any, call_next: CallNext[Any, Any]) -> Any:
        self.calls.append(self.name)
        return call_next(value)


class Constant(BaseHandler[Any, Any]):
    def __init__(self, result: Any) -> None:
        self.result = result

    @override
    def handle(self, value: Any, call_next: CallNext[Any, Any]) -> Any:
        return self.result


class Accept(BaseHandler[int, str]):
    """Consume the values it accepts, delegate everything else."""

    def __init__(self, name: str, accepted: set[int]) -> None:
        self.name = name
        self.accepted = accepted

    @override
    def handle(self, value: int, call_next: CallNext[int, str]) -> str:
        if value in self.accepted:
            return f"{self.name}:{value}"
        return call_next(value)


class AsyncRecorder(AsyncBaseHandler[Any, Any]):
    def __init__(self, name: str, calls: list[str]) -> None:
        self.name = name
        self.calls = calls

    @override
    async def handle(
        self,
        value: Any,
        call_next: AsyncCallNext[Any, Any],
        cancel: CancellationToken,
    ) -> Any:
        self.calls.append(self.name)
        return await call_next(value, cancel)


class Delay(AsyncBaseHandler[Any, Any]):
    def __init__(self, seconds: float, result: Any) -> None:
        self.seconds = seconds
        self.result = result

    @override
    async def handle(
        self,
        value: Any,
        call_next: AsyncCallNext[Any, Any],
        cancel: CancellationToken,
    ) -> Any:
        await sleep(self.seconds, cancel)
        return self.result
