from concurrent.futures import ThreadPoolExecutor
from typing import Any

import pytest
from typing_extensions import override

from handlerchain import BaseHandler, CallNext, Chain, Registry
from handlerchain.exceptions import (
    ChainFrozenError,
    InvalidHandlerError,
    UnsupportedInputError,
)
from handlerchain.interception import (
    DEFAULT_STRATEGY,
    LocatorInterceptionStrategy,
)
from tests.conftest import Accept, Constant, Recorder


def test_handlers_run_in_insertion_order(calls: list[str]) -> None:
    chain = Chain(
        Recorder("first", calls),
        Recorder("second", calls),
        Recorder("third", calls),
    )

    result = chain.handle(1, lambda value: value * 10)

    assert result == 10
    assert calls == ["first", "second", "third"]


def test_first_handler_short_circuits(calls: list[str]) -> None:
    chain = Chain(Constant("done"), Recorder("never", calls))

    assert chain.handle(1) == "done"
    assert calls == []


def test_matches_manual_invocation() -> None:
    h1 = Accept("a", {1, 2})
    h2 = Accept("b", {2, 3})
    h3 = Accept("c", {4})
    chain = Chain(h1, h2, h3)

    def fallback(value: int) -> str:
        return f"fallback:{value}"

    def manual(value: int) -> str:
        return h1.handle(
            value,
            lambda x: h2.handle(x, lambda y: h3.handle(y, fallback)),
        )

    for value in range(6):
        assert chain.handle(value, fallback) == manual(value)


def test_empty_chain_without_continuation() -> None:
    chain: Chain[str, int] = Chain()

    with pytest.raises(UnsupportedInputError) as exc_info:
        chain.handle("anything")

    assert exc_info.value.input_type is str
    assert str(exc_info.value) == (
        "Cannot handle this input. Input information: <class 'str'>"
    )


def test_empty_chain_passes_through() -> None:
    chain: Chain[int, int] = Chain()

    assert chain.handle(21, lambda value: value * 2) == 42


def test_falling_off_the_end_is_unsupported() -> None:
    chain = Chain(Accept("a", {1}))

    assert chain.handle(1) == "a:1"
    with pytest.raises(UnsupportedInputError) as exc_info:
        chain.handle(2)
    assert exc_info.value.input_type is int


def test_none_handler_fails_at_construction() -> None:
    with pytest.raises(InvalidHandlerError, match="must not be None"):
        _ = Chain(None)  # type: ignore[arg-type]

    class DummyChain(Chain[int, int]):
        def __init__(self, handler: BaseHandler[int, int]) -> None:
            super().__init__()
            self.add(handler)

    with pytest.raises(TypeError):
        _ = DummyChain(None)  # type: ignore[arg-type]


def test_object_without_handle_is_rejected() -> None:
    match = "'object' is not a handler"
    with pytest.raises(InvalidHandlerError, match=match):
        _ = Chain(object())  # type: ignore[arg-type]


def test_chain_is_frozen_after_first_invocation(calls: list[str]) -> None:
    chain = Chain(Recorder("first", calls))
    chain.add(Recorder("second", calls))
    assert not chain.is_built

    _ = chain.handle(1, lambda value: value)
    assert chain.is_built

    match = "Cannot perform operation 'add'"
    with pytest.raises(ChainFrozenError, match=match):
        chain.add(Recorder("third", calls))
    assert len(chain) == 2


def test_nested_chains_compose(calls: list[str]) -> None:
    inner = Chain(Recorder("inner-1", calls), Recorder("inner-2", calls))
    outer = Chain(
        Recorder("outer-1", calls),
        inner,
        Recorder("outer-2", calls),
    )

    assert outer.handle(5, lambda value: value + 1) == 6
    assert calls == ["outer-1", "inner-1", "inner-2", "outer-2"]


def test_subclass_can_override_handle() -> None:
    class Splitter(Chain[str, int]):
        def __init__(self) -> None:
            super().__init__(Constant(1))

        @override
        def handle(
            self,
            value: str,
            call_next: CallNext[str, int] | None = None,
        ) -> int:
            handle = super().handle
            return sum(handle(piece, call_next) for piece in value.split())

    assert Splitter().handle("a b c") == 3


def test_repeated_and_concurrent_invocations() -> None:
    chain = Chain(Accept("a", {1, 3, 5}), Accept("b", {2, 4}))
    values = [value % 5 + 1 for value in range(200)]
    expected = [chain.handle(value) for value in values]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(chain.handle, values))

    assert results == expected


def test_strategy_is_captured_when_handler_is_added() -> None:
    calls: list[str] = []
    registry = Registry()

    class Tagging:
        def intercept(self, handler: Any, value: Any, call_next: Any) -> Any:
            calls.append("intercepted")
            return handler.handle(value, call_next)

    strategy = LocatorInterceptionStrategy(registry)
    before = Chain(Constant("x"), strategy=strategy)
    registry.add_interceptors(Constant, Tagging())
    after = Chain(Constant("y"), strategy=strategy)

    assert before.handle(0) == "x"
    assert calls == []
    assert after.handle(0) == "y"
    assert calls == ["intercepted"]


def test_default_strategy() -> None:
    handler = Constant(1)
    chain = Chain(handler)

    assert chain.strategy is DEFAULT_STRATEGY
    assert chain.handlers == (handler,)
    assert repr(chain) == "<Chain handlers=1>"
