from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from handlerchain._internal.handler import type_name
from handlerchain._internal.interception.base import unwrap

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

INDENT = "  "


class Node(NamedTuple):
    name: str
    depth: int

    def __str__(self) -> str:
        return f"{INDENT * self.depth}{self.name}"


def walk(
    root: object,
    children: Iterable[object],
    depth: int,
) -> Iterator[Node]:
    """Yield the nodes of a composite depth-first, nested chains expanded."""
    yield Node(type_name(root), depth)
    for child in children:
        original = unwrap(child)
        nested = getattr(original, "iter_nodes", None)
        if nested is not None:
            yield from nested(depth + 1)
        else:
            yield Node(type_name(original), depth + 1)


def render(nodes: Iterable[Node]) -> str:
    return "\n".join(map(str, nodes))
