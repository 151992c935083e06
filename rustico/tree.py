"""A collapsible tree used to present grouped items."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from itertools import islice
from typing import Any

__all__ = ["Tree", "TreeItem", "leaf", "node"]


@dataclass
class Tree:
    """A tree node holding children, or a leaf when ``children`` is None."""

    data: Any
    children: list[Tree] | None = None
    is_open: bool = False

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    def child_count(self) -> int:
        """Number of all descendants of this tree."""
        if self.children is None:
            return 0
        return len(self.children) + sum(child.child_count() for child in self.children)

    def leaf_data(self) -> Any:
        """The data of a leaf, None for inner nodes."""
        return self.data if self.children is None else None

    def openable(self) -> bool:
        return self.children is not None and not self.is_open

    def open(self) -> None:
        if self.children is not None:
            self.is_open = True

    def close(self) -> None:
        if self.children is not None:
            self.is_open = False

    def _walk(self, only_open: bool, depth: int) -> Iterator[TreeItem]:
        yield TreeItem(depth, self)
        if self.children is not None and (self.is_open or not only_open):
            for child in self.children:
                yield from child._walk(only_open, depth + 1)

    def iter(self) -> Iterator[TreeItem]:
        """Iterate over the whole tree in pre-order, including this node."""
        return self._walk(False, 0)

    def iter_open(self) -> Iterator[TreeItem]:
        """Iterate descending only into open nodes; this node itself is skipped."""
        return islice(self._walk(True, 0), 1, None)

    def nth_open(self, n: int) -> Tree | None:
        """The n-th tree yielded by :meth:`iter_open`, or None."""
        item = next(islice(self.iter_open(), n, None), None)
        return None if item is None else item.tree


@dataclass(frozen=True)
class TreeItem:
    """A tree visited during iteration, with its depth."""

    depth: int
    tree: Tree

    def leaf_data(self) -> Any:
        return self.tree.leaf_data()


def leaf(data: Any) -> Tree:
    return Tree(data)


def node(data: Any, open: bool, children: list[Tree]) -> Tree:
    return Tree(data, list(children), open)