"""Marked string boundaries with rank and select queries."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable


class Boundaries:
    """A set of marked positions in ``range(length)``.

    The positions mark where each string of a concatenated collection
    starts. By convention the position just past the last string is also
    marked, so a collection of ``k`` strings over ``n`` symbols has
    ``k + 1`` marks in a vector of length ``n + 1``.
    """

    def __init__(self, starts: Iterable[int], length: int) -> None:
        if length < 0:
            raise ValueError("length must not be negative")
        marks = sorted(set(starts))
        if marks and (marks[0] < 0 or marks[-1] >= length):
            raise ValueError(f"marked positions must lie in [0, {length})")
        self.length = length
        self.starts: tuple[int, ...] = tuple(marks)

    def rank(self, i: int) -> int:
        """Return the number of marked positions strictly before ``i``."""
        if not 0 <= i <= self.length:
            raise IndexError(f"rank position {i} out of range [0, {self.length}]")
        return bisect_left(self.starts, i)

    def select(self, k: int) -> int:
        """Return the position of the ``k``-th mark, counting from 1."""
        if not 1 <= k <= len(self.starts):
            raise IndexError(f"select index {k} out of range [1, {len(self.starts)}]")
        return self.starts[k - 1]

    def is_start(self, i: int) -> bool:
        """Tell whether position ``i`` is marked."""
        if not 0 <= i < self.length:
            raise IndexError(f"position {i} out of range [0, {self.length})")
        idx = bisect_left(self.starts, i)
        return idx < len(self.starts) and self.starts[idx] == i

    def count(self) -> int:
        """Return the total number of marked positions."""
        return len(self.starts)

    def __repr__(self) -> str:
        return f"Boundaries({list(self.starts)!r}, {self.length})"