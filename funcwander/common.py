"""Shared types: distances and a set of integers stored as merged ranges."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterator

Distance = int


class RangeSet:
    """A set of integers kept as sorted, non-overlapping, non-adjacent ranges."""

    def __init__(self) -> None:
        self._ranges: list[tuple[int, int]] = []

    def add(self, number: int) -> None:
        """Add a single number."""
        self.add_range(number, number)

    def add_range(self, start: int, end: int) -> None:
        """Add the inclusive range [start, end], merging with its neighbours."""
        if start > end:
            start, end = end, start

        ranges = self._ranges
        pos = bisect_left(ranges, (start, end))

        if pos > 0:
            prev_start, prev_end = ranges[pos - 1]
            if prev_end >= start - 1:
                start = prev_start
                end = max(prev_end, end)
                del ranges[pos - 1]
                pos -= 1

        while pos < len(ranges) and ranges[pos][0] <= end + 1:
            end = max(end, ranges[pos][1])
            del ranges[pos]

        ranges.insert(pos, (start, end))

    def count(self) -> int:
        """Total number of integers in all ranges."""
        return sum(end - start + 1 for start, end in self._ranges)

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return iter(self._ranges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RangeSet):
            return NotImplemented
        return self._ranges == other._ranges

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "".join(
            f"[{start},{end}] " if start != end else f"{start} "
            for start, end in self._ranges
        )

    def __repr__(self) -> str:
        return f"RangeSet({self._ranges!r})"