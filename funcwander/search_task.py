"""A search over expression trees for the one closest to a target."""

from __future__ import annotations

import json
import threading
import time
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Optional

from .func_node import AtomFuncs, FuncNode
from .target import Target


@dataclass
class Settings:
    """Search parameters."""

    save_file: str = ""
    max_best: int = 32
    max_depth: int = 3


def _number(data: Mapping, key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise ValueError(f"field {key!r} must be a non-negative number")
    return int(value)


def _object(data: Mapping, key: str) -> Mapping:
    value = data.get(key)
    if not isinstance(value, Mapping):
        raise ValueError(f"field {key!r} must be an object")
    return value


class SearchTask:
    """Walks all expression trees up to a depth, keeping the best matches."""

    def __init__(
        self,
        settings: Settings,
        atoms: AtomFuncs,
        target: Target,
        skip_constant: bool = False,
        skip_symmetric: bool = False,
    ) -> None:
        self.settings = replace(settings)
        self._atoms = atoms
        self._target = target
        self._skip_constant = skip_constant
        self._skip_symmetric = skip_symmetric
        self._fn = self._new_node()
        self._tm_start: Optional[float] = None
        self._count = 0
        self._best: list[FuncNode] = []
        self._dist_threshold = 0
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._done = False

    def _new_node(self) -> FuncNode:
        return FuncNode(self._atoms, self._skip_constant, self._skip_symmetric)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchTask):
            return NotImplemented
        return (
            self.settings == other.settings
            and self._atoms is other._atoms
            and self._target is other._target
            and self._fn == other._fn
            and self._count == other._count
            and self._best == other._best
            and self._dist_threshold == other._dist_threshold
            and self._done == other._done
        )

    __hash__ = None  # type: ignore[assignment]

    @property
    def count(self) -> int:
        """Number of trees examined so far."""
        return self._count

    def iterate(self) -> bool:
        """Advance the current tree without evaluating it."""
        return self._fn.iterate(self.settings.max_depth)

    def run(self) -> None:
        """Start searching in a background thread."""
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._search, args=(self._stop_event,), daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Ask the background search to stop and wait for it."""
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join()
        self._thread = None

    def to_json(self) -> dict[str, Any]:
        """The resumable state of the search as a JSON-ready dictionary."""
        return {
            "settings": {
                "max_best": self.settings.max_best,
                "max_depth": self.settings.max_depth,
            },
            "count": self._count,
            "done": self._done,
            "dist_threshold": self._dist_threshold,
            "current_fn": self._fn.to_json(),
            "best": [node.to_json() for node in self._best],
        }

    def from_json(self, json_str: str | bytes) -> None:
        """Restore the state saved by :meth:`to_json`.

        Raises ValueError when the text is malformed; the task is then unchanged.
        """
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid JSON: {exc}") from exc
        if not isinstance(data, Mapping):
            raise ValueError("search state must be an object")

        settings = _object(data, "settings")
        max_best = _number(settings, "max_best")
        max_depth = _number(settings, "max_depth")
        count = _number(data, "count")
        done = data.get("done")
        if not isinstance(done, bool):
            raise ValueError("field 'done' must be a boolean")
        dist_threshold = _number(data, "dist_threshold")

        fn = self._new_node()
        fn.from_json(_object(data, "current_fn"))

        best: list[FuncNode] = []
        if "best" in data:
            entries = data["best"]
            if not isinstance(entries, list):
                raise ValueError("field 'best' must be an array")
            for entry in entries:
                node = self._new_node()
                node.from_json(entry)
                best.append(node)

        self.settings = replace(self.settings, max_best=max_best, max_depth=max_depth)
        self._count = count
        self._done = done
        self._dist_threshold = dist_threshold
        self._fn = fn
        self._best = best

    def done(self) -> bool:
        """Whether the enumeration has been exhausted."""
        return self._done

    def best(self) -> list[FuncNode]:
        """Copies of the best trees found, best first."""
        with self._lock:
            return [node.copy() for node in self._best]

    def status(self) -> str:
        """A human-readable progress report."""
        with self._lock:
            sn = self._fn.serial_number()
            max_sn = self._fn.max_serial_number(self.settings.max_depth)
            done_percent = sn * 100.0 / max_sn if max_sn else 0.0
            elapsed_ms = 0.0
            if self._tm_start is not None:
                elapsed_ms = (time.monotonic() - self._tm_start) * 1000.0
            rate = self._count * 1000.0 / elapsed_ms if elapsed_ms > 0 else 0.0
            lines = [
                f"iteration {self._count}({sn:3}/{max_sn:3}): "
                f"{self._fn.expression()} ({done_percent:.6g}%)\n",
                f"{rate:.6g} iterations per second\n",
            ]
            for node in self._best:
                values = node.calculate()
                lines.append(
                    f"{self._target.compare(values)}({node.current_max_level()}): "
                    f"{node.expression()} <{self._target.match_positions(values)}>\n"
                )
            return "".join(lines)

    def search_iterate(self) -> bool:
        """Examine the next tree; False when there are no more."""
        with self._lock:
            if not self._fn.iterate(self.settings.max_depth):
                return False
            self._check_best(self._fn, self.settings.max_best)
            self._count += 1
            return True

    def _calc_dist(self, node: FuncNode) -> int:
        mismatches = self._target.compare(node.calculate())
        return mismatches * 10 + node.current_max_level() + node.functions_count() * 2

    def _is_unique(self, values: tuple, ranges) -> bool:
        for node in self._best:
            node_values = node.calculate()
            if tuple(node_values) == values:
                return False
            if self._target.match_positions(node_values) == ranges:
                return False
        return True

    def _check_best(self, node: FuncNode, max_best: int = 10) -> None:
        if not self._best:
            self._best.append(node.copy())
            return

        values = node.calculate()
        ranges = self._target.match_positions(values)
        new_dist = self._calc_dist(node)
        if len(self._best) >= max_best and new_dist > self._dist_threshold:
            return

        for pos, current in enumerate(self._best):
            if new_dist < self._calc_dist(current):
                if self._is_unique(tuple(values), ranges):
                    self._best.insert(pos, node.copy())
                break

        del self._best[max_best:]
        if self._best:
            self._dist_threshold = self._calc_dist(self._best[-1])

    def _search(self, stop_event: threading.Event) -> None:
        print("    Search started")
        self._tm_start = time.monotonic()
        while not stop_event.is_set() and not self._done:
            if not self.search_iterate():
                print("    Search stopped: reached iteration end")
                self._done = True