"""Expression trees over atomic functions and their ordered enumeration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from .atom import AtomFunc, AtomFunc0, AtomFunc1, AtomFunc2, FuncValues


@dataclass(frozen=True)
class AtomIndex:
    """Position of an atom: its arity and its number within that arity."""

    arity: int = 0
    num: int = 0


@dataclass
class AtomFuncs:
    """The atoms available to a search, grouped by arity."""

    arg0: list[AtomFunc0] = field(default_factory=list)
    arg1: list[AtomFunc1] = field(default_factory=list)
    arg2: list[AtomFunc2] = field(default_factory=list)

    def add(self, func: AtomFunc) -> None:
        """Register an atom; non-constant nullary atoms go before constants."""
        if isinstance(func, AtomFunc0):
            if func.constant():
                self.arg0.append(func)
            else:
                self.arg0.insert(0, func)
        elif isinstance(func, AtomFunc1):
            self.arg1.append(func)
        elif isinstance(func, AtomFunc2):
            self.arg2.append(func)
        else:
            raise TypeError(f"not an atomic function: {func!r}")

    def of_arity(self, arity: int) -> list:
        """All atoms of the given arity."""
        if arity == 0:
            return self.arg0
        if arity == 1:
            return self.arg1
        if arity == 2:
            return self.arg2
        raise ValueError(f"unsupported arity {arity}")

    def get(self, arity: int, num: int) -> AtomFunc:
        """The atom at ``num`` among those of ``arity``."""
        return self.of_arity(arity)[num]


def _unsigned(data: Mapping, key: str) -> int:
    value = data.get(key)
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"field {key!r} must be a non-negative integer")
    return value


def _object(data: Mapping, key: str) -> Mapping:
    value = data.get(key)
    if not isinstance(value, Mapping):
        raise ValueError(f"field {key!r} must be an object")
    return value


class FuncNode:
    """A node of an expression tree; iterating it walks all trees in order."""

    def __init__(
        self,
        atoms: AtomFuncs,
        skip_constant: bool = False,
        skip_symmetric: bool = False,
    ) -> None:
        self.atoms = atoms
        self.skip_constant = skip_constant
        self.skip_symmetric = skip_symmetric
        self.index = AtomIndex()
        self.arg1: Optional[FuncNode] = None
        self.arg2: Optional[FuncNode] = None
        self._values: Optional[FuncValues] = None

    def _spawn(self) -> FuncNode:
        return FuncNode(self.atoms, self.skip_constant, self.skip_symmetric)

    def _atom(self) -> AtomFunc:
        return self.atoms.get(self.index.arity, self.index.num)

    def copy(self) -> FuncNode:
        """Deep copy of the tree structure; computed values are not kept."""
        node = self._spawn()
        node.index = self.index
        node.arg1 = self.arg1.copy() if self.arg1 is not None else None
        node.arg2 = self.arg2.copy() if self.arg2 is not None else None
        return node

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FuncNode):
            return NotImplemented
        return (
            self.atoms is other.atoms
            and self.skip_constant == other.skip_constant
            and self.skip_symmetric == other.skip_symmetric
            and self.index == other.index
            and self.arg1 == other.arg1
            and self.arg2 == other.arg2
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.expression()

    def __repr__(self) -> str:
        return f"FuncNode({self.expression()})"

    def arity(self) -> int:
        return self.index.arity

    def functions_count(self) -> int:
        """Number of non-nullary functions in the tree."""
        arity = self.arity()
        if arity == 1:
            return self.arg1.functions_count() + 1
        if arity == 2:
            return self.arg1.functions_count() + self.arg2.functions_count() + 1
        return 0

    def current_max_level(self) -> int:
        """Depth of the deepest leaf."""
        arity = self.arity()
        if arity == 1:
            return self.arg1.current_max_level() + 1
        if arity == 2:
            return max(self.arg1.current_max_level(), self.arg2.current_max_level()) + 1
        return 0

    def current_min_level(self) -> int:
        """Depth of the shallowest leaf."""
        arity = self.arity()
        if arity == 1:
            return self.arg1.current_min_level() + 1
        if arity == 2:
            return min(self.arg1.current_min_level(), self.arg2.current_min_level()) + 1
        return 0

    def max_serial_number(self, level: int) -> int:
        """Upper bound on serial numbers of trees no deeper than ``level``."""
        if level == 0:
            return len(self.atoms.arg0)
        prev = self.max_serial_number(level - 1)
        return prev * prev * len(self.atoms.arg2) + prev * len(self.atoms.arg1) + prev

    def serial_number(self) -> int:
        """Position of this tree in the enumeration order."""
        arity = self.arity()
        if arity == 0:
            return self.index.num
        max_prev = self.max_serial_number(self.current_max_level() - 1)
        sn = max_prev
        if arity == 1:
            sn += max_prev * self.index.num
            sn1 = self.arg1.serial_number()
            if self.arg1.current_max_level() > 0:
                sn1 -= len(self.atoms.arg0)
            sn += sn1
        elif arity == 2:
            sn += max_prev * len(self.atoms.arg1)
            sn += max_prev * max_prev * self.index.num
            sn += max_prev * self.arg2.serial_number() + self.arg1.serial_number()
        return sn

    def clear_calculated(self) -> None:
        self._values = None

    def calculate(self, recalculate: bool = False) -> FuncValues:
        """Values of the tree, cached until cleared or recalculated."""
        if not self._values or recalculate:
            atom = self._atom()
            arity = self.arity()
            if arity == 0:
                self._values = atom.calculate()
            elif arity == 1:
                self._values = atom.calculate(self.arg1.calculate())
            else:
                self._values = atom.calculate(
                    self.arg1.calculate(), self.arg2.calculate()
                )
        return self._values

    def constant(self) -> bool:
        """Whether the tree is built from constants only."""
        arity = self.arity()
        if arity == 0:
            return self._atom().constant()
        if arity == 1:
            return self.arg1.constant()
        return self.arg1.constant() and self.arg2.constant()

    def expression(self, append: str = "") -> str:
        """Readable form of the tree, followed by ``append``."""
        name = str(self._atom())
        arity = self.arity()
        if arity == 0:
            return f"{name}{append}"
        if arity == 1:
            return f"{name}({self.arg1.expression()}){append}"
        return f"{name}({self.arg1.expression()};{self.arg2.expression()}){append}"

    def to_json(self) -> dict[str, Any]:
        """The tree as a JSON-ready dictionary."""
        data: dict[str, Any] = {
            "arity": self.index.arity,
            "num": self.index.num,
            "name": str(self._atom()),
        }
        if self.arity() > 0:
            data["arg1"] = self.arg1.to_json()
        if self.arity() > 1:
            data["arg2"] = self.arg2.to_json()
        return data

    def from_json(self, data: Mapping) -> None:
        """Replace the tree with the one described by ``data``.

        Raises ValueError when ``data`` is malformed; the node is then unchanged.
        """
        if not isinstance(data, Mapping):
            raise ValueError("function node must be an object")
        arity = _unsigned(data, "arity")
        num = _unsigned(data, "num")
        if arity > 2:
            raise ValueError(f"unsupported arity {arity}")
        if num >= len(self.atoms.of_arity(arity)):
            raise ValueError(f"no atom {num} of arity {arity}")

        arg1 = arg2 = None
        if arity > 0:
            arg1 = self._spawn()
            arg1.from_json(_object(data, "arg1"))
        if arity > 1:
            arg2 = self._spawn()
            arg2.from_json(_object(data, "arg2"))

        self.index = AtomIndex(arity, num)
        self.arg1 = arg1
        self.arg2 = arg2
        self._values = None

    def init_depth(self, max_depth: int, current_depth: int = 0) -> None:
        """Reset to the first tree reaching exactly ``max_depth``."""
        if current_depth > max_depth:
            raise ValueError("current depth exceeds maximum depth")
        self.arg2 = None
        if current_depth == max_depth:
            self.arg1 = None
            self.index = AtomIndex(0, 0)
        else:
            self.arg1 = self._spawn()
            self.arg1.init_depth(max_depth, current_depth + 1)
            self.index = AtomIndex(1, 0)

    def iterate(self, max_depth: int, current_depth: int = 0) -> bool:
        """Advance to the next tree; False when the enumeration is exhausted."""
        while True:
            if not self.iterate_raw(max_depth, current_depth):
                return False
            if not (self.arity() != 0 and self.skip_constant and self.constant()):
                break
        self.clear_calculated()
        return True

    def iterate_raw(self, max_depth: int, current_depth: int = 0) -> bool:
        """One enumeration step, without skipping constant trees."""
        next_depth = current_depth + 1
        current_max_depth = current_depth + self.current_max_level()
        arity = self.arity()
        if arity == 0:
            result = self._iterate_arity0(current_max_depth, next_depth)
        elif arity == 1:
            result = self._iterate_arity1(current_max_depth, next_depth)
        else:
            result = self._iterate_arity2(current_max_depth, next_depth)

        if not result and current_max_depth < max_depth:
            self.init_depth(current_max_depth + 1, current_depth)
            result = True
        return result

    def _iterate_arity0(self, max_depth: int, next_depth: int) -> bool:
        if self._last_arity_func():
            if next_depth > max_depth:
                return False
            self._next_arity1()
        else:
            self.index = AtomIndex(0, self.index.num + 1)
        return True

    def _iterate_arity1(self, max_depth: int, next_depth: int) -> bool:
        iterated = self.arg1.iterate(max_depth, next_depth)

        if (
            self.skip_constant
            and iterated
            and self.arg1.arity() == 0
            and self.arg1.constant()
        ):
            iterated = False

        if not iterated:
            if self._last_arity_func():
                self._next_arity2()
                self.arg2.init_depth(max_depth, next_depth)
            else:
                self._next_arity1()
                self.arg1.init_depth(max_depth, next_depth)
        return True

    def _iterate_arity2(self, max_depth: int, next_depth: int) -> bool:
        iterated = self.arg1.iterate(max_depth, next_depth)

        if (
            self.skip_constant
            and iterated
            and self.arg1.arity() == 0
            and self.arg1.constant()
            and self.arg2.arity() == 0
            and self.arg2.constant()
        ):
            iterated = False

        if self.skip_symmetric and iterated:
            atom = self._atom()
            if atom.commutative():
                sn1 = self.arg1.serial_number()
                sn2 = self.arg2.serial_number()
                if (sn1 >= sn2) if atom.idempotent() else (sn1 > sn2):
                    iterated = False

        if not iterated:
            if not self.arg2.iterate(max_depth, next_depth):
                if self._last_arity_func():
                    return False
                self._next_arity2()
                self.arg2.init_depth(max_depth, next_depth)
            else:
                self.arg1 = self._spawn()
        return True

    def _last_arity_func(self) -> bool:
        return self.index.num + 1 >= len(self.atoms.of_arity(self.arity()))

    def _next_arity1(self) -> None:
        if self.arity() != 1:
            self.index = AtomIndex(1, 0)
        else:
            self.index = AtomIndex(1, self.index.num + 1)
        self.arg1 = self._spawn()
        self.arg2 = None

    def _next_arity2(self) -> None:
        if self.arity() != 2:
            self.index = AtomIndex(2, 0)
        else:
            self.index = AtomIndex(2, self.index.num + 1)
        self.arg1 = self._spawn()
        self.arg2 = self._spawn()