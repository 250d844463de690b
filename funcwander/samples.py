"""Sample atoms over 16-bit signed values for the argument range 0..255."""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from .atom import AtomFunc0, AtomFunc1, AtomFunc2, FuncValues

VALUES_RANGE = 256


def _wrap(value: int) -> int:
    """Reduce to a 16-bit signed integer."""
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def _checked(values: FuncValues) -> FuncValues:
    if len(values) != VALUES_RANGE:
        raise ValueError(f"expected {VALUES_RANGE} values, got {len(values)}")
    return values


def _map1(op: Callable[[int], int], arg: FuncValues) -> tuple[int, ...]:
    return tuple(_wrap(op(v)) for v in _checked(arg))


def _map2(
    op: Callable[[int, int], int], arg1: FuncValues, arg2: FuncValues
) -> tuple[int, ...]:
    return tuple(_wrap(op(a, b)) for a, b in zip(_checked(arg1), _checked(arg2)))


def _shift(count: int) -> int:
    # Shift counts are taken modulo 32, as 32-bit hardware shifts do.
    return count & 31


class ConstAtom(AtomFunc0):
    """The same value at every argument."""

    def __init__(self, value: int) -> None:
        self._value = _wrap(value)
        self._values = (self._value,) * VALUES_RANGE

    def calculate(self) -> FuncValues:
        return self._values

    def constant(self) -> bool:
        return True

    def __str__(self) -> str:
        return str(self._value)


class ArgX(AtomFunc0):
    """The argument itself."""

    _VALUES = tuple(range(VALUES_RANGE))

    def calculate(self) -> FuncValues:
        return self._VALUES

    def constant(self) -> bool:
        return False

    def __str__(self) -> str:
        return "X"


class _Unary(AtomFunc1):
    name: ClassVar[str]

    def involutive(self) -> bool:
        return True

    def argument(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.name


class Fw1(_Unary):
    """(a << 4) + 8."""

    name = "FW1"

    def calculate(self, arg: FuncValues) -> FuncValues:
        return _map1(lambda v: (v << 4) + 8, arg)


class Fw2(_Unary):
    """((127 - a) << 4) + 8."""

    name = "FW2"

    def calculate(self, arg: FuncValues) -> FuncValues:
        return _map1(lambda v: ((127 - v) << 4) + 8, arg)


class Not(_Unary):
    """Bitwise complement."""

    name = "NOT"

    def calculate(self, arg: FuncValues) -> FuncValues:
        return _map1(lambda v: ~v, arg)


class BitCount(_Unary):
    """Number of set bits in the 16-bit pattern."""

    name = "BITCOUNT"

    def calculate(self, arg: FuncValues) -> FuncValues:
        return _map1(lambda v: bin(v & 0xFFFF).count("1"), arg)


class BitClz(_Unary):
    """Leading zero bits of the 16-bit value; negative values give -16."""

    name = "BITCLZ"

    def calculate(self, arg: FuncValues) -> FuncValues:
        return _map1(lambda v: -16 if v < 0 else 16 - v.bit_length(), arg)


class _Binary(AtomFunc2):
    name: ClassVar[str]
    is_commutative: ClassVar[bool] = False
    is_idempotent: ClassVar[bool] = False

    def commutative(self) -> bool:
        return self.is_commutative

    def idempotent(self) -> bool:
        return self.is_idempotent

    def __str__(self) -> str:
        return self.name


class Sum(_Binary):
    name = "SUM"
    is_commutative = True

    def calculate(self, arg1: FuncValues, arg2: FuncValues) -> FuncValues:
        return _map2(lambda a, b: a + b, arg1, arg2)


class Sub(_Binary):
    name = "SUB"

    def calculate(self, arg1: FuncValues, arg2: FuncValues) -> FuncValues:
        return _map2(lambda a, b: a - b, arg1, arg2)


class And(_Binary):
    name = "AND"
    is_commutative = True
    is_idempotent = True

    def calculate(self, arg1: FuncValues, arg2: FuncValues) -> FuncValues:
        return _map2(lambda a, b: a & b, arg1, arg2)


class Or(_Binary):
    name = "OR"
    is_commutative = True
    is_idempotent = True

    def calculate(self, arg1: FuncValues, arg2: FuncValues) -> FuncValues:
        return _map2(lambda a, b: a | b, arg1, arg2)


class Xor(_Binary):
    name = "XOR"
    is_commutative = True
    is_idempotent = True

    def calculate(self, arg1: FuncValues, arg2: FuncValues) -> FuncValues:
        return _map2(lambda a, b: a ^ b, arg1, arg2)


class Shr(_Binary):
    name = "SHR"

    def calculate(self, arg1: FuncValues, arg2: FuncValues) -> FuncValues:
        return _map2(lambda a, b: a >> _shift(b), arg1, arg2)


class Shl(_Binary):
    name = "SHL"

    def calculate(self, arg1: FuncValues, arg2: FuncValues) -> FuncValues:
        return _map2(lambda a, b: a << _shift(b), arg1, arg2)