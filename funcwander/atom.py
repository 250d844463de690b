"""Atomic functions: the building blocks combined into expression trees."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import ClassVar

FuncValues = Sequence[int]


class AtomFunc(ABC):
    """Base of every atomic function; its string form is its display name."""

    arity: ClassVar[int]

    @abstractmethod
    def __str__(self) -> str:
        """Name of the function as shown in expressions."""


class AtomFunc0(AtomFunc):
    """A function of no arguments: a constant or a free variable."""

    arity = 0

    @abstractmethod
    def calculate(self) -> FuncValues:
        """Values of the function over the whole argument range."""

    @abstractmethod
    def constant(self) -> bool:
        """Whether the values do not depend on the argument."""


class AtomFunc1(AtomFunc):
    """A unary function applied element-wise to a value vector."""

    arity = 1

    @abstractmethod
    def calculate(self, arg: FuncValues) -> FuncValues:
        """Apply the function to every value of ``arg``."""

    @abstractmethod
    def involutive(self) -> bool:
        """Whether applying the function twice gives back the argument."""

    @abstractmethod
    def argument(self) -> bool:
        """Whether the function returns its argument unchanged."""


class AtomFunc2(AtomFunc):
    """A binary function applied element-wise to two value vectors."""

    arity = 2

    @abstractmethod
    def calculate(self, arg1: FuncValues, arg2: FuncValues) -> FuncValues:
        """Apply the function to pairs of values of ``arg1`` and ``arg2``."""

    @abstractmethod
    def commutative(self) -> bool:
        """Whether the order of arguments does not matter."""

    @abstractmethod
    def idempotent(self) -> bool:
        """Whether f(a, a) equals a."""