"""The function a search tries to reproduce."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .atom import FuncValues
from .common import Distance, RangeSet


class Target(ABC):
    """Target values and how candidate values are measured against them."""

    @abstractmethod
    def compare(self, values: FuncValues) -> Distance:
        """Distance between ``values`` and the target; zero means a match."""

    @abstractmethod
    def match_positions(self, values: FuncValues) -> RangeSet:
        """Positions at which ``values`` equal the target."""

    @abstractmethod
    def values(self) -> list[int]:
        """The target values."""