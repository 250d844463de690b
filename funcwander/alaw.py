"""Target values of the A-law to linear PCM expansion."""

from __future__ import annotations

from .atom import FuncValues
from .common import Distance, RangeSet
from .samples import VALUES_RANGE
from .target import Target

_NEGATIVE_HALF = (
    -5504, -5248, -6016, -5760, -4480, -4224, -4992, -4736,
    -7552, -7296, -8064, -7808, -6528, -6272, -7040, -6784,
    -2752, -2624, -3008, -2880, -2240, -2112, -2496, -2368,
    -3776, -3648, -4032, -3904, -3264, -3136, -3520, -3392,
    -22016, -20992, -24064, -23040, -17920, -16896, -19968, -18944,
    -30208, -29184, -32256, -31232, -26112, -25088, -28160, -27136,
    -11008, -10496, -12032, -11520, -8960, -8448, -9984, -9472,
    -15104, -14592, -16128, -15616, -13056, -12544, -14080, -13568,
    -344, -328, -376, -360, -280, -264, -312, -296,
    -472, -456, -504, -488, -408, -392, -440, -424,
    -88, -72, -120, -104, -24, -8, -56, -40,
    -216, -200, -248, -232, -152, -136, -184, -168,
    -1376, -1312, -1504, -1440, -1120, -1056, -1248, -1184,
    -1888, -1824, -2016, -1952, -1632, -1568, -1760, -1696,
    -688, -656, -752, -720, -560, -528, -624, -592,
    -944, -912, -1008, -976, -816, -784, -880, -848,
)

# Codes 128..255 decode to the negations of codes 0..127.
ALAW_TO_LPCM: tuple[int, ...] = _NEGATIVE_HALF + tuple(-v for v in _NEGATIVE_HALF)


class AlawTarget(Target):
    """Linear PCM value for each A-law code, indexed by signed code + 128."""

    def __init__(self) -> None:
        self._values = [
            ALAW_TO_LPCM[((i - 128) & 0xFF) ^ 0x55] for i in range(VALUES_RANGE)
        ]

    def compare(self, values: FuncValues) -> Distance:
        """Number of positions where ``values`` differ from the target."""
        return sum(
            1 for got, want in zip(values[:VALUES_RANGE], self._values) if got != want
        )

    def match_positions(self, values: FuncValues) -> RangeSet:
        """Positions where ``values`` equal the target."""
        matches = RangeSet()
        for pos, (got, want) in enumerate(zip(values[:VALUES_RANGE], self._values)):
            if got == want:
                matches.add(pos)
        return matches

    def values(self) -> list[int]:
        return list(self._values)

    def str_full(self) -> str:
        """All target values in one line."""
        return "TARGET " + "".join(f"; {v}" for v in self._values)