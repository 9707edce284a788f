from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

Number = Union[int, float]

INT_RANGE_MAX = 2**63 - 1
_FLOAT_STEPS = 2**53


@dataclass(frozen=True)
class MockGen:
    """Reproducible number generator with a visible state.

    From seed ``k`` it emits ``abs(k)`` and moves to ``k // 2`` when ``k`` is
    even, ``3k + 1`` otherwise. Not suitable for anything but tests.
    """

    seed: int = 6171

    def next(self) -> Tuple[int, "MockGen"]:
        k = self.seed
        successor = k // 2 if k % 2 == 0 else 3 * k + 1
        return abs(k), MockGen(successor)

    def split(self) -> Tuple["MockGen", "MockGen"]:
        return MockGen(self.seed), MockGen(self.seed + 1)

    def gen_range(self) -> Tuple[int, int]:
        return 0, INT_RANGE_MAX

    def random_int(self) -> Tuple[int, "MockGen"]:
        value, gen = self.next()
        return value % (INT_RANGE_MAX + 1), gen

    def random_between(self, lo: Number, hi: Number) -> Tuple[Number, "MockGen"]:
        if lo > hi:
            lo, hi = hi, lo
        value, gen = self.next()
        if isinstance(lo, float) or isinstance(hi, float):
            fraction = (value % _FLOAT_STEPS) / (_FLOAT_STEPS - 1)
            return lo + (hi - lo) * fraction, gen
        return lo + value % (hi - lo + 1), gen


def draws(gen: MockGen, count: int) -> Tuple[Tuple[int, ...], MockGen]:
    if count < 0:
        raise ValueError("count must be >= 0")
    out = []
    for _ in range(count):
        value, gen = gen.next()
        out.append(value)
    return tuple(out), gen
