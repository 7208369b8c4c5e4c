# sched_core/value_space.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple
import bisect
import itertools
import math

from sched_core.config import Config

DEFAULT_GAMMA = 1.1


def build_exact_values(bound: int) -> List[int]:
    return list(range(int(bound) + 1))


def _finalize(vs: List[int], bound: int) -> List[int]:
    # 1 is seeded unconditionally, so bound 0 has to filter it out again
    out = sorted(set(v for v in vs if 0 <= v <= bound) | {bound})
    return out


def build_values_via_exp(bound: int, gamma: float) -> List[int]:
    """Insert floor(gamma^i) and ceil(gamma^i) for i = 1, 2, ... until exceeding bound."""
    bound = int(bound)
    vs: List[int] = [0, 1]
    seen = set(vs)
    i = 1
    while True:
        p = gamma ** i
        lo = int(math.floor(p))
        if lo > bound:
            break
        if lo not in seen:
            seen.add(lo)
            vs.append(lo)
        hi = int(math.ceil(p))
        if hi > bound:
            break
        if hi not in seen:
            seen.add(hi)
            vs.append(hi)
        i += 1
    return _finalize(vs, bound)


def build_values_via_log(bound: int, gamma: float) -> List[int]:
    """Keep every j in [2, bound] at which the gamma-bucket of its neighbours changes."""
    bound = int(bound)
    vs: List[int] = [0, 1]
    for j in range(2, bound + 1):
        lo = math.log(j - 1, gamma)
        hi = math.log(j + 1, gamma)
        if math.floor(lo) != math.floor(hi) or math.ceil(lo) != math.ceil(hi):
            vs.append(j)
    return _finalize(vs, bound)


def _exp_is_cheaper(bound: int, gamma: float) -> bool:
    # bound < gamma^bound, compared in log space (gamma^bound overflows floats for large bounds)
    if bound <= 1:
        return bound < gamma ** bound
    return math.log(bound) < bound * math.log(gamma)


def build_values(bound: int, gamma: float = DEFAULT_GAMMA) -> List[int]:
    """
    Sorted candidate values in [0, bound] containing 0, 1 (if bound >= 1) and bound,
    where consecutive values differ by at most a factor of gamma.
    Picks whichever enumeration needs fewer iterations.
    """
    if gamma <= 1:
        raise ValueError(f"build_values: gamma must be > 1, got {gamma}.")
    if bound < 0:
        raise ValueError(f"build_values: bound must be >= 0, got {bound}.")
    if _exp_is_cheaper(int(bound), float(gamma)):
        return build_values_via_exp(bound, gamma)
    return build_values_via_log(bound, gamma)


@dataclass(frozen=True)
class ValueSpace:
    """
    Candidate value universe: one sorted value list per dimension.
    The cross product of the lists is the set of configs the graph search visits.
    """
    values: Tuple[Tuple[int, ...], ...]

    @staticmethod
    def exact(bounds: Sequence[int]) -> "ValueSpace":
        return ValueSpace(tuple(tuple(build_exact_values(b)) for b in bounds))

    @staticmethod
    def approximate(bounds: Sequence[int], gamma: float = DEFAULT_GAMMA) -> "ValueSpace":
        return ValueSpace(tuple(tuple(build_values(b, gamma)) for b in bounds))

    @staticmethod
    def from_lists(values: Sequence[Sequence[int]]) -> "ValueSpace":
        return ValueSpace(tuple(tuple(sorted(set(int(v) for v in vs))) for vs in values))

    @property
    def d(self) -> int:
        return len(self.values)

    def num_configs(self) -> int:
        n = 1
        for vs in self.values:
            n *= len(vs)
        return n

    def configs(self) -> Iterator[Config]:
        """Lexicographic enumeration of the cross product."""
        return itertools.product(*self.values)

    def contains(self, x: Config) -> bool:
        return len(x) == self.d and all(self._index(k, v) is not None for k, v in enumerate(x))

    def _index(self, k: int, v: int):
        vs = self.values[k]
        i = bisect.bisect_left(vs, v)
        if i < len(vs) and vs[i] == v:
            return i
        return None

    def next_up(self, k: int, v: int):
        """Next larger candidate of dimension k, or None if v is the largest."""
        i = self._index(k, v)
        if i is None:
            raise ValueError(f"ValueSpace: {v} is not a candidate value of dimension {k}.")
        if i + 1 < len(self.values[k]):
            return self.values[k][i + 1]
        return None

    def next_down(self, k: int, v: int):
        """Next smaller candidate of dimension k, or None if v is the smallest."""
        i = self._index(k, v)
        if i is None:
            raise ValueError(f"ValueSpace: {v} is not a candidate value of dimension {k}.")
        if i > 0:
            return self.values[k][i - 1]
        return None

    def is_refinement_of(self, other: "ValueSpace") -> bool:
        if self.d != other.d:
            return False
        return all(set(b).issubset(a) for a, b in zip(self.values, other.values))
