"""Descriptive statistics over a collection of numbers."""
from __future__ import annotations

import math
from collections.abc import Iterator
from functools import reduce
from typing import Any, Iterable

from numstats.services.errors import CouldNotConvert, DataType, EmptyCollection
from numstats.services.numeric import F64, NumericType

__all__: list[str] = [
    "Stats",
    "snapshot",
    "sqrt_item",
]


def snapshot(values: Iterable) -> Iterable:
    """Return ``values`` itself if it can be iterated repeatedly, else a tuple copy."""
    if isinstance(values, Iterator):
        return tuple(values)
    return values


def sqrt_item(kind: NumericType, value):
    """Square root of an element, computed through ``float``."""
    as_f64 = kind.to_f64(value)
    if as_f64 is None:
        raise CouldNotConvert(DataType.ITEM, DataType.F64)
    root = math.sqrt(as_f64) if as_f64 >= 0 else math.nan
    result = kind.from_f64(root)
    if result is None:
        raise CouldNotConvert(DataType.F64, DataType.ITEM)
    return result


class Stats:
    """
    Statistics over an ordered, finite collection of elements of type ``kind``.

    The collection is re-iterated for every pass and never modified; each
    value is read as an element of ``kind`` (so ``f32`` data is rounded to
    single precision before any statistic sees it). Failures raise
    ``EmptyCollection`` or ``CouldNotConvert``; integer element types use
    truncating division, so ``Stats([1, 2, 3, 4], I64).mean() == 2``.
    """

    def __init__(self, values: Iterable, kind: NumericType = F64) -> None:
        self.values = snapshot(values)
        self.kind = kind

    def __iter__(self):
        coerce = self.kind.coerce
        for value in self.values:
            yield coerce(value)

    def __repr__(self) -> str:
        return f"Stats({self.values!r}, {self.kind.name})"

    def sum(self):
        return self.kind.sum(self)

    def count(self) -> int:
        return sum(1 for _ in self)

    def non_zero_count(self) -> int:
        count = self.count()
        if count == 0:
            raise EmptyCollection()
        return count

    def non_zero_count_into_item(self):
        """Element count converted to the element type."""
        count = self.kind.from_count(self.non_zero_count())
        if count is None:
            raise CouldNotConvert(DataType.USIZE, DataType.ITEM)
        return count

    def mean(self):
        return self.kind.div(self.sum(), self.non_zero_count_into_item())

    def variance(self):
        """Population variance: mean squared deviation from the mean (divides by n)."""
        kind = self.kind
        mean = self.mean()
        squares = (kind.mul(kind.sub(x, mean), kind.sub(x, mean)) for x in self)
        return kind.div(kind.sum(squares), self.non_zero_count_into_item())

    def std_dev(self):
        return sqrt_item(self.kind, self.variance())

    def min(self):
        return self._reduce(self.kind.min)

    def max(self):
        return self._reduce(self.kind.max)

    def range(self):
        high = self.max()
        return self.kind.sub(high, self.min())

    def _reduce(self, op):
        it = iter(self)
        try:
            first = next(it)
        except StopIteration:
            raise EmptyCollection() from None
        return reduce(op, it, first)

    def summary(self) -> dict[str, Any]:
        """Every statistic at once; the first failure propagates."""
        return {
            "count": self.count(),
            "sum": self.sum(),
            "mean": self.mean(),
            "variance": self.variance(),
            "std_dev": self.std_dev(),
            "min": self.min(),
            "max": self.max(),
            "range": self.range(),
        }
