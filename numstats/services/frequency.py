"""Statistics over frequency-weighted data (``(count, value)`` pairs)."""
from __future__ import annotations

from typing import Any, Iterable, Tuple

from numstats.services.errors import CouldNotConvert, DataType, EmptyCollection
from numstats.services.numeric import F64, NumericType
from numstats.services.stats import snapshot, sqrt_item

__all__: list[str] = [
    "Frequency",
    "FrequencyStats",
]

# ``count`` occurrences of ``value``
Frequency = Tuple[int, Any]


class FrequencyStats:
    """
    Like ``Stats``, but every element is a ``(count, value)`` pair standing for
    ``count`` occurrences of ``value``, e.g. the bins of a histogram.

    Pairs need not be sorted, and the same value may appear in several pairs;
    their counts add up for the aggregate statistics. ``min``, ``max`` and
    ``range`` only look at which values are present, not at their counts.
    A negative count is malformed input and raises ``ValueError`` from
    whichever statistic reads it.
    """

    def __init__(self, pairs: Iterable[Frequency], kind: NumericType = F64) -> None:
        self.pairs = snapshot(pairs)
        self.kind = kind

    @classmethod
    def from_values(cls, values: Iterable, kind: NumericType = F64) -> "FrequencyStats":
        """Group raw observations into pairs, one per distinct value in first-seen order."""
        counts: dict[Any, int] = {}
        for value in values:
            counts[value] = counts.get(value, 0) + 1
        return cls([(count, value) for value, count in counts.items()], kind)

    def __iter__(self):
        coerce = self.kind.coerce
        for count, value in self.pairs:
            if count < 0:
                raise ValueError(f"occurrence count must not be negative, got {count}")
            yield count, coerce(value)

    def __repr__(self) -> str:
        return f"FrequencyStats({self.pairs!r}, {self.kind.name})"

    def _weight(self, count: int):
        weight = self.kind.from_count(count)
        if weight is None:
            raise CouldNotConvert(DataType.USIZE, DataType.ITEM)
        return weight

    def count(self) -> int:
        """Total weight: the sum of all occurrence counts."""
        return sum(count for count, _ in self)

    def non_zero_count(self) -> int:
        count = self.count()
        if count == 0:
            raise EmptyCollection()
        return count

    def non_zero_count_into_item(self):
        return self._weight(self.non_zero_count())

    def sum(self):
        kind = self.kind
        total = kind.zero
        for count, value in self:
            total = kind.add(total, kind.mul(value, self._weight(count)))
        return total

    def mean(self):
        return self.kind.div(self.sum(), self.non_zero_count_into_item())

    def variance(self):
        """Weighted population variance."""
        kind = self.kind
        mean = self.mean()
        total = kind.zero
        for count, value in self:
            diff = kind.sub(value, mean)
            total = kind.add(total, kind.mul(kind.mul(diff, diff), self._weight(count)))
        return kind.div(total, self.non_zero_count_into_item())

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
            _, best = next(it)
        except StopIteration:
            raise EmptyCollection() from None
        for _, value in it:
            best = op(best, value)
        return best

    def mode(self):
        """
        Value with the highest occurrence count.

        Ties go to the pair seen last. Pairs that all carry a zero count still
        count as data: the last of them is returned.
        """
        best = None
        for count, value in self:
            if best is None or count >= best[0]:
                best = (count, value)
        if best is None:
            raise EmptyCollection()
        return best[1]

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
            "mode": self.mode(),
        }
