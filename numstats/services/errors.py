"""Error types shared by the statistic interfaces."""
from __future__ import annotations

from enum import Enum

__all__: list[str] = [
    "DataType",
    "StatsError",
    "EmptyCollection",
    "CouldNotConvert",
]


class DataType(Enum):
    """Type roles a conversion can happen between."""

    USIZE = "Usize"  # an element or occurrence count
    F64 = "F64"      # double precision float used for square roots
    ITEM = "Item"    # the collection's element type

    def __str__(self) -> str:
        return self.value


class StatsError(ValueError):
    """Base class for every statistic failure."""

    kind = "StatsError"

    def to_dict(self) -> dict[str, str]:
        return {"error": self.kind, "message": str(self)}

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.to_dict().items())))


class EmptyCollection(StatsError):
    """The statistic is undefined for zero elements or zero total weight."""

    kind = "EmptyCollection"

    def __init__(self) -> None:
        super().__init__("collection is empty")

    def __reduce__(self):
        return (type(self), ())


class CouldNotConvert(StatsError):
    """A numeric conversion between two type roles did not fit."""

    kind = "CouldNotConvert"

    def __init__(self, from_: DataType, to: DataType) -> None:
        self.from_ = from_
        self.to = to
        super().__init__(f"could not convert {from_} to {to}")

    def __reduce__(self):
        return (type(self), (self.from_, self.to))

    def to_dict(self) -> dict[str, str]:
        out = super().to_dict()
        out["from"] = str(self.from_)
        out["to"] = str(self.to)
        return out
