"""Numeric element types the statistic interfaces can operate on.

Every element type is described by a ``NumericType`` adapter that supplies the
arithmetic, the identities, checked conversions from an element count and
to/from ``float``, and a binary min/max. The statistic classes never touch the
values directly, so integer and float element types share one implementation.
"""
from __future__ import annotations

import math
import struct
from abc import ABC, abstractmethod
from functools import reduce
from typing import Any, Iterable, Optional

__all__: list[str] = [
    "NumericType",
    "IntegerType",
    "FloatType",
    "I8", "I16", "I32", "I64", "I128",
    "U8", "U16", "U32", "U64", "U128",
    "F32", "F64",
    "NUMERIC_TYPES",
    "numeric_type",
]


class NumericType(ABC):
    """Arithmetic, conversion and ordering capability of one element type."""

    name: str = ""
    zero: Any = 0
    one: Any = 1

    def add(self, a, b):
        return a + b

    def sub(self, a, b):
        return a - b

    def mul(self, a, b):
        return a * b

    @abstractmethod
    def div(self, a, b):
        ...

    def sum(self, values: Iterable):
        """Left fold of ``values`` with ``add``, starting from ``zero``."""
        return reduce(self.add, values, self.zero)

    @abstractmethod
    def from_count(self, n: int):
        """Element equal to the count ``n``, or ``None`` if it does not fit."""
        ...

    @abstractmethod
    def to_f64(self, x) -> Optional[float]:
        ...

    @abstractmethod
    def from_f64(self, x: float):
        ...

    @abstractmethod
    def min(self, a, b):
        ...

    @abstractmethod
    def max(self, a, b):
        ...

    @abstractmethod
    def accepts(self, value) -> bool:
        """Whether ``value`` is a valid element of this type."""
        ...

    @abstractmethod
    def coerce(self, value):
        """Return ``value`` as an element of this type (``accepts`` must hold)."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class IntegerType(NumericType):
    """Fixed width integer: truncating division, total ordering."""

    def __init__(self, bits: int, signed: bool) -> None:
        self.bits = bits
        self.signed = signed
        self.name = f"{'i' if signed else 'u'}{bits}"
        self.minimum = -(1 << (bits - 1)) if signed else 0
        self.maximum = (1 << (bits - 1)) - 1 if signed else (1 << bits) - 1

    def div(self, a: int, b: int) -> int:
        # rounds toward zero, not toward negative infinity like ``//``
        q = abs(a) // abs(b)
        return q if (a < 0) == (b < 0) else -q

    def _fits(self, n: int) -> bool:
        return self.minimum <= n <= self.maximum

    def from_count(self, n: int) -> Optional[int]:
        if n < 0:
            return None
        return n if self._fits(n) else None

    def to_f64(self, x: int) -> Optional[float]:
        try:
            return float(x)
        except OverflowError:
            return None

    def from_f64(self, x: float) -> Optional[int]:
        if math.isnan(x) or math.isinf(x):
            return None
        n = int(x)
        return n if self._fits(n) else None

    def min(self, a: int, b: int) -> int:
        return b if b < a else a

    def max(self, a: int, b: int) -> int:
        return b if b >= a else a

    def accepts(self, value) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, float):
            if not value.is_integer():
                return False
            value = int(value)
        return isinstance(value, int) and self._fits(value)

    def coerce(self, value) -> int:
        return int(value)


class FloatType(NumericType):
    """IEEE 754 binary float with NaN-tolerant min/max."""

    zero = 0.0
    one = 1.0

    def __init__(self, bits: int) -> None:
        if bits not in (32, 64):
            raise ValueError(f"unsupported float width: {bits}")
        self.bits = bits
        self.name = f"f{bits}"

    def _round(self, x: float) -> float:
        if self.bits == 64:
            return float(x)
        try:
            return struct.unpack("f", struct.pack("f", x))[0]
        except OverflowError:
            return math.copysign(math.inf, x)

    def add(self, a: float, b: float) -> float:
        return self._round(a + b)

    def sub(self, a: float, b: float) -> float:
        return self._round(a - b)

    def mul(self, a: float, b: float) -> float:
        return self._round(a * b)

    def div(self, a: float, b: float) -> float:
        if b == 0:
            if a == 0 or math.isnan(a):
                return math.nan
            return math.copysign(math.inf, a) * math.copysign(1.0, b)
        return self._round(a / b)

    def from_count(self, n: int) -> Optional[float]:
        if n < 0:
            return None
        return self._round(float(n))

    def to_f64(self, x: float) -> float:
        return float(x)

    def from_f64(self, x: float) -> float:
        return self._round(x)

    # minNum/maxNum: a single NaN operand loses to the number
    def min(self, a: float, b: float) -> float:
        if math.isnan(a):
            return b
        if math.isnan(b):
            return a
        return b if b < a else a

    def max(self, a: float, b: float) -> float:
        if math.isnan(a):
            return b
        if math.isnan(b):
            return a
        return b if b > a else a

    def accepts(self, value) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    def coerce(self, value) -> float:
        return self._round(float(value))


I8, I16, I32, I64, I128 = (IntegerType(bits, signed=True) for bits in (8, 16, 32, 64, 128))
U8, U16, U32, U64, U128 = (IntegerType(bits, signed=False) for bits in (8, 16, 32, 64, 128))
F32 = FloatType(32)
F64 = FloatType(64)

NUMERIC_TYPES: dict[str, NumericType] = {
    t.name: t for t in (I8, I16, I32, I64, I128, U8, U16, U32, U64, U128, F32, F64)
}


def numeric_type(name: str) -> NumericType:
    """Look an element type up by name, e.g. ``"i8"`` or ``"f64"``."""
    try:
        return NUMERIC_TYPES[name.lower()]
    except KeyError:
        raise KeyError(f"unknown numeric type {name!r}; expected one of {sorted(NUMERIC_TYPES)}") from None
