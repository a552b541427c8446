import math
from typing import List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, NonNegativeInt, field_serializer, field_validator, model_validator

from numstats import config
from numstats.services.numeric import NumericType, numeric_type

Number = Union[int, float]
# JSON has no inf/nan literals, so non-finite results are sent as these strings
Statistic = Union[int, float, Literal["inf", "-inf", "nan"]]


def _resolve_type(name: Optional[str]) -> str:
    name = (name or config.DEFAULT_TYPE_NAME).lower()
    try:
        numeric_type(name)
    except KeyError as exc:
        raise ValueError(exc.args[0]) from None
    return name


def _check_length(v: list) -> list:
    if len(v) > config.MAX_ITEMS:
        raise ValueError(f'at most {config.MAX_ITEMS} items are accepted')
    return v


def _check_values(kind: NumericType, values) -> None:
    bad = [v for v in values if not kind.accepts(v)]
    if bad:
        raise ValueError(f'values not representable as {kind.name}: {bad[:5]}')


# Input schema for /stats
class StatsIn(BaseModel):
    numbers: List[Number]  # Elements to analyze, may be empty
    type: Optional[str] = None  # Element type name, e.g. "i64" or "f32"

    model_config = {"extra": "forbid"}

    @field_validator('numbers')
    def check_numbers_max_length(cls, v):
        return _check_length(v)

    @model_validator(mode='after')
    def check_numbers_fit_type(self):
        self.type = _resolve_type(self.type)
        _check_values(self.kind, self.numbers)
        return self

    @property
    def kind(self) -> NumericType:
        return numeric_type(self.type)


# Input schema for /frequency-stats
class FrequencyStatsIn(BaseModel):
    pairs: List[Tuple[NonNegativeInt, Number]]  # (occurrence count, value)
    type: Optional[str] = None

    model_config = {"extra": "forbid"}

    @field_validator('pairs')
    def check_pairs_max_length(cls, v):
        return _check_length(v)

    @model_validator(mode='after')
    def check_values_fit_type(self):
        self.type = _resolve_type(self.type)
        _check_values(self.kind, (value for _, value in self.pairs))
        return self

    @property
    def kind(self) -> NumericType:
        return numeric_type(self.type)


def _non_finite_as_string(v):
    if isinstance(v, float) and not math.isfinite(v):
        if math.isnan(v):
            return "nan"
        return "inf" if v > 0 else "-inf"
    return v


# Output schema for /stats
class StatsOut(BaseModel):
    type: str        # Element type the statistics were computed in
    count: int       # Number of elements (total weight for frequency data)
    sum: Statistic
    mean: Statistic     # Truncated for integer types
    variance: Statistic  # Population variance
    std_dev: Statistic
    min: Statistic
    max: Statistic
    range: Statistic

    @field_serializer('sum', 'mean', 'variance', 'std_dev', 'min', 'max', 'range', when_used='json')
    def serialize_non_finite(self, v):
        return _non_finite_as_string(v)


# Output schema for /frequency-stats
class FrequencyStatsOut(StatsOut):
    mode: Statistic     # Value with the highest count, last one wins ties

    @field_serializer('mode', when_used='json')
    def serialize_non_finite_mode(self, v):
        return _non_finite_as_string(v)
