import logging

from fastapi import APIRouter, HTTPException

from numstats.api.schemas import FrequencyStatsIn, FrequencyStatsOut, StatsIn, StatsOut
from numstats.observability.metrics import record_stats_error
from numstats.services.errors import StatsError
from numstats.services.frequency import FrequencyStats
from numstats.services.numeric import NumericType
from numstats.services.stats import Stats

logger = logging.getLogger(__name__)

router = APIRouter()


def _summarize(stats, kind: NumericType) -> dict:
    try:
        summary = stats.summary()
    except StatsError as exc:
        record_stats_error(exc.kind, kind.name)
        logger.warning("%s rejected: %s (type=%s)", type(stats).__name__, exc, kind.name)
        raise HTTPException(status_code=400, detail=exc.to_dict()) from exc
    logger.debug("%s computed over %d items (type=%s)", type(stats).__name__, summary["count"], kind.name)
    return summary


@router.post("/stats", response_model=StatsOut)
async def stats(body: StatsIn):
    """
    Accepts a JSON body with 'numbers' and an optional element 'type'.
    Returns every descriptive statistic, or 400 with the first failure.
    """
    kind = body.kind
    summary = _summarize(Stats(body.numbers, kind), kind)
    return StatsOut(type=kind.name, **summary)


@router.post("/frequency-stats", response_model=FrequencyStatsOut)
async def frequency_stats(body: FrequencyStatsIn):
    """
    Accepts a JSON body with '[count, value]' 'pairs' and an optional element 'type'.
    Returns the weighted statistics plus the mode.
    """
    kind = body.kind
    summary = _summarize(FrequencyStats(body.pairs, kind), kind)
    return FrequencyStatsOut(type=kind.name, **summary)
