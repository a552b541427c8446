from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from numstats import config

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe: 200 for as long as the process can answer."""
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request):
    """
    Readiness probe.
    503 until startup has validated the settings; afterwards 200 with the
    settings requests are served with.
    """
    state = request.app.state
    ready_flag = getattr(state, "ready_flag", None)
    if not (ready_flag and ready_flag()):
        return JSONResponse({"status": "not ready"}, status_code=HTTP_503_SERVICE_UNAVAILABLE)
    return {
        "status": "ready",
        "default_type": state.default_type,
        "max_items": config.MAX_ITEMS,
    }
