import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from numstats import config
from numstats.api import health, stats
from numstats.observability.logging import setup_logging
from numstats.observability.metrics import MetricsMiddleware, metrics_router

logger = logging.getLogger(__name__)

# READY_FLAG is set once startup has validated the settings
READY_FLAG = False


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    global READY_FLAG
    # Fail startup early if NUMSTATS_DEFAULT_TYPE names no element type
    kind = config.default_type()
    app.state.default_type = kind.name
    logger.info("numstats ready (default type %s, max %d items)", kind.name, config.MAX_ITEMS)
    READY_FLAG = True
    yield
    READY_FLAG = False


def _serialize_error(err):
    # pydantic puts the raised ValueError itself into the error context
    if isinstance(err, Exception):
        return str(err)
    if isinstance(err, dict):
        return {k: _serialize_error(v) for k, v in err.items()}
    if isinstance(err, (list, tuple)):
        return [_serialize_error(e) for e in err]
    return err


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(
        title="Numeric Statistics Service",
        version="1.0.0",
        lifespan=app_lifespan,
    )
    app.add_middleware(MetricsMiddleware)
    app.include_router(metrics_router)  # /metrics
    app.include_router(health.router)   # /health, /ready
    app.include_router(stats.router)    # /stats, /frequency-stats
    app.state.ready_flag = lambda: READY_FLAG

    # Malformed bodies are a 400, same as statistic failures
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"detail": _serialize_error(exc.errors())},
        )

    return app


app = create_app()
