import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Response
from fastapi.responses import ORJSONResponse
from prometheus_client import CONTENT_TYPE_LATEST

from battleship_pinger.config.config import Config
from battleship_pinger.config.logging_config import setup_logging
from battleship_pinger.contracts.ping_response import (
    ErrorResponse,
    PingErrorResponse,
    PingResponse,
)
from battleship_pinger.core.metrics_manager import MetricsManager
from battleship_pinger.core.prober import HttpProber, sanitize_target

# Set up logging at the start of the module
setup_logging()
logger = logging.getLogger(__name__)

metrics_manager = MetricsManager()
client = httpx.AsyncClient()
prober = HttpProber(
    client=client,
    timeout_ms=Config.PROBE_TIMEOUT_MS,
    user_agent=Config.PROBE_USER_AGENT,
)


@asynccontextmanager
async def lifespan(app):
    yield
    await client.aclose()


app = FastAPI(lifespan=lifespan, default_response_class=ORJSONResponse)


@app.get(
    "/api/ping",
    response_model=PingResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": PingErrorResponse}},
)
async def ping(target: Optional[str] = None):
    if not target:
        logger.warning("Ping requested without a target")
        return ORJSONResponse(
            ErrorResponse(error="Target parameter is required").model_dump(),
            status_code=400,
        )

    outcome = await prober.probe(target)
    metrics_manager.record_outcome(outcome)
    if outcome.success:
        return PingResponse(
            latency=outcome.latency,
            status=outcome.status_code,
            target=sanitize_target(target),
        )
    return ORJSONResponse(
        PingErrorResponse(error=outcome.error_message, target=target).model_dump(),
        status_code=500,
    )


@app.get("/metrics")
def metrics():
    return Response(metrics_manager.render(), media_type=CONTENT_TYPE_LATEST)


logger.info("Probe endpoint module loaded and logging is configured.")
