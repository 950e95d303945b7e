import logging
from contextlib import asynccontextmanager
from typing import List

import httpx
from fastapi import FastAPI, Response
from fastapi.responses import ORJSONResponse
from prometheus_client import CONTENT_TYPE_LATEST

from battleship_pinger.config.config import Config
from battleship_pinger.config.logging_config import setup_logging
from battleship_pinger.contracts.display import ChartBar, LogEntry
from battleship_pinger.contracts.ping_response import ErrorResponse
from battleship_pinger.contracts.probe_outcome import ProbeOutcome
from battleship_pinger.contracts.session import SessionSnapshot, SessionStatus, StartRequest
from battleship_pinger.contracts.statistics import Statistics
from battleship_pinger.core.display import latency_chart, recent_log
from battleship_pinger.core.metrics_manager import MetricsManager
from battleship_pinger.core.prober_factory import ProberFactory
from battleship_pinger.core.sampler import MissingTargetError, Sampler

setup_logging()
logger = logging.getLogger(__name__)

metrics_manager = MetricsManager()
client = httpx.AsyncClient()
prober = ProberFactory.create_prober(client=client)
sampler = Sampler(
    prober,
    capacity=Config.WINDOW_CAPACITY,
    metrics_manager=metrics_manager,
    min_interval_ms=Config.MIN_INTERVAL_MS,
)


@asynccontextmanager
async def lifespan(app):
    yield
    await sampler.close()
    await client.aclose()


app = FastAPI(lifespan=lifespan, default_response_class=ORJSONResponse)


@app.post(
    "/session/start",
    response_model=SessionStatus,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def start_session(request: StartRequest = StartRequest()):
    try:
        started = await sampler.start(request.target, request.interval_ms)
    except MissingTargetError as e:
        return ORJSONResponse(ErrorResponse(error=str(e)).model_dump(), status_code=400)
    if not started:
        return ORJSONResponse(
            ErrorResponse(error=f"Already monitoring {sampler.target}").model_dump(),
            status_code=409,
        )
    return sampler.status()


@app.post("/session/stop", response_model=SessionStatus)
async def stop_session():
    await sampler.stop()
    return sampler.status()


@app.get("/session", response_model=SessionSnapshot)
async def get_session():
    return sampler.snapshot()


@app.get("/session/stats", response_model=Statistics)
async def get_statistics():
    return sampler.statistics


@app.get("/session/window", response_model=List[ProbeOutcome])
async def get_window():
    return sampler.outcomes()


@app.get("/session/chart", response_model=List[ChartBar])
async def get_chart():
    return latency_chart(sampler.outcomes(), samples=Config.CHART_SAMPLES)


@app.get("/session/log", response_model=List[LogEntry])
async def get_log():
    return recent_log(sampler.outcomes(), target=sampler.target, entries=Config.LOG_ENTRIES)


@app.get("/metrics")
def metrics():
    return Response(metrics_manager.render(), media_type=CONTENT_TYPE_LATEST)


logger.info("Monitor module loaded and logging is configured.")
