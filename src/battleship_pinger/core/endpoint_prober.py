import asyncio
import logging
import time
from typing import Optional

import httpx

from battleship_pinger.abstractions.prober import Prober
from battleship_pinger.config.config import Config
from battleship_pinger.config.logging_config import setup_logging
from battleship_pinger.contracts.probe_outcome import ProbeErrorKind, ProbeOutcome
from battleship_pinger.core.prober import elapsed_ms

setup_logging()
logger = logging.getLogger(__name__)


class EndpointProber(Prober):
    """
    Prober that goes through a remote probe endpoint (``GET /api/ping``).

    Latency is the round trip to the endpoint as seen from this process. A
    non-2xx answer from the endpoint is a failed probe.
    """

    def __init__(
        self,
        endpoint_url: str = Config.PROBE_ENDPOINT_URL,
        client: Optional[httpx.AsyncClient] = None,
        timeout_ms: int = Config.PROBE_TIMEOUT_MS,
    ):
        self.endpoint_url = endpoint_url.rstrip("/")
        self.client = client
        self.timeout_ms = timeout_ms
        logger.info(f"EndpointProber initialized for {self.endpoint_url}")

    async def probe(self, target: str) -> ProbeOutcome:
        if self.client is not None:
            return await self._probe_via(self.client, target)
        async with httpx.AsyncClient() as client:
            return await self._probe_via(client, target)

    async def _probe_via(self, client: httpx.AsyncClient, target: str) -> ProbeOutcome:
        timeout_s = self.timeout_ms / 1000
        start = time.perf_counter()
        try:
            # params= takes care of URL-encoding the raw target
            resp = await asyncio.wait_for(
                client.get(
                    f"{self.endpoint_url}/api/ping",
                    params={"target": target},
                    timeout=httpx.Timeout(timeout_s),
                ),
                timeout=timeout_s,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning(f"Probe endpoint timed out for {target} after {self.timeout_ms}ms")
            return ProbeOutcome.miss(
                f"Request timed out after {self.timeout_ms} ms", ProbeErrorKind.TIMEOUT
            )
        except httpx.InvalidURL as e:
            logger.error(f"Probe endpoint URL rejected for {target}: {e}")
            return ProbeOutcome.miss(str(e), ProbeErrorKind.INVALID_TARGET)
        except httpx.RequestError as e:
            logger.error(f"Probe endpoint error for {target}: {e!r}")
            return ProbeOutcome.miss(str(e) or type(e).__name__, ProbeErrorKind.NETWORK)
        except Exception as e:
            logger.error(f"Unexpected probe endpoint error for {target}: {e!r}")
            return ProbeOutcome.miss(str(e) or type(e).__name__, ProbeErrorKind.UNEXPECTED)

        latency = elapsed_ms(start)
        if resp.is_success:
            logger.info(f"Probe endpoint reached {target} in {latency}ms")
            return ProbeOutcome.hit(latency)
        logger.warning(f"Probe endpoint failed for {target}: status={resp.status_code}")
        return ProbeOutcome.miss(f"HTTP {resp.status_code}", ProbeErrorKind.HTTP_STATUS)
