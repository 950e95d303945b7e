import asyncio
import logging
import re
import time
from typing import Optional

import httpx

from battleship_pinger.abstractions.prober import Prober
from battleship_pinger.config.config import Config
from battleship_pinger.config.logging_config import setup_logging
from battleship_pinger.contracts.probe_outcome import ProbeErrorKind, ProbeOutcome

setup_logging()
logger = logging.getLogger(__name__)

# Anything outside this set is stripped from the target before it reaches a URL
_DISALLOWED_TARGET_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def sanitize_target(target: str) -> str:
    """
    Strip every character that is not a letter, digit, '.' or '-'.

    Example:
        >>> sanitize_target("evil.com/`;rm -rf")
        'evil.comrm-rf'
    """
    return _DISALLOWED_TARGET_CHARS.sub("", target or "")


def build_url(sanitized_target: str) -> str:
    """Prefix a secure scheme unless one is already present."""
    # After sanitize_target no scheme survives (":" and "/" are stripped), so
    # this check only matters for callers passing an unsanitized URL.
    if sanitized_target.startswith(("http://", "https://")):
        return sanitized_target
    return f"https://{sanitized_target}"


def elapsed_ms(start: float) -> int:
    return round((time.perf_counter() - start) * 1000)


class HttpProber(Prober):
    """
    Prober that measures transport latency to a target with a HEAD request,
    following redirects; latency covers the whole redirect chain.

    Any HTTP response counts as a successful probe, whatever its status code;
    only timeouts and transport errors are failures.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout_ms: int = Config.PROBE_TIMEOUT_MS,
        user_agent: str = Config.PROBE_USER_AGENT,
    ):
        """
        Args:
            client (Optional[httpx.AsyncClient]): Shared client; a fresh one is opened per probe if None.
            timeout_ms (int): Hard upper bound on the whole probe in milliseconds.
            user_agent (str): User-Agent header sent with the probe.
        """
        self.client = client
        self.timeout_ms = timeout_ms
        self.user_agent = user_agent
        logger.info(f"HttpProber initialized with timeout={self.timeout_ms}ms")

    async def probe(self, target: str) -> ProbeOutcome:
        sanitized = sanitize_target(target)
        if not sanitized:
            logger.warning(f"Rejected probe target {target!r}: nothing left after sanitizing")
            return ProbeOutcome.miss("Invalid target", ProbeErrorKind.INVALID_TARGET)

        url = build_url(sanitized)
        if self.client is not None:
            return await self._probe_url(self.client, url)
        async with httpx.AsyncClient() as client:
            return await self._probe_url(client, url)

    async def _probe_url(self, client: httpx.AsyncClient, url: str) -> ProbeOutcome:
        timeout_s = self.timeout_ms / 1000
        start = time.perf_counter()
        try:
            # httpx timeouts apply per phase, wait_for bounds the whole request
            resp = await asyncio.wait_for(
                client.head(
                    url,
                    headers={"User-Agent": self.user_agent},
                    follow_redirects=True,
                    timeout=httpx.Timeout(timeout_s),
                ),
                timeout=timeout_s,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning(f"Probe to {url} timed out after {self.timeout_ms}ms")
            return ProbeOutcome.miss(
                f"Request timed out after {self.timeout_ms} ms", ProbeErrorKind.TIMEOUT
            )
        except httpx.InvalidURL as e:
            logger.warning(f"Probe to {url} rejected: {e}")
            return ProbeOutcome.miss(str(e), ProbeErrorKind.INVALID_TARGET)
        except httpx.RequestError as e:
            logger.warning(f"Probe to {url} failed: {e!r}")
            return ProbeOutcome.miss(str(e) or type(e).__name__, ProbeErrorKind.NETWORK)
        except Exception as e:
            logger.error(f"Unexpected probe error for {url}: {e!r}")
            return ProbeOutcome.miss(str(e) or type(e).__name__, ProbeErrorKind.UNEXPECTED)

        latency = elapsed_ms(start)
        logger.info(f"Probe to {url} answered {resp.status_code} in {latency}ms")
        return ProbeOutcome.hit(latency, status_code=resp.status_code)
