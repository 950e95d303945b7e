"""
Prober factory for creating prober instances.
"""
import logging
from typing import Optional

import httpx

from battleship_pinger.abstractions.prober import Prober
from battleship_pinger.config.config import Config
from battleship_pinger.core.endpoint_prober import EndpointProber
from battleship_pinger.core.prober import HttpProber

logger = logging.getLogger(__name__)

SUPPORTED_MODES = ["direct", "endpoint"]


class ProberFactory:
    """
    Factory class for creating prober instances.
    """

    @staticmethod
    def create_prober(
        mode: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout_ms: Optional[int] = None,
        **kwargs,
    ) -> Prober:
        """
        Create a prober based on configuration.

        Args:
            mode (Optional[str]): "direct" or "endpoint". If None, uses Config.PROBE_MODE.
            client (Optional[httpx.AsyncClient]): Shared HTTP client for the prober.
            timeout_ms (Optional[int]): Probe timeout. If None, uses Config.PROBE_TIMEOUT_MS.
            **kwargs: Additional keyword arguments for specific prober implementations.

        Returns:
            Prober: A prober instance.

        Raises:
            ValueError: If an unsupported mode is specified.
        """
        mode = (mode or Config.PROBE_MODE).lower()
        timeout_ms = timeout_ms or Config.PROBE_TIMEOUT_MS

        logger.info(f"Creating {mode} prober with timeout={timeout_ms}ms")

        if mode == "direct":
            return HttpProber(
                client=client,
                timeout_ms=timeout_ms,
                user_agent=kwargs.get("user_agent", Config.PROBE_USER_AGENT),
            )

        elif mode == "endpoint":
            return EndpointProber(
                endpoint_url=kwargs.get("endpoint_url", Config.PROBE_ENDPOINT_URL),
                client=client,
                timeout_ms=timeout_ms,
            )

        else:
            raise ValueError(
                f"Unsupported probe mode: {mode}. "
                f"Supported modes: {SUPPORTED_MODES}"
            )
