import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Optional, Set

from battleship_pinger.abstractions.prober import Prober
from battleship_pinger.config.config import Config
from battleship_pinger.config.logging_config import setup_logging
from battleship_pinger.contracts.probe_outcome import ProbeErrorKind, ProbeOutcome
from battleship_pinger.contracts.session import SessionSnapshot, SessionStatus
from battleship_pinger.contracts.statistics import Statistics
from battleship_pinger.core.metrics_manager import MetricsManager
from battleship_pinger.core.probe_window import ProbeWindow
from battleship_pinger.core.statistics import compute_statistics

setup_logging()
logger = logging.getLogger(__name__)


class MissingTargetError(ValueError):
    """Raised when a session is started without a target."""


class Sampler:
    """
    Drives a prober at a fixed cadence and keeps live statistics over a rolling
    window of outcomes.

    The sampler owns its timer: ``start`` issues one probe immediately and then
    one per interval tick until ``stop``. Probes run as independent tasks, so a
    slow probe never delays the next tick and outcomes land in completion order.
    """

    def __init__(
        self,
        prober: Prober,
        capacity: int = Config.WINDOW_CAPACITY,
        metrics_manager: Optional[MetricsManager] = None,
        min_interval_ms: int = Config.MIN_INTERVAL_MS,
    ):
        """
        Initialize the Sampler.

        Args:
            prober (Prober): Prober used for every sample.
            capacity (int): Maximum number of outcomes kept in the window.
            metrics_manager (Optional[MetricsManager]): Receives outcomes and statistics.
            min_interval_ms (int): Floor applied to the requested interval.
        """
        self.prober = prober
        self.window = ProbeWindow(capacity)
        self.metrics_manager = metrics_manager
        self.min_interval_ms = min_interval_ms
        self.target: Optional[str] = None
        self.interval_ms: Optional[int] = None
        self.started_at: Optional[datetime] = None
        self._statistics = Statistics()
        self._timer_task: Optional[asyncio.Task] = None
        self._in_flight: Set[asyncio.Task] = set()
        # Bumped on every start so late results from an older session are dropped
        self._session = 0
        logger.info(f"Sampler initialized with window capacity {capacity}")

    @property
    def is_running(self) -> bool:
        return self._timer_task is not None

    @property
    def statistics(self) -> Statistics:
        return self._statistics

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def outcomes(self) -> List[ProbeOutcome]:
        return self.window.snapshot()

    async def start(self, target: str, interval_ms: int = Config.DEFAULT_INTERVAL_MS) -> bool:
        """
        Start probing ``target`` every ``interval_ms`` milliseconds.

        Returns:
            bool: False if the sampler was already running, True otherwise.

        Raises:
            MissingTargetError: If the target is empty.
        """
        if not target or not target.strip():
            raise MissingTargetError("Target parameter is required")
        if self.is_running:
            logger.warning(f"Sampler already running against {self.target}; ignoring start")
            return False

        self._session += 1
        self.target = target.strip()
        self.interval_ms = max(self.min_interval_ms, int(interval_ms))
        self.window.clear()
        self._refresh_statistics()
        self.started_at = datetime.now(timezone.utc)

        self._issue_probe()
        self._timer_task = asyncio.create_task(self._timer_loop(self.interval_ms / 1000))
        logger.info(f"Sampler started against {self.target} every {self.interval_ms}ms")
        return True

    async def stop(self) -> bool:
        """
        Disarm the timer. Probes already in flight still complete and are recorded.

        Returns:
            bool: False if the sampler was idle, True otherwise.
        """
        if not self.is_running:
            return False
        task = self._timer_task
        self._timer_task = None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info(f"Sampler stopped with {self.in_flight} probe(s) in flight")
        return True

    async def drain(self):
        """Wait for every in-flight probe to finish."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    async def close(self):
        await self.stop()
        await self.drain()

    def record(self, outcome: ProbeOutcome):
        """
        Append an outcome to the window and recompute statistics.
        """
        self.window.append(outcome)
        self._refresh_statistics()
        if self.metrics_manager is not None:
            self.metrics_manager.record_outcome(outcome)
            self.metrics_manager.update_statistics(self._statistics)
        logger.debug(
            f"Recorded outcome success={outcome.success} latency={outcome.latency}; "
            f"window={len(self.window)} loss={self._statistics.packet_loss_percent}%"
        )

    def status(self) -> SessionStatus:
        return SessionStatus(
            running=self.is_running,
            target=self.target,
            interval_ms=self.interval_ms,
            started_at=self.started_at,
        )

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            **self.status().model_dump(),
            statistics=self._statistics,
            window=self.window.snapshot(),
        )

    def _refresh_statistics(self):
        self._statistics = compute_statistics(self.window)

    def _issue_probe(self):
        task = asyncio.create_task(self._run_probe(self.target, self._session))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _run_probe(self, target: str, session: int):
        try:
            outcome = await self.prober.probe(target)
        except Exception as e:
            logger.error(f"Prober raised for {target}: {e!r}")
            outcome = ProbeOutcome.miss(str(e) or type(e).__name__, ProbeErrorKind.UNEXPECTED)
        if session != self._session:
            logger.debug(f"Dropping outcome from replaced session {session}")
            return
        self.record(outcome)

    async def _timer_loop(self, interval: float):
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while True:
            # Deadline-based so the cadence does not drift with scheduling delays
            next_tick += interval
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            self._issue_probe()
