import logging
from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest

from battleship_pinger.config.logging_config import setup_logging
from battleship_pinger.contracts.probe_outcome import ProbeOutcome
from battleship_pinger.contracts.statistics import Statistics

setup_logging()
logger = logging.getLogger(__name__)


class MetricsManager:
    """
    Manager for exporting probe outcomes and window statistics as Prometheus metrics.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """
        Initialize the MetricsManager and set up Prometheus metrics.

        Args:
            registry: Collector registry to register metrics with. Each manager
                gets its own registry by default so several apps can live in
                one process.
        """
        self.registry = registry if registry is not None else CollectorRegistry()
        self.PROBES = Counter(
            "probes",
            "Probes completed, by result",
            ["result"],
            registry=self.registry,
        )
        self.PROBE_LATENCY = Histogram(
            "probe_latency_seconds",
            "Latency of successful probes in seconds",
            buckets=(0.01, 0.025, 0.05, 0.1, 0.2, 0.5, 1.0, 2.5, 5.0),
            registry=self.registry,
        )
        self.AVG_LATENCY = Gauge(
            "window_avg_latency_ms", "Average latency over the probe window", registry=self.registry
        )
        self.JITTER = Gauge(
            "window_jitter_ms", "Jitter over the probe window", registry=self.registry
        )
        self.PACKET_LOSS = Gauge(
            "window_packet_loss_percent", "Packet loss over the probe window", registry=self.registry
        )
        self.UPTIME = Gauge(
            "window_uptime_percent", "Uptime over the probe window", registry=self.registry
        )
        self.WINDOW_SIZE = Gauge(
            "window_size", "Number of outcomes in the probe window", registry=self.registry
        )
        logger.info("MetricsManager initialized.")

    def record_outcome(self, outcome: ProbeOutcome):
        """
        Count a probe outcome and observe its latency when it succeeded.
        """
        if outcome.success:
            self.PROBES.labels(result="success").inc()
            self.PROBE_LATENCY.observe(outcome.latency / 1000)
        else:
            self.PROBES.labels(result="failure").inc()
        logger.debug(f"Recorded probe outcome: success={outcome.success}")

    def update_statistics(self, statistics: Statistics):
        """
        Publish the latest window statistics.
        """
        self.AVG_LATENCY.set(statistics.avg_latency)
        self.JITTER.set(statistics.jitter)
        self.PACKET_LOSS.set(statistics.packet_loss_percent)
        self.UPTIME.set(statistics.uptime_percent)
        self.WINDOW_SIZE.set(statistics.total)

    def render(self) -> bytes:
        return generate_latest(self.registry)

    def get_probe_count(self, result: str) -> float:
        val = self.registry.get_sample_value("probes_total", {"result": result})
        return val or 0.0
