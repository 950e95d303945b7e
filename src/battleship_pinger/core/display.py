from typing import Iterable, List, Optional

from battleship_pinger.config.config import Config
from battleship_pinger.contracts.display import ChartBar, LogEntry
from battleship_pinger.contracts.probe_outcome import ProbeOutcome

# (upper bound in ms, band, colour); the last band catches everything else
LATENCY_BANDS = [
    (50, "excellent", "#00ff00"),
    (100, "good", "#ffff00"),
    (200, "fair", "#ff9900"),
]
POOR_BAND = ("poor", "#ff0000")
FAILED_BAND = ("failed", "#ff0000")

# Bars are never scaled against a maximum below this many ms
MIN_CHART_SCALE_MS = 100


def latency_band(latency: int) -> tuple[str, str]:
    """Return the (band, colour) pair for a latency in milliseconds."""
    for upper, band, color in LATENCY_BANDS:
        if latency < upper:
            return band, color
    return POOR_BAND


def latency_chart(
    outcomes: Iterable[ProbeOutcome], samples: int = Config.CHART_SAMPLES
) -> List[ChartBar]:
    """
    Build bars for the most recent ``samples`` outcomes, oldest first.

    Heights are percentages of the largest successful latency shown (at least
    MIN_CHART_SCALE_MS). Failed probes get a zero-height bar.
    """
    recent = list(outcomes)[-samples:] if samples > 0 else []
    latencies = [o.latency for o in recent if o.latency is not None]
    scale = max(latencies + [MIN_CHART_SCALE_MS])

    bars = []
    for outcome in recent:
        if outcome.success and outcome.latency:
            band, color = latency_band(outcome.latency)
            height = outcome.latency / scale * 100
        else:
            band, color = FAILED_BAND
            height = 0.0
        bars.append(
            ChartBar(
                timestamp=outcome.timestamp,
                latency=outcome.latency,
                height_percent=height,
                band=band,
                color=color,
                label=f"{outcome.latency}ms" if outcome.latency else "Failed",
            )
        )
    return bars


def log_message(outcome: ProbeOutcome) -> str:
    if outcome.success:
        return f"HIT! {outcome.latency}ms"
    return f"MISS! {outcome.error_message or 'Unknown error'}"


def recent_log(
    outcomes: Iterable[ProbeOutcome],
    target: Optional[str] = None,
    entries: int = Config.LOG_ENTRIES,
) -> List[LogEntry]:
    """Return the last ``entries`` outcomes as log lines, newest first."""
    recent = list(outcomes)[-entries:] if entries > 0 else []
    return [
        LogEntry(
            timestamp=outcome.timestamp,
            target=target,
            success=outcome.success,
            latency=outcome.latency,
            message=log_message(outcome),
        )
        for outcome in reversed(recent)
    ]
