import math
from typing import Iterable

from battleship_pinger.contracts.probe_outcome import ProbeOutcome
from battleship_pinger.contracts.statistics import Statistics


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with ties going up (2.5 -> 3), unlike the
    built-in round() which rounds ties to even.
    """
    return int(math.floor(value + 0.5))


def _percent(part: int, total: int) -> int:
    if total == 0:
        return 0
    return round_half_up(part / total * 100)


def compute_statistics(outcomes: Iterable[ProbeOutcome]) -> Statistics:
    """
    Recompute summary statistics from scratch over a window of outcomes.

    Latency fields only consider successful probes and are 0 when there are
    none. Jitter is the mean absolute deviation from the rounded average and
    needs at least two successful samples.

    Args:
        outcomes (Iterable[ProbeOutcome]): Window contents, in any order.

    Returns:
        Statistics: The derived snapshot.
    """
    outcomes = list(outcomes)
    total = len(outcomes)
    if total == 0:
        return Statistics()

    latencies = [o.latency for o in outcomes if o.success and o.latency is not None]
    success_count = sum(1 for o in outcomes if o.success)
    failure_count = total - success_count

    min_latency = min(latencies) if latencies else 0
    max_latency = max(latencies) if latencies else 0
    avg_latency = round_half_up(sum(latencies) / len(latencies)) if latencies else 0

    jitter = 0
    if len(latencies) > 1:
        deviations = [abs(latency - avg_latency) for latency in latencies]
        jitter = round_half_up(sum(deviations) / len(deviations))

    return Statistics(
        total=total,
        success_count=success_count,
        failure_count=failure_count,
        min_latency=min_latency,
        max_latency=max_latency,
        avg_latency=avg_latency,
        packet_loss_percent=_percent(failure_count, total),
        jitter=jitter,
        uptime_percent=_percent(success_count, total),
    )
