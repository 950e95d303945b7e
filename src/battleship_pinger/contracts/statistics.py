from pydantic import BaseModel


class Statistics(BaseModel):
    """
    Summary metrics derived from the current probe window.
    """

    total: int = 0
    success_count: int = 0
    failure_count: int = 0
    min_latency: int = 0
    max_latency: int = 0
    avg_latency: int = 0
    packet_loss_percent: int = 0
    jitter: int = 0
    uptime_percent: int = 0
