from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ChartBar(BaseModel):
    """
    One bar of the latency trajectory chart.
    """

    timestamp: datetime
    latency: Optional[int] = None
    height_percent: float
    band: str
    color: str
    label: str


class LogEntry(BaseModel):
    """
    One line of the recent outcome log.
    """

    timestamp: datetime
    target: Optional[str] = None
    success: bool
    latency: Optional[int] = None
    message: str
