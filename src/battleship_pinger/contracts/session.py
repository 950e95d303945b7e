from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from battleship_pinger.config.config import Config
from battleship_pinger.contracts.probe_outcome import ProbeOutcome
from battleship_pinger.contracts.statistics import Statistics


class StartRequest(BaseModel):
    """
    Request body for starting a monitoring session.
    """

    target: str = Config.DEFAULT_TARGET
    interval_ms: int = Config.DEFAULT_INTERVAL_MS


class SessionStatus(BaseModel):
    running: bool
    target: Optional[str] = None
    interval_ms: Optional[int] = None
    started_at: Optional[datetime] = None


class SessionSnapshot(SessionStatus):
    """
    Full view of a session: status, current statistics and the probe window.
    """

    statistics: Statistics
    window: List[ProbeOutcome]
