from collections import deque
from typing import List

from battleship_pinger.config.config import Config
from battleship_pinger.contracts.probe_outcome import ProbeOutcome


class ProbeWindow:
    """
    Bounded, oldest-first buffer of probe outcomes. Appending past capacity
    evicts the oldest entry.
    """

    def __init__(self, capacity: int = Config.WINDOW_CAPACITY):
        if capacity < 1:
            raise ValueError(f"Window capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._outcomes = deque(maxlen=capacity)

    def append(self, outcome: ProbeOutcome):
        self._outcomes.append(outcome)

    def clear(self):
        self._outcomes.clear()

    def snapshot(self) -> List[ProbeOutcome]:
        """Return a copy of the window contents, oldest first."""
        return list(self._outcomes)

    def __len__(self):
        return len(self._outcomes)

    def __iter__(self):
        return iter(list(self._outcomes))
