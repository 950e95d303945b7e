from abc import ABC, abstractmethod

from battleship_pinger.contracts.probe_outcome import ProbeOutcome


class Prober(ABC):
    """
    Abstract base class for probers. Implementations perform one bounded
    reachability check per call.
    """

    @abstractmethod
    async def probe(self, target: str) -> ProbeOutcome:
        """
        Probe the target once and report the outcome.

        Implementations must not raise: timeouts, transport errors and invalid
        targets are reported as failed outcomes.

        Args:
            target (str): Hostname (optionally with scheme) to probe.

        Returns:
            ProbeOutcome: The timestamped result of the probe.
        """
