import unittest

from battleship_pinger.contracts.probe_outcome import ProbeOutcome
from battleship_pinger.core.probe_window import ProbeWindow


class TestProbeWindow(unittest.TestCase):
    def test_append_keeps_order(self):
        window = ProbeWindow(capacity=5)
        for latency in (1, 2, 3):
            window.append(ProbeOutcome.hit(latency))
        self.assertEqual([o.latency for o in window.snapshot()], [1, 2, 3])

    def test_capacity_evicts_oldest(self):
        window = ProbeWindow(capacity=100)
        for latency in range(150):
            window.append(ProbeOutcome.hit(latency))
        self.assertEqual(len(window), 100)
        self.assertEqual([o.latency for o in window], list(range(50, 150)))

    def test_clear(self):
        window = ProbeWindow()
        window.append(ProbeOutcome.miss("x"))
        window.clear()
        self.assertEqual(len(window), 0)
        self.assertEqual(window.snapshot(), [])

    def test_snapshot_is_a_copy(self):
        window = ProbeWindow()
        window.append(ProbeOutcome.hit(1))
        snap = window.snapshot()
        snap.append(ProbeOutcome.hit(2))
        self.assertEqual(len(window), 1)

    def test_invalid_capacity(self):
        with self.assertRaises(ValueError):
            ProbeWindow(capacity=0)


if __name__ == "__main__":
    unittest.main()
