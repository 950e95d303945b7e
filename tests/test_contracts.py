import unittest

from pydantic import ValidationError

from battleship_pinger.contracts.ping_response import PingErrorResponse, PingResponse
from battleship_pinger.contracts.probe_outcome import ProbeErrorKind, ProbeOutcome
from battleship_pinger.contracts.statistics import Statistics


class TestProbeOutcomeContract(unittest.TestCase):
    def test_hit_fields(self):
        o = ProbeOutcome.hit(42, status_code=301)
        self.assertTrue(o.success)
        self.assertEqual(o.latency, 42)
        self.assertEqual(o.status_code, 301)
        self.assertIsNone(o.error_message)
        self.assertIsNotNone(o.timestamp.tzinfo)

    def test_miss_fields(self):
        o = ProbeOutcome.miss("boom", ProbeErrorKind.TIMEOUT)
        self.assertFalse(o.success)
        self.assertIsNone(o.latency)
        self.assertEqual(o.error_message, "boom")
        self.assertEqual(o.error_kind, ProbeErrorKind.TIMEOUT)

    def test_miss_without_message_gets_default(self):
        o = ProbeOutcome.miss("")
        self.assertEqual(o.error_message, "Unknown error")

    def test_failed_outcome_rejects_latency(self):
        with self.assertRaises(ValidationError):
            ProbeOutcome(success=False, latency=10, error_message="x")

    def test_successful_outcome_requires_latency(self):
        with self.assertRaises(ValidationError):
            ProbeOutcome(success=True)

    def test_negative_latency_rejected(self):
        with self.assertRaises(ValidationError):
            ProbeOutcome(success=True, latency=-1)

    def test_outcome_is_immutable(self):
        o = ProbeOutcome.hit(5)
        with self.assertRaises(ValidationError):
            o.latency = 6


class TestStatisticsContract(unittest.TestCase):
    def test_defaults_are_zero(self):
        s = Statistics()
        self.assertEqual(s.model_dump(), {
            "total": 0,
            "success_count": 0,
            "failure_count": 0,
            "min_latency": 0,
            "max_latency": 0,
            "avg_latency": 0,
            "packet_loss_percent": 0,
            "jitter": 0,
            "uptime_percent": 0,
        })


class TestPingResponseContract(unittest.TestCase):
    def test_ping_response_fields(self):
        p = PingResponse(latency=12, status=200, target="google.com")
        self.assertTrue(p.success)
        self.assertEqual(p.latency, 12)

    def test_ping_error_response_fields(self):
        p = PingErrorResponse(error="timeout", target="x")
        self.assertFalse(p.success)

    def test_ping_response_validation(self):
        # latency is required
        with self.assertRaises(Exception):
            PingResponse(target="x")


if __name__ == "__main__":
    unittest.main()
