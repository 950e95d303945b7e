import time
import unittest
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

import battleship_pinger.monitor as monitor_mod
from battleship_pinger.config.config import Config
from battleship_pinger.contracts.probe_outcome import ProbeOutcome


class TestMonitorModule(unittest.TestCase):
    def setUp(self):
        patcher = patch.object(monitor_mod.sampler, "prober")
        self.mock_prober = patcher.start()
        self.addCleanup(patcher.stop)
        self.mock_prober.probe = AsyncMock(return_value=ProbeOutcome.hit(42))

    def _wait_for_samples(self, client, count, timeout=2.0):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            stats = client.get("/session/stats").json()
            if stats["total"] >= count:
                return stats
            time.sleep(0.01)
        self.fail(f"fewer than {count} samples recorded within {timeout}s")

    def test_start_and_stop_session(self):
        with TestClient(monitor_mod.app) as client:
            response = client.post(
                "/session/start", json={"target": "google.com", "interval_ms": 1000}
            )
            self.assertEqual(response.status_code, 200)
            body = response.json()
            self.assertTrue(body["running"])
            self.assertEqual(body["target"], "google.com")
            self.assertEqual(body["interval_ms"], 1000)

            stats = self._wait_for_samples(client, 1)
            self.assertEqual(stats["success_count"], 1)
            self.assertEqual(stats["avg_latency"], 42)

            response = client.post("/session/stop")
            self.assertEqual(response.status_code, 200)
            self.assertFalse(response.json()["running"])

    def test_start_without_body_uses_defaults(self):
        with TestClient(monitor_mod.app) as client:
            response = client.post("/session/start")
            try:
                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.json()["target"], Config.DEFAULT_TARGET)
                self.assertEqual(response.json()["interval_ms"], Config.DEFAULT_INTERVAL_MS)
            finally:
                client.post("/session/stop")

    def test_start_twice_conflicts(self):
        with TestClient(monitor_mod.app) as client:
            client.post("/session/start", json={"target": "google.com"})
            try:
                response = client.post("/session/start", json={"target": "example.com"})
                self.assertEqual(response.status_code, 409)
                self.assertIn("error", response.json())
            finally:
                client.post("/session/stop")

    def test_start_requires_target(self):
        with TestClient(monitor_mod.app) as client:
            response = client.post("/session/start", json={"target": "  "})
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.json(), {"error": "Target parameter is required"})

    def test_interval_is_clamped(self):
        with TestClient(monitor_mod.app) as client:
            response = client.post(
                "/session/start", json={"target": "google.com", "interval_ms": 10}
            )
            try:
                self.assertEqual(response.json()["interval_ms"], 100)
            finally:
                client.post("/session/stop")

    def test_stop_when_idle(self):
        with TestClient(monitor_mod.app) as client:
            response = client.post("/session/stop")
            self.assertEqual(response.status_code, 200)
            self.assertFalse(response.json()["running"])

    def test_views(self):
        with TestClient(monitor_mod.app) as client:
            client.post("/session/start", json={"target": "google.com", "interval_ms": 1000})
            self._wait_for_samples(client, 1)
            client.post("/session/stop")

            snapshot = client.get("/session").json()
            self.assertEqual(snapshot["statistics"]["total"], len(snapshot["window"]))
            self.assertTrue(snapshot["window"][0]["success"])

            window = client.get("/session/window").json()
            self.assertEqual(window[0]["latency"], 42)

            chart = client.get("/session/chart").json()
            self.assertEqual(chart[0]["height_percent"], 42.0)
            self.assertEqual(chart[0]["band"], "excellent")

            log = client.get("/session/log").json()
            self.assertEqual(log[0]["message"], "HIT! 42ms")
            self.assertEqual(log[0]["target"], "google.com")

    def test_metrics_endpoint(self):
        with TestClient(monitor_mod.app) as client:
            response = client.get("/metrics")
            self.assertEqual(response.status_code, 200)
            self.assertIn("window_uptime_percent", response.text)


if __name__ == "__main__":
    unittest.main()
