import unittest
from unittest.mock import MagicMock, patch

from battleship_pinger.core.endpoint_prober import EndpointProber
from battleship_pinger.core.prober import HttpProber
from battleship_pinger.core.prober_factory import ProberFactory


class TestProberFactory(unittest.TestCase):
    def test_direct_mode(self):
        prober = ProberFactory.create_prober("direct", timeout_ms=1234)
        self.assertIsInstance(prober, HttpProber)
        self.assertEqual(prober.timeout_ms, 1234)

    def test_endpoint_mode(self):
        prober = ProberFactory.create_prober("ENDPOINT", endpoint_url="http://pinger:9000")
        self.assertIsInstance(prober, EndpointProber)
        self.assertEqual(prober.endpoint_url, "http://pinger:9000")

    @patch("battleship_pinger.core.prober_factory.Config", new_callable=MagicMock)
    def test_mode_from_config(self, mock_config):
        mock_config.PROBE_MODE = "endpoint"
        mock_config.PROBE_TIMEOUT_MS = 5000
        mock_config.PROBE_ENDPOINT_URL = "http://localhost:8000"
        prober = ProberFactory.create_prober()
        self.assertIsInstance(prober, EndpointProber)

    def test_unknown_mode(self):
        with self.assertRaises(ValueError):
            ProberFactory.create_prober("icmp")


if __name__ == "__main__":
    unittest.main()
