import os


class Config:
    """
    Configuration class for environment variables and default settings.
    """

    # Default session settings offered to the monitor
    DEFAULT_TARGET = os.environ.get("PING_TARGET", "google.com")
    DEFAULT_INTERVAL_MS = int(os.environ.get("PING_INTERVAL_MS", "1000"))
    MIN_INTERVAL_MS = int(os.environ.get("MIN_INTERVAL_MS", "100"))

    # Probe behaviour
    PROBE_TIMEOUT_MS = int(os.environ.get("PROBE_TIMEOUT_MS", "5000"))
    PROBE_USER_AGENT = os.environ.get("PROBE_USER_AGENT", "Battleship-Pinger/1.0")
    # "direct" probes the target from this process, "endpoint" goes through a probe endpoint
    PROBE_MODE = os.environ.get("PROBE_MODE", "direct")
    PROBE_ENDPOINT_URL = os.environ.get("PROBE_ENDPOINT_URL", "http://localhost:8000")

    # Rolling window and display sizes
    WINDOW_CAPACITY = int(os.environ.get("WINDOW_CAPACITY", "100"))
    CHART_SAMPLES = int(os.environ.get("CHART_SAMPLES", "50"))
    LOG_ENTRIES = int(os.environ.get("LOG_ENTRIES", "20"))
