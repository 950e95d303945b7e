import os
from collections import Counter
from datetime import datetime

from locust import FastHttpUser, between, events, task

TARGETS = os.environ.get("LOCUST_PING_TARGETS", "google.com,example.com").split(",")

# Outcome tally per target, written out when the run stops
outcomes = Counter()


def get_log_file_name():
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"logs/locust_ping_outcomes_{timestamp}.log"


class PingUser(FastHttpUser):
    wait_time = between(1, 5)

    @task
    def ping(self):
        for target in TARGETS:
            with self.client.get(
                f"/api/ping?target={target}",
                name="/api/ping",
                catch_response=True,
            ) as response:
                # A 500 is a probe failure reported by the endpoint, not a broken endpoint
                if response.status_code in (200, 500):
                    outcomes[(target, response.status_code)] += 1
                    response.success()
                else:
                    response.failure(f"unexpected status {response.status_code}")


@events.test_stop.add_listener
def write_outcomes(environment, **kwargs):
    os.makedirs("logs", exist_ok=True)
    with open(get_log_file_name(), "a") as f:
        for (target, status), count in sorted(outcomes.items()):
            f.write(f"{target},{status},{count}\n")
