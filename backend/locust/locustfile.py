"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags duplicates   # Racing submissions for one identity
  locust -f locustfile.py --tags throughput   # Distinct registrations
  locust -f locustfile.py --tags edge         # Bad input
  locust -f locustfile.py                     # All tests
"""

import json
import random
import uuid
from locust import HttpUser, task, between, tag, events

# Shared state
EVENT_ID = None
SHARED_APPLICATIONS = [f"load-app-{i}" for i in range(5)]


def _create_event(client):
    resp = client.post("/api/v1/events/", json={
        "title": "Load Test Event",
        "description": "Duplicate registration storm",
        "slug": f"load-test-{uuid.uuid4().hex[:8]}",
        "typeform_config": [
            {"id": "fullName", "label": "Full Name", "type": "text", "required": True},
            {"id": "email", "label": "Email Address", "type": "email", "required": True},
        ],
    })
    if resp.status_code == 201:
        return resp.json()["id"]
    return None


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print("SETUP: event is created by the first user to start")
    print("=" * 60)


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    print("\n" + "=" * 60)
    print(f"VERIFY for event {EVENT_ID}:")
    print("  SELECT application_id, COUNT(*) FROM eventsregistrations")
    print(f"  WHERE event_id = '{EVENT_ID}' GROUP BY application_id;")
    print("Every count should be exactly 1")
    print("=" * 60)


class RegistrationUser(HttpUser):
    wait_time = between(0, 0.1)

    def on_start(self):
        global EVENT_ID
        if EVENT_ID is None:
            EVENT_ID = _create_event(self.client)

    @tag("duplicates")
    @task(5)
    def register_shared_identity(self):
        """
        TEST 1: Many users submit the same few application ids.

        Run: locust -f locustfile.py --tags duplicates -u 100 -r 50 --run-time 30s

        Every response should be 201 and carry the same id per application.
        A 409 means a reconciliation failure.
        """
        if not EVENT_ID:
            return
        application_id = random.choice(SHARED_APPLICATIONS)
        with self.client.post(
            "/api/v1/registrations/",
            json={
                "event_id": EVENT_ID,
                "application_id": application_id,
                "details": {"fullName": f"User {random.randint(1, 9999)}"},
            },
            name="/registrations [duplicate]",
            catch_response=True,
        ) as resp:
            if resp.status_code == 201:
                resp.success()
            else:
                resp.failure(f"{resp.status_code}: {resp.text[:200]}")

    @tag("throughput")
    @task(3)
    def register_new_identity(self):
        if not EVENT_ID:
            return
        self.client.post(
            "/api/v1/registrations/",
            json={
                "event_id": EVENT_ID,
                "registration_email": f"load_{uuid.uuid4().hex[:10]}@test.com",
                "details": {"fullName": "Load Tester"},
            },
            name="/registrations [new]",
        )

    @tag("edge")
    @task(1)
    def bad_inputs(self):
        with self.client.post(
            "/api/v1/registrations/",
            json={"event_id": EVENT_ID or "missing"},
            name="/registrations [no identity]",
            catch_response=True,
        ) as resp:
            if resp.status_code == 422:
                resp.success()
            else:
                resp.failure(f"expected 422, got {resp.status_code}")

        with self.client.patch(
            f"/api/v1/events/{EVENT_ID or 'missing'}",
            data=json.dumps({"unknown": True}),
            headers={"Content-Type": "application/json"},
            name="/events [empty update]",
            catch_response=True,
        ) as resp:
            if resp.status_code == 422:
                resp.success()
            else:
                resp.failure(f"expected 422, got {resp.status_code}")
