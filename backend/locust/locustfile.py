"""
Locust Load Test Suite

Start the API with a bootstrap admin so the concurrency scenario can create
its event:

  BOOTSTRAP_ADMIN_USERNAME=admin BOOTSTRAP_ADMIN_PASSWORD=adminpassword \
      uvicorn eventhub.main:app

Run scenarios:
  locust -f locustfile.py --tags concurrency  # Test overselling
  locust -f locustfile.py --tags browse       # Catalog reads
  locust -f locustfile.py --tags edge         # Test bad input
  locust -f locustfile.py                     # All tests
"""

import os
import random
import string
from datetime import datetime, timezone, timedelta

from locust import HttpUser, task, between, tag

ADMIN_USERNAME = os.environ.get("BOOTSTRAP_ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.environ.get("BOOTSTRAP_ADMIN_PASSWORD", "adminpassword")
TICKET_PRICE = 1500

# Shared state
EVENT_IDS = []
CONCURRENCY_EVENT_ID = None


def random_username():
    return "u_" + "".join(random.choices(string.ascii_lowercase, k=8))


def register(client) -> dict:
    """Register a throwaway account and return auth headers."""
    username = random_username()
    resp = client.post("/api/register", json={
        "username": username,
        "password": "loadtest123",
        "email": f"{username}@example.com",
        "name": username,
    })
    if resp.status_code == 201:
        return {"Authorization": f"Bearer {resp.json()['accessToken']}"}
    return {}


def event_body(title: str, capacity: int) -> dict:
    future = (datetime.now(timezone.utc) + timedelta(days=random.randint(1, 90))).isoformat()
    return {
        "title": title,
        "description": "Load test event",
        "imageUrl": "https://example.com/load.jpg",
        "date": future,
        "location": "Test Venue",
        "price": TICKET_PRICE,
        "capacity": capacity,
        "categoryId": random.randint(1, 6),
    }


class ConcurrencyUser(HttpUser):
    """
    TEST 1: Concurrency - 100 users -> 10 tickets

    Run: locust -f locustfile.py --tags concurrency -u 100 -r 50 --run-time 30s

    After test, verify as the admin:
      GET /api/bookings?event=<id>  -> total quantity should be <= 10
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        global CONCURRENCY_EVENT_ID
        self.headers = register(self.client)

        if CONCURRENCY_EVENT_ID is None:
            resp = self.client.post("/api/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
            if resp.status_code != 200:
                return
            admin_headers = {"Authorization": f"Bearer {resp.json()['accessToken']}"}
            resp = self.client.post("/api/events", json=event_body("Concurrency Test Event", 10), headers=admin_headers)
            if resp.status_code == 201:
                CONCURRENCY_EVENT_ID = resp.json()["id"]
                print(f"\nCreated event {CONCURRENCY_EVENT_ID} with 10 tickets\n")

    @tag("concurrency")
    @task
    def book_limited_tickets(self):
        """All users fight for the same 10 tickets."""
        if not CONCURRENCY_EVENT_ID or not self.headers:
            return

        with self.client.post("/api/bookings",
            json={"eventId": CONCURRENCY_EVENT_ID, "quantity": 1, "totalPrice": TICKET_PRICE},
            headers=self.headers,
            catch_response=True
        ) as resp:
            if resp.status_code == 201:
                resp.success()
            elif resp.status_code == 400 and "available" in resp.json():
                resp.success()  # Expected: sold out
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class BrowsingUser(HttpUser):
    """
    TEST 2: Catalog reads

    Run: locust -f locustfile.py --tags browse -u 100 -r 20 --run-time 60s
    """
    wait_time = between(0.1, 0.5)

    @tag("browse")
    @task(10)
    def list_events(self):
        resp = self.client.get("/api/events?limit=20")
        if resp.status_code == 200:
            for event in resp.json():
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @tag("browse")
    @task(5)
    def featured(self):
        self.client.get("/api/events/featured")

    @tag("browse")
    @task(5)
    def search(self):
        self.client.get(f"/api/events?search={random.choice(['music', 'test', 'venue'])}",
            name="/api/events?search=[q]")

    @tag("browse")
    @task(3)
    def get_event_detail(self):
        if EVENT_IDS:
            self.client.get(f"/api/events/{random.choice(EVENT_IDS)}", name="/api/events/{id}")

    @tag("browse")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    def on_start(self):
        self.headers = register(self.client)

    def _expect(self, body, codes, **kwargs):
        with self.client.post("/api/bookings", json=body, headers=self.headers,
                              catch_response=True, **kwargs) as resp:
            if resp.status_code in codes:
                resp.success()
            else:
                resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def invalid_event_id(self):
        self._expect({"eventId": 999999, "quantity": 1, "totalPrice": TICKET_PRICE}, [404])

    @tag("edge")
    @task
    def tampered_price(self):
        if EVENT_IDS:
            self._expect({"eventId": random.choice(EVENT_IDS), "quantity": 2, "totalPrice": 1}, [400, 404])

    @tag("edge")
    @task
    def zero_quantity(self):
        self._expect({"eventId": 1, "quantity": 0, "totalPrice": 0}, [400])

    @tag("edge")
    @task
    def huge_quantity(self):
        self._expect({"eventId": 1, "quantity": 999999, "totalPrice": 999999 * TICKET_PRICE}, [400])

    @tag("edge")
    @task
    def float_price(self):
        self._expect({"eventId": 1, "quantity": 1, "totalPrice": 15.0}, [400])

    @tag("edge")
    @task
    def missing_auth(self):
        with self.client.post("/api/bookings",
            json={"eventId": 1, "quantity": 1, "totalPrice": TICKET_PRICE},
            catch_response=True
        ) as resp:
            if resp.status_code == 401:
                resp.success()
            else:
                resp.failure(f"Expected 401, got {resp.status_code}")
