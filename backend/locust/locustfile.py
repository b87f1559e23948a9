"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags listing   # Paginated listing
  locust -f locustfile.py --tags search    # Filtered search
  locust -f locustfile.py --tags edge      # Test bad input
  locust -f locustfile.py                  # All tests

Seed first so searches have something to match:
  python -m eventlist.seed
"""

import random
import uuid
from locust import HttpUser, task, between, tag, events
from datetime import datetime, timezone, timedelta

# Shared state
EVENT_IDS = []

SEARCH_TERMS = ["yoga", "wine", "workshop", "tour", "dance", "beer", "quantum"]
LOCATIONS = ["studio", "park", "downtown", "cellar", "gym"]


def random_search_params():
    params = {"limit": str(random.choice([5, 10, 20]))}
    if random.random() < 0.6:
        params["q"] = random.choice(SEARCH_TERMS)
    if random.random() < 0.3:
        params["location"] = random.choice(LOCATIONS)
    if random.random() < 0.3:
        low = random.randint(0, 50)
        params["minPrice"] = str(low)
        params["maxPrice"] = str(low + random.randint(10, 60))
    if random.random() < 0.2:
        params["dateFrom"] = "2024-02-15"
        params["dateTo"] = "2024-03-01"
    return params


def future_event_body():
    future = (datetime.now(timezone.utc) + timedelta(days=random.randint(1, 90))).isoformat()
    return {
        "title": f"Event {random.randint(1, 10000)}",
        "description": "Load test event",
        "datetime": future,
        "location": random.choice(["Venue A", "Venue B", "Riverside Park"]),
        "capacity": random.randint(10, 500),
        "pricePerPerson": random.randint(0, 200) * 50,
    }


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "="*60)
    print("Event listing load test starting")
    print("="*60)


class ListingUser(HttpUser):
    """
    TEST 1: Listing - page through the newest events

    Run: locust -f locustfile.py --tags listing -u 100 -r 20 --run-time 60s

    Compare:
      - Avg response time per page depth
      - P95/P99 latency
    """
    wait_time = between(0.1, 0.5)

    @tag("listing", "read")
    @task(10)
    def list_events(self):
        page = random.randint(1, 5)
        resp = self.client.get(f"/api/v1/events/?page={page}&limit=20",
            name="/api/v1/events/?page=[n]")
        if resp.status_code == 200:
            for event in resp.json().get("items", []):
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @tag("listing", "read")
    @task(3)
    def get_event_detail(self):
        if EVENT_IDS:
            self.client.get(f"/api/v1/events/{random.choice(EVENT_IDS)}",
                name="/api/v1/events/{id}")

    @tag("listing")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class SearchUser(HttpUser):
    """
    TEST 2: Search - random filter combinations

    Run: locust -f locustfile.py --tags search -u 100 -r 20 --run-time 60s

    Every response must be 200 with total >= len(items).
    """
    wait_time = between(0.1, 0.5)

    @tag("search", "read")
    @task
    def search_events(self):
        with self.client.get("/api/v1/events/search",
            params=random_search_params(),
            name="/api/v1/events/search",
            catch_response=True
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Unexpected: {resp.status_code}")
            elif resp.json()["total"] < len(resp.json()["items"]):
                resp.failure("total smaller than page")
            else:
                resp.success()


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    def expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def invalid_pagination(self):
        with self.client.get("/api/v1/events/search?page=abc&limit=-1",
            name="/api/v1/events/search [bad page]",
            catch_response=True
        ) as resp:
            self.expect(resp, [400])

    @tag("edge")
    @task
    def inverted_date_range(self):
        with self.client.get("/api/v1/events/search?dateFrom=2024-03-01&dateTo=2024-02-01",
            name="/api/v1/events/search [inverted]",
            catch_response=True
        ) as resp:
            self.expect(resp, [400])

    @tag("edge")
    @task
    def bad_price(self):
        with self.client.get("/api/v1/events/search?minPrice=free",
            name="/api/v1/events/search [bad price]",
            catch_response=True
        ) as resp:
            self.expect(resp, [400])

    @tag("edge")
    @task
    def invalid_event_id(self):
        with self.client.get("/api/v1/events/999999",
            name="/api/v1/events/{id} [bad id]",
            catch_response=True
        ) as resp:
            self.expect(resp, [400])

    @tag("edge")
    @task
    def missing_event(self):
        with self.client.get(f"/api/v1/events/{uuid.uuid4()}",
            name="/api/v1/events/{id} [missing]",
            catch_response=True
        ) as resp:
            self.expect(resp, [404])

    @tag("edge")
    @task
    def zero_capacity(self):
        with self.client.post("/api/v1/events/",
            json=dict(future_event_body(), capacity=0),
            catch_response=True
        ) as resp:
            self.expect(resp, [422])

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post("/api/v1/events/",
            data="not json at all",
            catch_response=True
        ) as resp:
            self.expect(resp, [400, 422])


class RealisticUser(HttpUser):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Simulates real traffic:
      - Mostly browsing and searching
      - Some edits
      - Rare creates and deletes
    """
    wait_time = between(1, 3)

    @task(40)
    def browse_events(self):
        resp = self.client.get("/api/v1/events/?page=1&limit=20")
        if resp.status_code == 200:
            for event in resp.json().get("items", []):
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @task(30)
    def search_events(self):
        self.client.get("/api/v1/events/search", params=random_search_params(),
            name="/api/v1/events/search")

    @task(15)
    def view_event(self):
        if EVENT_IDS:
            self.client.get(f"/api/v1/events/{random.choice(EVENT_IDS)}",
                name="/api/v1/events/{id}")

    @task(5)
    def update_event(self):
        if EVENT_IDS:
            self.client.put(f"/api/v1/events/{random.choice(EVENT_IDS)}",
                json={"capacity": random.randint(10, 500)},
                name="/api/v1/events/{id} [update]")

    @task(3)
    def create_event(self):
        resp = self.client.post("/api/v1/events/", json=future_event_body())
        if resp.status_code == 201:
            EVENT_IDS.append(resp.json()["id"])

    @task(1)
    def delete_event(self):
        if EVENT_IDS:
            event_id = EVENT_IDS.pop(random.randrange(len(EVENT_IDS)))
            self.client.delete(f"/api/v1/events/{event_id}",
                name="/api/v1/events/{id} [delete]")
