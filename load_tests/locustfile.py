"""
CRM Gateway Load Tests

Latency scenarios against the gateway:
- Customer list (read) and customer create (write)
- Order create (inter-service: customer verification + insert)
- Mixed 70% read / 30% write workload
- CPU-bound /compute
- /customers/ping database probe
- One-shot walk over the error paths

Server-Timing stages reported by the backends (conn, verify, query, ser,
compute) are recorded as extra locust entries of type "server-timing".

Usage:
    # Web UI mode
    locust -f load_tests/locustfile.py --host=http://localhost:8000

    # Headless, reads only
    locust -f load_tests/locustfile.py --host=http://localhost:8000 \
        --headless -u 10 -r 10 -t 30s --tags read

    # CPU-bound comparison
    locust -f load_tests/locustfile.py --host=http://localhost:8000 \
        --headless -u 20 -r 5 -t 1m ComputeUser
"""

import os
import random
import re
import time

from locust import HttpUser, between, constant, events, tag, task
from locust.runners import MasterRunner

SERVER_TIMING_ENTRY = re.compile(r"(\w+);dur=([\d.]+)")


class Config:
    JSON_HEADERS = {"content-type": "application/json"}
    COMPUTE_N = int(os.getenv("COMPUTE_N", "1000"))
    MISSING_ID = 999999


def record_server_timing(environment, response):
    """Report each Server-Timing stage as its own request entry"""
    header = response.headers.get("server-timing")
    if not header:
        return
    for stage, duration in SERVER_TIMING_ENTRY.findall(header):
        environment.events.request.fire(
            request_type="server-timing",
            name=stage,
            response_time=float(duration),
            response_length=0,
            exception=None,
            context={},
        )


def unique_customer():
    stamp = f"{int(time.time() * 1000)}{random.randint(0, 9999):04d}"
    return {"name": f"Customer {stamp}", "email": f"user{stamp}@example.com"}


class CrmUser(HttpUser):
    """Base class: owns one customer so orders can be created"""

    abstract = True
    wait_time = constant(0.1)
    customer_id = None

    def on_start(self):
        response = self.client.post("/customers", json=unique_customer(), name="[setup] create customer")
        if response.status_code == 201:
            self.customer_id = response.json()["id"]

    def expect(self, response, status):
        if response.status_code == status:
            response.success()
            record_server_timing(self.environment, response)
        else:
            response.failure(f"Expected {status}, got {response.status_code}: {response.text}")


class ReadUser(CrmUser):
    @tag("read")
    @task
    def list_customers(self):
        with self.client.get("/customers", name="GET /customers", catch_response=True) as response:
            self.expect(response, 200)


class WriteUser(CrmUser):
    @tag("write")
    @task
    def create_customer(self):
        with self.client.post(
            "/customers", json=unique_customer(), name="POST /customers", catch_response=True
        ) as response:
            self.expect(response, 201)


class InterServiceUser(CrmUser):
    @tag("inter-service")
    @task
    def create_order(self):
        if self.customer_id is None:
            return
        payload = {
            "customer_id": self.customer_id,
            "product": f"Product {int(time.time() * 1000)}",
            "quantity": random.randint(1, 10),
        }
        with self.client.post("/orders", json=payload, name="POST /orders", catch_response=True) as response:
            self.expect(response, 201)


class MixedUser(CrmUser):
    wait_time = between(0.05, 0.2)

    @tag("mixed")
    @task(7)
    def read(self):
        with self.client.get("/customers", name="[mixed] GET /customers", catch_response=True) as response:
            self.expect(response, 200)

    @tag("mixed")
    @task(3)
    def write(self):
        with self.client.post(
            "/customers", json=unique_customer(), name="[mixed] POST /customers", catch_response=True
        ) as response:
            self.expect(response, 201)


class ComputeUser(HttpUser):
    wait_time = constant(0.1)

    @tag("compute")
    @task
    def compute(self):
        with self.client.get(
            f"/compute?n={Config.COMPUTE_N}", name="GET /compute", catch_response=True
        ) as response:
            if response.status_code == 200:
                response.success()
                record_server_timing(self.environment, response)
            else:
                response.failure(f"Status {response.status_code}")


class PingDbUser(HttpUser):
    wait_time = constant(0.1)

    @tag("ping")
    @task
    def ping(self):
        with self.client.get("/customers/ping", name="GET /customers/ping", catch_response=True) as response:
            if response.status_code == 200:
                response.success()
                record_server_timing(self.environment, response)
            else:
                response.failure(f"Status {response.status_code}")


class ErrorPathUser(HttpUser):
    """Walks every error path once per task run"""

    wait_time = between(1, 2)

    CASES = [
        ("POST", "/customers", "not-json", 400, "invalid JSON"),
        ("POST", "/customers", "{}", 400, "missing fields"),
        ("POST", "/customers", '{"name":"","email":"a@b"}', 400, "empty name"),
        ("POST", "/customers", '{"name":"Test","email":"invalid-email"}', 400, "email without @"),
        ("GET", f"/customers/{Config.MISSING_ID}", None, 404, "customer not found"),
        ("DELETE", f"/customers/{Config.MISSING_ID}", None, 404, "delete missing customer"),
        ("POST", "/orders", f'{{"customer_id":{Config.MISSING_ID},"product":"X","quantity":1}}', 400,
         "order for missing customer"),
        ("POST", "/orders", '{"customer_id":0,"product":"X","quantity":1}', 400, "non-positive customer_id"),
        ("GET", f"/orders/{Config.MISSING_ID}", None, 404, "order not found"),
        ("GET", "/nowhere", None, 404, "unrouted path"),
    ]

    @tag("errors")
    @task
    def error_paths(self):
        for method, path, body, status, label in self.CASES:
            with self.client.request(
                method,
                path,
                data=body,
                headers=Config.JSON_HEADERS,
                name=f"[error] {label}",
                catch_response=True,
            ) as response:
                if response.status_code != status:
                    response.failure(f"Expected {status}, got {response.status_code}")
                elif "error" not in response.json():
                    response.failure("Missing error message")
                else:
                    response.success()


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    """Called when test starts."""
    if not isinstance(environment.runner, MasterRunner):
        return
    print("=" * 60)
    print("CRM Gateway Load Test Starting")
    print(f"Target host: {environment.host}")
    print("=" * 60)


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    """Called when test stops."""
    if not isinstance(environment.runner, MasterRunner):
        return
    print("=" * 60)
    print("Load Test Complete")
    print("=" * 60)
