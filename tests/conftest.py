"""
Pytest fixtures for the CRM service tests

Stores are replaced by in-memory fakes and outbound HTTP by
httpx.MockTransport, so no database or running service is needed.
"""

import re
from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from crm.customer_service.config import CustomerServiceSettings
from crm.customer_service.main import create_app as create_customer_app
from crm.customer_service.models.customer import Customer
from crm.gateway.config import GatewaySettings
from crm.gateway.main import build_service_router, create_app as create_gateway_app
from crm.order_service.config import OrderServiceSettings
from crm.order_service.main import create_app as create_order_app
from crm.order_service.models.order import Order
from crm.shared.utils.errors import StorageError
from crm.shared.utils.timing import ServerTiming

SERVER_TIMING_PATTERN = re.compile(r"^\w+;dur=\d+\.\d+(, \w+;dur=\d+\.\d+)*$")

CUSTOMER_SERVICE_URL = "http://customer-service.test"
ORDER_SERVICE_URL = "http://order-service.test"


def timing_stages(header: str) -> List[str]:
    """Stage names of a Server-Timing header, in order"""
    return [part.split(";", 1)[0].strip() for part in header.split(",")]


def _record_store_round_trip(timing: Optional[ServerTiming]):
    if timing is not None:
        timing.record("conn", ServerTiming.now())
        timing.record("query", ServerTiming.now())


class InMemoryCustomerDatabase:
    """Stands in for CustomerDatabase"""

    def __init__(self):
        self.rows: Dict[int, Customer] = {}
        self.next_id = 1
        self.insert_count = 0

    async def list_customers(self, timing=None):
        _record_store_round_trip(timing)
        return list(self.rows.values())

    async def get_customer(self, customer_id, timing=None):
        _record_store_round_trip(timing)
        return self.rows.get(customer_id)

    async def create_customer(self, name, email, timing=None):
        _record_store_round_trip(timing)
        customer = Customer(id=self.next_id, name=name, email=email)
        self.rows[customer.id] = customer
        self.next_id += 1
        self.insert_count += 1
        return customer

    async def delete_customer(self, customer_id, timing=None):
        _record_store_round_trip(timing)
        return 1 if self.rows.pop(customer_id, None) else 0

    async def ping(self, timing=None):
        _record_store_round_trip(timing)


class InMemoryOrderDatabase:
    """Stands in for OrderDatabase"""

    def __init__(self):
        self.rows: Dict[int, Order] = {}
        self.next_id = 1

    async def list_orders(self, timing=None):
        _record_store_round_trip(timing)
        return list(self.rows.values())

    async def get_order(self, order_id, timing=None):
        _record_store_round_trip(timing)
        return self.rows.get(order_id)

    async def create_order(self, customer_id, product, quantity, timing=None):
        _record_store_round_trip(timing)
        order = Order(id=self.next_id, customer_id=customer_id, product=product, quantity=quantity)
        self.rows[order.id] = order
        self.next_id += 1
        return order


class StubVerifier:
    """Customer verifier with a fixed set of known customers"""

    def __init__(self, known_ids=(), error: Optional[Exception] = None):
        self.known_ids = set(known_ids)
        self.error = error
        self.calls: List[int] = []

    async def customer_exists(self, customer_id):
        self.calls.append(customer_id)
        if self.error is not None:
            raise self.error
        return customer_id in self.known_ids


@pytest.fixture
def failing_database():
    """Database whose every operation fails at the store"""
    db = MagicMock()
    for name in (
        "list_customers", "get_customer", "create_customer", "delete_customer",
        "ping", "list_orders", "get_order", "create_order",
    ):
        setattr(db, name, AsyncMock(side_effect=StorageError()))
    return db


@pytest.fixture
def customer_db():
    return InMemoryCustomerDatabase()


@pytest.fixture
def customer_app(customer_db):
    app = create_customer_app(CustomerServiceSettings(log_format="console"))
    app.state.db = customer_db
    return app


@pytest.fixture
def customer_client(customer_app):
    """Test client without lifespan, so no pool is opened"""
    return TestClient(customer_app)


@pytest.fixture
def order_db():
    return InMemoryOrderDatabase()


@pytest.fixture
def verifier():
    return StubVerifier(known_ids={1, 42})


@pytest.fixture
def order_settings():
    return OrderServiceSettings(customer_service_url=CUSTOMER_SERVICE_URL, log_format="console")


@pytest.fixture
def order_app(order_settings, order_db, verifier):
    app = create_order_app(order_settings)
    app.state.db = order_db
    app.state.customer_client = verifier
    return app


@pytest.fixture
def order_client(order_app):
    return TestClient(order_app)


class RecordingBackend:
    """MockTransport handler that records forwarded requests"""

    def __init__(self, response: Optional[httpx.Response] = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response or httpx.Response(200, json={"ok": True})


@pytest.fixture
def gateway_settings():
    return GatewaySettings(
        customer_service_url=CUSTOMER_SERVICE_URL,
        order_service_url=ORDER_SERVICE_URL,
        log_format="console",
    )


@pytest.fixture
def gateway_app(gateway_settings):
    return create_gateway_app(gateway_settings)


def attach_backend(app, settings: GatewaySettings, backend: RecordingBackend):
    """Point the gateway's upstream clients at a mock transport"""
    app.state.service_router = build_service_router(settings, transport=httpx.MockTransport(backend))
    return TestClient(app)
