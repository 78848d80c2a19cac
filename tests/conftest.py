"""Shared test fixtures and helpers."""

from datetime import datetime
from typing import Any, Callable, Optional

import httpx
import pytest

from customer_counts.core.screen import CustomerCountScreen
from customer_counts.core.view_state import ViewState
from customer_counts.remote.gateway import RemoteGateway
from customer_counts.remote.mock_backend import MOCK_BASE_URL, MOCK_TOKEN, MockCustomerBackend
from customer_counts.schemas.customer_schema import CustomerRecord

FIXED_NOW = datetime(2024, 1, 1, 9, 0, 0)


@pytest.fixture
def backend():
    return MockCustomerBackend()


@pytest.fixture
def tokens():
    """Mutable session credential store; tests can expire the token."""
    return {"access": MOCK_TOKEN}


@pytest.fixture
def gateway(backend, tokens):
    return RemoteGateway(
        credential_provider=lambda: tokens["access"],
        client=backend.client(),
    )


@pytest.fixture
def screen(gateway):
    return CustomerCountScreen(gateway, clock=lambda: FIXED_NOW)


def make_gateway(handler: Callable[[httpx.Request], Any], token: Optional[str] = "t") -> RemoteGateway:
    """Gateway over an ad-hoc MockTransport handler."""
    client = httpx.AsyncClient(base_url=MOCK_BASE_URL, transport=httpx.MockTransport(handler))
    return RemoteGateway(credential_provider=lambda: token, client=client)


def make_record(
    record_id: Any = 1,
    visit_type: str = "visitors",
    description: str = "",
    reminder_datetime: Optional[str] = None,
    **extra: Any,
) -> CustomerRecord:
    """Helper to create a CustomerRecord with sensible defaults."""
    return CustomerRecord(
        id=record_id,
        name=f"Customer {record_id}",
        email=f"customer{record_id}@email.com",
        phone_number="0412345678",
        salesperson_name="Arjun K.",
        description=description,
        visit_type=visit_type,
        reminder_datetime=reminder_datetime,
        **extra,
    )


def make_state(*records: CustomerRecord) -> ViewState:
    return ViewState(records=list(records))
