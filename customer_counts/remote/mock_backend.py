"""
Mock customer service.

In-memory stand-in for the remote API, served through
``httpx.MockTransport`` so the real gateway code runs unchanged. Used by the
console demo and the test suite. Supports failure injection per endpoint
and artificial latency for reminder lookups.
"""

import asyncio
import json
import logging
import re
from typing import Any, Callable, Optional

import httpx

logger = logging.getLogger(__name__)

MOCK_BASE_URL = "http://mock.customers.local/api/"
MOCK_TOKEN = "mock-token"

_LIST_RE = re.compile(r"/customers/(?P<category>visitors|shoppers)/$")
_UPDATE_RE = re.compile(r"/customers/(?P<record_id>[^/]+)/update/$")
_REMINDER_RE = re.compile(r"/reminders/(?P<record_id>[^/]+)/$")

SAMPLE_CUSTOMERS: list[dict[str, Any]] = [
    {
        "id": 1,
        "name": "Priya Raman",
        "email": "priya.raman@email.com",
        "phone_number": "0412345678",
        "salesperson_name": "Arjun K.",
        "description": "Interested in the corner sofa, wants fabric samples.",
        "visit_type": "visitors",
    },
    {
        "id": 2,
        "name": "Tom Becker",
        "email": "tom.becker@email.com",
        "phone_number": "0498765432",
        "salesperson_name": "Meera S.",
        "description": "Asked about delivery windows.",
        "visit_type": "visitors",
    },
    {
        "id": 3,
        "name": "Lina Okafor",
        "email": "lina.o@email.com",
        "phone_number": "0455111222",
        "salesperson_name": "Arjun K.",
        "description": "Bought a dining set.",
        "visit_type": "shoppers",
    },
]

SAMPLE_REMINDERS: dict[str, str] = {
    "1": "2024-01-01T10:00:00",
}


class MockCustomerBackend:
    """In-memory customer and reminder store with failure injection."""

    def __init__(
        self,
        customers: Optional[list[dict[str, Any]]] = None,
        reminders: Optional[dict[str, str]] = None,
        token: str = MOCK_TOKEN,
    ) -> None:
        self.customers: list[dict[str, Any]] = [
            dict(c) for c in (SAMPLE_CUSTOMERS if customers is None else customers)
        ]
        self.reminders: dict[str, str] = dict(
            SAMPLE_REMINDERS if reminders is None else reminders
        )
        self.token = token
        self.calls: list[tuple[str, str, Optional[dict]]] = []
        self.failures: dict[tuple[str, str], int] = {}
        self.reminder_delay_seconds: float = 0.0
        # Server-side normalization applied before values are echoed back
        self.confirm_description: Callable[[str], str] = lambda text: text.strip()
        self.confirm_reminder: Callable[[str], str] = lambda value: value

    # ------------------------------------------------------------------ #
    # Failure injection
    # ------------------------------------------------------------------ #

    def fail(self, method: str, path_suffix: str, status_code: int = 500) -> None:
        """Make requests whose path ends with ``path_suffix`` return ``status_code``."""
        self.failures[(method.upper(), path_suffix)] = status_code

    def fail_category(self, category: str, status_code: int = 500) -> None:
        self.fail("GET", f"/customers/{category}/", status_code)

    def fail_reminder_lookup(self, record_id: Any, status_code: int = 500) -> None:
        self.fail("GET", f"/reminders/{record_id}/", status_code)

    def fail_feedback_update(self, record_id: Any, status_code: int = 500) -> None:
        self.fail("PUT", f"/customers/{record_id}/update/", status_code)

    def fail_reminder_upsert(self, record_id: Any, status_code: int = 500) -> None:
        self.fail("POST", f"/reminders/{record_id}/", status_code)

    # ------------------------------------------------------------------ #
    # Inspection
    # ------------------------------------------------------------------ #

    def calls_to(self, method: str, path_suffix: str = "") -> list[tuple[str, str, Optional[dict]]]:
        return [
            call for call in self.calls
            if call[0] == method.upper() and call[1].endswith(path_suffix)
        ]

    @property
    def write_calls(self) -> list[tuple[str, str, Optional[dict]]]:
        return [call for call in self.calls if call[0] in ("PUT", "POST")]

    def find_customer(self, record_id: Any) -> Optional[dict[str, Any]]:
        for customer in self.customers:
            if str(customer.get("id")) == str(record_id):
                return customer
        return None

    # ------------------------------------------------------------------ #
    # Transport
    # ------------------------------------------------------------------ #

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def client(self, base_url: str = MOCK_BASE_URL) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=base_url, transport=self.transport())

    async def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        body = json.loads(request.content) if request.content else None
        self.calls.append((request.method, path, body))

        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return httpx.Response(401, json={"detail": "Invalid token"})

        for (method, suffix), status_code in self.failures.items():
            if request.method == method and path.endswith(suffix):
                logger.debug("Injected %d for %s %s", status_code, method, path)
                return httpx.Response(status_code, json={"detail": "Injected failure"})

        match = _LIST_RE.search(path)
        if match and request.method == "GET":
            category = match.group("category")
            return httpx.Response(
                200, json=[c for c in self.customers if c.get("visit_type") == category]
            )

        match = _UPDATE_RE.search(path)
        if match and request.method == "PUT":
            return self._update_feedback(match.group("record_id"), body or {})

        match = _REMINDER_RE.search(path)
        if match and request.method == "GET":
            if self.reminder_delay_seconds:
                await asyncio.sleep(self.reminder_delay_seconds)
            return self._get_reminder(match.group("record_id"))
        if match and request.method == "POST":
            return self._upsert_reminder(match.group("record_id"), body or {})

        return httpx.Response(404, json={"detail": "Not found"})

    def _update_feedback(self, record_id: str, body: dict) -> httpx.Response:
        customer = self.find_customer(record_id)
        if customer is None:
            return httpx.Response(404, json={"detail": "Customer not found"})
        customer["description"] = self.confirm_description(str(body.get("description", "")))
        return httpx.Response(200, json={"description": customer["description"]})

    def _get_reminder(self, record_id: str) -> httpx.Response:
        if record_id not in self.reminders:
            return httpx.Response(404, json={"detail": "No reminder"})
        return httpx.Response(200, json={"reminder_datetime": self.reminders[record_id]})

    def _upsert_reminder(self, record_id: str, body: dict) -> httpx.Response:
        if self.find_customer(record_id) is None:
            return httpx.Response(404, json={"detail": "Customer not found"})
        value = self.confirm_reminder(str(body.get("reminder_datetime", "")))
        self.reminders[record_id] = value
        return httpx.Response(
            201, json={"customer_id": body.get("customer_id"), "reminder_datetime": value}
        )
