"""
Typed async client for the remote customer service.

Wraps the four endpoints the screen uses. Every call carries the current
bearer credential read from a caller-supplied provider; the gateway never
acquires or refreshes credentials itself, and never retries.

Usage:
    gateway = RemoteGateway(credential_provider=lambda: session.access_token)
    visitors = await gateway.list_by_category(Category.VISITORS)
    reminder = await gateway.get_reminder(visitors[0].id)
    await gateway.aclose()
"""

import json
import logging
from typing import Any, Callable, Optional, Union

import httpx
from pydantic import ValidationError

from customer_counts.config import settings
from customer_counts.errors import AuthError, InvalidCategoryError, TransportError
from customer_counts.schemas.customer_schema import (
    LIST_CATEGORIES,
    Category,
    CustomerRecord,
    FeedbackPayload,
    RecordId,
    ReminderPayload,
)

logger = logging.getLogger(__name__)

CredentialProvider = Callable[[], Optional[str]]

_AUTH_STATUSES = {401, 403}
_NOT_FOUND = 404


def _auth_headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


def _response_payload(resp: httpx.Response) -> Any:
    """Best-effort body for error reporting: JSON if it parses, text otherwise."""
    try:
        return resp.json()
    except ValueError:
        return resp.text


class RemoteGateway:
    """Authenticated read/write access to customer records and reminders."""

    def __init__(
        self,
        credential_provider: CredentialProvider,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self._credential_provider = credential_provider
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                base_url=(base_url or settings.api.base_url).rstrip("/") + "/",
                timeout=timeout_seconds or settings.api.timeout_seconds,
                verify=settings.api.verify_tls,
            )
        self._client = client

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this gateway created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "RemoteGateway":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------------ #
    # Endpoints
    # ------------------------------------------------------------------ #

    async def list_by_category(self, category: Union[Category, str]) -> list[CustomerRecord]:
        """GET /customers/{category}/ and validate each entry."""
        category = _list_category(category)
        data = await self._request("GET", f"customers/{category.value}/")
        if not isinstance(data, list):
            logger.error("Invalid %s payload, expected a list: %r", category.value, data)
            raise TransportError(
                f"Expected a list of {category.value}", payload=data
            )

        records: list[CustomerRecord] = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                logger.warning("Skipping non-object %s entry #%d: %r", category.value, index, item)
                continue
            try:
                records.append(CustomerRecord.model_validate(item))
            except ValidationError as exc:
                logger.warning(
                    "Skipping malformed %s entry #%d: %s", category.value, index, exc
                )
        logger.debug("Fetched %d %s", len(records), category.value)
        return records

    async def get_reminder(self, record_id: RecordId) -> ReminderPayload:
        """GET /reminders/{id}/. A 404 means the record has no reminder yet."""
        try:
            data = await self._request("GET", f"reminders/{record_id}/", missing_ok=True)
        except TransportError as exc:
            if exc.status_code == _NOT_FOUND:
                return ReminderPayload()
            raise
        return _validate_payload(ReminderPayload, data)

    async def update_feedback(self, record_id: RecordId, text: str) -> FeedbackPayload:
        """PUT /customers/{id}/update/ with the new description."""
        data = await self._request(
            "PUT", f"customers/{record_id}/update/", {"description": text}
        )
        return _validate_payload(FeedbackPayload, data)

    async def upsert_reminder(
        self, record_id: RecordId, reminder_datetime: str
    ) -> ReminderPayload:
        """POST /reminders/{id}/ with an already wire-formatted timestamp."""
        data = await self._request(
            "POST",
            f"reminders/{record_id}/",
            {"customer_id": record_id, "reminder_datetime": reminder_datetime},
        )
        return _validate_payload(ReminderPayload, data)

    # ------------------------------------------------------------------ #
    # Transport
    # ------------------------------------------------------------------ #

    def _token(self) -> str:
        token = self._credential_provider()
        if not token or not str(token).strip():
            raise AuthError("No access token available; sign in again")
        return str(token)

    async def _request(
        self,
        method: str,
        path: str,
        payload: Optional[dict] = None,
        missing_ok: bool = False,
    ) -> Any:
        headers = _auth_headers(self._token())
        content = None
        if payload is not None:
            content = json.dumps(payload, ensure_ascii=False).encode("utf-8")

        try:
            resp = await self._client.request(method, path, headers=headers, content=content)
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        if resp.status_code in _AUTH_STATUSES:
            logger.error("%s %s rejected credential (status %d)", method, path, resp.status_code)
            raise AuthError(
                f"{method} {path} rejected the access token", status_code=resp.status_code
            )
        if resp.is_error:
            body = _response_payload(resp)
            if missing_ok and resp.status_code == _NOT_FOUND:
                logger.debug("%s %s: not found", method, path)
                raise TransportError(
                    f"{method} {path} not found", status_code=resp.status_code, payload=body
                )
            logger.error(
                "%s %s returned status %d: %r", method, path, resp.status_code, body
            )
            raise TransportError(
                f"{method} {path} failed", status_code=resp.status_code, payload=body
            )

        try:
            return resp.json()
        except ValueError as exc:
            logger.error("%s %s returned a non-JSON body: %r", method, path, resp.text)
            raise TransportError(
                f"{method} {path} returned a non-JSON body",
                status_code=resp.status_code,
                payload=resp.text,
            ) from exc


def _list_category(category: Union[Category, str]) -> Category:
    try:
        category = Category(category)
    except ValueError:
        raise InvalidCategoryError(f"Unknown category: {category!r}") from None
    if category not in LIST_CATEGORIES:
        raise InvalidCategoryError(
            f"Category '{category.value}' has no list endpoint. "
            f"Available: {[c.value for c in LIST_CATEGORIES]}"
        )
    return category


def _validate_payload(model: type, data: Any) -> Any:
    if not isinstance(data, dict):
        raise TransportError(f"Expected an object for {model.__name__}", payload=data)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise TransportError(f"Malformed {model.__name__}: {exc}", payload=data) from exc
