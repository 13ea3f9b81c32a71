"""Clients for the spreadsheet-backed row store."""
from __future__ import annotations

import itertools
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Protocol, Sequence

import httpx

from octobull.core.schema import LoginPayload, MessagePayload, parse_master_items, parse_rows
from octobull.domain import DraftRequestItem, MasterItem, RowRecord, Status

logger = logging.getLogger(__name__)


class RowStoreError(RuntimeError):
    """Raised when the row store cannot complete a call."""


@dataclass(slots=True)
class LoginResult:
    """Outcome of a credential check against the store."""

    ok: bool
    message: str = ""
    role: str = "user"
    store_code: str = ""
    store_name: str = ""
    email: str = ""


class RowStoreClient(Protocol):
    """Contract the dashboards depend on."""

    async def fetch_all_rows(self) -> list[RowRecord]: ...

    async def update_row_status(self, row_handle: int, new_status: Status) -> Any: ...

    async def submit_new_ticket(
        self, store: str, submitter_email: str, items: Sequence[DraftRequestItem]
    ) -> str: ...

    async def fetch_master_items(self) -> list[MasterItem]: ...

    async def login(self, store_code: str, password: str) -> LoginResult: ...

    async def register(self, store_code: str, store_name: str, password: str, email: str) -> str: ...


def _item_payload(item: DraftRequestItem) -> dict[str, str]:
    return {"procode": item.code, "prodesc": item.name, "qty": item.quantity, "reason": item.reason}


class AppsScriptRowStoreClient:
    """Row store client for a Google Apps Script web app.

    Actions are posted as ``?action=<name>`` with a JSON body sent as
    ``text/plain`` (Apps Script rejects preflighted content types).
    """

    _HEADERS = {"Content-Type": "text/plain;charset=utf-8"}

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("base_url is required")
        self._base_url = base_url
        self._client = http_client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._owns_client = http_client is None

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    async def _send(self, method: str, params: dict[str, str] | None = None, body: Any = None) -> Any:
        kwargs: dict[str, Any] = {"params": params}
        if body is not None:
            kwargs["content"] = json.dumps(body)
            kwargs["headers"] = self._HEADERS
        try:
            response = await self._client.request(method, self._base_url, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise RowStoreError(f"row store returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise RowStoreError(f"row store request failed: {exc}") from exc
        except ValueError as exc:
            raise RowStoreError("row store returned a non-JSON body") from exc

    async def _post_action(self, action: str, data: dict[str, Any]) -> Any:
        return await self._send("POST", params={"action": action}, body=data)

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    async def fetch_all_rows(self) -> list[RowRecord]:
        payload = await self._post_action("getRequests", {})
        data = payload.get("data") if isinstance(payload, dict) else None
        return parse_rows(data)

    async def update_row_status(self, row_handle: int, new_status: Status) -> Any:
        return await self._post_action("updateStatus", {"row": row_handle, "status": Status(new_status).value})

    async def submit_new_ticket(
        self, store: str, submitter_email: str, items: Sequence[DraftRequestItem]
    ) -> str:
        body = {"store": store, "email": submitter_email, "items": [_item_payload(item) for item in items]}
        # submission has no action parameter on the script side
        payload = await self._send("POST", body=body)
        return MessagePayload.model_validate(payload if isinstance(payload, dict) else {}).message

    async def fetch_master_items(self) -> list[MasterItem]:
        payload = await self._send("GET")
        raw_items = payload.get("items") if isinstance(payload, dict) else None
        return parse_master_items(raw_items)

    async def login(self, store_code: str, password: str) -> LoginResult:
        payload = await self._post_action("login", {"storeCode": store_code, "password": password})
        if not isinstance(payload, dict):
            raise RowStoreError("unexpected login response")
        parsed = LoginPayload.model_validate(payload)
        return LoginResult(
            ok=parsed.status == "success",
            message=parsed.message,
            role=parsed.role,
            store_code=parsed.store_code,
            store_name=parsed.store_name,
            email=parsed.email,
        )

    async def register(self, store_code: str, store_name: str, password: str, email: str) -> str:
        payload = await self._post_action(
            "register",
            {"storeCode": store_code, "storeName": store_name, "password": password, "email": email},
        )
        return MessagePayload.model_validate(payload if isinstance(payload, dict) else {}).message

    async def aclose(self) -> None:  # pragma: no cover - best effort cleanup
        if self._owns_client:
            await self._client.aclose()


@dataclass(slots=True)
class _Account:
    store_code: str
    store_name: str
    password: str
    email: str
    role: str = "user"


class InMemoryRowStore:
    """Process-local row store for development and tests.

    Row handles mimic spreadsheet row numbers below a header row.
    """

    def __init__(self, *, first_ticket_number: int = 100) -> None:
        self._first_ticket_number = first_ticket_number
        self.reset()

    def reset(self) -> None:
        self._rows: list[dict[str, Any]] = []
        self._master_items: list[MasterItem] = []
        self._accounts: dict[str, _Account] = {}
        self._ticket_numbers = itertools.count(self._first_ticket_number)

    # ------------------------------------------------------------------
    # seeding helpers
    # ------------------------------------------------------------------
    def add_master_item(self, code: str, description: str) -> None:
        self._master_items.append(MasterItem(code=code, description=description))

    def add_account(
        self, store_code: str, store_name: str, password: str, email: str, *, role: str = "user"
    ) -> None:
        self._accounts[store_code] = _Account(store_code, store_name, password, email, role)

    def add_raw_row(self, row: dict[str, Any]) -> None:
        """Append a row exactly as the sheet would return it."""

        self._rows.append(dict(row))

    # ------------------------------------------------------------------
    # RowStoreClient
    # ------------------------------------------------------------------
    async def fetch_all_rows(self) -> list[RowRecord]:
        return parse_rows([dict(row) for row in self._rows])

    async def update_row_status(self, row_handle: int, new_status: Status) -> Any:
        for row in self._rows:
            if row.get("row") == row_handle:
                row["status"] = Status(new_status).value
                return {"status": "success"}
        raise RowStoreError(f"row {row_handle} not found")

    async def submit_new_ticket(
        self, store: str, submitter_email: str, items: Sequence[DraftRequestItem]
    ) -> str:
        ticket_id = f"R{next(self._ticket_numbers)}"
        submitted_at = datetime.now(timezone.utc).isoformat()
        for item in items:
            self._rows.append(
                {
                    "id": ticket_id,
                    "date": submitted_at,
                    "store": store,
                    "procode": item.code,
                    "prodesc": item.name,
                    "qty": item.quantity,
                    "reason": item.reason,
                    "status": Status.PENDING.value,
                    "email": submitter_email,
                    "row": len(self._rows) + 2,
                }
            )
        return f"Request {ticket_id} submitted successfully"

    async def fetch_master_items(self) -> list[MasterItem]:
        return list(self._master_items)

    async def login(self, store_code: str, password: str) -> LoginResult:
        account = self._accounts.get(store_code)
        if account is None or account.password != password:
            return LoginResult(ok=False, message="Invalid store code or password")
        return LoginResult(
            ok=True,
            message="Login successful",
            role=account.role,
            store_code=account.store_code,
            store_name=account.store_name,
            email=account.email,
        )

    async def register(self, store_code: str, store_name: str, password: str, email: str) -> str:
        if store_code in self._accounts:
            return "Store code already registered"
        self.add_account(store_code, store_name, password, email)
        return "Registration success"


_row_store: RowStoreClient = InMemoryRowStore()


def configure_row_store(client: RowStoreClient) -> None:
    """Install the row store used by the dashboards."""

    global _row_store
    _row_store = client


def get_row_store() -> RowStoreClient:
    return _row_store


__all__ = [
    "AppsScriptRowStoreClient",
    "InMemoryRowStore",
    "LoginResult",
    "RowStoreClient",
    "RowStoreError",
    "configure_row_store",
    "get_row_store",
]
