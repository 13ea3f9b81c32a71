"""Wire shapes exchanged with the row store."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from octobull.domain import MasterItem, RowRecord, Status

logger = logging.getLogger(__name__)


class RowPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    date: datetime
    store: str = ""
    procode: str = ""
    prodesc: str = ""
    qty: int = Field(ge=0)
    reason: str = ""
    status: Status
    email: str = ""
    row: int

    @field_validator("id", mode="before")
    @classmethod
    def _require_ticket_id(cls, value: Any) -> str:
        text = "" if value is None else str(value).strip()
        if not text:
            raise ValueError("ticket id is empty")
        return text

    @field_validator("store", "procode", "prodesc", "reason", "email", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_record(self) -> RowRecord:
        return RowRecord(
            ticket_id=self.id,
            submitted_at=self.date,
            store=self.store,
            item_code=self.procode,
            item_description=self.prodesc,
            quantity=self.qty,
            reason=self.reason,
            status=self.status,
            submitter_email=self.email,
            row_handle=self.row,
        )


class MasterItemPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: str
    desc: str = ""

    @field_validator("code", "desc", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str:
        return "" if value is None else str(value)

    def to_item(self) -> MasterItem:
        return MasterItem(code=self.code, description=self.desc)


class LoginPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    status: str
    message: str = ""
    role: str = "user"
    store_code: str = Field(default="", alias="storeCode")
    store_name: str = Field(default="", alias="storeName")
    email: str = ""


class MessagePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str = ""


def parse_rows(payload: Any) -> list[RowRecord]:
    """Convert the ``data`` list returned by the store into row records.

    Rows that fail validation are dropped; this never raises.
    """

    if not isinstance(payload, list):
        return []
    records: list[RowRecord] = []
    for index, raw in enumerate(payload):
        if not isinstance(raw, dict):
            logger.debug("Dropping non-object row at position %s", index)
            continue
        try:
            records.append(RowPayload.model_validate(raw).to_record())
        except ValidationError as exc:
            logger.debug("Dropping malformed row at position %s: %s", index, exc.error_count())
    return records


def parse_master_items(payload: Iterable[Any] | None) -> list[MasterItem]:
    items: list[MasterItem] = []
    for raw in payload or []:
        if not isinstance(raw, dict):
            continue
        try:
            items.append(MasterItemPayload.model_validate(raw).to_item())
        except ValidationError:
            continue
    return items
