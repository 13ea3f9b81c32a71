from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from octobull.domain import RowRecord, Status, TicketAggregate

BASE_TIME = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def make_row(
    ticket_id: str = "T1",
    *,
    row_handle: int = 2,
    minutes: int = 0,
    store: str = "Alpha",
    code: str = "P-001",
    description: str = "Widget A",
    quantity: int = 1,
    reason: str = "",
    status: Status = Status.PENDING,
    email: str = "alpha@example.com",
) -> RowRecord:
    return RowRecord(
        ticket_id=ticket_id,
        submitted_at=BASE_TIME + timedelta(minutes=minutes),
        store=store,
        item_code=code,
        item_description=description,
        quantity=quantity,
        reason=reason,
        status=status,
        submitter_email=email,
        row_handle=row_handle,
    )


def make_ticket(ticket_id: str, store: str, status: Status, descriptions: list[str], *, minutes: int = 0) -> TicketAggregate:
    items = tuple(
        make_row(ticket_id, row_handle=index + 2, minutes=minutes, store=store, description=description, status=status)
        for index, description in enumerate(descriptions)
    )
    return TicketAggregate(
        ticket_id=ticket_id,
        submitted_at=BASE_TIME + timedelta(minutes=minutes),
        store=store,
        submitter_email="ops@example.com",
        status=status,
        items=items,
    )


def raw_row(ticket_id: str, row: int, **overrides) -> dict:
    payload = {
        "id": ticket_id,
        "date": "2024-05-01T09:00:00.000Z",
        "store": "Alpha",
        "procode": "P-001",
        "prodesc": "Widget A",
        "qty": 1,
        "reason": "",
        "status": "Pending",
        "email": "alpha@example.com",
        "row": row,
    }
    payload.update(overrides)
    return payload
