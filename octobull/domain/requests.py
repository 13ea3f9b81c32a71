"""Domain entities for special item requests."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Literal


class Status(str, Enum):
    PENDING = "Pending"
    ONGOING = "Ongoing"
    COMPLETED = "Completed"
    REJECTED = "Rejected"

    @classmethod
    def coerce(cls, value: object) -> "Status | None":
        """Return the matching member, or ``None`` for anything unknown."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return None


class GroupingVariant(str, Enum):
    """Which dashboard a grouping is built for.

    The admin view reports the status of the last row seen for a ticket, the
    submitter view keeps the status of the first row.
    """

    ADMIN = "admin"
    SUBMITTER = "submitter"


@dataclass(frozen=True, slots=True)
class RowRecord:
    """One persisted item line of one ticket."""

    ticket_id: str
    submitted_at: datetime
    store: str
    item_code: str
    item_description: str
    quantity: int
    reason: str
    status: Status
    submitter_email: str
    row_handle: int


@dataclass(frozen=True, slots=True)
class TicketAggregate:
    """Ticket-level view derived from the rows sharing a ticket id."""

    ticket_id: str
    submitted_at: datetime
    store: str
    submitter_email: str
    status: Status
    items: tuple[RowRecord, ...]


@dataclass(frozen=True, slots=True)
class RowUpdateCommand:
    row_handle: int
    new_status: Status


@dataclass(frozen=True, slots=True)
class FanOutResult:
    """Aggregated outcome of a ticket-wide status write."""

    total: int
    succeeded: int
    failed: int

    @property
    def ok(self) -> bool:
        return self.failed == 0


@dataclass(frozen=True, slots=True)
class MasterItem:
    code: str
    description: str


@dataclass(frozen=True, slots=True)
class DraftRequestItem:
    """An item line a submitter is assembling before submission."""

    code: str
    name: str
    quantity: str
    reason: str = ""


@dataclass(frozen=True, slots=True)
class User:
    role: Literal["user", "admin"]
    store_code: str
    store_name: str
    email: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
