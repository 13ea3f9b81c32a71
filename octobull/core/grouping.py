"""Grouping of flat row records into ticket aggregates."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from octobull.core.status import derive_status
from octobull.domain import GroupingVariant, RowRecord, Status, TicketAggregate


@dataclass(slots=True)
class _TicketBuilder:
    ticket_id: str
    submitted_at: datetime
    store: str
    submitter_email: str
    status: Status
    items: list[RowRecord] = field(default_factory=list)

    def freeze(self) -> TicketAggregate:
        return TicketAggregate(
            ticket_id=self.ticket_id,
            submitted_at=self.submitted_at,
            store=self.store,
            submitter_email=self.submitter_email,
            status=self.status,
            items=tuple(self.items),
        )


def group_rows(
    rows: Iterable[RowRecord],
    variant: GroupingVariant = GroupingVariant.ADMIN,
) -> list[TicketAggregate]:
    """Build one aggregate per distinct ticket id.

    Ordering contract:

    * a ticket's ``submitted_at``, ``store`` and ``submitter_email`` come from
      the first row seen for it; ``status`` follows :func:`derive_status`;
    * ``items`` keep the order in which rows were encountered;
    * the result is sorted by ``submitted_at`` descending, and tickets with
      equal timestamps keep the order of their first row.

    Rows without a ticket id are skipped.
    """

    builders: list[_TicketBuilder] = []
    index: dict[str, int] = {}
    for row in rows:
        if not row.ticket_id:
            continue
        position = index.get(row.ticket_id)
        if position is None:
            index[row.ticket_id] = len(builders)
            builder = _TicketBuilder(
                ticket_id=row.ticket_id,
                submitted_at=row.submitted_at,
                store=row.store,
                submitter_email=row.submitter_email,
                status=row.status,
            )
            builders.append(builder)
        else:
            builder = builders[position]
        builder.items.append(row)
        builder.status = derive_status(builder.status, row.status, variant)

    tickets = [builder.freeze() for builder in builders]
    # list.sort is stable, so encounter order survives for equal timestamps
    tickets.sort(key=lambda ticket: ticket.submitted_at, reverse=True)
    return tickets


def rows_for_submitter(rows: Iterable[RowRecord], email: str) -> list[RowRecord]:
    return [row for row in rows if row.submitter_email == email]
