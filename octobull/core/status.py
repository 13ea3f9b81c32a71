"""Status reconciliation between ticket aggregates and their rows."""
from __future__ import annotations

from typing import Iterable

from octobull.domain import FanOutResult, GroupingVariant, RowUpdateCommand, Status, TicketAggregate


def derive_status(current: Status, incoming: Status, variant: GroupingVariant) -> Status:
    """Fold one more row's status into a ticket's displayed status.

    ``ADMIN`` reports the last row encountered, ``SUBMITTER`` keeps the first.
    """

    if variant is GroupingVariant.ADMIN:
        return incoming
    return current


def apply_status(ticket: TicketAggregate, new_status: Status | str) -> list[RowUpdateCommand]:
    """Return one update per row of ``ticket``, in item order.

    Re-applying the current status still produces a full set of writes.
    """

    status = Status.coerce(new_status)
    if status is None:
        raise ValueError(f"unknown status: {new_status!r}")
    return [RowUpdateCommand(row_handle=item.row_handle, new_status=status) for item in ticket.items]


def summarise_fan_out(outcomes: Iterable[object]) -> FanOutResult:
    """Count successes and failures; any ``BaseException`` outcome is a failure."""

    total = 0
    failed = 0
    for outcome in outcomes:
        total += 1
        if isinstance(outcome, BaseException):
            failed += 1
    return FanOutResult(total=total, succeeded=total - failed, failed=failed)
