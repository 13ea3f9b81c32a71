from __future__ import annotations

from typing import Iterable, Sequence

from octobull.domain import MasterItem, Status, TicketAggregate


def _matches_text(ticket: TicketAggregate, needle: str) -> bool:
    return (
        needle in ticket.ticket_id.lower()
        or needle in ticket.store.lower()
        or needle in ticket.status.value.lower()
        or any(needle in item.item_description.lower() for item in ticket.items)
    )


def filter_tickets(
    tickets: Sequence[TicketAggregate],
    status_filter: Status | str | None = None,
    search_text: str | None = None,
) -> list[TicketAggregate]:
    """Return the visible subset of ``tickets``, preserving their order.

    The status filter is an exact, case-sensitive match on the status value.
    The search text is a case-insensitive substring match against the ticket
    id, store, status and every item description. Empty filters match all.
    """

    status_value = status_filter.value if isinstance(status_filter, Status) else (status_filter or "")
    needle = (search_text or "").lower()

    visible: list[TicketAggregate] = []
    for ticket in tickets:
        if status_value and ticket.status.value != status_value:
            continue
        if needle and not _matches_text(ticket, needle):
            continue
        visible.append(ticket)
    return visible


def search_master_items(items: Iterable[MasterItem], query: str | None, limit: int = 10) -> list[MasterItem]:
    """Autocomplete lookup on item descriptions."""

    if not query:
        return []
    needle = query.lower()
    matches: list[MasterItem] = []
    for item in items:
        if needle in item.description.lower():
            matches.append(item)
            if len(matches) >= limit:
                break
    return matches
