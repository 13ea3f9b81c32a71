"""Projection of tickets handed to the remote summarizer."""
from __future__ import annotations

import json
from typing import Any, Sequence

from octobull.domain import TicketAggregate

EMPTY_SUMMARY_MESSAGE = "There are no requests in the current filter to summarize."
SUMMARY_FAILURE_MESSAGE = "Sorry, the AI summary could not be generated at this time."

_PROMPT_TEMPLATE = """\
You are an expert data analyst for a retail company. Below is a JSON array of special requests from various stores.
Please provide a concise summary. Your summary should be in plain text format and include:
- A brief opening sentence.
- The total number of unique request tickets.
- A breakdown of requests by status (Pending, Ongoing, Completed, Rejected).
- The top 3 most frequently requested items across all tickets.
- The top 3 stores with the most request tickets.
- One or two other notable insights or patterns you observe (e.g., common reasons, high quantity items, etc.).

Keep the summary clear, professional, and easy to read.

JSON Data: {payload}
"""


def sanitise_tickets(tickets: Sequence[TicketAggregate]) -> list[dict[str, Any]]:
    """Drop submitter emails and reasons; keep what the summary needs."""

    return [
        {
            "id": ticket.ticket_id,
            "date": ticket.submitted_at.isoformat(),
            "store": ticket.store,
            "status": ticket.status.value,
            "itemCount": len(ticket.items),
            "items": [{"prodesc": item.item_description, "qty": item.quantity} for item in ticket.items],
        }
        for ticket in tickets
    ]


def build_summary_prompt(tickets: Sequence[TicketAggregate]) -> str:
    payload = json.dumps(sanitise_tickets(tickets), indent=2, ensure_ascii=False)
    return _PROMPT_TEMPLATE.format(payload=payload)
