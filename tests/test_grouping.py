from __future__ import annotations

from collections import Counter

from conftest import make_row

from octobull.core.grouping import group_rows, rows_for_submitter
from octobull.core.schema import parse_rows
from octobull.domain import GroupingVariant, Status


def _interleaved_rows():
    return [
        make_row("T1", row_handle=2, minutes=0),
        make_row("T2", row_handle=3, minutes=10, store="Beta"),
        make_row("", row_handle=4, minutes=20),
        make_row("T1", row_handle=5, minutes=30),
        make_row("T3", row_handle=6, minutes=5),
        make_row("T2", row_handle=7, minutes=40, store="Gamma"),
    ]


def test_every_row_with_ticket_id_lands_in_exactly_one_ticket():
    rows = _interleaved_rows()
    tickets = group_rows(rows)

    grouped = Counter(item.row_handle for ticket in tickets for item in ticket.items)
    expected = Counter(row.row_handle for row in rows if row.ticket_id)
    assert grouped == expected
    assert all(ticket.items for ticket in tickets)
    assert {ticket.ticket_id for ticket in tickets} == {"T1", "T2", "T3"}


def test_items_keep_encounter_order_and_first_row_fields():
    tickets = {ticket.ticket_id: ticket for ticket in group_rows(_interleaved_rows())}

    assert [item.row_handle for item in tickets["T1"].items] == [2, 5]
    assert [item.row_handle for item in tickets["T2"].items] == [3, 7]
    # fields other than status are fixed by the first row
    assert tickets["T2"].store == "Beta"
    assert tickets["T2"].submitted_at == tickets["T2"].items[0].submitted_at


def test_tickets_sorted_newest_first():
    tickets = group_rows(_interleaved_rows())
    assert [ticket.ticket_id for ticket in tickets] == ["T2", "T3", "T1"]


def test_equal_timestamps_keep_encounter_order():
    rows = [make_row("B", row_handle=2), make_row("A", row_handle=3)]
    assert [ticket.ticket_id for ticket in group_rows(rows)] == ["B", "A"]
    assert [ticket.ticket_id for ticket in group_rows(list(reversed(rows)))] == ["A", "B"]


def test_grouping_is_pure():
    rows = _interleaved_rows()
    assert group_rows(rows) == group_rows(rows)
    assert group_rows(rows, GroupingVariant.SUBMITTER) == group_rows(rows, GroupingVariant.SUBMITTER)


def test_rows_without_ticket_id_are_dropped():
    rows = [make_row("", row_handle=2), make_row("T1", row_handle=3)]
    tickets = group_rows(rows)
    assert [ticket.ticket_id for ticket in tickets] == ["T1"]
    assert len(tickets[0].items) == 1


def test_admin_variant_reports_last_row_status():
    rows = [
        make_row("T1", row_handle=2, status=Status.PENDING),
        make_row("T1", row_handle=3, status=Status.COMPLETED),
    ]
    (ticket,) = group_rows(rows, GroupingVariant.ADMIN)
    assert ticket.status is Status.COMPLETED


def test_submitter_variant_reports_first_row_status():
    rows = [
        make_row("T1", row_handle=2, status=Status.PENDING),
        make_row("T1", row_handle=3, status=Status.COMPLETED),
    ]
    (ticket,) = group_rows(rows, GroupingVariant.SUBMITTER)
    assert ticket.status is Status.PENDING


def test_empty_input_groups_to_nothing():
    assert group_rows([]) == []


def test_rows_for_submitter_matches_email_exactly():
    rows = [
        make_row("T1", row_handle=2, email="a@example.com"),
        make_row("T2", row_handle=3, email="b@example.com"),
        make_row("T3", row_handle=4, email="A@example.com"),
    ]
    assert [row.ticket_id for row in rows_for_submitter(rows, "a@example.com")] == ["T1"]


def test_parse_rows_drops_malformed_rows():
    payload = [
        {"id": "T1", "date": "2024-05-01T09:00:00Z", "store": "Alpha", "prodesc": "Widget", "qty": 2, "status": "Pending", "row": 2},
        {"id": "", "date": "2024-05-01T09:00:00Z", "qty": 1, "status": "Pending", "row": 3},
        {"date": "2024-05-01T09:00:00Z", "qty": 1, "status": "Pending", "row": 4},
        {"id": "T2", "date": "not a date", "qty": 1, "status": "Pending", "row": 5},
        {"id": "T3", "date": "2024-05-01T09:00:00Z", "qty": 1, "status": "Lost", "row": 6},
        {"id": "T4", "date": "2024-05-01T09:00:00Z", "qty": -1, "status": "Pending", "row": 7},
        {"id": "T5", "date": "2024-05-01T09:00:00Z", "qty": 1, "status": "Pending"},
        "garbage",
    ]
    records = parse_rows(payload)
    assert [record.ticket_id for record in records] == ["T1"]
    assert records[0].quantity == 2
    assert records[0].row_handle == 2
    assert records[0].submitted_at.tzinfo is not None


def test_parse_rows_tolerates_missing_payload():
    assert parse_rows(None) == []
    assert parse_rows({"data": []}) == []
