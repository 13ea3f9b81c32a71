from __future__ import annotations

import pytest
from conftest import make_ticket

from octobull.core.status import apply_status, summarise_fan_out
from octobull.domain import FanOutResult, RowUpdateCommand, Status


def test_apply_status_fans_out_to_every_row():
    ticket = make_ticket("T1", "Alpha", Status.PENDING, ["A", "B", "C"])
    commands = apply_status(ticket, Status.ONGOING)

    assert len(commands) == 3
    assert len({command.row_handle for command in commands}) == 3
    assert {command.new_status for command in commands} == {Status.ONGOING}
    assert [command.row_handle for command in commands] == [item.row_handle for item in ticket.items]


def test_apply_status_reissues_writes_for_same_status():
    ticket = make_ticket("T1", "Alpha", Status.PENDING, ["A", "B"])
    assert apply_status(ticket, "Pending") == [
        RowUpdateCommand(row_handle=2, new_status=Status.PENDING),
        RowUpdateCommand(row_handle=3, new_status=Status.PENDING),
    ]


def test_apply_status_rejects_unknown_value():
    ticket = make_ticket("T1", "Alpha", Status.PENDING, ["A"])
    with pytest.raises(ValueError):
        apply_status(ticket, "Archived")


def test_summarise_fan_out_counts_failures():
    result = summarise_fan_out([{"status": "success"}, RuntimeError("boom"), None])
    assert result == FanOutResult(total=3, succeeded=2, failed=1)
    assert not result.ok
    assert summarise_fan_out([]).ok
