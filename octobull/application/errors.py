"""Failures raised by the dashboard controllers.

Each carries the notice shown to the user.
"""
from __future__ import annotations

from octobull.domain import FanOutResult


class DashboardError(Exception):
    def __init__(self, notice: str) -> None:
        super().__init__(notice)
        self.notice = notice


class LoadFailed(DashboardError):
    """A reload failed; the previous snapshot is still in place."""


class RefreshFailed(LoadFailed):
    """Every row was written but the reload that followed failed."""

    def __init__(self, result: FanOutResult, notice: str) -> None:
        super().__init__(notice)
        self.result = result


class StatusUpdateFailed(DashboardError):
    def __init__(self, result: FanOutResult, notice: str = "Failed to update status.") -> None:
        super().__init__(notice)
        self.result = result


class SubmissionFailed(DashboardError):
    pass


class DraftValidationError(DashboardError):
    pass


class TicketNotFound(DashboardError):
    def __init__(self, ticket_id: str) -> None:
        super().__init__(f"Ticket {ticket_id} not found.")
        self.ticket_id = ticket_id


class AuthenticationFailed(DashboardError):
    pass
