"""Application services."""

from .dashboards import AdminDashboard, DashboardState, SubmitterDashboard
from .errors import (
    AuthenticationFailed,
    DashboardError,
    DraftValidationError,
    LoadFailed,
    RefreshFailed,
    StatusUpdateFailed,
    SubmissionFailed,
    TicketNotFound,
)
from .sessions import SessionRegistry, get_session_registry, reset_session_state

__all__ = [
    "AdminDashboard",
    "DashboardState",
    "SubmitterDashboard",
    "AuthenticationFailed",
    "DashboardError",
    "DraftValidationError",
    "LoadFailed",
    "RefreshFailed",
    "StatusUpdateFailed",
    "SubmissionFailed",
    "TicketNotFound",
    "SessionRegistry",
    "get_session_registry",
    "reset_session_state",
]
