"""Domain layer definitions."""

from .requests import (
    DraftRequestItem,
    FanOutResult,
    GroupingVariant,
    MasterItem,
    RowRecord,
    RowUpdateCommand,
    Status,
    TicketAggregate,
    User,
)

__all__ = [
    "DraftRequestItem",
    "FanOutResult",
    "GroupingVariant",
    "MasterItem",
    "RowRecord",
    "RowUpdateCommand",
    "Status",
    "TicketAggregate",
    "User",
]
