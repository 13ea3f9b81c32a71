"""Dashboard controllers orchestrating the row store and the pure engines."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from octobull.application.errors import (
    DraftValidationError,
    LoadFailed,
    RefreshFailed,
    StatusUpdateFailed,
    SubmissionFailed,
    TicketNotFound,
)
from octobull.core.filtering import filter_tickets, search_master_items
from octobull.core.grouping import group_rows, rows_for_submitter
from octobull.core.status import apply_status, summarise_fan_out
from octobull.core.summary import EMPTY_SUMMARY_MESSAGE, SUMMARY_FAILURE_MESSAGE, build_summary_prompt
from octobull.domain import (
    DraftRequestItem,
    FanOutResult,
    GroupingVariant,
    MasterItem,
    Status,
    TicketAggregate,
    User,
)
from octobull.infrastructure import RowStoreClient, RowStoreError, Summarizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DashboardState:
    """Snapshot of the last successful reload."""

    tickets: tuple[TicketAggregate, ...] = ()
    loaded_at: datetime | None = None


class AdminDashboard:
    """Back office view over every ticket."""

    def __init__(self, row_store: RowStoreClient, summarizer: Summarizer) -> None:
        self._row_store = row_store
        self._summarizer = summarizer
        self._state = DashboardState()

    @property
    def state(self) -> DashboardState:
        return self._state

    async def reload(self) -> DashboardState:
        try:
            rows = await self._row_store.fetch_all_rows()
        except RowStoreError as exc:
            logger.warning("Failed to load admin data: %s", exc)
            raise LoadFailed("Failed to load admin data.") from exc
        tickets = group_rows(rows, GroupingVariant.ADMIN)
        self._state = DashboardState(tickets=tuple(tickets), loaded_at=datetime.now(timezone.utc))
        logger.debug("Admin dashboard loaded %s tickets from %s rows", len(tickets), len(rows))
        return self._state

    def view(self, status_filter: Status | str | None = None, search_text: str | None = None) -> list[TicketAggregate]:
        return filter_tickets(self._state.tickets, status_filter, search_text)

    def _lookup(self, ticket_id: str) -> TicketAggregate | None:
        return next((ticket for ticket in self._state.tickets if ticket.ticket_id == ticket_id), None)

    async def find_ticket(self, ticket_id: str) -> TicketAggregate:
        ticket = self._lookup(ticket_id)
        if ticket is None:
            await self.reload()
            ticket = self._lookup(ticket_id)
        if ticket is None:
            raise TicketNotFound(ticket_id)
        return ticket

    async def change_status(self, ticket_id: str, new_status: Status | str) -> FanOutResult:
        """Write ``new_status`` to every row of the ticket, then reload.

        Writes run concurrently and are not rolled back: when some fail the
        rows already written keep the new status.
        """

        ticket = await self.find_ticket(ticket_id)
        commands = apply_status(ticket, new_status)
        outcomes = await asyncio.gather(
            *(self._row_store.update_row_status(command.row_handle, command.new_status) for command in commands),
            return_exceptions=True,
        )
        result = summarise_fan_out(outcomes)
        if not result.ok:
            logger.warning(
                "Status update for ticket %s failed on %s of %s rows",
                ticket_id,
                result.failed,
                result.total,
            )
            raise StatusUpdateFailed(result)

        logger.info("Ticket %s updated across %s rows", ticket_id, result.total)
        try:
            await self.reload()
        except LoadFailed as exc:
            raise RefreshFailed(result, exc.notice) from exc
        return result

    async def summarise(self, status_filter: Status | str | None = None, search_text: str | None = None) -> str:
        tickets = self.view(status_filter, search_text)
        if not tickets:
            return EMPTY_SUMMARY_MESSAGE
        try:
            return await self._summarizer.generate(build_summary_prompt(tickets))
        except Exception:
            logger.exception("AI summary generation failed")
            return SUMMARY_FAILURE_MESSAGE


class SubmitterDashboard:
    """Store-side view: the user's own tickets and a draft request."""

    MAX_SUGGESTIONS = 10

    def __init__(self, user: User, row_store: RowStoreClient) -> None:
        self._user = user
        self._row_store = row_store
        self._state = DashboardState()
        self._master_items: tuple[MasterItem, ...] = ()
        self._draft: tuple[DraftRequestItem, ...] = ()
        self._submitting = False

    @property
    def user(self) -> User:
        return self._user

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def submitting(self) -> bool:
        return self._submitting

    @property
    def draft_items(self) -> tuple[DraftRequestItem, ...]:
        return self._draft

    @property
    def master_items(self) -> tuple[MasterItem, ...]:
        return self._master_items

    # ------------------------------------------------------------------
    # loading
    # ------------------------------------------------------------------
    async def reload(self) -> DashboardState:
        try:
            rows = await self._row_store.fetch_all_rows()
        except RowStoreError as exc:
            logger.warning("Failed to load tracking data for %s: %s", self._user.email, exc)
            raise LoadFailed("Failed to load tracking data.") from exc
        own_rows = rows_for_submitter(rows, self._user.email)
        tickets = group_rows(own_rows, GroupingVariant.SUBMITTER)
        self._state = DashboardState(tickets=tuple(tickets), loaded_at=datetime.now(timezone.utc))
        return self._state

    async def load_master_items(self) -> tuple[MasterItem, ...]:
        try:
            items = await self._row_store.fetch_master_items()
        except RowStoreError as exc:
            logger.warning("Failed to load master data: %s", exc)
            raise LoadFailed("Failed to load item master data. Please refresh.") from exc
        self._master_items = tuple(items)
        return self._master_items

    def suggest_items(self, query: str | None) -> list[MasterItem]:
        return search_master_items(self._master_items, query, limit=self.MAX_SUGGESTIONS)

    # ------------------------------------------------------------------
    # draft handling
    # ------------------------------------------------------------------
    def add_draft_item(self, code: str, name: str, quantity: str, reason: str = "") -> tuple[DraftRequestItem, ...]:
        code = (code or "").strip()
        quantity = (quantity or "").strip()
        if not code or not quantity:
            raise DraftValidationError("Please complete the item details.")
        try:
            count = int(quantity)
        except ValueError:
            count = -1
        if count < 0:
            raise DraftValidationError("Quantity must be a whole number of 0 or more.")
        quantity = str(count)
        item = DraftRequestItem(code=code, name=(name or "").strip(), quantity=quantity, reason=reason or "")
        self._draft = (*self._draft, item)
        return self._draft

    def remove_draft_item(self, index: int) -> tuple[DraftRequestItem, ...]:
        if not 0 <= index < len(self._draft):
            raise DraftValidationError(f"No draft item at position {index}.")
        self._draft = self._draft[:index] + self._draft[index + 1 :]
        return self._draft

    def clear_draft(self) -> None:
        self._draft = ()

    async def submit(self) -> str:
        """Send the draft as one new ticket and return the store's message.

        The draft is cleared only after the store accepts it.
        """

        if not self._draft:
            raise DraftValidationError("No items in the request.")
        items = self._draft
        self._submitting = True
        try:
            message = await self._row_store.submit_new_ticket(self._user.store_name, self._user.email, items)
        except RowStoreError as exc:
            logger.warning("Failed to submit request for %s: %s", self._user.email, exc)
            raise SubmissionFailed("Failed to submit request.") from exc
        finally:
            self._submitting = False

        logger.info("Submitted %s item(s) for store %s", len(items), self._user.store_name)
        self._draft = ()
        return message

