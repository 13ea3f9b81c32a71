"""Admin endpoints over every ticket."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from octobull.application import (
    AdminDashboard,
    LoadFailed,
    RefreshFailed,
    StatusUpdateFailed,
    TicketNotFound,
    get_session_registry,
)
from octobull.domain import Status
from octobull.routes.deps import require_admin, serialise_ticket

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _dashboard() -> AdminDashboard:
    return get_session_registry().admin_dashboard()


def _status_filter(value: str | None) -> str | None:
    if value and Status.coerce(value) is None:
        raise HTTPException(status_code=400, detail=f"unknown status: {value}")
    return value or None


@router.get("/tickets")
async def list_tickets(
    status: str | None = Query(default=None),
    q: str | None = Query(default=None),
    dashboard: AdminDashboard = Depends(_dashboard),
) -> dict:
    status_filter = _status_filter(status)
    notice: str | None = None
    try:
        await dashboard.reload()
    except LoadFailed as exc:
        notice = exc.notice

    tickets = dashboard.view(status_filter, q)
    response: dict = {"items": [serialise_ticket(ticket) for ticket in tickets]}
    if notice:
        response["notice"] = notice
        response["stale"] = True
    return response


@router.get("/tickets/{ticket_id}")
async def get_ticket(ticket_id: str, dashboard: AdminDashboard = Depends(_dashboard)) -> dict:
    try:
        ticket = await dashboard.find_ticket(ticket_id)
    except TicketNotFound as exc:
        raise HTTPException(status_code=404, detail=exc.notice) from exc
    except LoadFailed as exc:
        raise HTTPException(status_code=502, detail=exc.notice) from exc
    return serialise_ticket(ticket)


@router.post("/tickets/{ticket_id}/status")
async def change_ticket_status(ticket_id: str, payload: dict, dashboard: AdminDashboard = Depends(_dashboard)) -> dict:
    new_status = Status.coerce(payload.get("status"))
    if new_status is None:
        raise HTTPException(status_code=400, detail="status must be one of Pending, Ongoing, Completed, Rejected")

    try:
        result = await dashboard.change_status(ticket_id, new_status)
    except TicketNotFound as exc:
        raise HTTPException(status_code=404, detail=exc.notice) from exc
    except StatusUpdateFailed as exc:
        raise HTTPException(status_code=502, detail=exc.notice) from exc
    except RefreshFailed as exc:
        # rows were written; only the refresh failed
        return {
            "ticket_id": ticket_id,
            "status": new_status.value,
            "rows_updated": exc.result.succeeded,
            "notice": exc.notice,
            "stale": True,
        }
    except LoadFailed as exc:
        raise HTTPException(status_code=502, detail=exc.notice) from exc
    return {"ticket_id": ticket_id, "status": new_status.value, "rows_updated": result.succeeded}


@router.get("/summary")
async def get_summary(
    status: str | None = Query(default=None),
    q: str | None = Query(default=None),
    dashboard: AdminDashboard = Depends(_dashboard),
) -> dict:
    status_filter = _status_filter(status)
    if dashboard.state.loaded_at is None:
        try:
            await dashboard.reload()
        except LoadFailed as exc:
            raise HTTPException(status_code=502, detail=exc.notice) from exc
    summary = await dashboard.summarise(status_filter, q)
    return {"summary": summary, "ticket_count": len(dashboard.view(status_filter, q))}
