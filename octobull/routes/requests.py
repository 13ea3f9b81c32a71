"""Submitter-facing endpoints: tracking, item lookup, draft and submission."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from octobull.application import (
    DraftValidationError,
    LoadFailed,
    SubmissionFailed,
    SubmitterDashboard,
    get_session_registry,
)
from octobull.domain import DraftRequestItem, User
from octobull.routes.deps import current_user, serialise_ticket

router = APIRouter(tags=["requests"])


def _dashboard(user: User = Depends(current_user)) -> SubmitterDashboard:
    return get_session_registry().submitter_dashboard(user)


def _serialise_draft(items: tuple[DraftRequestItem, ...]) -> list[dict[str, str]]:
    return [{"code": item.code, "name": item.name, "qty": item.quantity, "reason": item.reason} for item in items]


def _tickets_response(dashboard: SubmitterDashboard, notice: str | None = None) -> dict:
    response: dict = {"items": [serialise_ticket(ticket) for ticket in dashboard.state.tickets]}
    if notice:
        response["notice"] = notice
        response["stale"] = True
    return response


@router.get("/requests")
async def list_my_requests(dashboard: SubmitterDashboard = Depends(_dashboard)) -> dict:
    try:
        await dashboard.reload()
    except LoadFailed as exc:
        return _tickets_response(dashboard, exc.notice)
    return _tickets_response(dashboard)


@router.get("/items")
async def suggest_items(
    q: str | None = Query(default=None),
    dashboard: SubmitterDashboard = Depends(_dashboard),
) -> dict:
    if not dashboard.master_items:
        try:
            await dashboard.load_master_items()
        except LoadFailed as exc:
            raise HTTPException(status_code=502, detail=exc.notice) from exc
    matches = dashboard.suggest_items(q)
    return {"items": [{"code": item.code, "desc": item.description} for item in matches]}


@router.get("/requests/draft")
async def get_draft(dashboard: SubmitterDashboard = Depends(_dashboard)) -> dict:
    return {"items": _serialise_draft(dashboard.draft_items), "submitting": dashboard.submitting}


@router.post("/requests/draft")
async def add_draft_item(payload: dict, dashboard: SubmitterDashboard = Depends(_dashboard)) -> dict:
    try:
        items = dashboard.add_draft_item(
            str(payload.get("code") or ""),
            str(payload.get("name") or ""),
            str(payload.get("qty") or ""),
            str(payload.get("reason") or ""),
        )
    except DraftValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.notice) from exc
    return {"items": _serialise_draft(items)}


@router.delete("/requests/draft/{index}")
async def remove_draft_item(index: int, dashboard: SubmitterDashboard = Depends(_dashboard)) -> dict:
    try:
        items = dashboard.remove_draft_item(index)
    except DraftValidationError as exc:
        raise HTTPException(status_code=404, detail=exc.notice) from exc
    return {"items": _serialise_draft(items)}


@router.post("/requests/submit")
async def submit_request(dashboard: SubmitterDashboard = Depends(_dashboard)) -> dict:
    if dashboard.submitting:
        raise HTTPException(status_code=409, detail="A submission is already in progress.")
    try:
        message = await dashboard.submit()
    except DraftValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.notice) from exc
    except SubmissionFailed as exc:
        raise HTTPException(status_code=502, detail=exc.notice) from exc

    try:
        await dashboard.reload()
    except LoadFailed as exc:
        return {"message": message, **_tickets_response(dashboard, exc.notice)}
    return {"message": message, **_tickets_response(dashboard)}
