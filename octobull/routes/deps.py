from __future__ import annotations

from typing import Any

from fastapi import Depends, Header, HTTPException

from octobull.application import get_session_registry
from octobull.domain import TicketAggregate, User


def bearer_token(authorization: str | None = Header(default=None)) -> str:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="not authenticated")
    return token.strip()


def current_user(token: str = Depends(bearer_token)) -> User:
    user = get_session_registry().user_for(token)
    if user is None:
        raise HTTPException(status_code=401, detail="session expired")
    return user


def require_admin(user: User = Depends(current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="admin access required")
    return user


def serialise_ticket(ticket: TicketAggregate) -> dict[str, Any]:
    return {
        "id": ticket.ticket_id,
        "date": ticket.submitted_at.isoformat(),
        "store": ticket.store,
        "email": ticket.submitter_email,
        "status": ticket.status.value,
        "itemCount": len(ticket.items),
        "items": [
            {
                "procode": item.item_code,
                "prodesc": item.item_description,
                "qty": item.quantity,
                "reason": item.reason,
                "status": item.status.value,
            }
            for item in ticket.items
        ],
    }


def serialise_user(user: User) -> dict[str, str]:
    return {
        "role": user.role,
        "storeCode": user.store_code,
        "storeName": user.store_name,
        "email": user.email,
    }
