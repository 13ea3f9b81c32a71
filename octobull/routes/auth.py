from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from octobull.application import AuthenticationFailed, get_session_registry
from octobull.routes.deps import bearer_token, serialise_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(payload: dict) -> dict:
    registry = get_session_registry()
    try:
        token, user = await registry.login(
            str(payload.get("storeCode") or "").strip(),
            str(payload.get("password") or ""),
        )
    except AuthenticationFailed as exc:
        raise HTTPException(status_code=401, detail=exc.notice) from exc
    return {"token": token, "user": serialise_user(user)}


@router.post("/register")
async def register(payload: dict) -> dict:
    registry = get_session_registry()
    try:
        message = await registry.register(
            str(payload.get("storeCode") or "").strip(),
            str(payload.get("storeName") or "").strip(),
            str(payload.get("password") or ""),
            str(payload.get("email") or "").strip(),
        )
    except AuthenticationFailed as exc:
        raise HTTPException(status_code=400, detail=exc.notice) from exc
    return {"message": message}


@router.post("/logout")
async def logout(token: str = Depends(bearer_token)) -> dict:
    get_session_registry().logout(token)
    return {"status": "ok"}
