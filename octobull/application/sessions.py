"""Login sessions and per-user dashboard controllers."""
from __future__ import annotations

import logging
import secrets

from octobull.application.dashboards import AdminDashboard, SubmitterDashboard
from octobull.application.errors import AuthenticationFailed
from octobull.domain import User
from octobull.infrastructure import RowStoreClient, RowStoreError, Summarizer, get_row_store, get_summarizer

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Maps opaque bearer tokens to users and holds their dashboards."""

    def __init__(self, row_store: RowStoreClient, summarizer: Summarizer) -> None:
        self._row_store = row_store
        self._summarizer = summarizer
        self._sessions: dict[str, User] = {}
        self._submitters: dict[tuple[str, str], SubmitterDashboard] = {}
        self._admin: AdminDashboard | None = None

    # ------------------------------------------------------------------
    # authentication
    # ------------------------------------------------------------------
    async def login(self, store_code: str, password: str) -> tuple[str, User]:
        if not store_code or not password:
            raise AuthenticationFailed("Store Code and Password are required.")
        try:
            result = await self._row_store.login(store_code, password)
        except RowStoreError as exc:
            logger.warning("Login call failed for %s: %s", store_code, exc)
            raise AuthenticationFailed("An unexpected error occurred.") from exc
        if not result.ok:
            raise AuthenticationFailed(result.message or "Invalid store code or password.")

        role = "admin" if result.role == "admin" else "user"
        user = User(role=role, store_code=result.store_code, store_name=result.store_name, email=result.email)
        token = secrets.token_urlsafe(24)
        self._sessions[token] = user
        logger.info("Store %s logged in as %s", user.store_code, user.role)
        return token, user

    async def register(self, store_code: str, store_name: str, password: str, email: str) -> str:
        if not (store_code and store_name and password and email):
            raise AuthenticationFailed("All fields are required for registration.")
        try:
            return await self._row_store.register(store_code, store_name, password, email)
        except RowStoreError as exc:
            logger.warning("Registration call failed for %s: %s", store_code, exc)
            raise AuthenticationFailed("An unexpected error occurred during registration.") from exc

    def logout(self, token: str) -> None:
        """End a session; the user's dashboard goes with their last session."""

        user = self._sessions.pop(token, None)
        if user is None:
            return
        key = self._dashboard_key(user)
        if not any(self._dashboard_key(other) == key for other in self._sessions.values()):
            self._submitters.pop(key, None)

    def user_for(self, token: str) -> User | None:
        return self._sessions.get(token)

    # ------------------------------------------------------------------
    # dashboards
    # ------------------------------------------------------------------
    def admin_dashboard(self) -> AdminDashboard:
        if self._admin is None:
            self._admin = AdminDashboard(self._row_store, self._summarizer)
        return self._admin

    @staticmethod
    def _dashboard_key(user: User) -> tuple[str, str]:
        return (user.store_code, user.email)

    def submitter_dashboard(self, user: User) -> SubmitterDashboard:
        key = self._dashboard_key(user)
        dashboard = self._submitters.get(key)
        if dashboard is None or dashboard.user != user:
            dashboard = SubmitterDashboard(user, self._row_store)
            self._submitters[key] = dashboard
        return dashboard


_registry: SessionRegistry | None = None


def get_session_registry() -> SessionRegistry:
    """Return the process-wide registry, bound to the configured clients."""

    global _registry
    if _registry is None:
        _registry = SessionRegistry(get_row_store(), get_summarizer())
    return _registry


def reset_session_state() -> None:
    """Drop every session and dashboard (used on start-up and in tests)."""

    global _registry
    _registry = None
