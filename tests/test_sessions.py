from __future__ import annotations

import asyncio

import pytest

from octobull.application import AuthenticationFailed, SessionRegistry
from octobull.domain import User
from octobull.infrastructure import InMemoryRowStore, NoOpSummarizer


@pytest.fixture()
def registry() -> SessionRegistry:
    store = InMemoryRowStore()
    store.add_account("S01", "Alpha", "pw-1", "mgr@example.com")
    store.add_account("S02", "Beta", "pw-2", "mgr@example.com")
    return SessionRegistry(store, NoOpSummarizer())


def test_stores_sharing_an_email_get_separate_dashboards(registry):
    _, alpha = asyncio.run(registry.login("S01", "pw-1"))
    _, beta = asyncio.run(registry.login("S02", "pw-2"))

    alpha_dashboard = registry.submitter_dashboard(alpha)
    alpha_dashboard.add_draft_item("P-1", "Widget", "2")
    beta_dashboard = registry.submitter_dashboard(beta)

    assert beta_dashboard is not alpha_dashboard
    assert beta_dashboard.user.store_name == "Beta"
    assert beta_dashboard.draft_items == ()
    assert registry.submitter_dashboard(alpha) is alpha_dashboard


def test_changed_account_details_rebuild_dashboard(registry):
    _, alpha = asyncio.run(registry.login("S01", "pw-1"))
    first = registry.submitter_dashboard(alpha)

    renamed = User(role=alpha.role, store_code=alpha.store_code, store_name="Alpha Central", email=alpha.email)
    second = registry.submitter_dashboard(renamed)

    assert second is not first
    assert second.user.store_name == "Alpha Central"


def test_logout_drops_dashboard_after_last_session(registry):
    first_token, alpha = asyncio.run(registry.login("S01", "pw-1"))
    second_token, _ = asyncio.run(registry.login("S01", "pw-1"))
    dashboard = registry.submitter_dashboard(alpha)
    dashboard.add_draft_item("P-1", "Widget", "2")

    registry.logout(first_token)
    assert registry.user_for(first_token) is None
    assert registry.submitter_dashboard(alpha) is dashboard

    registry.logout(second_token)
    assert registry.user_for(second_token) is None
    assert registry.submitter_dashboard(alpha).draft_items == ()


def test_login_with_wrong_password_fails(registry):
    with pytest.raises(AuthenticationFailed):
        asyncio.run(registry.login("S01", "nope"))
