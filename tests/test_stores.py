# tests/test_stores.py

import asyncio
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from support_dashboard.backend.app.config import Settings
from support_dashboard.backend.app.db import make_engine, make_session_factory
from support_dashboard.backend.app.errors import StoreUnavailable
from support_dashboard.backend.app.models.ticket import Ticket
from support_dashboard.backend.app.models.ticket_history import TicketHistory
from support_dashboard.backend.app.store import HttpTicketStore, SqlTicketStore, build_store
from support_dashboard.backend.app.store.http import remote_sort

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def remote_ticket(id, **overrides):
    data = {
        "id": id,
        "title": "Printer Jam",
        "description": "Tray 2",
        "requester_name": "Alice Moyo",
        "requester_email": "alice@acme.org",
        "status": "open",
        "priority": "urgent",
        "category": "hardware",
        "created_date": "2026-10-19T09:30:00+00:00",
        "updated_date": "2026-10-19T10:00:00+00:00",
    }
    data.update(overrides)
    return data


# SQL store

def seed(session_factory, *rows):
    db = session_factory()
    try:
        for i, title in enumerate(rows):
            db.add(
                Ticket(
                    id=f"t{i}",
                    title=title,
                    requester_name="Alice Moyo",
                    status="open",
                    priority="normal",
                    category="hardware",
                    created_at=NOW + timedelta(minutes=i),
                    updated_at=NOW + timedelta(minutes=i),
                )
            )
        db.commit()
    finally:
        db.close()


def test_sql_store_lists_newest_first(session_factory):
    seed(session_factory, "first", "second", "third")
    tickets = asyncio.run(SqlTicketStore(session_factory).list("-created_at"))

    assert [t.title for t in tickets] == ["third", "second", "first"]
    assert tickets[0].created_at == NOW + timedelta(minutes=2)
    assert tickets[0].created_at.tzinfo is not None
    assert tickets[0].description == ""


def test_sql_store_ascending_order(session_factory):
    seed(session_factory, "first", "second")
    tickets = asyncio.run(SqlTicketStore(session_factory).list("created_at"))
    assert [t.title for t in tickets] == ["first", "second"]


def test_sql_store_rejects_unknown_order_field(session_factory):
    with pytest.raises(ValueError):
        asyncio.run(SqlTicketStore(session_factory).list("-requester_email"))


def test_sql_store_database_error_is_store_unavailable():
    # no tables created on this engine
    engine = make_engine("sqlite://")
    store = SqlTicketStore(make_session_factory(engine))
    with pytest.raises(StoreUnavailable):
        asyncio.run(store.list())
    engine.dispose()


# HTTP store

def test_remote_sort_uses_entity_field_names():
    assert remote_sort("-created_at") == "-created_date"
    assert remote_sort("updated_at") == "updated_date"
    assert remote_sort("-title") == "-title"


def test_http_store_fetches_and_parses_tickets():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["sort"] = request.url.params.get("sort")
        seen["api_key"] = request.headers.get("api_key")
        return httpx.Response(200, json=[remote_ticket("b"), remote_ticket("a", status="resolved")])

    store = HttpTicketStore(
        "https://tickets.acme.org/api/",
        api_key="secret",
        transport=httpx.MockTransport(handler),
    )
    tickets = asyncio.run(store.list())

    assert seen == {
        "path": "/api/entities/SupportTicket",
        "sort": "-created_date",
        "api_key": "secret",
    }
    assert [t.id for t in tickets] == ["b", "a"]
    assert tickets[1].status == "resolved"
    assert tickets[0].created_at == datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)
    assert tickets[0].updated_at == datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc)


def test_http_store_server_error_is_store_unavailable():
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    store = HttpTicketStore("https://tickets.acme.org", transport=transport)
    with pytest.raises(StoreUnavailable):
        asyncio.run(store.list())


def test_http_store_connection_error_is_store_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    store = HttpTicketStore("https://tickets.acme.org", transport=httpx.MockTransport(handler))
    with pytest.raises(StoreUnavailable):
        asyncio.run(store.list())


def test_http_store_malformed_payload_is_store_unavailable():
    bad = remote_ticket("a")
    del bad["title"]
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[bad]))
    store = HttpTicketStore("https://tickets.acme.org", transport=transport)
    with pytest.raises(StoreUnavailable):
        asyncio.run(store.list())


def test_http_store_non_json_body_is_store_unavailable():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>"))
    store = HttpTicketStore("https://tickets.acme.org", transport=transport)
    with pytest.raises(StoreUnavailable):
        asyncio.run(store.list())


# Store selection

def test_build_store_picks_configured_client(session_factory):
    assert isinstance(build_store(Settings(ticket_store="sql"), session_factory), SqlTicketStore)

    http_store = build_store(
        Settings(ticket_store="http", ticket_store_url="https://tickets.acme.org", ticket_store_timeout=3)
    )
    assert isinstance(http_store, HttpTicketStore)
    assert http_store.timeout == 3

    with pytest.raises(RuntimeError):
        build_store(Settings(ticket_store="http"))


def test_http_store_invalid_url_is_store_unavailable():
    store = HttpTicketStore(
        "https://tickets\x01.acme.org",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[])),
    )
    with pytest.raises(StoreUnavailable):
        asyncio.run(store.list())


def test_model_indexes_match_migration():
    # names created by alembic/versions/5b0e4c1f7a21_tickets_and_history.py
    expected = {
        "ix_tickets_requester_email",
        "ix_tickets_created_at",
        "ix_ticket_history_ticket_id",
    }
    indexes = {ix.name for ix in Ticket.__table__.indexes}
    indexes |= {ix.name for ix in TicketHistory.__table__.indexes}
    assert indexes == expected
