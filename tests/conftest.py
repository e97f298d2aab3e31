# tests/conftest.py
import os
from datetime import datetime, timezone

# db.py refuses to import without a DATABASE_URL
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from support_dashboard.backend.app import models  # noqa: E402,F401
from support_dashboard.backend.app.dashboard.controller import DashboardController  # noqa: E402
from support_dashboard.backend.app.db import Base, get_db, make_engine, make_session_factory  # noqa: E402
from support_dashboard.backend.app.errors import StoreUnavailable  # noqa: E402
from support_dashboard.backend.app.main import app  # noqa: E402
from support_dashboard.backend.app.schemas.ticket import TicketRead  # noqa: E402
from support_dashboard.backend.app.store.sql import SqlTicketStore  # noqa: E402

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _make_ticket(id="t-1", **overrides) -> TicketRead:
    data = {
        "id": id,
        "title": f"Ticket {id}",
        "description": "",
        "requester_name": "Alice Moyo",
        "status": "open",
        "priority": "normal",
        "category": "hardware",
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return TicketRead(**data)


@pytest.fixture()
def make_ticket():
    return _make_ticket


class FakeStore:
    """In-memory ticket store; set `error` to make the next fetches fail."""

    def __init__(self, tickets=None, error=None):
        self.tickets = list(tickets or [])
        self.error = error
        self.calls = []
        self.on_list = None

    async def list(self, order="-created_at"):
        self.calls.append(order)
        if self.on_list is not None:
            self.on_list()
        if self.error is not None:
            raise StoreUnavailable(self.error)
        return list(self.tickets)


@pytest.fixture()
def fake_store():
    return FakeStore()


@pytest.fixture()
def session_factory():
    # in-memory SQLite with a single shared connection
    engine = make_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture()
def controller(session_factory):
    return DashboardController(
        SqlTicketStore(session_factory),
        clock=lambda: datetime.now(timezone.utc),
        tz=timezone.utc,
    )


@pytest.fixture()
def client(session_factory, controller):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.state.controller = controller

    # no context manager: the startup hook would build the real store
    yield TestClient(app)

    app.dependency_overrides.clear()
    del app.state.controller
