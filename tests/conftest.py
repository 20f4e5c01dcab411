from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from school_office.core.notifications import LoggingReminderSender, get_reminder_sender
from school_office.core.store import InMemoryStore, create_store, get_store
from school_office.main import app


@pytest.fixture
def store() -> InMemoryStore:
    """Fresh store loaded with the demo dataset."""
    return create_store(seed=True)


@pytest.fixture
def empty_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def reminder_sender() -> LoggingReminderSender:
    return LoggingReminderSender()


@pytest.fixture
async def client(
    store: InMemoryStore, reminder_sender: LoggingReminderSender
) -> AsyncGenerator[AsyncClient, None]:
    """Get test HTTP client bound to the test store."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_reminder_sender] = lambda: reminder_sender

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
