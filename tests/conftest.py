"""Shared fixtures: an app wired to in-memory SQLite and the mock mail transport."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from cookhouse.core.config import Settings
from cookhouse.database import Database
from cookhouse.main import create_app
from cookhouse.services.notifications import MockMailTransport


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        env_mode="development",
        email_user="kitchen@cookhouse.test",
        email_pass="test-key",
        db_host="localhost",
        db_user="cook",
        db_pass="secret",
        db_name="cookhouse",
        port=3100,
        database_url="sqlite+aiosqlite:///:memory:",
        bcrypt_rounds=4,
        orders_notify_email="ops@cookhouse.test",
    )


@pytest.fixture
def mail():
    return MockMailTransport()


@pytest.fixture
def client(settings, mail):
    app = create_app(settings, mail_transport=mail, database=Database(settings.database_url))
    with TestClient(app) as client:
        yield client


@pytest.fixture
def count_rows(client):
    """Count rows of a model, optionally filtered, on the app's own event loop."""

    def _count(model, **filters) -> int:
        async def _query():
            async with client.app.state.database.session_maker() as session:
                stmt = select(func.count()).select_from(model).filter_by(**filters)
                return (await session.execute(stmt)).scalar_one()

        return client.portal.call(_query)

    return _count
