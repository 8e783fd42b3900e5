"""Database Session Manager — lazy pool, health checks and error mapping.

Tests:
    - Health check succeeds against a reachable database
    - Health check reports False (never raises) against an unreachable one
    - SQLAlchemy errors inside a session surface as DatabaseError
    - Operational errors are tagged "execute", every other SQLAlchemy error "unknown"
    - Building from settings never opens a connection
"""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError

from newsletter.config import DatabaseSettings
from newsletter.core.errors import DatabaseError
from newsletter.infrastructure.database import DatabaseSessionManager


@pytest.fixture
async def sqlite_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    yield manager
    await manager.dispose()


async def test_health_check_succeeds(sqlite_manager):
    assert await sqlite_manager.health_check() is True


async def test_health_check_false_when_unreachable():
    manager = DatabaseSessionManager.from_settings(
        DatabaseSettings(host="127.0.0.1", port=1),
    )
    try:
        assert await manager.health_check() is False
    finally:
        await manager.dispose()


async def test_sqlalchemy_errors_become_database_error(sqlite_manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with sqlite_manager.session() as db:
            await db.execute(text("SELECT * FROM missing_table"))
    assert exc_info.value.http_status == 503
    assert exc_info.value.operation == "execute"
    assert isinstance(exc_info.value.__cause__, OperationalError)


async def test_constraint_violation_becomes_database_error(sqlite_manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with sqlite_manager.session() as db:
            await db.execute(text("CREATE TABLE subscriptions (email TEXT PRIMARY KEY)"))
            await db.execute(text("INSERT INTO subscriptions VALUES ('a@b.c')"))
            await db.execute(text("INSERT INTO subscriptions VALUES ('a@b.c')"))
    assert exc_info.value.operation == "unknown"
    assert isinstance(exc_info.value.__cause__, IntegrityError)


async def test_from_settings_does_not_connect():
    manager = DatabaseSessionManager.from_settings(
        DatabaseSettings(host="203.0.113.1", port=5432),
    )
    assert manager.engine.url.host == "203.0.113.1"
    assert manager.engine.url.drivername == "postgresql+asyncpg"
    await manager.dispose()
