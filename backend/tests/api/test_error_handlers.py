"""Error Handlers — every failure becomes an empty-bodied status response.

Tests:
    - NewsletterError subclasses surface their http_status
    - Unhandled exceptions become 500 without leaking details
    - Non-routing HTTPExceptions keep their status but lose their body
    - Decode failures are logged with the offending fields
"""

import logging

import pytest
from fastapi import HTTPException
from httpx import ASGITransport, AsyncClient

from newsletter.core.errors import DatabaseError


@pytest.fixture
async def raising_client(app):
    @app.get("/boom/database")
    async def database_down():
        raise DatabaseError("connection refused", "connect")

    @app.get("/boom/unhandled")
    async def unhandled():
        raise RuntimeError("secret internal detail")

    @app.get("/boom/teapot")
    async def teapot():
        raise HTTPException(status_code=418, detail="short and stout")

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


async def test_newsletter_error_maps_to_its_status(raising_client):
    res = await raising_client.get("/boom/database")
    assert res.status_code == 503
    assert res.content == b""


async def test_unhandled_exception_maps_to_empty_500(raising_client):
    res = await raising_client.get("/boom/unhandled")
    assert res.status_code == 500
    assert b"secret" not in res.content


async def test_other_http_exceptions_keep_status(raising_client):
    res = await raising_client.get("/boom/teapot")
    assert res.status_code == 418
    assert res.content == b""


async def test_decode_failure_logged_with_fields(client, caplog):
    with caplog.at_level(logging.WARNING, logger="newsletter.api.error_handlers"):
        await client.post(
            "/subscription",
            content="name=Bob",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
    record = next(
        r for r in caplog.records
        if getattr(r, "error_code", None) == "DECODE_FAILURE"
    )
    assert record.fields == ["email"]
    assert record.path == "/subscription"


async def test_route_not_found_logged_at_info(client, caplog):
    with caplog.at_level(logging.INFO, logger="newsletter.api.error_handlers"):
        await client.get("/unknown/path")
    record = next(
        r for r in caplog.records
        if getattr(r, "error_code", None) == "ROUTE_NOT_FOUND"
    )
    assert record.levelno == logging.INFO
    assert record.method == "GET"
