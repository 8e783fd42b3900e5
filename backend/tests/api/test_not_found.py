"""Not Found — unmatched (method, path) pairs fall through to an empty 404.

Tests:
    - Unknown paths, wrong methods and trailing slashes all return 404 with no body
    - No docs or OpenAPI routes are exposed
"""

import pytest


@pytest.mark.parametrize(
    "method, path",
    [
        ("GET", "/unknown/path"),
        ("GET", "/"),
        ("GET", "/greet/"),
        ("GET", "/greet/a/b"),
        ("PUT", "/health_check"),
        ("DELETE", "/greet"),
        ("GET", "/docs"),
        ("GET", "/openapi.json"),
    ],
)
async def test_unmatched_request_returns_empty_404(client, method, path):
    res = await client.request(method, path)
    assert res.status_code == 404
    assert res.content == b""


async def test_not_found_is_idempotent(client):
    statuses = {(await client.get("/unknown/path")).status_code for _ in range(3)}
    assert statuses == {404}
