"""Greeting Routes — plain-text hello endpoints.

Invariants:
    - GET /greet returns "Hello World"
    - GET /greet/{name} returns "Hello {name}" with the decoded segment verbatim (no escaping)
"""

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["greet"], default_response_class=PlainTextResponse)


@router.get("/greet", status_code=status.HTTP_200_OK)
async def greet() -> PlainTextResponse:
    return PlainTextResponse("Hello World")


@router.get("/greet/{name}", status_code=status.HTTP_200_OK)
async def greet_name(name: str) -> PlainTextResponse:
    """Greet by name. The segment is interpolated as-is; this is not an HTML boundary."""
    return PlainTextResponse(f"Hello {name}")
