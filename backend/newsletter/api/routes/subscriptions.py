"""Subscriptions — form-decoding gate for newsletter sign-ups.

Invariants:
    - Body must be application/x-www-form-urlencoded and decode into FormData
    - Decode failures become 400 before the handler runs (see api/error_handlers.py)
    - Success returns 200 with an empty body; nothing is persisted yet

Design Decisions:
    - Content type checked in a dependency: Starlette parses any non-form body as an
      empty form, which would otherwise surface as "missing fields" instead of the real cause
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request, Response, status

from newsletter.core.errors import DecodeFailureError
from newsletter.schemas.subscription import FormData

logger = logging.getLogger(__name__)
router = APIRouter(tags=["subscriptions"])

FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"


async def require_urlencoded_form(request: Request) -> None:
    """Reject bodies that are not urlencoded forms."""
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type != FORM_MEDIA_TYPE:
        raise DecodeFailureError(
            f"Expected {FORM_MEDIA_TYPE}, got {media_type or 'no content type'}",
        )


@router.post(
    "/subscription",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_urlencoded_form)],
)
async def subscribe(form: Annotated[FormData, Form()]) -> Response:
    logger.debug("Subscription form decoded")
    return Response(status_code=status.HTTP_200_OK)
