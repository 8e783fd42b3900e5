"""Subscription Schemas — Pydantic model for the subscription form body.

Invariants:
    - FormData has exactly two required string fields: email, name
    - Unknown fields are rejected (extra="forbid")
    - No format validation on email: any string passes

Design Decisions:
    - Pydantic model bound with Form(): FastAPI decodes the urlencoded body and
      raises RequestValidationError before the route handler runs
"""

from pydantic import BaseModel, ConfigDict


class FormData(BaseModel):
    """Subscription form — email and name, both required."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    email: str
    name: str
