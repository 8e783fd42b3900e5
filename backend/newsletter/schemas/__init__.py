"""Pydantic Schemas — request body validation at the API boundary."""
