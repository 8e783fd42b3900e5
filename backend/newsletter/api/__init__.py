"""API Layer — FastAPI routes, route-table lookup and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Error responses carry a status code only, never a body
"""
