"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with tags
    - Routes never contain business logic beyond building the response

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
