"""Health Check — liveness endpoint for container orchestration.

Invariants:
    - GET /health_check always returns 200 with an empty body if the process is up
    - No dependency on the database: a slow or down database never fails liveness
"""

from fastapi import APIRouter, Response, status

router = APIRouter(tags=["health"])


@router.get("/health_check", status_code=status.HTTP_200_OK)
async def health_check() -> Response:
    """Basic liveness check."""
    return Response(status_code=status.HTTP_200_OK)
