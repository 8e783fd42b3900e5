"""Route Table — pure (method, path) lookup and disjointness check over registered routes.

Invariants:
    - dispatch() is total: every (method, path) yields a route's endpoint or the not-found endpoint
    - A path that matches with the wrong method is not-found (no 405 on this surface)
    - ensure_disjoint() rejects any two routes able to match the same (method, path)

Design Decisions:
    - Callers pass the routers' own APIRoute lists (main.route_table()), not app.routes:
      app.routes may hold include_router wrappers depending on the FastAPI release
    - Lookup reuses Starlette's Route.matches: the same matcher the server runs, so
      introspection and serving can never disagree
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping
from urllib.parse import unquote

from fastapi import Response, status
from fastapi.routing import APIRoute
from starlette.routing import BaseRoute, Match

from newsletter.core.errors import ConfigurationError


async def not_found() -> Response:
    """Fallback endpoint: 404 with an empty body."""
    return Response(status_code=status.HTTP_404_NOT_FOUND)


@dataclass(frozen=True)
class RouteMatch:
    """Outcome of a route-table lookup."""
    endpoint: Callable[..., Any]
    path_params: Mapping[str, Any] = field(default_factory=dict)
    route: APIRoute | None = None

    @property
    def found(self) -> bool:
        return self.route is not None


NOT_FOUND = RouteMatch(endpoint=not_found)


def dispatch(routes: Iterable[BaseRoute], method: str, path: str) -> RouteMatch:
    """Resolve a request line against the route table."""
    scope = {
        "type": "http",
        "method": method.upper(),
        "path": unquote(path.split("?", 1)[0]),
        "root_path": "",
    }
    for route in routes:
        if not isinstance(route, APIRoute):
            continue
        match, child_scope = route.matches(scope)
        if match is Match.FULL:
            return RouteMatch(
                endpoint=route.endpoint,
                path_params=dict(child_scope.get("path_params", {})),
                route=route,
            )
    return NOT_FOUND


def _segments(path_format: str) -> list[str]:
    return path_format.strip("/").split("/")


def _is_param(segment: str) -> bool:
    return segment.startswith("{") and segment.endswith("}")


def templates_overlap(first: str, second: str) -> bool:
    """True if some concrete path matches both templates."""
    a, b = _segments(first), _segments(second)
    if len(a) != len(b):
        return False
    return all(x == y or _is_param(x) or _is_param(y) for x, y in zip(a, b))


def ensure_disjoint(routes: Iterable[BaseRoute]) -> None:
    """Raise ConfigurationError if two routes can match the same (method, path)."""
    api_routes = [r for r in routes if isinstance(r, APIRoute)]
    if not api_routes:
        raise ConfigurationError("Route table holds no API routes")
    for i, first in enumerate(api_routes):
        for second in api_routes[i + 1:]:
            shared = first.methods & second.methods
            if shared and templates_overlap(first.path_format, second.path_format):
                raise ConfigurationError(
                    f"Routes {first.path_format!r} and {second.path_format!r} "
                    f"overlap for {', '.join(sorted(shared))}",
                )
