"""
Route table and dispatch.

Dispatch never raises for request-level problems. It returns one of three outcomes and the
caller decides how each one is written back to the client.
"""

from collections.abc import Callable
from dataclasses import dataclass

from fastapi import HTTPException, Request
from fastapi.responses import Response

from hello_api.app.controllers import hello_world

Handler = Callable[[Request], Response]

ROUTES: dict[tuple[str, str], Handler] = {
    ("GET", "/"): hello_world,
}


@dataclass(frozen=True)
class Handled:
    response: Response


@dataclass(frozen=True)
class NotFound:
    method: str
    path: str


@dataclass(frozen=True)
class Failed:
    status_code: int
    error: Exception


Outcome = Handled | NotFound | Failed


def status_of(error: Exception) -> int:
    """Status code carried by an error, or 500 when it has none."""
    if isinstance(error, HTTPException):
        return error.status_code
    status_code = getattr(error, "status_code", None)
    return status_code if isinstance(status_code, int) else 500


def dispatch(request: Request, routes: dict[tuple[str, str], Handler] = ROUTES) -> Outcome:
    """Exact-match the request method and path against the route table and run the handler."""
    method = request.method
    path = request.url.path

    handler = routes.get((method, path))
    if handler is None:
        return NotFound(method=method, path=path)

    try:
        return Handled(handler(request))
    except Exception as e:
        return Failed(status_code=status_of(e), error=e)
