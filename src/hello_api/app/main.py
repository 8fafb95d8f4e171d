"""Application entrypoint for the Hello API.

Builds the FastAPI application shared by the standalone server and the Lambda handler:
CORS restricted to the configured origins, body parsing, exact-match dispatch, and a single
function that turns every dispatch outcome into the response written to the client.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from hello_api.app.body_parser import parse_body
from hello_api.app.config import Settings, get_settings
from hello_api.app.routes import Failed, Handled, NotFound, Outcome, dispatch, status_of
from hello_api.infrastructure.platform_manager import create_logger

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
CORS_METHODS = ["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"]

logger = create_logger(logger_name="hello-api")


def create_error_response(status_code: int) -> JSONResponse:
    """The only body a client ever sees on a failure path."""
    return JSONResponse(status_code=status_code, content={"error": "error"})


def render_outcome(outcome: Outcome, request: Request) -> Response:
    """
    Write a dispatch outcome back to the client.

    Error details are kept on the request state for server-side diagnostics. The error
    object itself is only kept in development, and neither is ever part of the response.
    """
    settings: Settings = request.app.state.settings

    match outcome:
        case Handled(response=response):
            return response

        case NotFound(method=method, path=path):
            logger.info(f"No route for {method} {path}")
            error: Exception = HTTPException(status_code=404)
            status_code = 404

        case Failed(status_code=status_code, error=error):
            if status_code >= 500:
                logger.error(f"Request failed: {error}", exc_info=error)
            else:
                logger.warning(f"Request rejected ({status_code}): {error}")

    request.state.message = getattr(error, "detail", None) or str(error)
    request.state.error = error if settings.is_development else None

    return create_error_response(status_code)


async def process(request: Request) -> Response:
    """Process one request through body parsing, dispatch and the error stage."""
    settings: Settings = request.app.state.settings
    logger.info(f"Processing request: {request.method} {request.url.path}")

    try:
        request.state.body = await parse_body(request, settings.body_limit_bytes)
    except HTTPException as e:
        return render_outcome(Failed(status_code=status_of(e), error=e), request)

    return render_outcome(dispatch(request), request)


def create_application(settings: Settings | None = None) -> FastAPI:
    """Assemble and configure the FastAPI application instance.

    - Stores the settings on the application state so the pipeline never reads globals.
    - Restricts cross-origin access to the configured allow-list.
    - Sends every method and path to `process`, which owns routing and error handling.
    """
    settings = settings or get_settings()
    create_logger(log_level=settings.log_level, logger_name="hello-api")

    application = FastAPI(title="Hello API", docs_url=None, redoc_url=None, openapi_url=None)
    application.state.settings = settings

    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_methods=CORS_METHODS,
        allow_headers=["*"],
    )

    application.add_api_route(
        "/{path:path}", process, methods=ALL_METHODS, include_in_schema=False
    )

    return application
