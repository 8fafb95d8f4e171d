from dataclasses import asdict

from fastapi import Request
from fastapi.responses import JSONResponse

from hello_api.infrastructure.data_models import Message


def hello_world(request: Request) -> JSONResponse:
    """GET / - return the greeting message."""
    custom_message = Message(msg="Hello")
    return JSONResponse(status_code=200, content={"customMessage": asdict(custom_message)})
