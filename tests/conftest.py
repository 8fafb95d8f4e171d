import asyncio

import pytest
from fastapi.testclient import TestClient

from hello_api.app.config import Settings
from hello_api.app.main import create_application


@pytest.fixture(autouse=True)
def event_loop_for_sync_adapters():
    # asyncio.run() in other tests leaves the main thread without a current
    # loop; the Lambda adapter calls asyncio.get_event_loop(), so provide one.
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    yield loop
    asyncio.set_event_loop(None)
    loop.close()


@pytest.fixture
def allowed_origin() -> str:
    return "http://localhost:3000"


@pytest.fixture
def settings(allowed_origin) -> Settings:
    return Settings(allowed_origins=(allowed_origin,), body_limit_bytes=1024)


@pytest.fixture
def app(settings):
    return create_application(settings)


@pytest.fixture
def client(app):
    return TestClient(app)
