from typing import Any

from mangum import Mangum

from hello_api.app.config import get_settings
from hello_api.app.main import create_application
from hello_api.infrastructure.platform_manager import create_logger

logger = create_logger(logger_name="hello-api")


def create_handler() -> Mangum:
    """Wrap the application in the API Gateway / ALB adapter."""
    settings = get_settings()
    return Mangum(
        create_application(settings),
        lifespan="off",
        api_gateway_base_path=settings.api_gateway_base_path,
    )


# Built once per process so warm invocations reuse it
handler = create_handler()


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """AWS Lambda entry point for the Hello API."""
    logger.debug(f"Lambda event received: {event.get('rawPath') or event.get('path')}")
    try:
        result = handler(event, context)
        assert isinstance(result, dict)
        return result
    except Exception as e:
        raise RuntimeError(f"Error in processing Hello API event: {e}") from e
