import logging
from dataclasses import dataclass

from hello_api.infrastructure.platform_manager import get_parameters

# Constants
DEFAULT_BODY_LIMIT_BYTES = 100 * 1024  # 100 KiB
DEVELOPMENT = "development"

DEFAULTS = {
    "app_env": DEVELOPMENT,
    "host": "0.0.0.0",
    "port": "8000",
    "cors_allowed_origins": "http://localhost:3000",
    "log_level": "INFO",
    "body_limit_bytes": str(DEFAULT_BODY_LIMIT_BYTES),
    "api_gateway_base_path": "/",
}


def normalize_port(value: str) -> int | str:
    """Normalize a port into a number, or a named pipe / Unix socket path."""
    try:
        port = int(value)
    except ValueError:
        # Not a number, so treat it as a socket path
        return value

    if port < 0 or port > 65535:
        raise ValueError(f"Configuration value is invalid: PORT ({value})")
    return port


def _split_origins(value: str) -> list[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass(frozen=True)
class Settings:
    """Service settings loaded from the environment.

    Attributes:
        app_env: Environment name; "development" keeps error details in request state
        host: Bind host for the standalone server
        port: TCP port, or a Unix socket path
        allowed_origins: Origins that receive permissive CORS headers
        log_level: Logging level name
        body_limit_bytes: Largest request body the pipeline will parse
        api_gateway_base_path: Base path stripped from API Gateway events
    """

    app_env: str = DEVELOPMENT
    host: str = "0.0.0.0"
    port: int | str = 8000
    allowed_origins: tuple[str, ...] = ("http://localhost:3000",)
    log_level: str = "INFO"
    body_limit_bytes: int = DEFAULT_BODY_LIMIT_BYTES
    api_gateway_base_path: str = "/"

    @property
    def is_development(self) -> bool:
        return self.app_env == DEVELOPMENT


def _validate_settings(settings: Settings) -> None:
    """Validate that all settings have usable values."""
    if not settings.allowed_origins:
        raise ValueError("Configuration value is invalid: CORS_ALLOWED_ORIGINS")

    if not isinstance(logging.getLevelName(settings.log_level), int):
        raise ValueError(f"Configuration value is invalid: LOG_LEVEL ({settings.log_level})")

    if settings.body_limit_bytes <= 0:
        raise ValueError("Configuration value is invalid: BODY_LIMIT_BYTES")


def load_settings() -> Settings:
    """Load settings from environment variables, falling back to the defaults."""
    params = get_parameters(list(DEFAULTS), DEFAULTS)

    try:
        body_limit_bytes = int(params["body_limit_bytes"] or "")
    except ValueError as e:
        raise ValueError("Configuration value is invalid: BODY_LIMIT_BYTES") from e

    settings = Settings(
        app_env=params["app_env"] or DEVELOPMENT,
        host=params["host"] or "0.0.0.0",
        port=normalize_port(params["port"] or ""),
        allowed_origins=tuple(_split_origins(params["cors_allowed_origins"] or "")),
        log_level=(params["log_level"] or "INFO").upper(),
        body_limit_bytes=body_limit_bytes,
        api_gateway_base_path=params["api_gateway_base_path"] or "/",
    )

    _validate_settings(settings)

    return settings


class Config:
    """Singleton configuration manager for the service."""

    _instance = None
    _settings = None

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def get_settings(self) -> Settings:
        """Get settings, loading them from the environment if not already cached."""
        if self._settings is None:
            self._settings = load_settings()
        return self._settings


# Create singleton instance
config = Config()


def get_settings() -> Settings:
    """Get settings from the singleton config."""
    return config.get_settings()
