import pytest

from hello_api.app.config import DEFAULT_BODY_LIMIT_BYTES, Settings, load_settings, normalize_port
from hello_api.infrastructure.platform_manager import get_parameters

ENV_VARS = [
    "APP_ENV",
    "HOST",
    "PORT",
    "CORS_ALLOWED_ORIGINS",
    "LOG_LEVEL",
    "BODY_LIMIT_BYTES",
    "API_GATEWAY_BASE_PATH",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = load_settings()

    assert settings == Settings(
        app_env="development",
        host="0.0.0.0",
        port=8000,
        allowed_origins=("http://localhost:3000",),
        log_level="INFO",
        body_limit_bytes=DEFAULT_BODY_LIMIT_BYTES,
        api_gateway_base_path="/",
    )
    assert settings.is_development


def test_values_come_from_environment(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000, https://app.example.com,")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("BODY_LIMIT_BYTES", "2048")
    monkeypatch.setenv("API_GATEWAY_BASE_PATH", "/prod")

    settings = load_settings()

    assert not settings.is_development
    assert settings.port == 9000
    assert settings.allowed_origins == ("http://localhost:3000", "https://app.example.com")
    assert settings.log_level == "DEBUG"
    assert settings.body_limit_bytes == 2048
    assert settings.api_gateway_base_path == "/prod"


def test_empty_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("PORT", "")

    assert load_settings().port == 8000


@pytest.mark.parametrize(
    "name, value",
    [
        ("CORS_ALLOWED_ORIGINS", " , "),
        ("LOG_LEVEL", "CHATTY"),
        ("BODY_LIMIT_BYTES", "lots"),
        ("BODY_LIMIT_BYTES", "0"),
        ("PORT", "70000"),
    ],
)
def test_invalid_values_are_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=name):
        load_settings()


def test_normalize_port():
    assert normalize_port("3000") == 3000
    assert normalize_port("/tmp/hello.sock") == "/tmp/hello.sock"


def test_get_parameters_lowercases_names(monkeypatch):
    monkeypatch.setenv("SOME_SETTING", "value")
    monkeypatch.delenv("MISSING_SETTING", raising=False)

    assert get_parameters(["some_setting", "missing_setting"]) == {
        "some_setting": "value",
        "missing_setting": None,
    }
    assert get_parameters("missing_setting", {"missing_setting": "fallback"}) == {
        "missing_setting": "fallback"
    }
