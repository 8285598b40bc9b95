import pytest

from bnm_rates_bot.utils.config import BotSettings, ConfigurationError, load_settings

ENV_NAMES = (
    "TELEGRAM_BOT_TOKEN",
    "BNM_REQUEST_TIMEOUT",
    "BOT_POLL_TIMEOUT",
    "BOT_RESTART_DELAY",
    "BOT_HEALTH_INTERVAL",
    "BOT_MEMORY_LIMIT_MB",
    "BOT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


@pytest.mark.parametrize("token", [None, "   "])
def test_token_is_required(monkeypatch, token) -> None:
    if token is not None:
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", token)

    with pytest.raises(ConfigurationError, match="TELEGRAM_BOT_TOKEN"):
        load_settings()


def test_defaults(monkeypatch) -> None:
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")

    settings = load_settings()

    assert settings.token.get_secret_value() == "123:abc"
    assert settings.request_timeout == 10.0
    assert settings.poll_timeout == 30
    assert settings.restart_delay == 5.0
    assert settings.health_interval == 300.0
    assert settings.memory_limit_mb == 256.0
    assert settings.log_level == "INFO"


def test_overrides(monkeypatch) -> None:
    for name, value in {
        "TELEGRAM_BOT_TOKEN": "123:abc",
        "BNM_REQUEST_TIMEOUT": "2.5",
        "BOT_POLL_TIMEOUT": "15",
        "BOT_RESTART_DELAY": "1",
        "BOT_HEALTH_INTERVAL": "60",
        "BOT_MEMORY_LIMIT_MB": "512",
        "BOT_LOG_LEVEL": "debug",
    }.items():
        monkeypatch.setenv(name, value)

    settings = load_settings()

    assert settings.request_timeout == 2.5
    assert settings.poll_timeout == 15
    assert settings.restart_delay == 1.0
    assert settings.health_interval == 60.0
    assert settings.memory_limit_mb == 512.0
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "name, value",
    [("BNM_REQUEST_TIMEOUT", "soon"), ("BOT_POLL_TIMEOUT", "-1"), ("BOT_HEALTH_INTERVAL", "0")],
)
def test_invalid_numbers(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError, match=f"(?i){name}"):
        load_settings()


def test_repr_hides_token(monkeypatch) -> None:
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:secret")

    assert "secret" not in repr(load_settings())


def test_fields_can_be_passed_by_name() -> None:
    settings = BotSettings(token="123:abc", poll_timeout=12)

    assert settings.token.get_secret_value() == "123:abc"
    assert settings.poll_timeout == 12
