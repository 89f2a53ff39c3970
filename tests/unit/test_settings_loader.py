from __future__ import annotations

from pathlib import Path

import pytest

from gateway.errors import ConfigError, UnknownModelError
from gateway.runtime.settings_loader import load_settings

_ENV_NAMES = (
    "GATEWAY_CONFIG_PATH",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "GATEWAY_HOST",
    "GATEWAY_PORT",
    "GATEWAY_INTERVAL_SECONDS",
    "GATEWAY_MODEL",
    "GATEWAY_MAX_LENGTH",
    "GATEWAY_CORS",
    "GATEWAY_ASSETS_DIR",
    "WS_PING_PERIOD_S",
    "WS_PING_WAIT_S",
    "WS_WRITE_WAIT_S",
    "WS_CANCEL_RELAYS_ON_CLOSE",
)

VALID_CONFIG = """\
apiKey: sk-from-file
port: 8080
intervalSeconds: 3
model: gpt-3.5-turbo
maxLength: 512
cors: true
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_settings_from_file(tmp_path: Path) -> None:
    settings = load_settings(_write(tmp_path, VALID_CONFIG))

    assert settings.provider.api_key == "sk-from-file"
    assert settings.provider.model == "gpt-3.5-turbo"
    assert settings.provider.max_length == 512
    assert settings.server.port == 8080
    assert settings.server.cors is True
    assert settings.limits.interval_seconds == 3.0
    assert settings.limits.min_payload_chars == 2
    assert settings.websocket.ping_period_s == 50.0
    assert settings.websocket.ping_wait_s == 60.0
    assert settings.assets.url_prefix == "api/assets"
    assert settings.assets.image_size == "256x256"


def test_config_path_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GATEWAY_CONFIG_PATH", str(_write(tmp_path, VALID_CONFIG)))
    assert load_settings().server.port == 8080


def test_environment_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
    monkeypatch.setenv("GATEWAY_PORT", "9100")
    monkeypatch.setenv("GATEWAY_MODEL", "text-davinci-003")
    monkeypatch.setenv("GATEWAY_CORS", "false")

    settings = load_settings(_write(tmp_path, VALID_CONFIG))
    assert settings.provider.api_key == "sk-from-env"
    assert settings.provider.model == "text-davinci-003"
    assert settings.server.port == 9100
    assert settings.server.cors is False


def test_unknown_model_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(UnknownModelError) as exc:
        load_settings(_write(tmp_path, VALID_CONFIG.replace("gpt-3.5-turbo", "gpt-unknown")))
    assert exc.value.model == "gpt-unknown"


def test_missing_file_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    ("old", "new"),
    [
        ("apiKey: sk-from-file", "apiKey: ''"),
        ("port: 8080", "port: 70000"),
        ("port: 8080", "port: eighty"),
        ("maxLength: 512", "maxLength: 0"),
        ("intervalSeconds: 3", "intervalSeconds: -1"),
    ],
)
def test_invalid_values_are_fatal(tmp_path: Path, old: str, new: str) -> None:
    with pytest.raises(ConfigError):
        load_settings(_write(tmp_path, VALID_CONFIG.replace(old, new)))


def test_unparsable_yaml_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(_write(tmp_path, "apiKey: [unclosed\n"))


def test_non_mapping_yaml_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(_write(tmp_path, "- just\n- a list\n"))
