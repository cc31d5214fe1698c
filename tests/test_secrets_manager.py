from collections.abc import Generator
from pathlib import Path

import pytest
import yaml
from cryptography.fernet import Fernet

from appointme.core.secrets_manager import secrets


@pytest.fixture()
def restore_secrets() -> Generator[None, None, None]:
    yield
    secrets.reload()


def _write_config(path: Path, key: bytes) -> None:
    cipher = Fernet(key)
    path.write_text(yaml.safe_dump({
        "PROJECT_NAME": "AppointMe Staging",
        "secrets": {
            "GEMINI_API_KEY": cipher.encrypt(b"gemini-secret").decode(),
            "BROKEN": "not-a-fernet-token",
        },
    }))


def test_decrypts_secrets_section(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, restore_secrets: None
) -> None:
    key = Fernet.generate_key()
    monkeypatch.setenv("MASTER_KEY", key.decode())
    config = tmp_path / "staging-config.yml"
    _write_config(config, key)

    secrets.reload(config)

    assert secrets.get("GEMINI_API_KEY") == "gemini-secret"
    assert secrets.get("PROJECT_NAME") == "AppointMe Staging"
    assert "BROKEN" not in secrets.all_secrets
    assert "secrets" not in secrets.all_secrets


def test_without_master_key_only_plain_values_load(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, restore_secrets: None
) -> None:
    monkeypatch.delenv("MASTER_KEY", raising=False)
    config = tmp_path / "staging-config.yml"
    _write_config(config, Fernet.generate_key())

    secrets.reload(config)

    assert secrets.get("GEMINI_API_KEY") is None
    assert secrets.get("PROJECT_NAME") == "AppointMe Staging"


def test_get_falls_back_to_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOME_UNLISTED_VALUE", "from-env")
    assert secrets.get("SOME_UNLISTED_VALUE") == "from-env"
    assert secrets.get("MISSING_VALUE", "fallback") == "fallback"
