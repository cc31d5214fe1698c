import os
from pathlib import Path
from typing import Any, Dict

import yaml
from cryptography.fernet import Fernet, InvalidToken
from dotenv import load_dotenv

from appointme.core.logging import get_logger

load_dotenv(".env")

logger = get_logger(__name__)


class SecretManager:
    """
    Loads `<ENVIRONMENT>-config.yml` and decrypts its `secrets` section with
    the Fernet key in MASTER_KEY. Plain keys in the file are exposed as-is.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(SecretManager, cls).__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self, path: Path | None = None) -> None:
        self._config: Dict[str, Any] = {}
        self._secrets: Dict[str, Any] = {}

        if path is None:
            env = os.getenv("ENVIRONMENT", "local")
            config_file = f"{env}-config.yml"
            path = Path(config_file)
            if not path.exists():
                path = Path("..") / config_file

        if not path.exists():
            logger.info({"event_type": "config", "event_name": "secrets_file_missing", "path": str(path)})
            return

        with open(path, "r") as f:
            self._config = yaml.safe_load(f) or {}

        encrypted = self._config.pop("secrets", None) or {}
        key = os.getenv("MASTER_KEY")
        if encrypted and not key:
            logger.warning({
                "event_type": "config",
                "event_name": "master_key_missing",
                "message": "Secrets cannot be decrypted without MASTER_KEY",
            })
            return

        if encrypted:
            cipher = Fernet(key.encode())
            for name, value in encrypted.items():
                try:
                    self._secrets[name] = cipher.decrypt(str(value).encode()).decode()
                except InvalidToken:
                    logger.error({"event_type": "config", "event_name": "secret_decrypt_failed", "secret": name})

    def reload(self, path: Path | None = None) -> None:
        self._load_config(path)

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._secrets:
            return self._secrets[key]

        if key in self._config:
            return self._config.get(key)

        return os.getenv(key, default)

    @property
    def all_secrets(self) -> Dict[str, Any]:
        return {**self._config, **self._secrets}


secrets = SecretManager()
