import importlib.util
from pathlib import Path
from types import ModuleType

import pytest
import yaml
from cryptography.fernet import Fernet
from sqlmodel import Session, select

from appointme.booking_models import Booking, Service
from appointme.models import User
from tests.utils.catalog import catalog_flags

SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"


def _load_script(name: str) -> ModuleType:
    spec = importlib.util.spec_from_file_location(name, SCRIPTS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_encrypt_file_encrypts_plain_secrets_once(tmp_path: Path) -> None:
    manage_secrets = _load_script("manage_secrets")
    key = Fernet.generate_key().decode()
    config = tmp_path / "production-config.yml"
    config.write_text(yaml.safe_dump({
        "PROJECT_NAME": "AppointMe",
        "secrets": {"SECRET_KEY": "plain-signing-key"},
    }))

    assert manage_secrets.encrypt_file(str(config), key) == 1
    assert manage_secrets.encrypt_file(str(config), key) == 0

    stored = yaml.safe_load(config.read_text())
    assert stored["PROJECT_NAME"] == "AppointMe"
    assert manage_secrets.decrypt_value(stored["secrets"]["SECRET_KEY"], key) == "plain-signing-key"


def test_decrypt_with_wrong_key_exits() -> None:
    manage_secrets = _load_script("manage_secrets")
    token = manage_secrets.encrypt_value("value", Fernet.generate_key().decode())

    with pytest.raises(SystemExit):
        manage_secrets.decrypt_value(token, Fernet.generate_key().decode())


def test_seed_demo(session: Session) -> None:
    seed_demo = _load_script("seed_demo")

    seed_demo.seed_demo()
    seed_demo.seed_demo()

    provider = session.exec(select(User).where(User.email == "provider@appointme.com")).one()
    services = session.exec(select(Service).where(Service.user_id == provider.id)).all()
    assert len(services) == 3
    statuses = sorted(session.exec(
        select(Booking.status).join(Service, Booking.service_id == Service.id)
        .where(Service.user_id == provider.id)
    ).all())
    assert statuses == [0, 1, 2]
    assert catalog_flags(session, list(services)) == [True, True, True]
