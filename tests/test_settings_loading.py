"""
Test settings loading from the environment and .env files.

Verifies the INWX_* prefix mapping, list parsing for the allow-list,
endpoint selection and the permission policy derived from settings.
"""
from __future__ import annotations

from pathlib import Path
import re

import pytest
from pydantic import ValidationError

from core.settings import get_app_settings
from core.settings.modules.inwx_settings import OTE_URL, PRODUCTION_URL, InwxSettings


def _parse_env_keys(env_path: Path) -> list[str]:
    text = env_path.read_text(encoding="utf-8", errors="replace")
    keys: list[str] = []
    for line in text.splitlines():
        s = line.strip()
        if not s or s.startswith("#"):
            continue
        if s.startswith("export "):
            s = s[len("export ") :].strip()
        if "=" not in s:
            continue
        k, _ = s.split("=", 1)
        k = k.strip()
        if not re.fullmatch(r"[A-Za-z_][A-Za-z0-9_]*", k):
            continue
        if k not in keys:
            keys.append(k)
    return keys


def test_every_example_env_key_maps_to_a_field():
    repo_root = Path(__file__).resolve().parents[1]
    keys = _parse_env_keys(repo_root / ".env.example")

    fields = {f"INWX_{name.upper()}" for name in InwxSettings.model_fields}
    # OTE credentials feed the sandbox tests, not the application
    app_keys = [k for k in keys if not k.startswith("INWX_OTE_")]

    assert app_keys
    missing = [k for k in app_keys if k not in fields]
    assert not missing, f"Unmapped env keys: {missing}"


def test_defaults():
    settings = InwxSettings(_env_file=None)

    assert settings.environment == "production"
    assert settings.endpoint == PRODUCTION_URL
    assert settings.read_only is False
    assert settings.allowed_operations == []
    assert settings.otp_secret is None
    assert settings.timeout_seconds == 30.0


def test_loads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("INWX_USERNAME", "agent")
    monkeypatch.setenv("INWX_PASSWORD", "secret")
    monkeypatch.setenv("INWX_ENVIRONMENT", "ote")
    monkeypatch.setenv("INWX_READ_ONLY", "true")

    settings = InwxSettings(_env_file=None)

    assert settings.username == "agent"
    assert settings.password.get_secret_value() == "secret"
    assert settings.endpoint == OTE_URL
    assert settings.read_only is True


def test_password_is_masked_in_repr():
    settings = InwxSettings(_env_file=None, password="hunter2-pw")

    assert "hunter2-pw" not in repr(settings)
    assert "hunter2-pw" not in str(settings)
    assert settings.password.get_secret_value() == "hunter2-pw"


@pytest.mark.parametrize(
    "raw",
    [
        "inwx_account_info, inwx_domain_check",
        '["inwx_account_info", "inwx_domain_check"]',
    ],
)
def test_allowed_operations_accepts_csv_or_json(monkeypatch, raw):
    monkeypatch.setenv("INWX_ALLOWED_OPERATIONS", raw)

    settings = InwxSettings(_env_file=None)

    assert settings.allowed_operations == ["inwx_account_info", "inwx_domain_check"]


def test_empty_allowed_operations_means_unrestricted(monkeypatch):
    monkeypatch.setenv("INWX_ALLOWED_OPERATIONS", "")

    policy = InwxSettings(_env_file=None).permission_policy()

    assert policy.allowed_operations == frozenset()
    assert policy.unrestricted is True


def test_permission_policy_from_settings():
    settings = InwxSettings(
        _env_file=None, read_only=True, allowed_operations=["inwx_account_info"]
    )

    policy = settings.permission_policy()

    assert policy.read_only is True
    assert policy.allowed_operations == frozenset({"inwx_account_info"})
    assert policy.unrestricted is False


def test_api_url_overrides_environment():
    settings = InwxSettings(_env_file=None, environment="ote", api_url="http://localhost:8080/jsonrpc/")

    assert settings.endpoint == "http://localhost:8080/jsonrpc/"


def test_invalid_environment_is_rejected():
    with pytest.raises(ValidationError):
        InwxSettings(_env_file=None, environment="staging")


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        InwxSettings(_env_file=None, timeout_seconds=0)


def test_loads_from_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("INWX_USERNAME=from-file\nINWX_ENVIRONMENT=ote\n", encoding="utf-8")

    settings = InwxSettings(_env_file=env_file)

    assert settings.username == "from-file"
    assert settings.environment == "ote"


def test_app_settings_are_cached(monkeypatch):
    get_app_settings.cache_clear()
    monkeypatch.setenv("INWX_USERNAME", "cached")
    try:
        first = get_app_settings()
        monkeypatch.setenv("INWX_USERNAME", "changed")

        assert get_app_settings() is first
        assert first.inwx.username == "cached"
    finally:
        get_app_settings.cache_clear()
