"""Shared fixtures."""

import os

import pytest

from core.settings.modules.inwx_settings import InwxSettings
from tests.mocks.mock_inwx_client import MockClientFactory


@pytest.fixture(autouse=True)
def _isolate_inwx_env(monkeypatch):
    """Keep real INWX_* variables from leaking into unit tests."""
    for key in list(os.environ):
        if key.startswith("INWX_") and not key.startswith("INWX_OTE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def inwx_settings() -> InwxSettings:
    return InwxSettings(
        _env_file=None,
        username="u",
        password="p",
        environment="ote",
    )


@pytest.fixture
def client_factory() -> MockClientFactory:
    return MockClientFactory(
        {
            "domain.check": {
                "domain": [
                    {"domain": "example.com", "avail": 1, "status": "free", "price": 9.99, "currency": "EUR"}
                ]
            },
            "domain.list": {"count": 1, "domain": [{"domain": "example.com"}]},
        }
    )
