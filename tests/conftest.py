from __future__ import annotations

import pytest

from astarte_pairing.config import get_settings


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in ("ASTARTE_PAIRING_URL", "ASTARTE_REQUEST_TIMEOUT", "ASTARTE_USER_AGENT", "ASTARTE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
