from __future__ import annotations

import pytest
import structlog

from hsjwt import config


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in ("HSJWT_JWT_SECRET_KEY", "HSJWT_JWT_SECRET", "JWT_SECRET", "JWT_SECRET_KEY", "APP_ENV"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HSJWT_APP_ENV", "test")
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()
    structlog.reset_defaults()
