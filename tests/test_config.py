from __future__ import annotations

import pytest

from hsjwt.config import DEVELOPMENT_SECRET, get_settings


def test_defaults():
    settings = get_settings()
    assert settings.app_env == "test"
    assert settings.jwt_algorithm == "HS256"
    assert settings.jwt_secret == DEVELOPMENT_SECRET
    assert settings.login_role == "api_user"


def test_prefixed_environment_variables(monkeypatch):
    monkeypatch.setenv("HSJWT_JWT_SECRET_KEY", "env-secret")
    monkeypatch.setenv("HSJWT_JWT_ALGORITHM", "HS512")
    monkeypatch.setenv("HSJWT_JWT_EXPIRATION_MINUTES", "0")
    monkeypatch.setenv("HSJWT_LOGIN_ROLE", "api_anon")
    settings = get_settings()
    assert settings.jwt_secret == "env-secret"
    assert settings.jwt_algorithm == "HS512"
    assert settings.jwt_expiration_minutes == 0
    assert settings.login_role == "api_anon"


def test_secret_is_not_echoed(monkeypatch):
    monkeypatch.setenv("HSJWT_JWT_SECRET", "hidden-value")
    settings = get_settings()
    assert "hidden-value" not in repr(settings)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


@pytest.mark.parametrize("secret", ["change-me", "POSTGREST_JWT_SECRET", "   "])
def test_placeholder_secrets_fail_fast(monkeypatch, secret):
    monkeypatch.setenv("HSJWT_JWT_SECRET_KEY", secret)
    with pytest.raises(ValueError, match="HSJWT_JWT_SECRET_KEY"):
        get_settings()


def test_development_secret_rejected_in_production(monkeypatch):
    monkeypatch.setenv("HSJWT_APP_ENV", "production")
    with pytest.raises(ValueError, match="production"):
        get_settings()


def test_unsupported_algorithm_is_rejected(monkeypatch):
    monkeypatch.setenv("HSJWT_JWT_ALGORITHM", "none")
    with pytest.raises(ValueError):
        get_settings()
