"""Configuration for the embedding helpers, handled with Pydantic models."""
from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Literal

from dotenv import dotenv_values
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, SecretStr

ENV_PREFIX = "HSJWT_"
DEVELOPMENT_SECRET = "local-dev-secret"
PLACEHOLDER_SECRETS = frozenset(
    {
        "",
        "change-me",
        "changeme",
        "secret",
        "super-secret",
        "please-change-this-secret",
        "POSTGREST_JWT_SECRET",
    }
)


def _collect_env(prefix: str = ENV_PREFIX) -> dict[str, Any]:
    """Load .env + OS variables and normalise keys."""

    raw: dict[str, Any] = {}
    sources = [dotenv_values(".env"), os.environ]
    for source in sources:
        for key, value in source.items():
            if value in (None, ""):
                continue
            key_upper = key.upper()
            if key_upper.startswith(prefix):
                stripped = key_upper[len(prefix) :]
            else:
                stripped = key_upper
            raw[stripped] = value
            raw[stripped.lower()] = value
    return raw


class Settings(BaseModel):
    """Secret, algorithm and lifetime used when minting and checking tokens."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    app_env: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        validation_alias=AliasChoices("APP_ENV", "ENVIRONMENT"),
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL"),
    )
    log_json: bool = Field(
        default=False,
        validation_alias=AliasChoices("LOG_JSON"),
    )

    jwt_secret_key: SecretStr = Field(
        default=SecretStr(DEVELOPMENT_SECRET),
        validation_alias=AliasChoices("JWT_SECRET", "JWT_SECRET_KEY"),
    )
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256",
        validation_alias=AliasChoices("JWT_ALGORITHM"),
    )
    jwt_expiration_minutes: int = Field(
        default=30,
        ge=0,
        validation_alias=AliasChoices("JWT_EXPIRATION_MINUTES"),
    )
    login_role: str = Field(
        default="api_user",
        min_length=1,
        validation_alias=AliasChoices("LOGIN_ROLE"),
    )

    @property
    def jwt_secret(self) -> str:
        """Return the decrypted JWT secret string."""

        return self.jwt_secret_key.get_secret_value()

    @classmethod
    def load(cls) -> "Settings":
        data = _collect_env()
        instance = cls.model_validate(data)
        _validate_required_settings(instance)
        return instance


@lru_cache()
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    return Settings.load()


def _validate_required_settings(settings: Settings) -> None:
    """Fail fast when the signing secret is missing or a placeholder."""

    missing: dict[str, str] = {}
    secret = settings.jwt_secret
    if secret.strip() in PLACEHOLDER_SECRETS:
        missing["HSJWT_JWT_SECRET_KEY"] = "define a strong signing secret"
    elif settings.app_env == "production" and secret == DEVELOPMENT_SECRET:
        missing["HSJWT_JWT_SECRET_KEY"] = "the development secret cannot be used in production"
    if missing:
        details = "; ".join(f"{key}: {reason}" for key, reason in missing.items())
        raise ValueError(f"Incomplete configuration: {details}")
