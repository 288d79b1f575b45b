"""Settings-driven helpers for services that embed the token engine."""
from __future__ import annotations

import math
import time
from datetime import timedelta
from typing import Any, Mapping, Optional

import structlog

from .config import Settings, get_settings
from .errors import AuthenticationError
from .tokens import issue, verify

logger = structlog.get_logger(__name__)

BEARER_SCHEME = "bearer"


def create_access_token(
    claims: Mapping[str, Any],
    expires_delta: Optional[timedelta] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Issue a token for ``claims`` with ``iat``/``exp`` timing claims added.

    The lifetime defaults to ``jwt_expiration_minutes``; a configured value of
    ``0`` leaves the ``exp`` claim out unless ``expires_delta`` is given.
    """

    settings = settings or get_settings()
    to_encode = dict(claims)
    now = int(time.time())
    to_encode.setdefault("iat", now)
    if expires_delta is None and settings.jwt_expiration_minutes:
        expires_delta = timedelta(minutes=settings.jwt_expiration_minutes)
    if expires_delta is not None:
        to_encode["exp"] = now + int(expires_delta.total_seconds())
    return issue(to_encode, settings.jwt_secret_key, settings.jwt_algorithm)


def login(settings: Optional[Settings] = None) -> dict[str, str]:
    """Mint a token for the configured API role."""

    settings = settings or get_settings()
    token = create_access_token({"role": settings.login_role}, settings=settings)
    return {"token": token, "token_type": "bearer"}


def parse_authorization_header(value: Optional[str]) -> str:
    """Return the credential from an ``Authorization: Bearer <token>`` value."""

    if not value or not value.strip():
        raise AuthenticationError("missing bearer token")
    scheme, _, credential = value.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        raise AuthenticationError("authorization scheme must be Bearer")
    credential = credential.strip()
    if not credential:
        raise AuthenticationError("missing bearer token")
    return credential


def authenticate(
    token: str,
    settings: Optional[Settings] = None,
    now: Optional[float] = None,
) -> dict[str, Any]:
    """Verify ``token`` with the configured secret and return its trusted claims.

    Raises :class:`AuthenticationError` for a bad signature, a non-object
    payload or an ``exp`` claim in the past. Structural problems surface as
    the underlying :class:`~hsjwt.errors.TokenError`.
    """

    settings = settings or get_settings()
    result = verify(token, settings.jwt_secret_key, settings.jwt_algorithm)
    if not result.valid:
        logger.info("authentication_failed", reason="signature")
        raise AuthenticationError("invalid token signature")
    claims = result.payload
    if not isinstance(claims, dict):
        logger.info("authentication_failed", reason="claims")
        raise AuthenticationError("token claims must be a JSON object")
    exp = claims.get("exp")
    if exp is not None:
        if isinstance(exp, bool) or not isinstance(exp, (int, float)) or not math.isfinite(exp):
            logger.info("authentication_failed", reason="exp")
            raise AuthenticationError("invalid exp claim")
        current = time.time() if now is None else now
        if exp <= current:
            logger.info("authentication_failed", reason="expired")
            raise AuthenticationError("token has expired")
    return claims
