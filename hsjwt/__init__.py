"""Stateless HMAC bearer tokens: issue, verify and base64url helpers."""
from __future__ import annotations

from .algorithms import Algorithm, sign
from .codec import decode, encode
from .errors import (
    AuthenticationError,
    EmptySecret,
    InvalidAlgorithm,
    MalformedToken,
    SerializationError,
    TokenError,
)
from .tokens import VerifiedToken, issue, verify

__all__ = [
    "Algorithm",
    "AuthenticationError",
    "EmptySecret",
    "InvalidAlgorithm",
    "MalformedToken",
    "SerializationError",
    "TokenError",
    "VerifiedToken",
    "decode",
    "encode",
    "issue",
    "sign",
    "verify",
]
