"""Exception hierarchy shared by the token engine and its embedding helpers."""
from __future__ import annotations


class TokenError(ValueError):
    """Base class for every error raised by :mod:`hsjwt`."""


class InvalidAlgorithm(TokenError):
    """The algorithm selector is not one of HS256, HS384 or HS512."""

    def __init__(self, algorithm: object) -> None:
        super().__init__(f"Unsupported algorithm: {algorithm!r}")
        self.algorithm = algorithm


class MalformedToken(TokenError):
    """A token or base64url segment could not be parsed."""


class EmptySecret(TokenError):
    """Signing or verifying was attempted with a zero-length secret."""

    def __init__(self) -> None:
        super().__init__("The signing secret must not be empty")


class SerializationError(TokenError):
    """The header or payload could not be serialized to JSON."""


class AuthenticationError(TokenError):
    """A bearer credential was missing, invalid or expired."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
