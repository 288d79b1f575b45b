"""HMAC algorithm selection and signing."""
from __future__ import annotations

import enum
import hashlib
import hmac
from typing import Any, Callable, Union

from pydantic import SecretStr

from .errors import EmptySecret, InvalidAlgorithm

Secret = Union[str, bytes, bytearray, SecretStr]


class Algorithm(str, enum.Enum):
    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"

    @property
    def digest(self) -> Callable[..., Any]:
        return _DIGESTS[self]

    @property
    def digest_size(self) -> int:
        return self.digest().digest_size

    @classmethod
    def parse(cls, value: object) -> "Algorithm":
        """Resolve ``value`` to an :class:`Algorithm` or raise ``InvalidAlgorithm``.

        Names are matched exactly, so ``"hs256"`` and ``"none"`` are rejected.
        """

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        raise InvalidAlgorithm(value)


_DIGESTS = {
    Algorithm.HS256: hashlib.sha256,
    Algorithm.HS384: hashlib.sha384,
    Algorithm.HS512: hashlib.sha512,
}


def secret_bytes(secret: Secret) -> bytes:
    """Normalise a caller-supplied secret and reject empty ones."""

    if isinstance(secret, SecretStr):
        secret = secret.get_secret_value()
    if isinstance(secret, str):
        raw = secret.encode("utf-8")
    elif isinstance(secret, (bytes, bytearray)):
        raw = bytes(secret)
    else:
        raise TypeError(f"secret must be str, bytes or SecretStr, not {type(secret).__name__}")
    if not raw:
        raise EmptySecret()
    return raw


def sign(message: bytes, secret: Secret, algorithm: Algorithm | str = Algorithm.HS256) -> bytes:
    """Return the raw HMAC of ``message`` under ``secret``."""

    resolved = Algorithm.parse(algorithm)
    key = secret_bytes(secret)
    return hmac.new(key, bytes(message), resolved.digest).digest()
