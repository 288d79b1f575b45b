"""URL-safe base64 codec used for every token segment."""
from __future__ import annotations

import base64
import binascii
import re

from .errors import MalformedToken

_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def encode(data: bytes) -> str:
    """Encode ``data`` as unpadded base64url text."""

    return base64.urlsafe_b64encode(bytes(data)).rstrip(b"=").decode("ascii")


def decode(data: str) -> bytes:
    """Decode unpadded base64url text back into bytes.

    Raises :class:`MalformedToken` when ``data`` holds characters outside the
    URL-safe alphabet or has a length no base64 text can have.
    """

    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("ascii")
        except UnicodeDecodeError as exc:
            raise MalformedToken("base64url text must be ASCII") from exc
    if not _ALPHABET.fullmatch(data):
        raise MalformedToken("base64url text contains characters outside the URL-safe alphabet")
    remainder = len(data) % 4
    if remainder == 1:
        raise MalformedToken("base64url text has an impossible length")
    padding = "=" * ((4 - remainder) % 4)
    try:
        return base64.urlsafe_b64decode(data + padding)
    except binascii.Error as exc:  # pragma: no cover - alphabet and length already checked
        raise MalformedToken(str(exc)) from exc
