"""Issue and verify compact HMAC-signed bearer tokens.

Tokens use the JWS compact serialization (``header.payload.signature``) with
the HS256, HS384 and HS512 algorithms. Both operations are pure: the secret is
passed on every call and nothing is cached between calls.
"""

from __future__ import annotations

import hmac
import json
from dataclasses import dataclass
from typing import Any, Mapping

import structlog
from pydantic import BaseModel

from . import codec
from .algorithms import Algorithm, Secret, secret_bytes, sign
from .errors import MalformedToken, SerializationError

logger = structlog.get_logger(__name__)

TOKEN_TYPE = "JWT"


@dataclass(frozen=True)
class VerifiedToken:
    """Outcome of :func:`verify`.

    ``header`` and ``payload`` are returned even when ``valid`` is false so
    callers can inspect rejected claims, but they must not be trusted then.
    """

    header: Mapping[str, Any]
    payload: Any
    valid: bool


def _serialize(value: Any, what: str) -> bytes:
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    try:
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(f"Cannot serialize token {what}: {exc}") from exc
    return text.encode("utf-8")


def _deserialize(segment: str, what: str) -> Any:
    raw = codec.decode(segment)
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise MalformedToken(f"Token {what} is not valid JSON") from exc


def _signature_segment(signing_input: str, key: bytes, algorithm: Algorithm) -> str:
    return codec.encode(sign(signing_input.encode("ascii"), key, algorithm))


def issue(payload: Any, secret: Secret, algorithm: Algorithm | str = Algorithm.HS256) -> str:
    """Build a signed token carrying ``payload``."""

    resolved = Algorithm.parse(algorithm)
    key = secret_bytes(secret)
    header = {"alg": resolved.value, "typ": TOKEN_TYPE}
    header_segment = codec.encode(_serialize(header, "header"))
    payload_segment = codec.encode(_serialize(payload, "payload"))
    signing_input = f"{header_segment}.{payload_segment}"
    signature_segment = _signature_segment(signing_input, key, resolved)
    logger.debug("token_issued", alg=resolved.value, payload_bytes=len(payload_segment))
    return f"{signing_input}.{signature_segment}"


def verify(token: str, secret: Secret, algorithm: Algorithm | str = Algorithm.HS256) -> VerifiedToken:
    """Check ``token`` against ``secret`` using the caller's ``algorithm``.

    The ``alg`` recorded in the token header is never consulted, so a token
    cannot choose its own verification algorithm. Raises
    :class:`MalformedToken` for structural problems only; a signature that does
    not match yields ``valid=False``.
    """

    resolved = Algorithm.parse(algorithm)
    key = secret_bytes(secret)
    if not isinstance(token, str):
        raise MalformedToken("Token must be a string")

    segments = token.split(".")
    if len(segments) != 3 or not all(segments):
        raise MalformedToken(f"Token must have 3 non-empty segments, found {len(segments)}")
    header_segment, payload_segment, signature_segment = segments

    header = _deserialize(header_segment, "header")
    if not isinstance(header, dict):
        raise MalformedToken("Token header must be a JSON object")
    payload = _deserialize(payload_segment, "payload")

    expected = _signature_segment(f"{header_segment}.{payload_segment}", key, resolved)
    valid = hmac.compare_digest(expected.encode("ascii"), signature_segment.encode("utf-8", "surrogatepass"))
    if not valid:
        logger.debug("token_signature_mismatch", alg=resolved.value)
    return VerifiedToken(header=header, payload=payload, valid=valid)
