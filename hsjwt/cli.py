"""Command line access to the token engine.

Examples::

    hsjwt issue '{"role": "api_user"}' --secret s3cr3t
    hsjwt verify "$TOKEN" --secret s3cr3t --algorithm HS256
    hsjwt login

When ``--secret`` is omitted the configured ``HSJWT_JWT_SECRET_KEY`` is used.
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

import structlog

from . import codec
from .algorithms import Algorithm
from .auth import login
from .config import Settings, _collect_env, get_settings
from .errors import TokenError
from .logging_config import configure_logging
from .tokens import issue, verify

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hsjwt", description="Issue and verify HMAC-signed bearer tokens")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug events to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    algorithms = [algorithm.value for algorithm in Algorithm]

    issue_parser = subparsers.add_parser("issue", help="Sign a JSON payload")
    issue_parser.add_argument("payload", help="Payload as JSON text")
    issue_parser.add_argument("--secret", help="Signing secret (defaults to the configured one)")
    issue_parser.add_argument("--algorithm", choices=algorithms, help="HMAC algorithm")

    verify_parser = subparsers.add_parser("verify", help="Check a token signature")
    verify_parser.add_argument("token", help="Token to verify")
    verify_parser.add_argument("--secret", help="Signing secret (defaults to the configured one)")
    verify_parser.add_argument("--algorithm", choices=algorithms, help="HMAC algorithm")

    subparsers.add_parser("login", help="Mint a token for the configured API role")

    encode_parser = subparsers.add_parser("encode", help="base64url-encode UTF-8 text")
    encode_parser.add_argument("text")

    decode_parser = subparsers.add_parser("decode", help="Decode base64url text to UTF-8")
    decode_parser.add_argument("text")

    return parser


def _signing_options(args: argparse.Namespace) -> tuple[str, str]:
    if args.secret is not None:
        # Only the algorithm is read here, so the configured secret is not validated.
        algorithm = args.algorithm or Settings.model_validate(_collect_env()).jwt_algorithm
        return args.secret, algorithm
    settings = get_settings()
    return settings.jwt_secret, args.algorithm or settings.jwt_algorithm


def _run(args: argparse.Namespace) -> int:
    if args.command == "issue":
        try:
            payload = json.loads(args.payload)
        except json.JSONDecodeError as exc:
            print(f"error: payload is not valid JSON: {exc}", file=sys.stderr)
            return EXIT_ERROR
        secret, algorithm = _signing_options(args)
        print(issue(payload, secret, algorithm))
        return EXIT_OK

    if args.command == "verify":
        secret, algorithm = _signing_options(args)
        result = verify(args.token, secret, algorithm)
        print(json.dumps({"header": result.header, "payload": result.payload, "valid": result.valid}))
        return EXIT_OK if result.valid else EXIT_INVALID

    if args.command == "login":
        print(json.dumps(login()))
        return EXIT_OK

    if args.command == "encode":
        print(codec.encode(args.text.encode("utf-8")))
        return EXIT_OK

    if args.command == "decode":
        print(codec.decode(args.text).decode("utf-8", errors="replace"))
        return EXIT_OK

    raise AssertionError(f"unhandled command {args.command!r}")  # pragma: no cover


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING")
    try:
        return _run(args)
    except TokenError as exc:
        logger.warning("command_failed", command=args.command, error=type(exc).__name__)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR
