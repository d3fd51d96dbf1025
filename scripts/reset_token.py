"""Issue or check a password reset token with the configured secret.

Usage:
    uv run python -m scripts.reset_token issue <email> [--ttl-hours N]
    uv run python -m scripts.reset_token validate <token>

Reads RESET_TOKEN_SECRET and RESET_TOKEN_SIGNATURE from the environment
or .env. validate exits 1 when the token is not valid.
"""

from __future__ import annotations

import argparse
import sys

from app.core.composition import build_token_codec
from app.domain.exceptions import ValidationException
from app.shared.telemetry.logging import setup_logging


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="reset_token", description=__doc__.splitlines()[0])
    sub = parser.add_subparsers(dest="command", required=True)

    issue = sub.add_parser("issue", help="Print a reset token for an email")
    issue.add_argument("email")
    issue.add_argument("--ttl-hours", type=float, default=None)

    validate = sub.add_parser("validate", help="Check a reset token")
    validate.add_argument("token")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    try:
        codec = build_token_codec()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    setup_logging()

    if args.command == "issue":
        try:
            if args.ttl_hours is None:
                token = codec.issue(args.email)
            else:
                token = codec.issue(args.email, args.ttl_hours)
        except ValidationException as e:
            print(e.message, file=sys.stderr)
            return 1
        print(token)
        return 0

    result = codec.validate(args.token)
    if result.valid:
        print(f"valid: {result.email}")
        return 0
    print(f"invalid: {result.message}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
