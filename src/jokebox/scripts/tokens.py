"""Mint bearer tokens for local development and manual API testing.

Real tokens come from the external auth service; these carry the same
``user_id`` and ``is_admin`` claims and are signed with ``SECRET_KEY``.
"""
from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from jokebox.core.security import create_access_token


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("user_id", type=int, help="numeric user id to embed")
    parser.add_argument(
        "--admin",
        action="store_true",
        help="grant the privileged (moderator) flag",
    )
    parser.add_argument(
        "--header",
        action="store_true",
        help="print a ready-to-use Authorization header instead of the bare token",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.user_id <= 0:
        print("user_id must be positive", file=sys.stderr)
        return 2

    token = create_access_token(args.user_id, is_admin=args.admin)
    print(f"Authorization: Bearer {token}" if args.header else token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
