"""
Create or promote an admin account.

    python -m auth.bootstrap --email admin@example.org --password '...'

Run from the `api/` directory with DATABASE_URL set.
"""

from __future__ import annotations

import argparse
import asyncio
import getpass

from core import db
from core.logging_config import configure_logging

from . import service


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create or promote an admin user.")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="Prompted for when omitted.")
    parser.add_argument("--full-name", default=None)
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> dict:
    password = args.password or getpass.getpass("Password: ")
    await db.init_pool()
    try:
        return await service.create_or_promote_admin(
            email=args.email,
            password=password,
            full_name=args.full_name,
        )
    finally:
        await db.close_pool()


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    row = asyncio.run(_run(_parse_args(argv)))
    print("ADMIN_OK")
    print("id:", row["id"])
    print("email:", row["email"])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
