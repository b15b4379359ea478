#!/usr/bin/env python3
"""
Out-of-band user removal. There is no API endpoint for deleting accounts;
operators run this against the configured database.
  python scripts/delete_user.py someone@example.com
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.core.sanitize import sanitize_email  # noqa: E402
from app.db.repositories.user_repository import UserRepository  # noqa: E402
from app.db.session import async_session_maker, engine  # noqa: E402


async def delete_user(email: str) -> bool:
    """Delete the account with this email. Returns False when no such user exists."""
    async with async_session_maker() as session:
        repo = UserRepository(session)
        user = await repo.get_by_email(sanitize_email(email))
        if not user:
            return False
        await repo.delete(user)
        await session.commit()
        return True


async def _run(email: str) -> int:
    try:
        deleted = await delete_user(email)
    finally:
        await engine.dispose()
    if deleted:
        print("Deleted user:", email)
    else:
        print("User not found:", email)
    return 0


def main():
    ap = argparse.ArgumentParser(description="Delete a user account by email")
    ap.add_argument("email")
    args = ap.parse_args()
    sys.exit(asyncio.run(_run(args.email)))


if __name__ == "__main__":
    main()
