"""Provision the schema and apply seed data.

Creates any missing tables, then inserts the operator account and the seed
customers when their tables are empty. Safe to run repeatedly.

Usage:
    python scripts/seed_db.py

Seed values come from the same environment variables the server reads
(DATABASE_URL, SEED_USERNAME, SEED_PASSWORD, SEED_CUSTOMERS).
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Add backend to path so we can import ledger modules without installing
SCRIPT_DIR = Path(__file__).resolve().parent
PROJECT_DIR = SCRIPT_DIR.parent
BACKEND_DIR = PROJECT_DIR / "backend"
sys.path.insert(0, str(BACKEND_DIR))

from ledger.config import settings
from ledger.database import (
    build_engine,
    build_session_factory,
    ensure_sqlite_dir,
    init_db,
)
from ledger.services.seed_service import seed_account, seed_customers


async def main() -> None:
    print("=" * 60)
    print(f"Seeding {settings.DATABASE_URL}")
    print("=" * 60)

    ensure_sqlite_dir(settings.DATABASE_URL)

    engine = build_engine()
    try:
        await init_db(engine)
        print("Schema ready")

        async with build_session_factory(engine)() as session:
            if await seed_account(session):
                print(f"  Created account '{settings.SEED_USERNAME}'")
            else:
                print("  Account already present, skipped")

            added = await seed_customers(session)
            if added:
                print(f"  Created {added} customers")
            else:
                print("  Customers already present, skipped")
    finally:
        await engine.dispose()

    print("Done.")


if __name__ == "__main__":
    asyncio.run(main())
