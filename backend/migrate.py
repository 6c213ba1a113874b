#!/usr/bin/env python3
"""
Create the users/projects/bids tables if they are missing.

The API does the same on startup; this script is for bootstrapping a database
before the first deploy:

    python backend/migrate.py
"""

import sys
from pathlib import Path

from sqlalchemy import inspect

# Add repo root to path so `backend.app` resolves when run as a script.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from backend.app.database import engine, init_db  # noqa: E402

REQUIRED_TABLES = ("users", "projects", "bids")


def migrate() -> bool:
    print("Initializing database with all models...")
    init_db()

    existing = set(inspect(engine).get_table_names())
    missing = [t for t in REQUIRED_TABLES if t not in existing]
    if missing:
        print(f"✗ Tables not found: {', '.join(missing)}")
        return False

    print(f"✓ Tables ready: {', '.join(REQUIRED_TABLES)}")
    return True


if __name__ == "__main__":
    success = migrate()
    sys.exit(0 if success else 1)
