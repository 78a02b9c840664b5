#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the configured database is reachable and show what the
store currently holds.
Usage: python scripts/check_connections.py
"""
import logging

from app.core.config import get_settings
from app.core.logging_config import configure_logging
from app.db.session import check_db_connection
from app.services.placement_system import build_store


def main():
    configure_logging()
    settings = get_settings()
    print("=" * 50)
    print("PLACEMENT SCHEDULER - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Database...")
    if not settings.sqlalchemy_url:
        print("    ⚠️  No DATABASE_URL / POSTGRES_HOST configured: in-memory store (nothing persisted)")
    else:
        print(f"    Host: {settings.postgres_host or settings.database_url.split('@')[-1]}")
        if check_db_connection():
            print("    ✅ Database: CONNECTED")
        else:
            print("    ❌ Database: FAILED")
            return

    print("\n[2] Loading placement state...")
    store = build_store(settings)
    state = store.state
    print(f"    Store: {type(store).__name__}")
    print(f"    Companies: {len(state.companies)}")
    print(f"    Students: {len(state.students)}")
    booked = sum(1 for s in state.slots if s.booked)
    print(f"    Slots: {len(state.slots)} ({booked} booked)")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)


if __name__ == "__main__":
    logging.captureWarnings(True)
    main()
