"""Create the record store and seed it from the command line.

Usage:
    cd /path/to/eduresolve
    python -m scripts.run_seeds
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import asyncio
import logging

from eduresolve.db.session import build_store

logging.basicConfig(level=logging.INFO)


async def seed_all():
    """Initialize the store: table, administrator account and sample complaints."""
    store = build_store()
    try:
        await store.initialize()
        users = await store.list_users()
        complaints = await store.list_complaints()
        print(f"Store ready: {len(users)} users, {len(complaints)} complaints")
    finally:
        await store.dispose()


if __name__ == "__main__":
    asyncio.run(seed_all())
