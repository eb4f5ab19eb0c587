#!/usr/bin/env python3
"""Seed the database with demo course badges for one principal.

Usage:
    python -m scripts.seed_badges [principal]
    # or from project root:
    python scripts/seed_badges.py [principal]
"""

import asyncio
import sys
from pathlib import Path

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from badge_ledger.common.config import get_settings
from badge_ledger.common.database import DatabaseManager
from badge_ledger.events.service import BadgeEventService
from badge_ledger.registry.service import BadgeRegistry

DEMO_URIS = [
    "https://badges.example.edu/python-fundamentals",
    "https://badges.example.edu/data-structures",
    "https://badges.example.edu/algorithms-101",
    "https://badges.example.edu/web-apis",
    "https://badges.example.edu/capstone-project",
]


async def seed_badges(principal: str) -> None:
    settings = get_settings()
    db = DatabaseManager(settings)
    await db.init()
    await db.create_all()

    registry = BadgeRegistry(settings, event_service=BadgeEventService(settings))

    async with db.get_session() as session:
        # Already-seeded URIs are taken and get skipped by the batch
        minted = await registry.batch_mint(session, principal, DEMO_URIS)
        for badge_id in minted:
            uri = await registry.get_uri(session, badge_id)
            print(f"  [minted] #{badge_id} {uri}")
        skipped = len(DEMO_URIS) - len(minted)
        if skipped:
            print(f"  [skip] {skipped} URIs already issued")

    await db.close()
    print(f"\nDone. {len(minted)} badges issued to {principal}.")


if __name__ == "__main__":
    asyncio.run(seed_badges(sys.argv[1] if len(sys.argv) > 1 else "demo-learner"))
