"""
Card Vault — Admin Achievement Recheck Script

Re-runs the achievement check for one user against the configured database
and prints what was unlocked or revoked. Use after bulk imports or catalog
changes.

Usage:
    python scripts/recheck_achievements.py --user-id 3f0c6e1a-...
    python scripts/recheck_achievements.py --user-id 3f0c6e1a-... --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
import uuid

# Resolve project root so this script can be run from any working directory
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cardvault.main import build_tracker, configure_logging, create_db_engine


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Re-evaluate a user's achievements and persist the unlock diff.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/recheck_achievements.py --user-id 3f0c6e1a-5b7d-4c1e-9a2f-0d8e6b4c2a10
  python scripts/recheck_achievements.py --user-id 3f0c6e1a-5b7d-4c1e-9a2f-0d8e6b4c2a10 --dry-run
""",
    )
    parser.add_argument(
        "--user-id",
        type=uuid.UUID,
        required=True,
        help="UUID of the user to recheck.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the diff without writing it.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ERROR).",
    )
    return parser.parse_args()


async def recheck(user_id: uuid.UUID, dry_run: bool) -> tuple[list[str], list[str]]:
    """Returns (newly_unlocked, revoked) type keys."""
    engine, session_factory = create_db_engine()
    tracker = build_tracker(session_factory)

    try:
        if dry_run:
            result = await tracker.preview_achievement_check(user_id)
            return list(result.newly_unlocked), list(result.revoked)

        result = await tracker.run_achievement_check(user_id)
        return (
            [definition.type for definition in result.newly_unlocked],
            [definition.type for definition in result.revoked],
        )
    finally:
        await engine.dispose()


async def main() -> None:
    args = parse_args()
    configure_logging(args.log_level)

    print(f"Rechecking achievements: user_id={args.user_id}, dry_run={args.dry_run}")

    try:
        newly_unlocked, revoked = await recheck(args.user_id, args.dry_run)
    except Exception as e:
        print(f"Recheck failed: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"  newly_unlocked = {', '.join(newly_unlocked) or '-'}")
    print(f"  revoked        = {', '.join(revoked) or '-'}")
    if args.dry_run:
        print()
        print("Dry run: nothing was written.")


if __name__ == "__main__":
    asyncio.run(main())
