"""Re-moderate comments left in ``pending`` by an interrupted submission.

Run periodically (cron, systemd timer)::

    python -m comment_stage.scripts.reconcile_pending --older-than 300
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import timedelta

from comment_stage.core.settings import settings
from comment_stage.db.session import SessionLocal
from comment_stage.services.comments import CommentService
from comment_stage.services.moderation import GeminiModerationClient, ModerationOracle

logger = logging.getLogger(__name__)


async def reconcile(older_than: timedelta, oracle: ModerationOracle) -> int:
    """Drive every stale pending comment to a terminal status."""
    db = SessionLocal()
    try:
        return await CommentService(db, oracle).reconcile_pending(older_than)
    finally:
        db.close()


async def _run(older_than: timedelta) -> int:
    oracle = GeminiModerationClient()
    try:
        return await reconcile(older_than, oracle)
    finally:
        await oracle.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--older-than",
        type=int,
        default=settings.pending_reconcile_after_seconds,
        metavar="SECONDS",
        help="Only reconcile comments pending for at least this many seconds "
        f"(default: {settings.pending_reconcile_after_seconds})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.older_than < 0:
        print("--older-than must be zero or positive", file=sys.stderr)
        return 2

    logging.basicConfig(level=settings.log_level.upper())
    count = asyncio.run(_run(timedelta(seconds=args.older_than)))
    print(f"Reconciled {count} pending comment(s).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
