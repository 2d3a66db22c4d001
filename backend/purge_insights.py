"""
purge_insights.py
─────────────────
Deletes expired rows from the AI insight cache.

Expired entries are normally only removed when someone reads them, so keys
that are never looked up again stay in the table. Run this from cron if the
table grows.

Usage:
    python purge_insights.py              # delete every expired entry
    python purge_insights.py --dry-run    # only count them
    python purge_insights.py --database-url sqlite:///./other.db
"""

import argparse
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sqlalchemy.exc import SQLAlchemyError

from euporia.config.settings import settings
from euporia.database.engine import build_engine, build_session_factory, init_db
from euporia.database.repositories.insight_cache_repository import InsightCacheRepository

# ── ANSI colours ─────────────────────────────────────────────────────────────
RED    = "\033[91m"
GREEN  = "\033[92m"
YELLOW = "\033[93m"
BOLD   = "\033[1m"
RESET  = "\033[0m"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Purge expired entries from the insight cache")
    parser.add_argument("--dry-run", action="store_true", help="Count expired entries without deleting anything")
    parser.add_argument("--database-url", default=settings.database_url, help="Override DATABASE_URL")
    args = parser.parse_args(argv)

    engine = build_engine(args.database_url)
    init_db(engine)
    session_factory = build_session_factory(engine)

    try:
        with session_factory() as db:
            repo = InsightCacheRepository(db)
            expired = repo.count_expired()
            print(f"\n  Database         : {BOLD}{args.database_url}{RESET}")
            print(f"  Expired entries  : {BOLD}{expired}{RESET}")

            if args.dry_run:
                print(f"\n{YELLOW}[dry-run] No changes made.{RESET}")
                return 0

            removed = repo.purge_expired()
    except SQLAlchemyError as e:
        print(f"{RED}❌  Purge failed: {e}{RESET}")
        return 1
    finally:
        engine.dispose()

    print(f"\n{GREEN}✓  Removed {removed} expired insight(s).{RESET}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
