"""
Insight Cache Repository
────────────────────────
TTL cache for product insights computed elsewhere.

Expiry is enforced lazily: ``get`` deletes an entry it finds expired and
reports a miss. Nothing else evicts, except ``purge_expired`` which only runs
when something (``purge_insights.py``) calls it.
"""
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from euporia.database.documents import dump_document, load_document
from euporia.database.models.insight_cache import InsightCacheEntry
from euporia.database.upsert import insert_for
from euporia.utils.logger import get_logger
from euporia.utils.timestamps import as_utc, utcnow

logger = get_logger(__name__)

DEFAULT_TTL = timedelta(hours=24)


def insight_cache_key(product_handle: str, store: str | None = None) -> str:
    """``"store:handle"`` when a store is given, otherwise the bare handle."""
    if store:
        return f"{store}:{product_handle}"
    return product_handle


class InsightCacheRepository:
    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.clock = clock

    def get(self, cache_key: str) -> tuple[bool, Any]:
        """Return ``(hit, insight)``. Expired entries are deleted and reported as a miss."""
        stmt = (
            select(InsightCacheEntry)
            .where(InsightCacheEntry.cache_key == cache_key)
            .execution_options(populate_existing=True)
        )
        row = self.db.execute(stmt).scalar_one_or_none()
        if row is None:
            logger.debug("get — miss: key=%s", cache_key)
            return False, None

        now = self.clock()
        if as_utc(row.expires_at) <= now:
            # Predicate re-checks expiry so a concurrent fresh save isn't evicted.
            # No session sync: the loaded row is naive on SQLite and can't be compared in Python
            self.db.execute(
                delete(InsightCacheEntry).where(
                    InsightCacheEntry.cache_key == cache_key,
                    InsightCacheEntry.expires_at <= now,
                ).execution_options(synchronize_session=False)
            )
            self.db.commit()
            logger.info("get — expired entry evicted: key=%s expires_at=%s", cache_key, row.expires_at)
            return False, None

        logger.debug("get — hit: key=%s", cache_key)
        return True, load_document(row.insight_json)

    def save(self, cache_key: str, insight: Any, ttl: timedelta = DEFAULT_TTL) -> datetime:
        insight_json = dump_document(insight)
        now = self.clock()
        expires_at = now + ttl

        stmt = insert_for(self.db, InsightCacheEntry).values(
            cache_key=cache_key,
            insight_json=insight_json,
            expires_at=expires_at,
            created_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["cache_key"],
            set_={
                "insight_json": stmt.excluded.insight_json,
                "expires_at": stmt.excluded.expires_at,
                "created_at": stmt.excluded.created_at,
            },
        )
        self.db.execute(stmt)
        self.db.commit()
        logger.info("save — insight cached: key=%s expires_at=%s", cache_key, expires_at.isoformat())
        return expires_at

    def count_expired(self) -> int:
        stmt = select(func.count()).select_from(InsightCacheEntry).where(
            InsightCacheEntry.expires_at <= self.clock()
        )
        return self.db.execute(stmt).scalar_one()

    def purge_expired(self) -> int:
        """Delete every expired entry. Returns the number of rows removed."""
        result = self.db.execute(
            delete(InsightCacheEntry).where(InsightCacheEntry.expires_at <= self.clock())
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        logger.info("purge_expired — removed=%d", result.rowcount)
        return result.rowcount
