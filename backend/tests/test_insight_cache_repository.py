from datetime import timedelta

from sqlalchemy import func, select

from euporia.database.models import InsightCacheEntry
from euporia.database.repositories.insight_cache_repository import (
    InsightCacheRepository,
    insight_cache_key,
)


def _row_count(db) -> int:
    return db.execute(select(func.count()).select_from(InsightCacheEntry)).scalar_one()


def test_cache_key_with_and_without_store():
    assert insight_cache_key("widget-1", "acme") == "acme:widget-1"
    assert insight_cache_key("widget-1") == "widget-1"
    assert insight_cache_key("widget-1", "") == "widget-1"


def test_scoped_and_unscoped_keys_are_distinct_slots(db_session, clock):
    repo = InsightCacheRepository(db_session, clock=clock)
    repo.save(insight_cache_key("widget-1", "acme"), {"score": 7})

    assert repo.get(insight_cache_key("widget-1", "acme")) == (True, {"score": 7})
    assert repo.get(insight_cache_key("widget-1")) == (False, None)
    assert repo.get(insight_cache_key("widget-1", "globex")) == (False, None)


def test_entry_valid_until_ttl_then_evicted_on_read(db_session, clock):
    repo = InsightCacheRepository(db_session, clock=clock)
    expires_at = repo.save("widget-1", {"score": 7}, ttl=timedelta(hours=24))
    assert expires_at == clock.now + timedelta(hours=24)

    clock.advance(hours=23, minutes=59, seconds=59)
    assert repo.get("widget-1") == (True, {"score": 7})

    clock.advance(seconds=1)
    assert repo.get("widget-1") == (False, None)
    assert _row_count(db_session) == 0


def test_expired_entry_stays_until_read(db_session, clock):
    repo = InsightCacheRepository(db_session, clock=clock)
    repo.save("widget-1", {"score": 1}, ttl=timedelta(minutes=5))

    clock.advance(hours=1)
    assert _row_count(db_session) == 1

    repo.get("widget-1")
    assert _row_count(db_session) == 0


def test_overwrite_resets_expiry(db_session, clock):
    repo = InsightCacheRepository(db_session, clock=clock)
    repo.save("widget-1", {"score": 1}, ttl=timedelta(hours=1))

    clock.advance(minutes=50)
    repo.save("widget-1", {"score": 2}, ttl=timedelta(hours=1))

    clock.advance(minutes=50)
    assert repo.get("widget-1") == (True, {"score": 2})


def test_overwrite_revives_expired_entry(db_session, clock):
    repo = InsightCacheRepository(db_session, clock=clock)
    repo.save("widget-1", {"score": 1}, ttl=timedelta(minutes=1))
    clock.advance(minutes=2)

    repo.save("widget-1", {"score": 3}, ttl=timedelta(minutes=1))
    assert repo.get("widget-1") == (True, {"score": 3})
    assert _row_count(db_session) == 1


def test_purge_expired_only_removes_expired(db_session, clock):
    repo = InsightCacheRepository(db_session, clock=clock)
    repo.save("short", {"v": 1}, ttl=timedelta(minutes=1))
    repo.save("long", {"v": 2}, ttl=timedelta(days=2))
    repo.save("other", {"v": 3}, ttl=timedelta(minutes=2))

    clock.advance(minutes=10)
    assert repo.count_expired() == 2
    assert repo.purge_expired() == 2

    assert _row_count(db_session) == 1
    assert repo.get("long") == (True, {"v": 2})


def test_purge_with_expired_rows_already_loaded(db_session, clock):
    repo = InsightCacheRepository(db_session, clock=clock)
    repo.save("stale", {"v": 1}, ttl=timedelta(minutes=1))
    repo.save("fresh", {"v": 2}, ttl=timedelta(hours=1))

    # Pull both rows into the session's identity map first
    assert len(db_session.execute(select(InsightCacheEntry)).scalars().all()) == 2

    clock.advance(minutes=5)
    assert repo.purge_expired() == 1
    assert repo.get("fresh") == (True, {"v": 2})
    assert repo.get("stale") == (False, None)


def test_expired_read_after_earlier_hit_in_same_session(db_session, clock):
    repo = InsightCacheRepository(db_session, clock=clock)
    repo.save("widget-1", {"score": 7}, ttl=timedelta(minutes=1))
    assert repo.get("widget-1") == (True, {"score": 7})

    clock.advance(minutes=1)
    assert repo.get("widget-1") == (False, None)
    assert _row_count(db_session) == 0
