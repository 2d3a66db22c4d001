from datetime import datetime, timedelta, timezone

from purge_insights import main
from euporia.database.engine import build_engine, build_session_factory, init_db
from euporia.database.repositories.insight_cache_repository import InsightCacheRepository


def _seed(url: str) -> None:
    engine = build_engine(url)
    init_db(engine)
    with build_session_factory(engine)() as db:
        past = lambda: datetime.now(timezone.utc) - timedelta(days=2)  # noqa: E731
        InsightCacheRepository(db, clock=past).save("stale", {"v": 1}, ttl=timedelta(hours=1))
        InsightCacheRepository(db).save("fresh", {"v": 2}, ttl=timedelta(hours=1))
    engine.dispose()


def _keys(url: str) -> set[str]:
    engine = build_engine(url)
    with engine.connect() as conn:
        rows = conn.exec_driver_sql("SELECT cache_key FROM ai_insights_cache").all()
    engine.dispose()
    return {r[0] for r in rows}


def test_dry_run_keeps_rows(tmp_path, capsys):
    url = f"sqlite:///{tmp_path / 'cache.db'}"
    _seed(url)

    assert main(["--dry-run", "--database-url", url]) == 0
    assert _keys(url) == {"stale", "fresh"}
    assert "dry-run" in capsys.readouterr().out


def test_purge_removes_only_expired(tmp_path):
    url = f"sqlite:///{tmp_path / 'cache.db'}"
    _seed(url)

    assert main(["--database-url", url]) == 0
    assert _keys(url) == {"fresh"}
