import pytest
from sqlalchemy.orm import Session

from euporia.database.engine import build_engine
from euporia.database.models import TasteProfile
from euporia.database.upsert import insert_for


def test_unsupported_backend_rejected_at_startup():
    with pytest.raises(ValueError, match="Unsupported database backend 'mysql'"):
        build_engine("mysql://user:pw@localhost/euporia")


def test_sqlite_engine_builds():
    engine = build_engine("sqlite://")
    try:
        assert engine.dialect.name == "sqlite"
        with Session(engine) as db:
            stmt = insert_for(db, TasteProfile)
            assert hasattr(stmt, "on_conflict_do_update")
    finally:
        engine.dispose()
