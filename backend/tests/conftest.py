from datetime import datetime, timedelta, timezone

import pytest

from euporia.config.settings import Settings
from euporia.database.engine import Base, build_engine, build_session_factory, init_db
from euporia.main import create_app


class FakeClock:
    """Controllable ``datetime.now(timezone.utc)`` stand-in."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def db_session():
    # Fresh in-memory database per test
    engine = build_engine("sqlite://")
    init_db(engine)
    session_factory = build_session_factory(engine)

    db = session_factory()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_app():
    def _make(**overrides):
        return create_app(Settings(database_url="sqlite://", **overrides))

    return _make


@pytest.fixture
def app(make_app):
    return make_app()
