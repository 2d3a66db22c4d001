"""
Storage engine
──────────────
Builds the SQLAlchemy engine + session factory for the app.

Nothing here is module-global: ``create_app`` builds one engine, keeps the
session factory on ``app.state`` and every request gets its own ``Session``
through ``get_db``. Repositories receive that session in their constructor.
"""
from collections.abc import Iterator

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from euporia.database.upsert import SUPPORTED_DIALECTS
from euporia.utils.logger import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    pass


def _is_in_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def build_engine(url: str, echo: bool = False) -> Engine:
    backend = make_url(url).get_backend_name()
    if backend not in SUPPORTED_DIALECTS:
        raise ValueError(
            f"Unsupported database backend '{backend}' (expected one of: {', '.join(sorted(SUPPORTED_DIALECTS))})"
        )

    kwargs: dict = {"echo": echo}

    if url.startswith("sqlite"):
        # Request handlers run in FastAPI's threadpool
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_in_memory_sqlite(url):
            # One shared connection, otherwise every checkout sees an empty database
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(url, **kwargs)
    logger.debug("build_engine — dialect=%s echo=%s", engine.dialect.name, echo)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create all tables. Models must be imported so they register on ``Base.metadata``."""
    from euporia.database import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
