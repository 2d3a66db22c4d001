"""
Dialect-aware ``INSERT ... ON CONFLICT`` helper.

SQLite and PostgreSQL both expose ``insert().on_conflict_do_update()`` /
``on_conflict_do_nothing()`` with the same signature, so repositories build
their upserts through :func:`insert_for` and stay single atomic statements.
``build_engine`` rejects any other backend up front.
"""
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}

SUPPORTED_DIALECTS = frozenset(_INSERTS)


def insert_for(db: Session, model):
    dialect = db.get_bind().dialect.name
    try:
        return _INSERTS[dialect](model)
    except KeyError:
        raise ValueError(f"Upsert is not supported for dialect '{dialect}'") from None
