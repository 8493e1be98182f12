from __future__ import annotations
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import DATABASE_URL


def make_engine(url: str):
    u = make_url(url)
    if u.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    kwargs = {"connect_args": {"check_same_thread": False}}
    if u.database in (None, "", ":memory:"):
        # one shared connection, otherwise every session sees an empty db
        kwargs["poolclass"] = StaticPool
    else:
        Path(u.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, **kwargs)


class Base(DeclarativeBase):
    pass


engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
