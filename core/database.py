# core/database.py
from __future__ import annotations

from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool


Base = declarative_base()


# =========================================================
# ENGINE / SESSION
# =========================================================

def build_engine(database_url: str) -> Engine:
    connect_args = {}
    engine_kwargs = {}

    # SQLite (local) requires check_same_thread=False
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}

        # In-memory SQLite lives in a single connection
        if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
            engine_kwargs["poolclass"] = StaticPool

    return create_engine(
        database_url,
        connect_args=connect_args,
        future=True,
        pool_pre_ping=True,
        **engine_kwargs,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        future=True,
    )


# =========================================================
# DEPENDENCY
# =========================================================

def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.ctx.session_factory()
    try:
        yield db
    finally:
        db.close()


# =========================================================
# INIT DB
# =========================================================

def init_db(engine: Engine) -> None:
    """
    Imports models lazily so every table is registered on Base
    before create_all, avoiding database <-> models import cycles.
    """
    import core.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
