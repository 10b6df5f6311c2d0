from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


@lru_cache(maxsize=4)
def get_engine(dsn: str):
    connect_args = {"check_same_thread": False} if dsn.startswith("sqlite") else {}
    return create_engine(dsn, future=True, pool_pre_ping=True, connect_args=connect_args)


def create_schema(engine) -> None:
    # Registers the tables on Base.metadata.
    from todo_backend.infrastructure.db.models import users  # noqa: F401

    Base.metadata.create_all(engine)
