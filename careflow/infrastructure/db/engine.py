from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def create_db_engine(dsn: str, **kwargs) -> Engine:
    return create_engine(dsn, future=True, pool_pre_ping=True, **kwargs)


def create_schema(engine: Engine) -> None:
    # Registers the ORM tables on Base.metadata.
    from careflow.infrastructure.db.models import accounts  # noqa: F401

    Base.metadata.create_all(engine)
