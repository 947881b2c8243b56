from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..models import db as _db_models  # noqa: F401 - ensure models register with metadata
from .config import get_settings


def create_engine_for_url(database_url: str, echo: bool = False) -> Engine:
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url, echo=echo, connect_args={"check_same_thread": False}
        )
    # Server databases: drop stale pooled connections before handing them out.
    options: dict[str, Any] = {"pool_pre_ping": True, "pool_recycle": 3600}
    return create_engine(database_url, echo=echo, **options)


settings = get_settings()
engine = create_engine_for_url(settings.database_url, echo=settings.sql_echo)


def init_db() -> None:
    SQLModel.metadata.create_all(engine)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def set_engine(new_engine: Engine) -> None:
    global engine
    engine = new_engine
