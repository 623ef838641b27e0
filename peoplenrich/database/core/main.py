# peoplenrich/database/core/main.py
from __future__ import annotations

import time

from sqlalchemy import MetaData, create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from peoplenrich.common.logging import get_logger
from peoplenrich.common.settings import get_settings

_settings = get_settings()
logger = get_logger(__name__)

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


engine = create_engine(
    _settings.database_url,
    echo=_settings.db.echo,
    pool_size=_settings.db.pool_size,
    max_overflow=_settings.db.max_overflow,
    pool_pre_ping=_settings.db.pool_pre_ping,
    pool_recycle=_settings.db.pool_recycle,
    future=True,
)

SessionLocal = sessionmaker(bind=engine, expire_on_commit=False, future=True, autoflush=False)


def wait_for_database(
    bind: Engine | None = None,
    *,
    timeout_sec: float | None = None,
    interval_sec: float | None = None,
) -> None:
    """
    Ping the database until it answers or the deadline passes.
    Raises TimeoutError carrying the last connection error.
    """
    bind = bind or engine
    timeout_sec = _settings.db.connect_timeout_sec if timeout_sec is None else timeout_sec
    interval_sec = _settings.db.connect_interval_sec if interval_sec is None else interval_sec
    deadline = time.monotonic() + timeout_sec

    while True:
        try:
            with bind.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("successfully connected to database")
            return
        except OperationalError as e:
            if time.monotonic() + interval_sec > deadline:
                raise TimeoutError(
                    f"failed to connect to database within {timeout_sec}s"
                ) from e
            logger.warning("database not ready, retrying in %.1fs", interval_sec)
            time.sleep(interval_sec)


def create_tables(bind: Engine | None = None) -> None:
    """Create missing tables from the model metadata (no migrations)."""
    import peoplenrich.database.models  # noqa: F401  registers models on Base.metadata

    Base.metadata.create_all(bind=bind or engine)
