# tests/conftest.py
from __future__ import annotations
import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from peoplenrich.database.core.main import create_tables
from peoplenrich.database.models import Base  # <-- imports models/metadata
from tests.support.postgres import start_postgres


@pytest.fixture(scope="session")
def _postgres_container():
    pg = start_postgres()
    try:
        yield pg.get_connection_url()
    finally:
        pg.stop()


@pytest.fixture(scope="session")
def db_engine(_postgres_container) -> Engine:
    engine = create_engine(_postgres_container, future=True)

    # No migrations here; tables come straight from the models
    create_tables(engine)

    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
