# tests/services/conftest.py
from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional
from uuid import UUID, uuid4

import pytest
from sqlalchemy.orm import Session
from starlette.testclient import TestClient

from peoplenrich.database.query.builder import Statement
from peoplenrich.domain.entities.person import Person, PersonDraft
from peoplenrich.domain.enums.attribute_kind import AttributeKind
from peoplenrich.domain.errors import LookupFailed, NotFound
from peoplenrich.services.api.app import create_app
from peoplenrich.services.api.deps import get_attribute_lookup, get_person_service, transactional_session
from peoplenrich.services.enrichment.pipeline import EnrichmentPipeline
from peoplenrich.services.people.service import PersonService


class FakeLookup:
    """
    In-memory AttributeLookupPort. `answers` maps kind -> value;
    `fail_on` makes that kind raise LookupFailed. Every call is recorded.
    """

    def __init__(self, answers: Optional[Dict[str, object]] = None, fail_on: Optional[str] = None):
        self.answers = answers if answers is not None else {"age": 30, "gender": "female", "nationality": "US"}
        self.fail_on = fail_on
        self.calls: List[tuple[str, str]] = []

    def fetch(self, kind: AttributeKind, name: str):
        self.calls.append((str(kind), name))
        if self.fail_on is not None and str(kind) == self.fail_on:
            raise LookupFailed(kind, RuntimeError("simulated outage"))
        return self.answers[str(kind)]


class FakeStore:
    """
    Dict-backed record store. It cannot run SQL, so update() only checks that the
    target id exists and records the statement.
    """

    def __init__(self) -> None:
        self.rows: Dict[UUID, Person] = {}
        self.writes: List[str] = []
        self.statements: List[Statement] = []
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def create(self, draft: PersonDraft) -> Person:
        now = self._tick()
        person = Person(id=uuid4(), created_at=now, updated_at=now, **draft.as_dict())
        self.rows[person.id] = person
        self.writes.append("create")
        return person

    def get(self, person_id: UUID) -> Person:
        if person_id not in self.rows:
            raise NotFound("person", person_id)
        return self.rows[person_id]

    def list(self, statement: Statement) -> List[Person]:
        self.statements.append(statement)
        return sorted(self.rows.values(), key=lambda p: p.created_at, reverse=True)

    def delete(self, person_id: UUID) -> None:
        if self.rows.pop(person_id, None) is None:
            raise NotFound("person", person_id)
        self.writes.append("delete")

    def update(self, statement: Statement) -> None:
        self.statements.append(statement)
        person_id = statement.args[-1]
        if person_id not in self.rows:
            raise NotFound("person", person_id)
        self.rows[person_id] = replace(self.rows[person_id], updated_at=self._tick())
        self.writes.append("update")


@pytest.fixture()
def fake_lookup() -> FakeLookup:
    return FakeLookup()


@pytest.fixture()
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture()
def fake_client(fake_store, fake_lookup):
    """
    TestClient wired to in-memory collaborators: no database, no network.
    """
    app = create_app()
    svc = PersonService(fake_store, EnrichmentPipeline(fake_lookup))
    app.dependency_overrides[get_person_service] = lambda: svc
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def api_client(db_engine, fake_lookup):
    """
    A TestClient whose FastAPI dependency `transactional_session` is overridden
    to yield a single SQLAlchemy Session bound to the test engine/transaction.
    All API calls in one test share the same session (so POST -> GET works),
    and everything is rolled back at the end of the test.
    Lookups are served by `fake_lookup`.
    """
    conn = db_engine.connect()
    trans = conn.begin()
    session = Session(bind=conn, future=True)

    app = create_app()

    def _override():
        # yield the same session for every request in this test
        yield session

    app.dependency_overrides[transactional_session] = _override
    app.dependency_overrides[get_attribute_lookup] = lambda: fake_lookup

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
        session.close()
        trans.rollback()
        conn.close()
