# peoplenrich/services/api/deps.py
from __future__ import annotations
from functools import lru_cache
from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session

from peoplenrich.database.core.main import SessionLocal
from peoplenrich.database.repos.person_repo import SqlAlchemyPersonRepo
from peoplenrich.domain.ports.lookup import AttributeLookupPort
from peoplenrich.services.enrichment.pipeline import EnrichmentPipeline
from peoplenrich.services.lookup.http_lookup_client import HttpAttributeLookup
from peoplenrich.services.people.service import PersonService


@lru_cache(maxsize=1)
def _shared_lookup() -> HttpAttributeLookup:
    return HttpAttributeLookup()


def get_attribute_lookup() -> AttributeLookupPort:
    """
    Provide the AttributeLookupPort implementation (HTTP inference services) via DI.
    One instance, and so one httpx connection pool, per process; it is built on
    first use. Tests override this with a fake.
    """
    return _shared_lookup()


def close_attribute_lookup() -> None:
    """Close the shared lookup client if one was created. Called on app shutdown."""
    if _shared_lookup.cache_info().currsize:
        _shared_lookup().close()
        _shared_lookup.cache_clear()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def transactional_session(db: Session = Depends(get_db)) -> Generator[Session, None, None]:
    """
    Request-scoped transaction. Any repo/service using this session
    participates in the same transaction.

    Session.begin() does not check out a connection until the first statement,
    so outbound lookups that run before the insert hold no database transaction.
    """
    with db.begin():
        yield db


def get_person_service(
    session: Session = Depends(transactional_session),
    lookup: AttributeLookupPort = Depends(get_attribute_lookup),
) -> PersonService:
    return PersonService(SqlAlchemyPersonRepo(session), EnrichmentPipeline(lookup))
