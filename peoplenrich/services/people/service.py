from __future__ import annotations

from typing import List, Protocol
from uuid import UUID

from peoplenrich.common.logging import get_logger
from peoplenrich.common.settings import get_settings
from peoplenrich.database.query.builder import Statement
from peoplenrich.database.query.person_queries import build_search, build_update
from peoplenrich.domain.entities.person import Person, PersonDraft, PersonPatch, SearchFilters
from peoplenrich.services.enrichment.pipeline import EnrichmentPipeline

logger = get_logger(__name__)


class PersonStore(Protocol):
    def create(self, draft: PersonDraft) -> Person: ...
    def get(self, person_id: UUID) -> Person: ...
    def list(self, statement: Statement) -> List[Person]: ...
    def delete(self, person_id: UUID) -> None: ...
    def update(self, statement: Statement) -> None: ...


class PersonService:
    """
    Use cases for person records. Creation enriches first and writes once,
    so a failed lookup never leaves a row behind.
    """

    def __init__(self, store: PersonStore, enricher: EnrichmentPipeline):
        self.store = store
        self.enricher = enricher
        self.cfg = get_settings()

    def create(self, draft: PersonDraft) -> Person:
        self.enricher.apply(draft)
        person = self.store.create(draft)
        logger.info("person created id=%s name=%s", person.id, person.name)
        return person

    def list(self, filters: SearchFilters) -> List[Person]:
        valid = filters.validate(
            default_min=self.cfg.search_age_min,
            default_max=self.cfg.search_age_max,
        )
        persons = self.store.list(build_search(valid, default_limit=self.cfg.search_default_limit))
        logger.info("retrieved %d persons (limit=%s offset=%s)", len(persons), valid.limit, valid.offset)
        return persons

    def get(self, person_id: UUID) -> Person:
        return self.store.get(person_id)

    def update(self, person_id: UUID, patch: PersonPatch) -> Person:
        self.store.update(build_update(person_id, patch))
        logger.info("person updated id=%s fields=%s", person_id, sorted(patch.present()))
        return self.store.get(person_id)

    def delete(self, person_id: UUID) -> None:
        self.store.delete(person_id)
        logger.info("person deleted id=%s", person_id)
