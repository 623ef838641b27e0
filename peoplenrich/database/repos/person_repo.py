from __future__ import annotations
from typing import List
from uuid import UUID

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from peoplenrich.common.logging import get_logger
from peoplenrich.database.models.person import Person as DBPerson
from peoplenrich.database.query.builder import Statement
from peoplenrich.database.repos._mapping import to_domain_person
from peoplenrich.domain.entities.person import Person, PersonDraft
from peoplenrich.domain.errors import NotFound, ScanError, StoreError

logger = get_logger(__name__)

persons = DBPerson.__table__


def _scan(row) -> Person:
    try:
        return to_domain_person(row)
    except (KeyError, TypeError, ValueError) as e:
        raise ScanError(f"failed to scan person: {e}") from e


class SqlAlchemyPersonRepo:
    """
    Record store for persons. One statement per call; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self.db = session

    def create(self, draft: PersonDraft) -> Person:
        stmt = insert(persons).values(**draft.as_dict()).returning(*persons.c)
        try:
            row = self.db.execute(stmt).one()
        except SQLAlchemyError as e:
            raise StoreError(f"failed to insert person: {e}") from e
        person = _scan(row)
        logger.debug("inserted person id=%s", person.id)
        return person

    def get(self, person_id: UUID) -> Person:
        stmt = select(persons).where(persons.c.id == person_id)
        try:
            row = self.db.execute(stmt).first()
        except SQLAlchemyError as e:
            raise StoreError(f"failed to query person: {e}") from e
        if row is None:
            raise NotFound("person", person_id)
        return _scan(row)

    def list(self, statement: Statement) -> List[Person]:
        clause, params = statement.to_clause()
        try:
            rows = self.db.execute(clause, params).all()
        except SQLAlchemyError as e:
            raise StoreError(f"failed to query persons: {e}") from e
        # all-or-nothing: one bad row fails the whole page
        return [_scan(r) for r in rows]

    def delete(self, person_id: UUID) -> None:
        stmt = delete(persons).where(persons.c.id == person_id)
        try:
            result = self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreError(f"failed to delete person: {e}") from e
        if result.rowcount == 0:
            raise NotFound("person", person_id)

    def update(self, statement: Statement) -> None:
        clause, params = statement.to_clause()
        try:
            result = self.db.execute(clause, params)
        except SQLAlchemyError as e:
            raise StoreError(f"failed to update person: {e}") from e
        if result.rowcount == 0:
            raise NotFound("person", statement.args[-1] if statement.args else None)
