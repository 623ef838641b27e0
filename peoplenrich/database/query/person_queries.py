# peoplenrich/database/query/person_queries.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from peoplenrich.database.query.builder import SqlBuilder, Statement
from peoplenrich.domain.entities.person import PERSON_FIELDS, PersonPatch, SearchFilters

TABLE = "persons"
COLUMNS = ("id",) + PERSON_FIELDS + ("created_at", "updated_at")
SELECT_COLUMNS = ", ".join(COLUMNS)

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0
DEFAULT_AGE_MIN = 0
DEFAULT_AGE_MAX = 200


def _present(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


def _contains_pattern(value: str) -> str:
    # escape LIKE wildcards so the caller's text is matched literally
    escaped = value.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_search(filters: SearchFilters, default_limit: int = DEFAULT_LIMIT) -> Statement:
    """
    Filtered, newest-first page of persons.

    Placeholders: age_min, age_max, then each supplied filter in the order
    name, surname, gender, nationality, then limit and offset.
    The age range is assumed valid (checked by the caller).
    """
    age_min = DEFAULT_AGE_MIN if filters.age_min is None else filters.age_min
    age_max = DEFAULT_AGE_MAX if filters.age_max is None else filters.age_max
    limit = filters.limit if filters.limit is not None and filters.limit > 0 else default_limit
    offset = filters.offset if filters.offset is not None and filters.offset >= 0 else DEFAULT_OFFSET

    b = SqlBuilder(f"SELECT {SELECT_COLUMNS} FROM {TABLE}")
    b.clause("WHERE", " AND ").add("age BETWEEN {} AND {}", age_min, age_max)

    if _present(filters.name):
        b.add("name ILIKE {}", _contains_pattern(filters.name))
    if _present(filters.surname):
        b.add("surname ILIKE {}", _contains_pattern(filters.surname))
    if _present(filters.gender):
        b.add("gender = {}", filters.gender.strip())
    if _present(filters.nationality):
        b.add("nationality = {}", filters.nationality.strip())

    b.clause("ORDER BY").add("created_at DESC")
    b.clause("LIMIT").add("{}", limit)
    b.clause("OFFSET").add("{}", offset)
    return b.build()


def build_update(person_id: UUID, patch: PersonPatch) -> Statement:
    """
    Sparse update: one assignment per supplied field, then updated_at, then the id match.
    An empty patch still touches updated_at.
    """
    b = SqlBuilder(f"UPDATE {TABLE}")
    b.clause("SET", ", ")
    for column, value in patch.present().items():
        b.add(f"{column} = {{}}", value)
    b.add("updated_at = clock_timestamp()")
    b.clause("WHERE").add("id = {}", person_id)
    return b.build()
