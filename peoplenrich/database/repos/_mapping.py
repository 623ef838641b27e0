# peoplenrich/database/repos/_mapping.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional
from uuid import UUID

from peoplenrich.domain.entities.person import Person as DomainPerson


def _opt_str(v: Any) -> Optional[str]:
    if v is None:
        return None
    if not isinstance(v, str):
        raise TypeError(f"expected text, got {type(v).__name__}")
    return v


def _timestamp(v: Any) -> Optional[datetime]:
    if v is None or isinstance(v, datetime):
        return v
    raise TypeError(f"expected timestamp, got {type(v).__name__}")


def to_domain_person(row: Any) -> DomainPerson:
    """
    Map a persons row (SQLAlchemy Row or plain mapping) to the domain entity.
    Raises ValueError/TypeError/KeyError on malformed data; callers wrap them.
    """
    m: Mapping[str, Any] = row._mapping if hasattr(row, "_mapping") else row
    raw_id = m["id"]
    age = m["age"]
    if age is not None and (isinstance(age, bool) or not isinstance(age, int)):
        raise TypeError(f"expected integer age, got {type(age).__name__}")
    name = _opt_str(m["name"])
    surname = _opt_str(m["surname"])
    if not name or not surname:
        raise ValueError("stored person has an empty name or surname")
    return DomainPerson(
        id=raw_id if isinstance(raw_id, UUID) else UUID(str(raw_id)),
        name=name,
        surname=surname,
        patronymic=_opt_str(m["patronymic"]),
        age=age,
        gender=_opt_str(m["gender"]),
        nationality=_opt_str(m["nationality"]),
        created_at=_timestamp(m["created_at"]),
        updated_at=_timestamp(m["updated_at"]),
    )
