# peoplenrich/domain/entities/person.py
from __future__ import annotations

from dataclasses import dataclass, asdict, fields, replace
from datetime import datetime
from typing import Any, Dict, Optional, TypeVar, Union
from uuid import UUID

from peoplenrich.domain.errors import ValidationError


class _Unset:
    """Marker for a patch field the caller did not send (distinct from an explicit null)."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()

T = TypeVar("T")
Maybe = Union[T, _Unset]

# Column order used by inserts, updates and row mapping.
PERSON_FIELDS = ("name", "surname", "patronymic", "age", "gender", "nationality")


def _require_text(label: str, value: Optional[str]) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{label} is required")
    return str(value).strip()


def _check_age(age: Optional[int]) -> None:
    if age is not None and age < 0:
        raise ValidationError("age must be >= 0")


@dataclass
class PersonDraft:
    """
    A person that has not been stored yet. Enrichment fills age/gender/nationality
    in place before the draft reaches the store.
    """
    name: str
    surname: str
    patronymic: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    nationality: Optional[str] = None

    def __post_init__(self):
        self.name = _require_text("name", self.name)
        self.surname = _require_text("surname", self.surname)
        _check_age(self.age)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Person:
    id: UUID
    name: str
    surname: str
    patronymic: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    nationality: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class PersonPatch:
    """
    Sparse patch: only fields that are not UNSET are written. An explicit None
    clears a nullable column; UNSET leaves the stored value alone.
    """
    name: Maybe[str] = UNSET
    surname: Maybe[str] = UNSET
    patronymic: Maybe[Optional[str]] = UNSET
    age: Maybe[Optional[int]] = UNSET
    gender: Maybe[Optional[str]] = UNSET
    nationality: Maybe[Optional[str]] = UNSET

    def __post_init__(self):
        for label in ("name", "surname"):
            value = getattr(self, label)
            if value is not UNSET:
                object.__setattr__(self, label, _require_text(label, value))
        if self.age is not UNSET:
            _check_age(self.age)  # type: ignore[arg-type]

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "PersonPatch":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValidationError(f"unknown fields: {', '.join(sorted(unknown))}")
        return cls(**data)

    def present(self) -> Dict[str, Any]:
        """Supplied fields in column order."""
        return {k: getattr(self, k) for k in PERSON_FIELDS if getattr(self, k) is not UNSET}


@dataclass(frozen=True)
class Enrichment:
    age: Optional[int] = None
    gender: Optional[str] = None
    nationality: Optional[str] = None

    def merge_into(self, draft: PersonDraft) -> PersonDraft:
        # enrichment always wins over whatever the caller pre-set
        draft.age = self.age
        draft.gender = self.gender
        draft.nationality = self.nationality
        return draft


@dataclass(frozen=True)
class SearchFilters:
    """
    Search criteria as supplied by the caller. None/empty string means "no constraint".
    limit/offset outside their valid range fall back to defaults in the query builder.
    """
    limit: Optional[int] = None
    offset: Optional[int] = None
    age_min: Optional[int] = None
    age_max: Optional[int] = None
    name: Optional[str] = None
    surname: Optional[str] = None
    gender: Optional[str] = None
    nationality: Optional[str] = None

    def validate(self, *, default_min: int = 0, default_max: int = 200) -> "SearchFilters":
        """Fill missing age bounds; reject negative bounds and an inverted range."""
        for label in ("age_min", "age_max"):
            value = getattr(self, label)
            if value is not None and value < 0:
                raise ValidationError(f"{label} must be >= 0")
        age_min = default_min if self.age_min is None else self.age_min
        age_max = default_max if self.age_max is None else self.age_max
        if age_min > age_max:
            raise ValidationError("age_min cannot be greater than age_max")
        return replace(self, age_min=age_min, age_max=age_max)
