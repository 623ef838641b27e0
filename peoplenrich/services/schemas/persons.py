# peoplenrich/services/schemas/persons.py
from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PersonBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    surname: str = Field(..., min_length=1, max_length=255)
    patronymic: Optional[str] = Field(default=None, max_length=255)


class PersonCreate(PersonBase):
    """Enrichment fields are not accepted here; they are always looked up."""
    pass


class PersonUpdate(PersonBase):
    """
    name/surname are mandatory; every other field is applied only when sent.
    Sending null clears the stored value.
    """
    age: Optional[int] = Field(default=None, ge=0)
    gender: Optional[str] = None
    nationality: Optional[str] = Field(default=None, max_length=16)


class PersonRead(PersonBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    age: Optional[int] = None
    gender: Optional[str] = None
    nationality: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
