# peoplenrich/database/models/person.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import CheckConstraint, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from peoplenrich.database.core.main import Base
from peoplenrich.database.core.service_object import ServiceObject


class Person(ServiceObject, Base):
    """
    One row per person. Enrichment columns stay NULL until a lookup answered
    (or the user withheld them on update).
    """
    __tablename__ = "persons"
    __table_args__ = (
        CheckConstraint("length(btrim(name)) > 0", name="name_not_empty"),
        CheckConstraint("length(btrim(surname)) > 0", name="surname_not_empty"),
        CheckConstraint("age IS NULL OR age >= 0", name="age_non_negative"),
        Index("ix_persons_created_at", "created_at"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    surname: Mapped[str] = mapped_column(String(255), nullable=False)
    patronymic: Mapped[Optional[str]] = mapped_column(String(255))
    age: Mapped[Optional[int]] = mapped_column(Integer)
    gender: Mapped[Optional[str]] = mapped_column(Text)
    nationality: Mapped[Optional[str]] = mapped_column(String(16))

    def __repr__(self) -> str:
        return f"<Person id={self.id} name={self.name!r} surname={self.surname!r}>"
