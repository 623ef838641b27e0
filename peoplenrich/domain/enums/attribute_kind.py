from __future__ import annotations
from enum import StrEnum

class AttributeKind(StrEnum):
    age = "age"
    gender = "gender"
    nationality = "nationality"
