# peoplenrich/services/schemas/envelope.py
from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    code: int
    message: str
    data: Optional[T] = None


class APIError(BaseModel):
    code: int
    message: str
    resource: str
