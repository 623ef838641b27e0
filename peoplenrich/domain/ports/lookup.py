from __future__ import annotations
from typing import Protocol, Union

from peoplenrich.domain.enums.attribute_kind import AttributeKind

LookupValue = Union[int, str, None]


class AttributeLookupPort(Protocol):
    def fetch(self, kind: AttributeKind, name: str) -> LookupValue: ...
