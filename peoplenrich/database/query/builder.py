# peoplenrich/database/query/builder.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from sqlalchemy import TextClause, text

_PLACEHOLDER = re.compile(r"\$(\d+)")
_SLOT = "{}"


@dataclass(frozen=True)
class Statement:
    """
    Rendered SQL with `$n` positional placeholders and the arguments bound to them,
    in placeholder order.
    """
    sql: str
    args: Tuple[Any, ...]

    def bind_params(self) -> Dict[str, Any]:
        return {f"p{i}": v for i, v in enumerate(self.args, start=1)}

    def to_clause(self) -> Tuple[TextClause, Dict[str, Any]]:
        """
        SQLAlchemy's text() only knows named binds, so `$n` becomes `:pn`.
        The mapping is 1:1 and keeps ordinal meaning; values still travel as parameters.
        """
        sql = _PLACEHOLDER.sub(lambda m: f":p{m.group(1)}", self.sql)
        return text(sql), self.bind_params()


class _Section:
    __slots__ = ("keyword", "separator", "parts")

    def __init__(self, keyword: str, separator: str) -> None:
        self.keyword = keyword
        self.separator = separator
        self.parts: List[Tuple[str, Tuple[Any, ...]]] = []


class SqlBuilder:
    """
    Collects (fragment, arguments) pairs grouped in keyword sections and renders
    them into a Statement.

    A fragment is a fixed SQL token string with one `{}` slot per argument; slots are
    numbered `$1..$n` in the order the pairs were appended. Argument values are never
    written into the SQL text.

        b = SqlBuilder("SELECT * FROM persons")
        b.clause("WHERE", " AND ").add("age >= {}", 18).add("gender = {}", "female")
        b.build()  # Statement("SELECT * FROM persons WHERE age >= $1 AND gender = $2", (18, "female"))
    """

    def __init__(self, head: str) -> None:
        self._head = head
        self._sections: List[_Section] = []

    def clause(self, keyword: str, separator: str = ", ") -> "SqlBuilder":
        self._sections.append(_Section(keyword, separator))
        return self

    def add(self, fragment: str, *args: Any) -> "SqlBuilder":
        if not self._sections:
            raise RuntimeError("open a clause before adding fragments")
        slots = fragment.count(_SLOT)
        if slots != len(args):
            raise ValueError(f"fragment {fragment!r} has {slots} slot(s) but got {len(args)} argument(s)")
        self._sections[-1].parts.append((fragment, args))
        return self

    def build(self) -> Statement:
        chunks: List[str] = [self._head]
        bound: List[Any] = []
        for section in self._sections:
            if not section.parts:
                continue
            rendered: List[str] = []
            for fragment, args in section.parts:
                for value in args:
                    bound.append(value)
                    fragment = fragment.replace(_SLOT, f"${len(bound)}", 1)
                rendered.append(fragment)
            chunks.append(f"{section.keyword} {section.separator.join(rendered)}")
        return Statement(sql=" ".join(chunks), args=tuple(bound))
