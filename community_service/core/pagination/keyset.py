"""Keyset definitions: ordered sort keys with a mandatory ``id`` tie-breaker.

A keyset is the single source of truth for how a listing is ordered. The
same object drives the ORDER BY clause, the "strictly after the cursor"
predicate, and the values written into the next cursor, so the three can
never disagree.

The seek predicate for keys f1..fn with cursor values c1..cn is:

    (f1 cmp1 c1)
    OR (f1 = c1 AND f2 cmp2 c2)
    OR ...
    OR (f1 = c1 AND ... AND fn-1 = cn-1 AND fn cmpn cn)

where ``cmp`` is ``<`` for descending keys and ``>`` for ascending ones.
The expanded form is used instead of row-value comparison because
``(a, b) < (x, y)`` cannot express mixed directions.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import Select, and_, or_
from sqlalchemy.types import TypeDecorator

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.orm import InstrumentedAttribute
    from sqlalchemy.sql.elements import ColumnElement

    from community_service.core.pagination.cursor import CursorData

SortDirection = Literal["asc", "desc"]
ValueKind = Literal["bool", "int", "float", "datetime", "str"]

TIE_BREAKER = "id"


@dataclass(frozen=True, slots=True, eq=False)
class SortKey:
    """One ordering key of a keyset.

    Attributes:
        name: Field name written into the cursor (``createdAt``, ``id``, ...).
        column: Mapped ORM attribute the key orders by.
        direction: ``"asc"`` or ``"desc"``.
    """

    name: str
    column: InstrumentedAttribute[Any]
    direction: SortDirection = "asc"

    @property
    def attribute(self) -> str:
        """Python attribute name used to read the value from a row."""
        return self.column.key

    @property
    def kind(self) -> ValueKind:
        """Value kind used to validate decoded cursor fields."""
        sql_type = self.column.expression.type
        if isinstance(sql_type, TypeDecorator):
            sql_type = sql_type.impl
        python_type = sql_type.python_type
        if issubclass(python_type, bool):
            return "bool"
        if issubclass(python_type, int):
            return "int"
        if issubclass(python_type, (float, Decimal)):
            return "float"
        if issubclass(python_type, datetime):
            return "datetime"
        return "str"

    @property
    def is_primary_key(self) -> bool:
        prop = getattr(self.column, "property", None)
        columns = getattr(prop, "columns", None) or [self.column]
        return any(getattr(column, "primary_key", False) for column in columns)

    def order_clause(self) -> ColumnElement[Any]:
        return self.column.desc() if self.direction == "desc" else self.column.asc()

    def after(self, value: Any) -> ColumnElement[bool]:
        """Strict comparison selecting rows that sort after ``value``."""
        return self.column < value if self.direction == "desc" else self.column > value


class Keyset:
    """Ordered tuple of sort keys that makes a listing totally ordered.

    The last key must be the primary key column exposed as ``id``; it breaks
    ties between rows that share every other key, which keeps pages free of
    duplicates and gaps even when rows are inserted between requests.

    Example:
        ANSWER_KEYSET = Keyset(
            SortKey("isAdopted", Answer.is_adopted, "desc"),
            SortKey("likes", Answer.likes, "desc"),
            SortKey("createdAt", Answer.created_at, "desc"),
            SortKey("id", Answer.id, "desc"),
        )

    Raises:
        ValueError: If no keys are given, names repeat, or the last key is
            not the ``id`` primary key.
    """

    __slots__ = ("keys",)

    def __init__(self, *keys: SortKey) -> None:
        if not keys:
            msg = "A keyset needs at least one sort key"
            raise ValueError(msg)

        names = [key.name for key in keys]
        if len(set(names)) != len(names):
            msg = f"Duplicate sort key names in keyset: {names}"
            raise ValueError(msg)

        last = keys[-1]
        if last.name != TIE_BREAKER or not last.is_primary_key:
            msg = f"The last sort key must be the '{TIE_BREAKER}' primary key, got '{last.name}'"
            raise ValueError(msg)

        self.keys: tuple[SortKey, ...] = tuple(keys)

    def __iter__(self) -> Iterator[SortKey]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def __repr__(self) -> str:
        fields = ", ".join(f"{key.name} {key.direction}" for key in self.keys)
        return f"Keyset({fields})"

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(key.name for key in self.keys)

    def order_by(self) -> list[ColumnElement[Any]]:
        """ORDER BY clauses in keyset order."""
        return [key.order_clause() for key in self.keys]

    def apply_ordering(self, statement: Select[Any]) -> Select[Any]:
        return statement.order_by(*self.order_by())

    def seek_predicate(self, cursor: CursorData) -> ColumnElement[bool]:
        """Build the predicate matching rows strictly after ``cursor``.

        Every prefix of the keyset contributes one term, and the final
        ``id`` term is strict, so the cursor row itself is never returned.

        Args:
            cursor: Decoded cursor holding one value per key.

        Returns:
            SQLAlchemy boolean expression for a WHERE clause.
        """
        values = cursor.values
        terms = []
        for index, key in enumerate(self.keys):
            equalities = [prev.column == values[prev.name] for prev in self.keys[:index]]
            terms.append(and_(*equalities, key.after(values[key.name])))
        return or_(*terms)

    def values_from_row(self, row: Any) -> dict[str, Any]:
        """Extract the keyset values of ``row`` keyed by cursor field name."""
        return {key.name: getattr(row, key.attribute) for key in self.keys}


__all__ = [
    "TIE_BREAKER",
    "Keyset",
    "SortDirection",
    "SortKey",
    "ValueKind",
]
