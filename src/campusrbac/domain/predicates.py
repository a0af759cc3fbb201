"""Composable filter predicates over scoped entities.

Predicates are small immutable trees. They can be evaluated against a row
mapping (``matches``) or rendered to a psycopg WHERE fragment with ``%s``
placeholders (``to_sql``).
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from campusrbac.domain.exceptions import IntegrityError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


def validate_identifier(column: str) -> str:
    """Return ``column`` if it is a plain or alias-qualified SQL identifier."""
    if not isinstance(column, str) or not _IDENTIFIER.match(column):
        raise IntegrityError(f"Invalid column identifier: {column!r}")
    return column


def _row_value(row: Mapping[str, Any], column: str) -> Any:
    if column in row:
        return row[column]
    return row.get(column.rpartition(".")[2])


class Predicate:
    """Base class for filter predicates."""

    def matches(self, row: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def to_sql(self) -> tuple[str, list[object]]:
        raise NotImplementedError

    def __and__(self, other: "Predicate") -> "Predicate":
        return conjoin(self, other)


@dataclass(frozen=True)
class AlwaysTrue(Predicate):
    """No filtering."""

    def matches(self, row: Mapping[str, Any]) -> bool:
        return True

    def to_sql(self) -> tuple[str, list[object]]:
        return "TRUE", []


@dataclass(frozen=True)
class AlwaysFalse(Predicate):
    """Matches nothing."""

    def matches(self, row: Mapping[str, Any]) -> bool:
        return False

    def to_sql(self) -> tuple[str, list[object]]:
        return "FALSE", []


@dataclass(frozen=True)
class MemberOf(Predicate):
    """``column`` is one of ``values``; NULL matches only if ``null_matches``."""

    column: str
    values: frozenset[int]
    null_matches: bool = False

    def __post_init__(self) -> None:
        validate_identifier(self.column)

    def matches(self, row: Mapping[str, Any]) -> bool:
        value = _row_value(row, self.column)
        if value is None:
            return self.null_matches
        return value in self.values

    def to_sql(self) -> tuple[str, list[object]]:
        params: list[object] = [sorted(self.values)]
        if self.null_matches:
            return f"({self.column} IS NULL OR {self.column} = ANY(%s))", params
        return f"{self.column} = ANY(%s)", params


@dataclass(frozen=True)
class AllOf(Predicate):
    """Conjunction of predicates."""

    parts: tuple[Predicate, ...]

    def matches(self, row: Mapping[str, Any]) -> bool:
        return all(p.matches(row) for p in self.parts)

    def to_sql(self) -> tuple[str, list[object]]:
        if not self.parts:
            return "TRUE", []
        fragments: list[str] = []
        params: list[object] = []
        for part in self.parts:
            fragment, part_params = part.to_sql()
            fragments.append(fragment)
            params.extend(part_params)
        return " AND ".join(fragments), params


ALWAYS_TRUE = AlwaysTrue()
ALWAYS_FALSE = AlwaysFalse()


def conjoin(*predicates: Predicate) -> Predicate:
    """AND predicates together, folding constants.

    Any always-false part makes the whole conjunction always-false; always-true
    parts are dropped.
    """
    parts: list[Predicate] = []
    for predicate in predicates:
        if isinstance(predicate, AlwaysFalse):
            return ALWAYS_FALSE
        if isinstance(predicate, AlwaysTrue):
            continue
        if isinstance(predicate, AllOf):
            parts.extend(predicate.parts)
        else:
            parts.append(predicate)
    if not parts:
        return ALWAYS_TRUE
    if len(parts) == 1:
        return parts[0]
    return AllOf(tuple(parts))
