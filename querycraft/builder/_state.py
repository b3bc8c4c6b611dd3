"""Accumulated clause state and the rendered result of a builder."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Optional

from querycraft.dialects import Dialect, Operation
from querycraft.placeholders import count_placeholders, shift_placeholders

__all__ = (
    "BuiltQuery",
    "StatementState",
)


@dataclass(frozen=True)
class BuiltQuery:
    """A rendered SQL statement with its positional parameters.

    Unpacks as ``sql, parameters = builder.build()``.
    """

    sql: str
    parameters: list[Any] = field(default_factory=list)
    dialect: Optional[Dialect] = None
    operation: Optional[Operation] = None

    def __iter__(self) -> Iterator[Any]:
        yield self.sql
        yield self.parameters

    @property
    def placeholder_count(self) -> int:
        """Number of placeholders in :attr:`sql`."""
        return count_placeholders(self.sql, self.dialect)


@dataclass
class StatementState:
    """Clause fragments collected for one statement.

    Identifiers are stored already escaped and condition fragments already
    translated to the dialect's placeholder style. WHERE fragments are numbered
    from 1 against ``where_args`` and HAVING fragments from 1 against
    ``having_args``; assemblers shift them into their final positions.
    """

    dialect: Dialect
    operation: Operation
    table: str = ""
    columns: list[str] = field(default_factory=list)
    implicit_wildcard: bool = False
    distinct: bool = False
    joins: list[str] = field(default_factory=list)
    conditions: list[str] = field(default_factory=list)
    where_args: list[Any] = field(default_factory=list)
    group_by: list[str] = field(default_factory=list)
    having: list[str] = field(default_factory=list)
    having_args: list[Any] = field(default_factory=list)
    order_by: str = ""
    limit: int = 0
    offset: int = 0
    data: list[tuple[str, Any]] = field(default_factory=list)
    returning: Optional[str] = None

    def shifted(self, fragments: "list[str]", offset: int) -> "list[str]":
        """Renumber PostgreSQL placeholders of ``fragments`` by ``offset``."""
        if not self.dialect.uses_numbered_placeholders:
            return list(fragments)
        return [shift_placeholders(fragment, offset) for fragment in fragments]
