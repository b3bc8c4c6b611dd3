"""Fluent SQL statement builders with dialect-aware escaping and parameter binding."""

from querycraft.builder._base import QueryBuilder
from querycraft.builder._state import BuiltQuery, StatementState
from querycraft.dialects import DialectType, Operation
from querycraft.exceptions import SQLBuilderError

__all__ = (
    "BuiltQuery",
    "QueryBuilder",
    "SQLBuilderError",
    "StatementState",
    "delete",
    "insert",
    "select",
    "update",
)


def select(dialect: DialectType, table: str, *columns: str) -> QueryBuilder:
    """Create a SELECT builder.

    Args:
        dialect: Target dialect.
        table: Table to select from, optionally aliased.
        *columns: Optional columns to select. If not provided, selects all columns.

    Returns:
        QueryBuilder: A new builder for a SELECT statement.
    """
    return QueryBuilder(dialect, table, *columns, operation=Operation.SELECT)


def insert(dialect: DialectType, table: str) -> QueryBuilder:
    """Create an INSERT builder.

    Args:
        dialect: Target dialect.
        table: Table to insert into.

    Returns:
        QueryBuilder: A new builder for an INSERT statement.
    """
    return QueryBuilder(dialect, table, operation=Operation.INSERT)


def update(dialect: DialectType, table: str) -> QueryBuilder:
    """Create an UPDATE builder.

    Args:
        dialect: Target dialect.
        table: Table to update.

    Returns:
        QueryBuilder: A new builder for an UPDATE statement.
    """
    return QueryBuilder(dialect, table, operation=Operation.UPDATE)


def delete(dialect: DialectType, table: str) -> QueryBuilder:
    """Create a DELETE builder.

    Args:
        dialect: Target dialect.
        table: Table to delete from.

    Returns:
        QueryBuilder: A new builder for a DELETE statement.
    """
    return QueryBuilder(dialect, table, operation=Operation.DELETE)
