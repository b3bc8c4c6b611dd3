"""Execution of built statements on DB-API 2.0 connections."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Union

from querycraft.exceptions import QueryCraftError, wrap_exceptions
from querycraft.utils.logging import get_logger

if TYPE_CHECKING:
    from querycraft.builder import BuiltQuery

__all__ = ("DBAPIAdapter", "StatementInput")

logger = get_logger("adapters.dbapi")

StatementInput = Union["BuiltQuery", "tuple[str, Sequence[Any]]"]


def _unpack(statement: StatementInput) -> tuple[str, list[Any]]:
    sql, parameters = statement
    return sql, list(parameters)


class DBAPIAdapter:
    """Run built statements on any DB-API 2.0 compliant connection.

    The connection must accept the placeholder style of the statements it is
    given: ``?`` for MySQL-family output or ``$n`` for PostgreSQL output.
    Driver errors are raised as :class:`~querycraft.exceptions.RepositoryError`.
    """

    def __init__(self, connection: Any) -> None:
        self._connection = connection

    @property
    def connection(self) -> Any:
        return self._connection

    @contextmanager
    def _cursor(self) -> Iterator[Any]:
        cur = self._connection.cursor()
        try:
            yield cur
        finally:
            cur.close()

    def select(self, statement: StatementInput) -> list[Any]:
        """Execute a SELECT and return all rows."""
        sql, parameters = _unpack(statement)
        with wrap_exceptions(), self._cursor() as cur:
            cur.execute(sql, parameters)
            return list(cur.fetchall())

    def select_one(self, statement: StatementInput) -> Any:
        """Execute a SELECT and return the first row, or None if empty."""
        sql, parameters = _unpack(statement)
        with wrap_exceptions(), self._cursor() as cur:
            cur.execute(sql, parameters)
            return cur.fetchone()

    def select_value(self, statement: StatementInput) -> Any:
        """Execute a SELECT and return the first column of the first row, or None if empty."""
        row = self.select_one(statement)
        if row is None:
            return None
        if isinstance(row, dict):
            return next(iter(row.values()))
        return row[0]

    def execute(self, statement: StatementInput) -> int:
        """Execute an INSERT, UPDATE or DELETE and return the affected row count."""
        sql, parameters = _unpack(statement)
        with wrap_exceptions(), self._cursor() as cur:
            cur.execute(sql, parameters)
            return cur.rowcount if hasattr(cur, "rowcount") else -1

    def insert_returning(self, statement: StatementInput) -> Any:
        """Execute an INSERT with a RETURNING clause and return the returned row.

        A single returned column is unwrapped to its value.
        """
        sql, parameters = _unpack(statement)
        with wrap_exceptions(), self._cursor() as cur:
            cur.execute(sql, parameters)
            res = cur.fetchone()
        return res[0] if res and len(res) == 1 else res

    def execute_many(self, statements: Sequence[StatementInput]) -> list[int]:
        """Execute several statements in one transaction.

        Commits when every statement succeeds and rolls back otherwise.

        Returns:
            The affected row count of each statement.
        """
        counts: list[int] = []
        try:
            with wrap_exceptions(), self._cursor() as cur:
                for statement in statements:
                    sql, parameters = _unpack(statement)
                    cur.execute(sql, parameters)
                    counts.append(cur.rowcount if hasattr(cur, "rowcount") else -1)
                self._connection.commit()
        except QueryCraftError:
            self._rollback()
            raise
        return counts

    def _rollback(self) -> None:
        try:
            self._connection.rollback()
        except Exception:  # noqa: BLE001
            logger.warning("Transaction rollback failed", exc_info=True)
