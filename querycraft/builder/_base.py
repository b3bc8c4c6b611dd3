"""Fluent SQL statement builder with positional parameter binding.

A :class:`QueryBuilder` is bound to one dialect, one table and one operation.
Chained calls accumulate clause fragments; :meth:`QueryBuilder.build` renders
them once into a :class:`~querycraft.builder._state.BuiltQuery`.

The first error raised while configuring the builder is captured instead of
propagated. Every later chained call is then a no-op and :meth:`build` raises
the captured error, so a chain never has to be interrupted to check for
failures.

Join ``ON`` conditions and ``RETURNING`` clauses are inserted verbatim. They
are not escaped or parameterized and must never contain untrusted input.
"""

import re
from collections.abc import Collection, Generator, Iterable, Mapping
from contextlib import contextmanager
from typing import Any, Callable, Final, Optional

from typing_extensions import Self

from querycraft.builder._delete import assemble_delete
from querycraft.builder._insert import assemble_insert
from querycraft.builder._select import assemble_select
from querycraft.builder._state import BuiltQuery, StatementState
from querycraft.builder._update import assemble_update
from querycraft.dialects import Dialect, DialectType, Operation, coerce_dialect
from querycraft.exceptions import (
    InvalidClauseError,
    PlaceholderGenerationError,
    QueryCraftError,
    UnsupportedOperationError,
    WrongSetterForOperationError,
)
from querycraft.identifiers import WILDCARD, escape_identifier, quote_identifier
from querycraft.placeholders import (
    count_placeholders,
    generate_placeholders,
    has_numbered_placeholders,
    translate_condition,
)
from querycraft.utils.logging import get_logger

__all__ = ("QueryBuilder",)

logger = get_logger("builder")

DEFAULT_ORDER_COLUMN: Final = "id"
_ORDER_DIRECTIONS: Final = frozenset({"ASC", "DESC"})
_FUNCTION_NAME_REGEX: Final = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_ASSEMBLERS: "Final[dict[Operation, Callable[[StatementState], BuiltQuery]]]" = {
    Operation.SELECT: assemble_select,
    Operation.INSERT: assemble_insert,
    Operation.UPDATE: assemble_update,
    Operation.DELETE: assemble_delete,
}


def normalize_direction(direction: Optional[str]) -> str:
    """Uppercase an ORDER BY direction, falling back to ``DESC`` for anything but ``ASC``/``DESC``."""
    normalized = (direction or "").strip().upper()
    return normalized if normalized in _ORDER_DIRECTIONS else "DESC"


class QueryBuilder:
    """Builder for one SELECT, INSERT, UPDATE or DELETE statement.

    Builders are not thread safe and are meant to be built once and discarded.
    """

    __slots__ = ("_error", "_state")

    def __init__(
        self,
        dialect: DialectType,
        table: str,
        *columns: str,
        operation: "Operation | str" = Operation.SELECT,
    ) -> None:
        """Initialize the builder, escaping the table and columns immediately.

        Construction never raises. An unsupported dialect or operation, or an
        invalid identifier, is captured and raised by :meth:`build`.

        Args:
            dialect: Target dialect.
            table: Table name, optionally with an alias (``users u`` or ``users AS u``).
            *columns: Columns to select. Defaults to ``*``.
            operation: Statement operation.
        """
        self._error: Optional[QueryCraftError] = None
        self._state: Optional[StatementState] = None
        with self._capture_errors():
            resolved_dialect = coerce_dialect(dialect)
            resolved_operation = _coerce_operation(operation)
            self._state = StatementState(dialect=resolved_dialect, operation=resolved_operation)
            self._state.table = escape_identifier(resolved_dialect, table)
            escaped = [escape_identifier(resolved_dialect, column) for column in columns]
            self._state.columns = escaped or [WILDCARD]
            self._state.implicit_wildcard = not escaped

    @contextmanager
    def _capture_errors(self) -> Generator[None, None, None]:
        try:
            yield
        except QueryCraftError as exc:
            if self._error is None:
                self._error = exc
                logger.debug("Captured builder error: %r", exc)

    def _require(self, setter: str, *operations: Operation) -> None:
        if self.state.operation not in operations:
            raise WrongSetterForOperationError(setter, self.state.operation)

    @property
    def state(self) -> StatementState:
        """The accumulated clause state."""
        if self._state is None:
            msg = "Builder has no state because construction failed."
            raise InvalidClauseError(msg)
        return self._state

    @property
    def error(self) -> Optional[QueryCraftError]:
        """The first error captured while configuring the builder, if any."""
        return self._error

    @property
    def dialect(self) -> Optional[Dialect]:
        return self._state.dialect if self._state is not None else None

    @property
    def operation(self) -> Optional[Operation]:
        return self._state.operation if self._state is not None else None

    @property
    def parameters(self) -> list[Any]:
        """Arguments bound so far by WHERE and HAVING conditions, in binding order."""
        if self._state is None:
            return []
        return [*self._state.where_args, *self._state.having_args]

    def distinct(self) -> Self:
        """Render ``SELECT DISTINCT``.

        Returns:
            The current builder instance for method chaining.
        """
        if self._error is None:
            self.state.distinct = True
        return self

    def aggregate(self, function: str, column: str, alias: Optional[str] = None) -> Self:
        """Add an aggregate expression such as ``COUNT("id")`` to the selected columns.

        The first aggregate replaces the implicit ``*`` column list.

        Args:
            function: Aggregate function name, e.g. ``COUNT``, ``SUM`` or ``AVG``.
            column: Column to aggregate, or ``*``.
            alias: Optional output name, quoted for the dialect.

        Returns:
            The current builder instance for method chaining.
        """
        if self._error is not None:
            return self
        with self._capture_errors():
            if not function or not _FUNCTION_NAME_REGEX.fullmatch(function):
                msg = f"Invalid aggregate function name: {function!r}"
                raise InvalidClauseError(msg)
            state = self.state
            expression = f"{function}({escape_identifier(state.dialect, column)})"
            if alias is not None:
                expression = f"{expression} AS {quote_identifier(state.dialect, alias)}"
            if state.implicit_wildcard:
                state.columns = []
                state.implicit_wildcard = False
            state.columns.append(expression)
        return self

    def _join(self, join_type: str, table: str, on: str) -> Self:
        if self._error is not None:
            return self
        with self._capture_errors():
            if not on or not on.strip():
                msg = f"{join_type} JOIN requires an ON condition."
                raise InvalidClauseError(msg)
            state = self.state
            state.joins.append(f"{join_type} JOIN {escape_identifier(state.dialect, table)} ON {on}")
        return self

    def left_join(self, table: str, on: str) -> Self:
        """Add a LEFT JOIN.

        Args:
            table: Table to join, optionally aliased. Escaped for the dialect.
            on: Join condition, inserted verbatim.

        Returns:
            The current builder instance for method chaining.
        """
        return self._join("LEFT", table, on)

    def inner_join(self, table: str, on: str) -> Self:
        """Add an INNER JOIN. See :meth:`left_join`."""
        return self._join("INNER", table, on)

    def right_join(self, table: str, on: str) -> Self:
        """Add a RIGHT JOIN. See :meth:`left_join`."""
        return self._join("RIGHT", table, on)

    def where(self, condition: str, *args: Any) -> Self:
        """Add a WHERE condition. Conditions are combined with ``AND``.

        Args:
            condition: Condition text using ``?`` for each bound value.
            *args: Values bound to the markers, in order.

        Returns:
            The current builder instance for method chaining.
        """
        if self._error is not None:
            return self
        with self._capture_errors():
            state = self.state
            _check_marker_count(state.dialect, condition, args)
            state.conditions.append(translate_condition(state.dialect, condition, len(state.where_args) + 1))
            state.where_args.extend(args)
        return self

    def where_in(self, column: str, values: Iterable[Any]) -> Self:
        """Add a ``column IN (...)`` condition with one placeholder per value.

        Args:
            column: Column to test.
            values: Candidate values. Must not be empty.

        Returns:
            The current builder instance for method chaining.
        """
        if self._error is not None:
            return self
        with self._capture_errors():
            state = self.state
            items = list(values)
            if not items:
                msg = f"IN condition on {column!r} requires at least one value."
                raise InvalidClauseError(msg)
            safe_column = escape_identifier(state.dialect, column)
            placeholders = generate_placeholders(state.dialect, len(state.where_args) + 1, len(items))
            state.conditions.append(f"{safe_column} IN ({placeholders})")
            state.where_args.extend(items)
        return self

    def where_between(self, column: str, start: Any, end: Any) -> Self:
        """Add a ``column BETWEEN start AND end`` condition.

        Returns:
            The current builder instance for method chaining.
        """
        if self._error is not None:
            return self
        with self._capture_errors():
            state = self.state
            safe_column = escape_identifier(state.dialect, column)
            placeholders = generate_placeholders(state.dialect, len(state.where_args) + 1, 2).split(", ")
            if len(placeholders) != 2:
                raise PlaceholderGenerationError(2, len(placeholders))
            lower, upper = placeholders
            state.conditions.append(f"{safe_column} BETWEEN {lower} AND {upper}")
            state.where_args.extend((start, end))
        return self

    def group_by(self, *columns: str) -> Self:
        """Add GROUP BY columns.

        Returns:
            The current builder instance for method chaining.
        """
        if self._error is not None:
            return self
        with self._capture_errors():
            state = self.state
            state.group_by.extend([escape_identifier(state.dialect, column) for column in columns])
        return self

    def having(self, condition: str, *args: Any) -> Self:
        """Add a HAVING condition. Conditions are combined with ``AND``.

        Args:
            condition: Condition text using ``?`` for each bound value.
            *args: Values bound to the markers, in order.

        Returns:
            The current builder instance for method chaining.
        """
        if self._error is not None:
            return self
        with self._capture_errors():
            state = self.state
            _check_marker_count(state.dialect, condition, args)
            state.having.append(translate_condition(state.dialect, condition, len(state.having_args) + 1))
            state.having_args.extend(args)
        return self

    def order_by(
        self,
        column: str,
        direction: Optional[str] = "DESC",
        allowed_columns: Optional[Collection[str]] = None,
    ) -> Self:
        """Set the ORDER BY clause. Only one ordering is kept; the last call wins.

        Args:
            column: Column to order by.
            direction: ``ASC`` or ``DESC`` (case insensitive). Anything else becomes ``DESC``.
            allowed_columns: Optional allow-list. A column outside it is replaced by ``id``.

        Returns:
            The current builder instance for method chaining.
        """
        if self._error is not None:
            return self
        if allowed_columns is not None and column not in allowed_columns:
            logger.debug("Order column %r is not allowed, using %r", column, DEFAULT_ORDER_COLUMN)
            column = DEFAULT_ORDER_COLUMN
        with self._capture_errors():
            state = self.state
            state.order_by = f"{escape_identifier(state.dialect, column)} {normalize_direction(direction)}"
        return self

    def order_by_dynamic(
        self,
        column: Optional[str],
        default_column: str,
        direction: Optional[str] = "DESC",
        allowed_columns: Optional[Collection[str]] = None,
    ) -> Self:
        """Order by a caller supplied column, falling back to ``default_column``.

        Args:
            column: Requested sort column. Empty or ``None`` selects ``default_column``.
            default_column: Column used when ``column`` is missing or not allowed.
            direction: ``ASC`` or ``DESC`` (case insensitive). Anything else becomes ``DESC``.
            allowed_columns: Optional allow-list for ``column``. ``default_column`` is always accepted.

        Returns:
            The current builder instance for method chaining.
        """
        if self._error is not None:
            return self
        if column and allowed_columns is not None and column not in allowed_columns:
            logger.debug("Order column %r is not allowed, using %r", column, default_column)
            column = None
        return self.order_by(column or default_column, direction)

    def limit(self, limit: int) -> Self:
        """Limit the number of rows. ``0`` omits the clause.

        Returns:
            The current builder instance for method chaining.
        """
        if self._error is None:
            with self._capture_errors():
                self.state.limit = _check_non_negative("LIMIT", limit)
        return self

    def offset(self, offset: int) -> Self:
        """Skip rows. ``0`` omits the clause.

        Returns:
            The current builder instance for method chaining.
        """
        if self._error is None:
            with self._capture_errors():
                self.state.offset = _check_non_negative("OFFSET", offset)
        return self

    def values(self, data: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Self:
        """Set the column values of an INSERT, replacing any previous payload.

        Columns are rendered in lexicographic order of their names.

        Args:
            data: Mapping of column name to value.
            **kwargs: Additional column values.

        Returns:
            The current builder instance for method chaining.
        """
        if self._error is None:
            with self._capture_errors():
                self._require("values", Operation.INSERT)
                self.state.data = self._escape_payload(data, kwargs)
        return self

    def set(self, data: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Self:
        """Set the SET assignments of an UPDATE, replacing any previous payload.

        Columns are rendered in lexicographic order of their names.

        Args:
            data: Mapping of column name to value.
            **kwargs: Additional column values.

        Returns:
            The current builder instance for method chaining.
        """
        if self._error is None:
            with self._capture_errors():
                self._require("set", Operation.UPDATE)
                self.state.data = self._escape_payload(data, kwargs)
        return self

    def returning(self, *clauses: str) -> Self:
        """Append a RETURNING clause to an INSERT.

        The clause is inserted verbatim and only rendered for dialects that support it.

        Returns:
            The current builder instance for method chaining.
        """
        if self._error is None:
            with self._capture_errors():
                self._require("returning", Operation.INSERT)
                self.state.returning = ", ".join(clause for clause in clauses if clause) or None
        return self

    def _escape_payload(self, data: Optional[Mapping[str, Any]], extra: Mapping[str, Any]) -> "list[tuple[str, Any]]":
        payload = {**(data or {}), **extra}
        dialect = self.state.dialect
        return [(escape_identifier(dialect, column), payload[column]) for column in sorted(payload)]

    def build(self) -> BuiltQuery:
        """Render the statement.

        Building does not modify the builder.

        Raises:
            QueryCraftError: The first error captured while configuring the builder,
                or a build-time error such as :class:`~querycraft.exceptions.NoDataForInsertError`.

        Returns:
            BuiltQuery: The SQL text and its positional parameters.
        """
        if self._error is not None:
            raise self._error
        state = self.state
        assembler = _ASSEMBLERS.get(state.operation)
        if assembler is None:
            raise UnsupportedOperationError(state.operation)
        query = assembler(state)
        logger.debug("Built %s statement: %s", state.operation, query.sql)
        return query


def _coerce_operation(operation: "Operation | str") -> Operation:
    if isinstance(operation, Operation):
        return operation
    if isinstance(operation, str):
        try:
            return Operation(operation.strip().upper())
        except ValueError:
            pass
    raise UnsupportedOperationError(operation)


def _check_marker_count(dialect: Dialect, condition: str, args: "tuple[Any, ...]") -> None:
    if has_numbered_placeholders(condition):
        msg = f"Condition {condition!r} must use ? markers instead of numbered placeholders."
        raise InvalidClauseError(msg)
    markers = count_placeholders(condition, dialect)
    if markers != len(args):
        msg = f"Condition {condition!r} has {markers} placeholders but {len(args)} values were given."
        raise InvalidClauseError(msg)


def _check_non_negative(clause: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        msg = f"{clause} must be a non-negative integer, got {value!r}"
        raise InvalidClauseError(msg)
    return value
