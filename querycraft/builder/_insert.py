"""INSERT statement assembly."""

from querycraft.builder._state import BuiltQuery, StatementState
from querycraft.exceptions import NoDataForInsertError
from querycraft.placeholders import generate_placeholders

__all__ = ("assemble_insert",)


def assemble_insert(state: StatementState) -> BuiltQuery:
    """Render an INSERT statement for a single row.

    Columns appear in the order held by ``state.data`` (sorted by raw column
    name). ``RETURNING`` is only appended for dialects that support it and is
    rendered verbatim.

    Raises:
        NoDataForInsertError: If no values were configured.

    Returns:
        BuiltQuery: The rendered statement.
    """
    if not state.data:
        raise NoDataForInsertError

    columns = ", ".join(column for column, _ in state.data)
    placeholders = generate_placeholders(state.dialect, 1, len(state.data))
    sql = f"INSERT INTO {state.table} ({columns}) VALUES ({placeholders})"
    if state.returning and state.dialect.supports_returning:
        sql += f" RETURNING {state.returning}"

    return BuiltQuery(sql, [value for _, value in state.data], state.dialect, state.operation)
