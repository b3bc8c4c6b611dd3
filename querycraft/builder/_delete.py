"""DELETE statement assembly."""

from querycraft.builder._state import BuiltQuery, StatementState

__all__ = ("assemble_delete",)


def assemble_delete(state: StatementState) -> BuiltQuery:
    """Render a DELETE statement; the arguments are exactly the WHERE arguments."""
    sql = f"DELETE FROM {state.table}"
    if state.conditions:
        sql += " WHERE " + " AND ".join(state.conditions)
    return BuiltQuery(sql, list(state.where_args), state.dialect, state.operation)
