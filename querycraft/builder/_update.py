"""UPDATE statement assembly."""

from querycraft.builder._state import BuiltQuery, StatementState
from querycraft.exceptions import NoDataForUpdateError
from querycraft.placeholders import generate_placeholders

__all__ = ("assemble_update",)


def assemble_update(state: StatementState) -> BuiltQuery:
    """Render an UPDATE statement.

    SET values are bound first, so WHERE placeholders are shifted past them
    before the WHERE arguments are appended.

    Raises:
        NoDataForUpdateError: If no SET values were configured.

    Returns:
        BuiltQuery: The rendered statement.
    """
    if not state.data:
        raise NoDataForUpdateError

    placeholders = generate_placeholders(state.dialect, 1, len(state.data)).split(", ")
    assignments = ", ".join(
        f"{column} = {placeholder}" for (column, _), placeholder in zip(state.data, placeholders)
    )
    sql = f"UPDATE {state.table} SET {assignments}"
    parameters = [value for _, value in state.data]

    if state.conditions:
        conditions = state.shifted(state.conditions, len(state.data))
        sql += " WHERE " + " AND ".join(conditions)
        parameters.extend(state.where_args)

    return BuiltQuery(sql, parameters, state.dialect, state.operation)
