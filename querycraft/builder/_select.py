"""SELECT statement assembly."""

from querycraft.builder._state import BuiltQuery, StatementState
from querycraft.placeholders import generate_placeholders

__all__ = ("assemble_select",)


def assemble_select(state: StatementState) -> BuiltQuery:
    """Render a SELECT statement.

    Clause order is fixed: columns, FROM, joins, WHERE, GROUP BY, HAVING,
    ORDER BY, LIMIT, OFFSET. LIMIT and OFFSET are bound last, after every
    WHERE and HAVING argument.

    Args:
        state: The accumulated clause state.

    Returns:
        BuiltQuery: The rendered statement.
    """
    parts = ["SELECT"]
    if state.distinct:
        parts.append("DISTINCT")
    parts.extend((", ".join(state.columns), "FROM", state.table))
    parts.extend(state.joins)

    if state.conditions:
        parts.append("WHERE " + " AND ".join(state.conditions))
    if state.group_by:
        parts.append("GROUP BY " + ", ".join(state.group_by))
    if state.having:
        having = state.shifted(state.having, len(state.where_args))
        parts.append("HAVING " + " AND ".join(having))
    if state.order_by:
        parts.append("ORDER BY " + state.order_by)

    parameters = [*state.where_args, *state.having_args]
    if state.limit > 0:
        parts.append("LIMIT " + generate_placeholders(state.dialect, len(parameters) + 1, 1))
        parameters.append(state.limit)
    if state.offset > 0:
        parts.append("OFFSET " + generate_placeholders(state.dialect, len(parameters) + 1, 1))
        parameters.append(state.offset)

    return BuiltQuery(" ".join(parts), parameters, state.dialect, state.operation)
