"""Dialect-aware quoting of table and column names."""

from typing import Final

from querycraft.dialects import DialectType, coerce_dialect
from querycraft.exceptions import EmptyIdentifierError

__all__ = (
    "WILDCARD",
    "escape_identifier",
    "quote_identifier",
)

WILDCARD: Final = "*"
_ALIAS_KEYWORD: Final = "AS"


def quote_identifier(dialect: DialectType, name: str) -> str:
    """Quote a single identifier, doubling any embedded quote character.

    Args:
        dialect: Target dialect.
        name: The raw identifier.

    Raises:
        EmptyIdentifierError: If ``name`` is empty.

    Returns:
        The quoted identifier, e.g. ``"users"`` or ```users```.
    """
    if not name:
        raise EmptyIdentifierError
    quote = coerce_dialect(dialect).quote_char
    return f"{quote}{name.replace(quote, quote * 2)}{quote}"


def _escape_qualified(dialect: DialectType, name: str) -> str:
    if "." not in name:
        return quote_identifier(dialect, name)
    qualifier, _, column = name.rpartition(".")
    if not qualifier:
        raise EmptyIdentifierError(f"Missing qualifier in identifier {name!r}.")
    if column == WILDCARD:
        return name
    if not column:
        raise EmptyIdentifierError(f"Missing column name in identifier {name!r}.")
    return f"{qualifier}.{quote_identifier(dialect, column)}"


def escape_identifier(dialect: DialectType, name: str) -> str:
    """Escape a table or column reference for the given dialect.

    The following shapes are recognised:

    - ``*`` is passed through unchanged.
    - ``table alias`` and ``table AS alias``: only the table is quoted, the alias is kept verbatim.
    - ``qualifier.column``: only the column is quoted, the qualifier is kept verbatim.
    - anything else is quoted as a single identifier.

    Args:
        dialect: Target dialect.
        name: The reference to escape.

    Raises:
        EmptyIdentifierError: If ``name`` is empty or only whitespace.
        UnsupportedDialectError: If ``dialect`` is not supported.

    Returns:
        The escaped reference.
    """
    coerce_dialect(dialect)
    if name == WILDCARD:
        return name
    if not name or not name.strip():
        raise EmptyIdentifierError

    if " " in name:
        tokens = name.split()
        if len(tokens) == 3 and tokens[1].upper() == _ALIAS_KEYWORD:
            return f"{_escape_qualified(dialect, tokens[0])} {_ALIAS_KEYWORD} {tokens[2]}"
        if len(tokens) == 2:
            return f"{_escape_qualified(dialect, tokens[0])} {tokens[1]}"
        return quote_identifier(dialect, name)

    return _escape_qualified(dialect, name)
