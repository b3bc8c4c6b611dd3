"""Placeholder translation between the neutral ``?`` marker and dialect placeholders.

Condition text is written with ``?`` markers. MySQL-family dialects use ``?``
natively, PostgreSQL needs positional ``$n`` markers whose numbers match the
position of the bound value in the final argument list.

Markers are recognised structurally: quoted strings, quoted identifiers,
dollar-quoted strings and comments are matched first and left untouched. For
PostgreSQL the JSON operators ``??``, ``?|`` and ``?&`` are not markers either;
``?||`` is read as a marker followed by the ``||`` concatenation operator.
"""

import re
from typing import Final, Optional

from querycraft.dialects import Dialect, DialectType, coerce_dialect

__all__ = (
    "QMARK",
    "count_placeholders",
    "generate_placeholders",
    "has_numbered_placeholders",
    "shift_placeholders",
    "translate_condition",
)

QMARK: Final = "?"

_LITERALS_AND_COMMENTS: Final = r"""
    # Literals and comments are matched first so markers inside them are skipped
    (?P<squote>'(?:[^'\\]|\\.)*') |
    (?P<dquote>"(?:[^"\\]|\\.)*") |
    (?P<backtick>`[^`]*`) |
    (?P<dollar_quoted_string>\$(?P<dollar_tag>(?:[A-Za-z_]\w*)?)\$[\s\S]*?\$(?P=dollar_tag)\$) |
    (?P<line_comment>--[^\r\n]*) |
    (?P<block_comment>/\*(?:[^*]|\*(?!/))*\*/) |
"""
_PG_Q_OPERATORS: Final = r"""
    (?P<pg_q_operator>\?\?|\?\|(?!\|)|\?&(?!&)) |
"""
_PLACEHOLDERS: Final = r"""
    # Placeholders
    (?P<numeric>\$(?P<number>\d+)) |
    (?P<qmark>\?)
"""
_REGEX_FLAGS: Final = re.VERBOSE | re.MULTILINE | re.DOTALL

_PLACEHOLDER_REGEX: Final = re.compile(_LITERALS_AND_COMMENTS + _PG_Q_OPERATORS + _PLACEHOLDERS, _REGEX_FLAGS)
_MYSQL_PLACEHOLDER_REGEX: Final = re.compile(_LITERALS_AND_COMMENTS + _PLACEHOLDERS, _REGEX_FLAGS)


def _regex_for(dialect: Optional[DialectType]) -> "re.Pattern[str]":
    if dialect is None or coerce_dialect(dialect) is Dialect.POSTGRES:
        return _PLACEHOLDER_REGEX
    return _MYSQL_PLACEHOLDER_REGEX


def translate_condition(dialect: DialectType, condition: str, start_index: int) -> str:
    """Render the ``?`` markers of a condition in the dialect's placeholder style.

    Args:
        dialect: Target dialect.
        condition: Condition text using ``?`` markers.
        start_index: Number given to the first marker (PostgreSQL only).

    Returns:
        The condition unchanged for MySQL-family dialects, or with each marker
        replaced left to right by ``$start_index``, ``$start_index + 1``, ...
    """
    if not coerce_dialect(dialect).uses_numbered_placeholders:
        return condition

    counter = start_index

    def _replace(match: "re.Match[str]") -> str:
        nonlocal counter
        if match.lastgroup != "qmark":
            return match.group(0)
        placeholder = f"${counter}"
        counter += 1
        return placeholder

    return _PLACEHOLDER_REGEX.sub(_replace, condition)


def generate_placeholders(dialect: DialectType, start_index: int, count: int) -> str:
    """Generate a comma separated list of ``count`` placeholders.

    Args:
        dialect: Target dialect.
        start_index: Number of the first placeholder (PostgreSQL only).
        count: How many placeholders to generate.

    Raises:
        ValueError: If ``count`` is negative.

    Returns:
        For example ``$3, $4`` for PostgreSQL or ``?, ?`` for MySQL.
    """
    if count < 0:
        msg = f"Placeholder count must not be negative, got {count}"
        raise ValueError(msg)
    if coerce_dialect(dialect).uses_numbered_placeholders:
        return ", ".join(f"${start_index + offset}" for offset in range(count))
    return ", ".join(QMARK for _ in range(count))


def shift_placeholders(condition: str, offset: int) -> str:
    """Add ``offset`` to the number of every ``$n`` placeholder in ``condition``.

    Args:
        condition: Text containing numbered placeholders.
        offset: Amount added to each placeholder number.

    Returns:
        The renumbered text.
    """
    if offset == 0:
        return condition

    def _shift(match: "re.Match[str]") -> str:
        if match.lastgroup != "numeric":
            return match.group(0)
        return f"${int(match.group('number')) + offset}"

    return _PLACEHOLDER_REGEX.sub(_shift, condition)


def count_placeholders(sql: str, dialect: Optional[DialectType] = None) -> int:
    """Count the ``?`` and ``$n`` placeholders in ``sql``, ignoring literals and comments.

    Without a dialect the PostgreSQL rules apply, so ``??``, ``?|`` and ``?&`` are not counted.
    """
    return sum(1 for match in _regex_for(dialect).finditer(sql) if match.lastgroup in {"numeric", "qmark"})


def has_numbered_placeholders(condition: str) -> bool:
    """Whether ``condition`` contains a ``$n`` placeholder outside literals and comments."""
    return any(match.lastgroup == "numeric" for match in _PLACEHOLDER_REGEX.finditer(condition))
