"""SQL dialects supported by the statement builder.

A dialect decides three things about a rendered statement: the identifier quote
character, the placeholder style and whether ``RETURNING`` may be appended to
an ``INSERT``.
"""

from enum import Enum
from typing import Any, Final, Union

from querycraft.exceptions import UnsupportedDialectError

__all__ = (
    "Dialect",
    "DialectType",
    "Operation",
    "coerce_dialect",
)


class Dialect(str, Enum):
    """Dialect enumeration with string values.

    MySQL and MariaDB share quoting and placeholder rules and are treated identically.
    """

    POSTGRES = "postgres"
    MYSQL = "mysql"
    MARIADB = "mariadb"

    def __str__(self) -> str:
        """String representation for better error messages.

        Returns:
            The enum value as a string.
        """
        return self.value

    @property
    def quote_char(self) -> str:
        """Character used to delimit identifiers."""
        return '"' if self is Dialect.POSTGRES else "`"

    @property
    def uses_numbered_placeholders(self) -> bool:
        """Whether placeholders are rendered as ``$1, $2, ...`` instead of a repeated ``?``."""
        return self is Dialect.POSTGRES

    @property
    def supports_returning(self) -> bool:
        return self is Dialect.POSTGRES


class Operation(str, Enum):
    """Statement operation a builder is created for."""

    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"

    def __str__(self) -> str:
        return self.value


DialectType = Union[Dialect, str]

_DIALECT_ALIASES: Final[dict[str, Dialect]] = {
    "postgres": Dialect.POSTGRES,
    "postgresql": Dialect.POSTGRES,
    "pg": Dialect.POSTGRES,
    "mysql": Dialect.MYSQL,
    "mariadb": Dialect.MARIADB,
}


def coerce_dialect(dialect: Any) -> Dialect:
    """Resolve a dialect name or member to a :class:`Dialect`.

    Args:
        dialect: A :class:`Dialect` member or a case-insensitive dialect name.

    Raises:
        UnsupportedDialectError: If the value does not name a supported dialect.

    Returns:
        The matching dialect.
    """
    if isinstance(dialect, Dialect):
        return dialect
    if isinstance(dialect, str):
        resolved = _DIALECT_ALIASES.get(dialect.strip().lower())
        if resolved is not None:
            return resolved
    raise UnsupportedDialectError(dialect)
