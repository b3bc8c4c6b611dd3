"""QueryCraft: dialect-aware SQL statement assembly with positional parameters."""

from querycraft import adapters, builder, config, dialects, exceptions, identifiers, placeholders, utils
from querycraft.__metadata__ import __version__
from querycraft.adapters import DBAPIAdapter
from querycraft.builder import BuiltQuery, QueryBuilder, delete, insert, select, update
from querycraft.config import DatabaseConfig
from querycraft.dialects import Dialect, Operation
from querycraft.exceptions import (
    EmptyIdentifierError,
    ImproperConfigurationError,
    InvalidClauseError,
    NoDataForInsertError,
    NoDataForUpdateError,
    PlaceholderGenerationError,
    QueryCraftError,
    RepositoryError,
    SQLBuilderError,
    UnsupportedDialectError,
    UnsupportedOperationError,
    WrongSetterForOperationError,
)
from querycraft.identifiers import escape_identifier
from querycraft.placeholders import generate_placeholders, shift_placeholders, translate_condition

__all__ = (
    "BuiltQuery",
    "DBAPIAdapter",
    "DatabaseConfig",
    "Dialect",
    "EmptyIdentifierError",
    "ImproperConfigurationError",
    "InvalidClauseError",
    "NoDataForInsertError",
    "NoDataForUpdateError",
    "Operation",
    "PlaceholderGenerationError",
    "QueryBuilder",
    "QueryCraftError",
    "RepositoryError",
    "SQLBuilderError",
    "UnsupportedDialectError",
    "UnsupportedOperationError",
    "WrongSetterForOperationError",
    "__version__",
    "adapters",
    "builder",
    "config",
    "delete",
    "dialects",
    "escape_identifier",
    "exceptions",
    "generate_placeholders",
    "identifiers",
    "insert",
    "placeholders",
    "select",
    "shift_placeholders",
    "translate_condition",
    "update",
    "utils",
)
