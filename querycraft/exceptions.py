from collections.abc import Generator
from contextlib import contextmanager
from typing import Any, Optional

__all__ = (
    "EmptyIdentifierError",
    "ImproperConfigurationError",
    "InvalidClauseError",
    "NoDataForInsertError",
    "NoDataForUpdateError",
    "PlaceholderGenerationError",
    "QueryCraftError",
    "RepositoryError",
    "SQLBuilderError",
    "UnsupportedDialectError",
    "UnsupportedOperationError",
    "WrongSetterForOperationError",
    "wrap_exceptions",
)


class QueryCraftError(Exception):
    """Base exception class from which all QueryCraft exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``QueryCraftError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class SQLBuilderError(QueryCraftError):
    """Issues Building or Generating SQL statements."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Issues building SQL statement."
        super().__init__(message)


class EmptyIdentifierError(SQLBuilderError):
    """An empty string was given where a table or column name was required."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Identifier must not be empty."
        super().__init__(message)


class UnsupportedDialectError(SQLBuilderError):
    """The dialect is not one of the supported SQL dialects."""

    dialect: Any

    def __init__(self, dialect: Any) -> None:
        super().__init__(f"Unsupported dialect: {dialect!r}")
        self.dialect = dialect


class UnsupportedOperationError(SQLBuilderError):
    """The statement operation is not one of SELECT, INSERT, UPDATE or DELETE."""

    operation: Any

    def __init__(self, operation: Any) -> None:
        super().__init__(f"Unsupported operation: {operation!r}")
        self.operation = operation


class NoDataForInsertError(SQLBuilderError):
    """An INSERT statement was built without any column values."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "No data provided for INSERT statement."
        super().__init__(message)


class NoDataForUpdateError(SQLBuilderError):
    """An UPDATE statement was built without any SET values."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "No data provided for UPDATE statement."
        super().__init__(message)


class WrongSetterForOperationError(SQLBuilderError):
    """An operation specific setter was called on a builder for another operation.

    Attributes:
        setter: Name of the method that was called.
        operation: Operation the builder was created for.
    """

    setter: str
    operation: Any

    def __init__(self, setter: str, operation: Any) -> None:
        super().__init__(f"{setter}() cannot be used with a {operation} statement.")
        self.setter = setter
        self.operation = operation


class PlaceholderGenerationError(SQLBuilderError):
    """The number of generated placeholders does not match the number requested."""

    expected: int
    actual: int

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Expected {expected} placeholders but generated {actual}.")
        self.expected = expected
        self.actual = actual


class InvalidClauseError(SQLBuilderError):
    """A clause was configured with a value that cannot be rendered."""


class ImproperConfigurationError(QueryCraftError):
    """Improper Configuration error.

    This exception is raised when a configuration object holds values that cannot be used.
    """


class RepositoryError(QueryCraftError):
    """Base repository exception type."""


@contextmanager
def wrap_exceptions(wrap_exceptions: bool = True) -> Generator[None, None, None]:
    try:
        yield

    except QueryCraftError:
        raise
    except Exception as exc:
        if wrap_exceptions is False:
            raise
        msg = "An error occurred during the operation."
        raise RepositoryError(detail=msg) from exc
