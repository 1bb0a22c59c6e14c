"""Result of a statement that changes data."""

from __future__ import annotations

from typing import NoReturn


class NotSupportedError(Exception):
    """Raised for an operation the server protocol does not provide."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} is not supported")
        self.operation = operation


def _unsupported(operation: str) -> NoReturn:
    raise NotSupportedError(operation)


class Result:
    """Result of an executed statement; the server reports neither id nor count."""

    def last_insert_id(self) -> int:
        """Always raise: the last inserted id is not available."""
        _unsupported("LastInsertId")

    def rows_affected(self) -> int:
        """Always raise: the affected row count is not available."""
        _unsupported("RowsAffected")