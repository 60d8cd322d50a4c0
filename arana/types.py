"""SQL statement kinds and the interface every statement implements."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod


class ValidationError(ValueError):
    """Raised when a statement refers to a table or column it does not know."""


class SQLType(enum.IntEnum):
    """The kind of an SQL statement."""

    UNKNOWN = 0
    QUERY = 1
    DELETE = 2
    UPDATE = 3
    INSERT = 4
    REPLACE = 5

    def __str__(self) -> str:
        return self.name


class Statement(ABC):
    """An SQL statement."""

    @abstractmethod
    def validate(self) -> None:
        """Check the statement, raising ValidationError when it is invalid."""

    @abstractmethod
    def get_sql_type(self) -> SQLType:
        """Return the kind of this statement."""