"""SHOW statements: databases, tables, CREATE, index and columns."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, TextIO

from .statements import TableName
from .types import SQLType, Statement, ValidationError


def _check_filter(value: Any) -> None:
    """A filter is absent, a LIKE pattern, or a WHERE expression."""
    if value is None or isinstance(value, str):
        return
    if not callable(getattr(value, "restore", None)):
        raise ValidationError(f"invalid SHOW filter: {value!r}")


class _FilteredShow(Statement):
    """A SHOW statement filtered by LIKE 'pattern' or by a WHERE expression."""

    filter: Any

    def like(self) -> str | None:
        """The LIKE pattern, or None when the statement has none."""
        return self.filter if isinstance(self.filter, str) else None

    def where(self) -> Any:
        """The WHERE expression, or None when the statement has none."""
        if self.filter is None or isinstance(self.filter, str):
            return None
        return self.filter

    def get_sql_type(self) -> SQLType:
        return SQLType.QUERY


@dataclass
class ShowDatabases(_FilteredShow):
    """SHOW DATABASES [LIKE 'pattern' | WHERE expr]."""

    filter: Any = None

    def like(self) -> str | None:
        return super().like()

    def where(self) -> Any:
        return super().where()

    def validate(self) -> None:
        _check_filter(self.filter)

    def get_sql_type(self) -> SQLType:
        return SQLType.QUERY


@dataclass
class ShowTables(_FilteredShow):
    """SHOW TABLES [LIKE 'pattern' | WHERE expr]."""

    filter: Any = None

    def like(self) -> str | None:
        return super().like()

    def where(self) -> Any:
        return super().where()

    def validate(self) -> None:
        _check_filter(self.filter)

    def get_sql_type(self) -> SQLType:
        return SQLType.QUERY


class ShowCreateType(enum.IntEnum):
    """The kind of object a SHOW CREATE statement names."""

    TABLE = 1
    EVENT = 2
    FUNC = 3
    PROC = 4
    TRIGGER = 5
    VIEW = 6

    def __str__(self) -> str:
        return _SHOW_CREATE_NAMES[self]


_SHOW_CREATE_NAMES = {
    ShowCreateType.TABLE: "TABLE",
    ShowCreateType.EVENT: "EVENT",
    ShowCreateType.FUNC: "FUNCTION",
    ShowCreateType.PROC: "PROCEDURE",
    ShowCreateType.TRIGGER: "TRIGGER",
    ShowCreateType.VIEW: "VIEW",
}


@dataclass
class ShowCreate(Statement):
    """SHOW CREATE <type> <target>."""

    show_type: ShowCreateType
    target: str

    def validate(self) -> None:
        return None

    def get_sql_type(self) -> SQLType:
        return SQLType.QUERY


class ShowIndexType(enum.IntEnum):
    """The keyword a SHOW INDEX statement was written with."""

    INDEX = 1
    INDEXES = 2
    KEYS = 3

    def __str__(self) -> str:
        return self.name


@dataclass
class ShowIndex(Statement):
    """SHOW INDEX|INDEXES|KEYS FROM table [WHERE expr]."""

    show_type: ShowIndexType
    table_name: TableName
    where: Any = None

    def validate(self) -> None:
        return None

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        out.write(f"SHOW {self.show_type} FROM {self.table_name}")
        if self.where is not None:
            out.write(" WHERE ")
            self.where.restore(out, args)

    def get_sql_type(self) -> SQLType:
        return SQLType.QUERY


@dataclass
class ShowColumns(Statement):
    """SHOW [FULL] COLUMNS|FIELDS FROM|IN table."""

    table: TableName
    full: bool = False
    fields: bool = False
    in_: bool = False

    def validate(self) -> None:
        return None

    def get_sql_type(self) -> SQLType:
        return SQLType.QUERY

    def columns_format(self) -> str:
        return "FIELDS" if self.fields else "COLUMNS"

    def table_format(self) -> str:
        return "IN" if self.in_ else "FROM"