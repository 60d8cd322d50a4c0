"""DESCRIBE and EXPLAIN statements."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .statements import TableName
from .types import SQLType, Statement


class DescribeMode(enum.IntEnum):
    """The keyword a DESCRIBE or EXPLAIN statement was written with."""

    DESC = 0
    DESCRIBE = 1
    EXPLAIN = 2

    @classmethod
    def parse(cls, text: str) -> "DescribeMode":
        try:
            return cls[text.upper()]
        except KeyError:
            raise ValueError(f"invalid describe string {text}") from None

    def __str__(self) -> str:
        return self.name


@dataclass
class DescribeStatement(Statement):
    """DESCRIBE a table, optionally a single column of it."""

    table: TableName
    column: str = ""
    mode: DescribeMode = DescribeMode.DESC

    def validate(self) -> None:
        return None

    def get_sql_type(self) -> SQLType:
        return SQLType.QUERY

    def cnt_params(self) -> int:
        return 0

    def describe(self) -> str:
        return str(self.mode)


@dataclass
class ExplainStatement(Statement):
    """EXPLAIN another statement."""

    target: Statement
    mode: DescribeMode = DescribeMode.EXPLAIN

    def validate(self) -> None:
        self.target.validate()

    def get_sql_type(self) -> SQLType:
        return SQLType.QUERY

    def explain(self) -> str:
        return str(self.mode)