"""Query and data-manipulation statements: SELECT, DELETE, UPDATE, INSERT, REPLACE, UNION."""

from __future__ import annotations

import enum
import io
from collections.abc import Container, Iterable
from dataclasses import dataclass, field
from typing import Any

from .expression import ColumnNameExpressionAtom
from .types import SQLType, Statement, ValidationError


class TableName(tuple):
    """A table reference, optionally qualified by its schema: ('db', 'table')."""

    __slots__ = ()

    def __new__(cls, parts: Iterable[str] | str) -> "TableName":
        if isinstance(parts, str):
            parts = (parts,)
        parts = tuple(parts)
        if not parts:
            raise ValueError("a table name needs at least one part")
        return super().__new__(cls, parts)

    def __repr__(self) -> str:
        return f"TableName({tuple(self)!r})"

    def __str__(self) -> str:
        return ".".join(f"`{part}`" for part in self)

    def prefix(self) -> str:
        return self[0] if len(self) > 1 else ""

    def suffix(self) -> str:
        return self[-1]


@dataclass
class TableSourceNode:
    """An entry of a FROM clause: a table name or a sub-query, with an optional alias."""

    source: TableName | Statement
    alias: str = ""

    def table_name(self) -> TableName | None:
        return self.source if isinstance(self.source, TableName) else None

    def sub_query(self) -> Statement | None:
        return self.source if isinstance(self.source, Statement) else None


@dataclass
class OrderByItem:
    """One ORDER BY term."""

    expr: Any = None
    alias: str = ""
    desc: bool = False

    def in_tables(self, tables: Container[str]) -> None:
        if self.expr is not None:
            self.expr.in_tables(tables)

    def __str__(self) -> str:
        out = io.StringIO()
        self.expr.restore(out, None)
        if self.desc:
            out.write(" DESC")
        return out.getvalue()


class OrderByNode(list):
    """The terms of an ORDER BY clause."""

    def in_tables(self, tables: Container[str]) -> None:
        for item in self:
            item.in_tables(tables)


@dataclass
class GroupByItem:
    """One GROUP BY term, optionally carrying an order."""

    expr: Any
    has_order: bool = False
    order_desc: bool = False

    def in_tables(self, tables: Container[str]) -> None:
        self.expr.in_tables(tables)


@dataclass
class GroupByNode:
    """A GROUP BY clause."""

    items: list[GroupByItem] = field(default_factory=list)
    rollup: bool = False

    def in_tables(self, tables: Container[str]) -> None:
        for item in self.items:
            item.in_tables(tables)


@dataclass
class LimitNode:
    """A LIMIT clause; either value may be a placeholder."""

    limit: int = 0
    offset: int = 0
    has_offset: bool = False
    offset_var: bool = False
    limit_var: bool = False


class SelectSpec(str, enum.Enum):
    DISTINCT = "DISTINCT"
    ALL = "ALL"

    def __str__(self) -> str:
        return self.value


def _check_clause(node: Any, tables: Container[str], clause: str) -> None:
    try:
        node.in_tables(tables)
    except ValidationError as err:
        raise ValidationError(f"invalid {clause} clause: {err}") from err


@dataclass
class SelectStatement(Statement):
    """A SELECT statement."""

    select: list[Any] = field(default_factory=list)
    select_specs: list[SelectSpec] = field(default_factory=list)
    from_: list[TableSourceNode] = field(default_factory=list)
    where: Any = None
    group_by: GroupByNode | None = None
    having: Any = None
    order_by: OrderByNode | None = None
    limit: LimitNode | None = None

    def has_sub_query(self) -> bool:
        return any(source.sub_query() is not None for source in self.from_)

    def validate(self) -> None:
        tables: set[str] = set()
        for source in self.from_:
            if source.alias:
                tables.add(source.alias)
            else:
                table = source.table_name()
                if table is not None:
                    tables.add(table.suffix())
                    continue
            sub_query = source.sub_query()
            if isinstance(sub_query, (SelectStatement, UnionSelectStatement)):
                sub_query.validate()

        for element in self.select:
            _check_clause(element, tables, "SELECT")
        if self.where is not None:
            _check_clause(self.where, tables, "WHERE")
        if self.order_by is not None:
            _check_clause(self.order_by, tables, "ORDER BY")
        if self.group_by is not None:
            _check_clause(self.group_by, tables, "GROUP BY")

    def get_sql_type(self) -> SQLType:
        return SQLType.QUERY


@dataclass
class DeleteStatement(Statement):
    """A single-table DELETE statement."""

    table: TableName
    where: Any = None
    order_by: OrderByNode | None = None
    limit: LimitNode | None = None
    low_priority: bool = False
    quick: bool = False
    ignore: bool = False

    def validate(self) -> None:
        return None

    def get_sql_type(self) -> SQLType:
        return SQLType.DELETE


@dataclass
class UpdateElement:
    """One 'column = value' assignment."""

    column: ColumnNameExpressionAtom
    value: Any


@dataclass
class UpdateStatement(Statement):
    """An UPDATE statement."""

    table: TableName
    table_alias: str = ""
    updated: list[UpdateElement] = field(default_factory=list)
    where: Any = None
    order_by: OrderByNode | None = None
    limit: LimitNode | None = None
    low_priority: bool = False
    ignore: bool = False

    def validate(self) -> None:
        return None

    def get_sql_type(self) -> SQLType:
        return SQLType.UPDATE


@dataclass(kw_only=True)
class _BaseInsertStatement(Statement):
    table: TableName
    columns: list[str] = field(default_factory=list)
    ignore: bool = False
    low_priority: bool = False
    high_priority: bool = False
    delayed: bool = False
    set_syntax: bool = False

    def priority(self) -> str | None:
        """The priority modifier, or None when the statement has none."""
        if self.high_priority:
            return "HIGH_PRIORITY"
        if self.low_priority:
            return "LOW_PRIORITY"
        if self.delayed:
            return "DELAYED"
        return None

    def _check_target(self) -> None:
        """Check that the statement names a table and plain column names."""
        if not isinstance(self.table, TableName):
            raise ValidationError(f"invalid insert target: {self.table!r}")
        for column in self.columns:
            if not isinstance(column, str):
                raise ValidationError(f"invalid insert column: {column!r}")

    def _check_select(self, select: Any) -> None:
        if not isinstance(select, SelectStatement):
            raise ValidationError(f"invalid select source: {select!r}")


@dataclass(kw_only=True)
class InsertStatement(_BaseInsertStatement):
    """An INSERT ... VALUES statement."""

    values: list[list[Any]] = field(default_factory=list)
    duplicated_updates: list[UpdateElement] = field(default_factory=list)

    def validate(self) -> None:
        self._check_target()

    def priority(self) -> str | None:
        return super().priority()

    def get_sql_type(self) -> SQLType:
        return SQLType.INSERT


@dataclass(kw_only=True)
class ReplaceStatement(_BaseInsertStatement):
    """A REPLACE ... VALUES statement."""

    values: list[list[Any]] = field(default_factory=list)

    def validate(self) -> None:
        self._check_target()

    def get_sql_type(self) -> SQLType:
        return SQLType.REPLACE


@dataclass(kw_only=True)
class InsertSelectStatement(_BaseInsertStatement):
    """An INSERT ... SELECT statement."""

    select: SelectStatement

    def validate(self) -> None:
        self._check_target()
        self._check_select(self.select)

    def get_sql_type(self) -> SQLType:
        return SQLType.INSERT


@dataclass(kw_only=True)
class ReplaceSelectStatement(_BaseInsertStatement):
    """A REPLACE ... SELECT statement."""

    select: SelectStatement

    def validate(self) -> None:
        self._check_target()
        self._check_select(self.select)

    def get_sql_type(self) -> SQLType:
        return SQLType.REPLACE


class UnionType(enum.IntEnum):
    ALL = 1
    DISTINCT = 2

    def __str__(self) -> str:
        return self.name


@dataclass
class UnionStatementItem:
    """A SELECT joined to a union, with its UNION kind."""

    union_type: UnionType
    select_statement: SelectStatement


@dataclass
class UnionSelectStatement(Statement):
    """A chain of SELECT statements joined by UNION."""

    first: SelectStatement
    others: list[UnionStatementItem] = field(default_factory=list)

    def validate(self) -> None:
        self.first.validate()
        for item in self.others:
            item.select_statement.validate()

    def get_sql_type(self) -> SQLType:
        return SQLType.QUERY