"""Function calls of the SQL syntax tree: plain, aggregate, CASE and CAST."""

from __future__ import annotations

import enum
from collections.abc import Container, Sequence
from dataclasses import dataclass, field
from typing import Any, TextIO

from .expression import ColumnNameExpressionAtom, ConstantExpressionAtom

AGGR_AVG = "AVG"
AGGR_MAX = "MAX"
AGGR_MIN = "MIN"
AGGR_SUM = "SUM"
AGGR_COUNT = "COUNT"


class FunctionArgType(enum.IntEnum):
    """What a function argument holds."""

    CONSTANT = 1
    COLUMN = 2
    EXPRESSION = 3
    FUNCTION = 4
    AGGR_FUNCTION = 5
    CASE_WHEN_ELSE_FUNCTION = 6
    CAST_FUNCTION = 7


class FunctionType(enum.IntEnum):
    """The family a function belongs to."""

    UDF = 1
    SCALAR = 2
    SPEC = 3
    PASSWD = 4

    def __str__(self) -> str:
        return "PASSWORD" if self is FunctionType.PASSWD else self.name


def _restore_all(items: Sequence[Any], out: TextIO, args: list[int] | None) -> None:
    for position, item in enumerate(items):
        if position:
            out.write(", ")
        item.restore(out, args)


@dataclass
class FunctionArg:
    """One argument of a function call."""

    arg_type: FunctionArgType
    value: Any

    def _node(self) -> Any:
        if self.arg_type == FunctionArgType.COLUMN:
            return ColumnNameExpressionAtom(self.value)
        if self.arg_type == FunctionArgType.CONSTANT:
            return ConstantExpressionAtom(self.value)
        if self.arg_type in (
            FunctionArgType.EXPRESSION,
            FunctionArgType.FUNCTION,
            FunctionArgType.AGGR_FUNCTION,
            FunctionArgType.CASE_WHEN_ELSE_FUNCTION,
            FunctionArgType.CAST_FUNCTION,
        ):
            return self.value
        raise ValueError(f"unknown function argument type {self.arg_type!r}")

    def in_tables(self, tables: Container[str]) -> None:
        if self.arg_type == FunctionArgType.CONSTANT:
            return
        self._node().in_tables(tables)

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        self._node().restore(out, args)


@dataclass
class Function:
    """A plain function call such as IF(...) or a user-defined function."""

    function_type: FunctionType
    raw_name: str
    args: list[FunctionArg] = field(default_factory=list)

    def name(self) -> str:
        """The name as rendered: upper case for built-in kinds."""
        if self.function_type in (FunctionType.SPEC, FunctionType.SCALAR, FunctionType.PASSWD):
            return self.raw_name.upper()
        return self.raw_name

    def in_tables(self, tables: Container[str]) -> None:
        for arg in self.args:
            arg.in_tables(tables)

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        out.write(self.name())
        out.write("(")
        _restore_all(self.args, out, args)
        out.write(")")


@dataclass
class AggrFunction:
    """An aggregate call such as COUNT(*) or SUM(DISTINCT x)."""

    name: str
    aggregator: str = ""
    args: list[FunctionArg] = field(default_factory=list)
    count_star: bool = False

    def is_count_star(self) -> bool:
        return self.count_star

    def enable_count_star(self) -> None:
        self.count_star = True

    def in_tables(self, tables: Container[str]) -> None:
        for arg in self.args:
            arg.in_tables(tables)

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        out.write(self.name)
        out.write("(")
        if self.count_star:
            out.write("*)")
            return
        if self.aggregator:
            out.write(self.aggregator)
            out.write(" ")
        _restore_all(self.args, out, args)
        out.write(")")


@dataclass
class CaseWhenElseFunction:
    """A CASE [expr] WHEN ... THEN ... [ELSE ...] END construct."""

    case_block: Any = None
    branches: list[tuple[FunctionArg, FunctionArg]] = field(default_factory=list)
    else_block: FunctionArg | None = None

    def in_tables(self, tables: Container[str]) -> None:
        if self.case_block is not None:
            self.case_block.in_tables(tables)
        for when, then in self.branches:
            when.in_tables(tables)
            then.in_tables(tables)
        if self.else_block is not None:
            self.else_block.in_tables(tables)

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        out.write("CASE")
        if self.case_block is not None:
            out.write(" ")
            self.case_block.restore(out, args)
        for when, then in self.branches:
            out.write(" WHEN ")
            when.restore(out, args)
            out.write(" THEN ")
            then.restore(out, args)
        if self.else_block is not None:
            out.write(" ELSE ")
            self.else_block.restore(out, args)
        out.write(" END")


class CastType(enum.IntEnum):
    """The target type of a CAST or CONVERT."""

    BINARY = 1
    NCHAR = 2
    CHAR = 3
    DATE = 4
    DATETIME = 5
    TIME = 6
    JSON = 7
    DECIMAL = 8
    SIGNED = 9
    UNSIGNED = 10
    SIGNED_INTEGER = 11
    UNSIGNED_INTEGER = 12

    def __str__(self) -> str:
        return self.name.replace("_", " ")


@dataclass
class ConvertDataType:
    """A target data type with optional dimensions and charset."""

    cast_type: CastType
    dimension0: int | None = None
    dimension1: int | None = None
    charset: str = ""

    def charset_or_none(self) -> str | None:
        return self.charset or None

    def dimensions(self) -> tuple[int | None, int | None]:
        return self.dimension0, self.dimension1

    def __str__(self) -> str:
        text = str(self.cast_type)
        if self.cast_type in (CastType.BINARY, CastType.NCHAR, CastType.CHAR):
            if self.dimension0 is not None:
                text += f" ({self.dimension0})"
            if self.cast_type == CastType.CHAR and self.charset:
                text += f" CHARSET {self.charset}"
        elif self.cast_type == CastType.DECIMAL:
            if self.dimension0 is not None and self.dimension1 is not None:
                text += f"({self.dimension0},{self.dimension1})"
        return text


@dataclass
class CastFunction:
    """A CAST(x AS type), CONVERT(x, type) or CONVERT(x USING charset) call."""

    source: Any
    cast: ConvertDataType | str
    is_cast: bool = False

    def get_charset(self) -> str | None:
        return self.cast if isinstance(self.cast, str) else None

    def get_cast(self) -> ConvertDataType | None:
        return self.cast if isinstance(self.cast, ConvertDataType) else None

    def in_tables(self, tables: Container[str]) -> None:
        self.source.in_tables(tables)

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        out.write("CAST(" if self.is_cast else "CONVERT(")
        self.source.restore(out, args)
        if isinstance(self.cast, str):
            out.write(" USING ")
            out.write(self.cast)
        elif isinstance(self.cast, ConvertDataType):
            out.write(" AS " if self.is_cast else ", ")
            out.write(str(self.cast))
        out.write(")")