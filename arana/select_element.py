"""Elements of a SELECT list."""

from __future__ import annotations

import enum
import io
from collections.abc import Container, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

from .expression import ColumnNameExpressionAtom
from .functions import AggrFunction, CaseWhenElseFunction, CastFunction, Function
from .types import ValidationError


class SelMode(enum.IntEnum):
    ALL = 1
    COL = 2
    FUNC = 3
    EXPR = 4


def _render(node: Any) -> str:
    out = io.StringIO()
    node.restore(out, None)
    return out.getvalue()


@dataclass
class SelectElementAll:
    """A '*' or 'table.*' element."""

    prefix: str = ""

    mode: ClassVar[SelMode] = SelMode.ALL

    @property
    def alias(self) -> str:
        return ""

    def to_select_string(self) -> str:
        return f"`{self.prefix}`.*" if self.prefix else "*"

    def in_tables(self, tables: Container[str]) -> None:
        if not self.prefix or self.prefix in tables:
            return
        raise ValidationError(f"unknown column '{self.to_select_string()}'")


@dataclass
class SelectElementExpr:
    """An expression in the SELECT list."""

    expression: Any
    alias: str = ""

    mode: ClassVar[SelMode] = SelMode.EXPR

    def to_select_string(self) -> str:
        return _render(self.expression)

    def in_tables(self, tables: Container[str]) -> None:
        self.expression.in_tables(tables)


@dataclass
class SelectElementFunction:
    """A function, aggregate, CAST or CASE call in the SELECT list."""

    function: Function | AggrFunction | CastFunction | CaseWhenElseFunction
    alias: str = ""

    mode: ClassVar[SelMode] = SelMode.FUNC

    def to_select_string(self) -> str:
        if not isinstance(
            self.function, (Function, AggrFunction, CastFunction, CaseWhenElseFunction)
        ):
            raise TypeError(f"{type(self.function).__name__} is not a select function")
        return _render(self.function)

    def in_tables(self, tables: Container[str]) -> None:
        check = getattr(self.function, "in_tables", None)
        if callable(check):
            check(tables)


@dataclass
class SelectElementColumn:
    """A column, optionally qualified by its table, in the SELECT list."""

    name: Sequence[str]
    alias: str = ""

    mode: ClassVar[SelMode] = SelMode.COL

    def to_select_string(self) -> str:
        return _render(ColumnNameExpressionAtom(self.name))

    def in_tables(self, tables: Container[str]) -> None:
        if len(self.name) < 2 or self.name[0] in tables:
            return
        raise ValidationError(f"unknown column '{self.to_select_string()}'")