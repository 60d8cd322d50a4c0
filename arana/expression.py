"""Expression, atom and predicate nodes of the SQL syntax tree."""

from __future__ import annotations

import enum
import math
from collections.abc import Container, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, ClassVar, Iterable, TextIO

from .types import ValidationError


class Null:
    """The SQL NULL constant."""

    __slots__ = ()

    def __str__(self) -> str:
        return "NULL"

    def __repr__(self) -> str:
        return "Null()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Null)

    def __hash__(self) -> int:
        return hash(Null)


class ExpressionMode(enum.IntEnum):
    LOGICAL = 1
    PREDICATE = 2
    NOT = 3


class ExpressionAtomMode(enum.IntEnum):
    UNARY = 1
    VAR = 2
    COL = 3
    MATH = 4
    CONST = 5
    NESTED = 6
    FUNC = 7


class PredicateMode(enum.IntEnum):
    IN = 1
    COMPARE = 2
    LIKE = 3
    ATOM = 4
    BETWEEN = 5


def _append_arg(args: list[int] | None, n: int) -> None:
    if args is not None:
        args.append(n)


def _check_all(tables: Container[str], *nodes: Any) -> None:
    """Check that every column referenced by the nodes belongs to one of the tables."""
    for node in nodes:
        node.in_tables(tables)


def _escape_single_quoted(text: str) -> str:
    return text.replace("\\", "\\\\").replace("'", "''")


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def constant_to_string(value: Any) -> str:
    """Render a constant value as an SQL literal."""
    if value is None or isinstance(value, Null):
        return "NULL"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, str):
        return "'" + _escape_single_quoted(value) + "'"
    if isinstance(value, float):
        return _format_float(value)
    raise TypeError(f"cannot render {type(value).__name__} as an SQL constant")


# Expression nodes


@dataclass
class LogicalExpressionNode:
    """Two expressions joined by a logical operator such as AND or OR."""

    op: Any
    left: Any
    right: Any

    mode: ClassVar[ExpressionMode] = ExpressionMode.LOGICAL

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        self.left.restore(out, args)
        out.write(f" {self.op} ")
        self.right.restore(out, args)

    def in_tables(self, tables: Container[str]) -> None:
        _check_all(tables, self.left, self.right)


@dataclass
class NotExpressionNode:
    """A negated expression."""

    expr: Any

    mode: ClassVar[ExpressionMode] = ExpressionMode.NOT

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        out.write("NOT ")
        self.expr.restore(out, args)

    def in_tables(self, tables: Container[str]) -> None:
        _check_all(tables, self.expr)


@dataclass
class PredicateExpressionNode:
    """An expression made of a single predicate."""

    predicate: Any

    mode: ClassVar[ExpressionMode] = ExpressionMode.PREDICATE

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        self.predicate.restore(out, args)

    def in_tables(self, tables: Container[str]) -> None:
        _check_all(tables, self.predicate)


# Expression atoms


@dataclass
class UnaryExpressionAtom:
    """An atom preceded by a unary operator."""

    operator: str
    inner: Any

    mode: ClassVar[ExpressionAtomMode] = ExpressionAtomMode.UNARY

    def is_operator_not(self) -> bool:
        return self.operator in ("!", "NOT")

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        out.write(self.operator)
        self.inner.restore(out, args)

    def in_tables(self, tables: Container[str]) -> None:
        _check_all(tables, self.inner)


@dataclass
class ConstantExpressionAtom:
    """A literal constant."""

    inner: Any

    mode: ClassVar[ExpressionAtomMode] = ExpressionAtomMode.CONST

    @property
    def value(self) -> Any:
        return self.inner

    def __str__(self) -> str:
        return constant_to_string(self.inner)

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        out.write(constant_to_string(self.inner))

    def in_tables(self, tables: Container[str]) -> None:
        # A constant references no column, so there is nothing to look up.
        _check_all(tables)

    def cnt_params(self) -> int:
        return 0


class ColumnNameExpressionAtom(tuple):
    """A column reference, optionally qualified: ('table', 'column')."""

    __slots__ = ()
    mode: ClassVar[ExpressionAtomMode] = ExpressionAtomMode.COL

    def __new__(cls, parts: Iterable[str] | str) -> "ColumnNameExpressionAtom":
        if isinstance(parts, str):
            parts = (parts,)
        parts = tuple(parts)
        if not parts:
            raise ValueError("a column name needs at least one part")
        return super().__new__(cls, parts)

    def __repr__(self) -> str:
        return f"ColumnNameExpressionAtom({tuple(self)!r})"

    def prefix(self) -> str:
        return self[0] if len(self) > 1 else ""

    def suffix(self) -> str:
        return self[-1]

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        out.write(".".join(f"`{part}`" for part in self))

    def in_tables(self, tables: Container[str]) -> None:
        if len(self) == 1 or self.prefix() in tables:
            return
        raise ValidationError(f"unknown column '{'.'.join(self)}'")

    def cnt_params(self) -> int:
        return 0


class VariableExpressionAtom(int):
    """A placeholder '?' carrying its parameter index."""

    __slots__ = ()
    mode: ClassVar[ExpressionAtomMode] = ExpressionAtomMode.VAR

    def __repr__(self) -> str:
        return f"VariableExpressionAtom({int(self)})"

    @property
    def n(self) -> int:
        return int(self)

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        out.write("?")
        _append_arg(args, int(self))

    def in_tables(self, tables: Container[str]) -> None:
        # A placeholder references no column, so there is nothing to look up.
        _check_all(tables)

    def cnt_params(self) -> int:
        return 1


@dataclass
class MathExpressionAtom:
    """Two atoms joined by an arithmetic operator."""

    left: Any
    operator: str
    right: Any

    mode: ClassVar[ExpressionAtomMode] = ExpressionAtomMode.MATH

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        self.left.restore(out, args)
        out.write(f" {self.operator} ")
        self.right.restore(out, args)

    def in_tables(self, tables: Container[str]) -> None:
        _check_all(tables, self.left, self.right)


@dataclass
class NestedExpressionAtom:
    """A parenthesised expression."""

    first: Any

    mode: ClassVar[ExpressionAtomMode] = ExpressionAtomMode.NESTED

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        out.write("(")
        self.first.restore(out, args)
        out.write(")")

    def in_tables(self, tables: Container[str]) -> None:
        _check_all(tables, self.first)


@dataclass
class FunctionCallExpressionAtom:
    """A call of a function, aggregate, CASE or CAST."""

    f: Any

    mode: ClassVar[ExpressionAtomMode] = ExpressionAtomMode.FUNC

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        restore = getattr(self.f, "restore", None)
        if not callable(restore):
            raise TypeError(f"{type(self.f).__name__} cannot be rendered as SQL")
        restore(out, args)

    def in_tables(self, tables: Container[str]) -> None:
        check = getattr(self.f, "in_tables", None)
        if callable(check):
            check(tables)


# Predicates


@dataclass
class LikePredicateNode:
    """A LIKE or NOT LIKE comparison."""

    left: Any
    right: Any
    negated: bool = False

    mode: ClassVar[PredicateMode] = PredicateMode.LIKE

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        self.left.restore(out, args)
        out.write(" NOT LIKE" if self.negated else " LIKE ")
        self.right.restore(out, args)

    def in_tables(self, tables: Container[str]) -> None:
        _check_all(tables, self.left, self.right)


@dataclass
class BinaryComparisonPredicateNode:
    """Two predicates joined by a comparison operator."""

    left: Any
    right: Any
    op: Any

    mode: ClassVar[PredicateMode] = PredicateMode.COMPARE

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        self.left.restore(out, args)
        out.write(f" {self.op} ")
        self.right.restore(out, args)

    def in_tables(self, tables: Container[str]) -> None:
        _check_all(tables, self.left, self.right)


@dataclass
class AtomPredicateNode:
    """A predicate made of a single expression atom."""

    atom: Any

    mode: ClassVar[PredicateMode] = PredicateMode.ATOM

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        self.atom.restore(out, args)

    def in_tables(self, tables: Container[str]) -> None:
        _check_all(tables, self.atom)

    def column(self) -> ColumnNameExpressionAtom | None:
        """Return the atom when it is a column reference, else None."""
        if isinstance(self.atom, ColumnNameExpressionAtom):
            return self.atom
        return None


@dataclass
class BetweenPredicateNode:
    """A BETWEEN or NOT BETWEEN range test."""

    key: Any
    left: Any
    right: Any
    negated: bool = False

    mode: ClassVar[PredicateMode] = PredicateMode.BETWEEN

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        self.key.restore(out, args)
        out.write(" NOT BETWEEN" if self.negated else " BETWEEN ")
        self.left.restore(out, args)
        out.write(" AND ")
        self.right.restore(out, args)

    def in_tables(self, tables: Container[str]) -> None:
        _check_all(tables, self.key, self.left, self.right)


@dataclass
class InPredicateNode:
    """An IN or NOT IN membership test against a list of expressions."""

    key: Any
    values: Sequence[Any] = field(default_factory=list)
    negated: bool = False

    mode: ClassVar[PredicateMode] = PredicateMode.IN

    def is_not(self) -> bool:
        return self.negated

    def restore(self, out: TextIO, args: list[int] | None) -> None:
        if not self.values:
            raise ValueError("an IN list must not be empty")
        self.key.restore(out, args)
        out.write(" NOT IN (" if self.negated else " IN (")
        for position, value in enumerate(self.values):
            if position:
                out.write(", ")
            value.restore(out, args)
        out.write(")")

    def in_tables(self, tables: Container[str]) -> None:
        _check_all(tables, self.key, *self.values)