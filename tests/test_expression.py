import io

import pytest

from arana.expression import (
    AtomPredicateNode,
    BetweenPredicateNode,
    BinaryComparisonPredicateNode,
    ColumnNameExpressionAtom,
    ConstantExpressionAtom,
    ExpressionAtomMode,
    ExpressionMode,
    FunctionCallExpressionAtom,
    InPredicateNode,
    LikePredicateNode,
    LogicalExpressionNode,
    MathExpressionAtom,
    NestedExpressionAtom,
    NotExpressionNode,
    Null,
    PredicateExpressionNode,
    PredicateMode,
    UnaryExpressionAtom,
    VariableExpressionAtom,
    constant_to_string,
)
from arana.types import ValidationError


def render(node):
    out = io.StringIO()
    args = []
    node.restore(out, args)
    return out.getvalue(), args


def col(*parts):
    return AtomPredicateNode(ColumnNameExpressionAtom(parts))


def const(value):
    return AtomPredicateNode(ConstantExpressionAtom(value))


def var(n):
    return AtomPredicateNode(VariableExpressionAtom(n))


def test_null_constant():
    assert str(Null()) == "NULL"
    assert constant_to_string(Null()) == "NULL"
    assert constant_to_string(None) == "NULL"


def test_bool_constants():
    assert constant_to_string(True) == "true"
    assert constant_to_string(False) == "false"


def test_int_constant():
    assert constant_to_string(-17) == "-17"
    assert constant_to_string(0) == "0"


def test_float_constant_has_no_trailing_zero():
    assert constant_to_string(1.0) == "1"


@pytest.mark.parametrize("value", [0.1, 2.5, -3.75, 1e20, 1.5e-7, 123456.789])
def test_float_constant_round_trips_without_exponent(value):
    text = constant_to_string(value)
    assert "e" not in text.lower()
    assert float(text) == value


def test_string_constant_is_quoted():
    text = constant_to_string("abc")
    assert text.startswith("'") and text.endswith("'")
    assert text[1:-1] == "abc"


def test_string_constant_escapes_quotes():
    text = constant_to_string("it's")
    inner = text[1:-1]
    assert "'" not in inner.replace("''", "")


@pytest.mark.parametrize("value", [object(), b"x", [1]])
def test_unsupported_constant_raises(value):
    with pytest.raises(TypeError):
        constant_to_string(value)


def test_constant_atom():
    atom = ConstantExpressionAtom(7)
    assert str(atom) == constant_to_string(7)
    assert atom.value == 7
    assert atom.cnt_params() == 0
    assert atom.mode is ExpressionAtomMode.CONST
    text, args = render(atom)
    assert text == str(atom)
    assert args == []


def test_column_restore_and_parts():
    column = ColumnNameExpressionAtom(["t", "c"])
    text, args = render(column)
    assert text == "`t`.`c`"
    assert args == []
    assert column.prefix() == "t"
    assert column.suffix() == "c"
    assert column.cnt_params() == 0
    assert column.mode is ExpressionAtomMode.COL


def test_single_column_has_no_prefix():
    column = ColumnNameExpressionAtom("name")
    assert column.prefix() == ""
    assert column.suffix() == "name"
    assert render(column)[0] == "`name`"


def test_empty_column_rejected():
    with pytest.raises(ValueError):
        ColumnNameExpressionAtom([])


def test_column_in_tables():
    ColumnNameExpressionAtom(["c"]).in_tables(set())
    ColumnNameExpressionAtom(["t", "c"]).in_tables({"t"})
    with pytest.raises(ValidationError, match="unknown column 't.c'"):
        ColumnNameExpressionAtom(["t", "c"]).in_tables({"other"})


def test_variables_collect_indices_in_order():
    node = BinaryComparisonPredicateNode(var(0), var(1), "=")
    text, args = render(node)
    assert args == [0, 1]
    assert text.count("?") == 2
    assert VariableExpressionAtom(3).n == 3
    assert VariableExpressionAtom(3).cnt_params() == 1


def test_variable_without_args_list():
    out = io.StringIO()
    VariableExpressionAtom(5).restore(out, None)
    assert out.getvalue() == "?"


def test_logical_expression():
    left = PredicateExpressionNode(BinaryComparisonPredicateNode(col("a"), const(1), "="))
    right = PredicateExpressionNode(BinaryComparisonPredicateNode(col("b"), var(0), "="))
    node = LogicalExpressionNode("AND", left, right)
    text, args = render(node)
    assert text == "`a` = 1 AND `b` = ?"
    assert args == [0]
    assert node.mode is ExpressionMode.LOGICAL


def test_not_expression():
    inner = PredicateExpressionNode(col("a"))
    node = NotExpressionNode(inner)
    text, _ = render(node)
    assert text == "NOT " + render(inner)[0]
    assert node.mode is ExpressionMode.NOT
    assert inner.mode is ExpressionMode.PREDICATE


def test_math_atom():
    left = ColumnNameExpressionAtom("a")
    right = ConstantExpressionAtom(2)
    node = MathExpressionAtom(left, "+", right)
    assert render(node)[0] == render(left)[0] + " + " + render(right)[0]
    assert node.mode is ExpressionAtomMode.MATH


def test_nested_atom():
    inner = PredicateExpressionNode(col("a"))
    node = NestedExpressionAtom(inner)
    assert render(node)[0] == "(" + render(inner)[0] + ")"
    assert node.mode is ExpressionAtomMode.NESTED


def test_unary_atom():
    inner = ColumnNameExpressionAtom("a")
    node = UnaryExpressionAtom("-", inner)
    assert render(node)[0] == "-" + render(inner)[0]
    assert not node.is_operator_not()
    assert UnaryExpressionAtom("!", inner).is_operator_not()
    assert UnaryExpressionAtom("NOT", inner).is_operator_not()


class _FakeFunction:
    def restore(self, out, args):
        out.write("F()")

    def in_tables(self, tables):
        raise ValidationError("unknown column 'x.y'")


def test_function_call_atom_delegates():
    node = FunctionCallExpressionAtom(_FakeFunction())
    assert render(node)[0] == "F()"
    with pytest.raises(ValidationError):
        node.in_tables(set())
    assert node.mode is ExpressionAtomMode.FUNC


def test_function_call_atom_without_restore():
    node = FunctionCallExpressionAtom(object())
    assert node.mode is ExpressionAtomMode.FUNC
    with pytest.raises(TypeError):
        render(node)


def test_like_predicate():
    node = LikePredicateNode(col("a"), const("x%"))
    text, _ = render(node)
    assert " LIKE " in text
    assert "NOT" not in text
    negated, _ = render(LikePredicateNode(col("a"), const("x%"), negated=True))
    assert " NOT LIKE" in negated
    assert node.mode is PredicateMode.LIKE


def test_between_predicate():
    key, low, high = col("a"), const(1), var(0)
    node = BetweenPredicateNode(key, low, high)
    text, args = render(node)
    assert text == render(key)[0] + " BETWEEN " + render(low)[0] + " AND " + render(high)[0]
    assert args == [0]
    negated, _ = render(BetweenPredicateNode(key, low, high, negated=True))
    assert " NOT BETWEEN" in negated
    assert node.mode is PredicateMode.BETWEEN


def test_in_predicate():
    values = [PredicateExpressionNode(const(1)), PredicateExpressionNode(var(0))]
    node = InPredicateNode(col("a"), values)
    text, args = render(node)
    expected = render(col("a"))[0] + " IN (" + ", ".join(render(v)[0] for v in values) + ")"
    assert text == expected
    assert args == [0]
    assert not node.is_not()
    negated = InPredicateNode(col("a"), values, negated=True)
    assert negated.is_not()
    assert " NOT IN (" in render(negated)[0]


def test_in_predicate_empty_list_raises():
    with pytest.raises(ValueError):
        render(InPredicateNode(col("a"), []))


def test_atom_predicate_column():
    column = ColumnNameExpressionAtom(["t", "c"])
    assert AtomPredicateNode(column).column() == column
    assert AtomPredicateNode(ConstantExpressionAtom(1)).column() is None
    assert AtomPredicateNode(column).mode is PredicateMode.ATOM


def test_in_tables_propagates_through_tree():
    good = BinaryComparisonPredicateNode(col("t", "a"), const(1), "=")
    bad = BinaryComparisonPredicateNode(col("u", "b"), const(1), "=")
    node = LogicalExpressionNode(
        "OR", PredicateExpressionNode(good), PredicateExpressionNode(bad)
    )
    node.in_tables({"t", "u"})
    with pytest.raises(ValidationError, match="u.b"):
        node.in_tables({"t"})
    with pytest.raises(ValidationError):
        InPredicateNode(col("a"), [PredicateExpressionNode(col("z", "q"))]).in_tables({"t"})
    with pytest.raises(ValidationError):
        BetweenPredicateNode(col("a"), col("z", "q"), const(1)).in_tables(set())