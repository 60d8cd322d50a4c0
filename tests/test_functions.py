import io

import pytest

from arana.expression import (
    AtomPredicateNode,
    ColumnNameExpressionAtom,
    PredicateExpressionNode,
    VariableExpressionAtom,
)
from arana.functions import (
    AGGR_COUNT,
    AGGR_SUM,
    AggrFunction,
    CaseWhenElseFunction,
    CastFunction,
    CastType,
    ConvertDataType,
    Function,
    FunctionArg,
    FunctionArgType,
    FunctionType,
)
from arana.types import ValidationError


def render(node, args=None):
    out = io.StringIO()
    node.restore(out, args)
    return out.getvalue()


def col(*parts):
    return FunctionArg(FunctionArgType.COLUMN, parts)


def const(value):
    return FunctionArg(FunctionArgType.CONSTANT, value)


def var(n):
    expr = PredicateExpressionNode(AtomPredicateNode(VariableExpressionAtom(n)))
    return FunctionArg(FunctionArgType.EXPRESSION, expr)


def test_function_type_names():
    assert str(FunctionType.PASSWD) == "PASSWORD"
    assert str(FunctionType.SCALAR) == "SCALAR"
    assert str(FunctionType.UDF) == "UDF"
    assert Function(FunctionType.PASSWD, "old_password").name() == "OLD_PASSWORD"
    assert Function(FunctionType.SCALAR, "abs").name() == "ABS"


def test_function_name_case():
    assert Function(FunctionType.SPEC, "if").name() == "IF"
    assert Function(FunctionType.UDF, "myFunc").name() == "myFunc"


def test_function_restore_renders_each_argument():
    fn = Function(FunctionType.SPEC, "if", [col("a"), const(1), const("x")])
    assert render(fn) == "IF(`a`, 1, 'x')"


def test_function_restore_collects_parameter_indices():
    fn = Function(FunctionType.UDF, "f", [var(0), var(1)])
    collected = []
    text = render(fn, collected)
    assert text == "f(?, ?)"
    assert collected == [0, 1]


def test_function_in_tables_rejects_unknown_table():
    fn = Function(FunctionType.SPEC, "abs", [col("t", "c")])
    assert fn.in_tables({"t"}) is None
    with pytest.raises(ValidationError):
        fn.in_tables({"other"})


def test_function_arg_unknown_type():
    assert render(FunctionArg(FunctionArgType.CONSTANT, 1)) == "1"
    arg = FunctionArg(None, 1)
    with pytest.raises(ValueError):
        render(arg)


def test_aggr_count_star():
    fn = AggrFunction(AGGR_COUNT)
    assert not fn.is_count_star()
    fn.enable_count_star()
    assert fn.is_count_star()
    assert render(fn) == "COUNT(*)"


def test_aggr_with_aggregator():
    fn = AggrFunction(AGGR_SUM, "DISTINCT", [col("x")])
    text = render(fn)
    assert text.startswith(f"{AGGR_SUM}(DISTINCT ")
    assert text.endswith(")")
    assert render(ColumnNameExpressionAtom("x")) in text


def test_aggr_without_args():
    fn = AggrFunction(AGGR_COUNT)
    assert render(fn) == AGGR_COUNT + "()"


def test_aggr_in_tables():
    fn = AggrFunction(AGGR_SUM, args=[col("t", "x")])
    with pytest.raises(ValidationError):
        fn.in_tables(set())


def test_case_when_else():
    fn = CaseWhenElseFunction(
        branches=[(const(1), const("a"))],
        else_block=const("b"),
    )
    text = render(fn)
    assert text.startswith("CASE")
    assert text.endswith(" END")
    assert text.index(" WHEN ") < text.index(" THEN ") < text.index(" ELSE ")


def test_case_when_in_tables_checks_branches():
    fn = CaseWhenElseFunction(branches=[(col("t", "a"), const(1))])
    with pytest.raises(ValidationError):
        fn.in_tables({"u"})


def test_cast_type_names():
    assert str(CastType.SIGNED_INTEGER) == "SIGNED INTEGER"
    assert str(CastType.UNSIGNED_INTEGER) == "UNSIGNED INTEGER"
    assert str(CastType.DATETIME) == "DATETIME"
    assert str(ConvertDataType(CastType.SIGNED_INTEGER)) == "SIGNED INTEGER"
    assert str(ConvertDataType(CastType.DATETIME)) == "DATETIME"


def test_convert_data_type_decimal():
    assert str(ConvertDataType(CastType.DECIMAL)) == "DECIMAL"
    assert str(ConvertDataType(CastType.DECIMAL, 10, None)) == "DECIMAL"
    assert str(ConvertDataType(CastType.DECIMAL, 10, 2)) == "DECIMAL(10,2)"


def test_convert_data_type_char_charset():
    dt = ConvertDataType(CastType.CHAR, charset="utf8mb4")
    assert str(dt).endswith(" CHARSET utf8mb4")
    assert dt.charset_or_none() == "utf8mb4"
    assert ConvertDataType(CastType.CHAR).charset_or_none() is None


def test_convert_data_type_dimensions():
    dt = ConvertDataType(CastType.BINARY, 16)
    assert dt.dimensions() == (16, None)
    assert "16" in str(dt)
    assert str(ConvertDataType(CastType.SIGNED, 5)) == str(CastType.SIGNED)


def test_convert_using_charset():
    src = PredicateExpressionNode(AtomPredicateNode(ColumnNameExpressionAtom("a")))
    fn = CastFunction(src, "utf8")
    assert fn.get_charset() == "utf8"
    assert fn.get_cast() is None
    text = render(fn)
    assert text.startswith("CONVERT(")
    assert text.endswith(" USING utf8)")


def test_cast_as_type():
    src = PredicateExpressionNode(AtomPredicateNode(ColumnNameExpressionAtom("a")))
    dt = ConvertDataType(CastType.DATE)
    fn = CastFunction(src, dt, is_cast=True)
    assert fn.get_cast() is dt
    assert fn.get_charset() is None
    text = render(fn)
    assert text.startswith("CAST(")
    assert text.endswith(" AS " + str(dt) + ")")


def test_cast_in_tables():
    src = PredicateExpressionNode(AtomPredicateNode(ColumnNameExpressionAtom(("t", "a"))))
    fn = CastFunction(src, "utf8")
    with pytest.raises(ValidationError):
        fn.in_tables({"x"})