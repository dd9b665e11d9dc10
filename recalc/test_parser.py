import math

import pytest

from recalc.errors import ParseError
from recalc.nodes import Assignment, BinaryOp, FuncCall, Number, Operator, Variable
from recalc.parser import parse


def test_parse_number_and_variable():
    assert parse("42") == Number(42.0)
    assert parse("x") == Variable("x")


def test_constants_are_substituted_at_parse_time():
    assert parse("pi") == Number(math.pi)
    assert parse("e") == Number(math.e)
    assert parse("2 * pi") == BinaryOp(Operator.MULTIPLY, Number(2.0), Number(math.pi))


def test_multiplication_binds_tighter_than_addition():
    assert parse("1 + 2 * 3") == BinaryOp(
        Operator.ADD, Number(1.0), BinaryOp(Operator.MULTIPLY, Number(2.0), Number(3.0))
    )


def test_parentheses_group():
    assert parse("(1 + 2) * 3") == BinaryOp(
        Operator.MULTIPLY, BinaryOp(Operator.ADD, Number(1.0), Number(2.0)), Number(3.0)
    )


def test_subtraction_is_left_associative():
    assert parse("a - b - c") == BinaryOp(
        Operator.SUBTRACT, BinaryOp(Operator.SUBTRACT, Variable("a"), Variable("b")), Variable("c")
    )
    assert parse("a / b * c") == BinaryOp(
        Operator.MULTIPLY, BinaryOp(Operator.DIVIDE, Variable("a"), Variable("b")), Variable("c")
    )


def test_power_is_right_associative():
    assert parse("2 ^ 3 ^ 2") == BinaryOp(
        Operator.POWER, Number(2.0), BinaryOp(Operator.POWER, Number(3.0), Number(2.0))
    )


def test_power_binds_tighter_than_multiplication():
    assert parse("2 * x ^ 2") == BinaryOp(
        Operator.MULTIPLY, Number(2.0), BinaryOp(Operator.POWER, Variable("x"), Number(2.0))
    )


def test_function_call():
    assert parse("sin(x + 1)") == FuncCall("sin", BinaryOp(Operator.ADD, Variable("x"), Number(1.0)))
    assert parse("foo(bar(2))") == FuncCall("foo", FuncCall("bar", Number(2.0)))


def test_signed_numeric_literals():
    assert parse("-3") == Number(-3.0)
    assert parse("2 * -3") == BinaryOp(Operator.MULTIPLY, Number(2.0), Number(-3.0))
    assert parse("x - -1") == BinaryOp(Operator.SUBTRACT, Variable("x"), Number(-1.0))
    assert parse("+2") == Number(2.0)


def test_assignment():
    assert parse("x = y + 1") == Assignment("x", BinaryOp(Operator.ADD, Variable("y"), Number(1.0)))
    assert parse("precision = 2") == Assignment("precision", Number(2.0))


@pytest.mark.parametrize("text", [
    "",
    "   ",
    "1 +",
    "(1 + 2",
    "1 + 2)",
    "* 1",
    "-x",
    "1 2",
    "(1)(2)",
    "sin(1",
    "1 = 2",
    "x = y = 3",
    "1 + x = 2",
    "x =",
    "pi = 3",
    "e = 1",
])
def test_malformed_input_raises_parse_error(text):
    with pytest.raises(ParseError):
        parse(text)


def test_parse_error_reports_position():
    with pytest.raises(ParseError) as e:
        parse("1 + 2 3")
    assert e.value.pos == 6
    assert "pos 6" in str(e.value)


def test_signed_constants():
    assert parse("-pi") == Number(-math.pi)
    assert parse("x - -inf") == BinaryOp(Operator.SUBTRACT, Variable("x"), Number(-math.inf))
    assert parse("inf") == Number(math.inf)
    assert math.isnan(parse("nan").value)


def test_signed_call_is_still_an_error():
    with pytest.raises(ParseError):
        parse("-e(2)")


@pytest.mark.parametrize("text", ["inf = 1", "nan = 2"])
def test_cannot_assign_non_finite_constants(text):
    with pytest.raises(ParseError):
        parse(text)
