import pytest

from termcalc.calculator import CalculationEntry, Calculator, CalculatorMode


def test_initial_state():
    calc = Calculator()
    assert calc.expression == ""
    assert calc.result == "0"
    assert calc.history == []
    assert calc.mode is CalculatorMode.BASIC


def test_live_update_shows_value():
    calc = Calculator()
    calc.append_digit("3")
    assert calc.result == "3"
    calc.append_operator("*")
    calc.append_digit("4")
    assert calc.expression == "3*4"
    assert calc.result == "12"


def test_live_update_shows_raw_text_on_error():
    calc = Calculator()
    calc.append_text("3+")
    assert calc.result == "3+"
    assert calc.error_message is None


def test_live_update_empty_expression():
    calc = Calculator()
    calc.append_digit("7")
    calc.backspace()
    assert calc.expression == ""
    assert calc.result == "0"


def test_calculate_records_history():
    calc = Calculator()
    calc.append_text("2+3*4")
    assert calc.calculate() == "14"
    assert calc.expression == "14"
    assert calc.result == "14"
    assert len(calc.history) == 1
    entry = calc.history[0]
    assert (entry.expression, entry.result) == ("2+3*4", "14")


def test_calculate_surfaces_errors():
    calc = Calculator()
    calc.append_text("3+")
    assert calc.calculate() is None
    assert calc.result == "Error"
    assert calc.error_message == "Error: Unexpected end of expression"
    assert calc.history == []


def test_calculate_empty_is_noop():
    calc = Calculator()
    assert calc.calculate() is None
    assert calc.result == "0"


def test_append_operator():
    calc = Calculator()
    calc.append_operator("+")
    assert calc.expression == ""
    calc.append_operator("-")
    assert calc.expression == "-"

    calc.clear()
    calc.append_digit("3")
    calc.append_operator("+")
    calc.append_operator("*")
    assert calc.expression == "3*"

    with pytest.raises(ValueError):
        calc.append_operator("&")


def test_append_decimal():
    calc = Calculator()
    calc.append_decimal()
    assert calc.expression == "0."
    calc.append_digit("5")
    calc.append_decimal()
    assert calc.expression == "0.5"
    calc.append_operator("+")
    calc.append_decimal()
    assert calc.expression == "0.5+0."

    calc.clear()
    calc.append_digit("2")
    calc.append_decimal()
    assert calc.expression == "2."


def test_apply_function():
    calc = Calculator()
    calc.append_text("16")
    assert calc.apply_function("sqrt") == "4"
    assert calc.history[-1].expression == "sqrt(16)"
    assert calc.apply_function("x^2") == "16"
    assert calc.apply_function("sin") == "0.2756373558"


def test_apply_reciprocal_of_zero():
    calc = Calculator()
    calc.append_digit("0")
    assert calc.apply_function("1/x") == "Infinity"


def test_apply_function_needs_numeric_result():
    calc = Calculator()
    calc.append_text("3+")
    assert calc.apply_function("sqrt") is None
    assert calc.history == []
    with pytest.raises(ValueError):
        calc.apply_function("foo")


def test_recall():
    calc = Calculator()
    calc.append_text("(2+3)*4")
    calc.calculate()
    calc.clear()
    assert calc.recall(0)
    assert calc.expression == "(2+3)*4"
    assert calc.result == "20"
    assert not calc.recall(1)
    assert not calc.recall(-1)


def test_recall_surfaces_errors():
    calc = Calculator()
    calc.history.append(CalculationEntry("5/0", "?"))
    assert calc.recall(0)
    assert calc.result == "Error"
    assert calc.error_message == "Error: Division by zero"


def test_history_limit():
    calc = Calculator(history_limit=2)
    for expr in ("1+1", "2+2", "3+3"):
        calc.clear()
        calc.append_text(expr)
        calc.calculate()
    assert [e.expression for e in calc.history] == ["2+2", "3+3"]


def test_clear_all():
    calc = Calculator()
    calc.append_text("1+1")
    calc.calculate()
    calc.clear_all()
    assert calc.history == []
    assert calc.expression == ""
    assert calc.result == "0"


def test_toggle_mode():
    calc = Calculator()
    assert calc.toggle_mode() is CalculatorMode.SCIENTIFIC
    assert calc.toggle_mode() is CalculatorMode.BASIC


def test_deep_nesting_during_live_update_shows_raw_text():
    calc = Calculator()
    text = "(" * 1000 + "1"
    calc.append_text(text)
    assert calc.result == text
    assert calc.error_message is None


def test_deep_nesting_on_calculate_reports_error():
    calc = Calculator()
    calc.append_text("(" * 1000 + "1" + ")" * 1000)
    assert calc.calculate() is None
    assert calc.result == "Error"
    assert calc.error_message == "Error: Expression nested too deeply"
