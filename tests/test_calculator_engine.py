"""Tests del motor de estado de la calculadora."""

import pytest

from calculator_engine import (
    AngleUnit,
    CalculatorEngine,
    HistoryEntry,
    MemoryOp,
    OperatorKind,
    PendingOperation,
)


@pytest.fixture
def engine():
    return CalculatorEngine()


def type_number(engine, text):
    for ch in text:
        if ch == ".":
            engine.decimal_input()
        else:
            engine.digit_input(ch)


def enter_negative(engine, text):
    """Deja ``-text`` en pantalla calculando 0 - text."""
    engine.clear()
    engine.operator_input("-")
    type_number(engine, text)
    engine.equals()


# --- Entrada de dígitos y punto ---

def test_initial_state(engine):
    assert engine.display == "0"
    assert engine.pending is None
    assert engine.awaiting_new_operand is False
    assert engine.memory == 0
    assert engine.history == []


def test_digit_replaces_leading_zero(engine):
    type_number(engine, "007")
    assert engine.display == "7"


def test_digits_append(engine):
    type_number(engine, "123")
    assert engine.display == "123"


def test_digit_accepts_int(engine):
    engine.digit_input(4)
    assert engine.display == "4"


@pytest.mark.parametrize("bad", ["a", "12", "", "-1", 10])
def test_digit_rejects_non_digits(engine, bad):
    with pytest.raises(ValueError):
        engine.digit_input(bad)


def test_decimal_point_only_once(engine):
    type_number(engine, "1..5.")
    assert engine.display == "1.5"
    assert engine.display.count(".") == 1


def test_decimal_after_operator_starts_fresh_operand(engine):
    type_number(engine, "3.2")
    engine.operator_input("+")
    engine.decimal_input()
    assert engine.display == "0."
    assert engine.awaiting_new_operand is False
    engine.digit_input("5")
    assert engine.display == "0.5"


def test_decimal_on_initial_zero(engine):
    engine.decimal_input()
    engine.digit_input("0")
    engine.digit_input("7")
    assert engine.display == "0.07"


# --- Operadores encadenados ---

def test_chained_operators_left_to_right(engine):
    type_number(engine, "2")
    engine.operator_input(OperatorKind.ADD)
    type_number(engine, "3")
    engine.operator_input(OperatorKind.MULTIPLY)
    assert engine.display == "5"
    type_number(engine, "4")
    assert engine.equals() == "20"


def test_operator_symbols_are_accepted(engine):
    type_number(engine, "9")
    engine.operator_input("÷")
    type_number(engine, "2")
    assert engine.equals() == "4.5"


def test_operator_sets_pending_and_flag(engine):
    type_number(engine, "12")
    engine.operator_input("×")
    assert engine.pending == PendingOperation(12.0, OperatorKind.MULTIPLY)
    assert engine.pending_text == "12 ×"
    assert engine.awaiting_new_operand is True
    engine.digit_input("3")
    assert engine.display == "3"


def test_repeated_operator_folds_against_display(engine):
    type_number(engine, "2")
    engine.operator_input("+")
    engine.operator_input("+")
    assert engine.display == "4"
    assert engine.pending == PendingOperation(4.0, OperatorKind.ADD)


def test_unknown_operator_is_rejected(engine):
    with pytest.raises(ValueError):
        engine.operator_input("%")


@pytest.mark.parametrize("left,op,right,expected", [
    ("7", "-", "10", "-3"),
    ("2", "^", "10", "1024"),
    ("7", "mod", "3", "1"),
    ("0.1", "+", "0.2", "0.30000000000000004"),
    ("1", "÷", "3", "0.3333333333333333"),
])
def test_binary_operations(engine, left, op, right, expected):
    type_number(engine, left)
    engine.operator_input(op)
    type_number(engine, right)
    assert engine.equals() == expected


def test_modulo_keeps_sign_of_dividend(engine):
    enter_negative(engine, "7")
    engine.operator_input("mod")
    type_number(engine, "3")
    assert engine.equals() == "-1"


# --- Igual ---

def test_equals_without_pending_is_noop(engine):
    type_number(engine, "42")
    assert engine.equals() == "42"
    assert engine.display == "42"
    assert engine.history == []


def test_equals_records_history_and_clears_pending(engine):
    type_number(engine, "6")
    engine.operator_input("×")
    type_number(engine, "7")
    engine.equals()
    assert engine.history == [HistoryEntry("6 × 7", "42")]
    assert engine.pending is None
    assert engine.pending_text == ""
    assert engine.awaiting_new_operand is True


def test_digit_after_equals_starts_new_number(engine):
    type_number(engine, "1")
    engine.operator_input("+")
    type_number(engine, "1")
    engine.equals()
    engine.digit_input("9")
    assert engine.display == "9"


def test_division_by_zero_propagates_infinity(engine):
    type_number(engine, "7")
    engine.operator_input("÷")
    type_number(engine, "0")
    assert engine.equals() == "∞"

    engine.operator_input("+")
    type_number(engine, "1")
    assert engine.equals() == "∞"
    assert engine.history[-1] == HistoryEntry("∞ + 1", "∞")


def test_zero_divided_by_zero_is_nan(engine):
    engine.operator_input("÷")
    engine.digit_input("0")
    assert engine.equals() == "NaN"


def test_nan_is_absorbed_by_arithmetic(engine):
    engine.operator_input("÷")
    engine.digit_input("0")
    engine.equals()
    engine.operator_input("+")
    engine.digit_input("1")
    assert engine.equals() == "NaN"


# --- Borrar y retroceso ---

def test_clear_resets_display_and_pending(engine):
    type_number(engine, "5")
    engine.memory_function(MemoryOp.STORE)
    engine.operator_input("+")
    type_number(engine, "3")
    engine.equals()
    engine.operator_input("×")

    assert engine.clear() == "0"
    assert engine.pending is None
    assert engine.awaiting_new_operand is False
    assert engine.memory == 5
    assert len(engine.history) == 1


@pytest.mark.parametrize("start,expected", [
    ("5", "0"),
    ("12", "1"),
    ("3.", "3"),
    ("0", "0"),
])
def test_backspace(engine, start, expected):
    type_number(engine, start)
    assert engine.backspace() == expected


def test_backspace_on_result(engine):
    type_number(engine, "1")
    engine.operator_input("÷")
    type_number(engine, "4")
    engine.equals()
    assert engine.backspace() == "0.2"


# --- Funciones científicas ---

@pytest.mark.parametrize("value,function,expected", [
    ("5", "factorial", "120"),
    ("0", "factorial", "1"),
    ("1", "factorial", "1"),
    ("2.5", "factorial", "NaN"),
    ("1000", "log", "3"),
    ("0", "ln", "-∞"),
    ("16", "sqrt", "4"),
    ("12", "square", "144"),
    ("4", "reciprocal", "0.25"),
    ("0", "reciprocal", "∞"),
    ("0", "cos", "1"),
    ("0", "sin", "0"),
])
def test_scientific_functions(engine, value, function, expected):
    type_number(engine, value)
    assert engine.scientific_function(function) == expected
    assert engine.history[-1].result == expected
    assert engine.awaiting_new_operand is True


def test_factorial_of_negative_is_nan(engine):
    enter_negative(engine, "3")
    assert engine.scientific_function("factorial") == "NaN"


def test_sqrt_and_abs_of_negative(engine):
    enter_negative(engine, "4")
    assert engine.scientific_function("abs") == "4"
    enter_negative(engine, "4")
    assert engine.scientific_function("sqrt") == "NaN"


def test_function_history_text(engine):
    type_number(engine, "2.5")
    engine.scientific_function("square")
    assert engine.history == [HistoryEntry("square(2.5)", "6.25")]


def test_degree_mode_converts_trig_input(engine):
    engine.set_angle_unit(AngleUnit.DEGREE)
    type_number(engine, "90")
    assert engine.scientific_function("sin") == "1"
    assert engine.history[-1].expression == "sin(90)"


def test_angle_mode_accepts_strings(engine):
    engine.angle_mode = "deg"
    assert engine.angle_mode is AngleUnit.DEGREE
    engine.set_angle_unit("rad")
    assert engine.angle_mode == "rad"


def test_angle_mode_rejects_unknown(engine):
    with pytest.raises(ValueError):
        engine.set_angle_unit("grad")


@pytest.mark.parametrize("constant,expected", [
    ("pi", "3.141592653589793"),
    ("e", "2.718281828459045"),
])
def test_constants_skip_history(engine, constant, expected):
    type_number(engine, "8")
    assert engine.scientific_function(constant) == expected
    assert engine.history == []
    assert engine.awaiting_new_operand is True
    engine.digit_input("2")
    assert engine.display == "2"


def test_constant_as_right_operand(engine):
    type_number(engine, "2")
    engine.operator_input("×")
    engine.scientific_function("pi")
    assert engine.equals() == "6.283185307179586"


def test_unknown_function_is_rejected(engine):
    with pytest.raises(ValueError):
        engine.scientific_function("cosh")


# --- Historial ---

def test_history_keeps_last_ten(engine):
    for n in range(1, 13):
        engine.clear()
        type_number(engine, str(n))
        engine.scientific_function("abs")

    assert len(engine.history) == 10
    assert engine.history[0].expression == "abs(3)"
    assert engine.history[-1].expression == "abs(12)"
    assert engine.history_newest_first()[0].expression == "abs(12)"


def test_custom_history_limit():
    engine = CalculatorEngine(history_limit=2)
    for value in "123":
        engine.clear()
        engine.digit_input(value)
        engine.scientific_function("square")
    assert [e.result for e in engine.history] == ["4", "9"]


def test_clear_history(engine):
    engine.digit_input("3")
    engine.scientific_function("square")
    engine.clear_history()
    assert engine.history == []


# --- Memoria ---

def test_memory_store_clear_recall(engine):
    type_number(engine, "5")
    engine.memory_function("MS")
    engine.memory_function("MC")
    assert engine.memory_function("MR") == "0"


def test_memory_add_and_subtract(engine):
    type_number(engine, "5")
    engine.memory_function(MemoryOp.ADD)
    engine.clear()
    type_number(engine, "3")
    engine.memory_function(MemoryOp.SUBTRACT)
    assert engine.memory == 2
    assert engine.memory_text == "2"

    engine.clear()
    assert engine.memory_function(MemoryOp.RECALL) == "2"
    assert engine.awaiting_new_operand is True


def test_memory_store_overwrites(engine):
    type_number(engine, "5")
    engine.memory_function("M+")
    engine.memory_function("M+")
    engine.clear()
    type_number(engine, "1.5")
    engine.memory_function("MS")
    assert engine.memory == 1.5


def test_memory_ops_leave_display(engine):
    type_number(engine, "8")
    assert engine.memory_function("M+") == "8"
    assert engine.awaiting_new_operand is False


def test_unknown_memory_op_is_rejected(engine):
    with pytest.raises(ValueError):
        engine.memory_function("M*")
