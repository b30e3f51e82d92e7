"""
Unit tests for the ExpressionEvaluator.
"""

import sys

import pytest

from exprtree.expression_evaluator.environment import Environment
from exprtree.expression_evaluator.evaluator import ExpressionEvaluator, evaluate
from exprtree.expression_evaluator.operators import OPERATOR_APPLIERS
from exprtree.system.errors import (
    DivisionByZeroError,
    ExpressionEvaluationError,
    ExpressionSyntaxError,
    NumericOverflowError,
    UnknownVariableError,
)
from exprtree.system.models import Add, BinaryOperator, Divide, Multiply, Number, Subtract, Variable

SUBTREES = [
    Number(0),
    Number(7),
    Number(-2.5),
    Add(Number(1), Number(2)),
    Subtract(Number(3), Add(Number(4), Number(5))),
    Multiply(Number(6), Subtract(Number(1), Number(0.5))),
]

# --- Literals ---

@pytest.mark.parametrize("value", [0, 1, -1, 42, 3.5, -0.25, 10**20])
def test_literal_evaluates_to_its_value(evaluator, value):
    assert evaluator.evaluate(Number(value)) == value

def test_literal_value_is_returned_unchanged(evaluator):
    result = evaluator.evaluate(Number(5))
    assert result == 5 and type(result) is int
    result = evaluator.evaluate(Number(2.5))
    assert result == 2.5 and type(result) is float

# --- Binary operators ---

@pytest.mark.parametrize("a", SUBTREES)
@pytest.mark.parametrize("b", SUBTREES)
def test_add_is_sum_of_children(evaluator, a, b):
    assert evaluator.evaluate(Add(a, b)) == evaluator.evaluate(a) + evaluator.evaluate(b)

@pytest.mark.parametrize("a", SUBTREES)
@pytest.mark.parametrize("b", SUBTREES)
def test_subtract_is_difference_of_children(evaluator, a, b):
    assert evaluator.evaluate(Subtract(a, b)) == evaluator.evaluate(a) - evaluator.evaluate(b)

def test_multiply(evaluator):
    assert evaluator.evaluate(Multiply(Number(6), Number(7))) == 42

def test_divide_is_true_division(evaluator):
    assert evaluator.evaluate(Divide(Number(15), Number(4))) == pytest.approx(3.75)
    assert evaluator.evaluate(Divide(Number(8), Number(2))) == 4

# --- Concrete scenarios ---

def test_textbook_example(evaluator, sample_tree):
    assert evaluator.evaluate(sample_tree) == 12

def test_subtract_alone(evaluator):
    assert evaluator.evaluate(Subtract(Number(10), Number(3))) == 7

def test_tree_shape_fixes_grouping(evaluator):
    left_grouped = Subtract(Subtract(Number(10), Number(3)), Number(2))
    right_grouped = Subtract(Number(10), Subtract(Number(3), Number(2)))
    assert evaluator.evaluate(left_grouped) == 5
    assert evaluator.evaluate(right_grouped) == 9

def test_node_evaluate_method(sample_tree):
    assert sample_tree.evaluate() == 12
    assert Number(3).evaluate() == 3

def test_module_level_evaluate(sample_tree):
    assert evaluate(sample_tree) == 12

def test_evaluation_does_not_change_tree(evaluator, sample_tree):
    before = sample_tree.model_dump()
    evaluator.evaluate(sample_tree)
    evaluator.evaluate(sample_tree)
    assert sample_tree.model_dump() == before

# --- Depth ---

def test_depth_1000_chain(evaluator, make_add_chain):
    assert evaluator.evaluate(make_add_chain(1000)) == 1000

def test_chain_deeper_than_recursion_limit(evaluator, make_add_chain):
    depth = sys.getrecursionlimit() * 5
    assert evaluator.evaluate(make_add_chain(depth)) == depth

def test_right_leaning_chain(evaluator):
    node = Number(0)
    for _ in range(3000):
        node = Subtract(Number(1), node)
    # 1 - (1 - (1 - ... (1 - 0))) alternates between 1 and 0
    assert evaluator.evaluate(node) == 0

# --- Variables ---

def test_variables_resolved_from_environment(evaluator, variable_tree, env):
    assert evaluator.evaluate(variable_tree, env) == pytest.approx(4.5)

def test_variables_resolved_from_parent_scope(evaluator):
    child = Environment({"y": 2}).extend({"x": 3})
    assert evaluator.evaluate(Multiply(Variable("x"), Variable("y")), child) == 6

def test_unknown_variable(evaluator, env):
    with pytest.raises(UnknownVariableError) as excinfo:
        evaluator.evaluate(Add(Variable("missing"), Number(1)), env)
    assert excinfo.value.name == "missing"
    assert "Unknown variable 'missing'" in str(excinfo.value)
    assert isinstance(excinfo.value, ExpressionEvaluationError)

def test_variable_without_environment(evaluator):
    with pytest.raises(UnknownVariableError):
        evaluator.evaluate(Variable("x"))

# --- Errors ---

def test_division_by_zero(evaluator):
    with pytest.raises(DivisionByZeroError) as excinfo:
        evaluator.evaluate(Add(Number(1), Divide(Number(1), Number(0))))
    assert "(1 / 0)" in excinfo.value.expression
    assert isinstance(excinfo.value.__cause__, ZeroDivisionError)

def test_division_by_zero_float(evaluator):
    with pytest.raises(DivisionByZeroError):
        evaluator.evaluate(Divide(Number(2.5), Subtract(Number(1.0), Number(1.0))))

def test_huge_int_mixed_with_float_overflows(evaluator):
    with pytest.raises(NumericOverflowError) as excinfo:
        evaluator.evaluate(Add(Number(10**400), Number(0.5)))
    assert excinfo.value.message == "Numeric overflow"
    assert isinstance(excinfo.value.__cause__, OverflowError)

def test_huge_int_true_division_overflows(evaluator):
    with pytest.raises(NumericOverflowError) as excinfo:
        evaluator.evaluate(Divide(Number(10**400), Number(3)))
    assert isinstance(excinfo.value.__cause__, OverflowError)
    assert excinfo.value.expression.startswith("(1000")
    assert excinfo.value.expression.endswith("...")

def test_huge_ints_stay_exact_without_floats(evaluator):
    tree = Subtract(Multiply(Number(10**400), Number(2)), Number(10**400))
    assert evaluator.evaluate(tree) == 10**400

def test_large_int_mixed_with_float(evaluator):
    assert evaluator.evaluate(Add(Number(2**60), Number(0.5))) == float(2**60) + 0.5

def test_invalid_node(evaluator):
    with pytest.raises(ExpressionEvaluationError) as excinfo:
        evaluator.evaluate(42)
    assert "Invalid expression node" in str(excinfo.value)
    assert "int" in excinfo.value.error_details

# --- Operator table ---

def test_custom_operator_table():
    table = dict(OPERATOR_APPLIERS)
    table[BinaryOperator.ADD] = lambda left, right: max(left, right)
    custom = ExpressionEvaluator(operators=table)
    assert custom.evaluate(Add(Number(3), Number(9))) == 9

def test_incomplete_operator_table_rejected():
    table = dict(OPERATOR_APPLIERS)
    del table[BinaryOperator.DIVIDE]
    with pytest.raises(RuntimeError, match="divide"):
        ExpressionEvaluator(operators=table)

def test_left_child_evaluated_before_right():
    calls = []

    def recording_add(left, right):
        calls.append((left, right))
        return left + right

    table = dict(OPERATOR_APPLIERS)
    table[BinaryOperator.ADD] = recording_add
    tree = Add(Add(Number(1), Number(2)), Add(Number(3), Number(4)))
    assert ExpressionEvaluator(operators=table).evaluate(tree) == 10
    assert calls == [(1, 2), (3, 4), (3, 7)]

# --- evaluate_string ---

def test_evaluate_string(evaluator, env):
    assert evaluator.evaluate_string("(+ 5 (- 10 3))") == 12
    assert evaluator.evaluate_string("(* x 2)", env) == 8

def test_evaluate_string_syntax_error(evaluator):
    with pytest.raises(ExpressionSyntaxError):
        evaluator.evaluate_string("(+ 1 2")

def test_evaluate_string_evaluation_error(evaluator):
    with pytest.raises(DivisionByZeroError):
        evaluator.evaluate_string("(/ 1 0)")
