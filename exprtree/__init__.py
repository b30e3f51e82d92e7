"""exprtree: immutable arithmetic expression trees and their evaluator.

Build a tree bottom-up and evaluate it::

    from exprtree import Add, Number, Subtract

    expr = Add(Number(5), Subtract(Number(10), Number(3)))
    expr.evaluate()  # 12
"""

from exprtree.system.errors import (
    DivisionByZeroError,
    ExpressionEvaluationError,
    ExpressionSyntaxError,
    NumericOverflowError,
    UnknownVariableError,
)
from exprtree.system.models import (
    Add,
    BinaryOp,
    BinaryOperator,
    Divide,
    Expression,
    ExpressionNode,
    Multiply,
    Number,
    Subtract,
    Variable,
    expression_from_data,
)
from exprtree.expression_evaluator import Environment, ExpressionEvaluator, evaluate, to_infix, to_sexp
from exprtree.sexp_parser import read_expression

__all__ = [
    "Add",
    "BinaryOp",
    "BinaryOperator",
    "Divide",
    "DivisionByZeroError",
    "Environment",
    "Expression",
    "ExpressionEvaluationError",
    "ExpressionEvaluator",
    "ExpressionNode",
    "ExpressionSyntaxError",
    "Multiply",
    "Number",
    "NumericOverflowError",
    "Subtract",
    "UnknownVariableError",
    "Variable",
    "evaluate",
    "expression_from_data",
    "read_expression",
    "to_infix",
    "to_sexp",
]
