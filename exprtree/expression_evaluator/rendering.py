"""
Text renderings of expression trees.

Both renderers walk the tree with an explicit stack, so deep trees do not
hit the interpreter's recursion limit.
"""
from typing import Callable, List, Tuple

from exprtree.system.errors import ExpressionEvaluationError
from exprtree.system.models import BinaryOp, Expression, Number, Variable
from .operators import OPERATOR_SYMBOLS


def _format_leaf(node: Expression) -> str:
    if isinstance(node, Number):
        return repr(node.value)
    if isinstance(node, Variable):
        return node.name
    raise ExpressionEvaluationError(
        "Invalid expression node",
        error_details=f"Cannot render node of type {type(node).__name__}",
    )


def _render(node: Expression, combine: Callable[[BinaryOp, str, str], str]) -> str:
    parts: List[str] = []
    stack: List[Tuple[Expression, bool]] = [(node, False)]
    while stack:
        current, children_done = stack.pop()
        if not isinstance(current, BinaryOp):
            parts.append(_format_leaf(current))
        elif children_done:
            right = parts.pop()
            left = parts.pop()
            parts.append(combine(current, left, right))
        else:
            stack.append((current, True))
            stack.append((current.right, False))
            stack.append((current.left, False))
    return parts.pop()


def to_infix(node: Expression) -> str:
    """Renders ``node`` as fully parenthesised infix, e.g. ``(5 + (10 - 3))``."""
    return _render(node, lambda op_node, left, right: f"({left} {OPERATOR_SYMBOLS[op_node.op]} {right})")


def to_sexp(node: Expression) -> str:
    """Renders ``node`` as an S-expression, e.g. ``(+ 5 (- 10 3))``."""
    return _render(node, lambda op_node, left, right: f"({OPERATOR_SYMBOLS[op_node.op]} {left} {right})")
