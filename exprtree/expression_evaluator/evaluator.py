"""
Expression tree evaluator.

Evaluates a hand-built tree of expression nodes (literals, variables and
binary operations) to a number with a post-order walk. The walk keeps its own
stack instead of recursing, so tree depth is limited only by memory.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from exprtree.system.errors import (
    DivisionByZeroError,
    ExpressionEvaluationError,
    ExpressionSyntaxError,
    NumericOverflowError,
    UnknownVariableError,
)
from exprtree.system.models import BinaryOp, BinaryOperator, Expression, Number, Variable
from .environment import Environment
from .operators import OPERATOR_APPLIERS, OperatorApplier, check_operator_table
from .rendering import to_infix

logger = logging.getLogger(__name__)

MAX_EXPRESSION_CONTEXT = 200


def _describe(node: Any) -> str:
    """Short rendering of ``node`` for error messages."""
    try:
        text = to_infix(node)
    except ExpressionEvaluationError:
        text = repr(node)
    except ValueError:
        # ints past sys.get_int_max_str_digits() cannot be printed
        text = f"<{type(node).__name__}>"
    if len(text) > MAX_EXPRESSION_CONTEXT:
        text = text[:MAX_EXPRESSION_CONTEXT] + "..."
    return text


class ExpressionEvaluator:
    """
    Evaluates expression trees.

    Each node is visited once. Children are always evaluated left before right,
    and a parent's operator is applied only after both children have values.
    Evaluation has no side effects on the tree or the environment.
    """

    def __init__(self, operators: Optional[Mapping[BinaryOperator, OperatorApplier]] = None):
        """
        Initializes the evaluator.

        Args:
            operators: Optional operator table replacing the default appliers.
                       It must cover every BinaryOperator.

        Raises:
            RuntimeError: If the operator table is incomplete.
        """
        table: Dict[BinaryOperator, OperatorApplier] = dict(operators if operators is not None else OPERATOR_APPLIERS)
        check_operator_table(table)
        self.operators = table

    def evaluate(self, node: Expression, env: Optional[Environment] = None) -> Any:
        """
        Evaluates ``node`` to a number.

        Args:
            node: Root of the expression tree.
            env: Environment used to resolve Variable nodes.

        Returns:
            The numeric result.

        Raises:
            DivisionByZeroError: If a Divide node's right operand is zero.
            UnknownVariableError: If a Variable is not bound in ``env``.
            NumericOverflowError: If an int operand is too large to combine with a float.
            ExpressionEvaluationError: If the tree contains an object that is
                                       not an expression node.
        """
        logger.debug("Evaluating expression tree rooted at %s", type(node).__name__)
        result = self._eval(node, env)
        logger.debug("Finished evaluating expression tree. Result: %r", result)
        return result

    def evaluate_string(self, source: str, env: Optional[Environment] = None) -> Any:
        """
        Reads an S-expression such as ``(+ 5 (- 10 3))`` and evaluates it.

        Raises:
            ExpressionSyntaxError: If the text cannot be read as an expression.
            ExpressionEvaluationError: If evaluation fails.
        """
        from exprtree.sexp_parser.expression_builder import read_expression

        logger.info("Evaluating expression string: %s", source[:100])
        try:
            node = read_expression(source)
        except ExpressionSyntaxError as e:
            logger.error("Expression syntax error: %s", e)
            raise
        return self.evaluate(node, env)

    def _eval(self, node: Any, env: Optional[Environment]) -> Any:
        values: List[Any] = []
        stack: List[Tuple[Any, bool]] = [(node, False)]

        while stack:
            current, children_done = stack.pop()

            if isinstance(current, Number):
                values.append(current.value)
            elif isinstance(current, Variable):
                values.append(self._lookup(current, env))
            elif isinstance(current, BinaryOp):
                if children_done:
                    right = values.pop()
                    left = values.pop()
                    values.append(self._apply(current, left, right))
                else:
                    stack.append((current, True))
                    stack.append((current.right, False))
                    stack.append((current.left, False))
            else:
                logger.error("Invalid expression node of type %s", type(current).__name__)
                raise ExpressionEvaluationError(
                    "Invalid expression node",
                    expression=_describe(current),
                    error_details=f"Unsupported node type: {type(current).__name__}",
                )

        return values.pop()

    def _lookup(self, node: Variable, env: Optional[Environment]) -> Any:
        if env is None:
            logger.error("Unknown variable '%s': no environment supplied", node.name)
            raise UnknownVariableError(node.name, expression=node.name, error_details="No environment supplied")
        try:
            return env.lookup(node.name)
        except NameError as e:
            logger.error("Unknown variable '%s'", node.name)
            raise UnknownVariableError(node.name, expression=node.name, error_details=str(e)) from e

    def _apply(self, node: BinaryOp, left: Any, right: Any) -> Any:
        applier = self.operators[node.op]
        try:
            return applier(left, right)
        except ZeroDivisionError as e:
            logger.error("Division by zero while evaluating %s", node.kind)
            raise DivisionByZeroError(
                "Division by zero",
                expression=_describe(node),
                error_details=str(e),
            ) from e
        except OverflowError as e:
            logger.error("Numeric overflow while evaluating %s", node.kind)
            raise NumericOverflowError(
                "Numeric overflow",
                expression=_describe(node),
                error_details=str(e),
            ) from e


_default_evaluator: Optional[ExpressionEvaluator] = None


def evaluate(node: Expression, env: Optional[Environment] = None) -> Any:
    """Evaluates ``node`` with a shared default ExpressionEvaluator."""
    global _default_evaluator
    if _default_evaluator is None:
        _default_evaluator = ExpressionEvaluator()
    return _default_evaluator.evaluate(node, env)
