"""
Builds expression trees from parsed S-expressions.

``(+ 5 (- 10 3))`` becomes ``Add(Number(5), Subtract(Number(10), Number(3)))``.
Numbers become Number nodes and bare symbols become Variable nodes. Operator
forms with more than two operands fold to the left, and ``(- x)`` negates.
"""
import logging
import re
import reprlib
from typing import Any, Dict, List, Tuple

from sexpdata import Symbol

from exprtree.system.errors import ExpressionSyntaxError
from exprtree.system.models import BinaryOperator, Expression, Number, Subtract, Variable, binary_node
from .sexp_parser import SexpParser

logger = logging.getLogger(__name__)

OPERATOR_NAMES: Dict[str, BinaryOperator] = {
    "+": BinaryOperator.ADD,
    "add": BinaryOperator.ADD,
    "-": BinaryOperator.SUBTRACT,
    "sub": BinaryOperator.SUBTRACT,
    "subtract": BinaryOperator.SUBTRACT,
    "*": BinaryOperator.MULTIPLY,
    "mul": BinaryOperator.MULTIPLY,
    "multiply": BinaryOperator.MULTIPLY,
    "/": BinaryOperator.DIVIDE,
    "div": BinaryOperator.DIVIDE,
    "divide": BinaryOperator.DIVIDE,
}

VARIABLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_\-]*$")


def is_variable_name(name: str) -> bool:
    """True when ``name`` can be written as a variable in reader input.

    sexpdata reads float spellings such as ``inf`` and ``nan`` as numbers, so
    those never reach the builder as symbols.
    """
    if not VARIABLE_NAME.match(name):
        return False
    try:
        float(name)
    except ValueError:
        return True
    return False


def build_expression(ast: Any, source: str = "") -> Expression:
    """
    Converts a parsed S-expression AST into an expression tree.

    Operator forms are expanded with an explicit stack, so nesting depth is
    limited only by memory.

    Args:
        ast: Output of SexpParser.parse_string.
        source: Original text, used in error messages.

    Raises:
        ExpressionSyntaxError: If the AST does not describe an arithmetic expression.
    """
    source = source or reprlib.repr(ast)
    built: List[Expression] = []
    stack: List[Tuple[Any, bool]] = [(ast, False)]

    while stack:
        current, operands_done = stack.pop()

        if operands_done:
            count = len(current) - 1
            operands = built[len(built) - count:]
            del built[len(built) - count:]
            built.append(_combine(current[0], operands, source))
            continue

        if isinstance(current, Symbol):
            built.append(Variable(current.value()))
            continue

        if isinstance(current, bool) or not isinstance(current, (int, float, list)):
            raise ExpressionSyntaxError(
                "Expected a number, a variable name or an operator form.",
                source,
                error_details=f"Got {type(current).__name__}: {current!r}",
            )

        if not isinstance(current, list):
            built.append(Number(current))
            continue

        if not current:
            raise ExpressionSyntaxError("Empty form '()' is not an expression.", source)

        head = current[0]
        if not isinstance(head, Symbol) or head.value() not in OPERATOR_NAMES:
            raise ExpressionSyntaxError(
                f"Unknown operator: {head}",
                source,
                error_details=f"Supported operators: {', '.join(OPERATOR_NAMES)}",
            )
        stack.append((current, True))
        for operand in reversed(current[1:]):
            stack.append((operand, False))

    return built.pop()


def _combine(head: Symbol, operands: List[Expression], source: str) -> Expression:
    op = OPERATOR_NAMES[head.value()]
    if len(operands) == 1 and op is BinaryOperator.SUBTRACT:
        return Subtract(Number(0), operands[0])
    if len(operands) < 2:
        raise ExpressionSyntaxError(
            f"Operator '{head.value()}' needs at least two operands, got {len(operands)}.",
            source,
        )

    node = operands[0]
    for operand in operands[1:]:
        node = binary_node(op, node, operand)
    return node


def read_expression(source: str) -> Expression:
    """Parses ``source`` and builds the expression tree it describes."""
    ast = SexpParser().parse_string(source)
    node = build_expression(ast, source)
    logger.debug("Read expression %r as %s", source, type(node).__name__)
    return node
