"""
Operator appliers for binary expression nodes.

Every BinaryOperator must have an applier; the table is checked when this
module is imported.
"""
import logging
from typing import Any, Callable, Dict, Mapping

from exprtree.system.models import BinaryOperator

logger = logging.getLogger(__name__)

OperatorApplier = Callable[[Any, Any], Any]


def apply_add(left: Any, right: Any) -> Any:
    return left + right


def apply_subtract(left: Any, right: Any) -> Any:
    return left - right


def apply_multiply(left: Any, right: Any) -> Any:
    return left * right


def apply_divide(left: Any, right: Any) -> Any:
    """True division. A zero right operand raises ZeroDivisionError."""
    return left / right


OPERATOR_APPLIERS: Dict[BinaryOperator, OperatorApplier] = {
    BinaryOperator.ADD: apply_add,
    BinaryOperator.SUBTRACT: apply_subtract,
    BinaryOperator.MULTIPLY: apply_multiply,
    BinaryOperator.DIVIDE: apply_divide,
}

OPERATOR_SYMBOLS: Dict[BinaryOperator, str] = {
    BinaryOperator.ADD: "+",
    BinaryOperator.SUBTRACT: "-",
    BinaryOperator.MULTIPLY: "*",
    BinaryOperator.DIVIDE: "/",
}


def check_operator_table(table: Mapping[BinaryOperator, Any], table_name: str = "operator table") -> None:
    """
    Ensures ``table`` has an entry for every BinaryOperator.

    Raises:
        RuntimeError: If any operator is missing.
    """
    missing = [op.value for op in BinaryOperator if op not in table]
    if missing:
        raise RuntimeError(f"{table_name} has no entry for operator(s): {', '.join(missing)}")


check_operator_table(OPERATOR_APPLIERS, "OPERATOR_APPLIERS")
check_operator_table(OPERATOR_SYMBOLS, "OPERATOR_SYMBOLS")
