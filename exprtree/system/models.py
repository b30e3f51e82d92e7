"""Core data models for expression trees.

This module contains the Pydantic models for the closed family of expression
nodes. Every node carries a ``kind`` tag, so the family forms a discriminated
union (``ExpressionNode``) that can be validated from nested dictionaries and
dumped back with ``model_dump``.

Trees are built bottom-up by passing already-constructed children into a
constructor and are immutable afterwards.
"""
import logging
from enum import Enum
from typing import Annotated, Any, ClassVar, Dict, Literal, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, TypeAdapter

logger = logging.getLogger(__name__)

Numeric = Union[StrictInt, StrictFloat]


class BinaryOperator(str, Enum):
    """Operator tags understood by binary nodes."""
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"


class Expression(BaseModel):
    """Base class for all expression nodes.

    Subclasses list the fields that may be passed positionally in
    ``positional_fields`` so trees read naturally, e.g. ``Add(Number(1), Number(2))``.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    positional_fields: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, *args: Any, **data: Any) -> None:
        fields = type(self).positional_fields
        if len(args) > len(fields):
            raise TypeError(
                f"{type(self).__name__}() takes at most {len(fields)} positional "
                f"argument(s) but {len(args)} were given"
            )
        for name, value in zip(fields, args):
            if name in data:
                raise TypeError(f"{type(self).__name__}() got multiple values for argument '{name}'")
            data[name] = value
        super().__init__(**data)

    def evaluate(self, env: Optional[Any] = None) -> Any:
        """Evaluates this node (and its subtree) to a number."""
        from exprtree.expression_evaluator.evaluator import evaluate
        return evaluate(self, env)

    def __str__(self) -> str:
        from exprtree.expression_evaluator.rendering import to_infix
        return to_infix(self)


class Number(Expression):
    """Literal numeric value; a leaf of the tree."""
    kind: Literal["number"] = "number"
    value: Numeric

    positional_fields: ClassVar[Tuple[str, ...]] = ("value",)


class Variable(Expression):
    """Named value resolved against an Environment at evaluation time."""
    kind: Literal["variable"] = "variable"
    name: str = Field(min_length=1)

    positional_fields: ClassVar[Tuple[str, ...]] = ("name",)


class BinaryOp(Expression):
    """
    Node combining the values of two child nodes with an operator.

    The operator tag is the node's ``kind``; use the concrete subclasses
    (Add, Subtract, Multiply, Divide) to build trees.
    """
    left: "ExpressionNode"
    right: "ExpressionNode"

    positional_fields: ClassVar[Tuple[str, ...]] = ("left", "right")

    def __init__(self, *args: Any, **data: Any) -> None:
        if type(self) is BinaryOp:
            raise TypeError("BinaryOp cannot be built directly; use Add, Subtract, Multiply or Divide")
        super().__init__(*args, **data)

    @property
    def op(self) -> BinaryOperator:
        return BinaryOperator(self.kind)


class Add(BinaryOp):
    kind: Literal["add"] = "add"


class Subtract(BinaryOp):
    kind: Literal["subtract"] = "subtract"


class Multiply(BinaryOp):
    kind: Literal["multiply"] = "multiply"


class Divide(BinaryOp):
    kind: Literal["divide"] = "divide"


ExpressionNode = Annotated[
    Union[Number, Variable, Add, Subtract, Multiply, Divide],
    Field(discriminator="kind"),
]

BINARY_NODE_TYPES: Dict[BinaryOperator, Type[BinaryOp]] = {
    BinaryOperator.ADD: Add,
    BinaryOperator.SUBTRACT: Subtract,
    BinaryOperator.MULTIPLY: Multiply,
    BinaryOperator.DIVIDE: Divide,
}

for _model in (BinaryOp, Add, Subtract, Multiply, Divide):
    _model.model_rebuild()

_expression_adapter: TypeAdapter = TypeAdapter(ExpressionNode)


def binary_node(op: BinaryOperator, left: Expression, right: Expression) -> BinaryOp:
    """Builds the binary node class registered for ``op``."""
    return BINARY_NODE_TYPES[BinaryOperator(op)](left, right)


def expression_from_data(data: Any) -> Expression:
    """
    Validates a nested dictionary (or JSON-compatible structure) into a tree.

    Each level must carry a ``kind`` tag, e.g.
    ``{"kind": "add", "left": {"kind": "number", "value": 1}, ...}``.

    Raises:
        pydantic.ValidationError: If the structure is not a well-formed tree.
    """
    logger.debug("Validating expression tree from data of type %s", type(data).__name__)
    return _expression_adapter.validate_python(data)
