"""
System-wide custom error types.
"""
from typing import Optional


class ExpressionSyntaxError(ValueError):
    """
    Custom exception raised when reading an expression from text fails.
    Inherits from ValueError for general compatibility but provides specific context.
    """
    def __init__(self, message: str, source: str, error_details: str = ""):
        """
        Initializes the ExpressionSyntaxError.

        Args:
            message: A high-level error message.
            source: The original text that caused the error.
            error_details: Specific details from the underlying parser, if available.
        """
        full_message = f"{message}\nInput: '{source}'"
        if error_details:
            full_message += f"\nDetails: {error_details}"
        super().__init__(full_message)
        self.message = message
        self.source = source
        self.error_details = error_details


class ExpressionEvaluationError(Exception):
    """
    Custom exception raised during the evaluation of an expression tree.
    Indicates runtime errors like unbound variables, division by zero or
    nodes that are not part of the expression family.
    """
    def __init__(self, message: str, expression: str = "", error_details: str = ""):
        """
        Initializes the ExpressionEvaluationError.

        Args:
            message: A high-level error message describing the evaluation failure.
            expression: Rendering of the node being evaluated when the error occurred.
            error_details: Specific details about the error (e.g., from underlying exceptions).
        """
        full_message = f"{message}"
        if expression:
            full_message += f"\nExpression: '{expression}'"
        if error_details:
            full_message += f"\nDetails: {error_details}"
        super().__init__(full_message)
        self.message = message
        self.expression = expression
        self.error_details = error_details


class DivisionByZeroError(ExpressionEvaluationError):
    """Raised when the right operand of a division evaluates to zero."""


class UnknownVariableError(ExpressionEvaluationError):
    """Raised when a variable is not bound in the evaluation environment."""

    def __init__(self, name: str, expression: str = "", error_details: Optional[str] = None):
        super().__init__(
            f"Unknown variable '{name}'",
            expression=expression,
            error_details=error_details or "",
        )
        self.name = name


class NumericOverflowError(ExpressionEvaluationError):
    """Raised when an operation's result cannot be represented, e.g. a huge int mixed with a float."""
