"""Expression evaluator component.

Evaluates hand-built expression trees, resolving variables through an
Environment and applying binary operators from a dispatch table.
"""

from exprtree.expression_evaluator.environment import Environment
from exprtree.expression_evaluator.evaluator import ExpressionEvaluator, evaluate
from exprtree.expression_evaluator.rendering import to_infix, to_sexp

__all__ = ["Environment", "ExpressionEvaluator", "evaluate", "to_infix", "to_sexp"]
