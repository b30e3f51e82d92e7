"""
Command line entry point.

Evaluates a single S-expression given on the command line, or starts the
interactive REPL when no expression is given.
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional, Tuple, Union

from exprtree.config.logging_config import default_log_level, setup_logging
from exprtree.expression_evaluator.environment import Environment
from exprtree.expression_evaluator.evaluator import ExpressionEvaluator
from exprtree.expression_evaluator.rendering import to_infix
from exprtree.repl.repl import Repl
from exprtree.sexp_parser.expression_builder import is_variable_name, read_expression
from exprtree.system.errors import ExpressionEvaluationError, ExpressionSyntaxError

logger = logging.getLogger(__name__)


def parse_variable(text: str) -> Tuple[str, Union[int, float]]:
    """Parses a NAME=VALUE command line binding."""
    name, sep, raw_value = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{text}'")
    if not is_variable_name(name):
        raise argparse.ArgumentTypeError(f"invalid variable name: '{name}'")
    try:
        value: Union[int, float] = int(raw_value)
    except ValueError:
        try:
            value = float(raw_value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"value of '{name}' is not a number: '{raw_value}'") from None
    return name, value


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exprtree",
        description="Evaluate arithmetic expression trees written as S-expressions.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "expression",
        nargs="?",
        help="S-expression to evaluate, e.g. '(+ 5 (- 10 3))'. Starts the REPL when omitted.",
    )
    parser.add_argument(
        "--var",
        dest="variables",
        action="append",
        type=parse_variable,
        default=[],
        metavar="NAME=VALUE",
        help="Bind a variable (may be repeated).",
    )
    parser.add_argument(
        "--infix",
        action="store_true",
        help="Also print the expression in infix notation.",
    )
    parser.add_argument(
        "--log-level",
        default=default_log_level(),
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write logs to this file instead of stderr.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    bindings: Dict[str, Union[int, float]] = dict(args.variables)
    env = Environment(bindings)
    evaluator = ExpressionEvaluator()

    if args.expression is None:
        Repl(evaluator=evaluator, env=env).start()
        return 0

    try:
        node = read_expression(args.expression)
        result = evaluator.evaluate(node, env)
    except (ExpressionSyntaxError, ExpressionEvaluationError) as e:
        logger.debug("Evaluation of %r failed", args.expression, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.infix:
        print(f"{to_infix(node)} = {result}")
    else:
        print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
