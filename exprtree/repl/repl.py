"""REPL interface for interactive expression evaluation."""
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.tree import Tree

from exprtree.expression_evaluator.environment import Environment
from exprtree.expression_evaluator.evaluator import ExpressionEvaluator
from exprtree.expression_evaluator.operators import OPERATOR_SYMBOLS
from exprtree.expression_evaluator.rendering import to_infix
from exprtree.sexp_parser.expression_builder import is_variable_name, read_expression
from exprtree.system.errors import ExpressionEvaluationError, ExpressionSyntaxError
from exprtree.system.models import BinaryOp, Expression, Number

logger = logging.getLogger(__name__)



def build_display_tree(node: Expression) -> Tree:
    """Builds a rich Tree mirroring the structure of ``node``."""
    def label(current: Expression) -> str:
        if isinstance(current, BinaryOp):
            return f"{current.kind} ({OPERATOR_SYMBOLS[current.op]})"
        if isinstance(current, Number):
            return repr(current.value)
        return f"${current.name}"

    root = Tree(label(node))
    stack = [(node, root)]
    while stack:
        current, branch = stack.pop()
        if isinstance(current, BinaryOp):
            left_branch = branch.add(label(current.left))
            right_branch = branch.add(label(current.right))
            stack.append((current.right, right_branch))
            stack.append((current.left, left_branch))
    return root


class Repl:
    """Interactive REPL (Read-Eval-Print Loop) interface.

    Reads S-expressions such as ``(+ 5 (- 10 3))``, evaluates them against a
    session environment and prints the result. Lines starting with '/' are
    commands.
    """

    def __init__(self, evaluator: Optional[ExpressionEvaluator] = None, output_stream=None,
                 env: Optional[Environment] = None):
        """Initialize the REPL interface.

        Args:
            evaluator: Evaluator to use (a default ExpressionEvaluator if omitted)
            output_stream: Optional output stream (defaults to sys.stdout)
            env: Optional initial session environment
        """
        self.evaluator = evaluator or ExpressionEvaluator()
        self.output = output_stream or sys.stdout
        self.env = env if env is not None else Environment()
        self.commands = {
            "/help": self._cmd_help,
            "/let": self._cmd_let,
            "/vars": self._cmd_vars,
            "/reset": self._cmd_reset,
            "/tree": self._cmd_tree,
            "/infix": self._cmd_infix,
            "/exit": self._cmd_exit,
        }

    def start(self) -> None:
        """Start the REPL interface.

        Reads lines until /exit, end of input or an interrupt.
        """
        print("exprtree REPL. Enter an S-expression, e.g. (+ 5 (- 10 3))", file=self.output)
        print("Type /help for commands", file=self.output)

        while True:
            try:
                user_input = input("expr> ")
                self._process_input(user_input)
            except (KeyboardInterrupt, EOFError):
                print("\nExiting...", file=self.output)
                break

    def _process_input(self, user_input: str) -> None:
        """Process one line of user input."""
        user_input = user_input.strip()

        if not user_input:
            return

        if user_input.startswith("/"):
            self._handle_command(user_input)
        else:
            self._handle_expression(user_input)

    def _handle_command(self, command: str) -> None:
        parts = command.split(maxsplit=1)
        cmd = parts[0].lower()
        args = parts[1] if len(parts) > 1 else ""

        if cmd in self.commands:
            self.commands[cmd](args)
        else:
            print(f"Unknown command: {cmd}", file=self.output)
            print("Type /help for available commands", file=self.output)

    def _handle_expression(self, source: str) -> None:
        try:
            result = self.evaluator.evaluate_string(source, self.env)
        except (ExpressionSyntaxError, ExpressionEvaluationError) as e:
            print(f"Error: {e}", file=self.output)
            return
        print(result, file=self.output)

    def _read(self, source: str) -> Optional[Expression]:
        if not source.strip():
            print("Missing expression", file=self.output)
            return None
        try:
            return read_expression(source)
        except ExpressionSyntaxError as e:
            print(f"Error: {e}", file=self.output)
            return None

    def _cmd_help(self, args: str) -> None:
        print("Available commands:", file=self.output)
        print("  EXPR - Evaluate an S-expression, e.g. (* 2 (+ x 1))", file=self.output)
        print("  /let NAME EXPR - Bind NAME to the value of EXPR", file=self.output)
        print("  /vars - Show bound variables", file=self.output)
        print("  /reset - Clear all variables", file=self.output)
        print("  /tree EXPR - Show the expression tree", file=self.output)
        print("  /infix EXPR - Show the expression in infix notation", file=self.output)
        print("  /exit - Exit the REPL", file=self.output)

    def _cmd_let(self, args: str) -> None:
        parts = args.split(maxsplit=1)
        if len(parts) != 2:
            print("Usage: /let NAME EXPR", file=self.output)
            return
        name, source = parts
        if not is_variable_name(name):
            print(f"Invalid variable name: {name}", file=self.output)
            return
        try:
            value = self.evaluator.evaluate_string(source, self.env)
        except (ExpressionSyntaxError, ExpressionEvaluationError) as e:
            print(f"Error: {e}", file=self.output)
            return
        self.env.define(name, value)
        logger.debug("Session variable %s bound to %r", name, value)
        print(f"{name} = {value}", file=self.output)

    def _cmd_vars(self, args: str) -> None:
        bindings = self.env.get_local_bindings()
        if not bindings:
            print("No variables defined", file=self.output)
            return
        for name in sorted(bindings):
            print(f"  {name} = {bindings[name]}", file=self.output)

    def _cmd_reset(self, args: str) -> None:
        self.env = Environment()
        print("Variables cleared", file=self.output)

    def _cmd_tree(self, args: str) -> None:
        node = self._read(args)
        if node is None:
            return
        console = Console(file=self.output, color_system=None, highlight=False)
        console.print(build_display_tree(node))

    def _cmd_infix(self, args: str) -> None:
        node = self._read(args)
        if node is not None:
            print(to_infix(node), file=self.output)

    def _cmd_exit(self, args: str) -> None:
        print("Exiting...", file=self.output)
        sys.exit(0)
