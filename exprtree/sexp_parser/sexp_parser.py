"""
S-expression reader built on the 'sexpdata' library.
Parses S-expression strings into nested Python lists and atoms.
"""

import logging
from io import StringIO
from typing import Any

from sexpdata import ExpectClosingBracket, ExpectNothing, load

from exprtree.system.errors import ExpressionSyntaxError

logger = logging.getLogger(__name__)


class SexpParser:
    """
    Parses S-expression strings into Python ASTs (nested lists of atoms).

    Numbers become int or float, bare words become sexpdata Symbols and quoted
    text becomes str. The symbols 'nil', 't', 'true' and 'false' are left as
    plain symbols so any of them can name a variable.
    """

    def parse_string(self, sexp_string: str) -> Any:
        """
        Parses a single S-expression from a string.

        Args:
            sexp_string: The string containing the S-expression.

        Returns:
            The parsed S-expression as a Python AST (nested lists/atoms).

        Raises:
            ExpressionSyntaxError: If the input string has syntax errors, is empty,
                                   or contains more than one expression.
            TypeError: If the input is not a string.
        """
        if not isinstance(sexp_string, str):
            raise TypeError("Input must be a string.")

        logger.debug("Attempting to parse S-expression string: '%s'", sexp_string)
        stripped_string = sexp_string.strip()

        if not stripped_string:
            logger.error("S-expression parsing failed: Input string is empty or contains only whitespace.")
            raise ExpressionSyntaxError(
                "Input string is empty or contains only whitespace.",
                sexp_string
            )

        sio = StringIO(stripped_string)

        try:
            parsed_expression = load(sio, nil=None, true=None, false=None)
        except ExpectClosingBracket as e:
            logger.error("S-expression syntax error (Unbalanced Parentheses): %s", e)
            raise ExpressionSyntaxError(
                "S-expression syntax error: Unbalanced parentheses or brackets.",
                sexp_string,
                error_details=str(e)
            ) from e
        except ExpectNothing as e:
            logger.error("S-expression parsing failed: Unexpected content after main expression. Details: %s", e)
            raise ExpressionSyntaxError(
                "Unexpected content after the main expression.",
                sexp_string,
                error_details=str(e)
            ) from e
        except AssertionError as e:
            # Older sexpdata releases assert on more than one top-level expression
            logger.error("S-expression syntax error (Multiple Expressions): %s", e)
            raise ExpressionSyntaxError(
                "Multiple top-level S-expressions found; expected a single expression.",
                sexp_string,
                error_details=str(e)
            ) from e
        except ValueError as e:
            logger.error("S-expression syntax error (ValueError): %s", e)
            raise ExpressionSyntaxError(
                f"S-expression syntax error: {e}",
                sexp_string,
                error_details=str(e)
            ) from e
        except Exception as e:
            logger.exception("Unexpected error during S-expression parsing: %s", e)
            raise ExpressionSyntaxError(
                f"An unexpected error occurred during S-expression parsing: {e}",
                sexp_string,
                error_details=str(e)
            ) from e

        logger.debug("Successfully parsed AST: %r", parsed_expression)
        return parsed_expression
