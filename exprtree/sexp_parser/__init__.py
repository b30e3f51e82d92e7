from exprtree.sexp_parser.sexp_parser import SexpParser
from exprtree.sexp_parser.expression_builder import build_expression, is_variable_name, read_expression

__all__ = ["SexpParser", "build_expression", "is_variable_name", "read_expression"]
