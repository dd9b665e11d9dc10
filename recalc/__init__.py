"""recalc: an interactive calculator that simplifies expressions against lazily bound variables."""

from .context import Context, update_context
from .errors import CalculatorError, ConfigError, LexerError, ParseError
from .evaluator import apply_function, apply_operator, evaluate
from .nodes import Assignment, ASTNode, BinaryOp, FuncCall, Number, Operator, Variable, render
from .parser import Parser, parse
from .reducer import reduce, reduce_once

__all__ = [
    "ASTNode", "Number", "Variable", "FuncCall", "BinaryOp", "Assignment",
    "Operator", "render",
    "Parser", "parse",
    "evaluate", "apply_operator", "apply_function",
    "Context", "update_context",
    "reduce", "reduce_once",
    "CalculatorError", "ParseError", "LexerError", "ConfigError",
]
