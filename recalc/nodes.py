# nodes.py
"""AST node types, the operator table, and the infix pretty-printer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# --------------------------
# Operators
# --------------------------

class Operator(Enum):
    """Binary operators with (symbol, precedence, right_assoc). Higher number = higher precedence."""
    ADD = ('+', 1, False)
    SUBTRACT = ('-', 1, False)
    MULTIPLY = ('*', 2, False)
    DIVIDE = ('/', 2, False)
    POWER = ('^', 3, True)

    def __init__(self, symbol: str, precedence: int, right_assoc: bool):
        self.symbol = symbol
        self.precedence = precedence
        self.right_assoc = right_assoc

    @classmethod
    def from_symbol(cls, symbol: str) -> Operator:
        for op in cls:
            if op.symbol == symbol:
                return op
        raise KeyError(symbol)

    def __str__(self) -> str:
        return self.symbol

# --------------------------
# AST Nodes
# --------------------------

@dataclass(frozen=True)
class ASTNode:
    """Base AST node."""

    def __str__(self) -> str:
        return render(self)

@dataclass(frozen=True)
class Number(ASTNode):
    value: float

@dataclass(frozen=True)
class Variable(ASTNode):
    name: str

@dataclass(frozen=True)
class FuncCall(ASTNode):
    name: str
    arg: ASTNode

@dataclass(frozen=True)
class BinaryOp(ASTNode):
    op: Operator
    left: ASTNode
    right: ASTNode

@dataclass(frozen=True)
class Assignment(ASTNode):
    name: str
    value: ASTNode

# --------------------------
# Pretty-printer
# --------------------------

def format_number(value: float, precision: Optional[int] = None) -> str:
    """Format a numeric leaf.

    Without a precision the shortest round-trip form is used, and integral
    values drop the trailing '.0'. With a precision the value is printed in
    fixed-point notation with that many decimals.
    """
    if precision is not None:
        return f"{value:.{precision}f}"
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def _needs_parens(parent: Operator, child: ASTNode, is_right: bool) -> bool:
    if not isinstance(child, BinaryOp):
        return False
    if child.op.precedence != parent.precedence:
        return child.op.precedence < parent.precedence
    # Same level: only the side the operator does not associate towards needs grouping.
    return is_right != parent.right_assoc


def _render_branch(parent: Operator, child: ASTNode, is_right: bool, precision: Optional[int]) -> str:
    text = render(child, precision)
    if _needs_parens(parent, child, is_right):
        return f"({text})"
    return text


def render(node: ASTNode, precision: Optional[int] = None) -> str:
    """Render a tree in infix notation with the minimal parentheses that preserve its shape.

    `precision` fixes the decimals of numeric leaves, except inside an
    assignment, whose right-hand side is always printed in natural form.
    """
    if isinstance(node, Number):
        return format_number(node.value, precision)
    if isinstance(node, Variable):
        return node.name
    if isinstance(node, FuncCall):
        return f"{node.name}({render(node.arg, precision)})"
    if isinstance(node, BinaryOp):
        left = _render_branch(node.op, node.left, False, precision)
        right = _render_branch(node.op, node.right, True, precision)
        return f"{left} {node.op.symbol} {right}"
    if isinstance(node, Assignment):
        return f"{node.name} = {render(node.value)}"
    raise TypeError(f"Unsupported AST node: {type(node).__name__}")
