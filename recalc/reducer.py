# reducer.py
"""Partial evaluation of trees against the current bindings.

Unlike evaluate(), which either produces a value or gives up, reduction
always returns a tree: every sub-tree that can be computed is collapsed to a
Number and everything else (forward references, unknown functions) is kept
symbolically. A single pass is repeated until it reports no change.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from .context import Context
from .evaluator import apply_function, apply_operator, lookup
from .nodes import ASTNode, Assignment, BinaryOp, FuncCall, Number, Variable

logger = logging.getLogger(__name__)


def _leaf_value(node: ASTNode, ctx: Context) -> Optional[float]:
    if isinstance(node, Number):
        return node.value
    if isinstance(node, Variable):
        return lookup(node.name, ctx)
    return None


def reduce_once(node: ASTNode, ctx: Context) -> Tuple[ASTNode, bool]:
    """Run one reduction pass. Returns the new tree and whether anything changed."""
    if isinstance(node, Number):
        return node, False

    if isinstance(node, FuncCall):
        arg, changed = reduce_once(node.arg, ctx)
        if isinstance(arg, Number):
            y = apply_function(node.name, arg.value)
            if y is not None:
                return Number(y), True
        return FuncCall(node.name, arg), changed

    if isinstance(node, Variable):
        y = lookup(node.name, ctx)
        if y is None:
            return node, False
        return Number(y), True

    if isinstance(node, Assignment):
        value, changed = reduce_once(node.value, ctx)
        return Assignment(node.name, value), changed

    if isinstance(node, BinaryOp):
        leaves = (Number, Variable)
        if isinstance(node.left, leaves) and isinstance(node.right, leaves):
            a = _leaf_value(node.left, ctx)
            b = _leaf_value(node.right, ctx)
            if a is not None and b is not None:
                return Number(apply_operator(node.op, a, b)), True
        # Anything that did not collapse: reduce both sides independently.
        left, changed_left = reduce_once(node.left, ctx)
        right, changed_right = reduce_once(node.right, ctx)
        return BinaryOp(node.op, left, right), changed_left or changed_right

    raise TypeError(f"Unsupported AST node: {type(node).__name__}")


def reduce(node: ASTNode, ctx: Context) -> ASTNode:
    """Repeat reduction passes until the tree reaches a fixed point."""
    passes = 1
    node, changed = reduce_once(node, ctx)
    while changed:
        node, changed = reduce_once(node, ctx)
        passes += 1
    logger.debug(f"Reached a fixed point after {passes} passes")
    return node
