# context.py
"""Per-session state: variable bindings and display precision."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Optional

from .evaluator import evaluate
from .nodes import ASTNode, Assignment

logger = logging.getLogger(__name__)

# Assigning to this name sets the display precision instead of binding a variable.
PRECISION_NAME = 'precision'

PRECISION_DIAGNOSTIC = "Oops, could not evaluate precision!"


@dataclass
class Context:
    """Variable bindings (unevaluated trees) plus the optional display precision."""
    variables: Dict[str, ASTNode] = field(default_factory=dict)
    precision: Optional[int] = None


def update_context(node: ASTNode, ctx: Context) -> Optional[str]:
    """Apply a top-level assignment to the context.

    Bindings are stored unevaluated so a variable may refer to names that
    are defined later. Assigning `precision` evaluates the right-hand side
    immediately instead; if that fails a diagnostic is returned and the
    context is left unchanged. Returns None when there is nothing to report.
    """
    if not isinstance(node, Assignment):
        return None
    if node.name == PRECISION_NAME:
        value = evaluate(node.value, ctx)
        if value is None or not math.isfinite(value):
            logger.warning("Could not evaluate precision")
            return PRECISION_DIAGNOSTIC
        ctx.precision = max(0, int(value))
        logger.debug(f"Display precision set to {ctx.precision}")
        return None
    ctx.variables[node.name] = node.value
    logger.debug(f"Bound {node.name}")
    return None
