# evaluator.py
"""Numeric evaluation of fully bound trees.

Evaluation either succeeds with a float or yields None when something in
the tree cannot be resolved (an unbound or self-referential variable, an
unknown function, an assignment). It never raises: arithmetic follows
IEEE-754 rules, so division by zero gives inf or nan instead of an error.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable, Dict, FrozenSet, Optional

from .nodes import ASTNode, Assignment, BinaryOp, FuncCall, Number, Operator, Variable

if TYPE_CHECKING:
    from .context import Context

# --------------------------
# Arithmetic
# --------------------------

def _divide(a: float, b: float) -> float:
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    # Sign of the zero matters: 1 / -0.0 is -inf.
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and int(x) % 2 == 1


def _power(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and _is_odd_integer(b):
            return -math.inf
        return math.inf
    except ValueError:
        # math.pow refuses 0 ** negative and negative ** fractional.
        if a == 0:
            if _is_odd_integer(b):
                return math.copysign(math.inf, a)
            return math.inf
        return math.nan


def apply_operator(op: Operator, a: float, b: float) -> float:
    """Apply a binary operator to two floats."""
    if op is Operator.ADD:
        return a + b
    if op is Operator.SUBTRACT:
        return a - b
    if op is Operator.MULTIPLY:
        return a * b
    if op is Operator.DIVIDE:
        return _divide(a, b)
    if op is Operator.POWER:
        return _power(a, b)
    raise ValueError(f"Unknown binary operator: {op}")

# --------------------------
# Builtins
# --------------------------

# Builtins registry: map names to unary float functions.
_BUILTINS: Dict[str, Callable[[float], float]] = {}

def _register(name: str, func: Callable[[float], float]) -> None:
    _BUILTINS[name] = func

_register('sin', math.sin)
_register('cos', math.cos)
_register('tan', math.tan)
_register('asin', math.asin)
_register('acos', math.acos)
_register('atan', math.atan)
_register('sqrt', math.sqrt)
_register('exp', math.exp)
_register('log', lambda x: -math.inf if x == 0 else math.log(x))
_register('abs', math.fabs)
_register('floor', lambda x: float(math.floor(x)) if math.isfinite(x) else x)
_register('ceil', lambda x: float(math.ceil(x)) if math.isfinite(x) else x)

BUILTIN_NAMES = sorted(_BUILTINS.keys())


def apply_function(name: str, x: float) -> Optional[float]:
    """Apply a builtin by name; None if the name is not a builtin."""
    func = _BUILTINS.get(name)
    if func is None:
        return None
    try:
        return func(x)
    except OverflowError:
        return math.inf
    except ValueError:
        # Domain errors (sqrt(-1), log(-1), sin(inf)) become nan.
        return math.nan

# --------------------------
# Evaluator
# --------------------------

def lookup(name: str, ctx: Context) -> Optional[float]:
    """Fully evaluate the binding of a variable, None if unbound or unresolvable."""
    return _eval(Variable(name), ctx, frozenset())


def evaluate(node: ASTNode, ctx: Context) -> Optional[float]:
    """Evaluate a tree against the context's bindings."""
    return _eval(node, ctx, frozenset())


def _eval(node: ASTNode, ctx: Context, resolving: FrozenSet[str]) -> Optional[float]:
    if isinstance(node, Number):
        return node.value
    if isinstance(node, Variable):
        bound = ctx.variables.get(node.name)
        if bound is None or node.name in resolving:
            return None
        return _eval(bound, ctx, resolving | {node.name})
    if isinstance(node, FuncCall):
        x = _eval(node.arg, ctx, resolving)
        if x is None:
            return None
        return apply_function(node.name, x)
    if isinstance(node, BinaryOp):
        a = _eval(node.left, ctx, resolving)
        if a is None:
            return None
        b = _eval(node.right, ctx, resolving)
        if b is None:
            return None
        return apply_operator(node.op, a, b)
    # Assignments have no value.
    return None
