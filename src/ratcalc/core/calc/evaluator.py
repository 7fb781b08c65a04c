"""
Expression evaluator for ratcalc.

Walks an expression tree in post-order with an explicit operand stack and
computes its exact value. Left operands are evaluated before right ones.
Pure evaluation: no I/O, no side effects, nothing retained between calls.
"""

from __future__ import annotations

from collections.abc import Callable

from ratcalc.core.errors import DivisionByZero
from ratcalc.core.ir.tokens import Operator, ValueToken
from ratcalc.core.ir.tree import Tree, post_order
from ratcalc.core.ir.value import Value, add, div, mul, negate, sub

_BINARY: dict[Operator, Callable[[Value, Value], Value]] = {
    Operator.ADD: add,
    Operator.SUB: sub,
    Operator.MUL: mul,
    Operator.DIV: div,
}


def evaluate_tree(tree: Tree) -> Value:
    """Evaluate an expression tree.

    Args:
        tree: Parsed expression tree.

    Returns:
        The normalized exact result.

    Raises:
        DivisionByZero: If a divisor evaluates to zero.
        ArithmeticOverflow: If an intermediate result leaves the 64-bit range.
    """
    operands: list[Value] = []
    for node in post_order(tree.root):
        if isinstance(node.token, ValueToken):
            operands.append(node.token.value)
            continue

        op = node.token.op
        right = operands.pop()
        if op == Operator.USUB:
            operands.append(negate(right))
            continue

        left = operands.pop()
        operands.append(apply(op, left, right))

    return operands[0]


def apply(op: Operator, left: Value, right: Value) -> Value:
    """Apply a binary operator to two values."""
    if op.is_unary:
        raise ValueError(f"{op.name} is a unary operator")
    if op == Operator.DIV and right.is_zero:
        raise DivisionByZero(f"Division by zero: {left} / {right}")
    return _BINARY[op](left, right)
