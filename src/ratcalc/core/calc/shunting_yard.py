"""
Shunting-yard conversion for ratcalc expressions.

Reorders an infix token sequence into postfix (Reverse Polish) order:

    tokenize("(1 + 2) * -3")  →  ( 1 + 2 ) * neg 3
    to_postfix(...)           →  1 2 + 3 neg *

Operators are resolved by the precedence and associativity defined on
``Operator``. Parentheses never reach the output.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ratcalc.core.config import EvalLimits
from ratcalc.core.errors import make_parse_error
from ratcalc.core.ir.tokens import (
    Associativity,
    OperatorToken,
    Paren,
    ParenToken,
    Token,
    ValueToken,
)

logger = logging.getLogger(__name__)


def to_postfix(
    tokens: Sequence[Token],
    limits: EvalLimits | None = None,
    source: str | None = None,
) -> list[Token]:
    """Convert an infix token sequence to postfix order.

    Args:
        tokens: Infix tokens from ``tokenize``.
        limits: Resource bounds; defaults to ``EvalLimits()``.
        source: Original expression text, used only for error context.

    Returns:
        Postfix tokens (values and operators only).

    Raises:
        ParseError: On unmatched parentheses or when a limit is exceeded.
    """
    limits = limits or EvalLimits()
    if len(tokens) > limits.max_tokens:
        raise make_parse_error(
            f"Expression too long: {len(tokens)} tokens (limit {limits.max_tokens})"
        )

    output: list[Token] = []
    stack: list[OperatorToken | ParenToken] = []
    nesting = 0

    for token in tokens:
        if isinstance(token, ValueToken):
            output.append(token)
            continue

        if isinstance(token, OperatorToken):
            _pop_for_operator(token, stack, output)
            stack.append(token)
            continue

        if token.paren == Paren.LEFT:
            nesting += 1
            if nesting > limits.max_nesting:
                raise make_parse_error(
                    f"Parentheses nested too deeply (limit {limits.max_nesting})",
                    source,
                    token.pos if source is not None else None,
                )
            stack.append(token)
            continue

        # Right parenthesis: unwind to the matching left parenthesis
        while stack and not isinstance(stack[-1], ParenToken):
            output.append(stack.pop())
        if not stack:
            raise make_parse_error(
                "Unmatched ')'",
                source,
                token.pos if source is not None else None,
            )
        stack.pop()
        nesting -= 1

    while stack:
        top = stack.pop()
        if isinstance(top, ParenToken):
            raise make_parse_error(
                "Unmatched '('",
                source,
                top.pos if source is not None else None,
            )
        output.append(top)

    logger.debug("Postfix: %s", format_postfix(output))
    return output


def _pop_for_operator(
    token: OperatorToken,
    stack: list[OperatorToken | ParenToken],
    output: list[Token],
) -> None:
    """Move operators that bind at least as tightly as ``token`` to the output."""
    precedence = token.op.precedence
    right_assoc = token.op.associativity == Associativity.RIGHT

    while stack:
        top = stack[-1]
        if isinstance(top, ParenToken):
            break
        if right_assoc:
            if top.op.precedence <= precedence:
                break
        elif top.op.precedence < precedence:
            break
        output.append(stack.pop())


def format_postfix(tokens: Sequence[Token]) -> str:
    """Render a token sequence as space-separated text."""
    return " ".join(str(token) for token in tokens)
