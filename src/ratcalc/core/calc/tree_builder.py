"""
Builds expression trees from postfix token streams.

Consumes tokens left to right with an explicit node stack: values push a
leaf, unary negation pops one operand, binary operators pop two. The first
node popped for a binary operator is its right operand.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ratcalc.core.config import EvalLimits
from ratcalc.core.errors import make_parse_error
from ratcalc.core.ir.tokens import OperatorToken, Token, ValueToken
from ratcalc.core.ir.tree import Node, Tree

logger = logging.getLogger(__name__)


def build_tree(
    postfix: Sequence[Token],
    limits: EvalLimits | None = None,
    source: str | None = None,
) -> Tree:
    """Build a tree from a postfix token sequence.

    Args:
        postfix: Tokens in postfix order, as produced by ``to_postfix``.
        limits: Resource bounds; defaults to ``EvalLimits()``.
        source: Original expression text, used only for error context.

    Returns:
        The expression tree.

    Raises:
        ParseError: If an operator lacks operands, the stream does not reduce
            to exactly one node, or the tree exceeds ``limits.max_depth``.
    """
    limits = limits or EvalLimits()
    # Each entry pairs a node with its depth so the limit is checked without recursion
    stack: list[tuple[Node, int]] = []

    for token in postfix:
        if isinstance(token, ValueToken):
            stack.append((Node(token=token), 1))
            continue

        if not isinstance(token, OperatorToken):
            raise make_parse_error(
                f"Unexpected {token} in postfix stream",
                source,
                token.pos if source is not None else None,
            )

        if len(stack) < token.op.arity:
            raise make_parse_error(
                f"Operator '{token}' is missing an operand",
                source,
                token.pos if source is not None else None,
            )

        if token.op.is_unary:
            right, depth = stack.pop()
            node = Node(token=token, right=right)
        else:
            right, right_depth = stack.pop()
            left, left_depth = stack.pop()
            depth = max(left_depth, right_depth)
            node = Node(token=token, left=left, right=right)

        depth += 1
        if depth > limits.max_depth:
            raise make_parse_error(
                f"Expression nested too deeply (limit {limits.max_depth})",
                source,
                token.pos if source is not None else None,
            )
        stack.append((node, depth))

    if not stack:
        raise make_parse_error("Empty expression")

    if len(stack) > 1:
        extra, _ = stack[1]
        raise make_parse_error(
            f"Missing operator: {len(stack)} operands without an operator between them",
            source,
            extra.token.pos if source is not None else None,
        )

    root, depth = stack[0]
    logger.debug("Built tree of depth %d: %s", depth, root)
    return Tree(root=root)
