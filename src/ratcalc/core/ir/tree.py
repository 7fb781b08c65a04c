"""
Expression tree for ratcalc.

A ``Node`` holds one operator or value token and owns its children:

- value leaf: no children
- unary negation: ``right`` only
- binary operator: ``left`` and ``right``

Ownership is strictly tree-shaped; nodes are frozen once built.

Traversals walk an explicit stack and never recurse; ``post_order`` yields
children before their parent, left before right.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, model_validator

from ratcalc.core.ir.tokens import Operator, OperatorToken, Token, ValueToken


class Node(BaseModel):
    """A single node of an expression tree."""

    token: OperatorToken | ValueToken
    left: Node | None = None
    right: Node | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_shape(self) -> Node:
        if isinstance(self.token, ValueToken):
            if self.left is not None or self.right is not None:
                raise ValueError("value node cannot have children")
        elif self.token.op.is_unary:
            if self.left is not None or self.right is None:
                raise ValueError(f"{self.token.op.name} node requires exactly a right child")
        elif self.left is None or self.right is None:
            raise ValueError(f"{self.token.op.name} node requires left and right children")
        return self

    @property
    def is_leaf(self) -> bool:
        return isinstance(self.token, ValueToken)

    def depth(self) -> int:
        """Number of nodes on the longest root-to-leaf path."""
        deepest = 0
        stack: list[tuple[Node, int]] = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            for child in (node.left, node.right):
                if child is not None:
                    stack.append((child, level + 1))
        return deepest

    def __str__(self) -> str:
        rendered: list[str] = []
        for node in post_order(self):
            if isinstance(node.token, ValueToken):
                rendered.append(str(node.token.value))
                continue
            right = rendered.pop()
            if node.token.op == Operator.USUB:
                rendered.append(f"-{right}")
            else:
                left = rendered.pop()
                rendered.append(f"({left} {node.token.op.value} {right})")
        return rendered[0]


def post_order(root: Node) -> Iterator[Node]:
    """Yield the nodes under ``root`` children first, left before right."""
    stack: list[tuple[Node, bool]] = [(root, False)]
    while stack:
        node, visited = stack.pop()
        if visited or node.is_leaf:
            yield node
            continue
        stack.append((node, True))
        if node.right is not None:
            stack.append((node.right, False))
        if node.left is not None:
            stack.append((node.left, False))


class Tree(BaseModel):
    """A parsed expression: owns a single root node."""

    root: Node

    model_config = ConfigDict(frozen=True)

    @property
    def depth(self) -> int:
        return self.root.depth()

    def postfix(self) -> list[Token]:
        """Reconstruct the postfix token order from the tree."""
        return [node.token for node in post_order(self.root)]

    def __str__(self) -> str:
        return str(self.root)


Node.model_rebuild()
