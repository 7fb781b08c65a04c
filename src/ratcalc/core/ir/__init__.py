"""
Intermediate representation for ratcalc: exact values, tokens, and trees.
"""

from ratcalc.core.ir.tokens import (
    BINARY_OPERATORS,
    Associativity,
    Operator,
    OperatorToken,
    Paren,
    ParenToken,
    Token,
    ValueToken,
)
from ratcalc.core.ir.tree import Node, Tree, post_order
from ratcalc.core.ir.value import (
    INT64_MAX,
    INT64_MIN,
    Integer,
    Rational,
    Value,
    add,
    div,
    from_decimal,
    from_fraction,
    from_int,
    mul,
    negate,
    simplify,
    sub,
)

__all__ = [
    # Values
    "INT64_MAX",
    "INT64_MIN",
    "Integer",
    "Rational",
    "Value",
    "add",
    "div",
    "from_decimal",
    "from_fraction",
    "from_int",
    "mul",
    "negate",
    "simplify",
    "sub",
    # Tokens
    "BINARY_OPERATORS",
    "Associativity",
    "Operator",
    "OperatorToken",
    "Paren",
    "ParenToken",
    "Token",
    "ValueToken",
    # Trees
    "Node",
    "Tree",
    "post_order",
]
