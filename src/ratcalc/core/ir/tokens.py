"""
Token types for ratcalc expressions.

Operators carry their own precedence and associativity, which drive the
shunting-yard conversion:

    operator   symbol   precedence   associativity   arity
    ADD        +        2            left            2
    SUB        -        2            left            2
    MUL        *        3            left            2
    DIV        /        3            left            2
    USUB       neg      5            right           1
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from ratcalc.core.ir.value import Value

# ---------------------------------------------------------------------------
# Operators and parentheses
# ---------------------------------------------------------------------------


class Associativity(StrEnum):
    """Tie-break rule for operators of equal precedence."""

    LEFT = "left"
    RIGHT = "right"


class Operator(StrEnum):
    """Arithmetic operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    USUB = "neg"  # unary negation; "-" in source text

    @property
    def precedence(self) -> int:
        return _PRECEDENCE[self]

    @property
    def associativity(self) -> Associativity:
        if self == Operator.USUB:
            return Associativity.RIGHT
        return Associativity.LEFT

    @property
    def arity(self) -> int:
        return 1 if self == Operator.USUB else 2

    @property
    def is_unary(self) -> bool:
        return self.arity == 1


_PRECEDENCE: dict[Operator, int] = {
    Operator.ADD: 2,
    Operator.SUB: 2,
    Operator.MUL: 3,
    Operator.DIV: 3,
    Operator.USUB: 5,
}

# Binary operators by source character
BINARY_OPERATORS: dict[str, Operator] = {
    "+": Operator.ADD,
    "-": Operator.SUB,
    "*": Operator.MUL,
    "/": Operator.DIV,
}


class Paren(StrEnum):
    """Grouping parentheses. Structural only; never part of a tree."""

    LEFT = "("
    RIGHT = ")"


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


class OperatorToken(BaseModel):
    """An operator occurrence."""

    op: Operator
    pos: int = Field(default=0, description="Offset of the operator in the source text")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.op.value


class ValueToken(BaseModel):
    """A numeric literal, already converted to an exact value."""

    value: Value
    pos: int = Field(default=0, description="Offset of the literal in the source text")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


class ParenToken(BaseModel):
    """A left or right parenthesis."""

    paren: Paren
    pos: int = Field(default=0, description="Offset of the parenthesis in the source text")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.paren.value


Token = OperatorToken | ValueToken | ParenToken
