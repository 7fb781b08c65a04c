"""
End-to-end evaluation of expression text.

    text → tokenize → to_postfix → build_tree → evaluate_tree → Value

``evaluate`` raises on bad input; ``try_evaluate`` wraps the outcome in an
``EvaluationResult`` so shells can report an error and carry on.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from ratcalc.core.calc.evaluator import evaluate_tree
from ratcalc.core.calc.lexer import tokenize
from ratcalc.core.calc.shunting_yard import to_postfix
from ratcalc.core.calc.tree_builder import build_tree
from ratcalc.core.config import EvalLimits
from ratcalc.core.errors import CalcError, ErrorKind
from ratcalc.core.ir.tree import Tree
from ratcalc.core.ir.value import Value

logger = logging.getLogger(__name__)


def parse(source: str, limits: EvalLimits | None = None) -> Tree:
    """Parse an expression string into a tree.

    Raises:
        LexError: If tokenization fails.
        ParseError: If the tokens do not form a single expression.
    """
    tokens = tokenize(source)
    postfix = to_postfix(tokens, limits, source)
    return build_tree(postfix, limits, source)


def evaluate(expression: str, limits: EvalLimits | None = None) -> Value:
    """Evaluate an expression string exactly.

    Args:
        expression: Arithmetic expression, e.g. "(10 + 5) / 4".
        limits: Resource bounds; defaults to ``EvalLimits()``.

    Returns:
        The normalized result.

    Raises:
        LexError, ParseError, DivisionByZero, ArithmeticOverflow
    """
    return evaluate_tree(parse(expression, limits))


class EvaluationResult(BaseModel):
    """Outcome of evaluating one expression: a value or an error."""

    expression: str
    value: Value | None = None
    error_kind: ErrorKind | None = Field(default=None, description="Set when evaluation failed")
    error_message: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    def __str__(self) -> str:
        if self.value is not None:
            return str(self.value)
        return f"{self.error_kind}: {self.error_message}"


def try_evaluate(expression: str, limits: EvalLimits | None = None) -> EvaluationResult:
    """Evaluate an expression, returning errors instead of raising them."""
    try:
        value = evaluate(expression, limits)
    except CalcError as e:
        logger.info("Evaluation of %r failed: %s", expression, e.message)
        return EvaluationResult(expression=expression, error_kind=e.kind, error_message=e.message)
    return EvaluationResult(expression=expression, value=value)
