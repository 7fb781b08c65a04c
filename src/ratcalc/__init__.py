"""
ratcalc - exact rational arithmetic for text expressions.

Evaluates expressions such as "(1 + 2) / 3 - -0.25" without floating-point
rounding: results are integers or mixed numbers like "0 (1 / 3)".
"""

from __future__ import annotations

from ratcalc._version import __version__
from ratcalc.core.calc import EvaluationResult, evaluate, parse, try_evaluate
from ratcalc.core.errors import (
    ArithmeticOverflow,
    CalcError,
    DivisionByZero,
    LexError,
    ParseError,
)
from ratcalc.core.ir import Integer, Rational, Value

__all__ = [
    "__version__",
    "evaluate",
    "parse",
    "try_evaluate",
    "EvaluationResult",
    "Integer",
    "Rational",
    "Value",
    "CalcError",
    "LexError",
    "ParseError",
    "DivisionByZero",
    "ArithmeticOverflow",
]
