"""
ratcalc expression pipeline.

Lexer, shunting-yard converter, tree builder, and evaluator for exact
rational arithmetic.

Usage:
    from ratcalc.core.calc import evaluate

    result = evaluate("1/3 + 1/6")
    # str(result) == "0 (1 / 2)"
"""

from ratcalc.core.calc.evaluator import apply, evaluate_tree
from ratcalc.core.calc.lexer import tokenize
from ratcalc.core.calc.pipeline import EvaluationResult, evaluate, parse, try_evaluate
from ratcalc.core.calc.shunting_yard import format_postfix, to_postfix
from ratcalc.core.calc.tree_builder import build_tree

__all__ = [
    "EvaluationResult",
    "apply",
    "build_tree",
    "evaluate",
    "evaluate_tree",
    "format_postfix",
    "parse",
    "to_postfix",
    "tokenize",
    "try_evaluate",
]
