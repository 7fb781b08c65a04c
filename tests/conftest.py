"""Shared pytest fixtures for ratcalc tests."""

from __future__ import annotations

import re
from collections.abc import Callable
from fractions import Fraction

import pytest
from typer.testing import CliRunner

from ratcalc.core.config import LOG_LEVEL_ENV_VAR

_TOKEN_RE = re.compile(r"\s*(?:(\d+(?:\.\d+)?)|(.))")


class _DescentEvaluator:
    """Recursive descent evaluator over Fraction, independent of the pipeline.

    Grammar:
        expr    → term (('+' | '-') term)*
        term    → unary (('*' | '/') unary)*
        unary   → '-' unary | primary
        primary → NUMBER | '(' expr ')'
    """

    def __init__(self, source: str) -> None:
        self.tokens: list[str] = []
        for number, symbol in _TOKEN_RE.findall(source):
            if number or (symbol and not symbol.isspace()):
                self.tokens.append(number or symbol)
        self.pos = 0

    @property
    def current(self) -> str | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> str:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def expect(self, tok: str) -> None:
        if self.current != tok:
            raise ValueError(f"Expected {tok!r}, got {self.current!r}")
        self.advance()

    def parse_expr(self) -> Fraction:
        left = self.parse_term()
        while self.current in ("+", "-"):
            op = self.advance()
            right = self.parse_term()
            left = left + right if op == "+" else left - right
        return left

    def parse_term(self) -> Fraction:
        left = self.parse_unary()
        while self.current in ("*", "/"):
            op = self.advance()
            right = self.parse_unary()
            if op == "*":
                left = left * right
            else:
                left = left / right  # ZeroDivisionError on zero
        return left

    def parse_unary(self) -> Fraction:
        if self.current == "-":
            self.advance()
            return -self.parse_unary()
        return self.parse_primary()

    def parse_primary(self) -> Fraction:
        tok = self.current
        if tok == "(":
            self.advance()
            value = self.parse_expr()
            self.expect(")")
            return value
        if tok is not None and tok[0].isdigit():
            self.advance()
            return Fraction(tok)
        raise ValueError(f"Unexpected token: {tok!r}")

    def evaluate(self) -> Fraction:
        value = self.parse_expr()
        if self.current is not None:
            raise ValueError(f"Unexpected token after expression: {self.current!r}")
        return value


def reference_evaluate(source: str) -> Fraction:
    """Evaluate ``source`` with the recursive descent reference evaluator."""
    return _DescentEvaluator(source).evaluate()


@pytest.fixture(scope="session")
def reference_eval() -> Callable[[str], Fraction]:
    """Return the independent recursive descent evaluator."""
    return reference_evaluate


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove ratcalc environment overrides for the duration of a test."""
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
    return monkeypatch
