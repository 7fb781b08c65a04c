"""
Lexer for ratcalc expressions.

Converts an expression string into a sequence of typed tokens. Characters
outside ``0-9 . + - * / ( )`` are discarded, so "1 000 + 2" reads as
"1000+2". Numeric literals become exact values as they are emitted.
"""

from __future__ import annotations

import logging

from ratcalc.core.errors import ArithmeticOverflow, ErrorContext, LexError, make_lex_error
from ratcalc.core.ir.tokens import (
    BINARY_OPERATORS,
    Operator,
    OperatorToken,
    Paren,
    ParenToken,
    Token,
    ValueToken,
)
from ratcalc.core.ir.value import from_decimal

logger = logging.getLogger(__name__)

_LITERAL_CHARS = frozenset("0123456789.")
_RECOGNIZED = _LITERAL_CHARS | frozenset("+-*/()")


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    A ``-`` is unary negation when no literal is being read and it starts
    the expression or follows an operator or a left parenthesis; otherwise
    it is subtraction.

    Raises:
        LexError: If a literal is malformed or nothing recognizable remains.
    """
    tokens: list[Token] = []
    buffer: list[str] = []
    buffer_start = 0
    seen = False

    for pos, c in enumerate(source):
        if c not in _RECOGNIZED:
            continue
        seen = True

        if c == "-" and not buffer and _expects_operand(tokens):
            tokens.append(OperatorToken(op=Operator.USUB, pos=pos))
            continue

        if c in _LITERAL_CHARS:
            if not buffer:
                buffer_start = pos
            buffer.append(c)
            continue

        if buffer:
            _emit_literal(source, tokens, "".join(buffer), buffer_start)
            buffer = []

        if c == "(":
            tokens.append(ParenToken(paren=Paren.LEFT, pos=pos))
        elif c == ")":
            tokens.append(ParenToken(paren=Paren.RIGHT, pos=pos))
        else:
            tokens.append(OperatorToken(op=BINARY_OPERATORS[c], pos=pos))

    if buffer:
        _emit_literal(source, tokens, "".join(buffer), buffer_start)

    if not seen:
        raise LexError(f"Empty expression: no numbers or operators in {source!r}")

    logger.debug("Tokenized %r into %d tokens", source, len(tokens))
    return tokens


def _expects_operand(tokens: list[Token]) -> bool:
    """True when the next token must start an operand."""
    if not tokens:
        return True
    last = tokens[-1]
    if isinstance(last, OperatorToken):
        return True
    return isinstance(last, ParenToken) and last.paren == Paren.LEFT


def _emit_literal(source: str, tokens: list[Token], literal: str, pos: int) -> None:
    """Convert an accumulated literal and append its value token.

    A literal whose magnitude only fits once negated, such as
    9223372036854775808 in "-9223372036854775808", absorbs the unary
    negation directly before it.
    """
    try:
        value = from_decimal(literal)
    except ValueError as e:
        raise make_lex_error(f"Invalid number literal {literal!r}", source, pos) from e
    except ArithmeticOverflow as e:
        negation = tokens[-1] if tokens else None
        if not (isinstance(negation, OperatorToken) and negation.op == Operator.USUB):
            raise _literal_overflow(source, literal, pos, e) from e
        try:
            value = from_decimal(literal, negative=True)
        except ArithmeticOverflow:
            raise _literal_overflow(source, literal, pos, e) from e
        tokens.pop()
        pos = negation.pos

    tokens.append(ValueToken(value=value, pos=pos))


def _literal_overflow(
    source: str, literal: str, pos: int, error: ArithmeticOverflow
) -> ArithmeticOverflow:
    return ArithmeticOverflow(
        f"Number literal {literal!r} is out of range: {error.message}",
        ErrorContext(source=source, position=pos),
    )
