"""
Error types for ratcalc lexing, parsing, and evaluation.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional


class ErrorKind(StrEnum):
    """Machine-readable error categories."""

    LEX = "lex"
    PARSE = "parse"
    DIVISION_BY_ZERO = "division_by_zero"
    OVERFLOW = "overflow"
    CONFIG = "config"


class CalcError(Exception):
    """Base exception for all ratcalc errors."""

    kind: ErrorKind = ErrorKind.PARSE

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class LexError(CalcError):
    """
    Raised when the source text cannot be split into tokens.

    Examples:
    - Literal with more than one decimal point
    - Bare "." with no digits
    - Nothing left after discarding unrecognized characters
    """

    kind = ErrorKind.LEX


class ParseError(CalcError):
    """
    Raised when a token stream does not form a single expression.

    Examples:
    - Operator with a missing operand
    - Unmatched parenthesis
    - Empty expression
    - Operands left over without an operator
    - Input exceeding the configured size or nesting limits
    """

    kind = ErrorKind.PARSE


class DivisionByZero(CalcError, ZeroDivisionError):
    """Raised when the exact value of a divisor is zero."""

    kind = ErrorKind.DIVISION_BY_ZERO


class ArithmeticOverflow(CalcError, OverflowError):
    """Raised when a result does not fit the signed 64-bit representation."""

    kind = ErrorKind.OVERFLOW


class ConfigError(CalcError):
    """Raised when ratcalc.toml holds invalid settings."""

    kind = ErrorKind.CONFIG


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        source: The expression text being processed
        position: 0-indexed offset of the offending character in source
    """

    source: str
    position: int

    @property
    def column(self) -> int:
        """1-indexed column of the error."""
        return self.position + 1

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            The source line followed by a ^ marker under the error column,
            e.g.::

                1 + (2 * 3
                    ^
        """
        line = self.source.rstrip("\n")
        if "\n" in line:
            # Expressions are single-line; fall back to the column only
            return f"column {self.column}"
        marker = " " * min(self.position, len(line)) + "^"
        return f"{line}\n{marker}"


def make_lex_error(message: str, source: str, position: int) -> LexError:
    """
    Helper to create a LexError with context.

    Args:
        message: Error description
        source: Source expression text
        position: 0-indexed offset into source

    Returns:
        LexError with context attached
    """
    return LexError(message, ErrorContext(source=source, position=position))


def make_parse_error(
    message: str,
    source: str | None = None,
    position: int | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with optional context.

    Args:
        message: Error description
        source: Optional source expression text
        position: Optional 0-indexed offset into source

    Returns:
        ParseError with context if location provided
    """
    if source is not None and position is not None:
        return ParseError(message, ErrorContext(source=source, position=position))
    return ParseError(message)
