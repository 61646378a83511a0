"""
Exceptions raised by the lexer, parser and rational literal layer.

Every failure aborts the expression being processed and surfaces as a typed
error; callers catch RatcalcError to report it and move on to new input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from ratcalc.parser.lexer import Token


class RatcalcError(Exception):
    """Base exception for all ratcalc errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class LexError(RatcalcError):
    """Raised when no token recognizer matches the current input position"""

    def __init__(self, pos: int, char: str):
        self.pos = pos
        self.char = char
        super().__init__(
            message=f"Invalid character at position {pos}: {char!r}",
            details={"pos": pos, "char": char},
        )


class MalformedLiteralError(RatcalcError):
    """Raised when a numeric literal cannot be materialized as a Rational"""


class ParseError(RatcalcError):
    """Base exception for failures while reordering or reducing tokens"""

    def __init__(self, message: str, token: Optional["Token"] = None):
        self.token = token
        details: Dict[str, Any] = {}
        if token is not None:
            details = {"pos": token.pos, "token": token.value}
            message = f"{message} at position {token.pos}: '{token.value}'"
        super().__init__(message=message, details=details)


class UnknownOperatorError(ParseError):
    """Raised when an operator symbol is absent from the operator table"""

    def __init__(self, symbol: str, token: Optional["Token"] = None, unary: bool = False):
        self.symbol = symbol
        kind = "unary operator" if unary else "operator"
        super().__init__(f"Unknown {kind} '{symbol}'", token)


class MismatchedGroupingError(ParseError):
    """Raised when a parenthesis or bracket has no matching counterpart"""


class MalformedExpressionError(ParseError):
    """Raised when postfix reduction does not end with exactly one value"""
