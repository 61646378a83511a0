"""
ratcalc - exact-rational expression lexer and parser

Turns text such as ``1 / fun(2 * 3, 4 + 5)`` into a token stream, a postfix
ordering and an expression tree whose literals are exact Rationals.
"""

# parser must load before math: rational.py imports the lexer's Num types
from .parser import (
    BinaryOp,
    Context,
    Expression,
    FunctionCall,
    Parser,
    Token,
    TokenType,
    UnaryOp,
    Value,
    lex,
    parse,
    to_postfix,
)
from .math import Rational
from .core.errors import (
    LexError,
    MalformedExpressionError,
    MalformedLiteralError,
    MismatchedGroupingError,
    ParseError,
    RatcalcError,
    UnknownOperatorError,
)

__version__ = "0.1.0"

__all__ = [
    "lex",
    "to_postfix",
    "parse",
    "Parser",
    "Context",
    "Token",
    "TokenType",
    "Expression",
    "Value",
    "UnaryOp",
    "BinaryOp",
    "FunctionCall",
    "Rational",
    "RatcalcError",
    "LexError",
    "ParseError",
    "UnknownOperatorError",
    "MismatchedGroupingError",
    "MalformedExpressionError",
    "MalformedLiteralError",
]
