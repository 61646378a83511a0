"""
Expression parsing package.

This package provides lexing, shunting-yard reordering and AST construction
for mathematical expressions with exact rational literals.
"""

from .lexer import Decimal, Integer, Lexer, Num, Token, TokenType, lex
from .ast import ASTNode, BinaryOp, Expression, FunctionCall, UnaryOp, Value
from .context import Associativity, Context, FunctionConfig, OperatorConfig
from .parser import Parser, parse, to_postfix
from .visitors import PostfixVisitor, StringVisitor, TeXVisitor, format_tokens

__all__ = [
    "Integer",
    "Decimal",
    "Num",
    "Token",
    "TokenType",
    "Lexer",
    "lex",
    "ASTNode",
    "Expression",
    "Value",
    "UnaryOp",
    "BinaryOp",
    "FunctionCall",
    "Associativity",
    "Context",
    "FunctionConfig",
    "OperatorConfig",
    "Parser",
    "parse",
    "to_postfix",
    "PostfixVisitor",
    "StringVisitor",
    "TeXVisitor",
    "format_tokens",
]
