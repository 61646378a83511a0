"""
Abstract Syntax Tree (AST) node definitions for mathematical expressions.

Trees are built bottom-up by the parser from a postfix token stream. Each
node exclusively owns its children and is never mutated after construction.
Operations over trees (rendering, and evaluation elsewhere) are written as
visitors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from ratcalc.math.rational import Rational


class ASTVisitor(Protocol):
    """
    Visitor protocol for traversing AST nodes.

    Implementations provide string rendering, postfix rendering, TeX, etc.
    """

    def visit_value(self, node: "Value") -> Any:
        ...

    def visit_unary_op(self, node: "UnaryOp") -> Any:
        ...

    def visit_binary_op(self, node: "BinaryOp") -> Any:
        ...

    def visit_function_call(self, node: "FunctionCall") -> Any:
        ...


def is_function_name(op: str) -> bool:
    """Words (function names) are alphabetic; operator symbols never are."""
    return op.isalpha()


class ASTNode(ABC):
    """Base class for all AST nodes."""

    __slots__ = ()

    @abstractmethod
    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor for traversal."""

    @abstractmethod
    def __repr__(self) -> str:
        """Return string representation for debugging."""


Expression = ASTNode


class Value(ASTNode):
    """
    Represents a numeric literal.

    Examples: 42, 3.14, .001
    """

    __slots__ = ("value",)

    def __init__(self, value: "Rational"):
        self.value = value

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_value(self)

    def __repr__(self) -> str:
        return f"Value({self.value})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Value) and self.value == other.value


class UnaryOp(ASTNode):
    """
    Represents an operator or one-argument function applied to an operand.

    Examples: -x, sqrt(2)
    """

    __slots__ = ("op", "operand")

    def __init__(self, op: str, operand: ASTNode):
        self.op = op
        self.operand = operand

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_unary_op(self)

    def __repr__(self) -> str:
        return f"UnaryOp('{self.op}', {self.operand!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, UnaryOp)
            and self.op == other.op
            and self.operand == other.operand
        )


class BinaryOp(ASTNode):
    """
    Represents an operator or two-argument function applied to two operands.

    Examples: 2 + 3, 1 / 4, gcd(12, 18)
    """

    __slots__ = ("left", "op", "right")

    def __init__(self, left: ASTNode, op: str, right: ASTNode):
        self.left = left
        self.op = op
        self.right = right

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_binary_op(self)

    def __repr__(self) -> str:
        return f"BinaryOp({self.left!r}, '{self.op}', {self.right!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, BinaryOp)
            and self.left == other.left
            and self.op == other.op
            and self.right == other.right
        )


class FunctionCall(ASTNode):
    """
    Represents a word applied to zero or three-or-more arguments.

    Examples: pi, max(1, 2, 3), f()
    """

    __slots__ = ("name", "args")

    def __init__(self, name: str, args: list[ASTNode]):
        self.name = name
        self.args = tuple(args)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_function_call(self)

    def __repr__(self) -> str:
        args_repr = ", ".join(repr(arg) for arg in self.args)
        return f"FunctionCall('{self.name}', [{args_repr}])"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, FunctionCall)
            and self.name == other.name
            and self.args == other.args
        )
