"""
AST Visitor implementations for rendering expression trees.

- StringVisitor: Convert AST to infix string representation
- PostfixVisitor: Convert AST to postfix (RPN) string representation
- TeXVisitor: Convert AST to LaTeX representation
"""

from __future__ import annotations

from typing import Any, Iterable

from .ast import ASTNode, BinaryOp, FunctionCall, UnaryOp, Value, is_function_name
from .context import Associativity, Context
from .lexer import Token


def format_tokens(tokens: Iterable[Token]) -> str:
    """Join token text with spaces, e.g. a postfix stream as "2 3 4 * +"."""
    return " ".join(token.value for token in tokens)


def _is_fraction(node: ASTNode) -> bool:
    """A non-integral literal renders as n/d and must be grouped as an operand."""
    return isinstance(node, Value) and node.value.den != 1


class _PrecedenceMixin:
    context: Context

    def _get_precedence(self, node: Any) -> int | None:
        """Precedence of an operator node, None for atoms and function calls."""
        if isinstance(node, BinaryOp) and not is_function_name(node.op):
            return self.context.get_operator_precedence(node.op)
        if isinstance(node, UnaryOp) and not is_function_name(node.op):
            return self.context.get_operator_precedence(node.op, is_unary=True)
        return None

    def _needs_parens(self, parent: BinaryOp, child: ASTNode, right: bool) -> bool:
        child_prec = self._get_precedence(child)
        if child_prec is None:
            return False
        op_prec = self.context.get_operator_precedence(parent.op)
        if child_prec != op_prec:
            return child_prec < op_prec
        assoc = self.context.get_operator_associativity(parent.op)
        # Equal precedence: only the side the operator groups toward is safe
        if assoc is Associativity.RIGHT:
            return not right
        return right


class StringVisitor(_PrecedenceMixin):
    """
    Convert AST to string representation.

    Examples:
    - BinaryOp(Value(2), '+', Value(3)) → "2 + 3"
    - UnaryOp('sqrt', Value(2)) → "sqrt(2)"
    """

    def __init__(self, context: Context | None = None):
        self.context = context or Context.default()

    def visit_value(self, node: Value) -> str:
        return str(node.value)

    def visit_binary_op(self, node: BinaryOp) -> str:
        left_str = node.left.accept(self)
        right_str = node.right.accept(self)

        if is_function_name(node.op):
            return f"{node.op}({left_str}, {right_str})"

        if self._needs_parens(node, node.left, right=False) or _is_fraction(node.left):
            left_str = f"({left_str})"
        if self._needs_parens(node, node.right, right=True) or _is_fraction(node.right):
            right_str = f"({right_str})"

        return f"{left_str} {node.op} {right_str}"

    def visit_unary_op(self, node: UnaryOp) -> str:
        operand_str = node.operand.accept(self)

        if is_function_name(node.op):
            return f"{node.op}({operand_str})"

        # Add parentheses for complex expressions
        if (
            isinstance(node.operand, BinaryOp) and not is_function_name(node.operand.op)
        ) or _is_fraction(node.operand):
            operand_str = f"({operand_str})"

        return f"{node.op}{operand_str}"

    def visit_function_call(self, node: FunctionCall) -> str:
        if not node.args:
            return node.name
        args_str = ", ".join(arg.accept(self) for arg in node.args)
        return f"{node.name}({args_str})"


class PostfixVisitor:
    """
    Convert AST to postfix (RPN) notation.

    Mirrors the stream produced by Parser.to_postfix(), with literals shown
    as exact fractions: "1 / fun(2 * 3, 4 + 5)" → "1 2 3 * 4 5 + fun /".
    """

    def visit_value(self, node: Value) -> str:
        return str(node.value)

    def visit_binary_op(self, node: BinaryOp) -> str:
        return f"{node.left.accept(self)} {node.right.accept(self)} {node.op}"

    def visit_unary_op(self, node: UnaryOp) -> str:
        return f"{node.operand.accept(self)} {node.op}"

    def visit_function_call(self, node: FunctionCall) -> str:
        parts = [arg.accept(self) for arg in node.args]
        parts.append(node.name)
        return " ".join(parts)


class TeXVisitor(_PrecedenceMixin):
    """
    Convert AST to LaTeX representation.

    Examples:
    - BinaryOp(Value(1), '/', Value(2)) → "\\frac{1}{2}"
    - UnaryOp('sqrt', Value(2)) → "\\sqrt{2}"
    - BinaryOp(Value(2), '^', Value(3)) → "2^{3}"
    """

    FUNCTIONS_TEX = {
        "sin": r"\sin",
        "cos": r"\cos",
        "tan": r"\tan",
        "ln": r"\ln",
        "log": r"\log",
        "exp": r"\exp",
        "max": r"\max",
        "min": r"\min",
        "gcd": r"\gcd",
    }

    def __init__(self, context: Context | None = None):
        self.context = context or Context.default()

    def visit_value(self, node: Value) -> str:
        return node.value.to_tex()

    def visit_binary_op(self, node: BinaryOp) -> str:
        left_str = node.left.accept(self)
        right_str = node.right.accept(self)

        if is_function_name(node.op):
            return self._function(node.op, [left_str, right_str])

        if node.op == "/":
            return f"\\frac{{{left_str}}}{{{right_str}}}"

        if node.op == "^":
            if self._get_precedence(node.left) is not None or isinstance(
                node.left, FunctionCall
            ):
                left_str = f"\\left({left_str}\\right)"
            return f"{left_str}^{{{right_str}}}"

        if self._needs_parens(node, node.left, right=False):
            left_str = f"\\left({left_str}\\right)"
        if self._needs_parens(node, node.right, right=True):
            right_str = f"\\left({right_str}\\right)"

        if node.op == "*":
            return f"{left_str} \\cdot {right_str}"
        return f"{left_str} {node.op} {right_str}"

    def visit_unary_op(self, node: UnaryOp) -> str:
        operand_str = node.operand.accept(self)

        if node.op == "sqrt":
            return f"\\sqrt{{{operand_str}}}"
        if node.op == "abs":
            return f"\\left|{operand_str}\\right|"
        if is_function_name(node.op):
            return self._function(node.op, [operand_str])

        if isinstance(node.operand, BinaryOp) and not is_function_name(node.operand.op):
            operand_str = f"\\left({operand_str}\\right)"

        return f"{node.op}{operand_str}"

    def visit_function_call(self, node: FunctionCall) -> str:
        return self._function(node.name, [arg.accept(self) for arg in node.args])

    def _function(self, name: str, args: list[str]) -> str:
        name_tex = self.FUNCTIONS_TEX.get(name)
        if name_tex is None:
            name_tex = f"\\mathrm{{{name}}}" if len(name) > 1 else name
        if not args:
            return name_tex
        return f"{name_tex}\\left({', '.join(args)}\\right)"
