"""
Shunting-yard parser for mathematical expressions.

Parsing happens in two explicit passes, neither of which recurses:

1. to_postfix() reorders the infix token stream into postfix (RPN) order
   with an output queue and an operator stack, using the context's
   precedence and associativity tables.
2. reduce() scans the postfix stream with a value stack, materializing
   numbers as exact Rationals and folding each operator or function over
   the operands it consumes.

Examples:
    2 + 3 * 4            -> 2 3 4 * +
    2 + 3 - 4            -> 2 3 + 4 -
    1 / fun(2 * 3, 4 + 5) -> 1 2 3 * 4 5 + fun /
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Sequence

from ratcalc.core.errors import (
    MalformedExpressionError,
    MismatchedGroupingError,
)
from ratcalc.core.logging import get_logger
from ratcalc.math.rational import Rational

from .ast import ASTNode, BinaryOp, FunctionCall, UnaryOp, Value
from .context import Associativity, Context, OperatorConfig
from .lexer import CLOSERS, OPENERS, Token, TokenType, lex

logger = get_logger(__name__)

MATCHING_OPENER = {
    TokenType.CPAREN: TokenType.OPAREN,
    TokenType.CBRACKET: TokenType.OBRACKET,
}


@dataclass
class _Group:
    """Bookkeeping for one open parenthesis or bracket."""

    opener: Token
    args: int = 0  # completed (comma-terminated) arguments
    has_operand: bool = False  # current argument is non-empty


def _pops(incoming: OperatorConfig, top: OperatorConfig) -> bool:
    """Whether an incoming binary operator pops the operator on the stack."""
    if incoming.associativity is Associativity.RIGHT:
        return incoming.precedence < top.precedence
    return incoming.precedence <= top.precedence


class Parser:
    """
    Operator-precedence (shunting-yard) parser.

    The parser only reads its context, so one instance can be reused for
    any number of expressions.
    """

    def __init__(self, context: Context | None = None):
        """
        Initialize parser with optional context.

        Args:
            context: Operator and function tables (defaults to the bundled
                Arithmetic context)
        """
        self.context = context or Context.default()

    def parse(self, tokens: Sequence[Token]) -> ASTNode:
        """
        Parse a token stream to an AST.

        Raises:
            UnknownOperatorError: If an operator symbol is not in the table
            MismatchedGroupingError: If grouping symbols do not pair up
            MalformedExpressionError: If operands and operators do not
                combine into exactly one expression
            MalformedLiteralError: If a numeric literal is invalid
        """
        postfix = self.to_postfix(tokens)
        logger.debug("Postfix: %s", " ".join(t.value for t in postfix))
        return self.reduce(postfix)

    def parse_string(self, expression: str) -> ASTNode:
        """Lex and parse an expression string."""
        return self.parse(lex(expression))

    def to_postfix(self, tokens: Sequence[Token]) -> list[Token]:
        """
        Reorder an infix token stream into postfix order.

        Operator and function tokens in the result carry their arity.
        """
        output: list[Token] = []
        stack: list[tuple[Token, OperatorConfig | None]] = []
        groups: list[_Group] = []
        expect_operand = True

        for i, token in enumerate(tokens):
            kind = token.type

            if groups and kind not in (TokenType.COMMA, *CLOSERS):
                groups[-1].has_operand = True

            if kind is TokenType.NUMBER:
                output.append(token)
                expect_operand = False

            elif kind is TokenType.WORD:
                following = tokens[i + 1] if i + 1 < len(tokens) else None
                if following is not None and following.type in OPENERS:
                    # Function name, emitted once its argument list closes
                    stack.append((token, None))
                    expect_operand = True
                else:
                    output.append(replace(token, arity=0))
                    expect_operand = False

            elif kind is TokenType.COMMA:
                self._pop_to_opener(token, stack, output)
                group = groups[-1]
                if not group.has_operand:
                    raise MalformedExpressionError("Empty argument", token)
                group.args += 1
                group.has_operand = False
                expect_operand = True

            elif kind is TokenType.OPER:
                if expect_operand:
                    # Prefix operators bind to what follows; nothing to pop
                    config = self.context.resolve(token.value, unary=True, token=token)
                else:
                    config = self.context.resolve(token.value, token=token)
                    self._pop_operators(token, config, stack, output)
                stack.append((token, config))
                expect_operand = True

            elif kind in OPENERS:
                stack.append((token, None))
                groups.append(_Group(token))
                expect_operand = True

            elif kind in CLOSERS:
                opener = self._pop_to_opener(token, stack, output)
                if opener.type is not MATCHING_OPENER[kind]:
                    raise MismatchedGroupingError(
                        f"'{token.value}' closes '{opener.value}' from position {opener.pos}",
                        token,
                    )
                stack.pop()
                group = groups.pop()
                if group.args and not group.has_operand:
                    raise MalformedExpressionError("Empty argument", token)
                if stack and stack[-1][0].type is TokenType.WORD:
                    word, _ = stack.pop()
                    arity = group.args + (1 if group.has_operand else 0)
                    output.append(replace(word, arity=arity))
                expect_operand = False

            else:
                raise MalformedExpressionError(f"Unexpected token {kind.name}", token)

        while stack:
            token, config = stack.pop()
            if token.type in OPENERS:
                raise MismatchedGroupingError("Unclosed grouping symbol", token)
            output.append(self._emit(token, config))

        return output

    def reduce(self, postfix: Sequence[Token]) -> ASTNode:
        """
        Reduce a postfix token stream to a single expression tree.

        Operator tokens without an arity are read as binary operators;
        words without one take their declared minimum argument count (0
        for undeclared words).
        """
        values: list[ASTNode] = []

        for token in postfix:
            if token.type is TokenType.NUMBER:
                if token.num is None:
                    raise MalformedExpressionError("Number token without a value", token)
                values.append(Value(Rational.from_num(token.num)))
                continue

            if token.type is TokenType.OPER:
                arity = token.arity
                if arity is None:
                    arity = self.context.resolve(token.value, token=token).arity
            elif token.type is TokenType.WORD:
                arity = token.arity
                if arity is None:
                    declared = self.context.functions.get(token.value)
                    arity = declared.min_args if declared else 0
                self._check_function_arity(token, arity)
            else:
                raise MalformedExpressionError(
                    f"Unexpected {token.type.name} in postfix stream", token
                )

            if len(values) < arity:
                raise MalformedExpressionError(
                    f"'{token.value}' expects {arity} operand(s), found {len(values)}",
                    token,
                )
            operands = values[len(values) - arity:]
            del values[len(values) - arity:]
            values.append(self._build(token, operands))

        if len(values) != 1:
            if not values:
                raise MalformedExpressionError("Empty expression")
            raise MalformedExpressionError(
                f"Expected a single expression, found {len(values)}"
            )

        return values[0]

    def _pop_operators(
        self,
        token: Token,
        config: OperatorConfig,
        stack: list[tuple[Token, OperatorConfig | None]],
        output: list[Token],
    ) -> None:
        while stack:
            top, top_config = stack[-1]
            if top_config is None:
                break
            if (
                config.associativity is Associativity.NONE
                and top_config.binary
                and top_config.associativity is Associativity.NONE
                and top_config.precedence == config.precedence
            ):
                raise MalformedExpressionError(
                    f"Non-associative operator '{token.value}' cannot follow '{top.value}'",
                    token,
                )
            if not _pops(config, top_config):
                break
            stack.pop()
            output.append(self._emit(top, top_config))

    def _pop_to_opener(
        self,
        token: Token,
        stack: list[tuple[Token, OperatorConfig | None]],
        output: list[Token],
    ) -> Token:
        """Pop operators until an opener is on top; return the opener."""
        while stack:
            top, top_config = stack[-1]
            if top.type in OPENERS:
                return top
            stack.pop()
            output.append(self._emit(top, top_config))
        raise MismatchedGroupingError("No matching opening symbol", token)

    def _emit(self, token: Token, config: OperatorConfig | None) -> Token:
        if config is None:
            return token
        return replace(token, arity=config.arity)

    def _check_function_arity(self, token: Token, count: int) -> None:
        declared = self.context.functions.get(token.value)
        if declared is not None and not declared.accepts(count):
            if declared.max_args is None:
                expected = f"at least {declared.min_args}"
            elif declared.max_args == declared.min_args:
                expected = str(declared.min_args)
            else:
                expected = f"{declared.min_args} to {declared.max_args}"
            raise MalformedExpressionError(
                f"'{token.value}' takes {expected} argument(s), got {count}", token
            )

    def _build(self, token: Token, operands: list[ASTNode]) -> ASTNode:
        if len(operands) == 1:
            return UnaryOp(token.value, operands[0])
        if len(operands) == 2:
            return BinaryOp(operands[0], token.value, operands[1])
        if token.type is TokenType.WORD:
            return FunctionCall(token.value, operands)
        raise MalformedExpressionError(
            f"Operator '{token.value}' cannot take {len(operands)} operands", token
        )


@lru_cache(maxsize=1)
def get_default_parser() -> Parser:
    """Get a shared parser over the bundled Arithmetic context."""
    return Parser()


def to_postfix(tokens: Sequence[Token], context: Context | None = None) -> list[Token]:
    """Reorder infix tokens into postfix order."""
    parser = Parser(context) if context is not None else get_default_parser()
    return parser.to_postfix(tokens)


def parse(tokens: Sequence[Token], context: Context | None = None) -> ASTNode:
    """Parse tokens into an expression tree."""
    parser = Parser(context) if context is not None else get_default_parser()
    return parser.parse(tokens)
