"""
Lexer for mathematical expressions.

Converts raw text into a flat token stream. At each position the lexer tries,
in order: a single-character grouping symbol or comma, whitespace (skipped),
a numeric literal, a word, and finally an operator run. The first recognizer
that matches consumes its characters; there is no backtracking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union

from ratcalc.core.errors import LexError
from ratcalc.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Integer:
    """A non-negative integer literal, e.g. ``1337``."""

    value: int


@dataclass(frozen=True)
class Decimal:
    """
    A non-negative decimal literal.

    Attributes:
        whole: Digits before the decimal point
        frac: Fractional digits from the first nonzero one onward
        exponent: Minus the number of zeroes between the point and the
            first nonzero fractional digit (always <= 0 when lexed)

    Examples:
        3.1415 -> Decimal(3, 1415, 0)
        .001   -> Decimal(0, 1, -2)
        2.018  -> Decimal(2, 18, -1)
    """

    whole: int
    frac: int
    exponent: int


Num = Union[Integer, Decimal]


class TokenType(Enum):
    """Token types for mathematical expressions."""

    NUMBER = auto()
    OPAREN = auto()  # (
    CPAREN = auto()  # )
    OBRACKET = auto()  # [
    CBRACKET = auto()  # ]
    WORD = auto()  # function or variable name
    OPER = auto()  # +, >=, ++, ...
    COMMA = auto()  # argument separator


@dataclass(frozen=True)
class Token:
    """
    Represents a single token in the expression.

    Attributes:
        type: The token type
        value: The source text of the token
        pos: Position in the source string (for error reporting)
        num: Numeric payload of NUMBER tokens
        arity: Operand count, set by the parser on postfix output
    """

    type: TokenType
    value: str
    pos: int = field(default=0, compare=False)
    num: Num | None = None
    arity: int | None = field(default=None, compare=False)

    def __repr__(self) -> str:
        if self.num is not None:
            return f"Token({self.type.name}, {self.num!r})"
        if self.type in (TokenType.WORD, TokenType.OPER):
            return f"Token({self.type.name}, '{self.value}')"
        return f"Token({self.type.name})"


SINGLE_CHAR_TOKENS = {
    "(": TokenType.OPAREN,
    ")": TokenType.CPAREN,
    "[": TokenType.OBRACKET,
    "]": TokenType.CBRACKET,
    ",": TokenType.COMMA,
}

OPENERS = (TokenType.OPAREN, TokenType.OBRACKET)
CLOSERS = (TokenType.CPAREN, TokenType.CBRACKET)


def is_digit(c: str) -> bool:
    """Check for an ASCII decimal digit."""
    return "0" <= c <= "9"


def is_alpha(c: str) -> bool:
    """Check for an ASCII letter (A-Z, a-z)."""
    return "A" <= c <= "Z" or "a" <= c <= "z"


def is_operator_char(c: str) -> bool:
    """Control characters belong to no token class."""
    if not c.isprintable():
        return False
    return not (is_alpha(c) or is_digit(c) or c.isspace() or c in SINGLE_CHAR_TOKENS)


class Lexer:
    """
    Tokenizes mathematical expressions.

    The lexer is stateless between calls; each call to lex() works on its own
    cursor, so a single instance may be shared freely.
    """

    def lex(self, text: str) -> list[Token]:
        """
        Tokenize a mathematical expression.

        Args:
            text: The expression to tokenize

        Returns:
            List of tokens

        Raises:
            LexError: If no recognizer matches at some position
        """
        tokens: list[Token] = []
        pos = 0

        while pos < len(text):
            c = text[pos]

            if c in SINGLE_CHAR_TOKENS:
                tokens.append(Token(SINGLE_CHAR_TOKENS[c], c, pos))
                pos += 1
                continue

            if c.isspace():
                pos += 1
                continue

            for recognizer in (self._lex_num, self._lex_word, self._lex_oper):
                token, end = recognizer(text, pos)
                if token is not None:
                    tokens.append(token)
                    pos = end
                    break
            else:
                raise LexError(pos, c)

        logger.debug("Lexed %d tokens from %r", len(tokens), text)
        return tokens

    def _lex_num(self, text: str, pos: int) -> tuple[Token | None, int]:
        """
        Extract a numeric literal starting at pos.

        Leading zeroes after the decimal point only decrement the exponent;
        once a nonzero fractional digit has been seen every further digit
        accumulates into the fractional part.
        """
        if not (is_digit(text[pos]) or text[pos] == "."):
            return None, pos

        start = pos
        whole = 0
        frac = 0
        exponent = 0
        is_dec = False
        parsed_nonzero = False

        while pos < len(text):
            c = text[pos]
            if is_digit(c):
                d = ord(c) - ord("0")
                if not is_dec:
                    whole = whole * 10 + d
                elif parsed_nonzero or d != 0:
                    parsed_nonzero = True
                    frac = frac * 10 + d
                else:
                    exponent -= 1
            elif c == "." and not is_dec:
                is_dec = True
            else:
                # A second '.' ends the literal like any other character
                break
            pos += 1

        num: Num = Decimal(whole, frac, exponent) if is_dec else Integer(whole)
        return Token(TokenType.NUMBER, text[start:pos], start, num=num), pos

    def _lex_word(self, text: str, pos: int) -> tuple[Token | None, int]:
        """Extract a maximal run of ASCII letters."""
        start = pos
        while pos < len(text) and is_alpha(text[pos]):
            pos += 1

        if pos == start:
            return None, pos
        return Token(TokenType.WORD, text[start:pos], start), pos

    def _lex_oper(self, text: str, pos: int) -> tuple[Token | None, int]:
        """Extract a maximal run of operator characters."""
        start = pos
        while pos < len(text) and is_operator_char(text[pos]):
            pos += 1

        if pos == start:
            return None, pos
        return Token(TokenType.OPER, text[start:pos], start), pos


_lexer = Lexer()


def lex(text: str) -> list[Token]:
    """Tokenize text with a shared Lexer instance."""
    return _lexer.lex(text)
