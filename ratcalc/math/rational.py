"""
Exact rational numbers for numeric literals.

A Rational stores numerator and denominator as Python integers, so literal
values are represented without any floating-point rounding.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ratcalc.core.errors import MalformedLiteralError
from ratcalc.parser.lexer import Decimal, Integer, Num


def gcd(a: int, b: int) -> int:
    """Greatest Common Divisor."""
    a, b = abs(a), abs(b)
    if a < b:
        a, b = b, a
    if b == 0:
        return a
    r = a % b
    while r != 0:
        a, b = b, r
        r = a % b
    return b


def reduce_fraction(num: int, den: int) -> tuple[int, int]:
    """
    Reduce fraction to lowest terms.

    Ensures denominator is positive.
    """
    if den < 0:
        num, den = -num, -den
    g = gcd(num, den)
    if g == 0:
        return (num, den)
    return (num // g, den // g)


class Rational(BaseModel):
    """
    Rational represents an exact number as numerator/denominator.

    Examples:
        >>> Rational(1, 2)  # 1/2
        >>> Rational(6, 4)  # 3/2
        >>> Rational(6, 4, reduce=False)  # 6/4, equal to 3/2
    """

    model_config = ConfigDict(frozen=True)

    numerator: int = Field(description="The numerator")
    denominator: int = Field(description="The denominator")

    def __init__(self, num: int, den: int = 1, reduce: bool = True, **kwargs):
        """
        Create a Rational.

        Args:
            num: Numerator
            den: Denominator (default 1)
            reduce: Whether to reduce to lowest terms (default True)

        Raises:
            MalformedLiteralError: If the denominator is zero
        """
        num = int(num)
        den = int(den)

        if den == 0:
            raise MalformedLiteralError(
                "Rational denominator cannot be zero", details={"numerator": num}
            )

        if reduce:
            num, den = reduce_fraction(num, den)
        elif den < 0:
            num, den = -num, -den

        super().__init__(numerator=num, denominator=den, **kwargs)

    @classmethod
    def from_num(cls, number: Num) -> Rational:
        """
        Materialize a lexed numeric literal exactly.

        The denominator keeps the literal's decimal scale, so ``3.1415``
        becomes 31415/10000 rather than 6283/2000.

        Raises:
            MalformedLiteralError: For a Decimal with a positive exponent or
                negative parts
        """
        if isinstance(number, Integer):
            return cls(number.value, 1, reduce=False)

        if isinstance(number, Decimal):
            if number.exponent > 0:
                raise MalformedLiteralError(
                    f"Positive exponent in decimal literal: {number.exponent}",
                    details={"exponent": number.exponent},
                )
            if number.whole < 0 or number.frac < 0:
                raise MalformedLiteralError(
                    "Decimal literal parts must be non-negative",
                    details={"whole": number.whole, "frac": number.frac},
                )

            # frac holds its own digits after the leading zero run
            digits = len(str(number.frac)) if number.frac else 0
            denominator = 10 ** (digits - number.exponent)
            numerator = number.whole * denominator + number.frac
            return cls(numerator, denominator, reduce=False)

        raise TypeError(f"Cannot build a Rational from {type(number).__name__}")

    @property
    def num(self) -> int:
        return self.numerator

    @property
    def den(self) -> int:
        return self.denominator

    def reduce(self) -> Rational:
        """Return this value in lowest terms."""
        return Rational(self.numerator, self.denominator)

    def is_reduced(self) -> bool:
        return gcd(self.numerator, self.denominator) == 1

    def is_integer(self) -> bool:
        return self.numerator % self.denominator == 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Rational):
            return self.numerator * other.denominator == other.numerator * self.denominator
        if isinstance(other, int) and not isinstance(other, bool):
            return self.numerator == other * self.denominator
        return NotImplemented

    def __hash__(self) -> int:
        return hash(reduce_fraction(self.numerator, self.denominator))

    def __str__(self) -> str:
        if self.denominator == 1:
            return str(self.numerator)
        return f"{self.numerator}/{self.denominator}"

    def __repr__(self) -> str:
        return f"Rational({self.numerator}, {self.denominator})"

    def to_tex(self) -> str:
        if self.denominator == 1:
            return str(self.numerator)
        sign = "-" if self.numerator < 0 else ""
        return f"{sign}\\frac{{{abs(self.numerator)}}}{{{self.denominator}}}"
