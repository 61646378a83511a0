"""
Exact numeric types used as literal values in expression trees.
"""

from .rational import Rational, gcd, reduce_fraction

__all__ = [
    "Rational",
    "gcd",
    "reduce_fraction",
]
