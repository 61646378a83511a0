"""Core utilities package"""

from .config import Settings, get_settings
from .logging import setup_logging, get_logger
from .errors import (
    RatcalcError,
    LexError,
    ParseError,
    UnknownOperatorError,
    MismatchedGroupingError,
    MalformedExpressionError,
    MalformedLiteralError,
)

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "RatcalcError",
    "LexError",
    "ParseError",
    "UnknownOperatorError",
    "MismatchedGroupingError",
    "MalformedExpressionError",
    "MalformedLiteralError",
]
