"""
Operator and function tables for expression parsing.

A Context maps operator symbols to their precedence and associativity and
function names to their accepted argument counts. Operators are resolved by
symbol text, so new ones can be added (in code or YAML) without touching the
parsing algorithm. Tables are filled in at startup and only read while
parsing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from ratcalc.core.errors import UnknownOperatorError
from ratcalc.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TABLE = "operators.yaml"


class Associativity(Enum):
    """Operator associativity."""

    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


@dataclass(frozen=True)
class OperatorConfig:
    """Configuration for an operator."""

    symbol: str
    precedence: int
    associativity: Associativity
    binary: bool = True  # True for binary, False for unary (prefix)

    @property
    def arity(self) -> int:
        return 2 if self.binary else 1

    @property
    def key(self) -> str:
        return self.symbol if self.binary else f"{self.symbol}u"


@dataclass(frozen=True)
class FunctionConfig:
    """Configuration for a function."""

    name: str
    min_args: int = 1
    max_args: int | None = None  # None means unlimited

    def accepts(self, count: int) -> bool:
        if count < self.min_args:
            return False
        return self.max_args is None or count <= self.max_args


@dataclass
class Context:
    """
    Parsing environment: operator and function tables.

    Attributes:
        name: Context name (e.g., "Arithmetic")
        operators: Operators keyed by symbol, unary ones by "<symbol>u"
        functions: Functions with a declared argument count
        flags: Additional context-specific flags
    """

    name: str
    operators: dict[str, OperatorConfig] = field(default_factory=dict)
    functions: dict[str, FunctionConfig] = field(default_factory=dict)
    flags: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Context":
        """
        Build a context from a parsed table.

        Raises:
            ValueError: If an entry is missing a required key or names an
                unknown associativity
        """
        context = cls(name=data.get("name", "Custom"), flags=data.get("flags") or {})

        for op_data in data.get("operators") or []:
            try:
                context.add_operator(
                    op_data["symbol"],
                    precedence=op_data["precedence"],
                    associativity=Associativity(op_data.get("associativity", "left")),
                    binary=op_data.get("binary", True),
                )
            except KeyError as exc:
                raise ValueError(f"Operator entry missing {exc}: {op_data!r}") from exc

        for func_data in data.get("functions") or []:
            if isinstance(func_data, str):
                context.add_function(func_data)
            else:
                context.add_function(
                    func_data["name"],
                    min_args=func_data.get("min_args", 1),
                    max_args=func_data.get("max_args"),
                )

        return context

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Context":
        """
        Load context from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Context instance
        """
        with open(path, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Operator table {path} must be a mapping")

        context = cls.from_dict(data)
        logger.debug(
            "Loaded context %r from %s: %d operators, %d functions",
            context.name, path, len(context.operators), len(context.functions),
        )
        return context

    @classmethod
    def default(cls) -> "Context":
        """
        Create the bundled Arithmetic context.

        Binary + and - (precedence 0), * and / (precedence 1), all
        left-associative, plus right-associative ^ and prefix - and +.
        """
        table = resources.files("ratcalc.parser").joinpath(DEFAULT_TABLE)
        data = yaml.safe_load(table.read_text(encoding="utf-8"))
        return cls.from_dict(data)

    def add_operator(
        self,
        symbol: str,
        precedence: int,
        associativity: Associativity = Associativity.LEFT,
        binary: bool = True,
    ) -> OperatorConfig:
        """Register (or replace) an operator."""
        config = OperatorConfig(symbol, precedence, associativity, binary)
        self.operators[config.key] = config
        return config

    def add_function(
        self, name: str, min_args: int = 1, max_args: int | None = None
    ) -> FunctionConfig:
        """Register (or replace) a function's accepted argument count."""
        config = FunctionConfig(name, min_args, max_args)
        self.functions[name] = config
        return config

    def resolve(self, symbol: str, unary: bool = False, token: Any = None) -> OperatorConfig:
        """
        Look up an operator by symbol.

        Raises:
            UnknownOperatorError: If the symbol is not in the table
        """
        key = f"{symbol}u" if unary else symbol
        try:
            return self.operators[key]
        except KeyError:
            raise UnknownOperatorError(symbol, token, unary=unary) from None

    def get_operator_precedence(self, op: str, is_unary: bool = False) -> int:
        """
        Get the precedence of an operator.

        Returns:
            Precedence value (higher = binds tighter), -1 if unknown
        """
        key = f"{op}u" if is_unary else op
        if key in self.operators:
            return self.operators[key].precedence
        return -1

    def get_operator_associativity(self, op: str, is_unary: bool = False) -> Associativity:
        key = f"{op}u" if is_unary else op
        if key in self.operators:
            return self.operators[key].associativity
        return Associativity.LEFT

    def is_function(self, name: str) -> bool:
        """Check if name is a declared function in this context."""
        return name in self.functions
