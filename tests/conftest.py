"""
Shared pytest fixtures and utilities for the ratcalc test suite.

This module provides:
- A fresh bundled context and a parser built on it
- A helper turning an expression string into its postfix text
- A helper writing operator tables to YAML files
"""

from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from ratcalc.parser.context import Context
from ratcalc.parser.lexer import lex
from ratcalc.parser.parser import Parser
from ratcalc.parser.visitors import format_tokens


@pytest.fixture
def context() -> Context:
    """A fresh copy of the bundled Arithmetic context."""
    return Context.default()


@pytest.fixture
def parser(context: Context) -> Parser:
    """Parser over the fixture context."""
    return Parser(context)


@pytest.fixture
def postfix_of(parser: Parser) -> Callable[[str], str]:
    """Lex an expression and render its postfix ordering as text."""
    def _postfix(text: str) -> str:
        return format_tokens(parser.to_postfix(lex(text)))
    return _postfix


@pytest.fixture
def write_table(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Write an operator table to a temporary YAML file."""
    def _write(data: dict[str, Any], name: str = "operators.yaml") -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data))
        return path
    return _write
