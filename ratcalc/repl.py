"""Read-parse-print loop and command line interface for ratcalc."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TextIO

import yaml

from ratcalc.core.config import Settings, get_settings
from ratcalc.core.errors import RatcalcError
from ratcalc.core.logging import get_logger, setup_logging
from ratcalc.parser.ast import ASTNode
from ratcalc.parser.context import Context
from ratcalc.parser.lexer import lex
from ratcalc.parser.parser import Parser
from ratcalc.parser.visitors import StringVisitor, format_tokens

logger = get_logger(__name__)


def read(prompt: str = ">> ", stream: TextIO | None = None, out: TextIO | None = None) -> str | None:
    """Prompt for and read one line; None at end of input."""
    stream = stream or sys.stdin
    out = out or sys.stdout
    out.write(prompt)
    out.flush()
    line = stream.readline()
    if not line:
        return None
    return line


def handle(
    line: str,
    parser: Parser,
    settings: Settings | None = None,
    out: TextIO | None = None,
) -> ASTNode | None:
    """
    Lex and parse one line of input and print the intermediate results.

    Errors are reported on ``out`` and swallowed so the loop can prompt
    again; the caller gets None in that case.
    """
    settings = settings or get_settings()
    out = out or sys.stdout
    text = line.rstrip("\r\n")

    if not text.strip():
        return None

    try:
        tokens = lex(text)
        if settings.SHOW_TOKENS:
            print(f"Lexed: {tokens}", file=out)

        postfix = parser.to_postfix(tokens)
        if settings.SHOW_POSTFIX:
            print(f"Postfix: {format_tokens(postfix)}", file=out)

        expression = parser.reduce(postfix)
    except RatcalcError as exc:
        logger.debug("Rejected %r: %s", text, exc.message, exc_info=True)
        print(f"Error: {exc}", file=out)
        return None

    print(f"Parsed: {expression.accept(StringVisitor(parser.context))}", file=out)
    return expression


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ratcalc",
        description="Lex and parse arithmetic expressions with exact rational literals.",
    )
    parser.add_argument(
        "-e",
        "--expression",
        action="append",
        default=[],
        help="Parse this expression and exit (may be repeated).",
    )
    parser.add_argument(
        "--operators",
        type=Path,
        help="YAML operator table to use instead of the bundled one.",
    )
    parser.add_argument(
        "--no-tokens",
        dest="show_tokens",
        action="store_false",
        default=None,
        help="Do not print the lexed token stream.",
    )
    parser.add_argument(
        "--no-postfix",
        dest="show_postfix",
        action="store_false",
        default=None,
        help="Do not print the postfix ordering.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    settings = get_settings()
    overrides = {}
    if args.show_tokens is not None:
        overrides["SHOW_TOKENS"] = args.show_tokens
    if args.show_postfix is not None:
        overrides["SHOW_POSTFIX"] = args.show_postfix
    if args.operators is not None:
        overrides["OPERATORS_FILE"] = str(args.operators)
    if overrides:
        settings = settings.model_copy(update=overrides)

    setup_logging(settings, level="DEBUG" if args.verbose else None)

    try:
        context = (
            Context.from_yaml(settings.OPERATORS_FILE)
            if settings.OPERATORS_FILE
            else Context.default()
        )
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Error: cannot load operator table: {exc}", file=sys.stderr)
        return 1

    parser = Parser(context)

    if args.expression:
        failed = False
        for expression in args.expression:
            if handle(expression, parser, settings) is None:
                failed = True
        return 1 if failed else 0

    try:
        while True:
            line = read(settings.PROMPT)
            if line is None:
                break
            handle(line, parser, settings)
    except KeyboardInterrupt:
        pass
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
