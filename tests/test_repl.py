"""Tests for the read-parse-print loop and CLI."""

import io

import pytest

from ratcalc import repl
from ratcalc.core.config import Settings
from ratcalc.parser.ast import BinaryOp


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


class TestRead:
    """Test line input."""

    def test_reads_one_line(self):
        """Test that the prompt is written and the line returned."""
        out = io.StringIO()
        line = repl.read(">> ", stream=io.StringIO("1 + 2\nnext\n"), out=out)
        assert line == "1 + 2\n"
        assert out.getvalue() == ">> "

    def test_end_of_input(self):
        """Test that EOF gives None."""
        assert repl.read(stream=io.StringIO(""), out=io.StringIO()) is None


class TestHandle:
    """Test processing of a single line."""

    def test_prints_each_stage(self, parser, settings):
        """Test lexed, postfix and parsed output."""
        out = io.StringIO()
        tree = repl.handle("2 + 3 * 4\n", parser, settings, out=out)
        assert isinstance(tree, BinaryOp)
        lines = out.getvalue().splitlines()
        assert lines[0].startswith("Lexed: [Token(NUMBER, Integer(value=2))")
        assert lines[1] == "Postfix: 2 3 4 * +"
        assert lines[2] == "Parsed: 2 + 3 * 4"

    def test_stages_can_be_hidden(self, parser, settings):
        """Test the SHOW_* settings."""
        quiet = settings.model_copy(update={"SHOW_TOKENS": False, "SHOW_POSTFIX": False})
        out = io.StringIO()
        repl.handle("1", parser, quiet, out=out)
        assert out.getvalue() == "Parsed: 1\n"

    def test_error_is_reported(self, parser, settings):
        """Test that a failed parse is printed, not raised."""
        out = io.StringIO()
        assert repl.handle(")\n", parser, settings, out=out) is None
        assert "Error: No matching opening symbol" in out.getvalue()

    def test_blank_line(self, parser, settings):
        """Test that blank input is ignored."""
        out = io.StringIO()
        assert repl.handle("   \n", parser, settings, out=out) is None
        assert out.getvalue() == ""


class TestMain:
    """Test the command line entry point."""

    def test_one_shot_expression(self, capsys):
        """Test -e with a valid expression."""
        assert repl.main(["-e", "fun(1, 2)", "--no-tokens"]) == 0
        captured = capsys.readouterr()
        assert "Postfix: 1 2 fun" in captured.out
        assert "Lexed" not in captured.out

    def test_one_shot_failure(self, capsys):
        """Test that a failing expression sets the exit code."""
        assert repl.main(["-e", "1 +", "-e", "2"]) == 1
        captured = capsys.readouterr()
        assert "Error:" in captured.out
        assert "Parsed: 2" in captured.out

    def test_custom_operator_table(self, write_table, capsys):
        """Test --operators with a YAML table."""
        path = write_table({"name": "Modular", "operators": [
            {"symbol": "%", "precedence": 0},
        ]})
        assert repl.main(["--operators", str(path), "-e", "7 % 3", "--no-tokens"]) == 0
        assert "Postfix: 7 3 %" in capsys.readouterr().out

    def test_bad_operator_table(self, tmp_path, capsys):
        """Test that an unreadable table is reported."""
        assert repl.main(["--operators", str(tmp_path / "missing.yaml")]) == 1
        assert "cannot load operator table" in capsys.readouterr().err

    def test_interactive_loop(self, monkeypatch, capsys):
        """Test the loop until end of input."""
        monkeypatch.setattr("sys.stdin", io.StringIO("1 + 1\n(\n"))
        assert repl.main(["--no-tokens", "--no-postfix"]) == 0
        out = capsys.readouterr().out
        assert "Parsed: 1 + 1" in out
        assert "Error: Unclosed grouping symbol" in out
