"""Tests for the --debug dumps."""

from __future__ import annotations

import io

from jackanalyzer.analyzer import parse_events
from jackanalyzer.debug import dump_events, dump_tokens
from jackanalyzer.lexer import Tokenizer


class TestDumpTokens:
    def test_one_line_per_token(self):
        out = io.StringIO()
        dump_tokens(Tokenizer("let x\n= 1;"), file=out)
        assert out.getvalue().splitlines() == [
            "1:1\tkeyword\t'let'",
            "1:5\tidentifier\t'x'",
            "2:1\tsymbol\t'='",
            "2:3\tintegerConstant\t'1'",
            "2:4\tsymbol\t';'",
        ]


class TestDumpEvents:
    def test_tree_shape(self):
        out = io.StringIO()
        dump_events(parse_events("class A { }"), file=out)
        assert out.getvalue().splitlines() == [
            "class",
            "  keyword 'class'",
            "  identifier 'A'",
            "  symbol '{'",
            "  symbol '}'",
        ]


class TestDefaultStream:
    def test_writes_to_current_stderr(self, capsys):
        dump_tokens(Tokenizer("x"))
        dump_events(parse_events("class A { }"))
        err = capsys.readouterr().err
        assert "1:1\tidentifier\t'x'" in err
        assert "  identifier 'A'" in err
