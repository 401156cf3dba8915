"""Test the lexical alphabet and the Token value type."""

from __future__ import annotations

import pytest

from jackanalyzer.tokens import (
    BINARY_OPS,
    Keyword,
    Position,
    Span,
    Symbol,
    Token,
    TokenType,
    keyword_of,
    symbol_of,
    to_text,
)

S = Span(Position(1, 1, 0), Position(1, 1, 0))


class TestAlphabet:
    def test_keyword_count(self):
        assert len(Keyword) == 21

    def test_symbol_count(self):
        assert len(Symbol) == 19

    @pytest.mark.parametrize("keyword", list(Keyword))
    def test_keyword_round_trip(self, keyword):
        assert keyword_of(to_text(keyword)) is keyword

    @pytest.mark.parametrize("symbol", list(Symbol))
    def test_symbol_round_trip(self, symbol):
        assert symbol_of(to_text(symbol)) is symbol

    def test_symbols_are_single_characters(self):
        assert all(len(to_text(s)) == 1 for s in Symbol)

    def test_not_a_keyword(self):
        assert keyword_of("classifier") is None
        assert keyword_of("Class") is None
        assert keyword_of("") is None

    def test_not_a_symbol(self):
        assert symbol_of("#") is None
        assert symbol_of("==") is None

    def test_binary_operators(self):
        assert {to_text(s) for s in BINARY_OPS} == set("+-*/&|<>=")


class TestToken:
    def test_keyword_text_and_kind(self):
        tok = Token(TokenType.KEYWORD, Keyword.WHILE, S)
        assert tok.kind == "keyword"
        assert tok.text == "while"
        assert tok.is_keyword(Keyword.WHILE, Keyword.IF)
        assert not tok.is_symbol(Symbol.DOT)

    def test_symbol_text_and_kind(self):
        tok = Token(TokenType.SYMBOL, Symbol.LT, S)
        assert tok.kind == "symbol"
        assert tok.text == "<"
        assert tok.is_symbol(Symbol.LT)

    def test_integer_text(self):
        tok = Token(TokenType.INTEGER_CONSTANT, 42, S)
        assert tok.kind == "integerConstant"
        assert tok.text == "42"

    def test_string_kind(self):
        tok = Token(TokenType.STRING_CONSTANT, "hi there", S)
        assert tok.kind == "stringConstant"
        assert tok.describe() == 'string constant "hi there"'

    def test_describe_identifier(self):
        assert Token(TokenType.IDENTIFIER, "x", S).describe() == "identifier 'x'"

    def test_tokens_are_immutable(self):
        tok = Token(TokenType.IDENTIFIER, "x", S)
        with pytest.raises(AttributeError):
            tok.value = "y"  # type: ignore[misc]

    def test_equal_tokens_compare_equal(self):
        assert Token(TokenType.IDENTIFIER, "x", S) == Token(TokenType.IDENTIFIER, "x", S)
