"""Lexical alphabet, token data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Keyword(Enum):
    CLASS = "class"
    CONSTRUCTOR = "constructor"
    FUNCTION = "function"
    METHOD = "method"
    FIELD = "field"
    STATIC = "static"
    VAR = "var"
    INT = "int"
    CHAR = "char"
    BOOLEAN = "boolean"
    VOID = "void"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    THIS = "this"
    LET = "let"
    DO = "do"
    IF = "if"
    ELSE = "else"
    WHILE = "while"
    RETURN = "return"


class Symbol(Enum):
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    DOT = "."
    COMMA = ","
    SEMICOLON = ";"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    AMP = "&"
    PIPE = "|"
    LT = "<"
    GT = ">"
    EQUALS = "="
    TILDE = "~"


_KEYWORDS: dict[str, Keyword] = {k.value: k for k in Keyword}
_SYMBOLS: dict[str, Symbol] = {s.value: s for s in Symbol}


def keyword_of(text: str) -> Keyword | None:
    """Return the Keyword spelled exactly *text*, or None."""
    return _KEYWORDS.get(text)


def symbol_of(ch: str) -> Symbol | None:
    """Return the Symbol for the single character *ch*, or None."""
    return _SYMBOLS.get(ch)


def to_text(element: Keyword | Symbol) -> str:
    """Canonical source spelling of a keyword or symbol."""
    return element.value


# Grammar-level groupings
BINARY_OPS: frozenset[Symbol] = frozenset(
    {
        Symbol.PLUS,
        Symbol.MINUS,
        Symbol.STAR,
        Symbol.SLASH,
        Symbol.AMP,
        Symbol.PIPE,
        Symbol.LT,
        Symbol.GT,
        Symbol.EQUALS,
    }
)
UNARY_OPS: frozenset[Symbol] = frozenset({Symbol.MINUS, Symbol.TILDE})
KEYWORD_CONSTANTS: frozenset[Keyword] = frozenset(
    {Keyword.TRUE, Keyword.FALSE, Keyword.NULL, Keyword.THIS}
)
PRIMITIVE_TYPES: frozenset[Keyword] = frozenset({Keyword.INT, Keyword.CHAR, Keyword.BOOLEAN})
CLASS_VAR_KINDS: frozenset[Keyword] = frozenset({Keyword.STATIC, Keyword.FIELD})
SUBROUTINE_KINDS: frozenset[Keyword] = frozenset(
    {Keyword.CONSTRUCTOR, Keyword.FUNCTION, Keyword.METHOD}
)
STATEMENT_KEYWORDS: frozenset[Keyword] = frozenset(
    {Keyword.LET, Keyword.IF, Keyword.WHILE, Keyword.DO, Keyword.RETURN}
)


class TokenType(Enum):
    KEYWORD = auto()
    SYMBOL = auto()
    IDENTIFIER = auto()
    INTEGER_CONSTANT = auto()
    STRING_CONSTANT = auto()


# Terminal element names used in the rendered parse tree
_KIND_NAMES: dict[TokenType, str] = {
    TokenType.KEYWORD: "keyword",
    TokenType.SYMBOL: "symbol",
    TokenType.IDENTIFIER: "identifier",
    TokenType.INTEGER_CONSTANT: "integerConstant",
    TokenType.STRING_CONSTANT: "stringConstant",
}


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single classified lexeme.

    ``value`` is a Keyword for KEYWORD, a Symbol for SYMBOL, an int for
    INTEGER_CONSTANT and a str otherwise.
    """

    type: TokenType
    value: Keyword | Symbol | int | str
    span: Span

    @property
    def kind(self) -> str:
        return _KIND_NAMES[self.type]

    @property
    def text(self) -> str:
        if isinstance(self.value, (Keyword, Symbol)):
            return to_text(self.value)
        return str(self.value)

    def is_keyword(self, *keywords: Keyword) -> bool:
        return self.type == TokenType.KEYWORD and self.value in keywords

    def is_symbol(self, *symbols: Symbol) -> bool:
        return self.type == TokenType.SYMBOL and self.value in symbols

    def describe(self) -> str:
        """Short human-readable description for error messages."""
        if self.type == TokenType.STRING_CONSTANT:
            return f'string constant "{self.value}"'
        if self.type == TokenType.INTEGER_CONSTANT:
            return f"integer constant {self.value}"
        return f"{self.kind} '{self.text}'"


def is_ident_start(ch: str) -> bool:
    """Return True if ch may begin an identifier or keyword."""
    return ch == "_" or ch.isalpha()


def is_ident_char(ch: str) -> bool:
    """Return True if ch may continue an identifier or keyword."""
    return ch == "_" or ch.isalnum()


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return "0" <= ch <= "9"
