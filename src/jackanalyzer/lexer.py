"""Jack tokenizer: lazily converts source text into a stream of tokens."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from jackanalyzer.errors import LexError
from jackanalyzer.tokens import (
    Keyword,
    Position,
    Span,
    Symbol,
    Token,
    TokenType,
    is_digit,
    is_ident_char,
    is_ident_start,
    keyword_of,
    symbol_of,
)

# Largest integer constant the language can represent (16-bit signed).
INT_MAX = 32767

# Ceiling on tokens emitted by one tokenizer; the stream ends once reached.
MAX_TOKENS = 1_000_000


# ----------------------------------------------------------------------
# Trivia
# ----------------------------------------------------------------------


def skip_whitespace(text: str, start: int = 0) -> int:
    """Return the length of the whitespace run at *start*."""
    pos = start
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos - start


def skip_comment(text: str, start: int = 0) -> int:
    """Return the length of the comment at *start*, or 0 if there is none.

    A line comment runs through its newline (or to end of input); a block
    comment runs through the first following ``*/``. An unterminated block
    comment swallows the rest of the input.
    """
    if text.startswith("//", start):
        end = text.find("\n", start + 2)
        return (len(text) if end == -1 else end + 1) - start
    if text.startswith("/*", start):
        end = text.find("*/", start + 2)
        return (len(text) if end == -1 else end + 2) - start
    return 0


def skip_trivia(text: str, start: int = 0) -> int:
    """Skip whitespace and comments until neither matches; return the length skipped."""
    pos = start
    while True:
        ws = skip_whitespace(text, pos)
        pos += ws
        comment = skip_comment(text, pos)
        pos += comment
        if ws + comment == 0:
            return pos - start


# ----------------------------------------------------------------------
# Tokenizer
# ----------------------------------------------------------------------


class Tokenizer(Iterator[Token]):
    """Pull-based tokenizer over one source unit.

    Each ``next()`` skips leading trivia, classifies one lexeme and advances
    past it. Lexical errors are raised as ``LexError``. Single consumer; not
    rewindable.
    """

    def __init__(
        self,
        source: str,
        filename: str = "input.jack",
        *,
        max_tokens: int = MAX_TOKENS,
        int_max: int = INT_MAX,
    ) -> None:
        self._source = source
        self._filename = filename
        self._max_tokens = max_tokens
        self._int_max = int_max
        self._pos = 0
        self._line = 1
        self._col = 1
        self._consumed = 0
        self._emitted = 0

    @property
    def source(self) -> str:
        return self._source

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def consumed(self) -> int:
        """UTF-8 bytes consumed so far (trivia and lexemes)."""
        return self._consumed

    def __iter__(self) -> Tokenizer:
        return self

    def __next__(self) -> Token:
        if self._emitted >= self._max_tokens:
            raise StopIteration
        self._advance_to(self._pos + skip_trivia(self._source, self._pos))
        if self._pos >= len(self._source):
            raise StopIteration
        tok = self._lex_token()
        self._emitted += 1
        return tok

    def end_position(self) -> Position:
        """Position just past the last character of the source."""
        lines = self._source.split("\n")
        return Position(len(lines), len(lines[-1]) + 1, len(self._source))

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance_to(self, end: int) -> None:
        chunk = self._source[self._pos : end]
        newlines = chunk.count("\n")
        if newlines:
            self._line += newlines
            self._col = len(chunk) - chunk.rfind("\n")
        else:
            self._col += len(chunk)
        self._consumed += len(chunk.encode("utf-8"))
        self._pos = end

    def _scan_while(self, pred: Callable[[str], bool]) -> int:
        """Return the index just past the run of characters satisfying *pred*."""
        end = self._pos
        while end < len(self._source) and pred(self._source[end]):
            end += 1
        return end

    def _make(self, tt: TokenType, value: Keyword | Symbol | int | str, start: Position) -> Token:
        return Token(tt, value, Span(start, self._current_pos()))

    def _error(self, message: str, pos: Position | None = None) -> LexError:
        if pos is None:
            pos = self._current_pos()
        return LexError(message, pos, self._source, self._filename)

    # ------------------------------------------------------------------
    # Lexemes
    # ------------------------------------------------------------------

    def _lex_token(self) -> Token:
        ch = self._peek()

        symbol = symbol_of(ch)
        if symbol is not None:
            start = self._current_pos()
            self._advance_to(self._pos + 1)
            return self._make(TokenType.SYMBOL, symbol, start)

        if is_digit(ch):
            return self._lex_integer()

        if ch == '"':
            return self._lex_string()

        if is_ident_start(ch):
            return self._lex_word()

        raise self._error(f"unrecognized character {ch!r}")

    def _lex_integer(self) -> Token:
        start = self._current_pos()
        end = self._scan_while(is_digit)
        digits = self._source[self._pos : end]
        # int() refuses very long digit strings, so bound the length first.
        significant = digits.lstrip("0") or "0"
        if len(significant) > len(str(self._int_max)) or int(significant) > self._int_max:
            raise self._error(
                f"integer constant {digits} is out of range (maximum {self._int_max})", start
            )
        self._advance_to(end)
        return self._make(TokenType.INTEGER_CONSTANT, int(significant), start)

    def _lex_string(self) -> Token:
        start = self._current_pos()
        close = self._source.find('"', self._pos + 1)
        if close == -1:
            raise self._error("unterminated string literal", start)
        value = self._source[self._pos + 1 : close]
        self._advance_to(close + 1)
        return self._make(TokenType.STRING_CONSTANT, value, start)

    def _lex_word(self) -> Token:
        start = self._current_pos()
        ch = self._peek()
        if is_digit(ch):
            raise self._error("identifiers cannot start with a digit", start)
        if not is_ident_start(ch):
            raise self._error(f"expected identifier or keyword, found {ch!r}", start)
        end = self._scan_while(is_ident_char)
        text = self._source[self._pos : end]
        self._advance_to(end)
        keyword = keyword_of(text)
        if keyword is not None:
            return self._make(TokenType.KEYWORD, keyword, start)
        return self._make(TokenType.IDENTIFIER, text, start)


def tokenize(source: str, filename: str = "input.jack") -> list[Token]:
    """Convenience function: tokenize source text and return the token list."""
    return list(Tokenizer(source, filename))
