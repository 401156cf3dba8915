"""Jack compilation engine: recursive descent over a token stream, emitting tree events."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum, auto

from jackanalyzer.errors import ParseError
from jackanalyzer.events import CloseTag, Emit, EventSink, OpenTag
from jackanalyzer.lexer import Tokenizer
from jackanalyzer.stream import TokenStream
from jackanalyzer.tokens import (
    BINARY_OPS,
    CLASS_VAR_KINDS,
    KEYWORD_CONSTANTS,
    PRIMITIVE_TYPES,
    STATEMENT_KEYWORDS,
    SUBROUTINE_KINDS,
    UNARY_OPS,
    Keyword,
    Span,
    Symbol,
    Token,
    TokenType,
)


class Attempt(Enum):
    """Outcome of trying to parse the next item of a repeated list.

    Hard errors are raised as ParseError; NOT_APPLICABLE means the lookahead
    does not start an item, which the caller treats as the end of the list.
    """

    PARSED = auto()
    NOT_APPLICABLE = auto()


class CompilationEngine:
    """Single-use recursive descent parser for one Jack class."""

    def __init__(self, tokenizer: Tokenizer, sink: EventSink) -> None:
        self._tokenizer = tokenizer
        self._tokens = TokenStream(tokenizer)
        self._sink = sink
        self._rules: list[str] = []
        self._used = False

    def compile(self) -> None:
        if self._used:
            raise RuntimeError("CompilationEngine instances are single-use")
        self._used = True

        self._compile_class()

        if not self._tokens.at_end():
            raise self._error(
                "unexpected token after class declaration",
                self._current("end of input"),
                expected="end of input",
            )

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self, depth: int = 0) -> Token | None:
        return self._tokens.peek(depth)

    def _current(self, expected: str) -> Token:
        tok = self._tokens.peek()
        if tok is None:
            raise self._end_of_input(expected)
        return tok

    def _advance(self) -> Token:
        tok = self._tokens.advance()
        if tok is None:
            raise self._end_of_input("token")
        return tok

    def _at_symbol(self, *symbols: Symbol) -> bool:
        tok = self._tokens.peek()
        return tok is not None and tok.is_symbol(*symbols)

    def _at_keyword(self, *keywords: Keyword) -> bool:
        tok = self._tokens.peek()
        return tok is not None and tok.is_keyword(*keywords)

    def _emit(self, tok: Token) -> None:
        self._sink.append(Emit(tok.kind, tok.text))

    def _take(self) -> None:
        """Consume the current token and emit it as a terminal."""
        self._emit(self._advance())

    @contextmanager
    def _rule(self, name: str, *, tagged: bool = True) -> Iterator[None]:
        """Scope one grammar rule; tagged rules are wrapped in open/close events."""
        if tagged:
            self._sink.append(OpenTag(name))
        self._rules.append(name)
        try:
            yield
        finally:
            self._rules.pop()
        if tagged:
            self._sink.append(CloseTag(name))

    # ------------------------------------------------------------------
    # Terminal expectations
    # ------------------------------------------------------------------

    def _expect_keyword(self, *keywords: Keyword) -> Token:
        expected = _one_of([f"'{k.value}'" for k in keywords])
        tok = self._current(expected)
        if not tok.is_keyword(*keywords):
            raise self._error(f"expected {expected}", tok, expected=expected)
        self._take()
        return tok

    def _expect_symbol(self, symbol: Symbol) -> Token:
        expected = f"'{symbol.value}'"
        tok = self._current(expected)
        if not tok.is_symbol(symbol):
            raise self._error(f"expected {expected}", tok, expected=expected)
        self._take()
        return tok

    def _expect_identifier(self, role: str) -> Token:
        expected = f"identifier ({role})"
        tok = self._current(expected)
        if tok.type != TokenType.IDENTIFIER:
            raise self._error(f"expected {expected}", tok, expected=expected)
        self._take()
        return tok

    # ------------------------------------------------------------------
    # Program structure
    # ------------------------------------------------------------------

    def _compile_class(self) -> None:
        with self._rule("class"):
            self._expect_keyword(Keyword.CLASS)
            self._expect_identifier("class name")
            self._expect_symbol(Symbol.LBRACE)

            while self._try_class_var_dec() is Attempt.PARSED:
                pass
            while self._try_subroutine_dec() is Attempt.PARSED:
                pass

            self._expect_symbol(Symbol.RBRACE)

    def _try_class_var_dec(self) -> Attempt:
        if not self._at_keyword(*CLASS_VAR_KINDS):
            return Attempt.NOT_APPLICABLE
        self._compile_class_var_dec()
        return Attempt.PARSED

    def _try_subroutine_dec(self) -> Attempt:
        if not self._at_keyword(*SUBROUTINE_KINDS):
            return Attempt.NOT_APPLICABLE
        self._compile_subroutine_dec()
        return Attempt.PARSED

    def _compile_class_var_dec(self) -> None:
        with self._rule("classVarDec"):
            self._expect_keyword(Keyword.STATIC, Keyword.FIELD)
            self._compile_type()
            self._expect_identifier("variable name")
            while self._at_symbol(Symbol.COMMA):
                self._take()
                self._expect_identifier("variable name")
            self._expect_symbol(Symbol.SEMICOLON)

    def _compile_type(self, *, allow_void: bool = False) -> None:
        expected = "'void' or type" if allow_void else "type"
        tok = self._current(expected)
        if (
            tok.is_keyword(*PRIMITIVE_TYPES)
            or (allow_void and tok.is_keyword(Keyword.VOID))
            or tok.type == TokenType.IDENTIFIER
        ):
            self._take()
        else:
            raise self._error(f"expected {expected}", tok, expected=expected)

    def _compile_subroutine_dec(self) -> None:
        with self._rule("subroutineDec"):
            self._expect_keyword(Keyword.CONSTRUCTOR, Keyword.FUNCTION, Keyword.METHOD)
            self._compile_type(allow_void=True)
            self._expect_identifier("subroutine name")
            self._expect_symbol(Symbol.LPAREN)
            self._compile_parameter_list()
            self._expect_symbol(Symbol.RPAREN)
            self._compile_subroutine_body()

    def _compile_parameter_list(self) -> None:
        with self._rule("parameterList"):
            if self._at_symbol(Symbol.RPAREN):
                return
            self._compile_type()
            self._expect_identifier("parameter name")
            while self._at_symbol(Symbol.COMMA):
                self._take()
                self._compile_type()
                self._expect_identifier("parameter name")

    def _compile_subroutine_body(self) -> None:
        with self._rule("subroutineBody"):
            self._expect_symbol(Symbol.LBRACE)
            while self._at_keyword(Keyword.VAR):
                self._compile_var_dec()
            self._compile_statements()
            self._expect_symbol(Symbol.RBRACE)

    def _compile_var_dec(self) -> None:
        with self._rule("varDec"):
            self._expect_keyword(Keyword.VAR)
            self._compile_type()
            self._expect_identifier("variable name")
            while self._at_symbol(Symbol.COMMA):
                self._take()
                self._expect_identifier("variable name")
            self._expect_symbol(Symbol.SEMICOLON)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _compile_statements(self) -> None:
        with self._rule("statements"):
            while self._try_statement() is Attempt.PARSED:
                pass

    def _try_statement(self) -> Attempt:
        if not self._at_keyword(*STATEMENT_KEYWORDS):
            return Attempt.NOT_APPLICABLE
        self._compile_statement()
        return Attempt.PARSED

    def _compile_statement(self) -> None:
        expected = "statement ('let', 'if', 'while', 'do' or 'return')"
        tok = self._current(expected)
        if tok.is_keyword(Keyword.LET):
            self._compile_let()
        elif tok.is_keyword(Keyword.IF):
            self._compile_if()
        elif tok.is_keyword(Keyword.WHILE):
            self._compile_while()
        elif tok.is_keyword(Keyword.DO):
            self._compile_do()
        elif tok.is_keyword(Keyword.RETURN):
            self._compile_return()
        else:
            raise self._error(f"expected {expected}", tok, expected=expected)

    def _compile_let(self) -> None:
        with self._rule("letStatement"):
            self._expect_keyword(Keyword.LET)
            self._expect_identifier("variable name")
            if self._at_symbol(Symbol.LBRACKET):
                self._take()
                self._compile_expression()
                self._expect_symbol(Symbol.RBRACKET)
            self._expect_symbol(Symbol.EQUALS)
            self._compile_expression()
            self._expect_symbol(Symbol.SEMICOLON)

    def _compile_if(self) -> None:
        with self._rule("ifStatement"):
            self._expect_keyword(Keyword.IF)
            self._compile_condition()
            self._compile_block()
            if self._at_keyword(Keyword.ELSE):
                self._take()
                self._compile_block()

    def _compile_while(self) -> None:
        with self._rule("whileStatement"):
            self._expect_keyword(Keyword.WHILE)
            self._compile_condition()
            self._compile_block()

    def _compile_condition(self) -> None:
        self._expect_symbol(Symbol.LPAREN)
        self._compile_expression()
        self._expect_symbol(Symbol.RPAREN)

    def _compile_block(self) -> None:
        self._expect_symbol(Symbol.LBRACE)
        self._compile_statements()
        self._expect_symbol(Symbol.RBRACE)

    def _compile_do(self) -> None:
        with self._rule("doStatement"):
            self._expect_keyword(Keyword.DO)
            self._compile_subroutine_call()
            self._expect_symbol(Symbol.SEMICOLON)

    def _compile_return(self) -> None:
        with self._rule("returnStatement"):
            self._expect_keyword(Keyword.RETURN)
            if not self._at_symbol(Symbol.SEMICOLON):
                self._compile_expression()
            self._expect_symbol(Symbol.SEMICOLON)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _compile_expression(self) -> None:
        # No precedence: each (op, term) pair is appended at the same depth.
        with self._rule("expression"):
            self._compile_term()
            while self._at_symbol(*BINARY_OPS):
                self._take()
                self._compile_term()

    def _compile_term(self) -> None:
        with self._rule("term"):
            tok = self._current("term")

            if tok.type in (TokenType.INTEGER_CONSTANT, TokenType.STRING_CONSTANT):
                self._take()
            elif tok.is_keyword(*KEYWORD_CONSTANTS):
                self._take()
            elif tok.is_symbol(Symbol.LPAREN):
                self._take()
                self._compile_expression()
                self._expect_symbol(Symbol.RPAREN)
            elif tok.is_symbol(*UNARY_OPS):
                self._take()
                self._compile_term()
            elif tok.type == TokenType.IDENTIFIER:
                self._compile_identifier_term()
            else:
                raise self._error("expected term", tok, expected="term")

    def _compile_identifier_term(self) -> None:
        """varName | varName '[' expression ']' | subroutineCall, decided on the token after the name."""
        following = self._peek(1)
        if following is not None and following.is_symbol(Symbol.LPAREN, Symbol.DOT):
            self._compile_subroutine_call()
            return

        self._take()
        if self._at_symbol(Symbol.LBRACKET):
            self._take()
            self._compile_expression()
            self._expect_symbol(Symbol.RBRACKET)

    def _compile_subroutine_call(self) -> None:
        with self._rule("subroutineCall", tagged=False):
            self._expect_identifier("subroutine, class or variable name")
            if self._at_symbol(Symbol.DOT):
                self._take()
                self._expect_identifier("subroutine name")
            self._expect_symbol(Symbol.LPAREN)
            self._compile_expression_list()
            self._expect_symbol(Symbol.RPAREN)

    def _compile_expression_list(self) -> None:
        with self._rule("expressionList"):
            if self._at_symbol(Symbol.RPAREN):
                return
            self._compile_expression()
            while self._at_symbol(Symbol.COMMA):
                self._take()
                self._compile_expression()

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def _rule_name(self) -> str | None:
        return self._rules[-1] if self._rules else None

    def _error(self, message: str, tok: Token, *, expected: str) -> ParseError:
        rule = self._rule_name()
        found = tok.describe()
        if rule is not None:
            message = f"{message} in {rule}"
        return ParseError(
            f"{message}, found {found}",
            tok.span,
            self._tokenizer.source,
            rule=rule,
            expected=expected,
            found=found,
            filename=self._tokenizer.filename,
        )

    def _end_of_input(self, expected: str) -> ParseError:
        rule = self._rule_name()
        end = self._tokenizer.end_position()
        message = f"unexpected end of input, expected {expected}"
        if rule is not None:
            message = f"{message} in {rule}"
        return ParseError(
            message,
            Span(end, end),
            self._tokenizer.source,
            rule=rule,
            expected=expected,
            found="end of input",
            filename=self._tokenizer.filename,
        )


def _one_of(items: list[str]) -> str:
    if len(items) == 1:
        return items[0]
    return ", ".join(items[:-1]) + " or " + items[-1]


def compile(tokenizer: Tokenizer, sink: EventSink) -> None:
    """Parse one class from *tokenizer*, appending tree events to *sink*.

    Raises LexError or ParseError on the first violation; *sink* then holds
    a partial, unbalanced event sequence that must be discarded.
    """
    CompilationEngine(tokenizer, sink).compile()
