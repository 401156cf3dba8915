"""Error types with formatted source context."""

from __future__ import annotations

from jackanalyzer.tokens import Position, Span


class AnalyzerError(Exception):
    """Base class for lexical and syntax errors raised while analyzing a unit."""

    message: str
    source: str
    filename: str = "input.jack"

    def location(self) -> Span:
        raise NotImplementedError

    def format(self, filename: str | None = None) -> str:
        if filename is None:
            filename = self.filename
        span = self.location()
        lines = self.source.splitlines(keepends=True)
        line_idx = span.start.line - 1
        col = span.start.column

        # Build the source line (strip trailing newline for display)
        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the full span when on one line, otherwise to end of line
        if span.end.line == span.start.line:
            underline_len = max(1, span.end.column - col)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(span.start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{span.start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class LexError(AnalyzerError):
    """Raised on the first lexing error, with position and source context."""

    def __init__(
        self, message: str, position: Position, source: str, filename: str = "input.jack"
    ) -> None:
        self.message = message
        self.position = position
        self.source = source
        self.filename = filename
        super().__init__(self.format())

    def location(self) -> Span:
        end = Position(self.position.line, self.position.column + 1, self.position.offset + 1)
        return Span(self.position, end)


class ParseError(AnalyzerError):
    """Raised on the first syntax error, with span and source context.

    ``rule`` names the grammar rule being parsed, ``expected`` what the rule
    required, and ``found`` what the token stream actually held.
    """

    def __init__(
        self,
        message: str,
        span: Span,
        source: str,
        rule: str | None = None,
        expected: str | None = None,
        found: str | None = None,
        filename: str = "input.jack",
    ) -> None:
        self.message = message
        self.span = span
        self.source = source
        self.filename = filename
        self.rule = rule
        self.expected = expected
        self.found = found
        super().__init__(self.format())

    def location(self) -> Span:
        return self.span
